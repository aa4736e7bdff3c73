import logging
from typing import Optional

from docsearch.core.errors import DimensionalityMismatchError, QueryExecutionError
from docsearch.core.models.search import SearchFilters, SearchResponse
from docsearch.core.services.search_service import SearchService

logger = logging.getLogger(__name__)


class LocalSearchBackend:
    """Backend answering queries from the in-process index."""

    def __init__(self, search_service: SearchService):
        self._search = search_service

    async def search(
        self, query: str, filters: Optional[SearchFilters] = None
    ) -> SearchResponse:
        filters = filters or SearchFilters()
        try:
            return self._search.search(
                query,
                source_kinds=filters.source_kinds,
                use_vector=filters.use_vector,
            )
        except DimensionalityMismatchError:
            raise
        except Exception as e:
            logger.error(f"Local search error: {e}")
            raise QueryExecutionError(str(e), query=query) from e
