"""Search backend protocol for dependency injection."""
from typing import Optional, Protocol, runtime_checkable

from ..models.search import SearchFilters, SearchResponse


@runtime_checkable
class SearchBackendProtocol(Protocol):
    """Protocol for whatever answers the orchestrator's queries."""

    async def search(
        self, query: str, filters: Optional[SearchFilters] = None
    ) -> SearchResponse:
        """Run a query.

        Args:
            query: Query text.
            filters: Content filters and ranking options. None means no
                restriction with vector ranking on.

        Returns:
            Ranked hits with analytics.

        Raises:
            QueryExecutionError: If the query could not be answered.
        """
        ...
