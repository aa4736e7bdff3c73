"""Search service - ingestion and search surface over one index."""

import logging
import time
from typing import Iterable, Optional

from ..models.document import DocumentEntry, SourceKind
from ..models.search import SearchAnalytics, SearchHit, SearchResponse
from .index_service import DocumentIndex
from .ranking_service import RankingEngine

logger = logging.getLogger(__name__)


class SearchService:
    """Search service binding a document index to a ranking engine."""

    def __init__(self, index: DocumentIndex, engine: RankingEngine):
        """Initialize search service.

        Args:
            index: Session document index.
            engine: Ranking engine using the index's vectorizer.
        """
        self._index = index
        self._engine = engine

    @property
    def index(self) -> DocumentIndex:
        return self._index

    def ingest(
        self,
        content: str,
        source_kind: SourceKind | str,
        source_name: Optional[str] = None,
    ) -> DocumentEntry:
        """Add a document to the index."""
        return self._index.ingest(content, source_kind, source_name=source_name)

    def search(
        self,
        query: str,
        source_kinds: Optional[Iterable[SourceKind | str]] = None,
        limit: Optional[int] = None,
        use_vector: bool = True,
    ) -> SearchResponse:
        """Search the index.

        Args:
            query: Search query.
            source_kinds: Restrict to these source kinds.
            limit: Maximum number of hits.
            use_vector: Include vector similarity in ranking.

        Returns:
            Search response with hits and analytics.
        """
        started = time.perf_counter()
        snapshot = self._index.all()
        kinds = (
            [SourceKind.parse(k) for k in source_kinds]
            if source_kinds is not None
            else None
        )

        results = self._engine.search(
            snapshot, query, source_kinds=kinds, limit=limit, use_vector=use_vector
        )

        by_id = {entry.id: entry for entry in snapshot}
        hits = [SearchHit.from_entry(by_id[r.document_id], r) for r in results]

        elapsed_ms = (time.perf_counter() - started) * 1000
        analytics = SearchAnalytics.from_hits(hits, elapsed_ms, vector_query=use_vector)

        if query.strip():
            logger.info(
                f"Search: returned {len(hits)}/{len(snapshot)} docs for "
                f"'{query[:50]}' in {elapsed_ms:.1f}ms"
            )

        return SearchResponse(hits=hits, analytics=analytics)

    def clear(self) -> None:
        self._index.clear()
