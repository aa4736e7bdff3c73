"""Ranking engine - hybrid lexical and vector scoring."""

import logging
from typing import Iterable, Optional, Sequence

from ..models.document import DocumentEntry, ScoredResult, SourceKind
from ..protocols.vectorizer import VectorizerProtocol
from ..strategies.scoring import BlendPolicy, ScoringStrategy, lexical_score
from ..strategies.similarity import cosine_similarity
from ..strategies.snippets import best_snippet

logger = logging.getLogger(__name__)


class RankingEngine:
    """Stateless ranker over an index snapshot.

    Every call rescans all entries; nothing is cached between queries.
    """

    def __init__(
        self,
        vectorizer: VectorizerProtocol,
        policy: BlendPolicy | None = None,
        snippet_window: int = 200,
        strategies: list[ScoringStrategy] | None = None,
    ):
        """Initialize ranking engine.

        Args:
            vectorizer: Must be the vectorizer the index was built with.
            policy: Vector/lexical blend weights.
            snippet_window: Snippet length in words.
            strategies: Post-ranking strategies, applied in order.
        """
        self._vectorizer = vectorizer
        self._policy = policy or BlendPolicy()
        self._snippet_window = snippet_window
        self._strategies = strategies or []

    @property
    def policy(self) -> BlendPolicy:
        return self._policy

    def search(
        self,
        entries: Sequence[DocumentEntry],
        query: str,
        source_kinds: Optional[Iterable[SourceKind]] = None,
        limit: Optional[int] = None,
        use_vector: bool = True,
    ) -> list[ScoredResult]:
        """Rank entries against a query.

        Args:
            entries: Index snapshot in ingestion order.
            query: Query text.
            source_kinds: Only rank entries of these kinds.
            limit: Maximum number of results.
            use_vector: When False, rank on lexical score alone and skip
                query vectorization.

        Returns:
            Results sorted by final score, ties in ingestion order.
        """
        if not query.strip() or not entries:
            return []

        if source_kinds is not None:
            kinds = set(source_kinds)
            entries = [e for e in entries if e.source_kind in kinds]

        query_vector = self._vectorizer.vectorize(query) if use_vector else None

        scored = []
        for entry in entries:
            lexical = lexical_score(query, entry.normalized_text)
            if query_vector is not None:
                vector_score = cosine_similarity(query_vector, entry.vector)
                final_score = self._policy.combine(vector_score, lexical)
            else:
                vector_score, final_score = 0.0, lexical
            scored.append(
                ScoredResult(
                    document_id=entry.id,
                    lexical_score=lexical,
                    vector_score=vector_score,
                    final_score=final_score,
                    snippet=best_snippet(
                        entry.normalized_text, query, self._snippet_window
                    ),
                )
            )

        # list.sort is stable, so equal scores keep ingestion order
        scored.sort(key=lambda r: r.final_score, reverse=True)

        for strategy in self._strategies:
            scored = strategy.apply(query, scored)

        if limit is not None:
            scored = scored[:limit]

        if logger.isEnabledFor(logging.DEBUG):
            top_scores = ", ".join(f"{r.final_score:.2f}" for r in scored[:3])
            logger.debug(f"Ranking top-3 scores: [{top_scores}]")

        return scored
