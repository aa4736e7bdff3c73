
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models.document import ScoredResult

logger = logging.getLogger(__name__)

_TERM_RE = re.compile(r"\w+")


def terms(text: str) -> set[str]:
    """Lowercase word terms of text."""
    return set(_TERM_RE.findall(text.lower()))


def lexical_score(query: str, text: str) -> float:
    """Fraction of distinct query terms that occur in text."""
    query_terms = terms(query)
    if not query_terms:
        return 0.0
    return len(query_terms & terms(text)) / len(query_terms)


@dataclass(frozen=True)
class BlendPolicy:
    """Weighted blend of vector and lexical scores.

    The default is vector-only ranking.
    """
    vector_weight: float = 1.0
    lexical_weight: float = 0.0

    def combine(self, vector_score: float, lexical: float) -> float:
        return self.vector_weight * vector_score + self.lexical_weight * lexical


class ScoringStrategy(ABC):
    """Base class for post-ranking strategies."""

    @abstractmethod
    def apply(self, query: str, results: list[ScoredResult]) -> list[ScoredResult]:
        """Apply strategy to ranked results."""
        ...


class ScoreCutoffStrategy(ScoringStrategy):
    """Filter results with score much lower than top-1."""

    def __init__(self, score_ratio: float = 0.3):
        """Initialize strategy.

        Args:
            score_ratio: Minimum ratio of score to max_score.
        """
        self._score_ratio = score_ratio

    def apply(self, query: str, results: list[ScoredResult]) -> list[ScoredResult]:
        """Filter results below threshold."""
        if not results:
            return results

        max_score = results[0].final_score
        min_score = max_score * self._score_ratio

        filtered = [r for r in results if r.final_score >= min_score]

        if len(filtered) < len(results):
            logger.info(
                f"Score cutoff: {len(results)} → {len(filtered)} "
                f"(max={max_score:.2f}, min_allowed={min_score:.2f})"
            )

        return filtered

