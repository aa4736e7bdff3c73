"""Scoring, similarity and snippet strategies."""
from .scoring import (
    BlendPolicy,
    ScoreCutoffStrategy,
    ScoringStrategy,
    lexical_score,
)
from .similarity import cosine_similarity
from .snippets import best_snippet

__all__ = [
    "BlendPolicy",
    "ScoreCutoffStrategy",
    "ScoringStrategy",
    "lexical_score",
    "cosine_similarity",
    "best_snippet",
]
