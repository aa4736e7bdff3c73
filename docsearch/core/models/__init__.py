"""Domain models."""
from .document import DocumentEntry, NormalizedContent, ScoredResult, SourceKind
from .search import (
    HistoryEntry,
    SearchAnalytics,
    SearchFilters,
    SearchHistory,
    SearchHit,
    SearchResponse,
    SearchState,
)

__all__ = [
    "DocumentEntry",
    "NormalizedContent",
    "ScoredResult",
    "SourceKind",
    "HistoryEntry",
    "SearchAnalytics",
    "SearchFilters",
    "SearchHistory",
    "SearchHit",
    "SearchResponse",
    "SearchState",
]
