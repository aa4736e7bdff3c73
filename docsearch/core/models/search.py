"""Search session models."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from .document import DocumentEntry, ScoredResult, SourceKind


class SearchState(Enum):
    """Orchestrator state."""
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    QUERYING = "querying"
    ERROR = "error"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, including the `Z` suffix JavaScript emits."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class SearchFilters:
    """Content filters and ranking options sent with every query."""
    source_kinds: Optional[tuple[SourceKind, ...]] = None
    use_vector: bool = True

    def __post_init__(self):
        if self.source_kinds is not None:
            kinds = tuple(SourceKind.parse(k) for k in self.source_kinds)
            object.__setattr__(self, "source_kinds", kinds)

    def to_payload(self) -> dict:
        """Request body fields; no kind restriction means every kind."""
        kinds = self.source_kinds if self.source_kinds is not None else tuple(SourceKind)
        return {
            "filters": {"contentType": [k.value for k in kinds]},
            "options": {"useVector": self.use_vector},
        }


@dataclass
class SearchHit:
    """Search result as consumed by the display layer."""
    id: str
    title: str
    snippet: str
    lexical_score: float
    vector_score: float
    final_score: float
    word_count: int
    source_kind: SourceKind
    created_at: datetime
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: DocumentEntry, result: ScoredResult) -> "SearchHit":
        return cls(
            id=entry.id,
            title=entry.title,
            snippet=result.snippet,
            lexical_score=result.lexical_score,
            vector_score=result.vector_score,
            final_score=result.final_score,
            word_count=entry.word_count,
            source_kind=entry.source_kind,
            created_at=entry.created_at,
            tags=entry.tags,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "snippet": self.snippet,
            "lexicalScore": self.lexical_score,
            "vectorScore": self.vector_score,
            "finalScore": self.final_score,
            "metadata": {
                "wordCount": self.word_count,
                "sourceKind": self.source_kind.value,
                "createdAt": self.created_at.isoformat(),
            },
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchHit":
        """Build a hit from the wire shape produced by `to_dict`."""
        metadata = data.get("metadata") or {}
        created_at = metadata.get("createdAt")
        return cls(
            id=str(data["id"]),
            title=data.get("title", "Untitled"),
            snippet=data.get("snippet", ""),
            lexical_score=float(data.get("lexicalScore", 0.0)),
            vector_score=float(data.get("vectorScore", 0.0)),
            final_score=float(data.get("finalScore", 0.0)),
            word_count=int(metadata.get("wordCount", 0)),
            source_kind=SourceKind.parse(metadata.get("sourceKind", "text")),
            created_at=(
                parse_timestamp(created_at)
                if created_at
                else datetime.now(timezone.utc)
            ),
            tags=list(data.get("tags", [])),
        )


@dataclass
class SearchAnalytics:
    """Per-query statistics shown next to the results."""
    execution_time_ms: float
    total_results: int
    max_score: float
    vector_query: bool = True
    result_distribution: dict[str, int] = field(default_factory=dict)
    score_ranges: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_hits(
        cls, hits: list[SearchHit], execution_time_ms: float, vector_query: bool = True
    ) -> "SearchAnalytics":
        distribution: dict[str, int] = {}
        for hit in hits:
            kind = hit.source_kind.value
            distribution[kind] = distribution.get(kind, 0) + 1

        # Five fixed buckets; scores outside [0, 1] land in the edge buckets.
        ranges = {f"{i / 5:.1f}-{(i + 1) / 5:.1f}": 0 for i in range(5)}
        labels = list(ranges)
        for hit in hits:
            bucket = min(max(int(hit.final_score * 5), 0), 4)
            ranges[labels[bucket]] += 1

        return cls(
            execution_time_ms=execution_time_ms,
            total_results=len(hits),
            max_score=max((h.final_score for h in hits), default=0.0),
            vector_query=vector_query,
            result_distribution=distribution,
            score_ranges=ranges,
        )

    def to_dict(self) -> dict:
        return {
            "execution_time_ms": self.execution_time_ms,
            "total_results": self.total_results,
            "max_score": self.max_score,
            "vector_query": self.vector_query,
            "result_distribution": dict(self.result_distribution),
            "score_ranges": dict(self.score_ranges),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchAnalytics":
        return cls(
            execution_time_ms=float(data.get("execution_time_ms", 0.0)),
            total_results=int(data.get("total_results", 0)),
            max_score=float(data.get("max_score", 0.0)),
            vector_query=bool(data.get("vector_query", True)),
            result_distribution=dict(data.get("result_distribution") or {}),
            score_ranges=dict(data.get("score_ranges") or {}),
        )


@dataclass
class SearchResponse:
    """Search response for presentation layer."""
    hits: list[SearchHit]
    analytics: Optional[SearchAnalytics] = None


@dataclass(frozen=True)
class HistoryEntry:
    """One settled query."""
    query: str
    timestamp: datetime
    result_count: int = 0
    execution_time_ms: float = 0.0


@dataclass
class SearchHistory:
    """Recent queries, most recent first, unique by text."""
    entries: list[HistoryEntry] = field(default_factory=list)
    max_entries: int = 10

    def add(self, entry: HistoryEntry) -> None:
        """Push entry to the front, dropping an older one with the same text."""
        self.entries = [e for e in self.entries if e.query != entry.query]
        self.entries.insert(0, entry)
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[: self.max_entries]

    def clear(self) -> None:
        self.entries = []

    def queries(self) -> list[str]:
        return [e.query for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)
