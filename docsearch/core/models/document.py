"""Document domain models."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

import numpy as np


class SourceKind(Enum):
    """Kind of raw content handed to ingestion."""
    TEXT = "text"
    HTML = "html"

    @classmethod
    def parse(cls, value: "SourceKind | str") -> "SourceKind":
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


@dataclass(frozen=True)
class NormalizedContent:
    """Text and metadata extracted from raw content."""
    text: str
    title: Optional[str] = None
    headings: tuple[str, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class DocumentEntry:
    """Indexed document. Never mutated after ingestion."""
    id: str
    title: str
    normalized_text: str
    raw_text: str
    headings: tuple[str, ...]
    vector: np.ndarray = field(repr=False, compare=False)
    source_kind: SourceKind
    created_at: datetime
    description: Optional[str] = None
    source_name: Optional[str] = None

    def __post_init__(self):
        if self.vector.ndim != 1:
            raise ValueError(f"Document vector must be 1-D, got shape {self.vector.shape}")
        self.vector.flags.writeable = False

    @property
    def word_count(self) -> int:
        return len(self.normalized_text.split())

    @property
    def tags(self) -> list[str]:
        """Source kind followed by the first three headings."""
        return [self.source_kind.value, *self.headings[:3]]


@dataclass(frozen=True)
class ScoredResult:
    """Per-query score of one document."""
    document_id: str
    lexical_score: float
    vector_score: float
    final_score: float
    snippet: str
