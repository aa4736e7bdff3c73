"""Normalizer protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import NormalizedContent, SourceKind


@runtime_checkable
class NormalizerProtocol(Protocol):
    """Protocol for raw content normalization."""

    def normalize(self, raw: str, source_kind: SourceKind) -> NormalizedContent:
        """Extract text, title, headings and description.

        Must not raise for malformed input.

        Args:
            raw: Raw content.
            source_kind: Kind of the raw content.

        Returns:
            Normalized content.
        """
        ...
