"""Document index - in-memory store of ingested documents."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from ..errors import DimensionalityMismatchError
from ..models.document import DocumentEntry, SourceKind
from ..protocols.normalizer import NormalizerProtocol
from ..protocols.vectorizer import VectorizerProtocol

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"


class DocumentIndex:
    """Session-scoped collection of document entries and their vectors.

    Not thread-safe; mutation and reads are expected to happen on one event
    loop.
    """

    def __init__(
        self,
        normalizer: NormalizerProtocol,
        vectorizer: VectorizerProtocol,
    ):
        """Initialize index.

        Args:
            normalizer: Raw content normalizer.
            vectorizer: Text vectorizer. Its dimensionality is fixed for the
                lifetime of the index.
        """
        self._normalizer = normalizer
        self._vectorizer = vectorizer
        self._dimensions = vectorizer.dimensions
        self._entries: list[DocumentEntry] = []

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def vectorizer(self) -> VectorizerProtocol:
        return self._vectorizer

    def ingest(
        self,
        raw_content: str,
        source_kind: SourceKind | str,
        source_name: Optional[str] = None,
    ) -> DocumentEntry:
        """Normalize, vectorize and append a document.

        Identical content ingested twice yields two independent entries.

        Args:
            raw_content: Original content.
            source_kind: Kind of content, `SourceKind` or its string value.
            source_name: File name or other label, used as a title fallback.

        Returns:
            The new entry.
        """
        kind = SourceKind.parse(source_kind)
        content = self._normalizer.normalize(raw_content, kind)
        vector = self._vectorizer.vectorize(content.text)

        entry = DocumentEntry(
            id=uuid.uuid4().hex,
            title=content.title or source_name or DEFAULT_TITLE,
            normalized_text=content.text,
            raw_text=raw_content,
            headings=content.headings,
            vector=vector,
            source_kind=kind,
            created_at=datetime.now(timezone.utc),
            description=content.description,
            source_name=source_name,
        )
        self.add(entry)

        logger.info(
            f"Ingested {kind.value} document '{entry.title[:50]}' "
            f"({entry.word_count} words) as {entry.id}"
        )
        return entry

    def add(self, entry: DocumentEntry) -> None:
        """Append a pre-built entry.

        Raises:
            DimensionalityMismatchError: If the entry's vector length differs
                from the index dimensionality.
        """
        if entry.vector.shape[0] != self._dimensions:
            raise DimensionalityMismatchError(
                expected=self._dimensions, actual=entry.vector.shape[0]
            )
        self._entries.append(entry)

    def all(self) -> tuple[DocumentEntry, ...]:
        """Snapshot of entries in ingestion order."""
        return tuple(self._entries)

    def get(self, document_id: str) -> Optional[DocumentEntry]:
        for entry in self._entries:
            if entry.id == document_id:
                return entry
        return None

    def clear(self) -> None:
        count = len(self._entries)
        self._entries = []
        logger.info(f"Index cleared ({count} documents removed)")

    def __len__(self) -> int:
        return len(self._entries)
