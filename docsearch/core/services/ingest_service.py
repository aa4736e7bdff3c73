"""Ingest service - loads a documents folder into the index."""

import logging
from pathlib import Path
from typing import Optional

from ..models.document import DocumentEntry
from .search_service import SearchService

logger = logging.getLogger(__name__)


class IngestService:
    """Service for ingesting files from disk into the session index."""

    def __init__(self, search_service: SearchService, docs_path: str = "./docs"):
        """Initialize ingest service.

        Args:
            search_service: Search service owning the index.
            docs_path: Path to documents folder.
        """
        self._search = search_service
        self._docs_path = Path(docs_path)

        self._loader: Optional["CompositeLoader"] = None

    @property
    def loader(self):
        """Lazy load document loader."""
        if self._loader is None:
            from docsearch.infrastructure.document_loaders import CompositeLoader

            self._loader = CompositeLoader()
        return self._loader

    def ingest_file(self, file_path: Path) -> Optional[DocumentEntry]:
        """Ingest one file, or return None if it is unsupported or unreadable."""
        if not self.loader.supports(file_path):
            return None

        loaded = self.loader.load(file_path)
        if loaded is None:
            return None

        content, source_kind = loaded
        if not content.strip():
            logger.debug(f"Skip empty: {file_path.name}")
            return None

        return self._search.ingest(content, source_kind, source_name=file_path.name)

    def run(self) -> int:
        """Ingest every supported file in the documents folder.

        Returns:
            Number of documents ingested.
        """
        if not self._docs_path.exists():
            logger.error(f"Docs path not found: {self._docs_path}")
            return 0

        count = 0
        for file_path in sorted(self._docs_path.iterdir()):
            if file_path.is_file() and self.ingest_file(file_path) is not None:
                count += 1

        if count:
            logger.info(f"Ingestion complete: {count} documents from {self._docs_path}")
        else:
            logger.info("No documents to ingest")
        return count
