import logging
from pathlib import Path
from typing import Optional

from docsearch.core.models.document import SourceKind

from .html_loader import HtmlLoader
from .text_loader import TextLoader

logger = logging.getLogger(__name__)


class CompositeLoader:

    def __init__(self):
        self._loaders = [
            HtmlLoader(),
            TextLoader(),
        ]

    def supports(self, file_path: Path) -> bool:
        return any(loader.supports(file_path) for loader in self._loaders)

    def load(self, file_path: Path) -> Optional[tuple[str, SourceKind]]:
        """Read a file and report how it should be normalized."""
        for loader in self._loaders:
            if loader.supports(file_path):
                try:
                    return loader.load(file_path), loader.source_kind
                except (OSError, UnicodeDecodeError) as e:
                    logger.error(f"Failed to load {file_path}: {e}")
                    return None
        return None
