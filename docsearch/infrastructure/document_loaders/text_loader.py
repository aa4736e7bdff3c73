from pathlib import Path

from docsearch.core.models.document import SourceKind


class TextLoader:

    EXTENSIONS = {".txt", ".md", ".markdown", ".rst"}
    source_kind = SourceKind.TEXT

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONS

    def load(self, file_path: Path) -> str:
        return file_path.read_text(encoding="utf-8")
