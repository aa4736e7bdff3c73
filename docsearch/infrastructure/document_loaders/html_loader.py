from pathlib import Path

from docsearch.core.models.document import SourceKind


class HtmlLoader:

    EXTENSIONS = {".html", ".htm", ".xhtml"}
    source_kind = SourceKind.HTML

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONS

    def load(self, file_path: Path) -> str:
        return file_path.read_text(encoding="utf-8", errors="replace")
