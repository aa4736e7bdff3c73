import logging
from typing import Optional

from bs4 import BeautifulSoup

from docsearch.core.errors import IngestionParseFailure
from docsearch.core.models.document import NormalizedContent, SourceKind

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
NON_CONTENT_TAGS = ["script", "style", "noscript", "template", "head", "title"]


class TextNormalizer:
    """Normalizer for plain text and HTML using BeautifulSoup."""

    def __init__(self, parser: str = "html.parser"):
        """Initialize normalizer.

        Args:
            parser: BeautifulSoup tree builder name.
        """
        self._parser = parser

    def normalize(self, raw: str, source_kind: SourceKind) -> NormalizedContent:
        if source_kind is SourceKind.HTML:
            try:
                return self._parse_html(raw)
            except IngestionParseFailure as e:
                logger.warning(f"{e.message}, falling back to plain text: {e.details}")
        return NormalizedContent(text=raw.strip())

    def _parse_html(self, raw: str) -> NormalizedContent:
        try:
            return self._extract(BeautifulSoup(raw, self._parser))
        except Exception as e:
            raise IngestionParseFailure(error=str(e)) from e

    def _extract(self, soup: BeautifulSoup) -> NormalizedContent:
        title = self._text_of(soup.title) or self._text_of(soup.find("h1"))

        description: Optional[str] = None
        meta = soup.find("meta", attrs={"name": "description"})
        if meta is not None and meta.get("content"):
            description = meta["content"].strip() or None

        headings = tuple(
            text
            for text in (self._text_of(h) for h in soup.find_all(HEADING_TAGS))
            if text
        )

        for tag in soup(NON_CONTENT_TAGS):
            tag.decompose()

        text = soup.get_text(" ", strip=True)
        return NormalizedContent(
            text=text, title=title, headings=headings, description=description
        )

    @staticmethod
    def _text_of(tag) -> Optional[str]:
        if tag is None:
            return None
        text = " ".join(tag.get_text(" ", strip=True).split())
        return text or None
