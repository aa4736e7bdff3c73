"""Document loader implementations."""
from .html_loader import HtmlLoader
from .text_loader import TextLoader
from .composite_loader import CompositeLoader

__all__ = ["HtmlLoader", "TextLoader", "CompositeLoader"]
