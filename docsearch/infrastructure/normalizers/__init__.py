"""Content normalizer implementations."""
from .html_normalizer import TextNormalizer

__all__ = ["TextNormalizer"]
