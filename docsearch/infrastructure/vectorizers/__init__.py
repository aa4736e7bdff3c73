"""Vectorizer implementations."""
from .char_histogram import CharHistogramVectorizer

__all__ = ["CharHistogramVectorizer"]
