"""Vectorizer protocol for dependency injection."""
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class VectorizerProtocol(Protocol):
    """Protocol for text-to-vector feature extraction."""

    @property
    def dimensions(self) -> int:
        """Length of every vector this vectorizer produces."""
        ...

    def vectorize(self, text: str) -> np.ndarray:
        """Convert text to a fixed-length vector.

        Args:
            text: Normalized text.

        Returns:
            1-D array of length `dimensions`, unit length or all zeros.
        """
        ...
