import numpy as np


class CharHistogramVectorizer:
    """Unit-normalized character frequency histogram.

    Bucket i counts occurrences of the character with code point i; code
    points at or above `dimensions` are ignored.
    """

    def __init__(self, dimensions: int = 128):
        if dimensions < 1:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def vectorize(self, text: str) -> np.ndarray:
        codes = np.fromiter(map(ord, text), dtype=np.int64, count=len(text))
        codes = codes[codes < self._dimensions]
        histogram = np.bincount(codes, minlength=self._dimensions).astype(np.float64)

        norm = np.linalg.norm(histogram)
        if norm == 0:
            return histogram
        return histogram / norm
