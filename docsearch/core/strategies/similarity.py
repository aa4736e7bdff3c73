
import numpy as np

from ..errors import DimensionalityMismatchError


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity of two vectors, 0.0 if either has zero magnitude.

    Raises:
        DimensionalityMismatchError: If the vectors differ in length.
    """
    if a.shape != b.shape:
        raise DimensionalityMismatchError(expected=a.shape[0], actual=b.shape[0])

    norm_product = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if norm_product == 0.0:
        return 0.0

    # Elementwise product then sum, so swapping a and b is bit-identical.
    similarity = float(np.sum(a * b)) / norm_product
    return min(1.0, max(-1.0, similarity))
