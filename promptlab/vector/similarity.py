"""
Similarity engine scope only. Do not implement beyond this file's responsibilities.
Vector math over fixed-length embeddings: dot product, cosine, euclidean.
"""

import math
import numbers
from typing import Sequence, Tuple

import numpy as np

from ..core.errors import DimensionMismatch, EmptyVector, InvalidElement


def _is_real(value) -> bool:
    # bool is a numbers.Real subclass but never a valid vector element
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _is_finite_float(value) -> bool:
    # Integers beyond float range cannot be converted at all
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def validate_pair(vector_a: Sequence[float], vector_b: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Check the shared preconditions of every similarity function.

    Order of checks: dimension agreement, non-empty, finite real elements.

    Returns:
        Both vectors as float64 arrays.
    """
    len_a, len_b = len(vector_a), len(vector_b)
    if len_a != len_b:
        raise DimensionMismatch(len_a, len_b)

    if len_a == 0:
        raise EmptyVector()

    for i in range(len_a):
        a, b = vector_a[i], vector_b[i]
        if not (_is_real(a) and _is_real(b)) or not (_is_finite_float(a) and _is_finite_float(b)):
            raise InvalidElement(i, a, b)

    return np.asarray(vector_a, dtype=np.float64), np.asarray(vector_b, dtype=np.float64)


def dot_product(vector_a: Sequence[float], vector_b: Sequence[float]) -> float:
    """A · B = Σ(Ai * Bi)"""
    a, b = validate_pair(vector_a, vector_b)
    return float(np.dot(a, b))


# Name used by the demo API
dot_product_similarity = dot_product


def cosine_similarity(vector_a: Sequence[float], vector_b: Sequence[float]) -> float:
    """
    cos(θ) = (A · B) / (||A|| × ||B||)

    Returns exactly 0.0 when either vector has zero magnitude.
    """
    a, b = validate_pair(vector_a, vector_b)

    magnitude_a = float(np.linalg.norm(a))
    magnitude_b = float(np.linalg.norm(b))
    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0

    similarity = float(np.dot(a, b)) / (magnitude_a * magnitude_b)
    # Rounding can push identical vectors a hair past 1
    return max(-1.0, min(1.0, similarity))


def euclidean_distance(vector_a: Sequence[float], vector_b: Sequence[float]) -> float:
    """d = √(Σ(Ai - Bi)²)"""
    a, b = validate_pair(vector_a, vector_b)
    return float(np.sqrt(np.sum((a - b) ** 2)))
