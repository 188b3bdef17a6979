"""
Similarity engine error taxonomy.
Structural errors raised by vector math and surfaced to the immediate caller.
"""


class SimilarityError(ValueError):
    """Base class for all similarity computation errors."""
    pass


class DimensionMismatch(SimilarityError):
    """Compared vectors differ in length."""

    def __init__(self, len_a: int, len_b: int):
        self.len_a = len_a
        self.len_b = len_b
        super().__init__(f"Vector dimensions must match. Got {len_a} and {len_b}")


class EmptyVector(SimilarityError):
    """A zero-length vector was passed to a similarity function."""

    def __init__(self):
        super().__init__("Vectors cannot be empty")


class InvalidElement(SimilarityError):
    """A vector element is not a finite real number."""

    def __init__(self, position: int, value_a, value_b):
        self.position = position
        super().__init__(f"Invalid number at position {position}: {value_a!r}, {value_b!r}")


class UnknownMethod(SimilarityError):
    """Similarity method is not one of dot_product, cosine, euclidean."""

    def __init__(self, method):
        self.method = method
        super().__init__(f"Unknown similarity method: {method}. Use: dot_product, cosine, or euclidean")
