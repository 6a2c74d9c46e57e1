"""
Vector core errors.
Raised at the point of detection; callers decide whether to skip or abort.
"""


class VectorError(Exception):
    """Base exception for vector operations."""
    pass


class InvalidDimension(VectorError, ValueError):
    """Vector input is empty or longer than the configured maximum."""
    pass


class InvalidElement(VectorError, TypeError):
    """Vector input contains a non-numeric element."""

    def __init__(self, index: int, value: object, reason: str = "is not numeric"):
        self.index = index
        self.value = value
        self.reason = reason
        super().__init__(f"Element at index {index} {reason}: {value!r}")


class DimensionMismatch(VectorError, ValueError):
    """Two vectors of different lengths were compared."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Dimension mismatch: expected {expected}, got {actual}")


class DivisionByZero(VectorError, ZeroDivisionError):
    """Normalization of a zero-magnitude vector."""
    pass


class CorruptRecord(VectorError, ValueError):
    """Stored blob cannot be decoded into a vector."""

    def __init__(self, record_id, message: str):
        self.record_id = record_id
        super().__init__(f"Corrupt record {record_id}: {message}")


class EmbeddingUnavailable(VectorError, RuntimeError):
    """The embedding provider failed to produce a vector."""
    pass
