"""
Vector core - owned embedding buffer with validation.
Values are stored as float32; reductions accumulate in float64.
"""

import numbers
from typing import Iterable, List, Optional

import numpy as np

from ..core.config import get_max_dimension
from .errors import DivisionByZero, InvalidDimension, InvalidElement

STORAGE_DTYPE = np.float32
ACCUMULATOR_DTYPE = np.float64

_FAST_TYPES = (float, int)
_FLOAT32_MAX = float(np.finfo(STORAGE_DTYPE).max)

OUT_OF_RANGE = "is out of float32 range"


def _element(values: object, wide: np.ndarray, index: int) -> object:
    return values[index] if isinstance(values, list) else wide[index].item()


def _validate_elements(values: List[object]) -> None:
    """Reject anything that is not a real number (bools included)."""
    for index, value in enumerate(values):
        value_type = type(value)
        if value_type in _FAST_TYPES:
            continue
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise InvalidElement(index, value)


def _to_wide_buffer(values: Iterable[object]) -> np.ndarray:
    """Convert input to float64; range checks happen before narrowing to float32."""
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise InvalidDimension(f"Expected a flat sequence, got array of shape {values.shape}")
        if values.dtype.kind in "fiu":
            with np.errstate(over="ignore"):
                return np.asarray(values, dtype=ACCUMULATOR_DTYPE)
        values = values.tolist()
    elif isinstance(values, (str, bytes)):
        raise InvalidElement(0, values)
    else:
        values = list(values)

    _validate_elements(values)
    try:
        return np.array(values, dtype=ACCUMULATOR_DTYPE)
    except OverflowError as e:
        # Python ints beyond float range
        for index, value in enumerate(values):
            try:
                float(value)
            except OverflowError:
                raise InvalidElement(index, value, OUT_OF_RANGE) from e
        raise


class Vector:
    """A single embedding vector.

    The vector owns a private copy of its values, so the sequence it was
    built from can be mutated or discarded freely. The dimension is fixed at
    creation; only ``normalize_in_place`` changes the values.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[object], max_dimension: Optional[int] = None):
        limit = get_max_dimension() if max_dimension is None else max_dimension
        wide = _to_wide_buffer(values)

        if wide.size == 0:
            raise InvalidDimension("Cannot create a vector from an empty sequence")
        if wide.size > limit:
            raise InvalidDimension(
                f"Vector too large: {wide.size} elements, maximum {limit} dimensions allowed"
            )

        finite = np.isfinite(wide)
        if not finite.all():
            index = int(np.argmin(finite))
            raise InvalidElement(index, _element(values, wide, index), "is not finite")

        in_range = np.abs(wide) <= _FLOAT32_MAX
        if not in_range.all():
            index = int(np.argmin(in_range))
            raise InvalidElement(index, _element(values, wide, index), OUT_OF_RANGE)

        self._values = wide.astype(STORAGE_DTYPE)

    @classmethod
    def create(cls, values: Iterable[object], max_dimension: Optional[int] = None) -> "Vector":
        """Build a validated vector from a sequence of numbers."""
        return cls(values, max_dimension=max_dimension)

    def dimension(self) -> int:
        return self._values.shape[0]

    def __len__(self) -> int:
        return self._values.shape[0]

    def __getitem__(self, index: int) -> float:
        return float(self._values[index])

    def __iter__(self):
        return iter(self._values.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Vector(dim: {self.dimension()}, values: {self._values.tolist()})"

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the underlying float32 buffer."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "Vector":
        """Return an independent vector with the same values."""
        clone = Vector.__new__(Vector)
        clone._values = self._values.copy()
        return clone

    def to_sequence(self) -> List[float]:
        """Return an independent copy of the values in order."""
        return self._values.tolist()

    def magnitude(self) -> float:
        """Euclidean (L2) norm computed with a float64 accumulator."""
        sum_squares = np.einsum("i,i->", self._values, self._values, dtype=ACCUMULATOR_DTYPE)
        return float(np.sqrt(sum_squares))

    def normalize_in_place(self) -> "Vector":
        """Scale the vector to unit length. Returns self for chaining."""
        magnitude = self.magnitude()
        if magnitude == 0.0:
            raise DivisionByZero("Cannot normalize zero vector")

        self._values[:] = self._values.astype(ACCUMULATOR_DTYPE) / magnitude
        return self
