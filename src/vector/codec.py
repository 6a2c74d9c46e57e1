"""
Blob codec for stored vectors.
Raw float32 elements in native byte order, no header or length prefix.
"""

import numpy as np

from .errors import CorruptRecord, InvalidDimension, InvalidElement
from .vector import STORAGE_DTYPE, Vector

ELEMENT_WIDTH = np.dtype(STORAGE_DTYPE).itemsize


def pack_vector(vector: Vector) -> bytes:
    """Serialize a vector to its raw blob form."""
    return vector.array.tobytes()


def unpack_vector(blob: bytes, record_id=None) -> Vector:
    """Deserialize a raw blob; the element count is implied by its length."""
    if not isinstance(blob, (bytes, bytearray, memoryview)):
        raise CorruptRecord(record_id, f"expected a binary blob, got {type(blob).__name__}")
    if len(blob) % ELEMENT_WIDTH != 0:
        raise CorruptRecord(
            record_id,
            f"blob length {len(blob)} is not a multiple of element width {ELEMENT_WIDTH}",
        )

    values = np.frombuffer(blob, dtype=STORAGE_DTYPE)
    try:
        return Vector(values)
    except (InvalidDimension, InvalidElement) as e:
        raise CorruptRecord(record_id, str(e)) from e
