"""
Similarity engine - cosine similarity between two vectors.
"""

import numpy as np

from .errors import DimensionMismatch
from .vector import ACCUMULATOR_DTYPE, Vector


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Compute dot(a, b) / (|a| * |b|), clamped to [-1.0, 1.0].

    Dot product and both squared norms are accumulated in float64 even
    though the vectors store float32. If either vector has a squared norm
    of exactly zero the similarity is defined as 0.0.

    Raises:
        DimensionMismatch: if the vectors have different dimensions
    """
    if a.dimension() != b.dimension():
        raise DimensionMismatch(a.dimension(), b.dimension())

    # One reduction over both vectors yields the dot product and both squared norms
    pair = np.stack((a.array, b.array))
    gram = np.einsum("ij,kj->ik", pair, pair, dtype=ACCUMULATOR_DTYPE)
    dot, norm_a, norm_b = gram[0, 1], gram[0, 0], gram[1, 1]

    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = float(dot / np.sqrt(norm_a * norm_b))
    return max(-1.0, min(1.0, similarity))
