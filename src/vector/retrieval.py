"""
Top-K retrieval - brute-force ranking of every stored record.
"""

import numbers
import time
from typing import List

from util.logging import logger

from ..core.config import get_default_top_k, get_embedding_dimension
from .errors import DimensionMismatch, EmbeddingUnavailable
from .similarity import cosine_similarity
from .types import QueryResult
from .vector import Vector


def top_k(query: Vector, store, k: int) -> List[QueryResult]:
    """
    Rank all records in ``store`` against ``query`` and return the best ``k``.

    Every record is scored; there is no index. Results are sorted by score
    descending and records with equal scores keep their insertion order.
    A single dimension mismatch aborts the whole ranking.

    Args:
        query: Query vector
        store: Any vector store exposing ``all()``
        k: Maximum number of results, must be positive

    Returns:
        Up to ``k`` QueryResult objects

    Raises:
        DimensionMismatch: on the first stored vector whose dimension differs
        ValueError: if ``k`` is not a positive integer
    """
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 1:
        raise ValueError(f"k must be a positive integer, got {k!r}")

    start_time = time.time()
    records = store.all()

    scored = []
    for record in records:
        try:
            score = cosine_similarity(query, record.vector)
        except DimensionMismatch as e:
            logger.log_vector_error("query", e, {"record_id": record.id})
            raise
        scored.append(QueryResult(id=record.id, label=record.label, score=score))

    # sorted() is stable, so ties stay in insertion order
    ranked = sorted(scored, key=lambda result: result.score, reverse=True)[:k]

    logger.log_query(len(records), k, start_time, time.time(), details={"returned": len(ranked)})
    return ranked


def embed_query(text: str, provider) -> Vector:
    """Turn query text into a validated Vector using ``provider``."""
    try:
        values = provider.embed_text(text)
    except Exception as e:
        logger.log_vector_error("embed", e)
        raise EmbeddingUnavailable(f"Embedding provider failed: {e}") from e

    query = Vector.create(values)

    expected = get_embedding_dimension()
    if expected is not None and query.dimension() != expected:
        error = DimensionMismatch(expected, query.dimension())
        logger.log_vector_error("embed", error)
        raise error

    return query


def top_k_similar(store, query_text: str, provider, k: int = None) -> List[QueryResult]:
    """Embed ``query_text`` and return the ``k`` most similar stored records.

    ``k`` defaults to the configured DEFAULT_TOP_K.
    """
    if k is None:
        k = get_default_top_k()
    return top_k(embed_query(query_text, provider), store, k)
