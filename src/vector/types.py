"""
Record and result types for the vector store.
"""

from dataclasses import dataclass

from .vector import Vector


@dataclass(frozen=True)
class StoredRecord:
    """Represents a stored (id, label, vector) row."""

    id: int
    """Sequential identifier assigned by the store"""

    label: str
    """Text the vector was produced from; not necessarily unique"""

    vector: Vector
    """The embedding, owned exclusively by this record"""


@dataclass(frozen=True)
class QueryResult:
    """Represents a search result from vector store."""

    id: int
    """Identifier for the matching record"""

    label: str
    """Label of the matching record"""

    score: float
    """Cosine similarity of the match (-1 to 1)"""
