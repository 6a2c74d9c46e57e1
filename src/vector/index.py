"""
Vector store interface and in-memory implementation.
Append-only: records are never updated or deleted.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List

from util.logging import logger

from ..core.config import get_default_top_k
from .errors import VectorError
from .retrieval import top_k as rank_records
from .types import QueryResult, StoredRecord
from .vector import Vector


class IVectorStore(ABC):
    """Abstract interface for vector storage operations."""

    @abstractmethod
    def insert(self, label: str, values: Iterable[float]) -> int:
        """Validate ``values``, store them under ``label`` and return the new id."""
        pass

    @abstractmethod
    def all(self) -> List[StoredRecord]:
        """Return every record in insertion order."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored records."""
        pass

    def search(self, query_vector: Vector, top_k: int = None) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        if top_k is None:
            top_k = get_default_top_k()
        return rank_records(query_vector, self, top_k)

    def __len__(self) -> int:
        return self.count()


class SimpleInMemoryVectorStore(IVectorStore):
    """Simple in-memory implementation of IVectorStore using cosine similarity."""

    def __init__(self):
        self._records: List[StoredRecord] = []
        self._next_id = 1

    def insert(self, label: str, values: Iterable[float]) -> int:
        """Add a single vector record to the store."""
        try:
            vector = Vector.create(values)
        except VectorError as e:
            logger.log_vector_error("insert", e, {"label": label})
            raise

        record_id = self._next_id
        self._records.append(StoredRecord(id=record_id, label=label, vector=vector))
        self._next_id += 1

        logger.log_vector_operation("insert", record_id, {"label": label, "dimension": vector.dimension()})
        return record_id

    def all(self) -> List[StoredRecord]:
        """Return every record in insertion order.

        Vectors are copied so callers cannot mutate stored records.
        """
        return [
            StoredRecord(id=record.id, label=record.label, vector=record.vector.copy())
            for record in self._records
        ]

    def count(self) -> int:
        return len(self._records)
