"""
SQLite-backed vector store.
Each row is (id, content, embedding blob); ids come from AUTOINCREMENT.
"""

from typing import Iterable, List

from util.logging import logger

from ..core.config import DB_PATH
from ..core.db import EMBEDDINGS_TABLE, get_db, init_db
from .codec import pack_vector, unpack_vector
from .errors import VectorError
from .index import IVectorStore
from .types import StoredRecord
from .vector import Vector


class SQLiteVectorStore(IVectorStore):
    """Append-only vector store persisted in a SQLite table."""

    def __init__(self, db_path: str = None):
        """
        Open (and create if needed) the embeddings table.

        Args:
            db_path: SQLite file path, defaults to the configured DB_PATH
        """
        self.db_path = db_path or DB_PATH
        init_db(self.db_path)

    def insert(self, label: str, values: Iterable[float]) -> int:
        """Validate, serialize and commit a single record."""
        try:
            vector = Vector.create(values)
        except VectorError as e:
            logger.log_vector_error("insert", e, {"label": label})
            raise

        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT INTO {EMBEDDINGS_TABLE} (content, embedding) VALUES (?, ?)",
                (label, pack_vector(vector)),
            )
            conn.commit()
            record_id = cursor.lastrowid

        logger.log_vector_operation("insert", record_id, {"label": label, "dimension": vector.dimension()})
        return record_id

    def all(self) -> List[StoredRecord]:
        """
        Read every record in insertion order.

        Raises:
            CorruptRecord: if a stored blob cannot be decoded
        """
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT id, content, embedding FROM {EMBEDDINGS_TABLE} ORDER BY id")
            rows = cursor.fetchall()

        records = []
        for record_id, content, blob in rows:
            try:
                vector = unpack_vector(blob, record_id=record_id)
            except VectorError as e:
                logger.log_vector_error("load", e, {"record_id": record_id})
                raise
            records.append(StoredRecord(id=record_id, label=content, vector=vector))

        return records

    def count(self) -> int:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT COUNT(*) FROM {EMBEDDINGS_TABLE}")
            return cursor.fetchone()[0]
