"""
In-memory and SQLite vector stores: insert, read-back and blob encoding.
"""

import struct

import numpy as np
import pytest

from src.core.db import get_db, health_check
from src.vector import (
    IVectorStore,
    SimpleInMemoryVectorStore,
    SQLiteVectorStore,
    StoredRecord,
    Vector,
    InvalidDimension,
    InvalidElement,
    CorruptRecord,
)
from src.vector.codec import ELEMENT_WIDTH, pack_vector, unpack_vector


@pytest.fixture
def db_path(tmp_path):
    """Temporary SQLite file for each test."""
    return str(tmp_path / "embeddings.db")


@pytest.fixture(params=["memory", "sqlite"])
def store(request, db_path):
    """Each test runs against both store implementations."""
    if request.param == "memory":
        return SimpleInMemoryVectorStore()
    return SQLiteVectorStore(db_path)


def test_vector_store_interface(store):
    """Test that both stores implement IVectorStore."""
    assert isinstance(store, IVectorStore)


def test_insert_assigns_sequential_ids(store):
    """Test that ids start at 1 and increase by one."""
    assert store.insert("first", [1.0, 0.0]) == 1
    assert store.insert("second", [0.0, 1.0]) == 2
    assert store.insert("first", [1.0, 1.0]) == 3
    assert store.count() == 3
    assert len(store) == 3


def test_all_returns_records_in_insertion_order(store):
    """Test that every record comes back with its label and values."""
    store.insert("hello", [1.0, 0.0, 0.0])
    store.insert("opposite", [-1.0, 0.0, 0.0])
    store.insert("hello", [0.5, 0.25, 0.0])

    records = store.all()

    assert [record.id for record in records] == [1, 2, 3]
    assert [record.label for record in records] == ["hello", "opposite", "hello"]
    assert [record.vector.to_sequence() for record in records] == [
        [1.0, 0.0, 0.0],
        [-1.0, 0.0, 0.0],
        [0.5, 0.25, 0.0],
    ]
    assert all(isinstance(record, StoredRecord) for record in records)


def test_all_is_idempotent(store):
    """Test that reading twice without inserts gives identical results."""
    store.insert("a", [1.0, 2.0])
    store.insert("b", [3.0, 4.0, 5.0])

    assert store.all() == store.all()


def test_empty_store(store):
    """Test reading an empty store."""
    assert store.all() == []
    assert store.count() == 0


def test_variable_length_vectors(store):
    """Test that records of different dimensions can coexist."""
    store.insert("short", [1.0])
    store.insert("long", [1.0] * 3072)

    dimensions = [record.vector.dimension() for record in store.all()]

    assert dimensions == [1, 3072]


def test_invalid_insert_is_not_stored(store):
    """Test that validation failures leave the store unchanged."""
    with pytest.raises(InvalidDimension):
        store.insert("empty", [])
    with pytest.raises(InvalidElement):
        store.insert("bad", [1.0, "x"])

    assert store.count() == 0
    assert store.insert("good", [1.0]) == 1


def test_insert_copies_caller_values(store):
    """Test that the caller's list can change after insert."""
    values = [1.0, 2.0]
    store.insert("copy", values)
    values[0] = 50.0

    assert store.all()[0].vector.to_sequence() == [1.0, 2.0]


def test_returned_vectors_do_not_alias_store(store):
    """Test that mutating a returned vector leaves the stored record intact."""
    store.insert("a", [3.0, 4.0])

    store.all()[0].vector.normalize_in_place()

    assert store.all()[0].vector.to_sequence() == [3.0, 4.0]


def test_sqlite_store_persists_across_instances(db_path):
    """Test that a second store on the same file sees earlier inserts."""
    first = SQLiteVectorStore(db_path)
    first.insert("persisted", [0.5, -0.5])

    second = SQLiteVectorStore(db_path)

    records = second.all()
    assert len(records) == 1
    assert records[0].label == "persisted"
    assert records[0].vector.to_sequence() == [0.5, -0.5]
    assert second.insert("next", [1.0]) == 2


def test_sqlite_store_creates_table(db_path):
    """Test that opening a store initializes the schema."""
    SQLiteVectorStore(db_path)

    assert health_check(db_path) is True


def test_sqlite_blob_is_raw_float32(db_path):
    """Test the on-disk encoding: native float32, no header."""
    store = SQLiteVectorStore(db_path)
    store.insert("raw", [1.0, -2.0, 0.5])

    with get_db(db_path) as conn:
        blob = conn.execute("SELECT embedding FROM embeddings WHERE id = 1").fetchone()[0]

    assert len(blob) == 3 * ELEMENT_WIDTH
    assert blob == struct.pack("3f", 1.0, -2.0, 0.5)


def test_sqlite_corrupt_blob_length(db_path):
    """Test that a blob not divisible by the element width is rejected."""
    store = SQLiteVectorStore(db_path)
    store.insert("good", [1.0, 2.0])

    with get_db(db_path) as conn:
        conn.execute(
            "INSERT INTO embeddings (content, embedding) VALUES (?, ?)",
            ("broken", b"\x00\x00\x80\x3f\x00\x00"),
        )
        conn.commit()

    with pytest.raises(CorruptRecord) as exc_info:
        store.all()

    assert exc_info.value.record_id == 2


def test_sqlite_empty_blob_is_corrupt(db_path):
    """Test that a zero-length blob cannot become a vector."""
    store = SQLiteVectorStore(db_path)

    with get_db(db_path) as conn:
        conn.execute(
            "INSERT INTO embeddings (content, embedding) VALUES (?, ?)",
            ("empty", b""),
        )
        conn.commit()

    with pytest.raises(CorruptRecord):
        store.all()


def test_sqlite_text_in_blob_column_is_corrupt(db_path):
    """Test that a non-binary value in the blob column is rejected."""
    store = SQLiteVectorStore(db_path)

    with get_db(db_path) as conn:
        conn.execute(
            "INSERT INTO embeddings (content, embedding) VALUES (?, ?)",
            ("text", "abcd"),
        )
        conn.commit()

    with pytest.raises(CorruptRecord):
        store.all()


def test_codec_round_trip():
    """Test packing and unpacking a vector."""
    vector = Vector.create([0.25, -1.5, 8.0, 0.0])

    blob = pack_vector(vector)

    assert len(blob) == 16
    assert unpack_vector(blob) == vector


def test_codec_dimension_implied_by_length():
    """Test that the element count comes from the blob length alone."""
    blob = np.arange(7, dtype=np.float32).tobytes()

    vector = unpack_vector(blob, record_id=9)

    assert vector.dimension() == 7
    assert vector.to_sequence() == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_codec_unpacked_vector_is_writable_copy():
    """Test that an unpacked vector owns its buffer and can be normalized."""
    blob = struct.pack("2f", 3.0, 4.0)

    vector = unpack_vector(blob).normalize_in_place()

    assert vector.to_sequence() == pytest.approx([0.6, 0.8], rel=1e-6)


def test_codec_rejects_bad_length():
    """Test the CorruptRecord error carries the record id."""
    with pytest.raises(CorruptRecord) as exc_info:
        unpack_vector(b"\x00" * 5, record_id=42)

    assert exc_info.value.record_id == 42
    assert "42" in str(exc_info.value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
