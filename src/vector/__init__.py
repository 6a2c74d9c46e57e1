"""
Embedding vectors, cosine similarity and brute-force top-k retrieval
over an append-only store.
"""

# Package initialization for vector module
from .vector import Vector
from .similarity import cosine_similarity
from .types import StoredRecord, QueryResult
from .index import IVectorStore, SimpleInMemoryVectorStore
from .sqlite_store import SQLiteVectorStore
from .retrieval import top_k, top_k_similar
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, OllamaEmbedding, SentenceTransformerEmbedding
from .errors import (
    VectorError,
    InvalidDimension,
    InvalidElement,
    DimensionMismatch,
    DivisionByZero,
    CorruptRecord,
    EmbeddingUnavailable,
)

__all__ = [
    'Vector',
    'cosine_similarity',
    'StoredRecord',
    'QueryResult',
    'IVectorStore',
    'SimpleInMemoryVectorStore',
    'SQLiteVectorStore',
    'top_k',
    'top_k_similar',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'OllamaEmbedding',
    'SentenceTransformerEmbedding',
    'VectorError',
    'InvalidDimension',
    'InvalidElement',
    'DimensionMismatch',
    'DivisionByZero',
    'CorruptRecord',
    'EmbeddingUnavailable',
]
