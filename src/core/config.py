"""
Configuration for the embedding store.
All settings come from environment variables with conservative defaults.
"""

import os
from pathlib import Path
from typing import Optional

# Database path configuration
DB_PATH = os.getenv("DB_PATH", "./data/embeddings.db")

# Vector limits. EMBEDDING_DIMENSION unset means variable-length vectors.
MAX_DIMENSION = int(os.getenv("MAX_DIMENSION", "65535"))
EMBEDDING_DIMENSION = os.getenv("EMBEDDING_DIMENSION")

# Embedding provider configuration
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|ollama|sentence
HASH_EMBED_DIMENSION = int(os.getenv("HASH_EMBED_DIMENSION", "384"))
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.2")
OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
OLLAMA_TEMPERATURE = float(os.getenv("OLLAMA_TEMPERATURE", "0.1"))
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-mpnet-base-v2")

# Retrieval defaults
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "5"))


def get_max_dimension() -> int:
    """Get the largest dimension a vector may have."""
    return int(os.getenv("MAX_DIMENSION", str(MAX_DIMENSION)))


def get_embedding_dimension() -> Optional[int]:
    """Get the expected embedding dimension, or None when vectors are variable-length."""
    value = os.getenv("EMBEDDING_DIMENSION", EMBEDDING_DIMENSION or "")
    if not value.strip():
        return None
    return int(value)


def get_default_top_k() -> int:
    """Get the number of results returned when no k is given."""
    return int(os.getenv("DEFAULT_TOP_K", str(DEFAULT_TOP_K)))


def ensure_db_directory(db_path: str = None):
    """Ensure the database directory exists."""
    Path(db_path or DB_PATH).parent.mkdir(parents=True, exist_ok=True)


def get_vector_store(db_path: str = None):
    """Get the SQLite-backed vector store for the configured database."""
    from src.vector.sqlite_store import SQLiteVectorStore
    return SQLiteVectorStore(db_path or os.getenv("DB_PATH", DB_PATH))


def get_embedding_provider(provider: str = None):
    """Get configured embedding provider implementation."""
    provider = provider or os.getenv("EMBED_PROVIDER", EMBED_PROVIDER)

    if provider == "ollama":
        from src.vector.embeddings import OllamaEmbedding
        return OllamaEmbedding(model=OLLAMA_MODEL, host=OLLAMA_HOST)
    elif provider == "sentence":
        from src.vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(EMBED_MODEL_NAME)
    elif provider == "hash":
        from src.vector.embeddings import DeterministicHashEmbedding
        return DeterministicHashEmbedding(dimension=HASH_EMBED_DIMENSION)
    else:
        raise ValueError(f"Unknown EMBED_PROVIDER: {provider}")


def validate_vector_config():
    """Validate vector configuration and return any issues."""
    issues = []

    provider = os.getenv("EMBED_PROVIDER", EMBED_PROVIDER)
    if provider not in ["hash", "ollama", "sentence"]:
        issues.append(f"Invalid EMBED_PROVIDER: {provider}")

    try:
        max_dimension = get_max_dimension()
    except ValueError:
        issues.append("MAX_DIMENSION must be an integer")
        max_dimension = None
    else:
        if max_dimension < 1:
            issues.append("MAX_DIMENSION must be >= 1")

    try:
        expected = get_embedding_dimension()
    except ValueError:
        issues.append("EMBEDDING_DIMENSION must be an integer")
    else:
        if expected is not None:
            if expected < 1:
                issues.append("EMBEDDING_DIMENSION must be >= 1")
            elif max_dimension is not None and expected > max_dimension:
                issues.append("EMBEDDING_DIMENSION must not exceed MAX_DIMENSION")

    try:
        if get_default_top_k() < 1:
            issues.append("DEFAULT_TOP_K must be >= 1")
    except ValueError:
        issues.append("DEFAULT_TOP_K must be an integer")

    if provider == "hash" and HASH_EMBED_DIMENSION < 1:
        issues.append("HASH_EMBED_DIMENSION must be >= 1")

    return issues
