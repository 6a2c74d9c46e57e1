"""
Embedding providers - turn text into vectors.
The store treats every provider as an external text -> vector function.
"""

from abc import ABC, abstractmethod
import hashlib

import ollama

from ..core.config import OLLAMA_HOST, OLLAMA_MODEL, OLLAMA_TEMPERATURE
from .errors import EmbeddingUnavailable


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> list[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for testing purposes.

    Each block of eight components comes from a SHA-256 digest of the text
    and a block counter, so every dimension is filled and the same text
    always maps to the same vector without any model dependency.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension

    def embed_text(self, text: str) -> list[float]:
        """Generate deterministic embedding vector using hash function."""
        vector = []
        block = 0
        while len(vector) < self.dimension:
            digest = hashlib.sha256(f"{block}:{text}".encode()).digest()
            for i in range(0, len(digest), 4):
                value = int.from_bytes(digest[i:i + 4], "big")
                # Map to [-1, 1]
                vector.append((value / (2**32)) * 2 - 1)
            block += 1

        return vector[:self.dimension]

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class OllamaEmbedding(IEmbeddingProvider):
    """Embedding provider backed by a local Ollama model.

    The client handle is passed in by the caller, or created once per
    provider instance on first use.
    """

    def __init__(self, model: str = OLLAMA_MODEL, client: ollama.Client = None, host: str = OLLAMA_HOST,
                 temperature: float = OLLAMA_TEMPERATURE):
        self.model = model
        self.host = host
        self.temperature = temperature
        self._client = client
        self._dimension = None

    @property
    def client(self) -> ollama.Client:
        if self._client is None:
            self._client = ollama.Client(host=self.host)
        return self._client

    def embed_text(self, text: str) -> list[float]:
        """Generate embedding vector using the Ollama embed API."""
        try:
            response = self.client.embed(
                model=self.model,
                input=text,
                options={'temperature': self.temperature}
            )
        except ollama.ResponseError as e:
            raise EmbeddingUnavailable(f"Ollama model '{self.model}' failed: {e.error}") from e

        embeddings = response['embeddings']
        if not embeddings:
            raise EmbeddingUnavailable(f"Ollama model '{self.model}' returned no embedding")
        return list(embeddings[0])

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = len(self.embed_text("test"))
        return self._dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    Uses the all-mpnet-base-v2 model by default.
    """

    def __init__(self, model_name: str = "all-mpnet-base-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError:
                raise ImportError("sentence-transformers not installed. Please install the 'sentence' extra.")
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_text(self, text: str) -> list[float]:
        """Generate embedding vector using sentence transformers."""
        embedding = self.model.encode(text, convert_to_tensor=False)
        return embedding.tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            # Get dimension by encoding a dummy string
            dummy_embedding = self.model.encode("test", convert_to_tensor=False)
            self._dimension = len(dummy_embedding)
        return self._dimension
