"""
Embedding providers: text in, fixed-length vector out.
The similarity core never calls these; callers pass the vectors in.
"""

from abc import ABC, abstractmethod
import hashlib
import re
import struct
from typing import List

import numpy as np

_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Collapse whitespace runs; reject text that is empty afterwards."""
    if not isinstance(text, str):
        raise ValueError("Text input is required and must be a string")

    cleaned = _WHITESPACE_RE.sub(" ", text).strip()
    if not cleaned:
        raise ValueError("Text cannot be empty after cleaning")
    return cleaned


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """Embed several texts, skipping ones that are blank after cleaning."""
        if not texts:
            raise ValueError("Texts must be a non-empty list")

        cleaned = []
        for text in texts:
            if not isinstance(text, str):
                raise ValueError("All texts must be strings")
            if text.strip():
                cleaned.append(text)

        if not cleaned:
            raise ValueError("No valid texts after cleaning")

        return [self.embed_text(text) for text in cleaned]


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider.

    Every dimension is filled from a SHA-256 stream keyed by the cleaned text,
    so identical text always maps to the same unit-length vector without any
    model download.
    """

    def __init__(self, dimension: int = 384):
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension

    def embed_text(self, text: str) -> List[float]:
        """Generate deterministic embedding vector using hash function."""
        cleaned = clean_text(text)
        seed = cleaned.encode("utf-8")

        values = []
        counter = 0
        while len(values) < self.dimension:
            digest = hashlib.sha256(seed + struct.pack(">I", counter)).digest()
            # 8 unsigned 32-bit ints per digest, mapped to [-1, 1]
            for (word,) in struct.iter_unpack(">I", digest):
                values.append((word / 2**32) * 2 - 1)
            counter += 1

        vector = np.asarray(values[:self.dimension], dtype=np.float64)
        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm
        return vector.tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    Uses the all-mpnet-base-v2 model by default. The model is loaded on first use.
    """

    def __init__(self, model_name: str = "all-mpnet-base-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector using sentence transformers."""
        embedding = self.model.encode(clean_text(text), convert_to_tensor=False)
        return embedding.tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension
