"""
Runtime configuration for the similarity and prompting demo.
All values come from environment variables with safe defaults.
"""

import os
import random
from typing import List

# Debug flag (docs endpoints, verbose logs)
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# Embedding configuration
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|sentence_transformers
EMBED_DIMENSION = int(os.getenv("EMBED_DIMENSION", "384"))
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-mpnet-base-v2")

# Similarity search defaults
DEFAULT_SIMILARITY_METHOD = os.getenv("DEFAULT_SIMILARITY_METHOD", "dot_product")  # dot_product|cosine|euclidean
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "5"))

# Document chunking
CHUNK_MAX_CHARS = int(os.getenv("CHUNK_MAX_CHARS", "8000"))
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "200"))

# Example sampling seed (unset = nondeterministic)
EXAMPLE_SEED = os.getenv("EXAMPLE_SEED")

# Generation (Ollama) - default disabled
LLM_ENABLED = os.getenv("LLM_ENABLED", "false").lower() == "true"
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.2:latest")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))

# Version string
VERSION = "1.0.0"

_chunk_store = None


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def llm_enabled():
    """Check if calls to the generation model are enabled."""
    return os.getenv("LLM_ENABLED", "false").lower() == "true"


def get_embedding_provider():
    """Get configured embedding provider implementation."""
    if EMBED_PROVIDER == "sentence_transformers":
        from promptlab.vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(EMBED_MODEL_NAME)

    from promptlab.vector.embeddings import DeterministicHashEmbedding
    return DeterministicHashEmbedding(dimension=EMBED_DIMENSION)


def get_chunk_store():
    """Get the process-wide in-memory chunk store used by the demo API."""
    global _chunk_store
    if _chunk_store is None:
        from promptlab.vector.index import InMemoryChunkStore
        _chunk_store = InMemoryChunkStore()
    return _chunk_store


def get_random_source() -> random.Random:
    """Random source for example sampling; seeded when EXAMPLE_SEED is set."""
    seed = os.getenv("EXAMPLE_SEED", EXAMPLE_SEED)
    if seed is None or seed == "":
        return random.Random()
    return random.Random(int(seed))


def validate_config() -> List[str]:
    """Validate configuration and return any issues."""
    issues = []

    if EMBED_PROVIDER not in ["hash", "sentence_transformers"]:
        issues.append(f"Invalid EMBED_PROVIDER: {EMBED_PROVIDER}")

    if DEFAULT_SIMILARITY_METHOD not in ["dot_product", "cosine", "euclidean"]:
        issues.append(f"Invalid DEFAULT_SIMILARITY_METHOD: {DEFAULT_SIMILARITY_METHOD}")

    if EMBED_DIMENSION < 1:
        issues.append("EMBED_DIMENSION must be >= 1")

    if DEFAULT_TOP_K < 1:
        issues.append("DEFAULT_TOP_K must be >= 1")

    if CHUNK_OVERLAP >= CHUNK_MAX_CHARS:
        issues.append("CHUNK_OVERLAP must be smaller than CHUNK_MAX_CHARS")

    seed = os.getenv("EXAMPLE_SEED", EXAMPLE_SEED)
    if seed:
        try:
            int(seed)
        except ValueError:
            issues.append(f"EXAMPLE_SEED must be an integer, got {seed}")

    return issues
