"""
Environment-driven configuration accessors.
"""

from promptlab.core import config
from promptlab.vector.embeddings import DeterministicHashEmbedding


def test_llm_disabled_by_default(monkeypatch):
    monkeypatch.delenv("LLM_ENABLED", raising=False)
    assert config.llm_enabled() is False


def test_llm_enabled_flag(monkeypatch):
    monkeypatch.setenv("LLM_ENABLED", "TRUE")
    assert config.llm_enabled() is True


def test_debug_flag(monkeypatch):
    monkeypatch.setenv("DEBUG", "false")
    assert config.debug_enabled() is False


def test_seeded_random_source_is_reproducible(monkeypatch):
    monkeypatch.setenv("EXAMPLE_SEED", "42")
    first = config.get_random_source()
    second = config.get_random_source()
    assert [first.random() for _ in range(3)] == [second.random() for _ in range(3)]


def test_default_embedding_provider():
    embedder = config.get_embedding_provider()
    assert isinstance(embedder, DeterministicHashEmbedding)
    assert embedder.get_dimension() == config.EMBED_DIMENSION


def test_chunk_store_is_shared():
    assert config.get_chunk_store() is config.get_chunk_store()


def test_validate_config_defaults(monkeypatch):
    monkeypatch.delenv("EXAMPLE_SEED", raising=False)
    assert config.validate_config() == []


def test_validate_config_bad_seed(monkeypatch):
    monkeypatch.setenv("EXAMPLE_SEED", "abc")
    assert "EXAMPLE_SEED must be an integer, got abc" in config.validate_config()
