"""
Similarity engine scope only. Do not implement beyond this file's responsibilities.
Vector math, top-K ranking, embeddings and the in-memory chunk store.
"""

# Package initialization for vector module
from .similarity import dot_product, dot_product_similarity, cosine_similarity, euclidean_distance
from .ranking import find_most_similar, compare_all_methods, pick_best_method, explain_similarity, parse_method
from .types import SimilarityMethod, VectorItem, ScoredMatch, MethodComparison, ChunkRecord, DocumentRecord
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, SentenceTransformerEmbedding
from .index import IChunkStore, InMemoryChunkStore, build_document

__all__ = [
    'dot_product',
    'dot_product_similarity',
    'cosine_similarity',
    'euclidean_distance',
    'find_most_similar',
    'compare_all_methods',
    'pick_best_method',
    'explain_similarity',
    'parse_method',
    'SimilarityMethod',
    'VectorItem',
    'ScoredMatch',
    'MethodComparison',
    'ChunkRecord',
    'DocumentRecord',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SentenceTransformerEmbedding',
    'IChunkStore',
    'InMemoryChunkStore',
    'build_document',
]
