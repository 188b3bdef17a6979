"""
Similarity engine scope only. Do not implement beyond this file's responsibilities.
Brute-force top-K ranking of (vector, payload) items against a query vector.
"""

import time
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..core.errors import SimilarityError, UnknownMethod
from ..util.logging import logger
from .similarity import cosine_similarity, dot_product, euclidean_distance
from .types import MethodComparison, ScoredMatch, SimilarityMethod, VectorItem

ItemLike = Union[VectorItem, Sequence[Any]]

METHOD_EXPLANATIONS = {
    SimilarityMethod.DOT_PRODUCT: {
        "formula": "A · B = Σ(Ai * Bi)",
        "interpretation": "Higher values indicate greater similarity",
        "description": "Direct multiplication and summation of vector elements",
        "advantages": ["Fast computation", "Preserves magnitude information"],
        "bestFor": "High-dimensional spaces with similar vector scales",
    },
    SimilarityMethod.COSINE: {
        "formula": "cos(θ) = (A · B) / (||A|| × ||B||)",
        "interpretation": "Range: [-1, 1]. 1 = identical, 0 = orthogonal, -1 = opposite",
        "description": "Measures angle between vectors (normalized dot product)",
        "advantages": ["Scale invariant", "Range [-1,1]", "Good for text similarity"],
        "bestFor": "Text similarity and semantic matching",
    },
    SimilarityMethod.EUCLIDEAN: {
        "formula": "d = √(Σ(Ai - Bi)²)",
        "interpretation": "Lower values indicate greater similarity",
        "description": "Geometric distance between points in n-dimensional space",
        "advantages": ["Intuitive distance measure", "Good for clustering"],
        "bestFor": "Low-dimensional data and clustering applications",
    },
}


def parse_method(method: Union[str, SimilarityMethod]) -> SimilarityMethod:
    """Resolve a method name (case-insensitive) or raise UnknownMethod."""
    if isinstance(method, SimilarityMethod):
        return method
    try:
        return SimilarityMethod(str(method).lower())
    except ValueError:
        raise UnknownMethod(method) from None


def score(query: Sequence[float], vector: Sequence[float], method: Union[str, SimilarityMethod]) -> float:
    """
    Score one vector against the query, higher is better for every method.

    Euclidean distance is converted to 1 / (1 + distance).
    """
    method = parse_method(method)
    if method is SimilarityMethod.DOT_PRODUCT:
        return dot_product(query, vector)
    if method is SimilarityMethod.COSINE:
        return cosine_similarity(query, vector)
    return 1.0 / (1.0 + euclidean_distance(query, vector))


def _as_item(item: ItemLike) -> VectorItem:
    if isinstance(item, VectorItem):
        return item
    vector, payload = item
    return VectorItem(vector=vector, payload=payload)


def find_most_similar(
    query: Sequence[float],
    items: Iterable[ItemLike],
    method: Union[str, SimilarityMethod] = SimilarityMethod.DOT_PRODUCT,
    top_k: int = 5,
) -> List[ScoredMatch]:
    """
    Rank items by similarity to the query and return the top_k matches.

    Items that cannot be scored (malformed vector, dimension mismatch) are kept
    with a score of -inf and an error message instead of failing the batch.
    Ties keep their input order.

    Args:
        query: Query embedding
        items: VectorItem objects or (vector, payload) pairs
        method: dot_product, cosine or euclidean
        top_k: Maximum number of results

    Returns:
        List of ScoredMatch sorted by descending score
    """
    items = list(items)
    if not items:
        return []

    method = parse_method(method)
    start = time.perf_counter()

    results = []
    failed = 0
    for index, raw_item in enumerate(items):
        try:
            item = _as_item(raw_item)
            similarity = score(query, item.vector, method)
            results.append(ScoredMatch(score=similarity, payload=item.payload, method=method.value, index=index))
        except (SimilarityError, TypeError, ValueError, ArithmeticError) as e:
            failed += 1
            logger.log_ranking_item_error(index, method.value, str(e))
            payload = raw_item.payload if isinstance(raw_item, VectorItem) else _payload_of(raw_item)
            results.append(ScoredMatch(
                score=float("-inf"),
                payload=payload,
                method=method.value,
                index=index,
                error=str(e),
            ))

    # sorted() is stable, so equal scores keep input order
    ranked = sorted(results, key=lambda match: match.score, reverse=True)

    duration_ms = (time.perf_counter() - start) * 1000
    logger.log_similarity_query(method.value, len(items), top_k, duration_ms, failed)

    return ranked[:max(top_k, 0)]


def _payload_of(raw_item: Any) -> Any:
    try:
        return raw_item[1]
    except (TypeError, IndexError, KeyError):
        return None


def compare_all_methods(
    query: Sequence[float],
    items: Iterable[ItemLike],
    top_k: int = 5,
) -> Dict[str, MethodComparison]:
    """Run find_most_similar once per method for side-by-side diagnostics."""
    items = list(items)
    comparison = {}

    for method in SimilarityMethod:
        start = time.perf_counter()
        results = find_most_similar(query, items, method, top_k)
        elapsed_ms = (time.perf_counter() - start) * 1000

        scores = [r.score for r in results]
        comparison[method.value] = MethodComparison(
            results=results,
            top_score=scores[0] if scores else None,
            average_score=sum(scores) / len(scores) if scores else None,
            execution_time_ms=elapsed_ms,
        )

    return comparison


def pick_best_method(comparison: Dict[str, MethodComparison]) -> Optional[str]:
    """
    Pick the method with the highest top score.

    Every method's score is already higher-is-better (euclidean is converted
    before ranking), so one comparison direction is used for all. Scores are on
    different scales; this is a demo heuristic, not a quality measure.
    """
    best = None
    best_score = None
    for method in SimilarityMethod:
        entry = comparison.get(method.value)
        if entry is None or entry.top_score is None:
            continue
        if best_score is None or entry.top_score > best_score:
            best = method.value
            best_score = entry.top_score
    return best


def explain_similarity(
    vector_a: Sequence[float],
    vector_b: Sequence[float],
    method: Union[str, SimilarityMethod] = SimilarityMethod.DOT_PRODUCT,
) -> Dict[str, Any]:
    """
    Compute one pairwise measure with its explanation and all three raw values.

    Unlike ranking, euclidean is reported as a distance here.
    """
    method = parse_method(method)

    comparison = {
        SimilarityMethod.DOT_PRODUCT.value: dot_product(vector_a, vector_b),
        SimilarityMethod.COSINE.value: cosine_similarity(vector_a, vector_b),
        SimilarityMethod.EUCLIDEAN.value: euclidean_distance(vector_a, vector_b),
    }

    info = METHOD_EXPLANATIONS[method]
    explanation = {"formula": info["formula"], "interpretation": info["interpretation"]}
    if method is SimilarityMethod.DOT_PRODUCT:
        explanation["calculation"] = " + ".join(
            f"{a} × {b} = {a * b}" for a, b in zip(vector_a, vector_b)
        )

    return {
        "method": method.value,
        "result": comparison[method.value],
        "explanation": explanation,
        "comparison": comparison,
    }
