"""
Similarity endpoints: pairwise measures, top-K ranking and method comparison.
"""

from fastapi import APIRouter, HTTPException
from typing import Any, Dict

from ..core.config import get_chunk_store
from ..util.logging import logger
from ..vector.ranking import (
    METHOD_EXPLANATIONS,
    compare_all_methods,
    explain_similarity,
    find_most_similar,
    parse_method,
    pick_best_method,
)
from ..vector.types import VectorItem
from .common import comparison_to_json, get_embedder, matches_to_json, timestamp, truncate
from .schemas import RankRequest, SimilarityCompareRequest, SimilaritySearchRequest, SimilarityTestRequest

router = APIRouter()

SEARCH_TEXT_LIMIT = 500
COMPARE_TEXT_LIMIT = 200


def _method_explanations() -> Dict[str, Any]:
    return {
        method.value: {
            "description": info["description"],
            "advantages": info["advantages"],
            "bestFor": info["bestFor"],
        }
        for method, info in METHOD_EXPLANATIONS.items()
    }


@router.post("/test")
def test_similarity(request: SimilarityTestRequest):
    """Compute one measure for two vectors, with its formula and all three raw values."""
    result = explain_similarity(request.vectorA, request.vectorB, request.method)
    result.update({
        "vectorA": request.vectorA,
        "vectorB": request.vectorB,
        "timestamp": timestamp(),
    })
    return result


@router.post("/rank")
def rank_items(request: RankRequest):
    """Rank caller-supplied embeddings against a query embedding."""
    items = [VectorItem(vector=item.embedding, payload=item.metadata) for item in request.items]
    matches = find_most_similar(request.queryEmbedding, items, request.method, request.topK)

    return {
        "method": parse_method(request.method).value,
        "topK": request.topK,
        "results": matches_to_json(matches),
        "totalItems": len(items),
        "timestamp": timestamp(),
    }


@router.post("/search")
def search_chunks(request: SimilaritySearchRequest):
    """Embed a text query and rank stored document chunks against it."""
    if not request.query:
        raise HTTPException(status_code=400, detail="Query is required")

    method = parse_method(request.method)
    store = get_chunk_store()
    items = store.items(request.documentId)

    if not items:
        return {
            "query": request.query,
            "method": method.value,
            "results": [],
            "message": "No document chunks found",
        }

    query_embedding = get_embedder().embed_text(request.query)
    matches = find_most_similar(query_embedding, items, method, request.topK)

    results = []
    for match in matches_to_json(matches):
        payload = match["metadata"] or {}
        results.append({
            "chunkId": payload.get("chunkId"),
            "documentId": payload.get("documentId"),
            "text": truncate(payload.get("text", ""), SEARCH_TEXT_LIMIT),
            "similarity": match["similarity"],
            "method": match["method"],
        })

    logger.info(f"Searched {len(items)} chunks for query using {method.value}")

    return {
        "query": request.query,
        "method": method.value,
        "topK": request.topK,
        "results": results,
        "totalChunks": len(items),
        "timestamp": timestamp(),
    }


@router.post("/compare")
def compare_methods(request: SimilarityCompareRequest):
    """
    Run every method over the same items and report the best top score.

    Items come from the request when queryEmbedding is given, otherwise from
    the chunk store ranked against the embedded text query.
    """
    if request.queryEmbedding is not None:
        query_embedding = request.queryEmbedding
        items = [VectorItem(vector=item.embedding, payload=item.metadata) for item in (request.items or [])]
    elif request.query:
        stored = get_chunk_store().items()
        if not stored:
            return {
                "query": request.query,
                "comparison": {},
                "message": "No document chunks found",
            }
        query_embedding = get_embedder().embed_text(request.query)
        items = [
            VectorItem(vector=item.vector, payload=dict(item.payload, text=truncate(item.payload["text"], COMPARE_TEXT_LIMIT)))
            for item in stored
        ]
    else:
        raise HTTPException(status_code=400, detail="Query or queryEmbedding is required")

    comparison = compare_all_methods(query_embedding, items, request.topK)
    best_method = pick_best_method(comparison)
    explanations = _method_explanations()

    return {
        "query": request.query,
        "comparison": comparison_to_json(comparison),
        "methodExplanations": explanations,
        "analysis": {
            "bestMethod": best_method,
            "totalItems": len(items),
            "recommendation": explanations[best_method]["bestFor"] if best_method else None,
        },
        "timestamp": timestamp(),
    }
