"""
Document endpoints: ingest text into embedded chunks, list, fetch, delete and
query (retrieve, build an adaptive prompt, optionally generate an answer).
"""

import time

import numpy as np
from fastapi import APIRouter, HTTPException

from ..core.config import CHUNK_MAX_CHARS, CHUNK_OVERLAP, get_chunk_store, llm_enabled
from ..llm.generator import OllamaGenerator
from ..llm.structured import estimate_tokens
from ..util.logging import logger
from ..vector.index import build_document
from ..vector.ranking import parse_method
from ..vector.types import DocumentRecord
from .common import get_embedder, get_prompt_builder, matches_to_json, timestamp, truncate
from .schemas import DocumentCreateRequest, DocumentQueryRequest, DocumentSummary, EmbeddingDemoRequest

router = APIRouter()

CHUNK_PREVIEW = 200
RELEVANT_CHUNK_PREVIEW = 300
EMBEDDING_SAMPLE_SIZE = 10


def _summary(document: DocumentRecord) -> DocumentSummary:
    return DocumentSummary(
        id=document.id,
        title=document.title,
        totalChunks=document.total_chunks,
        contentLength=len(document.content),
        createdAt=document.created_at.isoformat(),
    )


@router.post("", status_code=201)
def create_document(request: DocumentCreateRequest):
    """Chunk, embed and store a text document."""
    embedder = get_embedder()
    try:
        document = build_document(
            request.title,
            request.content,
            embedder,
            max_chars=CHUNK_MAX_CHARS,
            overlap=CHUNK_OVERLAP,
            metadata=request.metadata,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    get_chunk_store().add_document(document)
    logger.log_document_ingested(document.id, document.title, document.total_chunks, embedder.get_dimension())

    return {
        "success": True,
        "document": _summary(document).model_dump(),
        "timestamp": timestamp(),
    }


@router.post("/embedding-demo")
def embedding_demo(request: EmbeddingDemoRequest):
    """Embed a text and describe the resulting vector."""
    if not request.text:
        raise HTTPException(status_code=400, detail="Text is required")

    embedder = get_embedder()
    start = time.perf_counter()
    try:
        embedding = embedder.embed_text(request.text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    processing_ms = int((time.perf_counter() - start) * 1000)

    values = np.asarray(embedding, dtype=np.float64)
    return {
        "text": request.text,
        "embedding": {
            "values": embedding,
            "dimensions": len(embedding),
            "sample": embedding[:EMBEDDING_SAMPLE_SIZE],
            "statistics": {
                "min": float(values.min()),
                "max": float(values.max()),
                "mean": float(values.mean()),
            },
        },
        "metadata": {
            "processingTime": processing_ms,
            "textLength": len(request.text),
            "estimatedTokens": estimate_tokens(request.text),
        },
        "timestamp": timestamp(),
    }


@router.get("")
def list_documents():
    # Newest first
    documents = sorted(get_chunk_store().list_documents(), key=lambda d: d.created_at, reverse=True)
    return {
        "documents": [_summary(d).model_dump() for d in documents],
        "total": len(documents),
        "timestamp": timestamp(),
    }


@router.post("/query")
def query_documents(request: DocumentQueryRequest):
    """
    Answer a question from stored chunks.

    The top chunks become the context of an adaptive prompt. Without
    ``generate`` the response echoes the retrieved context; with it the prompt
    is sent to the local model.
    """
    if not request.question:
        raise HTTPException(status_code=400, detail="Question is required")

    method = parse_method(request.method)
    store = get_chunk_store()
    items = store.items(request.documentId)

    if not items:
        return {
            "question": request.question,
            "answer": "No documents found to query.",
            "relevantChunks": [],
            "timestamp": timestamp(),
        }

    query_embedding = get_embedder().embed_text(request.question)
    matches = store.search(query_embedding, method, request.topK, request.documentId)
    scored = [m for m in matches if m.error is None]
    context = "\n\n".join(m.payload["text"] for m in scored)

    user_profile = request.userProfile.model_dump(exclude_none=True) if request.userProfile else {}
    prompt_result = get_prompt_builder().generate(request.question, context, user_profile=user_profile)

    if request.generate:
        if not llm_enabled():
            raise HTTPException(status_code=503, detail="Generation disabled - set LLM_ENABLED=true to enable")
        generation = OllamaGenerator().generate(prompt_result.prompt)
        if generation.error:
            raise HTTPException(status_code=503, detail=generation.error)
        answer = generation.content
    else:
        answer = (
            f'Based on the document content, here\'s what I found regarding "{request.question}":\n\n'
            f"{context}\n\n"
            f"This information comes from {len(scored)} relevant sections of the document(s)."
        )

    relevant = []
    for match in matches_to_json(matches):
        payload = match["metadata"] or {}
        relevant.append({
            "chunkId": payload.get("chunkId"),
            "documentId": payload.get("documentId"),
            "text": truncate(payload.get("text", ""), RELEVANT_CHUNK_PREVIEW),
            "similarity": match["similarity"],
            "method": match["method"],
        })

    return {
        "question": request.question,
        "answer": answer,
        "prompt": prompt_result.prompt,
        "promptMetadata": prompt_result.metadata,
        "relevantChunks": relevant,
        "metadata": {
            "totalChunksSearched": len(items),
            "similarityMethod": method.value,
            "topK": request.topK,
            "generated": request.generate,
        },
        "timestamp": timestamp(),
    }


@router.get("/{document_id}")
def get_document(document_id: str):
    document = get_chunk_store().get_document(document_id)
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")

    return {
        "document": _summary(document).model_dump(),
        "chunks": [
            {
                "id": chunk.id,
                "text": truncate(chunk.text, CHUNK_PREVIEW),
                "chunkIndex": chunk.chunk_index,
                "startChar": chunk.metadata.get("startChar"),
                "endChar": chunk.metadata.get("endChar"),
            }
            for chunk in document.chunks
        ],
        "timestamp": timestamp(),
    }


@router.delete("/{document_id}")
def delete_document(document_id: str):
    if not get_chunk_store().delete_document(document_id):
        raise HTTPException(status_code=404, detail="Document not found")

    logger.info(f"Deleted document {document_id} and its chunks")
    return {
        "success": True,
        "message": "Document and associated chunks deleted successfully",
        "timestamp": timestamp(),
    }
