"""
Similarity engine scope only. Do not implement beyond this file's responsibilities.
In-memory document/chunk store searched by exact brute-force ranking.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from .chunking import chunk_text
from .embeddings import IEmbeddingProvider
from .ranking import find_most_similar
from .types import ChunkRecord, DocumentRecord, ScoredMatch, VectorItem


class IChunkStore(ABC):
    """Abstract interface for document and chunk storage."""

    @abstractmethod
    def add_document(self, document: DocumentRecord) -> None:
        """Store a document together with its chunks."""
        pass

    @abstractmethod
    def get_document(self, document_id: str) -> Optional[DocumentRecord]:
        """Fetch a document by ID, or None."""
        pass

    @abstractmethod
    def list_documents(self) -> List[DocumentRecord]:
        """List stored documents, oldest first."""
        pass

    @abstractmethod
    def delete_document(self, document_id: str) -> bool:
        """Delete a document and its chunks. Returns False if it was unknown."""
        pass

    @abstractmethod
    def items(self, document_id: Optional[str] = None) -> List[VectorItem]:
        """Chunks as rankable (vector, payload) items."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all documents from the store."""
        pass

    def search(self, query_vector: List[float], method: str = "dot_product", top_k: int = 5,
               document_id: Optional[str] = None) -> List[ScoredMatch]:
        """Rank stored chunks against the query vector."""
        return find_most_similar(query_vector, self.items(document_id), method, top_k)


class InMemoryChunkStore(IChunkStore):
    """Dict-backed IChunkStore; insertion order is preserved."""

    def __init__(self):
        self._documents: Dict[str, DocumentRecord] = {}

    def add_document(self, document: DocumentRecord) -> None:
        self._documents[document.id] = document

    def get_document(self, document_id: str) -> Optional[DocumentRecord]:
        return self._documents.get(document_id)

    def list_documents(self) -> List[DocumentRecord]:
        return list(self._documents.values())

    def delete_document(self, document_id: str) -> bool:
        return self._documents.pop(document_id, None) is not None

    def items(self, document_id: Optional[str] = None) -> List[VectorItem]:
        if document_id is not None:
            document = self._documents.get(document_id)
            documents = [document] if document else []
        else:
            documents = self._documents.values()

        return [
            VectorItem(vector=chunk.embedding, payload=_chunk_payload(chunk))
            for document in documents
            for chunk in document.chunks
        ]

    def clear(self) -> None:
        self._documents.clear()

    def stats(self) -> Dict[str, Any]:
        chunk_count = sum(d.total_chunks for d in self._documents.values())
        dimensions = {len(c.embedding) for d in self._documents.values() for c in d.chunks}
        return {
            "total_documents": len(self._documents),
            "total_chunks": chunk_count,
            "dimensions": sorted(dimensions),
        }


def _chunk_payload(chunk: ChunkRecord) -> Dict[str, Any]:
    payload = {
        "chunkId": chunk.id,
        "documentId": chunk.document_id,
        "chunkIndex": chunk.chunk_index,
        "text": chunk.text,
    }
    payload.update(chunk.metadata)
    return payload


def build_document(title: str, content: str, embedder: IEmbeddingProvider,
                   max_chars: int = 8000, overlap: int = 200,
                   metadata: Optional[Dict[str, Any]] = None) -> DocumentRecord:
    """
    Chunk and embed a document's text.

    Raises:
        ValueError: if the content has no non-blank text
    """
    pieces = chunk_text(content, max_chars=max_chars, overlap=overlap)
    if not pieces:
        raise ValueError("Document content cannot be empty")

    document_id = str(uuid.uuid4())
    embeddings = embedder.embed_batch(pieces)

    chunks = []
    search_from = 0
    for index, (text, embedding) in enumerate(zip(pieces, embeddings)):
        start_char = content.find(text, search_from)
        if start_char < 0:
            start_char = search_from
        end_char = start_char + len(text)
        search_from = start_char + 1
        chunks.append(ChunkRecord(
            id=str(uuid.uuid4()),
            document_id=document_id,
            chunk_index=index,
            text=text,
            embedding=embedding,
            metadata={"startChar": start_char, "endChar": end_char},
        ))

    return DocumentRecord(
        id=document_id,
        title=title,
        content=content,
        created_at=datetime.now(),
        chunks=chunks,
        metadata=dict(metadata or {}),
    )
