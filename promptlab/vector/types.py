"""
Similarity engine scope only. Do not implement beyond this file's responsibilities.
Value types shared by vector math, ranking and the chunk store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence


class SimilarityMethod(str, Enum):
    """Recognised similarity methods. All rank higher-is-better."""

    DOT_PRODUCT = "dot_product"
    COSINE = "cosine"
    EUCLIDEAN = "euclidean"


@dataclass(frozen=True)
class VectorItem:
    """A vector paired with opaque caller-supplied data."""

    vector: Sequence[float]
    """The embedding to compare against the query"""

    payload: Any = None
    """Associated data returned untouched with the match (chunk id, text, ...)"""


@dataclass
class ScoredMatch:
    """Represents one ranked item from a similarity query."""

    score: float
    """Similarity score; -inf when the item could not be scored"""

    payload: Any
    """Payload of the matched item"""

    method: str
    """Method used to compute the score"""

    index: int = 0
    """Position of the item in the input list"""

    error: Optional[str] = None
    """Error message when scoring this item failed"""

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "similarity": self.score,
            "metadata": self.payload,
            "method": self.method,
            "index": self.index,
        }
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass
class MethodComparison:
    """Ranking results of one method within a side-by-side comparison."""

    results: List[ScoredMatch]
    top_score: Optional[float]
    average_score: Optional[float]
    execution_time_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "topScore": self.top_score,
            "averageScore": self.average_score,
            "executionTime": self.execution_time_ms,
        }


@dataclass
class ChunkRecord:
    """A contiguous slice of a document with its embedding."""

    id: str
    document_id: str
    chunk_index: int
    text: str
    embedding: List[float]
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DocumentRecord:
    """A stored document and the chunks derived from it."""

    id: str
    title: str
    content: str
    created_at: datetime
    chunks: List[ChunkRecord] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)
