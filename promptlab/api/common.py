"""
Helpers shared by the API routers.
"""

import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from ..core.config import get_embedding_provider, get_random_source
from ..prompting.builder import PromptBuilder
from ..prompting.examples import ExampleBank
from ..prompting.templates import PromptingService
from ..vector.types import MethodComparison, ScoredMatch

_prompt_builder = None
_prompting_service = None
_embedder = None


def get_prompt_builder() -> PromptBuilder:
    """Lazy initialization of the shared prompt builder."""
    global _prompt_builder
    if _prompt_builder is None:
        _prompt_builder = PromptBuilder(example_bank=ExampleBank(rng=get_random_source()))
    return _prompt_builder


def get_prompting_service() -> PromptingService:
    """Lazy initialization of the shared template prompting service."""
    global _prompting_service
    if _prompting_service is None:
        _prompting_service = PromptingService(example_bank=ExampleBank(rng=get_random_source()))
    return _prompting_service


def require_question_and_context(question: Optional[str], context: Optional[str]) -> None:
    if not question or not context:
        raise HTTPException(status_code=400, detail="Question and context are required")


def timestamp() -> str:
    return datetime.now().isoformat()


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """JSON cannot carry inf/nan; failed items are reported with a null score."""
    if value is None or not math.isfinite(value):
        return None
    return value


def match_to_json(match: ScoredMatch) -> Dict[str, Any]:
    data = match.to_dict()
    data["similarity"] = finite_or_none(match.score)
    return data


def matches_to_json(matches: List[ScoredMatch]) -> List[Dict[str, Any]]:
    return [match_to_json(m) for m in matches]


def comparison_to_json(comparison: Dict[str, MethodComparison]) -> Dict[str, Any]:
    result = {}
    for method, entry in comparison.items():
        data = entry.to_dict()
        data["results"] = matches_to_json(entry.results)
        data["topScore"] = finite_or_none(entry.top_score)
        data["averageScore"] = finite_or_none(entry.average_score)
        result[method] = data
    return result


def truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def get_embedder():
    """Lazy initialization of the configured embedding provider."""
    global _embedder
    if _embedder is None:
        _embedder = get_embedding_provider()
    return _embedder
