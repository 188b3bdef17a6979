"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Strategy selection tables and expertise inference.
"""

from typing import Any, Dict, List, Optional

from .types import ContextAnalysis, PromptStrategy, QuestionAnalysis

# (question type -> user level -> template technique)
TEMPLATE_STRATEGIES: Dict[str, Dict[str, str]] = {
    "factual": {
        "beginner": "one_shot",
        "intermediate": "multi_shot",
        "expert": "zero_shot",
    },
    "analytical": {
        "beginner": "chain_of_thought",
        "intermediate": "multi_shot",
        "expert": "chain_of_thought",
    },
    "comparative": {
        "beginner": "multi_shot",
        "intermediate": "multi_shot",
        "expert": "few_shot_reasoning",
    },
}

DEFAULT_TEMPLATE_STRATEGY = "multi_shot"

PROMPT_STRATEGIES: Dict[str, PromptStrategy] = {
    "simple_factual": PromptStrategy(
        key="simple_factual",
        name="Simple Factual",
        system_prompt="Provide clear, accurate answers based on context.",
        use_examples=False,
        require_citations=True,
        context_processing="raw",
    ),
    "analytical_detailed": PromptStrategy(
        key="analytical_detailed",
        name="Analytical Detailed",
        system_prompt="Analyze information thoroughly with detailed explanations.",
        use_examples=True,
        require_citations=True,
        context_processing="highlighted",
    ),
    "comparative_structured": PromptStrategy(
        key="comparative_structured",
        name="Comparative Structured",
        system_prompt="Compare and contrast systematically with clear structure.",
        use_examples=True,
        require_citations=True,
        context_processing="structured",
    ),
    "expert_technical": PromptStrategy(
        key="expert_technical",
        name="Expert Technical",
        system_prompt="Provide precise, technical responses with domain expertise.",
        use_examples=False,
        require_citations=True,
        context_processing="raw",
    ),
}

FALLBACK_STRATEGY = PromptStrategy(
    key="fallback",
    name="fallback",
    system_prompt="Answer based on the provided context.",
    use_examples=False,
    require_citations=False,
    context_processing="raw",
)

DEFAULT_EXPERTISE = "intermediate"
COMPLEX_QUESTION_CHARS = 100
EXPERT_RATIO = 0.6
BEGINNER_RATIO = 0.2


def select_strategy(question_type: str, user_level: str) -> str:
    """Template technique for a question type and user level; multi_shot when unlisted."""
    return TEMPLATE_STRATEGIES.get(question_type, {}).get(user_level, DEFAULT_TEMPLATE_STRATEGY)


def select_prompt_strategy(question_analysis: QuestionAnalysis,
                           context_analysis: ContextAnalysis,
                           expertise_level: str) -> PromptStrategy:
    """
    Pick the adaptive strategy. Rules are checked in priority order:

    1. expert user and high complexity -> expert_technical
    2. comparative question -> comparative_structured
    3. analytical question or high complexity -> analytical_detailed
    4. otherwise -> simple_factual

    context_analysis is accepted for interface symmetry; no rule reads it yet.
    """
    if expertise_level == "expert" and question_analysis.complexity == "high":
        return PROMPT_STRATEGIES["expert_technical"]

    if question_analysis.type == "comparative":
        return PROMPT_STRATEGIES["comparative_structured"]

    if question_analysis.type == "analytical" or question_analysis.complexity == "high":
        return PROMPT_STRATEGIES["analytical_detailed"]

    return PROMPT_STRATEGIES["simple_factual"]


def profile_value(obj: Any, name: str, alias: Optional[str] = None):
    """Read a field from a dict (snake or camel key) or an object attribute."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        value = obj.get(name)
        if value is None and alias:
            value = obj.get(alias)
        return value
    return getattr(obj, name, None)


def determine_expertise_level(user_profile: Any = None, previous_interactions: Optional[List[Any]] = None) -> str:
    """
    Explicit profile level wins; otherwise infer from the share of long
    (more than 100 character) questions in the interaction history.
    """
    explicit = profile_value(user_profile, "expertise_level", "expertiseLevel")
    if explicit:
        return explicit

    interactions = previous_interactions or []
    if not interactions:
        return DEFAULT_EXPERTISE

    complex_questions = 0
    for interaction in interactions:
        question = profile_value(interaction, "question")
        if question and len(question) > COMPLEX_QUESTION_CHARS:
            complex_questions += 1

    ratio = complex_questions / len(interactions)
    if ratio > EXPERT_RATIO:
        return "expert"
    if ratio < BEGINNER_RATIO:
        return "beginner"
    return DEFAULT_EXPERTISE
