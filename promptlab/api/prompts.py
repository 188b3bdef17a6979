"""
Dynamic prompt endpoints: adaptive generation, variations across expertise
levels, question analysis and response evaluation.
"""

from fastapi import APIRouter, HTTPException

from ..prompting.effectiveness import analyze_prompt_effectiveness
from ..prompting.types import EXPERTISE_LEVELS
from .common import get_prompt_builder, require_question_and_context, timestamp, truncate
from .schemas import AnalyzeQuestionRequest, DynamicPromptRequest, EvaluateRequest

router = APIRouter()

DEMO_PROMPT_PREVIEW = 500
EXPERIENCED_QUESTION = "complex question with detailed analysis requirements that spans multiple factors and asks for a careful comparison"

ADAPTATION_SCENARIOS = [
    ("Beginner User", {"userProfile": {"expertiseLevel": "beginner"}}),
    ("Expert User", {"userProfile": {"expertiseLevel": "expert"}}),
    ("Technical Context", {"documentMetadata": {"domain": "technical"}}),
    ("Academic Context", {"documentMetadata": {"domain": "academic"}}),
    ("Experienced User", {"previousInteractions": [{"question": EXPERIENCED_QUESTION}] * 10}),
]


@router.post("/generate")
def generate_dynamic_prompt(request: DynamicPromptRequest):
    """Analyze the question, context and user, then build an adaptive prompt."""
    require_question_and_context(request.question, request.context)

    result = get_prompt_builder().generate(
        request.question,
        request.context,
        user_profile=request.profile_dict(),
        document_metadata=request.documentMetadata or {},
        previous_interactions=request.previousInteractions or [],
    )

    return {
        "success": True,
        "prompt": result.prompt,
        "metadata": result.metadata,
        "timestamp": timestamp(),
    }


@router.post("/test-variations")
def test_prompt_variations(request: DynamicPromptRequest):
    """The same question built once per expertise level."""
    require_question_and_context(request.question, request.context)

    builder = get_prompt_builder()
    variations = {}
    for level in EXPERTISE_LEVELS:
        result = builder.generate(request.question, request.context, user_profile={"expertiseLevel": level})
        variations[level] = {
            "prompt": result.prompt,
            "strategy": result.strategy,
            "adaptations": result.adaptations,
        }

    return {
        "question": request.question,
        "contextLength": len(request.context),
        "variations": variations,
        "timestamp": timestamp(),
    }


@router.post("/analyze-question")
def analyze_question(request: AnalyzeQuestionRequest):
    if not request.question:
        raise HTTPException(status_code=400, detail="Question is required")

    analysis = get_prompt_builder().classifier.classify(request.question)
    return {
        "question": request.question,
        "analysis": analysis.to_dict(),
        "timestamp": timestamp(),
    }


@router.post("/demonstrate")
def demonstrate_adaptation(request: DynamicPromptRequest):
    """Build the prompt under several user and context scenarios."""
    require_question_and_context(request.question, request.context)

    builder = get_prompt_builder()
    demonstrations = {}
    for name, scenario in ADAPTATION_SCENARIOS:
        result = builder.generate(
            request.question,
            request.context,
            user_profile=scenario.get("userProfile", {}),
            document_metadata=scenario.get("documentMetadata", {}),
            previous_interactions=scenario.get("previousInteractions", []),
        )
        demonstrations[name] = {
            "prompt": truncate(result.prompt, DEMO_PROMPT_PREVIEW),
            "strategy": result.strategy,
            "expertiseLevel": result.metadata["expertiseLevel"],
            "adaptations": result.adaptations,
            "promptLength": result.metadata["promptLength"],
        }

    return {
        "question": request.question,
        "contextLength": len(request.context),
        "demonstrations": demonstrations,
        "explanation": {
            "dynamicPrompting": "Prompts adapt based on user expertise, question type, and context",
            "adaptations": "Each scenario shows different prompt strategies and structures",
            "benefits": "Improves relevance, comprehension, and answer quality",
        },
        "timestamp": timestamp(),
    }


@router.post("/evaluate")
def evaluate_responses(request: EvaluateRequest):
    """Score responses against a gold-standard answer."""
    report = analyze_prompt_effectiveness(request.responses, request.goldStandard)
    return {
        "responseCount": len(request.responses),
        "analysis": report.to_dict(),
        "timestamp": timestamp(),
    }
