"""
Template prompting endpoints: zero-shot, one-shot, multi-shot, chain-of-thought
and the adaptive template picker.
"""

from fastapi import APIRouter

from ..prompting.templates import strategy_explanation
from ..util.logging import logger
from .common import get_prompting_service, require_question_and_context, timestamp, truncate
from .schemas import AdaptiveTemplateRequest, TemplatePromptRequest

router = APIRouter()


def _prompt_response(prompt: str, request: TemplatePromptRequest, metadata: dict) -> dict:
    metadata.update({
        "questionLength": len(request.question),
        "contextLength": len(request.context),
        "promptLength": len(prompt),
    })
    return {
        "success": True,
        "prompt": prompt,
        "metadata": metadata,
        "timestamp": timestamp(),
    }


@router.post("/zero-shot")
def zero_shot_prompt(request: TemplatePromptRequest):
    require_question_and_context(request.question, request.context)
    prompt = get_prompting_service().zero_shot(request.question, request.context)
    return _prompt_response(prompt, request, {"type": "zero-shot", "numExamples": 0})


@router.post("/one-shot")
def one_shot_prompt(request: TemplatePromptRequest):
    require_question_and_context(request.question, request.context)
    prompt = get_prompting_service().one_shot(request.question, request.context, request.domain)
    return _prompt_response(prompt, request, {"type": "one-shot", "domain": request.domain, "numExamples": 1})


@router.post("/multi-shot")
def multi_shot_prompt(request: TemplatePromptRequest):
    require_question_and_context(request.question, request.context)
    prompt = get_prompting_service().multi_shot(
        request.question, request.context, request.domain, request.numExamples
    )
    return _prompt_response(prompt, request, {
        "type": "multi-shot",
        "domain": request.domain,
        "numExamples": request.numExamples,
    })


@router.post("/chain-of-thought")
def chain_of_thought_prompt(request: TemplatePromptRequest):
    require_question_and_context(request.question, request.context)
    prompt = get_prompting_service().chain_of_thought(
        request.question, request.context, request.includeExamples
    )
    return _prompt_response(prompt, request, {
        "type": "chain-of-thought",
        "includeExamples": request.includeExamples,
    })


@router.post("/compare")
def compare_techniques(request: TemplatePromptRequest):
    """Every technique for the same question, with size stats and trade-offs."""
    require_question_and_context(request.question, request.context)
    result = get_prompting_service().compare_techniques(request.question, request.context, request.domain)
    return {
        "question": request.question,
        "context": truncate(request.context, 100),
        "domain": request.domain,
        **result,
        "timestamp": timestamp(),
    }


@router.post("/demonstrate")
def demonstrate_evolution(request: TemplatePromptRequest):
    require_question_and_context(request.question, request.context)
    result = get_prompting_service().demonstrate_evolution(request.question, request.context, request.domain)
    return {
        "question": request.question,
        "domain": request.domain,
        **result,
        "timestamp": timestamp(),
    }


@router.post("/adaptive")
def adaptive_prompt(request: AdaptiveTemplateRequest):
    require_question_and_context(request.question, request.context)
    adaptive = get_prompting_service().adaptive(
        request.question, request.context, request.userLevel, request.questionType
    )

    logger.info(f"Generated adaptive prompt using {adaptive.strategy} strategy for {request.userLevel} user")

    return {
        "success": True,
        "prompt": adaptive.prompt,
        "metadata": {
            "strategy": adaptive.strategy,
            "userLevel": request.userLevel,
            "questionType": request.questionType,
            "questionLength": len(request.question),
            "contextLength": len(request.context),
            "promptLength": len(adaptive.prompt),
        },
        "explanation": {
            "why": f"Selected {adaptive.strategy} because user is {request.userLevel} level "
                   f"asking a {request.questionType} question",
            "strategy_details": strategy_explanation(adaptive.strategy),
        },
        "timestamp": timestamp(),
    }
