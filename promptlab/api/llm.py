"""
Generation endpoints: adaptive answers and schema-checked JSON output from the
local model. Feature-flagged with LLM_ENABLED.
"""

from fastapi import APIRouter, HTTPException

from ..core.config import OLLAMA_MODEL, llm_enabled
from ..llm.generator import OllamaGenerator, check_ollama_health
from ..llm.structured import SCHEMA_USAGE, StructuredResult, available_schemas, generate_structured
from .common import get_prompt_builder, require_question_and_context, timestamp, truncate
from .schemas import (
    AnalyzeDocumentTextRequest,
    CompareTextsRequest,
    GenerateRequest,
    StructuredDemoRequest,
    StructuredEvaluateRequest,
    StructuredRequest,
)

router = APIRouter()

DEMO_SCHEMAS = ["qa_response", "document_analysis", "evaluation_result"]
DEMO_DOCUMENT = (
    "Artificial intelligence (AI) is intelligence demonstrated by machines, "
    "in contrast to natural intelligence displayed by humans."
)


def _require_llm() -> None:
    if not llm_enabled():
        raise HTTPException(status_code=503, detail="Generation disabled - set LLM_ENABLED=true to enable")


def _structured_or_raise(prompt: str, schema_type: str) -> StructuredResult:
    """
    Run a structured generation; an unreachable model is 503, output that is
    not valid JSON for the schema is 502.
    """
    result = generate_structured(prompt, schema_type, generator=OllamaGenerator())
    if result.model_failed:
        raise HTTPException(status_code=503, detail=result.error)
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    return result


@router.get("/health")
def llm_health():
    enabled = llm_enabled()
    return {
        "enabled": enabled,
        "model": OLLAMA_MODEL,
        "available": check_ollama_health(OLLAMA_MODEL) if enabled else False,
        "timestamp": timestamp(),
    }


@router.post("/generate")
def generate_answer(request: GenerateRequest):
    """
    Generate an answer for a question over the given context.

    Returns 503 when generation is disabled or the model call fails; the
    prompt that would have been sent is not returned in that case.
    """
    require_question_and_context(request.question, request.context)
    _require_llm()

    user_profile = request.userProfile.model_dump(exclude_none=True) if request.userProfile else {}
    prompt_result = get_prompt_builder().generate(request.question, request.context, user_profile=user_profile)

    generation = OllamaGenerator().generate(prompt_result.prompt, request.options)
    if generation.error:
        raise HTTPException(status_code=503, detail=generation.error)

    return {
        "success": True,
        "answer": generation.content,
        "prompt": prompt_result.prompt,
        "promptMetadata": prompt_result.metadata,
        "generation": generation.to_dict(),
        "timestamp": timestamp(),
    }


@router.get("/schemas")
def list_schemas():
    schemas = available_schemas()
    return {
        "success": True,
        "schemas": schemas,
        "total_schemas": len(schemas),
        "usage": SCHEMA_USAGE,
        "timestamp": timestamp(),
    }


@router.post("/structured")
def structured_response(request: StructuredRequest):
    """Answer a free-form prompt as JSON matching the requested schema."""
    if not request.prompt:
        raise HTTPException(status_code=400, detail="Prompt is required")
    _require_llm()

    result = _structured_or_raise(request.prompt, request.schema_type)
    return {
        "success": True,
        "prompt": truncate(request.prompt, 100),
        "schema_type": request.schema_type,
        "response": result.data,
        "metadata": {
            "tokens_used": result.tokens,
            "schema_validated": True,
            "model": result.generation.model_used,
            "response_time": timestamp(),
        },
    }


@router.post("/analyze-document")
def analyze_document(request: AnalyzeDocumentTextRequest):
    if not request.text:
        raise HTTPException(status_code=400, detail="Text is required")
    _require_llm()

    prompt = (
        "Analyze the following document and provide structured insights:\n\n"
        f"{request.text}\n\n"
        "Analyze this document comprehensively covering all aspects mentioned in the schema."
    )
    result = _structured_or_raise(prompt, "document_analysis")
    return {
        "success": True,
        "text_length": len(request.text),
        "analysis": result.data,
        "metadata": {
            "tokens_used": result.tokens,
            "analysis_type": "document_analysis",
            "response_time": timestamp(),
        },
    }


@router.post("/evaluate")
def evaluate_answer(request: StructuredEvaluateRequest):
    """Have the model grade an answer against the expected one."""
    if not request.question or not request.expected_answer or not request.actual_answer:
        raise HTTPException(status_code=400, detail="Question, expected_answer, and actual_answer are required")
    _require_llm()

    prompt = (
        "Evaluate the quality of this AI response:\n\n"
        f"Question: {request.question}\n\n"
        f"Expected Answer: {request.expected_answer}\n\n"
        f"Actual Answer: {request.actual_answer}\n\n"
        "Provide a comprehensive evaluation with scores and detailed feedback."
    )
    result = _structured_or_raise(prompt, "evaluation_result")
    return {
        "success": True,
        "question": truncate(request.question, 100),
        "evaluation": result.data,
        "metadata": {
            "tokens_used": result.tokens,
            "evaluation_type": "response_quality",
            "response_time": timestamp(),
        },
    }


@router.post("/compare-similarity")
def compare_similarity(request: CompareTextsRequest):
    if not request.text1 or not request.text2:
        raise HTTPException(status_code=400, detail="Both text1 and text2 are required")
    _require_llm()

    prompt = (
        f"Compare the similarity between these two texts using {request.method} analysis:\n\n"
        f"Text 1: {request.text1}\n\n"
        f"Text 2: {request.text2}\n\n"
        "Provide a detailed similarity analysis including scores, matching concepts, differences, and recommendations."
    )
    result = _structured_or_raise(prompt, "similarity_analysis")
    return {
        "success": True,
        "text1_length": len(request.text1),
        "text2_length": len(request.text2),
        "method": request.method,
        "analysis": result.data,
        "metadata": {
            "tokens_used": result.tokens,
            "analysis_type": "similarity_comparison",
            "response_time": timestamp(),
        },
    }


def _demo_prompt(schema_type: str, question: str) -> str:
    if schema_type == "document_analysis":
        return f'Analyze this text about AI: "{DEMO_DOCUMENT}"'
    if schema_type == "evaluation_result":
        return (
            f'Evaluate this answer: Question: "{question}" '
            'Answer: "AI is computer intelligence that mimics human thinking."'
        )
    return f"Answer this question: {question}"


@router.post("/demonstrate")
def demonstrate_structured_output(request: StructuredDemoRequest):
    """One structured call per demo schema; a failing schema is reported, not raised."""
    _require_llm()

    generator = OllamaGenerator()
    demonstrations = {}
    for schema_type in DEMO_SCHEMAS:
        prompt = _demo_prompt(schema_type, request.question)
        result = generate_structured(prompt, schema_type, generator=generator)
        if result.ok:
            demonstrations[schema_type] = {
                "prompt": truncate(prompt, 100),
                "response": result.data,
                "tokens": result.tokens,
            }
        else:
            demonstrations[schema_type] = {"error": result.error}

    return {
        "success": True,
        "question": request.question,
        "demonstrations": demonstrations,
        "explanation": {
            "concept": "Structured output ensures consistent JSON responses from LLMs",
            "benefits": [
                "Predictable response format",
                "Easy parsing and processing",
                "Validation and error handling",
                "Integration with APIs and databases",
            ],
        },
        "timestamp": timestamp(),
    }
