"""
Structured (JSON) output: schema descriptions, prompt wrapping and validation
of model responses against a small set of named schemas.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..util.logging import logger
from .generator import GenerationResult, OllamaGenerator

DEFAULT_SCHEMA_TYPE = "qa_response"

# (schema type -> ordered (field, JSON type, description))
SCHEMA_FIELDS: Dict[str, List[tuple]] = {
    "qa_response": [
        ("answer", "string", "the main answer to the question"),
        ("confidence", "number", "confidence score from 0 to 1"),
        ("sources", "array", "relevant source references"),
        ("reasoning", "string", "brief explanation of the reasoning"),
        ("category", "string", "question category (factual, analytical, comparative)"),
        ("keywords", "array", "key terms from the answer"),
    ],
    "document_analysis": [
        ("summary", "string", "brief document summary"),
        ("main_topics", "array", "key topics discussed"),
        ("sentiment", "string", "overall sentiment (positive, negative, neutral)"),
        ("complexity", "string", "complexity level (low, medium, high)"),
        ("word_count", "number", "estimated word count"),
        ("key_entities", "array", "important entities mentioned"),
        ("actionable_items", "array", "any action items found"),
    ],
    "similarity_analysis": [
        ("similarity_score", "number", "similarity score from 0 to 1"),
        ("method_used", "string", "similarity method (cosine, dot_product, euclidean)"),
        ("matching_concepts", "array", "concepts that match"),
        ("differences", "array", "key differences found"),
        ("recommendation", "string", "recommendation based on similarity"),
    ],
    "evaluation_result": [
        ("accuracy", "number", "accuracy score from 0 to 10"),
        ("completeness", "number", "completeness score from 0 to 10"),
        ("relevance", "number", "relevance score from 0 to 10"),
        ("overall_score", "number", "overall score from 0 to 10"),
        ("strengths", "array", "identified strengths"),
        ("weaknesses", "array", "identified weaknesses"),
        ("suggestions", "array", "improvement suggestions"),
    ],
    "prompt_analysis": [
        ("prompt_type", "string", "type of prompt (zero-shot, one-shot, multi-shot, chain-of-thought)"),
        ("effectiveness", "number", "effectiveness score from 0 to 10"),
        ("clarity", "number", "clarity score from 0 to 10"),
        ("completeness", "number", "completeness score from 0 to 10"),
        ("improvements", "array", "suggested improvements"),
        ("optimal_for", "array", "scenarios this prompt works best for"),
    ],
}

# Used for any schema type not listed above
FALLBACK_FIELDS = [
    ("result", "string", "the main result"),
    ("status", "string", "success or error status"),
    ("metadata", "object", "additional information"),
]

SCHEMA_DESCRIPTIONS = {
    "qa_response": "Structured Q&A response with confidence and sources",
    "document_analysis": "Document analysis with summary and key insights",
    "similarity_analysis": "Similarity analysis between texts or concepts",
    "evaluation_result": "Evaluation scores and feedback",
    "prompt_analysis": "Analysis of prompt effectiveness and quality",
}

SCHEMA_USAGE = {
    "qa_response": "Use for question-answering with confidence scores",
    "document_analysis": "Use for analyzing document content and structure",
    "similarity_analysis": "Use for comparing texts or concepts",
    "evaluation_result": "Use for evaluating AI responses and quality",
    "prompt_analysis": "Use for analyzing prompt effectiveness",
}

STRUCTURED_REQUIREMENTS = (
    "Requirements:\n"
    "- Return only valid JSON\n"
    "- Include all required fields\n"
    "- Use correct data types\n"
    "- No additional text or explanation outside the JSON"
)


def schema_fields(schema_type: str) -> List[tuple]:
    return SCHEMA_FIELDS.get(schema_type, FALLBACK_FIELDS)


def schema_description(schema_type: str) -> str:
    """
    JSON skeleton shown to the model, one line per field with its type.

    Unknown schema types get the generic result/status/metadata skeleton.
    """
    lines = []
    for name, json_type, description in schema_fields(schema_type):
        if json_type == "array":
            lines.append(f'  "{name}": ["array of strings - {description}"]')
        else:
            lines.append(f'  "{name}": "{json_type} - {description}"')
    return "{\n" + ",\n".join(lines) + "\n}"


def create_structured_prompt(prompt: str, schema_type: str) -> str:
    return (
        f"{prompt}\n\n"
        "IMPORTANT: Respond ONLY with valid JSON that matches this exact schema:\n\n"
        f"{schema_description(schema_type)}\n\n"
        f"{STRUCTURED_REQUIREMENTS}\n\n"
        "JSON Response:"
    )


def _matches_type(value: Any, json_type: str) -> bool:
    if json_type == "string":
        return isinstance(value, str)
    if json_type == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if json_type == "array":
        return isinstance(value, list)
    return isinstance(value, dict)


def validate_structure(response: Any, schema_type: str) -> bool:
    """
    Check that a parsed response is an object carrying every field of the
    schema with the right JSON type. Extra fields are allowed.

    Unknown schema types only require a JSON object.
    """
    if not isinstance(response, dict):
        return False

    if schema_type not in SCHEMA_FIELDS:
        return True

    return all(
        name in response and _matches_type(response[name], json_type)
        for name, json_type, _ in SCHEMA_FIELDS[schema_type]
    )


def available_schemas() -> List[Dict[str, Any]]:
    return [
        {
            "type": schema_type,
            "description": SCHEMA_DESCRIPTIONS[schema_type],
            "fields": [name for name, _, _ in fields],
        }
        for schema_type, fields in SCHEMA_FIELDS.items()
    ]


def estimate_tokens(text: str) -> int:
    # ~4 characters per token
    return math.ceil(len(text) / 4)


@dataclass
class StructuredResult:
    """A parsed and validated structured response, or the reason it failed."""
    schema_type: str
    generation: GenerationResult
    data: Optional[Any] = None
    tokens: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def model_failed(self) -> bool:
        """True when the model call itself failed, not the output checks."""
        return self.generation.error is not None


def generate_structured(prompt: str, schema_type: str = DEFAULT_SCHEMA_TYPE,
                        generator: Optional[OllamaGenerator] = None) -> StructuredResult:
    """
    Ask the model for JSON matching ``schema_type`` and parse it.

    Any failure, from the model call to schema validation, is captured in
    ``StructuredResult.error`` rather than raised.
    """
    generator = generator or OllamaGenerator()
    generation = generator.generate(create_structured_prompt(prompt, schema_type), response_format="json")

    if generation.error:
        logger.log_structured_response(schema_type, "error", 0, generation.error)
        return StructuredResult(schema_type=schema_type, generation=generation, error=generation.error)

    tokens = estimate_tokens(generation.content)
    try:
        data = json.loads(generation.content)
    except json.JSONDecodeError as e:
        error = f"Response is not valid JSON: {e.msg}"
        logger.log_structured_response(schema_type, "invalid", tokens, error)
        return StructuredResult(schema_type=schema_type, generation=generation, tokens=tokens, error=error)

    if not validate_structure(data, schema_type):
        error = "Response does not match required schema"
        logger.log_structured_response(schema_type, "invalid", tokens, error)
        return StructuredResult(schema_type=schema_type, generation=generation, data=data, tokens=tokens, error=error)

    logger.log_structured_response(schema_type, "success", tokens)
    return StructuredResult(schema_type=schema_type, generation=generation, data=data, tokens=tokens)
