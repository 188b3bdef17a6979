"""
Schema descriptions, structured prompts and JSON response validation.
"""

import json
import math
from unittest.mock import MagicMock

import pytest

from promptlab.llm.generator import GenerationResult
from promptlab.llm.structured import (
    SCHEMA_FIELDS,
    available_schemas,
    create_structured_prompt,
    estimate_tokens,
    generate_structured,
    schema_description,
    validate_structure,
)

VALID_RESPONSES = {
    "qa_response": {
        "answer": "AI is machine intelligence",
        "confidence": 0.9,
        "sources": ["source1", "source2"],
        "reasoning": "Based on the context",
        "category": "factual",
        "keywords": ["AI", "intelligence"],
    },
    "document_analysis": {
        "summary": "Document summary",
        "main_topics": ["topic1", "topic2"],
        "sentiment": "positive",
        "complexity": "medium",
        "word_count": 500,
        "key_entities": ["entity1"],
        "actionable_items": ["action1"],
    },
    "similarity_analysis": {
        "similarity_score": 0.8,
        "method_used": "cosine",
        "matching_concepts": ["concept1"],
        "differences": ["diff1"],
        "recommendation": "recommendation text",
    },
    "evaluation_result": {
        "accuracy": 8,
        "completeness": 7,
        "relevance": 9,
        "overall_score": 8,
        "strengths": ["strength1"],
        "weaknesses": ["weakness1"],
        "suggestions": ["suggestion1"],
    },
    "prompt_analysis": {
        "prompt_type": "multi-shot",
        "effectiveness": 8,
        "clarity": 9,
        "completeness": 7,
        "improvements": ["improvement1"],
        "optimal_for": ["scenario1"],
    },
}


class TestSchemaDescription:
    """JSON skeletons shown to the model."""

    @pytest.mark.parametrize("schema_type,fields", [
        ("qa_response", ["answer", "confidence", "sources", "reasoning", "category", "keywords"]),
        ("document_analysis", ["summary", "main_topics", "sentiment", "complexity", "word_count"]),
        ("similarity_analysis", ["similarity_score", "method_used", "matching_concepts", "differences"]),
        ("evaluation_result", ["accuracy", "completeness", "relevance", "overall_score"]),
    ])
    def test_lists_schema_fields(self, schema_type, fields):
        description = schema_description(schema_type)
        for field in fields:
            assert f'"{field}"' in description

    def test_unknown_type_gets_generic_skeleton(self):
        description = schema_description("unknown")
        assert '"result"' in description
        assert '"status"' in description
        assert '"metadata": "object - additional information"' in description

    def test_field_types_shown(self):
        description = schema_description("qa_response")
        assert '"confidence": "number - confidence score from 0 to 1"' in description
        assert '"sources": ["array of strings - relevant source references"]' in description


class TestStructuredPrompt:
    def test_wraps_prompt_with_schema(self):
        prompt = "What is artificial intelligence?"
        structured = create_structured_prompt(prompt, "qa_response")

        assert structured.startswith(prompt)
        assert "IMPORTANT: Respond ONLY with valid JSON" in structured
        assert '"answer"' in structured
        assert '"confidence"' in structured
        assert structured.endswith("JSON Response:")

    def test_includes_requirements(self):
        structured = create_structured_prompt("Analyze this document", "document_analysis")

        assert "Return only valid JSON" in structured
        assert "Include all required fields" in structured
        assert "Use correct data types" in structured
        assert "No additional text" in structured

    @pytest.mark.parametrize("schema_type", list(SCHEMA_FIELDS))
    def test_every_schema_type(self, schema_type):
        structured = create_structured_prompt("Test prompt", schema_type)
        assert "Test prompt" in structured
        assert "JSON" in structured
        assert len(structured) > len("Test prompt")


class TestValidateStructure:
    """Parsed responses checked field by field."""

    @pytest.mark.parametrize("schema_type", list(VALID_RESPONSES))
    def test_valid_responses(self, schema_type):
        assert validate_structure(VALID_RESPONSES[schema_type], schema_type) is True

    def test_wrong_types_rejected(self):
        response = {
            "answer": 123,
            "confidence": "high",
            "sources": "not an array",
            "reasoning": [],
            "category": 456,
            "keywords": "not an array",
        }
        assert validate_structure(response, "qa_response") is False

    def test_partially_wrong_types_rejected(self):
        response = dict(VALID_RESPONSES["qa_response"], confidence="high")
        assert validate_structure(response, "qa_response") is False

    def test_missing_fields_rejected(self):
        assert validate_structure({"answer": "AI is machine intelligence"}, "qa_response") is False

    def test_bool_is_not_a_number(self):
        response = dict(VALID_RESPONSES["evaluation_result"], accuracy=True)
        assert validate_structure(response, "evaluation_result") is False

    def test_extra_fields_allowed(self):
        response = dict(VALID_RESPONSES["similarity_analysis"], notes="extra")
        assert validate_structure(response, "similarity_analysis") is True

    def test_non_object_rejected(self):
        assert validate_structure(None, "qa_response") is False
        assert validate_structure(["answer"], "qa_response") is False

    def test_unknown_type_accepts_any_object(self):
        assert validate_structure({"anything": 1}, "custom") is True
        assert validate_structure("text", "custom") is False


class TestAvailableSchemas:
    def test_entries_have_type_description_fields(self):
        schemas = available_schemas()
        assert len(schemas) == 5
        for schema in schemas:
            assert set(schema) == {"type", "description", "fields"}
            assert isinstance(schema["fields"], list)

    def test_all_types_listed(self):
        types = [s["type"] for s in available_schemas()]
        assert types == ["qa_response", "document_analysis", "similarity_analysis",
                         "evaluation_result", "prompt_analysis"]


class TestEstimateTokens:
    def test_quarter_of_length_rounded_up(self):
        text = "This is a test text with multiple words"
        assert estimate_tokens(text) == math.ceil(len(text) / 4)

    def test_empty_text(self):
        assert estimate_tokens("") == 0

    def test_long_text(self):
        text = "word " * 1000
        assert estimate_tokens(text) == 1250


def _generator_returning(content="", error=None):
    generator = MagicMock()
    generator.generate.return_value = GenerationResult(content=content, model_used="test-model", error=error)
    return generator


class TestGenerateStructured:
    """JSON-mode generation with the model mocked out."""

    def test_valid_response(self):
        content = json.dumps(VALID_RESPONSES["qa_response"])
        generator = _generator_returning(content)

        result = generate_structured("What is AI?", "qa_response", generator=generator)

        assert result.ok
        assert result.data == VALID_RESPONSES["qa_response"]
        assert result.tokens == estimate_tokens(content)
        sent_prompt = generator.generate.call_args[0][0]
        assert sent_prompt.startswith("What is AI?")
        assert generator.generate.call_args.kwargs["response_format"] == "json"

    def test_invalid_json(self):
        result = generate_structured("q", "qa_response", generator=_generator_returning("not json"))

        assert not result.ok
        assert not result.model_failed
        assert result.error.startswith("Response is not valid JSON")
        assert result.data is None

    def test_schema_mismatch(self):
        result = generate_structured("q", "qa_response", generator=_generator_returning('{"answer": "x"}'))

        assert result.error == "Response does not match required schema"
        assert result.data == {"answer": "x"}
        assert not result.model_failed

    def test_model_error(self):
        generator = _generator_returning(error="Generation failed: refused")
        result = generate_structured("q", "qa_response", generator=generator)

        assert result.model_failed
        assert result.error == "Generation failed: refused"
        assert result.tokens == 0
