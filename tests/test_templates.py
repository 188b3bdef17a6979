"""
Fixed-template prompting techniques and the example bank.
"""

import math
import random

import pytest

from promptlab.prompting.examples import ExampleBank
from promptlab.prompting.templates import PromptingService, strategy_explanation
from promptlab.prompting.types import Example

QUESTION = "What is the capital of France?"
CONTEXT = "Paris is the capital and largest city of France."


@pytest.fixture
def service():
    return PromptingService(example_bank=ExampleBank(rng=random.Random(7)))


class TestTechniques:
    """Prompt text for each technique."""

    def test_zero_shot_exact(self, service):
        assert service.zero_shot(QUESTION, CONTEXT) == (
            "Answer the following question based on the provided context:\n\n"
            f"Context: {CONTEXT}\n\n"
            f"Question: {QUESTION}\n\n"
            "Answer:"
        )

    def test_one_shot_contains_example(self, service):
        prompt = service.one_shot(QUESTION, CONTEXT)
        assert prompt.startswith("Answer the following question based on the provided context. Here's an example:")
        assert "\nExample:\n" in prompt
        assert prompt.endswith(f"Now answer this question:\nContext: {CONTEXT}\nQuestion: {QUESTION}\nAnswer:")

    def test_multi_shot_numbered_examples(self, service):
        prompt = service.multi_shot(QUESTION, CONTEXT, "general", 3)
        for i in (1, 2, 3):
            assert f"Example {i}:" in prompt
        assert "Example 4:" not in prompt

    def test_multi_shot_capped_at_available(self, service):
        prompt = service.multi_shot(QUESTION, CONTEXT, "technical", 10)
        assert "Example 2:" in prompt
        assert "Example 3:" not in prompt

    def test_unknown_domain_falls_back_to_general(self, service):
        prompt = service.multi_shot(QUESTION, CONTEXT, "astrology", 3)
        assert "Example 3:" in prompt

    def test_lengths_grow_with_examples(self, service):
        zero = service.zero_shot(QUESTION, CONTEXT)
        one = service.one_shot(QUESTION, CONTEXT)
        multi = service.multi_shot(QUESTION, CONTEXT, "general", 3)
        assert len(zero) < len(one) < len(multi)

    def test_chain_of_thought_with_examples(self, service):
        prompt = service.chain_of_thought(QUESTION, CONTEXT)
        assert prompt.startswith("Answer step by step with clear reasoning. Here are examples:")
        assert "percentage increase in revenue" in prompt
        assert "Let's think step by step:\n1. First, I'll identify the key information" in prompt
        assert prompt.endswith("Answer:")

    def test_chain_of_thought_without_examples(self, service):
        prompt = service.chain_of_thought(QUESTION, CONTEXT, include_examples=False)
        assert prompt.startswith("Now solve this step by step:")
        assert "Example 1:" not in prompt

    def test_few_shot_with_reasoning(self, service):
        prompt = service.few_shot_with_reasoning(QUESTION, CONTEXT)
        assert "Reasoning: I need to consider factors" in prompt
        assert prompt.endswith("Reasoning: [Explain your thought process]\nAnswer: [Your final answer]")

    def test_seeded_selection_is_reproducible(self):
        first = PromptingService(ExampleBank(rng=random.Random(42)))
        second = PromptingService(ExampleBank(rng=random.Random(42)))
        assert first.one_shot(QUESTION, CONTEXT) == second.one_shot(QUESTION, CONTEXT)
        assert first.multi_shot(QUESTION, CONTEXT) == second.multi_shot(QUESTION, CONTEXT)


class TestAdaptive:
    """Template technique chosen from question type and user level."""

    def test_expert_factual_is_zero_shot(self, service):
        adaptive = service.adaptive(QUESTION, CONTEXT, "expert", "factual")
        assert adaptive.strategy == "zero_shot"
        assert adaptive.prompt == service.zero_shot(QUESTION, CONTEXT)

    def test_beginner_factual_is_one_shot(self, service):
        adaptive = service.adaptive(QUESTION, CONTEXT, "beginner", "factual")
        assert adaptive.strategy == "one_shot"
        assert "Here's an example:" in adaptive.prompt

    def test_analytical_is_chain_of_thought(self, service):
        adaptive = service.adaptive(QUESTION, CONTEXT, "beginner", "analytical")
        assert adaptive.strategy == "chain_of_thought"
        assert "Let's think step by step" in adaptive.prompt

    def test_expert_comparative_uses_reasoning_examples(self, service):
        adaptive = service.adaptive(QUESTION, CONTEXT, "expert", "comparative")
        assert adaptive.strategy == "few_shot_reasoning"
        assert "Now answer with reasoning:" in adaptive.prompt

    def test_unlisted_defaults_to_multi_shot(self, service):
        adaptive = service.adaptive(QUESTION, CONTEXT, "expert", "creative")
        assert adaptive.strategy == "multi_shot"
        assert "Here are some examples:" in adaptive.prompt

    def test_strategy_explanation(self):
        assert strategy_explanation("zero_shot").startswith("No examples")
        assert strategy_explanation("mystery") == "Strategy optimized for the given context"


class TestComparisons:
    """Side-by-side views."""

    def test_compare_techniques(self, service):
        result = service.compare_techniques(QUESTION, CONTEXT)
        comparison = result["comparison"]

        assert list(comparison) == ["zero-shot", "one-shot", "multi-shot", "chain-of-thought"]
        assert comparison["zero-shot"]["exampleCount"] == 0
        assert comparison["multi-shot"]["exampleCount"] == 3
        assert comparison["chain-of-thought"]["exampleCount"] == 2
        assert comparison["zero-shot"]["length"] == len(comparison["zero-shot"]["prompt"])
        assert "bestFor" in result["analysis"]["multi-shot"]
        assert "forExpert" in result["recommendations"]

    def test_demonstrate_evolution(self, service):
        result = service.demonstrate_evolution(QUESTION, CONTEXT)
        steps = result["evolution"]

        assert list(steps) == ["step1_zero_shot", "step2_one_shot", "step3_multi_shot_2", "step4_multi_shot_3"]
        assert "Example 2:" in steps["step3_multi_shot_2"]["prompt"]
        assert "Example 3:" not in steps["step3_multi_shot_2"]["prompt"]
        tokens = result["tokenAnalysis"]["step1_zero_shot"]
        assert tokens["estimatedTokens"] == math.ceil(tokens["characters"] / 4)
        assert len(result["progressiveImprovements"]) == 4


class TestExampleBank:
    """Example lookup and sampling."""

    def test_domains(self):
        assert ExampleBank().domains() == ["general", "technical", "academic"]

    def test_get_example_unknown_domain(self):
        bank = ExampleBank(rng=random.Random(0))
        assert bank.get_example("unknown") in bank.examples["general"]

    def test_select_relevant_examples(self):
        bank = ExampleBank()
        assert len(bank.select_relevant_examples("factual", "expert")) == 1
        assert bank.select_relevant_examples("analytical", "expert") == []
        assert bank.select_relevant_examples("creative", "beginner") == []

    def test_add_example_is_per_bank(self):
        bank = ExampleBank()
        other = ExampleBank()
        bank.add_example("legal", Example("c", "q", "a"))

        assert "legal" in bank.domains()
        assert "legal" not in other.domains()

    def test_example_to_dict(self):
        assert Example("c", "q", "a").to_dict() == {"context": "c", "question": "q", "answer": "a"}
        assert Example("c", "q", "a", "r").to_dict()["reasoning"] == "r"
