"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Fixed-template prompting techniques: zero-shot, one-shot, multi-shot,
chain-of-thought and few-shot with reasoning.
"""

import math
import re
from typing import Any, Dict, Optional

from ..util.logging import logger
from .examples import DEFAULT_DOMAIN, ExampleBank
from .strategies import select_strategy
from .types import AdaptivePrompt, Example

TECHNIQUE_ANALYSIS = {
    "zero-shot": {
        "pros": ["Concise", "Fast", "No example bias"],
        "cons": ["May lack guidance", "Inconsistent results"],
        "bestFor": "Simple factual questions, expert users",
    },
    "one-shot": {
        "pros": ["Good guidance", "Moderate length", "Clear format"],
        "cons": ["Single example bias", "May not cover edge cases"],
        "bestFor": "Standard questions, intermediate users",
    },
    "multi-shot": {
        "pros": ["Multiple examples", "Consistent format", "Better coverage"],
        "cons": ["Longer prompts", "More tokens", "Example selection bias"],
        "bestFor": "Complex questions, consistent formatting needed",
    },
    "chain-of-thought": {
        "pros": ["Step-by-step reasoning", "Transparent process", "Better for complex problems"],
        "cons": ["Longest prompts", "Most tokens", "May over-explain"],
        "bestFor": "Analytical questions, mathematical problems",
    },
}

TECHNIQUE_RECOMMENDATIONS = {
    "forBeginner": "Use multi-shot prompting for consistency",
    "forIntermediate": "Use one-shot or multi-shot based on complexity",
    "forExpert": "Use zero-shot for efficiency, chain-of-thought for reasoning",
    "forComplexQuestions": "Use chain-of-thought prompting",
    "forSimpleQuestions": "Use zero-shot or one-shot prompting",
}

STRATEGY_EXPLANATIONS = {
    "zero_shot": "No examples - efficient for experts and simple questions",
    "one_shot": "Single example - good balance for most users",
    "multi_shot": "Multiple examples - best for consistency and complex patterns",
    "chain_of_thought": "Step-by-step reasoning - ideal for analytical questions",
    "few_shot_reasoning": "Examples with explicit reasoning - suited to expert comparisons",
}

EVOLUTION_EXPLANATION = {
    "concept": "Multi-shot prompting uses multiple examples to guide LLM behavior",
    "benefits": [
        "Reduces example bias through variety",
        "Establishes clear patterns and formats",
        "Improves consistency across responses",
        "Provides robust guidance for complex tasks",
    ],
    "considerations": [
        "Token usage increases with more examples",
        "Example quality is crucial",
        "Diminishing returns after 3-5 examples",
        "Domain-specific examples work best",
    ],
}

PROGRESSIVE_IMPROVEMENTS = [
    "Zero-shot: Quick but potentially inconsistent",
    "One-shot: Adds format guidance but may have example bias",
    "Multi-shot (2): Reduces bias, shows pattern variation",
    "Multi-shot (3): Optimal balance of guidance and efficiency",
]

_WHITESPACE_RE = re.compile(r"\s+")


def strategy_explanation(strategy: str) -> str:
    return STRATEGY_EXPLANATIONS.get(strategy, "Strategy optimized for the given context")


def _format_example(index: int, example: Example, with_reasoning: bool = False) -> str:
    lines = [
        f"Example {index}:",
        f"Context: {example.context}",
        f"Question: {example.question}",
    ]
    if with_reasoning:
        lines.append(f"Reasoning: {example.reasoning}")
    lines.append(f"Answer: {example.answer}")
    return "\n".join(lines) + "\n\n"


def _word_count(text: str) -> int:
    return len(_WHITESPACE_RE.split(text))


class PromptingService:
    """
    Generates fixed-template prompts.

    Example selection for one-shot and multi-shot draws from the bank's random
    source; inject a seeded ExampleBank for reproducible output.
    """

    def __init__(self, example_bank: Optional[ExampleBank] = None):
        self.example_bank = example_bank or ExampleBank()

    def zero_shot(self, question: str, context: str) -> str:
        prompt = (
            "Answer the following question based on the provided context:\n\n"
            f"Context: {context}\n\n"
            f"Question: {question}\n\n"
            "Answer:"
        )
        logger.log_template_prompt("zero_shot", {"prompt_length": len(prompt)})
        return prompt

    def one_shot(self, question: str, context: str, domain: str = DEFAULT_DOMAIN) -> str:
        example = self.example_bank.get_example(domain)
        prompt = (
            "Answer the following question based on the provided context. Here's an example:\n\n"
            "Example:\n"
            f"Context: {example.context}\n"
            f"Question: {example.question}\n"
            f"Answer: {example.answer}\n\n"
            "Now answer this question:\n"
            f"Context: {context}\n"
            f"Question: {question}\n"
            "Answer:"
        )
        logger.log_template_prompt("one_shot", {"domain": domain, "prompt_length": len(prompt)})
        return prompt

    def multi_shot(self, question: str, context: str, domain: str = DEFAULT_DOMAIN, num_examples: int = 3) -> str:
        examples = self.example_bank.get_multiple_examples(domain, num_examples)

        prompt = "Answer the following question based on the provided context. Here are some examples:\n\n"
        for index, example in enumerate(examples, start=1):
            prompt += _format_example(index, example)

        prompt += (
            "Now answer this question:\n"
            f"Context: {context}\n"
            f"Question: {question}\n"
            "Answer:"
        )
        logger.log_template_prompt("multi_shot", {
            "domain": domain,
            "num_examples": len(examples),
            "prompt_length": len(prompt),
        })
        return prompt

    def chain_of_thought(self, question: str, context: str, include_examples: bool = True) -> str:
        prompt = ""

        if include_examples:
            prompt += "Answer step by step with clear reasoning. Here are examples:\n\n"
            for index, example in enumerate(self.example_bank.get_chain_of_thought_examples(), start=1):
                prompt += _format_example(index, example)

        prompt += (
            "Now solve this step by step:\n"
            f"Context: {context}\n"
            f"Question: {question}\n\n"
            "Let's think step by step:\n"
            "1. First, I'll identify the key information\n"
            "2. Then, I'll analyze what the question is asking\n"
            "3. Finally, I'll provide a clear answer\n\n"
            "Answer:"
        )
        logger.log_template_prompt("chain_of_thought", {
            "include_examples": include_examples,
            "prompt_length": len(prompt),
        })
        return prompt

    def few_shot_with_reasoning(self, question: str, context: str, domain: str = DEFAULT_DOMAIN) -> str:
        prompt = "Answer the question with clear reasoning. Examples:\n\n"
        for index, example in enumerate(self.example_bank.get_reasoning_examples(domain), start=1):
            prompt += _format_example(index, example, with_reasoning=True)

        prompt += (
            "Now answer with reasoning:\n"
            f"Context: {context}\n"
            f"Question: {question}\n"
            "Reasoning: [Explain your thought process]\n"
            "Answer: [Your final answer]"
        )
        logger.log_template_prompt("few_shot_reasoning", {"domain": domain, "prompt_length": len(prompt)})
        return prompt

    def adaptive(self, question: str, context: str, user_level: str = "intermediate",
                 question_type: str = "factual") -> AdaptivePrompt:
        """Pick a technique from the (question type, user level) table and render it."""
        strategy = select_strategy(question_type, user_level)

        if strategy == "zero_shot":
            prompt = self.zero_shot(question, context)
        elif strategy == "one_shot":
            prompt = self.one_shot(question, context)
        elif strategy == "chain_of_thought":
            prompt = self.chain_of_thought(question, context)
        elif strategy == "few_shot_reasoning":
            prompt = self.few_shot_with_reasoning(question, context)
        else:
            prompt = self.multi_shot(question, context)

        return AdaptivePrompt(strategy=strategy, prompt=prompt)

    def compare_techniques(self, question: str, context: str, domain: str = DEFAULT_DOMAIN) -> Dict[str, Any]:
        """The four main techniques side by side with size stats and trade-offs."""
        techniques = {
            "zero-shot": (self.zero_shot(question, context), 0),
            "one-shot": (self.one_shot(question, context, domain), 1),
            "multi-shot": (self.multi_shot(question, context, domain, 3), 3),
            "chain-of-thought": (
                self.chain_of_thought(question, context, True),
                len(self.example_bank.get_chain_of_thought_examples()),
            ),
        }

        comparison = {
            name: {
                "prompt": prompt,
                "length": len(prompt),
                "wordCount": _word_count(prompt),
                "exampleCount": example_count,
            }
            for name, (prompt, example_count) in techniques.items()
        }

        return {
            "comparison": comparison,
            "analysis": TECHNIQUE_ANALYSIS,
            "recommendations": TECHNIQUE_RECOMMENDATIONS,
        }

    def demonstrate_evolution(self, question: str, context: str, domain: str = DEFAULT_DOMAIN) -> Dict[str, Any]:
        """Zero-shot through three-example prompts with rough token estimates."""
        evolution = {
            "step1_zero_shot": {
                "prompt": self.zero_shot(question, context),
                "description": "No examples provided - relies on model's inherent knowledge",
            },
            "step2_one_shot": {
                "prompt": self.one_shot(question, context, domain),
                "description": "Single example to demonstrate desired format and approach",
            },
            "step3_multi_shot_2": {
                "prompt": self.multi_shot(question, context, domain, 2),
                "description": "Two examples showing pattern and reducing single-example bias",
            },
            "step4_multi_shot_3": {
                "prompt": self.multi_shot(question, context, domain, 3),
                "description": "Three examples providing robust pattern recognition",
            },
        }

        token_analysis = {}
        for step, entry in evolution.items():
            prompt = entry["prompt"]
            token_analysis[step] = {
                "characters": len(prompt),
                "words": _word_count(prompt),
                # ~4 characters per token
                "estimatedTokens": math.ceil(len(prompt) / 4),
                "lines": len(prompt.split("\n")),
            }

        return {
            "evolution": evolution,
            "progressiveImprovements": list(PROGRESSIVE_IMPROVEMENTS),
            "tokenAnalysis": token_analysis,
            "explanation": EVOLUTION_EXPLANATION,
        }

