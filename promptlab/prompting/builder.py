"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Adaptive prompt construction from question, context and user analysis.

Assembly order is fixed because the parts are concatenated positionally:
system instructions, special-context note, examples, chain-of-thought
scaffold, context block, question block, output format, citation request.
"""

import math
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..util.logging import logger
from .classifier import QuestionClassifier
from .context_analyzer import ContextAnalyzer
from .examples import ExampleBank
from .strategies import (
    FALLBACK_STRATEGY,
    determine_expertise_level,
    profile_value,
    select_prompt_strategy,
)
from .types import BuiltPrompt, ContextAnalysis, PromptResult, PromptStrategy, QuestionAnalysis

BASE_INSTRUCTIONS = {
    "beginner": "You are a helpful AI assistant that explains concepts clearly and simply.",
    "intermediate": "You are an AI assistant that provides detailed, accurate information.",
    "expert": "You are an AI assistant that provides precise, technical responses.",
}

TYPE_INSTRUCTIONS = {
    "factual": "Focus on providing accurate, specific facts from the context.",
    "analytical": "Analyze the information thoroughly and explain your reasoning.",
    "comparative": "Compare and contrast different aspects systematically.",
    "procedural": "Provide clear, step-by-step instructions.",
    "creative": "Think creatively while staying grounded in the context.",
}

SPECIAL_INSTRUCTIONS = {
    "technical": "\nNote: This is technical content. Explain technical terms when needed.",
    "academic": "\nNote: This is academic content. Maintain scholarly tone and cite sources.",
}
GENERIC_SPECIAL_INSTRUCTION = "\nNote: Handle this content with special care for accuracy."

CHAIN_OF_THOUGHT_INSTRUCTIONS = {
    "analytical": "\nUse step-by-step reasoning:\n1. Identify key components\n2. Analyze each component\n3. Explain relationships\n4. Draw conclusions",
    "comparative": "\nFollow comparison framework:\n1. Identify items to compare\n2. List comparison criteria\n3. Evaluate against criteria\n4. Summarize differences",
    "procedural": "\nBreak down process:\n1. Identify starting point\n2. List steps in sequence\n3. Explain necessity of each step\n4. Describe expected outcome",
}
GENERIC_CHAIN_OF_THOUGHT = "\nThink step by step, explaining your reasoning."

QUESTION_FRAMES = {
    "beginner": {
        "factual": "Please explain in simple terms: {question}",
        "analytical": "Help me understand: {question}",
        "comparative": "What are the differences regarding: {question}",
    },
    "intermediate": {
        "factual": "Based on the context, {question}",
        "analytical": "Analyze and explain: {question}",
        "comparative": "Compare and evaluate: {question}",
    },
    "expert": {
        "factual": "{question}",
        "analytical": "Provide detailed analysis of: {question}",
        "comparative": "Conduct comprehensive comparison: {question}",
    },
}

FORMAT_INSTRUCTIONS = {
    "structured": "\nProvide structured answer with headings and bullet points.",
    "detailed": "\nProvide comprehensive, detailed answer with explanations.",
    "concise": "\nProvide concise, direct answer focusing on key points.",
    "stepwise": "\nBreak down answer into clear, numbered steps.",
}

TYPE_DEFAULT_FORMATS = {
    "factual": "concise",
    "analytical": "detailed",
    "comparative": "structured",
    "procedural": "stepwise",
}

LEVEL_FORMAT_SUFFIX = {
    "beginner": " Use simple language and explain technical terms.",
    "expert": " Use technical terminology and assume domain knowledge.",
}

CITATION_INSTRUCTION = "\nInclude confidence level (1-10) and cite specific parts of the context."

HIGHLIGHT_KEYWORDS = ["important", "key", "significant", "main", "primary", "essential"]
_HIGHLIGHT_PATTERNS = [re.compile(rf"(\b{keyword}\b)", re.IGNORECASE) for keyword in HIGHLIGHT_KEYWORDS]
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

SUMMARY_MIN_SENTENCE_CHARS = 20
SUMMARY_RATIO = 0.3
SUMMARY_MAX_SENTENCES = 5

CONTEXT_MARKER = "\n--- CONTEXT ---"
QUESTION_MARKER = "\n--- QUESTION ---"


def system_instructions(strategy: PromptStrategy, expertise_level: str, question_type: str) -> str:
    base = BASE_INSTRUCTIONS.get(expertise_level, BASE_INSTRUCTIONS["intermediate"])
    type_specific = TYPE_INSTRUCTIONS.get(question_type, "")
    strategy_prompt = strategy.system_prompt or "Answer based on the provided context."
    return f"{base} {type_specific}\n\n{strategy_prompt}"


def special_instructions(context_analysis: ContextAnalysis) -> str:
    return SPECIAL_INSTRUCTIONS.get(context_analysis.domain, GENERIC_SPECIAL_INSTRUCTION)


def chain_of_thought_instructions(question_type: str) -> str:
    return CHAIN_OF_THOUGHT_INSTRUCTIONS.get(question_type, GENERIC_CHAIN_OF_THOUGHT)


def summarize_context(context: str) -> str:
    """First ~30% (at most five) of the sentences longer than 20 characters."""
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(context) if len(s.strip()) > SUMMARY_MIN_SENTENCE_CHARS]
    keep = min(SUMMARY_MAX_SENTENCES, math.ceil(len(sentences) * SUMMARY_RATIO))
    return ". ".join(sentences[:keep]) + "."


def highlight_key_points(context: str) -> str:
    highlighted = context
    for pattern in _HIGHLIGHT_PATTERNS:
        highlighted = pattern.sub(r"**\1**", highlighted)
    return highlighted


def structure_context(context: str) -> str:
    paragraphs = [p for p in context.split("\n\n") if p.strip()]
    if len(paragraphs) <= 1:
        return context
    return "\n\n".join(f"**Section {i + 1}:**\n{para}" for i, para in enumerate(paragraphs))


def process_context(context: str, mode: str) -> str:
    if mode == "summarized":
        return summarize_context(context)
    if mode == "highlighted":
        return highlight_key_points(context)
    if mode == "structured":
        return structure_context(context)
    return context


def frame_question(question: str, question_analysis: QuestionAnalysis, expertise_level: str) -> str:
    frames = QUESTION_FRAMES.get(expertise_level, QUESTION_FRAMES["intermediate"])
    template = frames.get(question_analysis.type)
    if template is None:
        return question
    return template.format(question=question)


def output_instructions(question_type: str, expertise_level: str, preferred_format: Optional[str] = None) -> str:
    fmt = preferred_format or TYPE_DEFAULT_FORMATS.get(question_type, "detailed")
    instructions = FORMAT_INSTRUCTIONS.get(fmt, FORMAT_INSTRUCTIONS["detailed"])
    return instructions + LEVEL_FORMAT_SUFFIX.get(expertise_level, "")


def fallback_prompt(question: Any, context: Any) -> PromptResult:
    """Minimal templated prompt. Never raises."""
    question_text = "" if question is None else str(question)
    context_text = "" if context is None else str(context)

    prompt = (
        "Answer the following question based on the provided context:\n\n"
        f"Context: {context_text}\n\n"
        f"Question: {question_text}\n\n"
        "Provide a clear, accurate answer based on the context."
    )
    return PromptResult(
        prompt=prompt,
        metadata={
            "questionType": "unknown",
            "confidence": 0.5,
            "strategy": FALLBACK_STRATEGY.name,
            "expertiseLevel": "intermediate",
            "contextLength": len(context_text),
            "promptLength": len(prompt),
            "adaptations": ["fallback_used"],
            "timestamp": datetime.now().isoformat(),
        },
    )


class PromptBuilder:
    """
    Builds adaptive prompts.

    Holds only the example bank and the (stateless) analyzers, so one instance
    can serve concurrent callers.
    """

    def __init__(self, example_bank: Optional[ExampleBank] = None,
                 classifier: Optional[QuestionClassifier] = None,
                 analyzer: Optional[ContextAnalyzer] = None):
        self.example_bank = example_bank or ExampleBank()
        self.classifier = classifier or QuestionClassifier()
        self.analyzer = analyzer or ContextAnalyzer()

    def build(self, question: str, context: str, question_analysis: QuestionAnalysis,
              context_analysis: ContextAnalysis, expertise_level: str,
              strategy: PromptStrategy, user_profile: Any = None) -> BuiltPrompt:
        parts: List[str] = []
        adaptations: List[str] = []

        parts.append(system_instructions(strategy, expertise_level, question_analysis.type))

        if context_analysis.needs_special_handling:
            parts.append(special_instructions(context_analysis))
            adaptations.append("special_context_handling")

        if strategy.use_examples:
            examples = self.example_bank.select_relevant_examples(question_analysis.type, expertise_level)
            if examples:
                parts.append("\nExamples:\n")
                parts.append("\n\n".join(examples))
                adaptations.append(f"added_{len(examples)}_examples")

        if question_analysis.complexity == "high" or question_analysis.type == "analytical":
            parts.append(chain_of_thought_instructions(question_analysis.type))
            adaptations.append("chain_of_thought_reasoning")

        parts.append(CONTEXT_MARKER)
        parts.append(process_context(context, strategy.context_processing))
        if strategy.context_processing != "raw":
            adaptations.append(f"context_{strategy.context_processing}")

        parts.append(QUESTION_MARKER)
        parts.append(frame_question(question, question_analysis, expertise_level))

        preferred_format = profile_value(user_profile, "preferred_format", "preferredFormat")
        parts.append(output_instructions(question_analysis.type, expertise_level, preferred_format))

        if strategy.require_citations:
            parts.append(CITATION_INSTRUCTION)
            adaptations.append("citations_required")

        return BuiltPrompt(text="\n".join(parts), adaptations=adaptations)

    def generate(self, question: str, context: str, user_profile: Any = None,
                 document_metadata: Optional[Dict[str, Any]] = None,
                 previous_interactions: Optional[List[Any]] = None) -> PromptResult:
        """
        Analyze the inputs, choose a strategy and build the prompt.

        Any failure while analyzing or building yields the fallback prompt
        instead of an exception.
        """
        try:
            question_analysis = self.classifier.classify(question)
            context_analysis = self.analyzer.analyze(context, document_metadata)
            expertise_level = determine_expertise_level(user_profile, previous_interactions)
            strategy = select_prompt_strategy(question_analysis, context_analysis, expertise_level)

            built = self.build(
                question,
                context,
                question_analysis,
                context_analysis,
                expertise_level,
                strategy,
                user_profile,
            )
        except Exception as e:
            logger.log_prompt_fallback(question, e)
            return fallback_prompt(question, context)

        logger.log_prompt_generated(strategy.key, question_analysis.type, expertise_level,
                                    built.adaptations, len(built.text))

        return PromptResult(
            prompt=built.text,
            metadata={
                "questionType": question_analysis.type,
                "complexity": question_analysis.complexity,
                "confidence": question_analysis.confidence,
                "strategy": strategy.name,
                "strategyKey": strategy.key,
                "expertiseLevel": expertise_level,
                "domain": context_analysis.domain,
                "contextLength": len(context),
                "promptLength": len(built.text),
                "adaptations": built.adaptations,
                "timestamp": datetime.now().isoformat(),
            },
        )
