"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Question/context analysis, strategy selection and prompt construction.
"""

# Package initialization for prompting module
from .types import (
    QuestionAnalysis, ContextAnalysis, PromptStrategy, Example, UserProfile,
    BuiltPrompt, PromptResult, AdaptivePrompt,
)
from .classifier import QuestionClassifier
from .context_analyzer import ContextAnalyzer
from .examples import ExampleBank
from .strategies import select_strategy, select_prompt_strategy, determine_expertise_level
from .builder import PromptBuilder, fallback_prompt
from .templates import PromptingService
from .effectiveness import EffectivenessReport, analyze_prompt_effectiveness

__all__ = [
    'QuestionAnalysis',
    'ContextAnalysis',
    'PromptStrategy',
    'Example',
    'UserProfile',
    'BuiltPrompt',
    'PromptResult',
    'AdaptivePrompt',
    'QuestionClassifier',
    'ContextAnalyzer',
    'ExampleBank',
    'select_strategy',
    'select_prompt_strategy',
    'determine_expertise_level',
    'PromptBuilder',
    'fallback_prompt',
    'PromptingService',
    'EffectivenessReport',
    'analyze_prompt_effectiveness',
]
