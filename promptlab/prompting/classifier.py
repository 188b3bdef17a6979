"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Rule-based question classification: type, complexity and confidence.
"""

import re
from typing import List, Pattern, Tuple

from .types import QuestionAnalysis

# Evaluated in order, first match wins. Factual is checked first on purpose:
# "Which is better ..." stays factual.
TYPE_RULES: List[Tuple[str, Pattern]] = [
    ("factual", re.compile(r"^(what|who|when|where|which|how many|how much)\b")),
    ("analytical", re.compile(r"^(why|how|explain|analyze|discuss|elaborate)")),
    ("comparative", re.compile(r"(compare|contrast|difference|similar|versus|vs\.?|better|worse)")),
    ("procedural", re.compile(r"(how to|steps|process|procedure|method|way to)")),
    ("creative", re.compile(r"(imagine|suppose|what if|create|design|suggest)")),
]

COMPLEXITY_RULES: List[Tuple[str, Pattern]] = [
    ("high", re.compile(r"(analyze|evaluate|synthesize|compare.*contrast|multiple.*factor|relationship.*between)")),
    ("medium", re.compile(r"(explain|describe|discuss|how.*work|why.*important)")),
    ("low", re.compile(r"(what|who|when|where|which|list)")),
]

DEFAULT_TYPE = "factual"
DEFAULT_COMPLEXITY = "medium"

MISS_CONFIDENCE = 0.6
HIT_CONFIDENCE = 0.8
LONG_QUESTION_CHARS = 100
LONG_QUESTION_BONUS = 0.1
QUESTION_MARK_BONUS = 0.05


def _first_match(rules: List[Tuple[str, Pattern]], text: str):
    for label, pattern in rules:
        if pattern.search(text):
            return label
    return None


class QuestionClassifier:
    """Classifies a question with ordered regex rules. Stateless."""

    def classify(self, question: str) -> QuestionAnalysis:
        question_lower = question.lower()

        question_type = _first_match(TYPE_RULES, question_lower)
        if question_type is None:
            question_type = DEFAULT_TYPE
            confidence = MISS_CONFIDENCE
        else:
            confidence = HIT_CONFIDENCE

        complexity = _first_match(COMPLEXITY_RULES, question_lower) or DEFAULT_COMPLEXITY

        if len(question) > LONG_QUESTION_CHARS:
            confidence += LONG_QUESTION_BONUS
        if "?" in question:
            confidence += QUESTION_MARK_BONUS

        return QuestionAnalysis(
            type=question_type,
            complexity=complexity,
            confidence=min(round(confidence, 4), 1.0),
            length=len(question),
            word_count=len(question.split()),
        )
