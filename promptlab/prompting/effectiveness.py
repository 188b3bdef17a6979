"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Word-overlap scoring of model responses against a gold-standard answer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

ACCURACY_OVERLAP = 0.5
COMPLETENESS_RATIO = 0.7

ACCURACY_THRESHOLD = 0.7
CONSISTENCY_THRESHOLD = 0.6
COMPLETENESS_THRESHOLD = 0.8


@dataclass
class EffectivenessReport:
    accuracy: float = 0.0
    consistency: float = 0.0
    completeness: float = 0.0
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accuracy": self.accuracy,
            "consistency": self.consistency,
            "completeness": self.completeness,
            "recommendations": list(self.recommendations),
        }


def _words(text: str) -> List[str]:
    return text.lower().split()


def is_accurate(response: str, gold_standard: str) -> bool:
    """More than half as many response words appear in the gold answer as it has words."""
    gold_words = _words(gold_standard)
    if not gold_words:
        return False
    gold_set = set(gold_words)
    overlap = [word for word in _words(response) if word in gold_set]
    return len(overlap) / len(gold_words) > ACCURACY_OVERLAP


def is_complete(response: str, gold_standard: str) -> bool:
    return len(response) >= len(gold_standard) * COMPLETENESS_RATIO


def text_overlap(text_a: str, text_b: str) -> float:
    """Jaccard overlap of the two lower-cased vocabularies."""
    words_a = set(_words(text_a))
    words_b = set(_words(text_b))
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def calculate_consistency(responses: List[str]) -> float:
    if len(responses) < 2:
        return 1.0

    total = 0.0
    comparisons = 0
    for i in range(len(responses) - 1):
        for j in range(i + 1, len(responses)):
            total += text_overlap(responses[i], responses[j])
            comparisons += 1

    return total / comparisons


def analyze_prompt_effectiveness(responses: List[str], gold_standard: str) -> EffectivenessReport:
    """
    Score a batch of responses produced by one prompt.

    An empty batch returns an all-zero report with no recommendations.
    """
    report = EffectivenessReport()
    if not responses:
        return report

    accurate = sum(1 for response in responses if is_accurate(response, gold_standard))
    complete = sum(1 for response in responses if is_complete(response, gold_standard))

    report.accuracy = accurate / len(responses)
    report.completeness = complete / len(responses)
    report.consistency = calculate_consistency(responses)

    if report.accuracy < ACCURACY_THRESHOLD:
        report.recommendations.append("Consider adding more relevant examples")
    if report.consistency < CONSISTENCY_THRESHOLD:
        report.recommendations.append("Use more consistent example formats")
    if report.completeness < COMPLETENESS_THRESHOLD:
        report.recommendations.append("Include examples with more detailed answers")

    return report
