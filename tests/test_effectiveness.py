"""
Response scoring against a gold-standard answer.
"""

import pytest

from promptlab.prompting.effectiveness import (
    analyze_prompt_effectiveness,
    calculate_consistency,
    is_accurate,
    is_complete,
    text_overlap,
)

GOLD = "the cat sat on the mat"


def test_empty_responses():
    report = analyze_prompt_effectiveness([], GOLD)
    assert report.accuracy == 0.0
    assert report.consistency == 0.0
    assert report.completeness == 0.0
    assert report.recommendations == []


def test_perfect_responses():
    report = analyze_prompt_effectiveness([GOLD, GOLD], GOLD)
    assert report.accuracy == 1.0
    assert report.completeness == 1.0
    assert report.consistency == 1.0
    assert report.recommendations == []


def test_poor_responses_get_all_recommendations():
    report = analyze_prompt_effectiveness(["nothing", "else"], GOLD)
    assert report.accuracy == 0.0
    assert report.completeness == 0.0
    assert report.consistency == 0.0
    assert report.recommendations == [
        "Consider adding more relevant examples",
        "Use more consistent example formats",
        "Include examples with more detailed answers",
    ]


def test_single_response_is_consistent():
    assert calculate_consistency(["anything"]) == 1.0


def test_accuracy_threshold():
    assert is_accurate("the cat sat on something", GOLD) is True
    assert is_accurate("a dog ran", GOLD) is False


def test_completeness_ratio():
    assert is_complete("x" * 15, "y" * 20) is True
    assert is_complete("x" * 13, "y" * 20) is False


def test_text_overlap():
    assert text_overlap("A b c", "a b d") == pytest.approx(2 / 4)
    assert text_overlap("", "") == 0.0


def test_to_dict():
    data = analyze_prompt_effectiveness([GOLD], GOLD).to_dict()
    assert set(data) == {"accuracy", "consistency", "completeness", "recommendations"}
