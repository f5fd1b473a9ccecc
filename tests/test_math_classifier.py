"""
Tests for agents/math_classifier.py
"""

import pytest

from agents.math_classifier import CATEGORY_RULES, MathCategory, MathClassifier


@pytest.fixture
def classifier():
    return MathClassifier()


@pytest.mark.parametrize("question, expected", [
    ("solve 2x - 3 = 7", MathCategory.ALGEBRA),
    ("2x - 4 = 10", MathCategory.ALGEBRA),
    ("integrate 2x+3", MathCategory.INTEGRALS),
    ("∫ x dx", MathCategory.INTEGRALS),
    ("find the derivative of x^2", MathCategory.CALCULUS),
    ("differentiate sin x", MathCategory.CALCULUS),
    ("find the determinant of the matrix", MathCategory.LINEAR_ALGEBRA),
    ("what is sin 30 degrees", MathCategory.TRIGONOMETRY),
    ("find the area of a circle of radius 7", MathCategory.GEOMETRY),
    ("what is the probability of getting heads", MathCategory.STATISTICS),
    ("calculate 15% of 200", MathCategory.MATH),
])
def test_categories(classifier, question, expected):
    assert classifier.classify(question) == expected


@pytest.mark.parametrize("question", [
    "what is the capital of France",
    "Who wrote the Ramayana",
    "Explain photosynthesis",
])
def test_non_math_is_unknown(classifier, question):
    assert classifier.classify(question) == MathCategory.UNKNOWN


def test_trig_words_need_word_boundaries(classifier):
    # "important" contains "tan", "cosmos" contains "cos"
    assert classifier.classify("why is the cosmos important") == MathCategory.UNKNOWN


def test_variable_with_operator_counts_as_math(classifier):
    assert classifier.is_math("x + 1")


def test_integral_markers_outrank_trig(classifier):
    assert classifier.classify("integrate sin x") == MathCategory.INTEGRALS


def test_custom_rule_table_changes_precedence():
    rules = [(lambda q: "area" in q, MathCategory.STATISTICS)] + CATEGORY_RULES
    assert MathClassifier(rules).classify("area of a square") == MathCategory.STATISTICS


def test_non_string_is_unknown(classifier):
    assert classifier.classify(None) == MathCategory.UNKNOWN
