"""
Math Classifier
Keyword/symbol heuristic that labels a question with a math subcategory.

Two passes:
1. Detection: is this a math question at all?
2. Categorization: walk CATEGORY_RULES in order, first hit wins.

Both passes are driven by the tables below so precedence can be reviewed
(and tested) without reading control flow.
"""

import re
from enum import Enum
from typing import Callable, List, Tuple


class MathCategory(str, Enum):
    UNKNOWN = "unknown"
    MATH = "math"
    ALGEBRA = "algebra"
    INTEGRALS = "integrals"
    CALCULUS = "calculus"
    LINEAR_ALGEBRA = "linear_algebra"
    TRIGONOMETRY = "trigonometry"
    GEOMETRY = "geometry"
    STATISTICS = "statistics"

    @property
    def is_math(self) -> bool:
        return self is not MathCategory.UNKNOWN


# ============================================================================
# DETECTION TABLES
# ============================================================================

# Matched as substrings of the lower-cased question.
MATH_KEYWORDS = [
    "solve", "calculate", "find", "compute", "evaluate", "simplify",
    "equation", "inequality", "derivative", "integral", "limit", "matrix",
    "polynomial", "quadratic", "linear", "trigonometry", "geometry",
    "algebra", "calculus", "statistics", "probability", "fraction",
    "percentage", "ratio", "proportion", "area", "volume", "perimeter",
    "angle", "triangle", "circle", "square", "rectangle", "graph",
    "function", "logarithm", "exponential",
]

# Short function names need word boundaries ("important" contains "tan").
TRIG_WORDS = re.compile(r"\b(trig|sin|cos|tan|sec|csc|cot)\b")

MATH_SYMBOLS = [
    "+", "-", "*", "/", "=", "≠", "<", ">", "≤", "≥", "√", "²", "³",
    "∫", "∑", "π", "∞", "θ", "α", "β", "γ", "Δ", "∂", "∇",
]

NUMERIC_EXPRESSION = re.compile(r"[\d+\-*/=()²³√∫∑]")

# A letter next to an operator, or a bare x/y/z.
VARIABLE_REFERENCE = re.compile(r"[a-z]\s*[=+\-*/]|[=+\-*/]\s*[a-z]|\b(x|y|z)\b", re.IGNORECASE)

# A standalone single-letter variable, optionally with a coefficient ("2x", "y").
VARIABLE_TERM = re.compile(r"(?<![a-z])\d*[a-z](?![a-z])")


def _contains_any(words: List[str]) -> Callable[[str], bool]:
    return lambda q: any(word in q for word in words)


def _has_equation(q: str) -> bool:
    return "=" in q and bool(VARIABLE_TERM.search(q))


# ============================================================================
# CATEGORY RULES (ordered, first match wins)
# ============================================================================
CATEGORY_RULES: List[Tuple[Callable[[str], bool], MathCategory]] = [
    (_contains_any(["∫", "integrate", "integration"]), MathCategory.INTEGRALS),
    (_contains_any(["derivative", "differentiate", "d/dx"]), MathCategory.CALCULUS),
    (_contains_any(["matrix", "determinant"]), MathCategory.LINEAR_ALGEBRA),
    (lambda q: bool(TRIG_WORDS.search(q)), MathCategory.TRIGONOMETRY),
    (_contains_any(["geometry", "area", "volume", "perimeter"]), MathCategory.GEOMETRY),
    (_contains_any(["probability", "statistics"]), MathCategory.STATISTICS),
    (_contains_any(["equation", "solve for", "linear", "quadratic", "polynomial", "algebra"]), MathCategory.ALGEBRA),
    (_has_equation, MathCategory.ALGEBRA),
]


class MathClassifier:
    """
    Classifies questions into MathCategory values.
    """

    def __init__(self, category_rules: List[Tuple[Callable[[str], bool], MathCategory]] = None):
        self.category_rules = category_rules if category_rules is not None else CATEGORY_RULES

    def is_math(self, question: str) -> bool:
        """
        Detection pass.

        A question is math if it has a math keyword or trig word, a math
        symbol, or both a numeric/operator character and a variable reference.
        """
        q = question.lower()

        if any(keyword in q for keyword in MATH_KEYWORDS) or TRIG_WORDS.search(q):
            return True

        if any(symbol in question for symbol in MATH_SYMBOLS):
            return True

        return bool(NUMERIC_EXPRESSION.search(question)) and bool(VARIABLE_REFERENCE.search(question))

    def classify(self, question: str) -> MathCategory:
        """
        Classify a question.

        Args:
            question: Raw question text

        Returns:
            MathCategory.UNKNOWN for non-math questions, otherwise the most
            specific category from CATEGORY_RULES (MathCategory.MATH if none apply)
        """
        if not isinstance(question, str) or not self.is_math(question):
            return MathCategory.UNKNOWN

        q = question.lower()
        for matches, category in self.category_rules:
            if matches(q):
                return category

        return MathCategory.MATH


def main():
    """Test classifier with sample questions."""
    classifier = MathClassifier()
    samples = [
        "solve 2x - 3 = 7",
        "integrate 2x+3",
        "find the derivative of x^2",
        "what is sin 30",
        "area of a circle of radius 7",
        "what is the capital of France",
    ]
    for sample in samples:
        print(f"{sample:35} → {classifier.classify(sample).value}")


if __name__ == "__main__":
    main()
