"""
Calculator Tool
Exact symbolic arithmetic for the closed-form solvers, using SymPy
"""

from typing import List

import sympy as sp
from sympy import symbols, solve, integrate
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication_application,
    convert_xor
)


# Enable safe math parsing ("2x" → 2*x, "x^2" → x**2)
TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor
)


class Calculator:
    """
    Mathematical calculator using SymPy.
    Results stay exact (Rational, symbolic) so solver steps never show float noise.
    """

    @staticmethod
    def _safe_parse(expr: str):
        """
        Safely parse math expression into SymPy expression.
        """
        try:
            return parse_expr(expr, transformations=TRANSFORMATIONS, evaluate=True)
        except Exception as e:
            raise ValueError(f"Invalid mathematical expression: '{expr}' → {str(e)}")

    @staticmethod
    def solve_linear(a: int, b: int, c: int, variable: str = "x") -> List[sp.Expr]:
        """
        Solve a*x - b = c exactly.

        Returns:
            List of solutions (empty when a == 0)
        """
        var = symbols(variable)
        return solve(sp.Eq(a * var - b, c), var)

    @staticmethod
    def integrate_expr(expression: str, variable: str = "x") -> str:
        """
        Compute indefinite integral of an expression (without the constant).
        """
        expr = Calculator._safe_parse(expression)
        var = symbols(variable)

        try:
            return str(integrate(expr, var))
        except Exception as e:
            raise ValueError(f"Error computing integral: {str(e)}")
