"""
Math Formatting Utilities
Converts SymPy/raw math expressions to human-readable format
with Unicode superscripts
"""

import re


# Unicode superscript characters
SUPERSCRIPTS = {
    '0': '⁰', '1': '¹', '2': '²', '3': '³', '4': '⁴',
    '5': '⁵', '6': '⁶', '7': '⁷', '8': '⁸', '9': '⁹',
    '+': '⁺', '-': '⁻', '(': '⁽', ')': '⁾',
    'n': 'ⁿ', 'i': 'ⁱ'
}


def to_superscript(text: str) -> str:
    """Convert a string to superscript Unicode characters."""
    return "".join(SUPERSCRIPTS.get(char, char) for char in str(text))


def format_math_expression(expr: str) -> str:
    """
    Convert a SymPy/raw math expression to human-readable format.

    Examples:
        x**2 + 3*x  →  x² + 3x
        sqrt(x)     →  √(x)

    Args:
        expr: Math expression string

    Returns:
        Human-readable formatted string
    """
    if not expr:
        return expr

    result = str(expr)

    # x**2 → x²
    result = re.sub(r'([a-zA-Z])\*\*(\d+)', lambda m: m.group(1) + to_superscript(m.group(2)), result)

    # (x+1)**2 → (x+1)²
    result = re.sub(r'\)\*\*(\d+)', lambda m: ')' + to_superscript(m.group(1)), result)

    # 3*x → 3x
    result = re.sub(r'(\d)\*([a-zA-Z])', r'\1\2', result)

    # x*(y+1) → x(y+1)
    result = re.sub(r'([a-zA-Z])\*\(', r'\1(', result)

    result = result.replace('sqrt(', '√(')
    result = result.replace('pi', 'π')

    return re.sub(r'\s+', ' ', result)
