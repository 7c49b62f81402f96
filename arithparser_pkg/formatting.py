"""Display helpers for numbers, compiled programs and SymPy renderings."""

from __future__ import annotations

import math
import re
from typing import Any, Iterable

from . import config
from .types import Token, TokenType


def superscriptify(input_str: str) -> str:
    """Convert numeric string to Unicode superscript characters.

    Args:
        input_str: Input string with digits and '-' (e.g., "123", "-5")

    Returns:
        String with superscript Unicode characters (e.g., "¹²³", "⁻⁵")
    """
    mapping = {
        "0": "⁰",
        "1": "¹",
        "2": "²",
        "3": "³",
        "4": "⁴",
        "5": "⁵",
        "6": "⁶",
        "7": "⁷",
        "8": "⁸",
        "9": "⁹",
        "-": "⁻",
    }
    return "".join(mapping.get(char, char) for char in input_str)


def format_superscript(expr_str: str) -> str:
    """Replace Python power notation (**) with Unicode superscripts.

    Args:
        expr_str: Expression string (e.g., "x**2", "x**-3")

    Returns:
        String with superscripts (e.g., "x²", "x⁻³")
    """
    return re.sub(r"\*\*(\-?\d+)(?![\d.])", lambda m: superscriptify(m.group(1)), expr_str)


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with the given number of significant digits.

    Infinities and NaN are rendered as ``inf``, ``-inf`` and ``nan``.
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        number = float(val)
    except (ValueError, TypeError, OverflowError):
        return str(val)
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    return "{:.{}g}".format(number, int(precision))


def format_token(token: Token) -> str:
    """Render one compiled instruction."""
    if token.kind is TokenType.NUMBER:
        return format_number(token.value, 15)
    if token.kind is TokenType.VARIABLE:
        return config.VARIABLE_SYMBOL
    if token.kind is TokenType.FUNCTION:
        return config.FUNCTION_NAMES[token.index]
    return token.kind.value


def format_rpn(instructions: Iterable[Token]) -> str:
    """Render a program in reverse Polish notation, e.g. ``3 x *``."""
    return " ".join(format_token(t) for t in instructions)


def prettify_expr(expr_str: str) -> str:
    """Make a SymPy string friendlier: ``**2`` to ``²`` and ``*`` to ``·``."""
    return format_superscript(expr_str).replace("**", "^").replace("*", "·")
