"""Rebuild a SymPy expression from a compiled program, for display."""

from __future__ import annotations

from typing import Iterable

import sympy as sp

from .config import VARIABLE_SYMBOL
from .formatting import prettify_expr
from .logging_config import get_logger
from .types import Program, Token, TokenType

logger = get_logger("symbolic")

X = sp.Symbol(VARIABLE_SYMBOL, real=True)

# Indexed like config.FUNCTION_TABLE
SYMPY_FUNCTIONS = (
    sp.cos,
    sp.sin,
    sp.tan,
    sp.cot,
    sp.asin,
    sp.acos,
    sp.atan,
    sp.log,
    lambda arg: sp.log(arg) / sp.log(10),
    sp.Abs,
)

_BINARY = {
    TokenType.PLUS: lambda a, b: a + b,
    TokenType.MINUS: lambda a, b: a - b,
    TokenType.MUL: lambda a, b: a * b,
    TokenType.DIV: lambda a, b: a / b,
    TokenType.POW: lambda a, b: a**b,
}


def _literal(value: float) -> sp.Expr:
    if value.is_integer():
        return sp.Integer(int(value))
    return sp.Float(value)


def to_sympy(instructions: Iterable[Token]) -> sp.Expr:
    """Replay the program on a stack of SymPy expressions.

    The tree is built with automatic evaluation off, so powers keep their
    shape: ``10^(10^10)`` is never expanded into an exact integer. An empty
    program gives ``0``.
    """
    stack: list[sp.Expr] = []
    with sp.evaluate(False):
        for token in instructions:
            if token.kind is TokenType.NUMBER:
                stack.append(_literal(token.value))
            elif token.kind is TokenType.VARIABLE:
                stack.append(X)
            elif token.kind is TokenType.NEGATE:
                stack.append(-stack.pop())
            elif token.kind is TokenType.FUNCTION:
                stack.append(SYMPY_FUNCTIONS[token.index](stack.pop()))
            else:
                right = stack.pop()
                left = stack.pop()
                stack.append(_BINARY[token.kind](left, right))
    return stack[-1] if stack else sp.Integer(0)


def render(instructions: Iterable[Token], pretty: bool = True) -> str:
    """Human-readable rendering of a program via SymPy."""
    expr = to_sympy(instructions)
    # The printer negates exponents and splits products; keep those lazy too
    with sp.evaluate(False):
        text = sp.sstr(expr, full_prec=False)
    return prettify_expr(text) if pretty else text


def try_render(program: Program, pretty: bool = True) -> str | None:
    """Like :func:`render`, but returns None when SymPy cannot print the program."""
    try:
        return render(program, pretty=pretty)
    except (TypeError, ValueError, ZeroDivisionError, RecursionError) as e:
        logger.warning(
            "Could not render %r symbolically: %s",
            program.source,
            e,
            extra={"formula": program.source},
        )
        return None
