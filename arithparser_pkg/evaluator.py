"""Stack machine that executes compiled postfix programs."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .config import FUNCTIONS
from .types import Token, TokenType

_BINARY = {
    TokenType.PLUS: np.add,
    TokenType.MINUS: np.subtract,
    TokenType.MUL: np.multiply,
    TokenType.DIV: np.divide,
    TokenType.POW: np.power,
}


def execute(instructions: Iterable[Token], x):
    """Run ``instructions`` for the given ``x`` and return the top of stack.

    ``x`` may be a scalar or a NumPy array. Arithmetic follows IEEE rules:
    division by zero and out-of-domain function arguments produce inf or NaN
    instead of raising. An empty instruction sequence yields ``0.0``.

    The program is trusted; a malformed sequence is not detected here.
    """
    x = np.asarray(x, dtype=np.float64)
    stack = []

    with np.errstate(all="ignore"):
        for token in instructions:
            kind = token.kind
            if kind is TokenType.NUMBER:
                stack.append(np.float64(token.value))
            elif kind is TokenType.VARIABLE:
                stack.append(x)
            elif kind is TokenType.NEGATE:
                stack.append(np.negative(stack.pop()))
            elif kind is TokenType.FUNCTION:
                stack.append(FUNCTIONS[token.index](stack.pop()))
            else:
                right = stack.pop()
                left = stack.pop()
                stack.append(_BINARY[kind](left, right))

    if not stack:
        return 0.0
    return stack[-1]


def evaluate_scalar(instructions: Iterable[Token], x: float) -> float:
    """Evaluate at a single point and return a plain float."""
    return float(execute(instructions, float(x)))


def evaluate_array(instructions: Iterable[Token], xs) -> np.ndarray:
    """Evaluate at every element of ``xs``; constant programs are broadcast."""
    xs = np.asarray(xs, dtype=np.float64)
    result = execute(instructions, xs)
    return np.broadcast_to(np.asarray(result, dtype=np.float64), xs.shape).copy()
