"""Public API for Arithparser - returns structured objects without raising on bad input."""

from __future__ import annotations

from .evaluator import evaluate_scalar
from .formatting import format_rpn
from .parser import compile_formula
from .plotting import plot_program
from .sampling import sample
from .symbolic import try_render
from .types import EvalResult, ParseError, PlotResult, Program, TableResult


def _compile(formula: str) -> Program:
    if not formula or not formula.strip():
        raise ParseError("Input cannot be empty", "EMPTY_INPUT")
    return compile_formula(formula)


def evaluate(formula: str, x: float = 0.0) -> EvalResult:
    """Compile a formula and evaluate it at ``x``.

    Args:
        formula: Formula text (e.g., "3x+1", "-cos(x)")
        x: Value of the variable

    Returns:
        EvalResult with value and RPN on success, error and error_code otherwise

    Example:
        >>> from arithparser_pkg.api import evaluate
        >>> evaluate("2(x+1)", 3).value
        8.0
        >>> evaluate("2+").ok
        False
    """
    try:
        program = _compile(formula)
    except ParseError as e:
        return EvalResult(ok=False, error=str(e), error_code=e.code)
    return EvalResult(
        ok=True, value=evaluate_scalar(program, x), rpn=format_rpn(program)
    )


def validate_formula(formula: str) -> tuple[bool, str | None]:
    """Check a formula without evaluating it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from arithparser_pkg.api import validate_formula
        >>> validate_formula("sin(x)^2")
        (True, None)
        >>> validate_formula("foo(x)")
        (False, "Unknown function 'foo' at position 0")
    """
    try:
        _compile(formula)
    except ParseError as e:
        return False, str(e)
    return True, None


def tabulate(
    formula: str,
    x_min: float | None = None,
    x_max: float | None = None,
    points: int | None = None,
) -> TableResult:
    """Sample a formula at evenly spaced points.

    Returns:
        TableResult with parallel ``xs`` and ``ys`` lists
    """
    try:
        program = _compile(formula)
    except ParseError as e:
        return TableResult(ok=False, error=str(e), error_code=e.code)
    try:
        xs, ys = sample(program, x_min, x_max, points)
    except ValueError as e:
        return TableResult(ok=False, error=str(e), error_code="INVALID_RANGE")
    return TableResult(ok=True, xs=xs.tolist(), ys=ys.tolist())


def describe(formula: str) -> EvalResult:
    """Compile a formula and render it as a readable expression and as RPN.

    Example:
        >>> from arithparser_pkg.api import describe
        >>> describe("3x").rpn
        '3 x *'
    """
    try:
        program = _compile(formula)
    except ParseError as e:
        return EvalResult(ok=False, error=str(e), error_code=e.code)
    return EvalResult(
        ok=True, expression=try_render(program), rpn=format_rpn(program)
    )


def plot(
    formula: str,
    x_min: float | None = None,
    x_max: float | None = None,
    points: int | None = None,
    ascii: bool = False,
    output: str | None = None,
) -> PlotResult:
    """Plot a formula.

    Example:
        >>> from arithparser_pkg.api import plot
        >>> plot("x^2", x_min=-5, x_max=5, ascii=True).ok
        True
    """
    try:
        program = _compile(formula)
    except ParseError as e:
        return PlotResult(ok=False, error=str(e), error_code=e.code)
    return plot_program(program, x_min, x_max, points, ascii=ascii, output=output)
