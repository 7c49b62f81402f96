"""Token, program and result types plus the parse error hierarchy."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator


class TokenType(enum.Enum):
    """Discriminant of a lexer token or compiled instruction."""

    END = "end"
    NUMBER = "number"
    VARIABLE = "variable"
    FUNCTION = "function"
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    LPAREN = "("
    RPAREN = ")"
    NEGATE = "neg"


BINARY_OPERATORS = frozenset(
    {TokenType.PLUS, TokenType.MINUS, TokenType.MUL, TokenType.DIV, TokenType.POW}
)


@dataclass(frozen=True)
class Token:
    """A lexed token, also used as a compiled instruction.

    ``value`` is meaningful for NUMBER, ``index`` for FUNCTION. ``position``
    is the offset of the token in the source text and does not take part in
    comparisons.
    """

    kind: TokenType
    value: float = 0.0
    index: int = 0
    position: int = field(default=-1, compare=False)

    def describe(self) -> str:
        if self.kind is TokenType.NUMBER:
            return f"number {self.value:g}"
        if self.kind is TokenType.FUNCTION:
            return f"function #{self.index}"
        if self.kind is TokenType.END:
            return "end of input"
        return repr(self.kind.value)


@dataclass(frozen=True)
class Program:
    """Immutable postfix instruction sequence produced by a successful parse."""

    instructions: tuple[Token, ...] = ()
    source: str = ""

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.instructions)

    @property
    def uses_variable(self) -> bool:
        return any(t.kind is TokenType.VARIABLE for t in self.instructions)


@dataclass
class EvalResult:
    """Result of compiling and evaluating a formula."""

    ok: bool
    value: float | None = None
    expression: str | None = None
    rpn: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = self.value
        if self.expression is not None:
            result_dict["expression"] = self.expression
        if self.rpn is not None:
            result_dict["rpn"] = self.rpn
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        parts = [f"ok={self.ok}"]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.expression is not None:
            parts.append(f"expression={self.expression!r}")
        if self.rpn is not None:
            parts.append(f"rpn={self.rpn!r}")
        return f"EvalResult({', '.join(parts)})"


@dataclass
class TableResult:
    """Result of sampling a formula over a range of x values."""

    ok: bool
    xs: list[float] | None = None
    ys: list[float] | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.xs is not None and self.ys is not None:
            result_dict["points"] = [[x, y] for x, y in zip(self.xs, self.ys)]
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"TableResult(ok=False, error={self.error!r})"
        return f"TableResult(ok=True, points={len(self.xs or [])})"


@dataclass
class PlotResult:
    """Result of plotting a formula."""

    ok: bool
    text: str | None = None
    path: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.text is not None:
            result_dict["text"] = self.text
        if self.path is not None:
            result_dict["path"] = self.path
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict


class ParseError(Exception):
    """Raised when a formula cannot be compiled."""

    def __init__(
        self, message: str, code: str = "PARSE_ERROR", position: int | None = None
    ):
        self.message = message
        self.code = code
        self.position = position
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.position is None or self.position < 0:
            return self.message
        return f"{self.message} at position {self.position}"


class LexicalError(ParseError):
    """Raised by the lexer on an unexpected character, bad number or unknown name."""

    def __init__(
        self,
        message: str,
        code: str = "UNEXPECTED_CHARACTER",
        position: int | None = None,
        text: str = "",
    ):
        self.text = text
        super().__init__(message, code, position)


class GrammarError(ParseError):
    """Raised when the token stream does not match the grammar."""

    def __init__(self, message: str, token: Token, code: str = "UNEXPECTED_TOKEN"):
        self.token = token
        super().__init__(message, code, token.position)


class ValidationError(ParseError):
    """Raised when input exceeds configured limits."""

    def __init__(
        self, message: str, code: str = "VALIDATION_ERROR", position: int | None = None
    ):
        super().__init__(message, code, position)
