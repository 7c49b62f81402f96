"""Recursive-descent compiler from formula text to postfix programs.

Grammar, from lowest to highest precedence::

    EXPR  := EXPR2 { ('+' | '-') EXPR2 }
    EXPR2 := EXPR3 { ('*' | '/') EXPR3 }
    EXPR3 := EXPR4 [ '^' EXPR4 ]
    EXPR4 := VARIABLE
           | NUMBER [ VARIABLE | '(' EXPR ')' ]
           | '-' EXPR4
           | FUNCNAME '(' EXPR ')'
           | '(' EXPR ')'

A number directly followed by ``x`` or ``(`` is an implicit multiplication.
Only one ``^`` is allowed per EXPR3, so ``2^3^4`` needs parentheses.
"""

from __future__ import annotations

from functools import lru_cache

from .config import CACHE_SIZE_PARSE, MAX_EXPRESSION_DEPTH, MAX_INPUT_LENGTH
from .evaluator import evaluate_scalar
from .lexer import Lexer
from .logging_config import get_logger
from .types import GrammarError, ParseError, Program, Token, TokenType, ValidationError

logger = get_logger("parser")


class ArithmeticParser:
    """Compile a formula once, then evaluate it at many values of ``x``.

    Example:
        >>> parser = ArithmeticParser()
        >>> parser.parse("3x + 1")
        True
        >>> parser.evaluate(2)
        7.0
    """

    def __init__(self, max_depth: int | None = None):
        self.max_depth = MAX_EXPRESSION_DEPTH if max_depth is None else max_depth
        self.program = Program()
        self.last_error: ParseError | None = None
        self._lexer: Lexer | None = None
        self._token = Token(TokenType.END)
        self._rpn: list[Token] = []
        self._depth = 0

    def parse(self, text: str) -> bool:
        """Compile ``text``, replacing any previously compiled program.

        Returns:
            True on success. On any lexical or grammar error the compiled
            program is left empty and False is returned; the error itself is
            kept on ``last_error``.
        """
        try:
            self.compile(text)
        except ParseError as e:
            self.last_error = e
            logger.debug(
                "Rejected formula: %s",
                e.message,
                extra={"formula": text, "code": e.code, "position": e.position},
            )
            return False
        return True

    def compile(self, text: str) -> Program:
        """Compile ``text`` and return the program.

        Raises:
            ParseError: LexicalError, GrammarError or ValidationError describing
                the first problem found.
        """
        self.program = Program()
        self.last_error = None
        self._rpn = []
        self._depth = 0

        if len(text) > MAX_INPUT_LENGTH:
            raise ValidationError(
                f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
            )

        self._lexer = Lexer(text)
        try:
            self.next_token()
            self._expr()
            self.expect_token(TokenType.END)
        except ParseError:
            self._rpn = []
            raise
        except RecursionError:
            self._rpn = []
            raise ValidationError(
                "Expression nested too deeply for the interpreter stack",
                "TOO_DEEP",
                self._token.position,
            ) from None
        finally:
            self._lexer = None

        self.program = Program(tuple(self._rpn), text)
        self._rpn = []
        return self.program

    def evaluate(self, x: float) -> float:
        """Evaluate the compiled program at ``x``; 0.0 if nothing is compiled."""
        return evaluate_scalar(self.program, x)

    def next_token(self) -> None:
        self._token = self._lexer.next_token()

    def expect_token(self, kind: TokenType) -> None:
        """Fail unless the lookahead is ``kind``. Does not consume it."""
        if self._token.kind is not kind:
            expected = _KIND_NAMES.get(kind, repr(kind.value))
            raise GrammarError(
                f"Expected {expected}, found {self._token.describe()}", self._token
            )

    def _emit(self, kind: TokenType, **payload) -> None:
        self._rpn.append(Token(kind, **payload))

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self.max_depth:
            raise ValidationError(
                f"Expression nested too deeply (>{self.max_depth} levels)",
                "TOO_DEEP",
                self._token.position,
            )

    def _expr(self) -> None:
        self._expr2()
        while self._token.kind in (TokenType.PLUS, TokenType.MINUS):
            kind = self._token.kind
            self.next_token()
            self._expr2()
            self._emit(kind)

    def _expr2(self) -> None:
        self._expr3()
        while self._token.kind in (TokenType.MUL, TokenType.DIV):
            kind = self._token.kind
            self.next_token()
            self._expr3()
            self._emit(kind)

    def _expr3(self) -> None:
        self._expr4()
        if self._token.kind is TokenType.POW:
            self.next_token()
            self._expr4()
            self._emit(TokenType.POW)

    def _expr4(self) -> None:
        token = self._token

        if token.kind is TokenType.FUNCTION:
            self._enter()
            self.next_token()
            self.expect_token(TokenType.LPAREN)
            self._parenthesized()
            self._emit(TokenType.FUNCTION, index=token.index)
            self._depth -= 1
        elif token.kind is TokenType.VARIABLE:
            self._emit(TokenType.VARIABLE)
            self.next_token()
        elif token.kind is TokenType.NUMBER:
            self._emit(TokenType.NUMBER, value=token.value)
            self.next_token()
            if self._token.kind is TokenType.VARIABLE:
                self._emit(TokenType.VARIABLE)
                self._emit(TokenType.MUL)
                self.next_token()
            elif self._token.kind is TokenType.LPAREN:
                self._enter()
                self._parenthesized()
                self._emit(TokenType.MUL)
                self._depth -= 1
        elif token.kind is TokenType.LPAREN:
            self._enter()
            self._parenthesized()
            self._depth -= 1
        elif token.kind is TokenType.MINUS:
            self._enter()
            self.next_token()
            self._expr4()
            self._emit(TokenType.NEGATE)
            self._depth -= 1
        else:
            raise GrammarError(f"Unexpected {token.describe()}", token)

    def _parenthesized(self) -> None:
        """Parse ``'(' EXPR ')'`` with the lookahead on the opening paren."""
        self.next_token()
        self._expr()
        self.expect_token(TokenType.RPAREN)
        self.next_token()


_KIND_NAMES = {
    TokenType.END: "end of input",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
}


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def compile_formula(text: str) -> Program:
    """Compile ``text`` into a shared, immutable program.

    Raises:
        ParseError: If the formula is rejected.
    """
    return ArithmeticParser().compile(text)
