"""Pull-based lexer for single-variable formulas.

Tokens are produced one at a time by :meth:`Lexer.next_token`. The lexer
keeps a cursor into the source text and never backtracks.
"""

from __future__ import annotations

import enum
import string

from .config import DECIMAL_POINT, DELIMITERS, FUNCTION_INDEX, VARIABLE_SYMBOL
from .types import LexicalError, Token, TokenType

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)


class LexState(enum.Enum):
    INITIAL = 0
    NUMBER = 1
    NAME = 2
    DELIMITER = 3


class Lexer:
    """Character-class state machine over a formula string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _peek(self) -> str:
        """Current character, or an empty string at end of input."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def next_token(self) -> Token:
        """Return the next token and advance past it.

        At end of input this keeps returning END without moving the cursor.

        Raises:
            LexicalError: On an unexpected character, a decimal point without
                following digits, or an unknown function name.
        """
        state = LexState.INITIAL
        start = self.pos

        while True:
            char = self._peek()
            if state is LexState.INITIAL:
                start = self.pos
                if char.isspace():
                    self.pos += 1
                elif char and char.lower() == VARIABLE_SYMBOL:
                    self.pos += 1
                    return Token(TokenType.VARIABLE, position=start)
                elif char in DIGITS:
                    state = LexState.NUMBER
                elif char in LETTERS:
                    state = LexState.NAME
                elif not char:
                    return Token(TokenType.END, position=start)
                else:
                    state = LexState.DELIMITER
            elif state is LexState.NUMBER:
                return self._read_number(start)
            elif state is LexState.NAME:
                return self._read_name(start)
            else:
                return self._read_delimiter(start)

    def _read_number(self, start: int) -> Token:
        int_part = 0
        while self._peek() in DIGITS:
            int_part = int_part * 10 + ord(self._peek()) - ord("0")
            self.pos += 1

        try:
            value = float(int_part)
        except OverflowError:
            raise LexicalError(
                "Numeric literal out of range",
                "MALFORMED_NUMBER",
                start,
                self.text[start : self.pos],
            ) from None

        if self._peek() != DECIMAL_POINT:
            return Token(TokenType.NUMBER, value=value, position=start)

        self.pos += 1
        if self._peek() not in DIGITS:
            raise LexicalError(
                "Expected digit after decimal point",
                "MALFORMED_NUMBER",
                self.pos,
                self._peek(),
            )
        fraction_start = self.pos
        while self._peek() in DIGITS:
            self.pos += 1
        fraction = self.text[fraction_start : self.pos]

        # int part plus "0.<digits>" gives the usual decimal value
        return Token(
            TokenType.NUMBER, value=int_part + float("0." + fraction), position=start
        )

    def _read_name(self, start: int) -> Token:
        while self._peek() in LETTERS:
            self.pos += 1
        name = self.text[start : self.pos]

        index = FUNCTION_INDEX.get(name)
        if index is None:
            raise LexicalError(
                f"Unknown function '{name}'", "UNKNOWN_FUNCTION", start, name
            )
        return Token(TokenType.FUNCTION, index=index, position=start)

    def _read_delimiter(self, start: int) -> Token:
        char = self._peek()
        kind = DELIMITERS.get(char)
        if kind is None:
            raise LexicalError(
                f"Unexpected character {char!r}", "UNEXPECTED_CHARACTER", start, char
            )
        self.pos += 1
        return Token(kind, position=start)
