"""Arithparser package: lexer, recursive-descent compiler and stack evaluator for formulas in x."""

from .parser import ArithmeticParser, compile_formula
from .types import GrammarError, LexicalError, ParseError, Program, ValidationError

__all__ = [
    "config",
    "lexer",
    "parser",
    "evaluator",
    "symbolic",
    "sampling",
    "plotting",
    "cli",
    "types",
    "api",
    "logging_config",
    "ArithmeticParser",
    "compile_formula",
    "Program",
    "ParseError",
    "LexicalError",
    "GrammarError",
    "ValidationError",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "validate_formula",
    "tabulate",
    "describe",
    "plot",
]
