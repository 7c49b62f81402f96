"""Centralized configuration for Arithparser.

This module defines:
- The fixed lexicon: function table, delimiter table, variable symbol
- Input validation limits (length, nesting depth)
- Cache sizes for compiled formulas
- Output and plotting defaults

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with ARITHPARSER_)
"""

import os

import numpy as np

from .types import TokenType

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("arithparser")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("ARITHPARSER_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("ARITHPARSER_MAX_EXPRESSION_DEPTH", "250")
)  # nested parens, calls and negations; the interpreter stack may run out first

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("ARITHPARSER_CACHE_SIZE_PARSE", "1024"))

# Logging
LOG_LEVEL = os.getenv("ARITHPARSER_LOG_LEVEL", "WARNING")

# Output configuration
OUTPUT_PRECISION = int(os.getenv("ARITHPARSER_OUTPUT_PRECISION", "6"))

# Sampling and plotting defaults
PLOT_POINTS = int(os.getenv("ARITHPARSER_PLOT_POINTS", "100"))
PLOT_X_MIN = float(os.getenv("ARITHPARSER_PLOT_X_MIN", "-10"))
PLOT_X_MAX = float(os.getenv("ARITHPARSER_PLOT_X_MAX", "10"))
ASCII_PLOT_ROWS = int(os.getenv("ARITHPARSER_ASCII_PLOT_ROWS", "20"))
ASCII_PLOT_COLS = int(os.getenv("ARITHPARSER_ASCII_PLOT_COLS", "60"))
MAX_PLOT_MAGNITUDE = float(
    os.getenv("ARITHPARSER_MAX_PLOT_MAGNITUDE", "1e10")
)  # values beyond this are treated as gaps


def _cotangent(x):
    return 1.0 / np.tan(x)


# Order is significant: the position of a name is the index stored in
# compiled FUNCTION instructions.
FUNCTION_TABLE = (
    ("cos", np.cos),
    ("sin", np.sin),
    ("tg", np.tan),
    ("ctg", _cotangent),
    ("arcsin", np.arcsin),
    ("arccos", np.arccos),
    ("arctg", np.arctan),
    ("ln", np.log),
    ("lg", np.log10),
    ("abs", np.fabs),
)

FUNCTION_NAMES = tuple(name for name, _ in FUNCTION_TABLE)
FUNCTIONS = tuple(func for _, func in FUNCTION_TABLE)
FUNCTION_INDEX = {name: index for index, name in enumerate(FUNCTION_NAMES)}

DELIMITERS = {
    "^": TokenType.POW,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

VARIABLE_SYMBOL = "x"
DECIMAL_POINT = "."
