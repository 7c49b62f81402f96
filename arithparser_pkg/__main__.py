"""Main entry point for running arithparser_pkg as a module.

This allows running Arithparser with:
    python -m arithparser_pkg
    python -m arithparser_pkg -e "3x+1" -x 2
    python -m arithparser_pkg -e "sin(x)" --plot --ascii

This is equivalent to running:
    python -m arithparser_pkg.cli
    arithparser
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
