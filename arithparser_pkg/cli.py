"""Command line interface and interactive REPL."""

from __future__ import annotations

import argparse
import json
import re
from typing import Any

from . import config
from .config import VERSION
from .evaluator import evaluate_scalar
from .formatting import format_number, format_rpn
from .logging_config import get_logger, setup_logging
from .parser import ArithmeticParser
from .plotting import plot_program
from .sampling import sample
from .symbolic import try_render
from .types import Program

logger = get_logger("cli")

VALUE_COMMAND_RE = re.compile(r"^(?:x\s*=|@)\s*(.+)$", re.IGNORECASE)


def _error_result(message: str, code: str | None = None) -> dict[str, Any]:
    res: dict[str, Any] = {"ok": False, "error": message}
    if code:
        res["error_code"] = code
    return res


def _compiled_result(program: Program) -> dict[str, Any]:
    return {
        "ok": True,
        "type": "compiled",
        "formula": program.source,
        "expression": try_render(program),
        "rpn": format_rpn(program),
    }


def _values_result(program: Program, xs: list[float]) -> dict[str, Any]:
    return {
        "ok": True,
        "type": "values",
        "formula": program.source,
        "values": [{"x": x, "y": evaluate_scalar(program, x)} for x in xs],
    }


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return

    typ = res.get("type")
    if typ == "compiled":
        if res.get("expression"):
            print(f"f(x) = {res['expression']}")
        print(f"RPN: {res['rpn']}")
    elif typ == "values":
        for item in res["values"]:
            print(f"f({format_number(item['x'])}) = {format_number(item['y'])}")
    elif typ == "table":
        for x, y in res["points"]:
            print(f"{format_number(x):>14}  {format_number(y):>14}")
    elif typ == "plot":
        if res.get("text"):
            print(res["text"])
        if res.get("path"):
            print(f"Plot saved to: {res['path']}")
    if res.get("rpn") and typ != "compiled":
        print(f"RPN: {res['rpn']}")


def print_help_text() -> None:
    print(
        "Enter a formula in x to compile it, e.g. 3x^2 - 2(x+1) or -cos(x)/ln(x).\n"
        "Functions: " + ", ".join(config.FUNCTION_NAMES) + "\n"
        "Operators: + - * / ^ and parentheses; 3x and 3(x+1) multiply implicitly.\n"
        "Commands:\n"
        "  x = VALUE   evaluate the current formula (also: @ VALUE)\n"
        "  rpn         show the compiled program\n"
        "  help        show this text\n"
        "  quit, exit  leave"
    )


def repl_loop(output_format: str = "human") -> None:
    """Interactive loop: compile formulas and evaluate them at chosen points."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline is not available on Windows
        pass

    parser = ArithmeticParser()
    print("Arithparser: type 'help' for commands, 'quit' to exit.")

    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue

        command = raw.lower()
        if command in ("quit", "exit"):
            print("Goodbye.")
            break
        if command == "help":
            print_help_text()
            continue
        if command == "rpn":
            if parser.program:
                print(format_rpn(parser.program))
            else:
                print("No formula compiled yet.")
            continue

        match = VALUE_COMMAND_RE.match(raw)
        if match:
            if not parser.program:
                print_result_pretty(
                    _error_result("No formula compiled yet", "NO_FORMULA"), output_format
                )
                continue
            try:
                x = float(match.group(1))
            except ValueError:
                print_result_pretty(
                    _error_result(f"Not a number: {match.group(1)!r}", "INVALID_VALUE"),
                    output_format,
                )
                continue
            print_result_pretty(_values_result(parser.program, [x]), output_format)
            continue

        if parser.parse(raw):
            print_result_pretty(_compiled_result(parser.program), output_format)
        else:
            error = parser.last_error
            print_result_pretty(_error_result(str(error), error.code), output_format)


def _run_formula(args: argparse.Namespace) -> tuple[dict[str, Any], int]:
    parser = ArithmeticParser()
    if not parser.parse(args.eval_expr):
        error = parser.last_error
        logger.info(
            "Formula rejected: %s",
            error,
            extra={"formula": args.eval_expr, "code": error.code},
        )
        return _error_result(str(error), error.code), 1
    program = parser.program

    if args.range:
        try:
            xs, ys = sample(program, args.range[0], args.range[1], args.points)
        except ValueError as e:
            return _error_result(str(e), "INVALID_RANGE"), 1
        res = {
            "ok": True,
            "type": "table",
            "formula": program.source,
            "points": [[x, y] for x, y in zip(xs.tolist(), ys.tolist())],
        }
    elif args.plot:
        x_min, x_max = args.plot_range or (None, None)
        plotted = plot_program(
            program, x_min, x_max, args.points, ascii=args.ascii, output=args.output
        )
        if not plotted.ok:
            return _error_result(plotted.error, plotted.error_code), 1
        res = {"ok": True, "type": "plot", "formula": program.source}
        res.update(plotted.to_dict())
    else:
        res = _values_result(program, args.at or [0.0])

    if args.rpn:
        res["rpn"] = format_rpn(program)
    return res, 0


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Arithparser CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="arithparser",
        description="Compile single-variable formulas and evaluate them.",
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Compile one formula and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "-x",
        "--at",
        type=float,
        action="append",
        metavar="VALUE",
        help="Evaluate at this x (repeatable, default: 0)",
    )
    parser.add_argument(
        "--range",
        type=float,
        nargs=2,
        metavar=("XMIN", "XMAX"),
        help="Tabulate the formula over [XMIN, XMAX]",
    )
    parser.add_argument(
        "--points", type=int, help="Number of samples for --range and --plot"
    )
    parser.add_argument("--plot", action="store_true", help="Plot the formula")
    parser.add_argument(
        "--plot-range",
        type=float,
        nargs=2,
        metavar=("XMIN", "XMAX"),
        help="x range for --plot",
    )
    parser.add_argument(
        "--ascii", action="store_true", help="Draw --plot as text instead of PNG"
    )
    parser.add_argument("-o", "--output", type=str, help="PNG path for --plot")
    parser.add_argument(
        "--rpn", action="store_true", help="Also print the compiled RPN program"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: ARITHPARSER_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    # CLI flags override module-level configuration
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)

    if args.version:
        print(VERSION)
        return 0
    if args.eval_expr is None:
        repl_loop(args.format)
        return 0

    res, code = _run_formula(args)
    print_result_pretty(res, args.format)
    return code


if __name__ == "__main__":
    import sys

    sys.exit(main_entry())
