"""Integration tests for CLI functionality."""

import json
import logging
import subprocess
import sys
from pathlib import Path

import pytest

from arithparser_pkg import config
from arithparser_pkg.cli import main_entry, repl_loop

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("arithparser")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def run_module(*args, stdin=None):
    return subprocess.run(
        [sys.executable, "-m", "arithparser_pkg", *args],
        input=stdin,
        capture_output=True,
        text=True,
        timeout=60,
        cwd=REPO_ROOT,
    )


def test_cli_version():
    """Test --version flag."""
    result = run_module("--version")
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_eval_json():
    """Test CLI evaluation with JSON output."""
    result = run_module("--eval", "3x", "-x", "2", "--format", "json")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert data["values"] == [{"x": 2.0, "y": 6.0}]


def test_cli_rejected_formula_exit_code():
    result = run_module("--eval", "2^3^4")
    assert result.returncode == 1
    assert "Error:" in result.stdout


def test_eval_human(capsys):
    assert main_entry(["-e", "3x", "-x", "2", "-x", "-1"]) == 0
    out = capsys.readouterr().out
    assert "f(2) = 6" in out
    assert "f(-1) = -3" in out


def test_eval_default_x(capsys):
    assert main_entry(["-e", "x+1"]) == 0
    assert "f(0) = 1" in capsys.readouterr().out


def test_eval_leading_minus(capsys):
    assert main_entry(["--eval=-cos(x)", "-x", "0"]) == 0
    assert "f(0) = -1" in capsys.readouterr().out


def test_eval_error(capsys):
    assert main_entry(["-e", "foo(x)"]) == 1
    out = capsys.readouterr().out
    assert "Error:" in out
    assert "foo" in out


def test_eval_error_json(capsys):
    assert main_entry(["-e", "(x+1", "--format", "json"]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is False
    assert data["error_code"] == "UNEXPECTED_TOKEN"


def test_rpn_flag(capsys):
    assert main_entry(["-e", "2(x+1)", "-x", "3", "--rpn"]) == 0
    out = capsys.readouterr().out
    assert "f(3) = 8" in out
    assert "RPN: 2 x 1 + *" in out


def test_range_json(capsys):
    code = main_entry(
        ["-e", "2x", "--range", "0", "1", "--points", "3", "--format", "json"]
    )
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["type"] == "table"
    assert data["points"] == [[0.0, 0.0], [0.5, 1.0], [1.0, 2.0]]


def test_invalid_range(capsys):
    assert main_entry(["-e", "x", "--range", "1", "0"]) == 1
    assert "Error:" in capsys.readouterr().out


def test_ascii_plot(capsys):
    code = main_entry(
        ["-e", "x^2", "--plot", "--ascii", "--plot-range", "-2", "2", "--points", "21"]
    )
    assert code == 0
    assert "*" in capsys.readouterr().out


def test_png_plot(capsys, tmp_path):
    pytest.importorskip("matplotlib")
    output = tmp_path / "out.png"
    assert main_entry(["-e", "sin(x)", "--plot", "-o", str(output)]) == 0
    assert output.exists()
    assert str(output) in capsys.readouterr().out


def test_precision_flag(capsys, monkeypatch):
    monkeypatch.setattr(config, "OUTPUT_PRECISION", config.OUTPUT_PRECISION)
    assert main_entry(["-p", "3", "-e", "x/3", "-x", "1"]) == 0
    assert "f(1) = 0.333" in capsys.readouterr().out
    assert config.OUTPUT_PRECISION == 3


def test_debug_logging(capsys):
    assert main_entry(["--log-level", "DEBUG", "-e", "2+"]) == 1
    assert "Rejected formula" in capsys.readouterr().err


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "arith.log"
    assert main_entry(["--log-level", "INFO", "--log-file", str(log_file), "-e", "2+"]) == 1
    for handler in logging.getLogger("arithparser").handlers:
        handler.flush()
    assert "Formula rejected" in log_file.read_text()


def test_repl_session(capsys, monkeypatch):
    lines = iter(["@ 1", "3x", "x = 2", "rpn", "@ abc", "2+", "help", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    repl_loop()
    out = capsys.readouterr().out
    assert "No formula compiled yet" in out
    assert "f(x) = 3·x" in out
    assert "RPN: 3 x *" in out
    assert "f(2) = 6" in out
    assert "Not a number" in out
    assert "Error:" in out
    assert "Functions:" in out
    assert "Goodbye." in out


def test_repl_failed_parse_clears_formula(capsys, monkeypatch):
    lines = iter(["x+1", "x+", "@ 1"])

    def fake_input(prompt=""):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    repl_loop()
    out = capsys.readouterr().out
    # a failed parse clears the compiled program
    assert "No formula compiled yet" in out


def test_repl_huge_power_stays_responsive():
    result = run_module(stdin="10^(10^10)\n@ 1\nquit\n")
    assert result.returncode == 0
    assert "RPN: 10 10 10 ^ ^" in result.stdout
    assert "f(1) = inf" in result.stdout
    assert "Goodbye." in result.stdout


def test_repl_render_failure_shows_rpn(capsys, monkeypatch):
    lines = iter(["2(x+1)", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    def failing_render(*args, **kwargs):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr("arithparser_pkg.symbolic.render", failing_render)
    repl_loop()
    out = capsys.readouterr().out
    assert "f(x) =" not in out
    assert "RPN: 2 x 1 + *" in out
