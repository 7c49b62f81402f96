"""Test that API functions return typed dataclasses."""

import json
import math

from arithparser_pkg.api import describe, evaluate, plot, tabulate, validate_formula
from arithparser_pkg.types import EvalResult, PlotResult, TableResult


class TestAPITypedReturns:
    """Test that all API functions return typed dataclasses."""

    def test_evaluate_returns_eval_result(self):
        result = evaluate("2(x+1)", 3)
        assert isinstance(result, EvalResult)
        assert result.ok is True
        assert result.value == 8.0
        assert result.rpn == "2 x 1 + *"

    def test_evaluate_default_x(self):
        assert evaluate("x+1").value == 1.0

    def test_evaluate_error_returns_eval_result(self):
        result = evaluate("3++4")
        assert isinstance(result, EvalResult)
        assert result.ok is False
        assert result.error_code == "UNEXPECTED_TOKEN"
        assert result.value is None

    def test_evaluate_empty_input(self):
        result = evaluate("   ")
        assert result.ok is False
        assert result.error_code == "EMPTY_INPUT"

    def test_evaluate_special_value(self):
        result = evaluate("1/x", 0)
        assert result.ok is True
        assert math.isinf(result.value)

    def test_validate_formula(self):
        assert validate_formula("sin(x)^2") == (True, None)
        ok, error = validate_formula("foo(x)")
        assert ok is False
        assert "foo" in error

    def test_tabulate_returns_table_result(self):
        result = tabulate("2x", 0, 1, 3)
        assert isinstance(result, TableResult)
        assert result.ok is True
        assert result.xs == [0.0, 0.5, 1.0]
        assert result.ys == [0.0, 1.0, 2.0]

    def test_tabulate_invalid_range(self):
        result = tabulate("x", 1, 0, 3)
        assert result.ok is False
        assert result.error_code == "INVALID_RANGE"

    def test_tabulate_invalid_points(self):
        result = tabulate("x", 0, 1, 0)
        assert result.ok is False
        assert result.error_code == "INVALID_RANGE"

    def test_tabulate_bad_formula(self):
        result = tabulate("(x", 0, 1, 3)
        assert result.ok is False
        assert result.error_code == "UNEXPECTED_TOKEN"

    def test_describe(self):
        result = describe("3x")
        assert isinstance(result, EvalResult)
        assert result.ok is True
        assert result.rpn == "3 x *"
        assert result.expression == "3·x"

    def test_describe_without_symbolic_rendering(self, monkeypatch):
        def failing_render(*args, **kwargs):
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr("arithparser_pkg.symbolic.render", failing_render)
        result = describe("2(x+1)")
        assert result.ok is True
        assert result.expression is None
        assert result.rpn == "2 x 1 + *"
        assert "expression" not in result.to_dict()

    def test_plot_ascii_returns_plot_result(self):
        result = plot("x^2", x_min=-5, x_max=5, ascii=True)
        assert isinstance(result, PlotResult)
        assert result.ok is True
        assert "*" in result.text

    def test_plot_bad_formula(self):
        result = plot("x^", ascii=True)
        assert isinstance(result, PlotResult)
        assert result.ok is False

    def test_to_dict_is_json_serializable(self):
        for result in (
            evaluate("x", 2),
            evaluate("x+"),
            tabulate("x", 0, 1, 2),
            describe("ln(x)"),
        ):
            data = result.to_dict()
            assert data["ok"] is result.ok
            json.dumps(data)

    def test_table_to_dict_points(self):
        data = tabulate("x+1", 0, 2, 3).to_dict()
        assert data["points"] == [[0.0, 1.0], [1.0, 2.0], [2.0, 3.0]]
