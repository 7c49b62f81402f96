"""Performance tests and benchmarks for Arithparser.

These tests are marked as 'slow' and can be skipped with: pytest -m "not slow"
"""

import time

import numpy as np
import pytest

from arithparser_pkg.evaluator import evaluate_array
from arithparser_pkg.parser import ArithmeticParser, compile_formula


@pytest.mark.slow
class TestParsingPerformance:
    """Test parsing performance."""

    def test_simple_formula_parsing_time(self):
        parser = ArithmeticParser()
        start = time.time()
        for _ in range(1000):
            assert parser.parse("3x^2 + 2(x-1) - 1")
        elapsed = time.time() - start
        assert elapsed < 2.0, f"Parsing too slow: {elapsed}s"

    def test_long_formula_parsing_time(self):
        formula = "+".join(["sin(x)*2(x+1)"] * 500)
        start = time.time()
        parser = ArithmeticParser()
        assert parser.parse(formula)
        elapsed = time.time() - start
        assert elapsed < 2.0, f"Long formula parsing too slow: {elapsed}s"


@pytest.mark.slow
class TestEvaluationPerformance:
    """Test that a compiled program is cheap to evaluate repeatedly."""

    def test_repeated_scalar_evaluation(self):
        parser = ArithmeticParser()
        parser.parse("sin(x)^2 + cos(x)^2 - ln(abs(x)+1)")
        start = time.time()
        for i in range(5000):
            parser.evaluate(i * 0.001)
        elapsed = time.time() - start
        assert elapsed < 5.0, f"Scalar evaluation too slow: {elapsed}s"

    def test_vectorised_evaluation(self):
        program = compile_formula("sin(x)^2 + cos(x)^2")
        xs = np.linspace(-100, 100, 1_000_000)
        start = time.time()
        ys = evaluate_array(program, xs)
        elapsed = time.time() - start
        np.testing.assert_allclose(ys, 1.0)
        assert elapsed < 2.0, f"Vectorised evaluation too slow: {elapsed}s"
