"""Vectorised sampling of a compiled formula over a range of x."""

from __future__ import annotations

import numpy as np

from . import config
from .evaluator import evaluate_array
from .types import Program


def sample(
    program: Program,
    x_min: float | None = None,
    x_max: float | None = None,
    points: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate ``program`` on ``points`` evenly spaced values in [x_min, x_max].

    Args:
        program: Compiled formula
        x_min: Start of the range (default: config.PLOT_X_MIN)
        x_max: End of the range, inclusive (default: config.PLOT_X_MAX)
        points: Number of samples, at least 1 (default: config.PLOT_POINTS)

    Returns:
        Tuple of (xs, ys) arrays. ys may hold inf or NaN where the formula is
        undefined.

    Raises:
        ValueError: If the range or point count is invalid.
    """
    x_min = config.PLOT_X_MIN if x_min is None else float(x_min)
    x_max = config.PLOT_X_MAX if x_max is None else float(x_max)
    points = config.PLOT_POINTS if points is None else int(points)

    if points < 1:
        raise ValueError(f"Number of points must be positive, got {points}")
    if not (np.isfinite(x_min) and np.isfinite(x_max)):
        raise ValueError("Range bounds must be finite")
    if x_min > x_max:
        raise ValueError(f"Empty range: x_min={x_min} > x_max={x_max}")

    xs = np.linspace(x_min, x_max, points)
    return xs, evaluate_array(program, xs)
