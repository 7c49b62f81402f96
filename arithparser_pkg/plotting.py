"""Optional plotting of compiled single-variable formulas."""

from __future__ import annotations

import numpy as np

try:
    # Set non-GUI backend before importing pyplot to avoid Tkinter issues
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from . import config
from .formatting import format_number
from .logging_config import get_logger
from .sampling import sample
from .types import PlotResult, Program

logger = get_logger("plotting")


def _finite_mask(ys: np.ndarray) -> np.ndarray:
    return np.isfinite(ys) & (np.abs(ys) < config.MAX_PLOT_MAGNITUDE)


def ascii_plot(
    xs: np.ndarray,
    ys: np.ndarray,
    rows: int | None = None,
    cols: int | None = None,
) -> str | None:
    """Draw sampled points on a character grid.

    Points are ``*``, axes ``-`` and ``|`` crossing at ``+``. Undefined or
    huge values are left blank.

    Returns:
        The plot text, or None if no sampled value is drawable.
    """
    rows = config.ASCII_PLOT_ROWS if rows is None else rows
    cols = config.ASCII_PLOT_COLS if cols is None else cols

    mask = _finite_mask(ys)
    if not mask.any():
        return None

    x_min, x_max = float(xs[0]), float(xs[-1])
    x_range = x_max - x_min if x_max != x_min else 1.0
    y_min, y_max = float(ys[mask].min()), float(ys[mask].max())
    y_range = y_max - y_min if y_max != y_min else 1.0

    # Row 0 is the top line
    grid = [[" " for _ in range(cols)] for _ in range(rows)]

    x_axis_row = (
        int(round((y_max - 0) / y_range * (rows - 1))) if y_min <= 0 <= y_max else -1
    )
    y_axis_col = (
        int(round((0 - x_min) / x_range * (cols - 1))) if x_min <= 0 <= x_max else -1
    )
    for c in range(cols):
        if x_axis_row >= 0:
            grid[x_axis_row][c] = "-"
    for r in range(rows):
        if y_axis_col >= 0:
            grid[r][y_axis_col] = "+" if r == x_axis_row else "|"

    for x, y in zip(xs[mask], ys[mask]):
        col = int(round((x - x_min) / x_range * (cols - 1)))
        row = int(round((y_max - y) / y_range * (rows - 1)))
        col = max(0, min(cols - 1, col))
        row = max(0, min(rows - 1, row))
        grid[row][col] = "*"

    lines = ["".join(line).rstrip() for line in grid]
    header = f"y: [{format_number(y_min)}, {format_number(y_max)}]"
    footer = f"x: [{format_number(x_min)}, {format_number(x_max)}]"
    return "\n".join([header, *lines, footer])


def plot_program(
    program: Program,
    x_min: float | None = None,
    x_max: float | None = None,
    points: int | None = None,
    ascii: bool = False,
    output: str | None = None,
    title: str | None = None,
) -> PlotResult:
    """Plot a compiled formula.

    Args:
        program: Compiled formula
        x_min: Minimum x value (default: config.PLOT_X_MIN)
        x_max: Maximum x value (default: config.PLOT_X_MAX)
        points: Number of samples (default: config.PLOT_POINTS)
        ascii: If True, return an ASCII plot instead of writing an image
        output: PNG path for image plots (default: a new temporary file)
        title: Plot title (default: the program's source text)

    Returns:
        PlotResult with ``text`` for ASCII plots or ``path`` for image plots.
    """
    if not HAS_MATPLOTLIB and not ascii:
        return PlotResult(
            ok=False,
            error="matplotlib not installed. Use ascii=True for ASCII plot.",
            error_code="MISSING_DEPENDENCY",
        )

    try:
        xs, ys = sample(program, x_min, x_max, points)
    except ValueError as e:
        return PlotResult(ok=False, error=str(e), error_code="INVALID_RANGE")

    if ascii:
        text = ascii_plot(xs, ys)
        if text is None:
            return PlotResult(
                ok=False,
                error="Cannot plot: function values out of range",
                error_code="NOTHING_TO_PLOT",
            )
        return PlotResult(ok=True, text=text)

    title = title or program.source
    ys = np.where(_finite_mask(ys), ys, np.nan)

    if output is None:
        import tempfile

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as temp_file:
            output = temp_file.name

    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        ax.plot(xs, ys, linewidth=2, color="#2E86AB", label=f"f(x) = {title}")
        ax.set_xlabel("x", fontsize=12, fontweight="bold")
        ax.set_ylabel("f(x)", fontsize=12, fontweight="bold")
        ax.set_title(f"Plot of {title}", fontsize=14, fontweight="bold")
        ax.grid(True, alpha=0.3, linestyle="--")
        ax.axhline(y=0, color="k", linewidth=0.8, linestyle="-", alpha=0.3)
        ax.axvline(x=0, color="k", linewidth=0.8, linestyle="-", alpha=0.3)
        ax.legend(loc="best", fontsize=10)
        fig.tight_layout()
        fig.savefig(output, dpi=150, bbox_inches="tight")
    except OSError as e:
        logger.error("Failed to save plot: %s", e, extra={"path": output})
        return PlotResult(ok=False, error=f"Failed to save plot: {e}", error_code="IO_ERROR")
    finally:
        plt.close(fig)

    logger.info(
        "Plot saved", extra={"formula": program.source, "path": output}
    )
    return PlotResult(ok=True, path=output)
