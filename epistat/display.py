"""
Text displays
=============

Renderers turn a list of SummaryResult objects into printable text:

- `render_table`: one "range | value" row per result
- `render_chart`: an ASCII scatter chart followed by a legend

Both return a string; printing is left to the caller.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Sequence

from .summary import SummaryResult

CHART_WIDTH = 80
CHART_HEIGHT = 24

NO_RESULTS = "No results to display."


def render_table(results: Sequence[SummaryResult]) -> str:
    if not results:
        return NO_RESULTS
    lines = [
        "Range                 | Value",
        "----------------------|-------",
    ]
    for r in results:
        lines.append(f"{str(r.date_range):<20} | {r.value}")
    return "\n".join(lines)


def render_chart(results: Sequence[SummaryResult], width: int = CHART_WIDTH, height: int = CHART_HEIGHT) -> str:
    """Plot results left to right, scaled to the largest value."""
    if not results:
        return NO_RESULTS
    max_value = max(r.value for r in results)
    if max_value == 0 and all(r.value == 0 for r in results):
        return "All values are zero. Unable to display meaningful chart."
    if max_value <= 0:
        return "No positive values. Unable to display meaningful chart."

    # bottom row is the x axis, column 0 the y axis
    grid: List[List[str]] = [
        ["_"] * width if row == height - 1 else ["|"] + [" "] * (width - 1)
        for row in range(height)
    ]

    n = len(results)
    for i, r in enumerate(results):
        x = int(i / (n - 1) * (width - 2)) + 1 if n > 1 else width // 2
        y = int(r.value / max_value * (height - 2)) + 1
        y = min(max(y, 0), height - 1)
        grid[height - 1 - y][x] = "*"

    lines = ["".join(row) for row in grid]
    lines.append("")
    lines.append("Legend:")
    for i, r in enumerate(results, start=1):
        lines.append(f"{i}: {r.date_range} ({r.value})")
    return "\n".join(lines)


DISPLAYS: Dict[str, Callable[[Sequence[SummaryResult]], str]] = {
    "table": render_table,
    "chart": render_chart,
}
