"""Value normalization and display formatting shared by the generators.

The components script carries a JavaScript twin of ``format_value`` so
the initial markup and the live readouts agree.
"""

from __future__ import annotations

import math
from typing import Tuple

from ..core.names import fmt_number


def normalized(value: float, lo: float, hi: float) -> float:
    """Map ``value`` from ``[lo, hi]`` onto ``[0, 1]``."""

    if hi == lo:
        return 0.5
    return min(1.0, max(0.0, (value - lo) / (hi - lo)))


def format_value(
    value: float,
    lo: float,
    hi: float,
    value_format: str = "numeric",
    decimal_places: int = 1,
    suffix: str = "",
) -> str:
    if value_format == "percentage":
        return f"{normalized(value, lo, hi) * 100:.{decimal_places}f}%"
    if value_format == "db":
        return f"{value:.{decimal_places}f} dB"
    if value_format == "hz":
        return format_frequency(value, decimal_places)
    return f"{value:.{decimal_places}f}{suffix}"


def format_frequency(value: float, decimal_places: int = 1, auto_khz: bool = True, show_unit: bool = True) -> str:
    if auto_khz and abs(value) >= 1000:
        text, unit = f"{value / 1000:.{decimal_places}f}", "kHz"
    else:
        text, unit = f"{value:.{decimal_places}f}", "Hz"
    return f"{text} {unit}" if show_unit else text


def format_db(value: float, decimal_places: int = 1, show_unit: bool = True) -> str:
    if value == -math.inf:
        text = "-inf"
    else:
        text = f"{value:.{decimal_places}f}"
    return f"{text} dB" if show_unit else text


def polar_to_cartesian(cx: float, cy: float, r: float, angle: float) -> Tuple[float, float]:
    """Point on a circle; 0 degrees is 12 o'clock, angles grow clockwise."""

    rad = (angle - 90) * math.pi / 180
    return cx + r * math.cos(rad), cy + r * math.sin(rad)


def describe_arc(cx: float, cy: float, r: float, start_angle: float, end_angle: float) -> str:
    """SVG path data for the arc between two angles.

    The path runs from the end point back to the start point with the
    sweep flag cleared; the components script draws arcs the same way.
    """

    if end_angle - start_angle <= 0:
        return ""
    if end_angle - start_angle >= 360:
        end_angle = start_angle + 359.99
    x1, y1 = polar_to_cartesian(cx, cy, r, end_angle)
    x2, y2 = polar_to_cartesian(cx, cy, r, start_angle)
    large_arc = 1 if end_angle - start_angle > 180 else 0
    return (
        f"M {fmt_number(x1, 3)} {fmt_number(y1, 3)} "
        f"A {fmt_number(r, 3)} {fmt_number(r, 3)} 0 {large_arc} 0 {fmt_number(x2, 3)} {fmt_number(y2, 3)}"
    )
