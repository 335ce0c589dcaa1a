"""Cubic (or any degree) bezier evaluation by repeated linear interpolation."""

from __future__ import annotations
from typing import Sequence

from .domain import OutOfRangeError, Point


def _reduce(points: Sequence[Point], t: float) -> list[Point]:
    # One de Casteljau step: k points -> k-1 points
    return [points[i].interpolate(points[i + 1], t) for i in range(len(points) - 1)]


def evaluate(controls: Sequence[Point], t: float) -> Point:
    """
    Point on the bezier curve defined by controls at parameter t.

    Args:
        controls: N+1 control points of a degree-N curve
        t: Curve parameter, 0 at the first control point and 1 at the last

    Returns:
        The interpolated Point

    Raises:
        OutOfRangeError: if t is outside [0, 1]
    """
    if t < 0 or t > 1:
        raise OutOfRangeError(f"The curve parameter must be between 0 and 1, got {t}.")
    if len(controls) < 2:
        raise ValueError("A bezier curve needs at least two control points.")

    points = list(controls)
    while len(points) > 1:
        points = _reduce(points, t)
    return points[0]
