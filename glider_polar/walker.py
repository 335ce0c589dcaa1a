"""
Fixed-step traversal of a polar curve.

Every query on a polar is phrased as "find the first sample along the curve
that satisfies some condition". This module produces the samples, segment by
segment, and stops at the first sample a predicate accepts.
"""

from __future__ import annotations
from typing import Callable, Iterator, Optional, Sequence

from .bezier import evaluate
from .config import DEFAULT_STEPS_PER_SEGMENT
from .domain import ControlPoint, Point


Predicate = Callable[[Point], bool]


def segment_controls(
    control_points: Sequence[ControlPoint],
    index: int,
    forward: bool = True,
) -> tuple[Point, Point, Point, Point]:
    """
    Bezier controls of the segment leaving control point `index`.

    Forward segments run to index+1, backward segments to index-1.
    """
    current = control_points[index]
    if forward:
        nxt = control_points[index + 1]
        return (current.anchor, current.next_handle, nxt.previous_handle, nxt.anchor)

    prev = control_points[index - 1]
    return (current.anchor, current.previous_handle, prev.next_handle, prev.anchor)


def iter_samples(
    control_points: Sequence[ControlPoint],
    forward: bool = True,
    steps: int = DEFAULT_STEPS_PER_SEGMENT,
) -> Iterator[Point]:
    """
    Yield steps+1 samples per segment (t = j/steps, both ends included).

    Segment endpoints are shared, so each interior anchor is yielded twice.
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    n = len(control_points)
    indices = range(0, n - 1) if forward else range(n - 1, 0, -1)

    for i in indices:
        controls = segment_controls(control_points, i, forward)
        for j in range(steps + 1):
            yield evaluate(controls, j / steps)


def walk(
    control_points: Sequence[ControlPoint],
    predicate: Predicate,
    forward: bool = True,
    steps: int = DEFAULT_STEPS_PER_SEGMENT,
) -> Optional[Point]:
    """
    Return the first sample for which predicate(sample) is true.

    Args:
        control_points: Ordered control points of the curve
        predicate: Stop condition, called once per sample in traversal order
        forward: Walk from the first control point (True) or the last (False)
        steps: Samples per segment minus one

    Returns:
        The accepted sample, or None when the curve is exhausted
    """
    for p in iter_samples(control_points, forward=forward, steps=steps):
        if predicate(p):
            return p
    return None
