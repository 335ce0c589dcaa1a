"""Glider polar: sink rate vs. airspeed as a chain of cubic bezier segments."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
import pandas as pd

from .config import DEFAULT_STEPS_PER_SEGMENT
from .domain import ControlPoint, NotFoundError, Point, SpeedToFly
from .walker import iter_samples, walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Polar:
    """
    Immutable polar curve.

    Control points are ordered from the slowest speed (first anchor) to the
    fastest (last anchor). The segment between control points i and i+1 is
    the cubic bezier [anchor_i, next_handle_i, previous_handle_i+1, anchor_i+1].

    All searches sample each segment at `steps_per_segment` + 1 evenly spaced
    parameters and return the first sample that meets their stop condition,
    so results are accurate to roughly one sample step.
    """

    control_points: tuple[ControlPoint, ...]
    steps_per_segment: int = DEFAULT_STEPS_PER_SEGMENT

    def __post_init__(self):
        points = tuple(self.control_points)
        if len(points) < 2:
            raise ValueError(f"A polar needs at least two control points, got {len(points)}.")
        if self.steps_per_segment < 1:
            raise ValueError(f"steps_per_segment must be at least 1, got {self.steps_per_segment}.")
        object.__setattr__(self, "control_points", points)

    # -----------------------------
    # Sequence behaviour
    # -----------------------------
    def __len__(self) -> int:
        return len(self.control_points)

    def __iter__(self) -> Iterator[ControlPoint]:
        return iter(self.control_points)

    def __getitem__(self, index: int) -> ControlPoint:
        return self.control_points[index]

    @property
    def first(self) -> ControlPoint:
        return self.control_points[0]

    @property
    def last(self) -> ControlPoint:
        return self.control_points[-1]

    def _walk(self, predicate, forward: bool = True) -> Optional[Point]:
        return walk(self.control_points, predicate, forward=forward, steps=self.steps_per_segment)

    # -----------------------------
    # Queries
    # -----------------------------
    def value_at_speed(self, speed: float) -> Point:
        """
        Point on the polar at the given speed (km/h).

        The two samples bracketing the speed are averaged (midpoint), which is
        accurate to about one sample step rather than an exact inverse.

        Raises:
            NotFoundError: if the speed is outside the curve
        """
        last: Optional[Point] = None

        def brackets(p: Point) -> bool:
            nonlocal last
            if last is not None and last.speed <= speed <= p.speed:
                return True
            last = p
            return False

        output = self._walk(brackets)
        if output is None:
            logger.debug("value_at_speed(%s) ran off the curve", speed)
            raise NotFoundError(f"No value could be found on the polar at {speed:.0f} km/h.")

        return last.interpolate(output, 0.5)

    def minimum_sink(self) -> Point:
        """
        Sample with the least sink rate.

        Stops at the first sample where the sink rate gets worse and returns
        the one before it, i.e. the first local minimum in speed order.
        """
        last: Optional[Point] = None

        def turned(p: Point) -> bool:
            nonlocal last
            if last is not None and p.sink < last.sink:
                return True
            last = p
            return False

        if self._walk(turned) is None:
            raise NotFoundError("No minimum sink rate value could be found.")
        return last

    def minimum_speed(self) -> Point:
        return self.first.anchor

    def speed_to_fly(self, mc: float, wind: float = 0.0) -> SpeedToFly:
        """
        MacCready speed-to-fly.

        Finds the sample where a line drawn from (-wind, mc) touches the
        polar: the slope from that origin rises along the curve until the
        tangent point and falls after it.

        Args:
            mc: MacCready setting, expected climb in the next thermal (m/s)
            wind: Wind speed (km/h), tailwind positive

        Raises:
            NotFoundError: if no tangent exists within the curve's speed range
        """
        origin = Point(speed=-wind, sink=mc)
        last_slope = -sys.float_info.max  # chart slope, not a glide ratio
        last_point: Optional[Point] = None

        def past_tangent(p: Point) -> bool:
            nonlocal last_slope, last_point
            slope = p.slope_from(origin)
            if slope < last_slope:
                return True
            last_slope = slope
            last_point = p
            return False

        if self._walk(past_tangent) is None or last_point is None:
            logger.debug("No tangent from mc=%s, wind=%s", mc, wind)
            raise NotFoundError("No speed-to-fly value could be found.")

        return SpeedToFly(point=last_point, glide_ratio=last_point.glide_ratio(wind), mc=mc, wind=wind)

    def best_glide(self) -> Point:
        return self.speed_to_fly(0.0, 0.0).point

    # -----------------------------
    # Derived polars
    # -----------------------------
    def shift_polar(self, ref_mass: float, new_mass: float) -> Polar:
        """
        The same polar flown at a different mass.

        Speed and sink both scale with sqrt(new_mass / ref_mass), so glide
        ratios along the curve are unchanged.
        """
        if ref_mass <= 0 or new_mass <= 0:
            raise ValueError(f"Masses must be positive, got ref_mass={ref_mass}, new_mass={new_mass}.")

        multiplier = math.sqrt(new_mass / ref_mass)
        logger.debug("Shifting polar %s kg -> %s kg (x%.4f)", ref_mass, new_mass, multiplier)

        return Polar(
            control_points=tuple(cp.scale(multiplier) for cp in self.control_points),
            steps_per_segment=self.steps_per_segment,
        )

    # -----------------------------
    # Export helpers
    # -----------------------------
    def samples(self, forward: bool = True) -> np.ndarray:
        """Every walk sample as an (n, 2) array of (speed, sink)."""
        pts = [(p.speed, p.sink) for p in iter_samples(self.control_points, forward, self.steps_per_segment)]
        return np.asarray(pts, dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """One row per control point."""
        return pd.DataFrame(
            [
                {
                    "speed": cp.anchor.speed,
                    "sink": cp.anchor.sink,
                    "prev_speed": cp.previous_handle.speed,
                    "prev_sink": cp.previous_handle.sink,
                    "next_speed": cp.next_handle.speed,
                    "next_sink": cp.next_handle.sink,
                }
                for cp in self.control_points
            ],
            columns=["speed", "sink", "prev_speed", "prev_sink", "next_speed", "next_sink"],
        )

    def to_dict(self) -> dict:
        return {
            "steps_per_segment": self.steps_per_segment,
            "control_points": [
                {
                    "anchor": [cp.anchor.speed, cp.anchor.sink],
                    "previous_handle": [cp.previous_handle.speed, cp.previous_handle.sink],
                    "next_handle": [cp.next_handle.speed, cp.next_handle.sink],
                }
                for cp in self.control_points
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Polar:
        return cls(
            control_points=tuple(
                ControlPoint(
                    anchor=Point(*cp["anchor"]),
                    previous_handle=Point(*cp["previous_handle"]),
                    next_handle=Point(*cp["next_handle"]),
                )
                for cp in data["control_points"]
            ),
            steps_per_segment=int(data.get("steps_per_segment", DEFAULT_STEPS_PER_SEGMENT)),
        )
