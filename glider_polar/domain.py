from __future__ import annotations
import math
from dataclasses import dataclass

from .config import MPS_TO_KMH


# -----------------------------
# Errors
# -----------------------------
class PolarError(Exception):
    """Base class for every error raised by glider_polar."""


class NotFoundError(PolarError, LookupError):
    """A search along the polar ran off the end of the curve without a hit."""


class OutOfRangeError(PolarError, ValueError):
    """A curve parameter was outside [0, 1]."""


class AircraftFileError(PolarError, ValueError):
    """An aircraft specification file is missing a required entry."""


# -----------------------------
# Points on the polar chart
# -----------------------------
@dataclass(frozen=True)
class Point:
    speed: float  # airspeed (km/h)
    sink: float  # sink rate (m/s), negative = descending

    def glide_ratio(self, wind: float = 0.0) -> float:
        """Glide ratio for the given wind (km/h, tailwind positive)."""
        if self.sink == 0:
            return math.inf
        return -(self.speed + wind) / (MPS_TO_KMH * self.sink)

    def interpolate(self, other: Point, t: float) -> Point:
        """Linear interpolation a fraction t of the way from this point to other."""
        return Point(
            speed=self.speed + (t * (other.speed - self.speed)),
            sink=self.sink + (t * (other.sink - self.sink)),
        )

    def scale(self, multiplier: float) -> Point:
        return Point(speed=self.speed * multiplier, sink=self.sink * multiplier)

    def slope_from(self, origin: Point) -> float:
        """
        Slope on the chart (m/s per km/h) of the line from origin to this point.

        This is not a glide ratio. A vertical line yields a signed infinity
        (NaN if both points coincide) so comparisons behave like IEEE division.
        """
        dy = self.sink - origin.sink
        dx = self.speed - origin.speed
        if dx == 0:
            return math.copysign(math.inf, dy) if dy != 0 else math.nan
        return dy / dx

    def __str__(self) -> str:
        return f"{self.speed:.0f} km/h, {self.sink:.2f} m/s, {self.glide_ratio():.1f}:1"


@dataclass(frozen=True)
class ControlPoint:
    anchor: Point  # start/end of the neighbouring bezier segments
    previous_handle: Point  # handle used by the segment on the slow side
    next_handle: Point  # handle used by the segment on the fast side

    def scale(self, multiplier: float) -> ControlPoint:
        return ControlPoint(
            anchor=self.anchor.scale(multiplier),
            previous_handle=self.previous_handle.scale(multiplier),
            next_handle=self.next_handle.scale(multiplier),
        )


@dataclass(frozen=True)
class SpeedToFly:
    point: Point  # tangent point on the polar
    glide_ratio: float  # glide ratio of point relative to the wind
    mc: float  # MacCready setting (m/s)
    wind: float  # wind (km/h), tailwind positive

    @property
    def speed(self) -> float:
        return self.point.speed

    @property
    def sink(self) -> float:
        return self.point.sink

