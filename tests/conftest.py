"""
Shared fixtures.

The reference polar traces the parabola  sink = -(S0 + K * (v - VM)^2)
exactly: each cubic segment has its handles a third of the way along the
end tangents, which is the degree-elevated form of the quadratic. That gives
closed-form answers for the sampled searches:

    minimum sink    v = VM
    speed to fly    v = VM + x,  x = -d + sqrt(d^2 + (S0 + mc) / K),  d = VM + wind
    best glide      v = sqrt(VM^2 + S0 / K) = 100 km/h
"""

import math

import pytest

from glider_polar.domain import ControlPoint, Point
from glider_polar.polar import Polar
from glider_polar.polfile import save_polar


S0 = 0.64  # m/s
K = 0.0001  # m/s per (km/h)^2
VM = 60.0  # km/h
ANCHORS = (50.0, 150.0, 250.0)


def sink_at(v: float) -> float:
    return -(S0 + K * (v - VM) ** 2)


def sink_slope_at(v: float) -> float:
    return -2.0 * K * (v - VM)


def tangent_speed(mc: float, wind: float = 0.0) -> float:
    d = VM + wind
    return VM - d + math.sqrt(d * d + (S0 + mc) / K)


def make_parabolic_polar(anchors=ANCHORS, steps_per_segment: int = 1000) -> Polar:
    control_points = []
    for i, v in enumerate(anchors):
        # a third of the neighbouring segment width on each side
        left = (v - anchors[i - 1]) / 3 if i > 0 else (anchors[1] - anchors[0]) / 3
        right = (anchors[i + 1] - v) / 3 if i < len(anchors) - 1 else left
        g, dg = sink_at(v), sink_slope_at(v)
        control_points.append(ControlPoint(
            anchor=Point(v, g),
            previous_handle=Point(v - left, g - dg * left),
            next_handle=Point(v + right, g + dg * right),
        ))
    return Polar(control_points=tuple(control_points), steps_per_segment=steps_per_segment)


ASK21_TEXT = """Alexander Schleicher ASK21

Wing span, 17 m
Wing area, 17.95 m2
Length, 8.35 m
Empty weight, 360 kg
Max weight, 600 kg
Water ballast, 0 l
Maneuvering speed, 180 km/h
Max speed, 220 km/h
DAeC index, 92
"""


@pytest.fixture
def polar():
    return make_parabolic_polar()


@pytest.fixture
def five_point_polar():
    return make_parabolic_polar(anchors=(50.0, 80.0, 120.0, 180.0, 250.0))


@pytest.fixture
def aircraft_dir(tmp_path, five_point_polar):
    """An aircraft directory laid out like the simulator's: ASK21/ASK21.{txt,pol}."""
    d = tmp_path / "ASK21"
    d.mkdir()
    (d / "ASK21.txt").write_text(ASK21_TEXT, encoding="utf-8")
    save_polar(five_point_polar, d / "ASK21.pol")
    return d
