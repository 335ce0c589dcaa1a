"""
Glider Polar - Sailplane Performance Toolkit

Models a glider's polar (sink rate vs. airspeed) as a chain of cubic
bezier segments and derives best glide, minimum sink and MacCready
speed-to-fly from it. Reads Condor-style .pol files and aircraft
specification files, rescales polars for ballast, and renders charts.
"""

from .domain import (
    AircraftFileError,
    ControlPoint,
    NotFoundError,
    OutOfRangeError,
    Point,
    PolarError,
    SpeedToFly,
)
from .bezier import evaluate
from .walker import iter_samples, walk
from .polar import Polar
from .polfile import load_polar, read_polar, save_polar, write_polar
from .aircraft import Aircraft, load_aircraft, parse_aircraft_text
from .units import UnitType
from .analyze import analyze, performance_summary, speed_to_fly_table

__all__ = [
    # Domain models
    "Point",
    "ControlPoint",
    "SpeedToFly",
    # Errors
    "PolarError",
    "NotFoundError",
    "OutOfRangeError",
    "AircraftFileError",
    # Curve evaluation
    "evaluate",
    "iter_samples",
    "walk",
    # Polar
    "Polar",
    # Files
    "read_polar",
    "load_polar",
    "write_polar",
    "save_polar",
    # Aircraft
    "Aircraft",
    "load_aircraft",
    "parse_aircraft_text",
    "UnitType",
    # Pipeline
    "analyze",
    "performance_summary",
    "speed_to_fly_table",
]

__version__ = "0.1.0"
