"""
Unit conversion and display formatting.

The core always works in km/h, m/s, kg, litres and kg/m². These helpers
convert to and from display units; they accept floats or numpy arrays.
"""

from __future__ import annotations
from enum import StrEnum


class UnitType(StrEnum):
    METRIC = "metric"  # km/h, m/s, kg, l
    IMPERIAL = "imperial"  # kt, kt, lb, US gal
    AUSTRALIAN = "australian"  # kt, m/s, kg, l


INCH_TO_CM = 2.54
FT_TO_M = 0.3048
NM_TO_KM = 1.852
KNOT_TO_MPS = 1852.0 / 3600.0
LB_TO_KG = 0.4536
GALLON_TO_LITRE = 231 * INCH_TO_CM ** 3 / 1000  # 231 cubic inches
LB_PER_FT2_TO_KG_PER_M2 = LB_TO_KG / (FT_TO_M * FT_TO_M)


def _imperial_only(value, factor: float, to: UnitType, from_: UnitType):
    # factor converts one imperial unit to the metric unit
    if to == from_:
        return value
    if from_ == UnitType.IMPERIAL:
        value = value * factor
    if to == UnitType.IMPERIAL:
        value = value / factor
    return value


def convert_mass(value, to: UnitType, from_: UnitType = UnitType.METRIC):
    return _imperial_only(value, LB_TO_KG, to, from_)


def convert_sink_rate(value, to: UnitType, from_: UnitType = UnitType.METRIC):
    return _imperial_only(value, KNOT_TO_MPS, to, from_)


def convert_volume(value, to: UnitType, from_: UnitType = UnitType.METRIC):
    return _imperial_only(value, GALLON_TO_LITRE, to, from_)


def convert_wing_loading(value, to: UnitType, from_: UnitType = UnitType.METRIC):
    return _imperial_only(value, LB_PER_FT2_TO_KG_PER_M2, to, from_)


def convert_speed(value, to: UnitType, from_: UnitType = UnitType.METRIC):
    """Speeds are knots in every non-metric system."""
    if to == from_:
        return value
    if from_ != UnitType.METRIC:
        value = value * NM_TO_KM
    if to != UnitType.METRIC:
        value = value / NM_TO_KM
    return value


# -----------------------------
# Display strings (value already in display units)
# -----------------------------
def speed_unit(units: UnitType) -> str:
    return "km/h" if units == UnitType.METRIC else "kt"


def sink_unit(units: UnitType) -> str:
    return "kt" if units == UnitType.IMPERIAL else "m/s"


def mass_unit(units: UnitType) -> str:
    return "lb" if units == UnitType.IMPERIAL else "kg"


def wing_loading_unit(units: UnitType) -> str:
    return "lb/ft²" if units == UnitType.IMPERIAL else "kg/m²"


def format_mass(value: float, units: UnitType) -> str:
    return f"{value:,.0f} {mass_unit(units)}"


def format_sink(value: float, units: UnitType) -> str:
    return f"{value:.2f} {sink_unit(units)}"


def format_speed(value: float, units: UnitType) -> str:
    return f"{value:.0f} {speed_unit(units)}"


def format_wing_loading(value: float, units: UnitType) -> str:
    return f"{value:.1f} {wing_loading_unit(units)}"
