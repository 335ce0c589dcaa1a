"""
Aircraft specification: a key/value text file plus a .pol polar.

An aircraft directory named NAME holds NAME.txt and NAME.pol. The text
file's first non-blank line is the aircraft name; every other line reads
"key, value unit", e.g. "Wing area, 17.95 m2".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from .config import DEFAULT_STEPS_PER_SEGMENT, MASS_PILOT_KG, MASS_PILOT_MIN_KG
from .domain import AircraftFileError
from .polar import Polar
from .polfile import load_polar

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# -----------------------------
# Aircraft model
# -----------------------------
@dataclass(frozen=True)
class Aircraft:
    name: str
    wing_span: float  # m
    wing_area: float  # m²
    length: float  # m
    mass_empty: float  # kg
    mass_max: float  # kg
    speed_max: float  # Vne (km/h)
    polar: Polar  # measured at mass_reference
    water_ballast: float = 0.0  # litres
    speed_maneuvering: float = 0.0  # km/h
    daec_index: int = 0  # DAeC handicap

    @property
    def mass_reference(self) -> float:
        """Mass the polar was measured at: empty + standard pilot."""
        return self.mass_empty + MASS_PILOT_KG

    def wing_loading(self, mass: float) -> float:
        return mass / self.wing_area

    @property
    def wing_loading_min(self) -> float:
        return (self.mass_empty + MASS_PILOT_MIN_KG) / self.wing_area

    @property
    def wing_loading_max(self) -> float:
        return self.mass_max / self.wing_area

    @property
    def speed_min(self) -> float:
        return self.polar.minimum_speed().speed

    @property
    def sink_min(self) -> float:
        return self.polar.minimum_sink().sink

    @property
    def speed_best_glide(self) -> float:
        return self.polar.best_glide().speed

    @property
    def glide_ratio_best(self) -> float:
        return self.polar.best_glide().glide_ratio()

    def polar_at(self, mass: Optional[float] = None) -> Polar:
        """The polar shifted to the given mass (the reference polar if None)."""
        if mass is None:
            return self.polar
        return self.polar.shift_polar(self.mass_reference, mass)

    # -----------------------------
    # WinPilot export
    # -----------------------------
    def to_winpilot(self, mass: Optional[float] = None) -> str:
        """
        Three-point WinPilot polar at the given mass (reference mass if None).

        Points: minimum sink, the fastest speed (capped at Vne) and the
        speed halfway between them.
        See http://www.winpilot.com/polar.asp
        """
        polar = self.polar_at(mass)
        if mass is None:
            mass = self.mass_reference

        speed3 = min(self.speed_max, polar.last.anchor.speed)  # nothing above Vne
        p1 = polar.minimum_sink()
        p3 = polar.value_at_speed(speed3)
        p2 = polar.value_at_speed((p1.speed + p3.speed) / 2)

        return (
            f"*{self.name} WinPilot POLAR file: Created by glider_polar\n"
            "*MassDryGross[kg], MaxWaterBallast[liters], Speed1[km/h], Sink1[m/s], Speed2, Sink2, Speed3, Sink3\n"
            f"{mass:g}, {self.water_ballast:g}, "
            f"{p1.speed:.2f}, {p1.sink:.2f}, {p2.speed:.2f}, {p2.sink:.2f}, {p3.speed:.2f}, {p3.sink:.2f}"
        )

    def write_winpilot(self, path: PathLike, mass: Optional[float] = None) -> None:
        Path(path).write_text(self.to_winpilot(mass), encoding="utf-8")

    # -----------------------------
    # Serialization
    # -----------------------------
    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "wing_span": self.wing_span,
            "wing_area": self.wing_area,
            "length": self.length,
            "mass_empty": self.mass_empty,
            "mass_max": self.mass_max,
            "speed_max": self.speed_max,
            "water_ballast": self.water_ballast,
            "speed_maneuvering": self.speed_maneuvering,
            "daec_index": self.daec_index,
            "polar": self.polar.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Aircraft:
        fields = dict(data)
        fields["polar"] = Polar.from_dict(fields["polar"])
        return cls(**fields)

    def __str__(self) -> str:
        return self.name or ""


# -----------------------------
# Text file parsing
# -----------------------------
def _split_lines(text: str) -> list[list[str]]:
    rows = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            rows.append([cell.strip() for cell in line.split(",")])
    return rows


def _strip_units(value: str, units: str) -> str:
    if units:
        return value.replace(f" {units}", "").strip()
    return value.replace(" ", "")


def _find_value(
    rows: list[list[str]],
    keys: tuple[str, ...],
    units: str,
    convert: Callable[[str], float] = float,
    optional: bool = False,
):
    wanted = {k.lower() for k in keys}
    for row in rows:
        if row[0].lower() in wanted and len(row) > 1:
            return convert(_strip_units(row[1], units))

    if optional:
        return convert("0")
    raise AircraftFileError(f"No matching item could be found for {' / '.join(keys)!r}.")


def parse_aircraft_text(text: str, polar: Polar) -> Aircraft:
    """Build an Aircraft from the text of a specification file."""
    rows = _split_lines(text)
    if not rows:
        raise AircraftFileError("Aircraft file is empty.")

    return Aircraft(
        name=rows[0][0],
        # Dimensions
        wing_area=_find_value(rows, ("Wing area",), "m2"),
        wing_span=_find_value(rows, ("Wing span",), "m"),
        length=_find_value(rows, ("Length",), "m"),
        # Mass
        mass_empty=_find_value(rows, ("Empty weight", "Empty mass"), "kg"),
        mass_max=_find_value(rows, ("Max weight", "Max mass"), "kg"),
        water_ballast=_find_value(rows, ("Water ballast",), "l", optional=True),
        # Speeds
        speed_maneuvering=_find_value(rows, ("Maneuvering speed",), "km/h", optional=True),
        speed_max=_find_value(rows, ("Max speed",), "km/h"),
        # Other
        daec_index=_find_value(rows, ("DAeC index",), "", convert=int),
        polar=polar,
    )


def load_aircraft(directory: PathLike, steps_per_segment: int = DEFAULT_STEPS_PER_SEGMENT) -> Aircraft:
    """Load DIR/DIR.txt and DIR/DIR.pol."""
    directory = Path(directory)
    data_file = directory / f"{directory.name}.txt"
    polar_file = directory / f"{directory.name}.pol"

    logger.info("Loading aircraft from %s", directory)
    polar = load_polar(polar_file, steps_per_segment)
    return parse_aircraft_text(data_file.read_text(encoding="utf-8"), polar)
