"""
Configuration constants and chart defaults.

Everything tunable lives here so the numeric core, the chart and the CLI
agree on the same defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field


# -----------------------------
# Numeric core
# -----------------------------
DEFAULT_STEPS_PER_SEGMENT = 1000  # samples per bezier segment (reference outputs rely on 1000)
MPS_TO_KMH = 3.6

# -----------------------------
# Aircraft
# -----------------------------
MASS_PILOT_KG = 80.0  # standard pilot, used for the reference mass
MASS_PILOT_MIN_KG = 70.0  # lightest pilot, used for the minimum wing loading

# MacCready settings (m/s) tabulated when none are given
DEFAULT_MC_VALUES = (0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0)


# -----------------------------
# Chart profile
# -----------------------------
@dataclass(frozen=True)
class ChartProfile:
    width_in: float = 12.0
    height_in: float = 8.0
    max_speed_kmh: float = 200.0  # right-hand edge of the chart, clipped to the shortest polar

    # grid spacing in display units, keyed by unit system value
    speed_step: dict[str, float] = field(
        default_factory=lambda: {"metric": 20.0, "imperial": 10.0, "australian": 10.0}
    )
    sink_step: dict[str, float] = field(
        default_factory=lambda: {"metric": 0.25, "imperial": 0.5, "australian": 0.25}
    )

    colors: tuple[str, ...] = ("blue", "red", "darkgreen", "darkorange", "purple")


DEFAULT_CHART = ChartProfile()
