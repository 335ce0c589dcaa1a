"""Pipeline orchestration: aircraft performance and speed-to-fly tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from .aircraft import Aircraft, load_aircraft
from .config import DEFAULT_MC_VALUES, DEFAULT_STEPS_PER_SEGMENT
from .polar import Polar

logger = logging.getLogger(__name__)


# Type alias for analysis result
AnalysisResult = tuple[Aircraft, pd.DataFrame, pd.DataFrame]

SUMMARY_COLUMNS = [
    "mass_kg",
    "wing_loading",
    "speed_min",
    "speed_min_sink",
    "sink_min",
    "speed_best_glide",
    "sink_best_glide",
    "glide_ratio_best",
]
STF_COLUMNS = ["mc", "wind", "speed", "sink", "glide_ratio"]


def performance_summary(aircraft: Aircraft, masses: Sequence[float]) -> pd.DataFrame:
    """
    Key performance figures for each flying mass.

    Args:
        aircraft: Aircraft with a reference polar
        masses: Flying masses (kg)

    Returns:
        DataFrame with one row per mass (see SUMMARY_COLUMNS)
    """
    rows = []
    for mass in masses:
        polar = aircraft.polar_at(mass)
        min_sink = polar.minimum_sink()
        best = polar.best_glide()
        rows.append({
            "mass_kg": float(mass),
            "wing_loading": aircraft.wing_loading(mass),
            "speed_min": polar.minimum_speed().speed,
            "speed_min_sink": min_sink.speed,
            "sink_min": min_sink.sink,
            "speed_best_glide": best.speed,
            "sink_best_glide": best.sink,
            "glide_ratio_best": best.glide_ratio(),
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def speed_to_fly_table(polar: Polar, mc_values: Sequence[float], wind: float = 0.0) -> pd.DataFrame:
    """
    Speed-to-fly for each MacCready setting.

    Raises:
        NotFoundError: if any setting has no tangent on the polar
    """
    rows = []
    for mc in np.asarray(mc_values, dtype=float):
        stf = polar.speed_to_fly(float(mc), wind)
        rows.append({
            "mc": stf.mc,
            "wind": stf.wind,
            "speed": stf.speed,
            "sink": stf.sink,
            "glide_ratio": stf.glide_ratio,
        })
    return pd.DataFrame(rows, columns=STF_COLUMNS)


def analyze(
    source_dir: Optional[Union[str, Path]],
    masses: Optional[Sequence[float]] = None,
    mc_values: Sequence[float] = DEFAULT_MC_VALUES,
    wind: float = 0.0,
    aircraft: Optional[Aircraft] = None,
    steps_per_segment: int = DEFAULT_STEPS_PER_SEGMENT,
) -> tuple[Optional[AnalysisResult], Optional[str]]:
    """
    Run the complete aircraft performance pipeline.

    1. Load the aircraft directory (unless an Aircraft is passed in)
    2. Summarize performance at each mass
    3. Tabulate speed-to-fly at each mass and MacCready setting

    Args:
        source_dir: Aircraft directory holding NAME.txt and NAME.pol
        masses: Flying masses (kg); defaults to the reference mass
        mc_values: MacCready settings (m/s)
        wind: Wind (km/h), tailwind positive
        aircraft: Already-loaded aircraft; source_dir is ignored when given
        steps_per_segment: Sampling density used when loading the polar

    Returns:
        Tuple of (result, error):
        - On success: ((aircraft, summary, speed_to_fly), None)
        - On failure: (None, error_message)
    """
    try:
        if aircraft is None:
            aircraft = load_aircraft(source_dir, steps_per_segment)
        if not masses:
            masses = [aircraft.mass_reference]

        summary = performance_summary(aircraft, masses)

        tables = []
        for mass in masses:
            table = speed_to_fly_table(aircraft.polar_at(mass), mc_values, wind=wind)
            table.insert(0, "mass_kg", float(mass))
            tables.append(table)
        stf = pd.concat(tables, ignore_index=True)

        return (aircraft, summary, stf), None

    except Exception as e:
        logger.warning("Analysis of %s failed: %s", source_dir, e)
        return None, str(e)
