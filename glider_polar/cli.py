"""
Command-line performance report for a glider.

How to run:
python -m glider_polar planes/ASK21 --mass 440 600 --mc 0 1 2 3.5 --plot ask21.png

The aircraft directory must contain NAME.txt and NAME.pol, NAME being the
directory name.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")  # files only, no display

import pandas as pd

from .analyze import analyze
from .config import DEFAULT_CHART, DEFAULT_MC_VALUES, DEFAULT_STEPS_PER_SEGMENT, ChartProfile
from .logging_config import setup_logging
from .render import make_polar_figure
from .units import UnitType, convert_sink_rate, convert_speed, sink_unit, speed_unit

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="glider-polar", description="Glider polar performance report")
    parser.add_argument("aircraft_dir", type=str, help="Aircraft directory holding NAME.txt and NAME.pol")
    parser.add_argument("--mass", type=float, nargs="+", default=None, help="Flying mass(es) in kg (default: reference mass)")
    parser.add_argument("--mc", type=float, nargs="+", default=list(DEFAULT_MC_VALUES), help="MacCready settings in m/s")
    parser.add_argument("--wind", type=float, default=0.0, help="Wind in km/h, tailwind positive")
    parser.add_argument("--units", type=str, choices=[u.value for u in UnitType], default=UnitType.METRIC.value)
    parser.add_argument("--steps", type=int, default=DEFAULT_STEPS_PER_SEGMENT, help="Samples per bezier segment")
    parser.add_argument("--plot", type=str, default=None, help="Write the polar chart to this image file")
    parser.add_argument("--max-speed", type=float, default=DEFAULT_CHART.max_speed_kmh, help="Chart speed limit in km/h")
    parser.add_argument("--winpilot", type=str, default=None, help="Write a WinPilot polar for the first mass")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _display(df: pd.DataFrame, units: UnitType, speed_cols: Sequence[str], sink_cols: Sequence[str]) -> pd.DataFrame:
    out = df.copy()
    for c in speed_cols:
        out[c] = convert_speed(out[c].to_numpy(float), units)
    for c in sink_cols:
        out[c] = convert_sink_rate(out[c].to_numpy(float), units)
    return out


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    units = UnitType(args.units)
    logger.debug("Arguments: %s", args)

    result, error = analyze(
        args.aircraft_dir,
        masses=args.mass,
        mc_values=args.mc,
        wind=args.wind,
        steps_per_segment=args.steps,
    )
    if error is not None:
        print(f"Error: {error}")
        return 1

    aircraft, summary, stf = result

    print(aircraft.name)
    print(f"Reference mass: {aircraft.mass_reference:.0f} kg, Vne: {aircraft.speed_max:.0f} km/h")
    print()
    print(f"Performance (speeds {speed_unit(units)}, sinks {sink_unit(units)})")
    print(_display(
        summary, units,
        speed_cols=["speed_min", "speed_min_sink", "speed_best_glide"],
        sink_cols=["sink_min", "sink_best_glide"],
    ).to_string(index=False, float_format=lambda v: f"{v:.2f}"))
    print()
    print(f"Speed to fly (wind {args.wind:+.0f} km/h)")
    print(_display(stf, units, speed_cols=["speed"], sink_cols=["sink"]).to_string(
        index=False, float_format=lambda v: f"{v:.2f}"
    ))

    if args.plot:
        fig = make_polar_figure(
            aircraft,
            masses=list(summary["mass_kg"]),
            units=units,
            chart=ChartProfile(max_speed_kmh=args.max_speed),
        )
        fig.savefig(args.plot, dpi=150)
        print(f"Plot:     {Path(args.plot)}")

    if args.winpilot:
        mass = args.mass[0] if args.mass else None
        aircraft.write_winpilot(args.winpilot, mass=mass)
        print(f"WinPilot: {Path(args.winpilot)}")

    return 0
