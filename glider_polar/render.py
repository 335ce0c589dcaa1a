from __future__ import annotations
import math
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .aircraft import Aircraft
from .config import DEFAULT_CHART, ChartProfile
from .units import (
    UnitType,
    convert_mass,
    convert_sink_rate,
    convert_speed,
    convert_wing_loading,
    format_mass,
    format_wing_loading,
    sink_unit,
    speed_unit,
)


def make_polar_figure(
    aircraft: Aircraft,
    masses: Optional[Sequence[float]] = None,
    units: UnitType = UnitType.METRIC,
    mc: Optional[float] = None,
    wind: float = 0.0,
    chart: ChartProfile = DEFAULT_CHART,
):
    masses = list(masses) if masses else [aircraft.mass_reference]
    polars = [aircraft.polar_at(m) for m in masses]

    # Clip to the shortest polar so every curve spans the chart
    max_speed = min(chart.max_speed_kmh, min(p.last.anchor.speed for p in polars))

    curves = []
    for polar in polars:
        pts = polar.samples()
        curves.append(pts[pts[:, 0] <= max_speed])
    min_sink = min(float(c[:, 1].min()) for c in curves)

    # --- Grid extents in display units ---
    speed_step = chart.speed_step[units.value]
    sink_step = chart.sink_step[units.value]
    display_speed = math.ceil(convert_speed(max_speed, units) / speed_step) * speed_step
    display_sink = math.floor(convert_sink_rate(min_sink, units) / sink_step) * sink_step

    fig, ax = plt.subplots(figsize=(chart.width_in, chart.height_in))

    # --- Polars ---
    for i, (mass, polar, pts) in enumerate(zip(masses, polars, curves)):
        color = chart.colors[i % len(chart.colors)]
        mass_text = format_mass(convert_mass(mass, units), units)
        wl_text = format_wing_loading(convert_wing_loading(aircraft.wing_loading(mass), units), units)

        ax.plot(
            convert_speed(pts[:, 0], units),
            convert_sink_rate(pts[:, 1], units),
            color=color,
            linewidth=2.0,
            label=f"{mass_text}  ~ {wl_text}",
        )

        # --- Speed-to-fly tangent from (-wind, mc) ---
        if mc is not None:
            stf = polar.speed_to_fly(mc, wind)
            xs = np.array([-wind, stf.speed])
            ys = np.array([mc, stf.sink])
            ax.plot(convert_speed(xs, units), convert_sink_rate(ys, units), color=color, linestyle="--", linewidth=1.0)
            ax.plot(
                convert_speed(stf.speed, units),
                convert_sink_rate(stf.sink, units),
                marker="o",
                color=color,
            )

    ax.set_xlim(0.0, display_speed)
    ax.set_ylim(display_sink, 0.0 if mc is None else max(0.0, convert_sink_rate(mc, units)))
    ax.set_xticks(np.arange(0.0, display_speed + speed_step / 2, speed_step))
    ax.set_yticks(np.arange(display_sink, sink_step / 2, sink_step))
    ax.set_xlabel(f"Speed ({speed_unit(units)})")
    ax.set_ylabel(f"Sink ({sink_unit(units)})")
    ax.grid(True, linestyle="--", color="lightgray")
    ax.legend(loc="lower left")

    ax.set_title(aircraft.name, fontweight="bold")
    fig.tight_layout()
    return fig
