import io

import streamlit as st

from glider_polar.aircraft import parse_aircraft_text
from glider_polar.analyze import analyze
from glider_polar.config import DEFAULT_CHART, DEFAULT_MC_VALUES, ChartProfile
from glider_polar.logging_config import setup_logging
from glider_polar.polfile import read_polar
from glider_polar.render import make_polar_figure
from glider_polar.units import UnitType, format_mass, format_sink, format_speed, convert_mass, convert_sink_rate, convert_speed

setup_logging()


# -----------------------------
# Streamlit page setup
# -----------------------------
st.set_page_config(page_title="Glider Polar Explorer", layout="wide")
st.title("Glider Polar Explorer")
st.write("Upload a .pol polar and its aircraft .txt file, pick masses and MacCready settings, and compare performance.")


# -----------------------------
# Uploads
# -----------------------------
col_pol, col_txt = st.columns(2)
pol_file = col_pol.file_uploader("Polar (.pol)", type=["pol"])
txt_file = col_txt.file_uploader("Aircraft specification (.txt)", type=["txt"])

if pol_file is None or txt_file is None:
    st.info("Upload both files to begin. They live side by side in each aircraft directory (NAME/NAME.pol, NAME/NAME.txt).")
    st.stop()

try:
    polar = read_polar(io.BytesIO(pol_file.getvalue()))
    aircraft = parse_aircraft_text(txt_file.getvalue().decode("utf-8"), polar)
except Exception as e:
    st.error(f"Error while reading aircraft files: {e}")
    st.stop()


# -----------------------------
# Sidebar: masses, MacCready, wind, units
# -----------------------------
with st.sidebar:
    st.header("Settings")

    units = UnitType(st.selectbox("Units", options=[u.value for u in UnitType], index=0))

    st.subheader("Masses")
    masses = []
    if st.checkbox(f"Reference ({aircraft.mass_reference:.0f} kg)", value=True):
        masses.append(aircraft.mass_reference)
    if st.checkbox(f"Two pilots ({aircraft.mass_reference + 80:.0f} kg)", value=False):
        masses.append(aircraft.mass_reference + 80)
    if st.checkbox(f"Max ({aircraft.mass_max:.0f} kg)", value=True):
        masses.append(aircraft.mass_max)
    custom = st.number_input("Custom mass (kg, 0 = off)", min_value=0.0, value=0.0, step=10.0)
    if custom > 0:
        masses.append(float(custom))

    st.divider()
    st.subheader("Speed to fly")
    mc = st.slider("MacCready (m/s)", min_value=0.0, max_value=5.0, value=0.0, step=0.5)
    wind = st.number_input("Wind (km/h, tailwind positive)", value=0.0, step=5.0)
    max_speed = st.number_input("Chart max speed (km/h)", value=float(DEFAULT_CHART.max_speed_kmh), step=10.0)

if not masses:
    st.warning("Select at least one mass.")
    st.stop()


# -----------------------------
# Run analysis
# -----------------------------
result, err = analyze(None, masses=masses, mc_values=DEFAULT_MC_VALUES, wind=wind, aircraft=aircraft)

if err or result is None:
    st.error(err or "Analysis failed (no result returned).")
    st.stop()

aircraft, summary, stf = result


# -----------------------------
# Display results
# -----------------------------
col1, col2, col3, col4 = st.columns(4)
col1.metric("Reference mass", format_mass(convert_mass(aircraft.mass_reference, units), units))
col2.metric("Best glide", f"{aircraft.glide_ratio_best:.1f}:1")
col3.metric("Best glide speed", format_speed(convert_speed(aircraft.speed_best_glide, units), units))
col4.metric("Minimum sink", format_sink(convert_sink_rate(aircraft.sink_min, units), units))

st.subheader("Performance by mass (native units: km/h, m/s)")
st.dataframe(summary.style.format("{:.2f}"), use_container_width=True)

st.subheader("Speed to fly")
st.dataframe(
    stf.pivot_table(index="mc", columns="mass_kg", values="speed").round(0),
    use_container_width=True,
)

st.subheader("Polar")
try:
    fig = make_polar_figure(
        aircraft,
        masses=masses,
        units=units,
        mc=mc,
        wind=wind,
        chart=ChartProfile(max_speed_kmh=max_speed),
    )
    st.pyplot(fig, clear_figure=True)
except Exception as e:
    st.error(f"Error while drawing the polar: {e}")

st.download_button(
    "Download WinPilot polar (first mass)",
    data=aircraft.to_winpilot(masses[0]),
    file_name=f"{aircraft.name}.plr",
)

with st.expander("Control points"):
    st.dataframe(aircraft.polar.to_frame(), use_container_width=True)
