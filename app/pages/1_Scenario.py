"""Scenario configuration page."""

import pandas as pd
import streamlit as st

from edsim.core.arrivals import default_hourly_multipliers
from edsim.core.scenario import Scenario

st.set_page_config(page_title="Scenario - EDSim", page_icon="📊", layout="wide")

st.title("📊 Scenario Configuration")

# Initialize session state
if "scenario" not in st.session_state:
    st.session_state.scenario = Scenario()
if "n_reps" not in st.session_state:
    st.session_state.n_reps = 30

scenario = st.session_state.scenario

tab_time, tab_resources, tab_arrivals, tab_experiment = st.tabs([
    "Timing", "Resources", "Arrivals", "Experiment"
])

# ===== TIMING TAB =====
with tab_time:
    st.header("Simulation Timing")

    run_hours = st.slider(
        "Arrival horizon (hours)",
        min_value=1,
        max_value=72,
        value=int(scenario.run_length / 60),
        help="Patients arrive until the horizon; the queue then drains",
    )
    jump = st.checkbox(
        "Jump clock to next event",
        value=scenario.jump_to_next_event,
        help="Same results as minute stepping, fewer iterations",
    )

# ===== RESOURCES TAB =====
with tab_resources:
    st.header("Resource Configuration")

    col1, col2 = st.columns(2)

    with col1:
        n_doctors = st.slider("Doctors", min_value=0, max_value=30, value=scenario.n_doctors)

    with col2:
        n_beds = st.slider("Beds", min_value=0, max_value=60, value=scenario.n_beds)

    if n_doctors == 0 or n_beds == 0:
        st.warning("⚠️ A closed pool means nobody can be treated.")

# ===== ARRIVALS TAB =====
with tab_arrivals:
    st.header("Arrivals")

    arrival_rate = st.number_input(
        "Base arrival rate (patients per hour)",
        min_value=0.1,
        max_value=60.0,
        value=float(scenario.arrival_rate),
        step=0.5,
    )

    st.subheader("Hour-of-day multiplier")
    profile_df = pd.DataFrame({
        "Hour": [f"{h:02d}:00" for h in range(24)],
        "Multiplier": default_hourly_multipliers(),
        "Rate (per hour)": [arrival_rate * m for m in default_hourly_multipliers()],
    })
    st.line_chart(profile_df.set_index("Hour")["Rate (per hour)"], use_container_width=True)

# ===== EXPERIMENT TAB =====
with tab_experiment:
    st.header("Experiment Settings")

    col1, col2 = st.columns(2)

    with col1:
        n_reps = st.number_input(
            "Replications",
            min_value=1,
            max_value=500,
            value=st.session_state.n_reps,
        )

    with col2:
        seed = st.number_input(
            "Base random seed",
            min_value=0,
            max_value=2**31 - 1,
            value=int(scenario.random_seed if scenario.random_seed is not None else 42),
        )

st.divider()

if st.button("💾 Save Scenario", type="primary", use_container_width=True):
    try:
        st.session_state.scenario = Scenario(
            run_length=run_hours * 60,
            n_doctors=n_doctors,
            n_beds=n_beds,
            arrival_rate=arrival_rate,
            jump_to_next_event=jump,
            random_seed=int(seed),
        )
    except ValueError as exc:
        st.error(f"Invalid scenario: {exc}")
    else:
        st.session_state.n_reps = int(n_reps)
        st.session_state.run_complete = False
        st.success("✅ Scenario saved. Go to **Run** to execute it.")
