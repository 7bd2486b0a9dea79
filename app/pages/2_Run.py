"""Run simulation page."""

import time

import numpy as np
import streamlit as st

from edsim.experiment.runner import multiple_replications
from edsim.model.processes import run_simulation

st.set_page_config(page_title="Run - EDSim", page_icon="▶️", layout="wide")

st.title("▶️ Run Simulation")

# Check for scenario
if "scenario" not in st.session_state:
    st.warning("⚠️ Please configure a scenario first.")
    st.page_link("pages/1_Scenario.py", label="Go to Scenario Configuration", icon="📊")
    st.stop()

scenario = st.session_state.scenario
n_reps = st.session_state.get("n_reps", 30)

# Scenario summary
st.header("Current Scenario")
col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric("Horizon", f"{scenario.run_length / 60:.0f} hours")

with col2:
    st.metric("Doctors / Beds", f"{scenario.n_doctors} / {scenario.n_beds}")

with col3:
    st.metric("Base Arrivals", f"{scenario.arrival_rate:.1f} /hr")

with col4:
    st.metric("Replications", n_reps)

st.divider()

if st.button("🚀 Run Experiment", type="primary", use_container_width=True):
    progress_bar = st.progress(0)
    status_text = st.empty()

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        progress_bar.progress(current / total)
        status_text.text(f"Running replication {current}/{total}...")

    results = multiple_replications(
        scenario,
        n_reps=n_reps,
        progress_callback=progress_callback,
    )
    # One seeded run kept for patient-level charts
    sample_run = run_simulation(scenario.clone_with_seed(scenario.random_seed))

    elapsed = time.time() - start_time

    st.session_state.results = results
    st.session_state.sample_run = sample_run
    st.session_state.run_complete = True
    st.session_state.run_time = elapsed

    progress_bar.progress(1.0)
    status_text.empty()

    st.success(f"✅ Completed {n_reps} replications in {elapsed:.1f} seconds")

    st.header("Quick Summary")
    summary_cols = st.columns(3)

    with summary_cols[0]:
        st.metric("Mean Wait", f"{np.mean(results['mean_wait']):.1f} min")

    with summary_cols[1]:
        st.metric("Doctor Utilisation", f"{np.mean(results['util_doctors']):.1%}")

    with summary_cols[2]:
        st.metric("Bed Utilisation", f"{np.mean(results['util_beds']):.1%}")

    st.info("📈 Go to **Results** page for detailed analysis with confidence intervals.")

# Show previous results if they exist
elif st.session_state.get("run_complete"):
    st.info(f"✅ Previous run completed in {st.session_state.get('run_time', 0):.1f}s. "
            "Click **Run Experiment** to re-run, or view **Results**.")
