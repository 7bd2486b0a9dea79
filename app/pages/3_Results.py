"""Results display page."""

import numpy as np
import pandas as pd
import plotly.express as px
import streamlit as st

from edsim.core.entities import Severity
from edsim.experiment.analysis import compute_ci, summarise_replications
from edsim.results.collector import patients_to_dataframe
from edsim.results.report import format_summary

st.set_page_config(page_title="Results - EDSim", page_icon="📈", layout="wide")

st.title("📈 Results")

if not st.session_state.get("run_complete"):
    st.warning("⚠️ Please run a simulation first.")
    st.page_link("pages/2_Run.py", label="Go to Run Simulation", icon="▶️")
    st.stop()

results = st.session_state.results
n_reps = len(results["arrivals"])

# ===== KEY PERFORMANCE INDICATORS =====
st.header("Key Performance Indicators")
st.caption(f"Based on {n_reps} replications | 95% Confidence Intervals")

kpi_cols = st.columns(4)

with kpi_cols[0]:
    ci = compute_ci(results["arrivals"])
    st.metric("Arrivals", f"{ci['mean']:.0f}")
    st.caption(f"Range: [{min(results['arrivals']):.0f}, {max(results['arrivals']):.0f}]")

with kpi_cols[1]:
    ci = compute_ci(results["treated"])
    st.metric("Treated", f"{ci['mean']:.0f}")
    st.caption(f"Range: [{min(results['treated']):.0f}, {max(results['treated']):.0f}]")

with kpi_cols[2]:
    ci = compute_ci(results["mean_wait"])
    st.metric("Mean Wait", f"{ci['mean']:.1f} min", help="Arrival to start of treatment")
    st.caption(f"95% CI: [{ci['ci_lower']:.1f}, {ci['ci_upper']:.1f}]")

with kpi_cols[3]:
    ci = compute_ci(results["p_delay"])
    st.metric("P(Delay)", f"{ci['mean']:.1%}", help="Share of treated patients who waited")
    st.caption(f"95% CI: [{ci['ci_lower']:.1%}, {ci['ci_upper']:.1%}]")

st.divider()

# ===== RESOURCE UTILISATION =====
st.header("Resource Utilisation")

util_data = pd.DataFrame({
    "Resource": ["Doctors", "Beds"],
    "Utilisation": [np.mean(results["util_doctors"]), np.mean(results["util_beds"])],
})

fig = px.bar(
    util_data,
    x="Resource",
    y="Utilisation",
    title="Mean Resource Utilisation",
    color="Resource",
    color_discrete_map={"Doctors": "#636efa", "Beds": "#ff4b4b"},
)
fig.update_layout(showlegend=False, yaxis_tickformat=".0%")
fig.add_hline(y=0.85, line_dash="dash", line_color="red", annotation_text="Target (85%)")
st.plotly_chart(fig, use_container_width=True)

st.divider()

# ===== WAIT BY SEVERITY =====
st.header("Wait by Severity")

severity_data = pd.DataFrame({
    "Severity": [f"S{int(s)}" for s in Severity],
    "Mean Wait (min)": [np.mean(results[f"S{int(s)}_mean_wait"]) for s in Severity],
})
fig = px.bar(severity_data, x="Severity", y="Mean Wait (min)", title="Mean Wait by Severity")
st.plotly_chart(fig, use_container_width=True)

sample_run = st.session_state.get("sample_run")
if sample_run is not None:
    st.subheader("Single run (base seed)")
    st.code(format_summary(sample_run))

    patients_df = patients_to_dataframe(sample_run["patients"])
    treated_df = patients_df[patients_df["treated"]]
    if not treated_df.empty:
        fig = px.histogram(
            treated_df,
            x="wait_time",
            color="severity",
            nbins=40,
            title="Wait Time Distribution (treated patients)",
        )
        st.plotly_chart(fig, use_container_width=True)

    with st.expander("Patient ledger"):
        st.dataframe(patients_df, use_container_width=True)

st.divider()

# ===== ALL METRICS =====
st.header("All Metrics")
st.dataframe(summarise_replications(results), use_container_width=True)
