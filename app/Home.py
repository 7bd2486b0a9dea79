"""EDSim - Home page."""

import streamlit as st

st.set_page_config(
    page_title="EDSim",
    page_icon="🏥",
    layout="wide",
)

st.title("EDSim: Emergency Department Simulation")

st.markdown("""
## What is EDSim?

**EDSim** is a discrete-event simulation of an emergency department.
Patients arrive through the day, are prioritised by medical severity
(5 = most urgent) and wait until **one doctor and one bed** are free at
the same moment.

### How allocation works:
- The most severe patient is always first in line (earliest arrival breaks ties)
- Only the head of the queue is considered; it blocks everyone behind it
- Doctors and beds are released automatically when treatment ends

### What it reports:
- Arrivals, patients treated and average wait
- Doctor and bed utilisation over the horizon
- Replication-based confidence intervals

---

**Use the sidebar** to navigate:
1. **Scenario** - Configure simulation parameters
2. **Run** - Execute the simulation
3. **Results** - View KPIs and analysis
""")

# Show quick stats if results exist
if "results" in st.session_state and st.session_state.get("run_complete"):
    st.success("Simulation complete! View results in the Results page.")
