"""
EDSim - Emergency Department Simulation.

A discrete-event simulation of an emergency department where patients,
prioritised by severity, compete for doctors and beds.
"""

__version__ = "0.1.0"

from edsim.core.scenario import Scenario
from edsim.model.processes import run_simulation

__all__ = ["Scenario", "run_simulation", "__version__"]
