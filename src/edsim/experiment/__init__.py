"""Experimentation layer: replication runner, CI analysis."""

from edsim.experiment.runner import multiple_replications, run_scenario_comparison
from edsim.experiment.analysis import compute_ci, summarise_replications

__all__ = [
    "multiple_replications",
    "run_scenario_comparison",
    "compute_ci",
    "summarise_replications",
]
