"""Batch simulation runner."""

import logging
from typing import Callable, Dict, List, Optional

from edsim.core.scenario import Scenario
from edsim.model.processes import run_simulation

logger = logging.getLogger(__name__)

DEFAULT_METRICS = [
    "arrivals", "treated", "untreated",
    "mean_wait", "median_wait", "p95_wait", "max_wait", "p_delay",
    "util_doctors", "util_beds", "throughput_per_hour",
    "S1_mean_wait", "S2_mean_wait", "S3_mean_wait", "S4_mean_wait", "S5_mean_wait",
]


def multiple_replications(
    scenario: Scenario,
    n_reps: int = 30,
    metric_names: Optional[List[str]] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> Dict[str, List[float]]:
    """Run multiple replications and collect specified metrics.

    Each replication uses a different random seed (base_seed + rep_number)
    to ensure independent samples. Replications run one after another.

    Args:
        scenario: Base scenario configuration.
        n_reps: Number of replications to run.
        metric_names: List of metric names to collect. Defaults to
            DEFAULT_METRICS.
        progress_callback: Optional callback(current_rep, total_reps) for
            progress reporting.

    Returns:
        Dictionary mapping metric names to lists of values across replications.
    """
    if n_reps < 1:
        raise ValueError(f"n_reps must be at least 1, got {n_reps}")
    if scenario.random_seed is None:
        raise ValueError("Replications need an integer base random_seed")

    if metric_names is None:
        metric_names = DEFAULT_METRICS

    results: Dict[str, List[float]] = {name: [] for name in metric_names}

    for rep in range(n_reps):
        rep_scenario = scenario.clone_with_seed(scenario.random_seed + rep)
        run_results = run_simulation(rep_scenario)

        for name in metric_names:
            if name in run_results:
                results[name].append(run_results[name])

        if progress_callback is not None:
            progress_callback(rep + 1, n_reps)

    logger.info(f"Completed {n_reps} replications from base seed {scenario.random_seed}")
    return results


def run_scenario_comparison(
    scenarios: Dict[str, Scenario],
    n_reps: int = 30,
    metric_names: Optional[List[str]] = None,
) -> Dict[str, Dict[str, List[float]]]:
    """Run multiple scenarios for comparison.

    Args:
        scenarios: Dictionary mapping scenario names to Scenario objects.
        n_reps: Number of replications per scenario.
        metric_names: Metrics to collect.

    Returns:
        Nested dictionary: {scenario_name: {metric_name: [values]}}.
    """
    all_results = {}

    for name, scenario in scenarios.items():
        all_results[name] = multiple_replications(
            scenario, n_reps=n_reps, metric_names=metric_names
        )

    return all_results
