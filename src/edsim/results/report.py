"""Human-readable summary of a simulation run."""

from typing import Any, Dict, List, Optional

GREEDY_NOTE = (
    "Note: resources are allocated greedily to the head of the queue; "
    "this is not an optimal assignment."
)


def format_summary(metrics: Dict[str, Any], include_note: bool = True) -> str:
    """Format run metrics as the plain-text results block.

    Args:
        metrics: Output of run_simulation or ResultsCollector.compute_metrics.
        include_note: Append the greedy-allocation note.

    Returns:
        Multi-line summary string.
    """
    lines = [
        "=== Hospital Simulation Results ===",
        f"Total Patients Arrived: {metrics['arrivals']}",
        f"Patients Treated: {metrics['treated']}",
        f"Average Wait Time (minutes): {metrics['mean_wait']:.2f}",
        f"Doctor Utilization: {metrics['util_doctors'] * 100:.2f}%",
        f"Bed Utilization: {metrics['util_beds'] * 100:.2f}%",
    ]
    if include_note:
        lines.append(GREEDY_NOTE)
    return "\n".join(lines)


def format_replication_summary(summary_rows: List[Dict[str, Any]], title: Optional[str] = None) -> str:
    """Format per-metric confidence intervals, one line per metric."""
    lines = [title or "=== Replication Summary ==="]
    for row in summary_rows:
        lines.append(
            f"{row['metric']}: {row['mean']:.2f} "
            f"[{row['ci_lower']:.2f}, {row['ci_upper']:.2f}] (n={row['n']})"
        )
    return "\n".join(lines)
