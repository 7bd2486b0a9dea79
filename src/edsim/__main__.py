"""Command-line entry point: python -m edsim."""

import argparse
import logging
import sys
from typing import List, Optional

from edsim.core.scenario import Scenario
from edsim.experiment.analysis import summarise_replications
from edsim.experiment.runner import multiple_replications
from edsim.model.processes import run_simulation
from edsim.results.collector import patients_to_dataframe
from edsim.results.report import format_replication_summary, format_summary

SUMMARY_METRICS = ["arrivals", "treated", "mean_wait", "util_doctors", "util_beds"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edsim",
        description="Emergency department simulation (doctors + beds, severity priority)",
    )
    parser.add_argument("--run-length", type=int, default=1440,
                        help="Arrival horizon in minutes (default: 1440)")
    parser.add_argument("--doctors", type=int, default=5, help="Number of doctors (default: 5)")
    parser.add_argument("--beds", type=int, default=10, help="Number of beds (default: 10)")
    parser.add_argument("--arrival-rate", type=float, default=5.0,
                        help="Base arrivals per hour (default: 5.0)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: OS entropy for one run, 42 for replications)")
    parser.add_argument("--jump", action="store_true",
                        help="Jump the clock straight to the next event")
    parser.add_argument("--reps", type=int, default=1,
                        help="Number of replications; >1 prints 95%% confidence intervals")
    parser.add_argument("--patients-csv", default=None,
                        help="Write the patient ledger of a single run to this CSV file")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.reps < 1:
        parser.error(f"--reps must be at least 1, got {args.reps}")

    seed = args.seed
    if seed is None and args.reps > 1:
        seed = 42

    try:
        scenario = Scenario(
            run_length=args.run_length,
            n_doctors=args.doctors,
            n_beds=args.beds,
            arrival_rate=args.arrival_rate,
            jump_to_next_event=args.jump,
            random_seed=seed,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.reps > 1:
        results = multiple_replications(scenario, n_reps=args.reps, metric_names=SUMMARY_METRICS)
        summary = summarise_replications(results)
        print(format_replication_summary(
            summary.to_dict("records"),
            title=f"=== Hospital Simulation Results ({args.reps} replications, 95% CI) ===",
        ))
        return 0

    results = run_simulation(scenario)
    print(format_summary(results))

    if args.patients_csv:
        patients_to_dataframe(results["patients"]).to_csv(args.patients_csv, index=False)

    return 0


if __name__ == "__main__":
    sys.exit(main())
