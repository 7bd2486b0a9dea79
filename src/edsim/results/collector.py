"""Metrics accumulation during simulation runs."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List

import numpy as np
import pandas as pd

from edsim.core.entities import PoolType, Severity

if TYPE_CHECKING:
    from edsim.model.patient import Patient


@dataclass
class ResultsCollector:
    """Collect and compute simulation metrics.

    Accumulates counts and times as the run proceeds; summary KPIs are
    derived once at the end with compute_metrics().

    Attributes:
        arrivals: Total patients generated.
        treated: Patients matched to a doctor and a bed.
        total_wait: Cumulative wait of treated patients (minutes).
        wait_times: Individual waits of treated patients.
        arrivals_by_severity: Arrival count per severity level.
        waits_by_severity: Waits of treated patients per severity level.
        busy_minutes: Treatment minutes booked per pool (whole treatments).
        busy_minutes_in_horizon: Booked minutes falling inside [0, horizon].
    """

    arrivals: int = 0
    treated: int = 0
    total_wait: float = 0.0
    wait_times: List[int] = field(default_factory=list)
    arrivals_by_severity: Dict[Severity, int] = field(default_factory=lambda: defaultdict(int))
    waits_by_severity: Dict[Severity, List[int]] = field(default_factory=lambda: defaultdict(list))
    busy_minutes: Dict[PoolType, float] = field(
        default_factory=lambda: {pool: 0.0 for pool in PoolType}
    )
    busy_minutes_in_horizon: Dict[PoolType, float] = field(
        default_factory=lambda: {pool: 0.0 for pool in PoolType}
    )

    def record_arrival(self, patient: "Patient") -> None:
        """Record a newly generated patient."""
        self.arrivals += 1
        self.arrivals_by_severity[Severity(patient.severity)] += 1

    def record_assignment(self, patient: "Patient", horizon: float) -> None:
        """Record a successful doctor + bed assignment.

        Args:
            patient: The patient just assigned (wait and start already set).
            horizon: Run length, used to split busy time inside the horizon.
        """
        self.treated += 1
        self.total_wait += patient.wait_time
        self.wait_times.append(patient.wait_time)
        self.waits_by_severity[Severity(patient.severity)].append(patient.wait_time)

        start = patient.treatment_start
        end = patient.treatment_end
        in_horizon = max(0.0, min(end, horizon) - min(start, horizon))
        # One doctor and one bed per treatment
        for pool in PoolType:
            self.busy_minutes[pool] += patient.treatment_duration
            self.busy_minutes_in_horizon[pool] += in_horizon

    def utilisation(self, pool: PoolType, run_length: float, capacity: int) -> float:
        """Fraction of pool time spent treating within the horizon.

        Returns 0.0 for an empty pool or zero-length run.
        """
        if capacity <= 0 or run_length <= 0:
            return 0.0
        return self.busy_minutes_in_horizon[pool] / (capacity * run_length)

    def compute_metrics(self, run_length: float, n_doctors: int, n_beds: int) -> Dict[str, Any]:
        """Compute all KPIs from collected data.

        Args:
            run_length: Simulation horizon (minutes).
            n_doctors: Doctor pool capacity.
            n_beds: Bed pool capacity.

        Returns:
            Flat dictionary of named metrics:
            - arrivals, treated, untreated: Counts
            - mean_wait, median_wait, p95_wait, max_wait, total_wait
            - p_delay: Proportion of treated patients who waited
            - util_doctors, util_beds: Utilisation within the horizon
            - busy_minutes_doctors, busy_minutes_beds
            - throughput_per_hour: Treated per hour of horizon
            - arrivals_S{n}, treated_S{n}, S{n}_mean_wait per severity
        """
        if self.wait_times:
            waits = np.array(self.wait_times)
            mean_wait = self.total_wait / self.treated
            median_wait = float(np.percentile(waits, 50))
            p95_wait = float(np.percentile(waits, 95))
            max_wait = float(np.max(waits))
            p_delay = float(np.mean(waits > 0))
        else:
            mean_wait = median_wait = p95_wait = max_wait = p_delay = 0.0

        metrics: Dict[str, Any] = {
            "arrivals": self.arrivals,
            "treated": self.treated,
            "untreated": self.arrivals - self.treated,
            "mean_wait": float(mean_wait),
            "median_wait": median_wait,
            "p95_wait": p95_wait,
            "max_wait": max_wait,
            "p_delay": p_delay,
            "total_wait": float(self.total_wait),
            "util_doctors": self.utilisation(PoolType.DOCTORS, run_length, n_doctors),
            "util_beds": self.utilisation(PoolType.BEDS, run_length, n_beds),
            "busy_minutes_doctors": self.busy_minutes[PoolType.DOCTORS],
            "busy_minutes_beds": self.busy_minutes[PoolType.BEDS],
            "throughput_per_hour": self.treated / (run_length / 60) if run_length > 0 else 0.0,
        }

        for severity in Severity:
            n = int(severity)
            waits = self.waits_by_severity.get(severity, [])
            metrics[f"arrivals_S{n}"] = self.arrivals_by_severity.get(severity, 0)
            metrics[f"treated_S{n}"] = len(waits)
            metrics[f"S{n}_mean_wait"] = float(np.mean(waits)) if waits else 0.0

        return metrics


PATIENT_COLUMNS = [
    "id", "arrival_time", "severity", "treatment_duration", "wait_time",
    "treatment_start", "treatment_end", "treated", "doctor_id", "bed_id",
]


def patients_to_dataframe(patients: Iterable["Patient"]) -> pd.DataFrame:
    """Patient ledger as a DataFrame, one row per generated patient.

    Untreated patients have NaN start/end and resource ids.
    """
    rows = [
        {
            "id": p.id,
            "arrival_time": p.arrival_time,
            "severity": int(p.severity),
            "treatment_duration": p.treatment_duration,
            "wait_time": p.wait_time if p.is_treated else np.nan,
            "treatment_start": p.treatment_start,
            "treatment_end": p.treatment_end,
            "treated": p.is_treated,
            "doctor_id": p.doctor_id,
            "bed_id": p.bed_id,
        }
        for p in patients
    ]
    return pd.DataFrame(rows, columns=PATIENT_COLUMNS)
