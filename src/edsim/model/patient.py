"""Patient entity definition."""

from dataclasses import dataclass
from typing import Optional, Tuple

from edsim.core.entities import Severity


@dataclass
class Patient:
    """Patient record tracked from arrival to start of treatment.

    Created with wait/start fields unset; filled in exactly once when
    the patient is matched to a doctor and a bed.

    Attributes:
        id: Unique patient identifier (increasing from 1).
        arrival_time: Simulation minute of arrival.
        severity: Medical severity (5 = most urgent).
        treatment_duration: Treatment length in minutes.
        wait_time: Minutes between arrival and treatment start.
        treatment_start: Minute treatment began (None while waiting).
        doctor_id: Index of the assigned doctor.
        bed_id: Index of the assigned bed.
    """

    id: int
    arrival_time: int
    severity: Severity
    treatment_duration: int

    # Filled at assignment
    wait_time: int = 0
    treatment_start: Optional[int] = None
    doctor_id: Optional[int] = None
    bed_id: Optional[int] = None

    @property
    def is_treated(self) -> bool:
        """True once the patient has been assigned resources."""
        return self.treatment_start is not None

    @property
    def treatment_end(self) -> Optional[int]:
        """Minute the doctor and bed are released."""
        if self.treatment_start is not None:
            return self.treatment_start + self.treatment_duration
        return None

    @property
    def priority_key(self) -> Tuple[int, int]:
        """(severity, -arrival_time): larger means served sooner."""
        return (int(self.severity), -self.arrival_time)
