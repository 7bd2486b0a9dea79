"""Head-of-queue greedy assignment of doctors and beds."""

import logging
from typing import Optional

from edsim.core.entities import SimulationError
from edsim.model.patient import Patient
from edsim.model.queue import WaitingQueue
from edsim.model.resources import ResourcePool
from edsim.results.collector import ResultsCollector

logger = logging.getLogger(__name__)


class AssignmentEngine:
    """Match the most urgent waiting patient to a doctor and a bed.

    Only the head of the queue is ever considered. If the head cannot
    get both resources at the same instant it stays queued and blocks
    everyone behind it, even patients that could otherwise be served.
    Nothing is reserved between attempts.

    Attributes:
        queue: Waiting patients.
        doctors: Doctor pool.
        beds: Bed pool.
        collector: Metrics accumulator updated on every match.
        horizon: Run length, passed through to the collector.
    """

    def __init__(
        self,
        queue: WaitingQueue,
        doctors: ResourcePool,
        beds: ResourcePool,
        collector: ResultsCollector,
        horizon: float,
    ) -> None:
        self.queue = queue
        self.doctors = doctors
        self.beds = beds
        self.collector = collector
        self.horizon = horizon

    def try_assign(self, now: int) -> Optional[Patient]:
        """Attempt one assignment for the queue head.

        Args:
            now: Current simulation minute.

        Returns:
            The assigned patient, or None if the queue is empty or the
            head is still waiting for a doctor or a bed.
        """
        if not self.queue:
            return None

        head = self.queue.peek()
        assign_time = max(now, head.arrival_time)

        doctor = self.doctors.find_available(assign_time)
        if doctor is None:
            return None
        bed = self.beds.find_available(assign_time)
        if bed is None:
            return None

        wait = assign_time - head.arrival_time
        if wait < 0:
            raise SimulationError(f"Patient {head.id} would wait {wait} minutes")

        head.wait_time = wait
        head.treatment_start = assign_time
        head.doctor_id = doctor.index
        head.bed_id = bed.index
        self.doctors.assign(doctor, assign_time, head.treatment_duration)
        self.beds.assign(bed, assign_time, head.treatment_duration)

        popped = self.queue.pop()
        if popped is not head:
            raise SimulationError(f"Popped patient {popped.id}, expected head {head.id}")

        self.collector.record_assignment(head, self.horizon)
        logger.debug(
            f"t={assign_time}: patient {head.id} (S{int(head.severity)}) -> "
            f"doctor {doctor.index}, bed {bed.index}, waited {wait} min"
        )
        return head
