"""Priority waiting queue with a mutable head."""

import heapq
from typing import Dict, Iterator, List, Tuple

from edsim.model.patient import Patient


class WaitingQueue:
    """Arrived-but-untreated patients, most urgent first.

    The heap holds (-severity, arrival_time, id) handles and the patient
    records live in a separate id-keyed store. peek() returns the live
    record, so the head can be updated in place before pop() without
    touching the heap ordering.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, int]] = []
        self._patients: Dict[int, Patient] = {}

    @staticmethod
    def _handle(patient: Patient) -> Tuple[int, int, int]:
        return (-int(patient.severity), patient.arrival_time, patient.id)

    def push(self, patient: Patient) -> None:
        if patient.id in self._patients:
            raise ValueError(f"Patient {patient.id} is already queued")
        self._patients[patient.id] = patient
        heapq.heappush(self._heap, self._handle(patient))

    def peek(self) -> Patient:
        """Head of the queue (live record, may be mutated)."""
        if not self._heap:
            raise IndexError("peek from an empty waiting queue")
        return self._patients[self._heap[0][2]]

    def pop(self) -> Patient:
        """Remove and return the head of the queue."""
        if not self._heap:
            raise IndexError("pop from an empty waiting queue")
        _, _, patient_id = heapq.heappop(self._heap)
        return self._patients.pop(patient_id)

    def ordered(self) -> List[Patient]:
        """Queued patients in service order (does not modify the queue)."""
        return [self._patients[h[2]] for h in sorted(self._heap)]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Patient]:
        return iter(self.ordered())

    def __contains__(self, patient: Patient) -> bool:
        return patient.id in self._patients
