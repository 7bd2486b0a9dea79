"""Tests for the priority waiting queue."""

import numpy as np
import pytest

from edsim.core.entities import Severity
from edsim.model.patient import Patient
from edsim.model.queue import WaitingQueue


def make_patient(pid, arrival, severity, duration=60):
    return Patient(id=pid, arrival_time=arrival, severity=Severity(severity), treatment_duration=duration)


class TestQueueOrdering:
    """Head is highest severity, then earliest arrival."""

    def test_severity_first(self):
        queue = WaitingQueue()
        queue.push(make_patient(1, 0, 2))
        queue.push(make_patient(2, 5, 5))
        queue.push(make_patient(3, 3, 4))

        assert [queue.pop().id for _ in range(3)] == [2, 3, 1]

    def test_earlier_arrival_breaks_ties(self):
        queue = WaitingQueue()
        queue.push(make_patient(1, 20, 3))
        queue.push(make_patient(2, 10, 3))

        assert queue.peek().id == 2

    def test_lower_id_breaks_full_ties(self):
        queue = WaitingQueue()
        queue.push(make_patient(7, 10, 3))
        queue.push(make_patient(4, 10, 3))

        assert queue.pop().id == 4
        assert queue.pop().id == 7

    def test_pop_order_never_violated(self):
        """No remaining patient outranks a popped one."""
        rng = np.random.default_rng(3)
        queue = WaitingQueue()
        for pid in range(1, 201):
            queue.push(make_patient(pid, int(rng.integers(0, 50)), int(rng.integers(1, 6))))

        while queue:
            popped = queue.pop()
            assert all(p.priority_key <= popped.priority_key for p in queue)

    def test_ordered_does_not_consume(self):
        queue = WaitingQueue()
        queue.push(make_patient(1, 0, 1))
        queue.push(make_patient(2, 0, 5))

        assert [p.id for p in queue.ordered()] == [2, 1]
        assert len(queue) == 2


class TestMutableHead:
    """The head can be updated in place before removal."""

    def test_peek_returns_live_record(self):
        queue = WaitingQueue()
        patient = make_patient(1, 0, 5)
        queue.push(patient)

        head = queue.peek()
        head.wait_time = 12
        head.treatment_start = 12

        assert head is patient
        assert queue.pop() is patient
        assert patient.wait_time == 12

    def test_mutation_keeps_ordering(self):
        queue = WaitingQueue()
        queue.push(make_patient(1, 0, 5))
        queue.push(make_patient(2, 1, 4))

        queue.peek().treatment_start = 99
        assert queue.peek().id == 1


class TestQueueEdgeCases:
    """Empty queue and duplicate handling."""

    def test_empty(self):
        queue = WaitingQueue()
        assert len(queue) == 0
        assert not queue

    def test_peek_empty_raises(self):
        with pytest.raises(IndexError):
            WaitingQueue().peek()

    def test_pop_empty_raises(self):
        with pytest.raises(IndexError):
            WaitingQueue().pop()

    def test_duplicate_push_rejected(self):
        queue = WaitingQueue()
        patient = make_patient(1, 0, 3)
        queue.push(patient)

        with pytest.raises(ValueError, match="already queued"):
            queue.push(patient)

    def test_contains(self):
        queue = WaitingQueue()
        patient = make_patient(1, 0, 3)
        queue.push(patient)

        assert patient in queue
        queue.pop()
        assert patient not in queue
