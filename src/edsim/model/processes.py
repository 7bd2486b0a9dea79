"""Simulation clock and event loop for the emergency department."""

import logging
from typing import Any, Dict, Generator, List, Optional, Tuple

import simpy

from edsim.core.arrivals import (
    ArrivalSchedule,
    sample_severity,
    sample_treatment_duration,
)
from edsim.core.entities import PoolType
from edsim.core.scenario import Scenario
from edsim.model.engine import AssignmentEngine
from edsim.model.patient import Patient
from edsim.model.queue import WaitingQueue
from edsim.model.resources import ResourcePool
from edsim.results.collector import ResultsCollector

logger = logging.getLogger(__name__)


class EmergencyDepartment:
    """One simulation run: clock, pools, waiting queue and patient ledger.

    Time is kept by a SimPy environment. Every tick runs in a fixed order:
    release finished resources, admit due arrivals, make one assignment
    attempt. The clock process then yields a timeout to the next minute,
    or straight to the next event when the scenario asks for it.

    Attributes:
        scenario: Run configuration; its rng is the only randomness used.
        env: SimPy environment holding the simulation clock.
        doctors: Doctor pool.
        beds: Bed pool.
        queue: Patients waiting for a doctor and a bed.
        patients: Every generated patient, in arrival order.
        results: Metrics accumulator.
        stalled: True if the run stopped with patients no pool can ever serve.
    """

    def __init__(self, scenario: Scenario) -> None:
        self.scenario = scenario
        self.horizon = scenario.run_length
        self.env = simpy.Environment()

        self.doctors = ResourcePool(PoolType.DOCTORS, scenario.n_doctors)
        self.beds = ResourcePool(PoolType.BEDS, scenario.n_beds)
        self.queue = WaitingQueue()
        self.patients: List[Patient] = []
        self.results = ResultsCollector()
        self.engine = AssignmentEngine(
            self.queue, self.doctors, self.beds, self.results, self.horizon
        )

        self.arrivals = ArrivalSchedule(
            scenario.rng, scenario.get_effective_arrival_rate(0)
        )
        self._next_id = 1
        self.stalled = False

    @property
    def clock(self) -> int:
        """Current simulation minute."""
        return int(self.env.now)

    @property
    def finished(self) -> bool:
        """True once the run has stalled, or arrivals have stopped and the queue is empty."""
        return self.stalled or (self.clock >= self.horizon and not self.queue)

    def _admit_arrivals(self, rate: float) -> int:
        """Create and queue every patient due by the current minute."""
        admitted = 0
        rng = self.scenario.rng
        while self.arrivals.due(self.clock, self.horizon):
            severity = sample_severity(rng, self.scenario.severity_weights)
            patient = Patient(
                id=self._next_id,
                arrival_time=self.arrivals.next_time,
                severity=severity,
                treatment_duration=sample_treatment_duration(
                    severity,
                    rng,
                    base=self.scenario.treatment_base,
                    step=self.scenario.treatment_step,
                    ceiling=self.scenario.treatment_ceiling,
                ),
            )
            self._next_id += 1
            self.queue.push(patient)
            self.patients.append(patient)
            self.results.record_arrival(patient)
            logger.debug(
                f"t={self.clock}: patient {patient.id} arrived "
                f"(S{int(severity)}, {patient.treatment_duration} min)"
            )
            self.arrivals.advance(rate)
            admitted += 1
        return admitted

    def next_event_time(self) -> int:
        """Earliest time after the clock at which anything can change."""
        candidates = []
        if self.horizon > self.clock:
            candidates.append(self.horizon)
        if self.clock < self.arrivals.next_time < self.horizon:
            candidates.append(self.arrivals.next_time)
        if self.queue and self.queue.peek().arrival_time > self.clock:
            candidates.append(self.queue.peek().arrival_time)
        if self.queue or self.clock < self.horizon:
            # Past the horizon a release only matters to someone waiting
            for pool in (self.doctors, self.beds):
                release = pool.next_release_after(self.clock)
                if release is not None:
                    candidates.append(release)
        return min(candidates) if candidates else self.clock + 1

    def _tick(self) -> Tuple[Optional[Patient], int]:
        """Run one tick at the current minute.

        Returns:
            The patient assigned during this tick (if any) and the number of
            minutes until the next tick. The advance is 0 once the run stalls.
        """
        self.doctors.reclaim_expired(self.clock)
        self.beds.reclaim_expired(self.clock)

        hour = self.clock // 60
        rate = self.scenario.get_effective_arrival_rate(hour)
        self._admit_arrivals(rate)

        assigned = self.engine.try_assign(self.clock)

        if (
            assigned is None
            and self.queue
            and self.clock >= self.horizon
            and self.doctors.busy_count == 0
            and self.beds.busy_count == 0
        ):
            # Past the horizon with idle pools: only a zero-capacity pool gets here
            self.stalled = True
            logger.warning(
                f"Run stalled at t={self.clock}: {len(self.queue)} patients cannot be "
                f"treated with {self.doctors.capacity} doctors and {self.beds.capacity} beds"
            )
            return None, 0

        next_event = self.next_event_time()
        if assigned is not None and self.queue:
            # One assignment per tick: the new head is retried next minute
            next_event = min(next_event, self.clock + 1)
        if not self.scenario.jump_to_next_event:
            next_event = min(self.clock + 1, next_event)
        return assigned, next_event - self.clock

    def clock_process(self) -> Generator[simpy.Event, None, None]:
        """SimPy process: tick, then wait until the next tick is due."""
        while not self.finished:
            _, advance = self._tick()
            if advance:
                yield self.env.timeout(advance)

    def step(self) -> Optional[Patient]:
        """Run a single tick and advance the clock, outside of run().

        Returns:
            The patient assigned during this tick, if any.
        """
        assigned, advance = self._tick()
        if advance:
            self.env.run(until=self.env.now + advance)
        return assigned

    def run(self) -> ResultsCollector:
        """Run until the horizon has passed and the queue has drained."""
        self.env.process(self.clock_process())
        self.env.run()
        return self.results

    def metrics(self) -> Dict[str, Any]:
        """Structured summary of the run so far."""
        return self.results.compute_metrics(
            self.horizon, self.doctors.capacity, self.beds.capacity
        )


def run_simulation(scenario: Scenario) -> Dict[str, Any]:
    """Execute a single simulation run.

    Args:
        scenario: Scenario configuration with all parameters.

    Returns:
        Dictionary of metrics from ResultsCollector.compute_metrics plus:
        - run_length, n_doctors, n_beds: Configuration echoed back
        - end_time: Clock value when the run finished
        - stalled: Whether patients were left with no usable pool
        - patients: The full patient ledger (list of Patient)
    """
    logger.info(
        f"Starting run: horizon={scenario.run_length} min, doctors={scenario.n_doctors}, "
        f"beds={scenario.n_beds}, rate={scenario.arrival_rate}/hr, seed={scenario.random_seed}"
    )
    department = EmergencyDepartment(scenario)
    department.run()

    results = department.metrics()
    results["run_length"] = scenario.run_length
    results["n_doctors"] = scenario.n_doctors
    results["n_beds"] = scenario.n_beds
    results["end_time"] = department.clock
    results["stalled"] = department.stalled
    results["patients"] = department.patients

    logger.info(
        f"Run finished at t={department.clock}: {results['arrivals']} arrivals, "
        f"{results['treated']} treated, mean wait {results['mean_wait']:.2f} min"
    )
    return results
