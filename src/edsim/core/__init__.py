"""Core foundation layer: scenario configuration, entities, generators."""

from edsim.core.entities import Severity, PoolType, SimulationError
from edsim.core.scenario import Scenario
from edsim.core.arrivals import (
    ArrivalSchedule,
    arrival_rate_multiplier,
    default_hourly_multipliers,
    next_arrival_time,
    sample_severity,
    sample_treatment_duration,
)

__all__ = [
    "Scenario",
    "Severity",
    "PoolType",
    "SimulationError",
    "ArrivalSchedule",
    "arrival_rate_multiplier",
    "default_hourly_multipliers",
    "next_arrival_time",
    "sample_severity",
    "sample_treatment_duration",
]
