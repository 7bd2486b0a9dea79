"""Core entity definitions for the simulation.

This module contains enums and basic types that are used across
the codebase, placed here to avoid circular imports.
"""

from enum import Enum, IntEnum


class Severity(IntEnum):
    """Medical severity levels. Higher value = more urgent.

    Patients are served highest severity first, ties broken by
    earliest arrival.
    """
    S1_MINOR = 1
    S2_STANDARD = 2
    S3_URGENT = 3
    S4_VERY_URGENT = 4
    S5_IMMEDIATE = 5


class PoolType(Enum):
    """Resource pool types in the department."""
    DOCTORS = "doctors"
    BEDS = "beds"


class SimulationError(RuntimeError):
    """Raised when a model invariant is broken during a run.

    These are programming defects (negative wait, double-booked
    resource), not recoverable runtime conditions.
    """
