"""Scenario configuration dataclass."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from edsim.core.arrivals import (
    DEFAULT_SEVERITY_WEIGHTS,
    arrival_rate_multiplier,
    default_hourly_multipliers,
)
from edsim.core.entities import Severity


@dataclass
class Scenario:
    """Configuration for a simulation scenario.

    Contains all parameters needed to run a simulation, including
    horizon settings, pool sizes, demand and treatment policy, and the
    random seed. Invalid values raise ValueError on construction so a
    bad configuration never reaches the event loop.

    Attributes:
        run_length: Arrival horizon in minutes (default 1440 = 24 hours).
        n_doctors: Doctor pool capacity (0 closes the pool).
        n_beds: Bed pool capacity (0 closes the pool).
        arrival_rate: Base patient arrivals per hour.
        hourly_multipliers: 24 demand multipliers applied to arrival_rate.
        severity_weights: Probability of each severity level.
        treatment_base: Treatment floor offset (minutes).
        treatment_step: Extra treatment floor per severity level (minutes).
        treatment_ceiling: Maximum treatment duration (minutes).
        jump_to_next_event: Advance straight to the next event instead of
            stepping one minute at a time.
        random_seed: Seed for the run's generator. None draws OS entropy.
    """

    # Horizon
    run_length: int = 1440

    # Resources
    n_doctors: int = 5
    n_beds: int = 10

    # Arrivals
    arrival_rate: float = 5.0  # patients per hour
    hourly_multipliers: List[float] = field(default_factory=default_hourly_multipliers)

    # Severity and treatment policy
    severity_weights: Dict[Severity, float] = field(
        default_factory=lambda: dict(DEFAULT_SEVERITY_WEIGHTS)
    )
    treatment_base: int = 30
    treatment_step: int = 10
    treatment_ceiling: int = 120

    # Clock
    jump_to_next_event: bool = False

    # Reproducibility
    random_seed: Optional[int] = 42

    # Single RNG for the run (created in __post_init__)
    rng: Optional[np.random.Generator] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate parameters and create the run's generator."""
        self._validate()
        self.severity_weights = {
            Severity(int(level)): float(w) for level, w in self.severity_weights.items()
        }
        self.hourly_multipliers = [float(m) for m in self.hourly_multipliers]
        self.rng = np.random.default_rng(self.random_seed)

    def _validate(self) -> None:
        """Reject configurations that would divide by zero or never terminate."""
        for name in ("run_length", "n_doctors", "n_beds",
                     "treatment_base", "treatment_step", "treatment_ceiling"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")

        if self.run_length <= 0:
            raise ValueError(f"run_length must be positive, got {self.run_length}")
        if self.n_doctors < 0:
            raise ValueError(f"n_doctors cannot be negative, got {self.n_doctors}")
        if self.n_beds < 0:
            raise ValueError(f"n_beds cannot be negative, got {self.n_beds}")
        if not math.isfinite(self.arrival_rate) or self.arrival_rate <= 0:
            raise ValueError(f"arrival_rate must be positive and finite, got {self.arrival_rate}")

        if len(self.hourly_multipliers) != 24:
            raise ValueError("hourly_multipliers must have 24 values")
        if any(not math.isfinite(m) or m <= 0 for m in self.hourly_multipliers):
            raise ValueError("hourly_multipliers must all be positive and finite")
        if not math.isfinite(self.arrival_rate * max(self.hourly_multipliers)):
            raise ValueError("arrival_rate times the peak multiplier overflows")

        levels = {int(level) for level in self.severity_weights}
        if levels != {int(s) for s in Severity}:
            raise ValueError(f"severity_weights must cover severities 1-5, got {sorted(levels)}")
        if any(not math.isfinite(w) or w < 0 for w in self.severity_weights.values()):
            raise ValueError("severity_weights must be non-negative and finite")
        total = sum(self.severity_weights.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"severity_weights must sum to 1.0, got {total}")

        if self.treatment_base < 1:
            raise ValueError(f"treatment_base must be at least 1, got {self.treatment_base}")
        if self.treatment_step < 0:
            raise ValueError(f"treatment_step cannot be negative, got {self.treatment_step}")
        top_floor = self.treatment_base + self.treatment_step * max(Severity)
        if top_floor > self.treatment_ceiling:
            raise ValueError(
                f"treatment_ceiling {self.treatment_ceiling} is below the "
                f"severity 5 floor {top_floor}"
            )

    @property
    def mean_iat(self) -> float:
        """Mean inter-arrival time in minutes at the base rate."""
        return 60.0 / self.arrival_rate

    def get_effective_arrival_rate(self, hour: int) -> float:
        """Base arrival rate modulated by the hour-of-day multiplier.

        Args:
            hour: Simulated hour since start (wraps every 24).

        Returns:
            Arrival rate (patients per hour) for that hour.
        """
        return self.arrival_rate * arrival_rate_multiplier(hour, self.hourly_multipliers)

    def clone_with_seed(self, new_seed: Optional[int]) -> "Scenario":
        """Create a copy of this scenario with a different seed.

        Args:
            new_seed: The new random seed to use.

        Returns:
            A new Scenario instance with updated seed and a fresh RNG.
        """
        return Scenario(
            run_length=self.run_length,
            n_doctors=self.n_doctors,
            n_beds=self.n_beds,
            arrival_rate=self.arrival_rate,
            hourly_multipliers=list(self.hourly_multipliers),
            severity_weights=dict(self.severity_weights),
            treatment_base=self.treatment_base,
            treatment_step=self.treatment_step,
            treatment_ceiling=self.treatment_ceiling,
            jump_to_next_event=self.jump_to_next_event,
            random_seed=new_seed,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain parameter mapping (no RNG), e.g. for logging or display."""
        return {
            "run_length": self.run_length,
            "n_doctors": self.n_doctors,
            "n_beds": self.n_beds,
            "arrival_rate": self.arrival_rate,
            "hourly_multipliers": list(self.hourly_multipliers),
            "severity_weights": {int(k): v for k, v in self.severity_weights.items()},
            "treatment_base": self.treatment_base,
            "treatment_step": self.treatment_step,
            "treatment_ceiling": self.treatment_ceiling,
            "jump_to_next_event": self.jump_to_next_event,
            "random_seed": self.random_seed,
        }
