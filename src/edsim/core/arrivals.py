"""Stochastic generators: arrivals, severity and treatment duration."""

import math
from typing import Dict, List, Optional

import numpy as np

from edsim.core.entities import Severity


# Severity mix from a 1..10 roll: 7-10 -> S5, 5-6 -> S4, 3-4 -> S3, 2 -> S2, 1 -> S1
DEFAULT_SEVERITY_WEIGHTS: Dict[Severity, float] = {
    Severity.S1_MINOR: 0.1,
    Severity.S2_STANDARD: 0.1,
    Severity.S3_URGENT: 0.2,
    Severity.S4_VERY_URGENT: 0.2,
    Severity.S5_IMMEDIATE: 0.4,
}

EVENING_PEAK_HOURS = range(18, 23)  # 18:00-22:59
OVERNIGHT_HOURS = range(0, 7)       # 00:00-06:59


def default_hourly_multipliers(
    peak: float = 1.6,
    overnight: float = 0.4,
    baseline: float = 1.0,
) -> List[float]:
    """Build the default 24-hour demand curve.

    Elevated during the evening, reduced overnight, baseline otherwise.

    Args:
        peak: Multiplier for evening hours.
        overnight: Multiplier for overnight hours.
        baseline: Multiplier for all other hours.

    Returns:
        List of 24 multipliers, index = hour of day.
    """
    multipliers = []
    for hour in range(24):
        if hour in EVENING_PEAK_HOURS:
            multipliers.append(peak)
        elif hour in OVERNIGHT_HOURS:
            multipliers.append(overnight)
        else:
            multipliers.append(baseline)
    return multipliers


def arrival_rate_multiplier(hour: int, multipliers: Optional[List[float]] = None) -> float:
    """Demand multiplier for a simulated hour.

    Hours past the first day wrap around (hour 25 is 01:00).

    Args:
        hour: Simulated hour since start (clock // 60).
        multipliers: 24 hourly multipliers. Defaults to the standard curve.

    Returns:
        Factor applied to the base arrival rate.
    """
    if multipliers is None:
        multipliers = default_hourly_multipliers()
    return multipliers[hour % 24]


def next_arrival_time(current_time: int, rate_per_hour: float, rng: np.random.Generator) -> int:
    """Sample the next arrival time from an exponential gap.

    Args:
        current_time: Time the gap is measured from (minutes).
        rate_per_hour: Arrival rate (patients per hour).
        rng: NumPy random generator.

    Returns:
        current_time plus the gap, rounded down to a whole minute.

    Raises:
        ValueError: If the rate is not positive and finite.
    """
    if not math.isfinite(rate_per_hour) or rate_per_hour <= 0:
        raise ValueError(f"Arrival rate must be positive and finite, got {rate_per_hour}")
    gap = rng.exponential(60.0 / rate_per_hour)
    return current_time + int(gap)


def sample_severity(
    rng: np.random.Generator,
    weights: Optional[Dict[Severity, float]] = None,
) -> Severity:
    """Draw a severity from the categorical mix."""
    if weights is None:
        weights = DEFAULT_SEVERITY_WEIGHTS
    levels = list(Severity)
    probs = np.array([weights[level] for level in levels], dtype=float)
    # Configured weights may be off by rounding; choice() needs an exact sum
    probs = probs / probs.sum()
    idx = rng.choice(len(levels), p=probs)
    return levels[idx]


def sample_treatment_duration(
    severity: int,
    rng: np.random.Generator,
    base: int = 30,
    step: int = 10,
    ceiling: int = 120,
) -> int:
    """Uniform treatment duration with a severity-dependent floor.

    The lower bound is base + step * severity, so more urgent cases
    take at least as long. The upper bound is a fixed ceiling.

    Returns:
        Duration in whole minutes, inclusive of both bounds.
    """
    low = base + step * int(severity)
    if low > ceiling:
        raise ValueError(
            f"Treatment floor {low} for severity {int(severity)} exceeds ceiling {ceiling}"
        )
    return int(rng.integers(low, ceiling, endpoint=True))


class ArrivalSchedule:
    """Next scheduled arrival for a single stream.

    Attributes:
        rng: NumPy random generator shared with the rest of the run.
        next_time: Scheduled time of the next arrival (minutes).
    """

    def __init__(self, rng: np.random.Generator, initial_rate: float, start_time: int = 0) -> None:
        self.rng = rng
        self.next_time = next_arrival_time(start_time, initial_rate, rng)

    def due(self, now: int, horizon: int) -> bool:
        """True if the scheduled arrival should be admitted at `now`."""
        return self.next_time <= now and self.next_time < horizon

    def advance(self, rate_per_hour: float) -> int:
        """Schedule the arrival after the current one."""
        self.next_time = next_arrival_time(self.next_time, rate_per_hour, self.rng)
        return self.next_time
