"""Pytest fixtures for EDSim tests."""

import numpy as np
import pytest

from edsim.core.scenario import Scenario


@pytest.fixture
def default_seed() -> int:
    """Default random seed for reproducible tests."""
    return 42


@pytest.fixture
def short_run_length() -> int:
    """Short run length (minutes) for quick tests."""
    return 120  # 2 hours


@pytest.fixture
def rng(default_seed) -> np.random.Generator:
    """Fresh seeded generator."""
    return np.random.default_rng(default_seed)


@pytest.fixture
def flat_multipliers() -> list:
    """Hour-of-day curve with no variation."""
    return [1.0] * 24


@pytest.fixture
def busy_scenario(default_seed, flat_multipliers) -> Scenario:
    """Constrained department where queuing is certain."""
    return Scenario(
        run_length=480,
        n_doctors=2,
        n_beds=3,
        arrival_rate=6.0,
        hourly_multipliers=flat_multipliers,
        random_seed=default_seed,
    )
