"""Tests for Scenario configuration."""

import numpy as np
import pytest

from edsim.core.entities import Severity
from edsim.core.scenario import Scenario


class TestScenarioDefaults:
    """Test default scenario creation."""

    def test_default_values(self):
        """Default scenario has expected parameter values."""
        scenario = Scenario()

        assert scenario.run_length == 1440
        assert scenario.n_doctors == 5
        assert scenario.n_beds == 10
        assert scenario.arrival_rate == 5.0
        assert scenario.treatment_base == 30
        assert scenario.treatment_step == 10
        assert scenario.treatment_ceiling == 120
        assert scenario.jump_to_next_event is False
        assert scenario.random_seed == 42

    def test_rng_created(self):
        """RNG is created in __post_init__."""
        scenario = Scenario()
        assert isinstance(scenario.rng, np.random.Generator)

    def test_default_severity_weights(self):
        """Severity mix is biased toward urgent cases."""
        weights = Scenario().severity_weights

        assert set(weights) == set(Severity)
        assert weights[Severity.S5_IMMEDIATE] == pytest.approx(0.4)
        assert weights[Severity.S1_MINOR] == pytest.approx(0.1)

    def test_mean_iat_property(self):
        """Mean IAT is correctly computed from arrival rate."""
        assert Scenario(arrival_rate=4.0).mean_iat == 15.0
        assert Scenario(arrival_rate=6.0).mean_iat == 10.0

    def test_int_severity_keys_normalised(self):
        """Plain integer keys are converted to Severity."""
        scenario = Scenario(severity_weights={1: 0.2, 2: 0.2, 3: 0.2, 4: 0.2, 5: 0.2})
        assert set(scenario.severity_weights) == set(Severity)


class TestEffectiveArrivalRate:
    """Test hour-of-day rate modulation."""

    def test_evening_peak(self):
        scenario = Scenario(arrival_rate=5.0)
        assert scenario.get_effective_arrival_rate(19) == pytest.approx(8.0)

    def test_overnight_low(self):
        scenario = Scenario(arrival_rate=5.0)
        assert scenario.get_effective_arrival_rate(3) == pytest.approx(2.0)

    def test_baseline(self):
        scenario = Scenario(arrival_rate=5.0)
        assert scenario.get_effective_arrival_rate(12) == pytest.approx(5.0)

    def test_wraps_after_one_day(self):
        """Hour 43 is 19:00 on day two."""
        scenario = Scenario(arrival_rate=5.0)
        assert scenario.get_effective_arrival_rate(43) == scenario.get_effective_arrival_rate(19)

    def test_custom_multipliers(self, flat_multipliers):
        scenario = Scenario(arrival_rate=3.0, hourly_multipliers=flat_multipliers)
        assert all(scenario.get_effective_arrival_rate(h) == 3.0 for h in range(24))


class TestScenarioValidation:
    """Invalid configurations fail before any simulation."""

    def test_zero_arrival_rate_rejected(self):
        with pytest.raises(ValueError, match="arrival_rate"):
            Scenario(arrival_rate=0.0)

    def test_negative_arrival_rate_rejected(self):
        with pytest.raises(ValueError, match="arrival_rate"):
            Scenario(arrival_rate=-1.0)

    def test_non_positive_horizon_rejected(self):
        with pytest.raises(ValueError, match="run_length"):
            Scenario(run_length=0)

    def test_negative_doctors_rejected(self):
        with pytest.raises(ValueError, match="n_doctors"):
            Scenario(n_doctors=-1)

    def test_negative_beds_rejected(self):
        with pytest.raises(ValueError, match="n_beds"):
            Scenario(n_beds=-2)

    def test_zero_capacity_allowed(self):
        """A closed pool is a valid scenario."""
        scenario = Scenario(n_doctors=0)
        assert scenario.n_doctors == 0

    def test_multiplier_length(self):
        with pytest.raises(ValueError, match="24 values"):
            Scenario(hourly_multipliers=[1.0] * 23)

    def test_zero_multiplier_rejected(self):
        multipliers = [1.0] * 24
        multipliers[3] = 0.0
        with pytest.raises(ValueError, match="positive"):
            Scenario(hourly_multipliers=multipliers)

    def test_severity_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            Scenario(severity_weights={1: 0.5, 2: 0.5, 3: 0.5, 4: 0.0, 5: 0.0})

    def test_severity_weights_must_cover_all_levels(self):
        with pytest.raises(ValueError, match="cover"):
            Scenario(severity_weights={1: 0.5, 5: 0.5})

    def test_negative_severity_weight_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            Scenario(severity_weights={1: -0.1, 2: 0.3, 3: 0.2, 4: 0.2, 5: 0.4})

    @pytest.mark.parametrize("rate", [float("inf"), float("nan")])
    def test_non_finite_arrival_rate_rejected(self, rate):
        with pytest.raises(ValueError, match="finite"):
            Scenario(arrival_rate=rate)

    @pytest.mark.parametrize("bad", [float("inf"), float("nan")])
    def test_non_finite_multiplier_rejected(self, bad):
        multipliers = [1.0] * 24
        multipliers[19] = bad
        with pytest.raises(ValueError, match="finite"):
            Scenario(hourly_multipliers=multipliers)

    def test_overflowing_peak_rate_rejected(self):
        with pytest.raises(ValueError, match="overflows"):
            Scenario(arrival_rate=1e300, hourly_multipliers=[1e10] * 24)

    def test_nan_severity_weight_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            Scenario(severity_weights={1: float("nan"), 2: 0.1, 3: 0.2, 4: 0.3, 5: 0.4})

    @pytest.mark.parametrize("field_name", ["run_length", "n_doctors", "n_beds", "treatment_ceiling"])
    def test_non_integer_counts_rejected(self, field_name):
        with pytest.raises(ValueError, match=f"{field_name} must be an integer"):
            Scenario(**{field_name: 2.5})

    def test_numpy_integer_counts_accepted(self):
        scenario = Scenario(n_doctors=np.int64(3), n_beds=np.int32(4))
        assert scenario.n_doctors == 3
        assert scenario.n_beds == 4

    def test_ceiling_below_floor_rejected(self):
        """Severity 5 floor (30 + 50) cannot exceed the ceiling."""
        with pytest.raises(ValueError, match="treatment_ceiling"):
            Scenario(treatment_ceiling=79)

    def test_treatment_base_must_be_positive(self):
        with pytest.raises(ValueError, match="treatment_base"):
            Scenario(treatment_base=0)


class TestScenarioReproducibility:
    """Test RNG reproducibility."""

    def test_same_seed_same_values(self):
        scenario1 = Scenario(random_seed=42)
        scenario2 = Scenario(random_seed=42)

        assert scenario1.rng.exponential(15.0) == scenario2.rng.exponential(15.0)

    def test_different_seeds_different_values(self):
        scenario1 = Scenario(random_seed=42)
        scenario2 = Scenario(random_seed=99)

        assert scenario1.rng.exponential(15.0) != scenario2.rng.exponential(15.0)

    def test_none_seed_uses_entropy(self):
        """Seedless scenarios still get a generator."""
        scenario = Scenario(random_seed=None)
        assert isinstance(scenario.rng, np.random.Generator)


class TestScenarioClone:
    """Test scenario cloning."""

    def test_clone_with_seed(self):
        original = Scenario(run_length=120, arrival_rate=6.0, n_doctors=3, n_beds=4)

        cloned = original.clone_with_seed(99)

        assert cloned.run_length == original.run_length
        assert cloned.arrival_rate == original.arrival_rate
        assert cloned.n_doctors == original.n_doctors
        assert cloned.n_beds == original.n_beds
        assert cloned.hourly_multipliers == original.hourly_multipliers
        assert cloned.severity_weights == original.severity_weights
        assert cloned.random_seed == 99
        assert cloned.rng is not original.rng

    def test_clone_same_seed_fresh_stream(self):
        """Cloning with the same seed restarts the stream."""
        original = Scenario(random_seed=7)
        first = original.rng.random()

        cloned = original.clone_with_seed(7)
        assert cloned.rng.random() == first

    def test_to_dict(self):
        params = Scenario(n_doctors=3).to_dict()

        assert params["n_doctors"] == 3
        assert "rng" not in params
        assert params["severity_weights"][5] == pytest.approx(0.4)
