# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for settings models, enums and the frozen base model.
"""

import pytest
from pydantic import ValidationError

from dealquant.core.primitives import (
    DEAL_SIMULATOR_ASSUMPTIONS,
    SENSITIVITY_ASSUMPTIONS,
    BreakevenSettings,
    ExecutionStrategy,
    Polarity,
    ProjectionAssumptions,
    SimulationSettings,
    SolverSettings,
)


class TestProjectionAssumptions:
    def test_defaults(self):
        assumptions = ProjectionAssumptions()
        assert assumptions.horizon_years == 7
        assert assumptions.debt_interest_rate == pytest.approx(0.06)
        assert assumptions.synergy_ramp_years == 3
        assert assumptions.earnout_year == 2

    def test_named_conventions_differ(self):
        """The simulator and sensitivity conventions are kept distinct."""
        assert DEAL_SIMULATOR_ASSUMPTIONS.base_ebitda_ratio == pytest.approx(0.15)
        assert DEAL_SIMULATOR_ASSUMPTIONS.exit_multiple == pytest.approx(5.0)
        assert SENSITIVITY_ASSUMPTIONS.base_ebitda_ratio == pytest.approx(0.12)
        assert SENSITIVITY_ASSUMPTIONS.exit_multiple == pytest.approx(6.0)
        assert SENSITIVITY_ASSUMPTIONS.horizon_years == DEAL_SIMULATOR_ASSUMPTIONS.horizon_years

    def test_earnout_outside_horizon_rejected(self):
        with pytest.raises(ValidationError):
            ProjectionAssumptions(horizon_years=3, earnout_year=5)

    def test_with_overrides_revalidates(self):
        richer = DEAL_SIMULATOR_ASSUMPTIONS.with_overrides(exit_multiple=7.0)
        assert richer.exit_multiple == 7.0
        assert DEAL_SIMULATOR_ASSUMPTIONS.exit_multiple == 5.0
        with pytest.raises(ValidationError):
            DEAL_SIMULATOR_ASSUMPTIONS.with_overrides(exit_multiple=-1.0)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEAL_SIMULATOR_ASSUMPTIONS.exit_multiple = 9.0

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ProjectionAssumptions(exit_multiplier=6.0)


class TestSolverSettings:
    def test_defaults(self):
        settings = SolverSettings()
        assert settings.initial_guess == pytest.approx(0.15)
        assert settings.tolerance == pytest.approx(0.001)
        assert settings.max_iterations == 100
        assert settings.lower_bound == pytest.approx(-0.99)
        assert settings.upper_bound == pytest.approx(10.0)

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValidationError):
            SolverSettings(lower_bound=0.5, upper_bound=0.1, initial_guess=0.2)

    def test_guess_outside_bounds_rejected(self):
        with pytest.raises(ValidationError):
            SolverSettings(initial_guess=20.0)


class TestSimulationSettings:
    def test_defaults(self):
        settings = SimulationSettings()
        assert settings.default_trials == 10_000
        assert settings.max_trials == 50_000
        assert settings.strategy is ExecutionStrategy.SERIAL

    def test_default_above_cap_rejected(self):
        with pytest.raises(ValidationError):
            SimulationSettings(default_trials=100, max_trials=10)

    def test_strategy_from_string(self):
        assert SimulationSettings(strategy="threads").strategy is ExecutionStrategy.THREADS


class TestBreakevenSettings:
    def test_defaults(self):
        settings = BreakevenSettings()
        assert settings.max_iterations == 20
        assert settings.tolerance == pytest.approx(0.001)

    def test_non_positive_tolerance_rejected(self):
        with pytest.raises(ValidationError):
            BreakevenSettings(tolerance=0)


def test_polarity_sign():
    assert Polarity.DIRECT.sign == 1
    assert Polarity.INVERSE.sign == -1
