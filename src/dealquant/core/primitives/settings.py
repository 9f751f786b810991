# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Optional

from pydantic import Field, model_validator

from .enums import ExecutionStrategy
from .model import Model
from .types import PositiveFloat, PositiveInt, StrictlyPositiveFloat


class ProjectionAssumptions(Model):
    """
    Fixed modeling conventions applied by the cash-flow projector.

    These are not deal inputs but house assumptions. The deal simulator and
    the sensitivity report historically use different base EBITDA ratios and
    exit multiples; both sets are kept as named constants below rather than
    unified.

    Usage Examples:
        # Deal simulator conventions (15% base EBITDA, 5x exit)
        assumptions = DEAL_SIMULATOR_ASSUMPTIONS

        # Same conventions with a richer exit
        assumptions = DEAL_SIMULATOR_ASSUMPTIONS.with_overrides(exit_multiple=7.0)
    """

    horizon_years: int = Field(
        default=7, ge=1, le=50, description="Projection horizon in years."
    )
    base_ebitda_ratio: PositiveFloat = Field(
        default=0.15,
        description="Base EBITDA as a fraction of purchase price.",
    )
    exit_multiple: PositiveFloat = Field(
        default=5.0,
        description="EV/EBITDA multiple applied to terminal-year EBITDA plus synergies.",
    )
    debt_interest_rate: PositiveFloat = Field(
        default=0.06,
        description="Interest-only rate on the acquisition debt (decimal).",
    )
    synergy_ramp_years: int = Field(
        default=3,
        ge=1,
        description="Years over which synergies ramp linearly to run-rate.",
    )
    earnout_year: int = Field(
        default=2, ge=1, description="Year in which the expected earnout is received."
    )

    @model_validator(mode="after")
    def validate_earnout_within_horizon(self) -> "ProjectionAssumptions":
        if self.earnout_year > self.horizon_years:
            raise ValueError(
                f"Earnout year ({self.earnout_year}) must fall within the "
                f"{self.horizon_years}-year horizon"
            )
        return self


DEAL_SIMULATOR_ASSUMPTIONS = ProjectionAssumptions(
    base_ebitda_ratio=0.15, exit_multiple=5.0
)
SENSITIVITY_ASSUMPTIONS = ProjectionAssumptions(
    base_ebitda_ratio=0.12, exit_multiple=6.0
)


class SolverSettings(Model):
    """Newton-Raphson IRR solver configuration."""

    initial_guess: float = Field(default=0.15, description="Starting IRR (decimal).")
    tolerance: StrictlyPositiveFloat = Field(
        default=0.001, description="Stop once |NPV(irr)| falls below this amount."
    )
    max_iterations: int = Field(default=100, ge=1)
    lower_bound: float = Field(
        default=-0.99, gt=-1, description="IRR floor applied after every step."
    )
    upper_bound: float = Field(
        default=10.0, description="IRR ceiling applied after every step."
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "SolverSettings":
        if self.lower_bound >= self.upper_bound:
            raise ValueError(
                f"lower_bound ({self.lower_bound}) must be below upper_bound ({self.upper_bound})"
            )
        if not (self.lower_bound <= self.initial_guess <= self.upper_bound):
            raise ValueError("initial_guess must lie within the solver bounds")
        return self


class SimulationSettings(Model):
    """
    Configuration for the Monte Carlo risk engine.

    `chunk_size` fixes how trials are partitioned into independent random
    streams. Changing it changes the sampled values for a given seed;
    changing `strategy` or `max_workers` does not.

    Usage Examples:
        # Default: 10,000 trials, serial execution
        settings = SimulationSettings()

        # Multi-core run for large trial counts
        settings = SimulationSettings(
            strategy=ExecutionStrategy.PROCESSES,
            max_workers=4,
        )
    """

    default_trials: int = Field(default=10_000, ge=1)
    max_trials: int = Field(
        default=50_000,
        ge=1,
        description="Hard cap on trial count; larger requests are clamped with a warning.",
    )
    chunk_size: int = Field(
        default=2_500, ge=1, description="Trials per independent random stream."
    )
    strategy: ExecutionStrategy = Field(default=ExecutionStrategy.SERIAL)
    max_workers: Optional[PositiveInt] = Field(
        default=None,
        description="Worker pool size for THREADS/PROCESSES (None lets the executor decide).",
    )
    top_risk_count: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def validate_trial_bounds(self) -> "SimulationSettings":
        if self.default_trials > self.max_trials:
            raise ValueError(
                f"default_trials ({self.default_trials}) exceeds max_trials ({self.max_trials})"
            )
        return self


class BreakevenSettings(Model):
    """Binary-search configuration for breakeven targets."""

    max_iterations: int = Field(default=20, ge=1)
    tolerance: StrictlyPositiveFloat = Field(
        default=0.001,
        description="Accepted |IRR - target| in decimal IRR (0.001 = 0.1 percentage point).",
    )
