# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Error and warning taxonomy.

Out-of-domain model fields are rejected by Pydantic with its own
`ValidationError` (a `ValueError` subclass); invalid call arguments raise
plain `ValueError`. The classes below cover the remaining failure modes of
the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .calculations import IrrResult


class DealQuantError(Exception):
    """Base class for engine errors."""


class NonConvergenceError(DealQuantError):
    """IRR solver exhausted its iteration budget without reaching tolerance."""

    def __init__(self, result: "IrrResult"):
        self.result = result
        super().__init__(
            f"IRR did not converge after {result.iterations} iterations "
            f"(last estimate {result.value:.4%}, NPV residual {result.npv_residual:,.4f})"
        )


class SimulationCancelledError(DealQuantError):
    """A Monte Carlo run was cancelled or exceeded its deadline."""

    def __init__(self, completed_trials: int, requested_trials: int, reason: str):
        self.completed_trials = completed_trials
        self.requested_trials = requested_trials
        self.reason = reason
        super().__init__(
            f"Simulation {reason} after {completed_trials:,} of {requested_trials:,} trials"
        )


class NonConvergenceWarning(UserWarning):
    """An IRR estimate was returned without reaching the solver tolerance."""


class TrialCountClampedWarning(UserWarning):
    """Requested trial count exceeded the resource cap and was clamped."""
