# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared fixtures for dealquant tests.

Provides ready-made deal inputs, risk sets and engine settings so tests
can focus on behavior rather than setup.
"""

from __future__ import annotations

from typing import List

import pytest

from dealquant.core.primitives import SENSITIVITY_ASSUMPTIONS, SimulationSettings
from dealquant.deal import DealCase, ParameterSet
from dealquant.risk import MonteCarloRiskEngine, RiskFactor

BASE_DEAL_VALUE = 100_000_000.0


def make_risks(*specs) -> List[RiskFactor]:
    """
    Build risk factors from (name, probability, impact_low, impact_high) tuples.

    Example:
        >>> risks = make_risks(("Churn", 0.25, -15, -2))
        >>> risks[0].impact_low
        -15.0
    """
    return [
        RiskFactor(name=name, probability=p, impact_low=low, impact_high=high)
        for name, p, low, high in specs
    ]


@pytest.fixture
def default_params() -> ParameterSet:
    """Default deal: $100M, 40/60 equity/debt."""
    return ParameterSet()


@pytest.fixture
def sensitivity_case(default_params) -> DealCase:
    """Default deal under the sensitivity conventions (12% EBITDA ratio, 6x exit)."""
    return DealCase(parameters=default_params, assumptions=SENSITIVITY_ASSUMPTIONS)


@pytest.fixture
def low_leverage_case() -> DealCase:
    """70/30 deal under the sensitivity conventions; every tornado end has a converged IRR."""
    params = ParameterSet(equity_percentage=70, debt_percentage=30)
    return DealCase(parameters=params, assumptions=SENSITIVITY_ASSUMPTIONS)


@pytest.fixture
def conservative_params() -> ParameterSet:
    """80/20 deal: the base case and all four standard scenarios keep one sign change."""
    return ParameterSet(equity_percentage=80, debt_percentage=20)


@pytest.fixture
def bounded_risks() -> List[RiskFactor]:
    """
    Risks whose combined impact cannot push value below zero (worst -36%).

    Analytic expected final value: 94.7% of base.
    """
    return make_risks(
        ("Integration Overrun", 0.30, -10, -2),
        ("Pricing Pressure", 0.50, -6, 4),
        ("Hidden Liabilities", 0.20, -20, -10),
    )


@pytest.fixture
def small_chunk_settings() -> SimulationSettings:
    """Settings that split a few thousand trials into several chunks."""
    return SimulationSettings(default_trials=5_000, chunk_size=1_000)


@pytest.fixture
def engine() -> MonteCarloRiskEngine:
    return MonteCarloRiskEngine()
