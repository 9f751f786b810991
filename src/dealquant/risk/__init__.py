# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealquant Risk Simulation
Public API for the dealquant.risk subpackage.

Risk factors, the Monte Carlo risk engine and its result models.
"""

from .factors import RiskFactor, default_risk_factors
from .monte_carlo import CancellationToken, MonteCarloRiskEngine
from .results import (
    DISTRIBUTION_BUCKETS,
    DistributionBucket,
    RiskContribution,
    RiskSimulationResults,
    SimulationResult,
    SimulationSummary,
)

__all__ = [
    # Inputs
    "RiskFactor",
    "default_risk_factors",
    # Engine
    "MonteCarloRiskEngine",
    "CancellationToken",
    # Results
    "RiskSimulationResults",
    "SimulationSummary",
    "SimulationResult",
    "DistributionBucket",
    "RiskContribution",
    "DISTRIBUTION_BUCKETS",
]
