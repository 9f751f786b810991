# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealquant Deal Models
Public API for the dealquant.deal subpackage.

Deal assumptions, the cash-flow projector, named scenarios and the
`simulate_deal` entry point.
"""

from .api import simulate_deal
from .parameters import DealCase, ParameterSet
from .projector import CashFlowProjector, CashFlowSchedule
from .results import DealMetrics, DealSimulationResults, ScenarioResult
from .scenarios import (
    ALL_EQUITY,
    DOWNSIDE,
    NO_SYNERGIES,
    STANDARD_SCENARIOS,
    UPSIDE,
    ScenarioDefinition,
    ScenarioRunner,
)

__all__ = [
    # Inputs
    "ParameterSet",
    "DealCase",
    # Projection
    "CashFlowProjector",
    "CashFlowSchedule",
    # Scenarios
    "ScenarioDefinition",
    "ScenarioRunner",
    "STANDARD_SCENARIOS",
    "UPSIDE",
    "DOWNSIDE",
    "NO_SYNERGIES",
    "ALL_EQUITY",
    # Results
    "DealMetrics",
    "ScenarioResult",
    "DealSimulationResults",
    # Analysis API
    "simulate_deal",
]
