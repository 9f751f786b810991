# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal Simulation API

Public entry point for projecting a deal and running its scenarios.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.primitives import ProjectionAssumptions, SolverSettings
from .parameters import ParameterSet
from .results import DealSimulationResults
from .scenarios import STANDARD_SCENARIOS, ScenarioDefinition, ScenarioRunner

logger = logging.getLogger(__name__)


def simulate_deal(
    params: Optional[ParameterSet] = None,
    run_scenarios: bool = True,
    scenarios: Iterable[ScenarioDefinition] = STANDARD_SCENARIOS,
    assumptions: Optional[ProjectionAssumptions] = None,
    solver_settings: Optional[SolverSettings] = None,
) -> DealSimulationResults:
    """
    Project a deal and return base-case and scenario metrics.

    Args:
        params: Deal assumptions; defaults to `ParameterSet()`.
        run_scenarios: When False, only the base case is evaluated.
        scenarios: Scenario definitions to run (Upside, Downside,
            No Synergies and All Equity by default).
        assumptions: Projection conventions; defaults to the deal simulator
            set (15% base EBITDA ratio, 5x exit).
        solver_settings: IRR solver configuration.

    Returns:
        DealSimulationResults with the base case, each scenario and a
        comparison table.
    """
    params = params or ParameterSet()
    runner = ScenarioRunner(assumptions, solver_settings)

    logger.info(
        f"Simulating deal: price ${params.purchase_price:,.0f}, "
        f"{params.equity_percentage:g}% equity / {params.debt_percentage:g}% debt"
    )
    base_case = runner.evaluate(params)
    scenario_results = runner.run(params, scenarios) if run_scenarios else []

    results = DealSimulationResults(
        parameters=params,
        assumptions=runner.assumptions,
        base_case=base_case,
        scenarios=scenario_results,
    )
    logger.info(
        f"Deal simulation complete: base IRR {base_case.irr:.2%}, "
        f"{len(scenario_results)} scenarios"
    )
    return results
