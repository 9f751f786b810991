# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Scenario definitions and the scenario runner.

A scenario is a named rule that derives parameter overrides from the base
`ParameterSet`. The runner applies the overrides (re-validating the
result), reprojects the deal and solves its metrics.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from ..core.exceptions import NonConvergenceWarning
from ..core.primitives import (
    DEAL_SIMULATOR_ASSUMPTIONS,
    ProjectionAssumptions,
    ScenarioKind,
    SolverSettings,
)
from .parameters import ParameterSet
from .projector import CashFlowProjector
from .results import DealMetrics, ScenarioResult

logger = logging.getLogger(__name__)

OverrideRule = Callable[[ParameterSet], Dict[str, float]]


@dataclass(frozen=True)
class ScenarioDefinition:
    """
    Named perturbation of a base parameter set.

    Attributes:
        name: Display name
        rule: Function of the base parameters returning field overrides
        kind: Scenario kind (CUSTOM for user-defined scenarios)
    """

    name: str
    rule: OverrideRule
    kind: ScenarioKind = ScenarioKind.CUSTOM

    @classmethod
    def from_overrides(cls, name: str, **overrides: float) -> "ScenarioDefinition":
        """
        Scenario that sets fixed parameter values.

        Example:
            ```python
            high_tax = ScenarioDefinition.from_overrides("High Tax", tax_rate=35)
            ```
        """
        fixed = dict(overrides)
        return cls(name=name, rule=lambda _params: dict(fixed))

    def overrides_for(self, params: ParameterSet) -> Dict[str, float]:
        return self.rule(params)

    def apply(self, params: ParameterSet) -> ParameterSet:
        return params.with_overrides(**self.overrides_for(params))


def _upside(params: ParameterSet) -> Dict[str, float]:
    return {
        "revenue_growth_rate": params.revenue_growth_rate * 1.25,
        "synergies_year3": params.synergies_year3 * 1.3,
        "earnout_probability": min(params.earnout_probability * 1.2, 100.0),
    }


def _downside(params: ParameterSet) -> Dict[str, float]:
    return {
        "revenue_growth_rate": params.revenue_growth_rate * 0.5,
        "synergies_year3": params.synergies_year3 * 0.6,
        "earnout_probability": params.earnout_probability * 0.5,
        "integration_costs": params.integration_costs * 1.3,
    }


def _no_synergies(params: ParameterSet) -> Dict[str, float]:
    return {"synergies_year1": 0.0, "synergies_year3": 0.0}


def _all_equity(params: ParameterSet) -> Dict[str, float]:
    return {"equity_percentage": 100.0, "debt_percentage": 0.0}


UPSIDE = ScenarioDefinition(ScenarioKind.UPSIDE.value, _upside, ScenarioKind.UPSIDE)
DOWNSIDE = ScenarioDefinition(ScenarioKind.DOWNSIDE.value, _downside, ScenarioKind.DOWNSIDE)
NO_SYNERGIES = ScenarioDefinition(
    ScenarioKind.NO_SYNERGIES.value, _no_synergies, ScenarioKind.NO_SYNERGIES
)
ALL_EQUITY = ScenarioDefinition(
    ScenarioKind.ALL_EQUITY.value, _all_equity, ScenarioKind.ALL_EQUITY
)

STANDARD_SCENARIOS = (UPSIDE, DOWNSIDE, NO_SYNERGIES, ALL_EQUITY)


class ScenarioRunner:
    """
    Reruns projection and solver for scenario variants of a base deal.

    Example:
        ```python
        runner = ScenarioRunner()
        base = runner.evaluate(ParameterSet())
        results = runner.run(ParameterSet())  # the four standard scenarios
        ```
    """

    def __init__(
        self,
        assumptions: Optional[ProjectionAssumptions] = None,
        solver_settings: Optional[SolverSettings] = None,
    ):
        self.assumptions = assumptions or DEAL_SIMULATOR_ASSUMPTIONS
        self.solver_settings = solver_settings or SolverSettings()
        self._projector = CashFlowProjector(self.assumptions)

    def evaluate(self, params: ParameterSet, label: str = "Base Case") -> DealMetrics:
        """Project `params` and compute its metrics."""
        schedule = self._projector.project(params)
        metrics = DealMetrics.from_schedule(
            schedule, params.discount_rate, self.solver_settings
        )
        if not metrics.irr_converged:
            message = (
                f"{label}: IRR did not converge after {metrics.irr_result.iterations} "
                f"iterations; reporting low-confidence estimate {metrics.irr:.2%}"
            )
            logger.warning(message)
            warnings.warn(message, NonConvergenceWarning, stacklevel=2)
        return metrics

    def run_scenario(
        self, params: ParameterSet, scenario: ScenarioDefinition
    ) -> ScenarioResult:
        """Apply one scenario to `params` and evaluate it."""
        overrides = scenario.overrides_for(params)
        variant = params.with_overrides(**overrides)
        logger.debug(f"Running scenario '{scenario.name}' with overrides {overrides}")
        return ScenarioResult(
            name=scenario.name,
            kind=scenario.kind,
            overrides=overrides,
            parameters=variant,
            metrics=self.evaluate(variant, label=scenario.name),
        )

    def run(
        self,
        params: ParameterSet,
        scenarios: Iterable[ScenarioDefinition] = STANDARD_SCENARIOS,
    ) -> List[ScenarioResult]:
        """Evaluate each scenario against the same base parameters."""
        return [self.run_scenario(params, scenario) for scenario in scenarios]
