# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal results accessors.

Flat result records for deal projections and scenario runs. Data comes from
the projector's `CashFlowSchedule`; math is delegated to
`FinancialCalculations`. No business logic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from ..core.calculations import FinancialCalculations, IrrResult
from ..core.primitives import ProjectionAssumptions, ScenarioKind, SolverSettings
from .parameters import ParameterSet
from .projector import CashFlowSchedule


@dataclass(frozen=True)
class DealMetrics:
    """
    Return metrics for one projected schedule.

    Attributes:
        schedule: The projected cash flows
        irr_result: Tagged IRR (decimal) with convergence status
        npv: NPV at the deal's discount rate
        moic: Post-close distributions / equity investment (None without equity)
        payback_year: First year cumulative cash flow >= 0 (None if never)
        break_even_year: First year cumulative cash flow >= equity investment (None if never)
    """

    schedule: CashFlowSchedule
    irr_result: IrrResult
    npv: float
    moic: Optional[float]
    payback_year: Optional[int]
    break_even_year: Optional[int]

    @classmethod
    def from_schedule(
        cls,
        schedule: CashFlowSchedule,
        discount_rate: float,
        solver_settings: Optional[SolverSettings] = None,
    ) -> "DealMetrics":
        """
        Compute metrics for a schedule.

        Args:
            schedule: Projected cash flows
            discount_rate: Discount rate in percent (12 for 12%)
            solver_settings: IRR solver configuration
        """
        flows = schedule.values
        return cls(
            schedule=schedule,
            irr_result=FinancialCalculations.solve_irr(flows, solver_settings),
            npv=FinancialCalculations.calculate_npv(flows, discount_rate / 100.0),
            moic=FinancialCalculations.calculate_moic(flows, schedule.equity_investment),
            payback_year=FinancialCalculations.first_year_reaching(flows, 0.0),
            break_even_year=FinancialCalculations.first_year_reaching(
                flows, schedule.equity_investment
            ),
        )

    @property
    def irr(self) -> float:
        """IRR as decimal (last iterate when not converged)."""
        return self.irr_result.value

    @property
    def irr_converged(self) -> bool:
        return self.irr_result.converged

    @property
    def cash_flows(self) -> List[float]:
        return list(self.schedule.cash_flows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "irr": self.irr,
            "irr_converged": self.irr_converged,
            "npv": self.npv,
            "moic": self.moic,
            "payback_year": self.payback_year,
            "break_even_year": self.break_even_year,
        }


@dataclass(frozen=True)
class ScenarioResult:
    """
    Metrics for one named scenario.

    Attributes:
        name: Display name ("Upside", "No Synergies", ...)
        kind: Scenario kind (CUSTOM for user-defined scenarios)
        overrides: Parameter values the scenario changed
        parameters: Full parameter set the scenario ran with
        metrics: Projection results
    """

    name: str
    kind: ScenarioKind
    overrides: Dict[str, float]
    parameters: ParameterSet
    metrics: DealMetrics

    @property
    def irr(self) -> float:
        return self.metrics.irr

    @property
    def npv(self) -> float:
        return self.metrics.npv

    @property
    def moic(self) -> Optional[float]:
        return self.metrics.moic


@dataclass(frozen=True)
class DealSimulationResults:
    """
    Base case plus scenario results for one deal.

    Example:
        ```python
        results = simulate_deal(ParameterSet())
        print(results.comparison())
        upside = results.scenario("Upside")
        ```
    """

    parameters: ParameterSet
    assumptions: ProjectionAssumptions
    base_case: DealMetrics
    scenarios: List[ScenarioResult] = field(default_factory=list)

    def scenario(self, name: str) -> ScenarioResult:
        """Look up a scenario by name."""
        for result in self.scenarios:
            if result.name == name:
                return result
        raise KeyError(f"No scenario named '{name}'")

    @property
    def all_converged(self) -> bool:
        """True when every IRR in the run converged."""
        return self.base_case.irr_converged and all(
            s.metrics.irr_converged for s in self.scenarios
        )

    def comparison(self) -> pd.DataFrame:
        """Side-by-side metrics, base case first, indexed by scenario name."""
        rows = {ScenarioKind.BASE.value: self.base_case.to_dict()}
        for result in self.scenarios:
            rows[result.name] = result.metrics.to_dict()
        frame = pd.DataFrame.from_dict(rows, orient="index")
        frame.index.name = "scenario"
        return frame

    def cash_flow_table(self) -> pd.DataFrame:
        """Cash flows by year (rows) and scenario (columns)."""
        columns = {ScenarioKind.BASE.value: self.base_case.schedule.to_series()}
        for result in self.scenarios:
            columns[result.name] = result.metrics.schedule.to_series()
        return pd.DataFrame(columns)
