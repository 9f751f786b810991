# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
One-at-a-time IRR sensitivity analysis.

Each variable is moved to the low and high ends of its range while every
other input stays at base; the IRR swing between the two ends ranks the
variables for a tornado chart.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Union

from ..core.calculations import FinancialCalculations, IrrResult
from ..core.primitives import (
    SENSITIVITY_ASSUMPTIONS,
    ProjectionAssumptions,
    SolverSettings,
)
from ..deal.parameters import DealCase, ParameterSet
from ..deal.projector import CashFlowProjector
from .results import SensitivityAnalysis, SensitivityResult
from .variables import SENSITIVITY_VARIABLES, DealVariable

logger = logging.getLogger(__name__)


def case_irr(case: DealCase, solver_settings: Optional[SolverSettings] = None) -> IrrResult:
    """Project a deal case and solve its IRR."""
    schedule = CashFlowProjector().project_case(case)
    return FinancialCalculations.solve_irr(schedule.values, solver_settings)


class SensitivityAnalyzer:
    """
    Tornado-style IRR sensitivity for a deal.

    Plain `ParameterSet` inputs are projected under `assumptions`
    (the sensitivity conventions: 12% base EBITDA ratio, 6x exit, unless
    overridden); a `DealCase` carries its own.

    Example:
        ```python
        analysis = SensitivityAnalyzer().analyze(ParameterSet())
        top = analysis.most_sensitive
        print(f"{top.label}: {top.irr_swing:.2%} IRR swing")
        ```
    """

    def __init__(
        self,
        assumptions: Optional[ProjectionAssumptions] = None,
        variables: Iterable[DealVariable] = SENSITIVITY_VARIABLES,
        solver_settings: Optional[SolverSettings] = None,
    ):
        self.assumptions = assumptions or SENSITIVITY_ASSUMPTIONS
        self.variables = tuple(variables)
        self.solver_settings = solver_settings or SolverSettings()

    def as_case(self, deal: Union[ParameterSet, DealCase]) -> DealCase:
        if isinstance(deal, DealCase):
            return deal
        return DealCase(parameters=deal, assumptions=self.assumptions)

    def irr(self, case: DealCase) -> IrrResult:
        return case_irr(case, self.solver_settings)

    def analyze(self, deal: Union[ParameterSet, DealCase]) -> SensitivityAnalysis:
        """
        Compute and rank the sensitivity of IRR to every variable.

        Args:
            deal: Base parameters or a full DealCase

        Returns:
            SensitivityAnalysis with results ordered by swing (rank 1 first);
            rows with a non-converged IRR follow every converged row
        """
        case = self.as_case(deal)
        base = self.irr(case)
        logger.debug(
            f"Sensitivity base IRR {base.value:.2%} over {len(self.variables)} variables"
        )

        unranked = [self._measure(case, variable, base) for variable in self.variables]
        # Non-converged rows rank last; stable sort keeps table order among equal swings
        ordered = sorted(unranked, key=lambda item: (not item.converged, -item.irr_swing))
        results: List[SensitivityResult] = [
            replace(item, rank=rank)
            for rank, item in enumerate(ordered, start=1)
        ]

        if not base.converged or not all(r.converged for r in results):
            logger.warning(
                "Sensitivity analysis contains non-converged IRRs; "
                "affected rows are flagged converged=False"
            )
        if results:
            logger.info(
                f"Sensitivity complete: most sensitive {results[0].label} "
                f"({results[0].irr_swing:.2%} swing)"
            )
        return SensitivityAnalysis(case=case, base_irr=base, results=results)

    def _measure(
        self, case: DealCase, variable: DealVariable, base: IrrResult
    ) -> SensitivityResult:
        low_value, high_value = variable.low_high(case)
        low = self.irr(variable.apply(case, low_value))
        high = self.irr(variable.apply(case, high_value))
        return SensitivityResult(
            variable=variable.key,
            label=variable.label,
            unit=variable.unit,
            base_value=variable.value(case),
            low_value=low_value,
            high_value=high_value,
            base_irr=base.value,
            low_irr=low.value,
            high_irr=high.value,
            irr_swing=abs(high.value - low.value),
            rank=0,
            converged=base.converged and low.converged and high.converged,
        )
