# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Breakeven search: the value of one variable that produces a target IRR.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from ..core.primitives import BreakevenSettings, Polarity, SolverSettings
from ..deal.parameters import DealCase
from .analyzer import case_irr
from .results import BreakevenResult
from .variables import EXIT_MULTIPLE, PURCHASE_PRICE, SYNERGIES, DealVariable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakevenTarget:
    """A named breakeven question: which value of `variable` gives `target_irr`."""

    name: str
    variable: DealVariable
    target_irr: float


DEFAULT_BREAKEVEN_TARGETS: Tuple[BreakevenTarget, ...] = (
    BreakevenTarget("synergies_required_for_20pct_irr", SYNERGIES, 0.20),
    BreakevenTarget("max_purchase_price_for_20pct_irr", PURCHASE_PRICE, 0.20),
    BreakevenTarget("min_exit_multiple_for_15pct_irr", EXIT_MULTIPLE, 0.15),
)


class BreakevenSolver:
    """
    Bisection over a variable's search range.

    The search direction comes from the variable's polarity: for a DIRECT
    variable an IRR below target moves the bracket up, for an INVERSE one it
    moves it down. The function is assumed monotonic over the bracket; when
    the target lies outside the reachable IRR range the result converges to
    the nearer end with `achieved=False`.

    Example:
        ```python
        solver = BreakevenSolver()
        case = DealCase(parameters=ParameterSet(), assumptions=SENSITIVITY_ASSUMPTIONS)
        result = solver.solve(case, EXIT_MULTIPLE, target_irr=0.15)
        print(f"Minimum exit multiple: {result.value:.1f}x")
        ```
    """

    def __init__(
        self,
        settings: Optional[BreakevenSettings] = None,
        solver_settings: Optional[SolverSettings] = None,
    ):
        self.settings = settings or BreakevenSettings()
        self.solver_settings = solver_settings or SolverSettings()

    def solve(
        self,
        case: DealCase,
        variable: DealVariable,
        target_irr: float,
        bounds: Optional[Tuple[float, float]] = None,
    ) -> BreakevenResult:
        """
        Find the value of `variable` at which IRR equals `target_irr`.

        Args:
            case: Base deal case; other inputs stay fixed
            variable: Variable to search
            target_irr: Target IRR (decimal)
            bounds: Search bracket; defaults to the variable's search range

        Returns:
            BreakevenResult; `achieved` is False when the tolerance was not
            met within the iteration budget
        """
        low, high = bounds if bounds is not None else variable.search_bounds(case)
        if high < low:
            raise ValueError(
                f"Inverted breakeven bracket for {variable.key}: [{low}, {high}]"
            )
        # A zero-width bracket (e.g. no base synergies to scale) is a single evaluation
        budget = self.settings.max_iterations if low < high else 0
        direct = variable.polarity is Polarity.DIRECT
        tolerance = self.settings.tolerance

        for iteration in range(1, budget + 1):
            mid = (low + high) / 2.0
            irr = case_irr(variable.apply(case, mid), self.solver_settings)
            if abs(irr.value - target_irr) < tolerance:
                logger.debug(
                    f"Breakeven {variable.key}={mid:,.4f} hits {target_irr:.2%} "
                    f"after {iteration} iterations"
                )
                return BreakevenResult(
                    variable=variable.key,
                    target_irr=target_irr,
                    value=mid,
                    achieved_irr=irr.value,
                    achieved=True,
                    iterations=iteration,
                    irr_converged=irr.converged,
                )
            if (irr.value < target_irr) == direct:
                low = mid
            else:
                high = mid

        mid = (low + high) / 2.0
        irr = case_irr(variable.apply(case, mid), self.solver_settings)
        achieved = abs(irr.value - target_irr) < tolerance
        if not achieved:
            logger.debug(
                f"Breakeven {variable.key} missed {target_irr:.2%} within "
                f"{budget} iterations (IRR {irr.value:.2%} at {mid:,.4f})"
            )
        return BreakevenResult(
            variable=variable.key,
            target_irr=target_irr,
            value=mid,
            achieved_irr=irr.value,
            achieved=achieved,
            iterations=budget,
            irr_converged=irr.converged,
        )

    def solve_targets(
        self,
        case: DealCase,
        targets: Iterable[BreakevenTarget] = DEFAULT_BREAKEVEN_TARGETS,
    ) -> Dict[str, BreakevenResult]:
        """Solve each named target against the same base case."""
        return {
            target.name: self.solve(case, target.variable, target.target_irr)
            for target in targets
        }
