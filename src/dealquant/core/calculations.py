# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial calculation functions.

Contains static methods for core financial metrics on annual cash-flow
schedules (year 0 first). These functions are pure (math-only); the deal,
sensitivity and breakeven modules delegate to them so there is a single
source of truth for IRR, NPV and return multiples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from pyxirr import npv as pyxirr_npv

from .exceptions import NonConvergenceError
from .primitives.settings import SolverSettings

logger = logging.getLogger(__name__)

CashFlows = Union[Sequence[float], np.ndarray, pd.Series]

_DEFAULT_SOLVER = SolverSettings()


def _as_array(cash_flows: CashFlows) -> np.ndarray:
    if isinstance(cash_flows, pd.Series):
        values = cash_flows.to_numpy(dtype=float)
    else:
        values = np.asarray(cash_flows, dtype=float)
    if values.ndim != 1 or values.size == 0:
        raise ValueError("cash_flows must be a non-empty one-dimensional sequence")
    if not np.all(np.isfinite(values)):
        raise ValueError("cash_flows must contain only finite values")
    return values


@dataclass(frozen=True)
class IrrResult:
    """
    Tagged IRR estimate.

    Attributes:
        value: IRR as decimal (e.g., 0.15 for 15%); the last iterate when
            the solver did not converge
        converged: True when |NPV(value)| fell below the solver tolerance
        iterations: Newton steps taken
        npv_residual: NPV of the schedule at `value`
    """

    value: float
    converged: bool
    iterations: int
    npv_residual: float

    @property
    def percent(self) -> float:
        """IRR expressed in percent (15.0 for 15%)."""
        return self.value * 100.0

    def require_converged(self) -> "IrrResult":
        """Return self, or raise NonConvergenceError for a low-confidence estimate."""
        if not self.converged:
            raise NonConvergenceError(self)
        return self


class FinancialCalculations:
    """
    Pure mathematical functions for financial calculations.

    Static methods for core deal metrics, independent of how the cash flows
    were produced.
    """

    @staticmethod
    def calculate_npv(cash_flows: CashFlows, discount_rate: float) -> float:
        """
        Calculate Net Present Value using PyXIRR.

        Args:
            cash_flows: Annual cash flows, year 0 first (undiscounted)
            discount_rate: Annual discount rate as decimal (e.g., 0.12 for 12%)

        Returns:
            NPV = sum(CF_t / (1 + r)^t)

        Raises:
            ValueError: Empty/non-finite cash flows or a rate at or below -100%

        Example:
            ```python
            npv = FinancialCalculations.calculate_npv([-1000, 300, 400, 500], 0.10)
            print(f"NPV: ${npv:,.0f}")  # NPV: $-21
            ```
        """
        values = _as_array(cash_flows)
        if not math.isfinite(discount_rate) or discount_rate <= -1:
            raise ValueError(f"discount_rate must be greater than -1, got {discount_rate}")
        return float(pyxirr_npv(discount_rate, values.tolist()))

    @staticmethod
    def npv_and_derivative(cash_flows: CashFlows, rate: float) -> Tuple[float, float]:
        """
        NPV at `rate` and its analytic derivative d(NPV)/d(rate).

        The derivative is sum(-t * CF_t / (1 + rate)^(t + 1)).
        """
        values = _as_array(cash_flows)
        periods = np.arange(values.size, dtype=float)
        discount = np.power(1.0 + rate, -periods)
        npv = float(np.sum(values * discount))
        derivative = float(np.sum(-periods * values * discount) / (1.0 + rate))
        return npv, derivative

    @staticmethod
    def solve_irr(
        cash_flows: CashFlows,
        settings: Optional[SolverSettings] = None,
        strict: bool = False,
    ) -> IrrResult:
        """
        Calculate Internal Rate of Return with Newton-Raphson.

        Starts from `settings.initial_guess`, stops once |NPV| drops below
        `settings.tolerance` or the iteration budget is spent, and clamps the
        estimate to [lower_bound, upper_bound] after every step. A zero
        derivative ends the iteration early.

        Args:
            cash_flows: Annual cash flows, year 0 first
            settings: Solver configuration (defaults: guess 0.15, tolerance
                0.001, 100 iterations, bounds [-0.99, 10])
            strict: Raise NonConvergenceError instead of returning a
                non-converged estimate

        Returns:
            IrrResult tagged with convergence status

        Edge Cases Handled:
            - Schedules with no sign change never converge → converged=False
            - Flat NPV (zero derivative) → last iterate, converged=False

        Example:
            ```python
            result = FinancialCalculations.solve_irr([-1000, 100, 100, 1200])
            if result.converged:
                print(f"IRR: {result.value:.2%}")  # IRR: 12.93%
            ```
        """
        settings = settings or _DEFAULT_SOLVER
        values = _as_array(cash_flows)

        irr = settings.initial_guess
        iterations = 0
        for _ in range(settings.max_iterations):
            npv, derivative = FinancialCalculations.npv_and_derivative(values, irr)
            if abs(npv) < settings.tolerance:
                return IrrResult(
                    value=irr, converged=True, iterations=iterations, npv_residual=npv
                )
            if derivative == 0 or not math.isfinite(derivative):
                break
            irr = irr - npv / derivative
            irr = min(max(irr, settings.lower_bound), settings.upper_bound)
            iterations += 1

        npv, _ = FinancialCalculations.npv_and_derivative(values, irr)
        result = IrrResult(
            value=irr,
            converged=abs(npv) < settings.tolerance,
            iterations=iterations,
            npv_residual=npv,
        )
        if not result.converged:
            logger.debug(
                f"IRR did not converge after {iterations} iterations "
                f"(estimate {irr:.4%}, residual {npv:,.4f})"
            )
            if strict:
                raise NonConvergenceError(result)
        return result

    @staticmethod
    def calculate_moic(
        cash_flows: CashFlows, equity_investment: float
    ) -> Optional[float]:
        """
        Calculate Multiple on Invested Capital.

        MOIC = sum of all post-year-0 cash flows / equity investment.

        Edge Cases Handled:
            - Zero equity investment (fully debt-funded) → None
        """
        values = _as_array(cash_flows)
        if equity_investment <= 0:
            return None
        return float(values[1:].sum() / equity_investment)

    @staticmethod
    def first_year_reaching(
        cash_flows: CashFlows, threshold: float = 0.0
    ) -> Optional[int]:
        """
        First year whose cumulative cash flow is at least `threshold`.

        Year 0 is never reported. Returns None if the threshold is not
        reached within the schedule.

        Example:
            ```python
            # Payback year
            FinancialCalculations.first_year_reaching([-100, 40, 40, 40])  # 3
            ```
        """
        values = _as_array(cash_flows)
        cumulative = np.cumsum(values)
        hits = np.nonzero(cumulative[1:] >= threshold)[0]
        if hits.size == 0:
            return None
        return int(hits[0]) + 1
