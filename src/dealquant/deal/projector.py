# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Annual free-cash-flow projection for a leveraged acquisition.

The projector turns a `ParameterSet` and a set of `ProjectionAssumptions`
into a `CashFlowSchedule`: year 0 carries the equity cheque plus
integration costs, years 1..H carry after-tax free cash flow, the earnout
year adds the probability-weighted earnout, and the final year adds exit
proceeds net of debt payoff.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..core.primitives import DEAL_SIMULATOR_ASSUMPTIONS, ProjectionAssumptions
from .parameters import DealCase, ParameterSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CashFlowSchedule:
    """
    Immutable annual cash-flow schedule, year 0 first.

    Attributes:
        cash_flows: Signed cash flows for years 0..H (investor perspective)
        equity_investment: Equity cheque paid at close
        ebitda: EBITDA by year (year 0 is 0)
        synergies: Realized synergies by year (year 0 is 0)
        debt_service: Interest paid by year (year 0 is 0)
        earnout: Expected earnout received by year
        terminal_value: Exit proceeds net of debt payoff (final year only)

    The component arrays are kept for reporting; `cash_flows` is the only
    input to the IRR/NPV solver.
    """

    cash_flows: Tuple[float, ...]
    equity_investment: float
    ebitda: Tuple[float, ...]
    synergies: Tuple[float, ...]
    debt_service: Tuple[float, ...]
    earnout: Tuple[float, ...]
    terminal_value: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.cash_flows)

    @property
    def horizon_years(self) -> int:
        return len(self.cash_flows) - 1

    @property
    def initial_outlay(self) -> float:
        """Year-0 cash flow (negative)."""
        return self.cash_flows[0]

    @cached_property
    def values(self) -> np.ndarray:
        values = np.asarray(self.cash_flows, dtype=float)
        values.setflags(write=False)
        return values

    def to_series(self) -> pd.Series:
        """Cash flows as a Series indexed by year."""
        return pd.Series(
            self.cash_flows,
            index=pd.RangeIndex(len(self.cash_flows), name="year"),
            name="cash_flow",
        )

    def to_frame(self) -> pd.DataFrame:
        """Per-year component breakdown with cumulative cash flow."""
        frame = pd.DataFrame(
            {
                "ebitda": self.ebitda,
                "synergies": self.synergies,
                "debt_service": self.debt_service,
                "earnout": self.earnout,
                "terminal_value": self.terminal_value,
                "cash_flow": self.cash_flows,
            },
            index=pd.RangeIndex(len(self.cash_flows), name="year"),
        )
        frame["cumulative_cash_flow"] = frame["cash_flow"].cumsum()
        return frame


class CashFlowProjector:
    """
    Projects annual free cash flow under fixed projection assumptions.

    Per year y = 1..H:
        EBITDA     = purchase_price x base_ebitda_ratio x (1 + g)^y x margin
        synergies  = year1 + (year3 - year1) x min(y / ramp_years, 1)
        debt       = purchase_price x debt% x debt_interest_rate
        FCF        = (EBITDA + synergies - debt) x (1 - tax)
    plus the expected earnout in the earnout year and, in year H,
    (EBITDA_H + synergies_H) x exit_multiple - debt principal.

    Example:
        ```python
        projector = CashFlowProjector()
        schedule = projector.project(ParameterSet())
        print(schedule.to_frame())
        ```
    """

    def __init__(self, assumptions: Optional[ProjectionAssumptions] = None):
        self.assumptions = assumptions or DEAL_SIMULATOR_ASSUMPTIONS

    def project(self, params: ParameterSet) -> CashFlowSchedule:
        """Build the cash-flow schedule for `params`."""
        a = self.assumptions
        horizon = a.horizon_years
        years = np.arange(1, horizon + 1, dtype=float)

        equity_investment = params.equity_investment
        tax_retention = 1.0 - params.tax_rate / 100.0

        revenue_multiplier = np.power(1.0 + params.revenue_growth_rate / 100.0, years)
        base_ebitda = params.purchase_price * a.base_ebitda_ratio
        ebitda = base_ebitda * revenue_multiplier * (params.ebitda_margin / 100.0)

        ramp = np.minimum(years / a.synergy_ramp_years, 1.0)
        synergies = params.synergies_year1 + (
            params.synergies_year3 - params.synergies_year1
        ) * ramp

        debt_service = np.full(horizon, params.debt_amount * a.debt_interest_rate)

        fcf = (ebitda + synergies - debt_service) * tax_retention

        earnout = np.zeros(horizon)
        if params.earnout_amount > 0:
            earnout[a.earnout_year - 1] = params.expected_earnout

        terminal = np.zeros(horizon)
        terminal[-1] = (ebitda[-1] + synergies[-1]) * a.exit_multiple - params.debt_amount

        operating = fcf + earnout + terminal
        cash_flows = (-(equity_investment + params.integration_costs),) + tuple(
            float(v) for v in operating
        )

        logger.debug(
            f"Projected {horizon}-year schedule: outlay {cash_flows[0]:,.0f}, "
            f"terminal year {cash_flows[-1]:,.0f}"
        )

        def _with_year0(values: np.ndarray) -> Tuple[float, ...]:
            return (0.0,) + tuple(float(v) for v in values)

        return CashFlowSchedule(
            cash_flows=cash_flows,
            equity_investment=equity_investment,
            ebitda=_with_year0(ebitda),
            synergies=_with_year0(synergies),
            debt_service=_with_year0(debt_service),
            earnout=_with_year0(earnout),
            terminal_value=_with_year0(terminal),
        )

    def project_case(self, case: DealCase) -> CashFlowSchedule:
        """Project a DealCase under its own assumptions."""
        return CashFlowProjector(case.assumptions).project(case.parameters)
