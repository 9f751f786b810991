# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal variable descriptors for sensitivity and breakeven analysis.

Each `DealVariable` bundles everything the analyzers need to perturb one
input: how to read it from a `DealCase`, how to write a new value (keeping
dependent fields consistent), its tornado range, its breakeven search
range and the direction of its effect on IRR.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from ..core.primitives import Polarity
from ..deal.parameters import DealCase

Bounds = Tuple[float, float]
RangeRule = Callable[[float], Bounds]


@dataclass(frozen=True)
class DealVariable:
    """
    Descriptor for one perturbable deal variable.

    Attributes:
        key: Stable identifier (e.g., "purchase_price")
        label: Display name (e.g., "Purchase Price")
        unit: Display unit ("$", "%", "x")
        polarity: Effect of an increase on IRR
        getter: Reads the current value from a DealCase
        setter: Returns a new DealCase with the value applied
        sensitivity_range: Maps the base value to (low, high) for the tornado
        search_range: Maps the base value to the breakeven search bracket
    """

    key: str
    label: str
    unit: str
    polarity: Polarity
    getter: Callable[[DealCase], float]
    setter: Callable[[DealCase, float], DealCase]
    sensitivity_range: RangeRule
    search_range: RangeRule

    def value(self, case: DealCase) -> float:
        return self.getter(case)

    def apply(self, case: DealCase, value: float) -> DealCase:
        return self.setter(case, value)

    def low_high(self, case: DealCase) -> Bounds:
        return self.sensitivity_range(self.value(case))

    def search_bounds(self, case: DealCase) -> Bounds:
        return self.search_range(self.value(case))


def _scaled(low: float, high: float) -> RangeRule:
    return lambda base: (base * low, base * high)


def _fixed(low: float, high: float) -> RangeRule:
    return lambda _base: (low, high)


def parameter_variable(
    key: str,
    label: str,
    unit: str,
    polarity: Polarity,
    sensitivity_range: RangeRule,
    search_range: RangeRule,
) -> DealVariable:
    """Descriptor for a plain `ParameterSet` field."""
    return DealVariable(
        key=key,
        label=label,
        unit=unit,
        polarity=polarity,
        getter=lambda case: getattr(case.parameters, key),
        setter=lambda case, value: case.with_parameters(**{key: value}),
        sensitivity_range=sensitivity_range,
        search_range=search_range,
    )


def _set_equity(case: DealCase, value: float) -> DealCase:
    return case.with_parameters(equity_percentage=value, debt_percentage=100.0 - value)


def _set_synergies(case: DealCase, value: float) -> DealCase:
    # Run-rate synergies move; year 1 keeps its share of run-rate
    params = case.parameters
    if params.synergies_year3 > 0:
        year1 = params.synergies_year1 * value / params.synergies_year3
    else:
        year1 = params.synergies_year1
    return case.with_parameters(synergies_year3=value, synergies_year1=year1)


PURCHASE_PRICE = parameter_variable(
    "purchase_price",
    "Purchase Price",
    "$",
    Polarity.INVERSE,
    _scaled(0.8, 1.2),
    _scaled(0.0, 2.0),
)
EQUITY_PERCENTAGE = DealVariable(
    key="equity_percentage",
    label="Equity %",
    unit="%",
    polarity=Polarity.DIRECT,
    getter=lambda case: case.parameters.equity_percentage,
    setter=_set_equity,
    sensitivity_range=_fixed(20.0, 80.0),
    # Below ~20% equity the debt payoff swamps the exit and IRR is non-monotonic
    search_range=_fixed(20.0, 100.0),
)
SYNERGIES = DealVariable(
    key="synergies",
    label="Synergies",
    unit="$",
    polarity=Polarity.DIRECT,
    getter=lambda case: case.parameters.synergies_year3,
    setter=_set_synergies,
    sensitivity_range=_scaled(0.3, 1.5),
    search_range=_scaled(0.0, 3.0),
)
INTEGRATION_COSTS = parameter_variable(
    "integration_costs",
    "Integration Costs",
    "$",
    Polarity.INVERSE,
    _scaled(0.5, 2.0),
    _scaled(0.0, 3.0),
)
REVENUE_GROWTH = parameter_variable(
    "revenue_growth_rate",
    "Revenue Growth",
    "%",
    Polarity.DIRECT,
    _fixed(0.0, 15.0),
    _fixed(-50.0, 50.0),
)
EBITDA_MARGIN = parameter_variable(
    "ebitda_margin",
    "EBITDA Margin",
    "%",
    Polarity.DIRECT,
    _fixed(10.0, 30.0),
    _fixed(0.0, 100.0),
)
EXIT_MULTIPLE = DealVariable(
    key="exit_multiple",
    label="Exit Multiple",
    unit="x",
    polarity=Polarity.DIRECT,
    getter=lambda case: case.assumptions.exit_multiple,
    setter=lambda case, value: case.with_assumptions(exit_multiple=value),
    sensitivity_range=_fixed(4.0, 8.0),
    search_range=_fixed(0.0, 12.0),
)

SENSITIVITY_VARIABLES: Tuple[DealVariable, ...] = (
    PURCHASE_PRICE,
    EQUITY_PERCENTAGE,
    SYNERGIES,
    INTEGRATION_COSTS,
    REVENUE_GROWTH,
    EBITDA_MARGIN,
    EXIT_MULTIPLE,
)

VARIABLES_BY_KEY: Dict[str, DealVariable] = {v.key: v for v in SENSITIVITY_VARIABLES}
