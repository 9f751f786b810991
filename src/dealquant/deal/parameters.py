# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal assumptions.

`ParameterSet` is the validated, immutable record of transaction inputs.
`DealCase` pairs it with the projection conventions (exit multiple, base
EBITDA ratio, ...) so variables living on either side can be perturbed
uniformly by the sensitivity and breakeven tools.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from ..core.primitives import (
    DEAL_SIMULATOR_ASSUMPTIONS,
    GrowthPercentage,
    MarginPercentage,
    Model,
    Percentage,
    PositiveFloat,
    ProjectionAssumptions,
    StrictlyPositiveFloat,
    ValidationMixin,
)


class ParameterSet(Model, ValidationMixin):
    """
    Validated deal assumptions for an acquisition.

    Percent-denominated fields use whole percentages (40 means 40%).
    Equity and debt shares must add up to 100; out-of-domain inputs raise
    `pydantic.ValidationError` instead of being clamped.

    Attributes:
        purchase_price: Total deal value
        equity_percentage: Equity-funded share of the purchase price
        debt_percentage: Debt-funded share of the purchase price
        earnout_amount: Contingent deferred payment
        earnout_probability: Likelihood the earnout is achieved
        synergies_year1: Annual synergies realized in year 1
        synergies_year3: Run-rate synergies, reached in year 3
        integration_costs: One-time integration costs paid at close
        revenue_growth_rate: Annual revenue growth
        ebitda_margin: EBITDA margin applied to base EBITDA
        discount_rate: Discount rate (WACC) for NPV
        tax_rate: Tax rate applied to pre-tax cash flow

    Example:
        ```python
        params = ParameterSet(purchase_price=250_000_000, equity_percentage=50,
                              debt_percentage=50)
        levered_down = params.with_overrides(equity_percentage=30, debt_percentage=70)
        ```
    """

    purchase_price: StrictlyPositiveFloat = Field(
        default=100_000_000.0, description="Total deal value"
    )
    equity_percentage: Percentage = Field(default=40.0, description="Equity portion (0-100)")
    debt_percentage: Percentage = Field(default=60.0, description="Debt portion (0-100)")
    earnout_amount: PositiveFloat = Field(
        default=10_000_000.0, description="Contingent payment"
    )
    earnout_probability: Percentage = Field(
        default=70.0, description="Likelihood of earnout (0-100)"
    )
    synergies_year1: PositiveFloat = Field(default=2_000_000.0, description="Year 1 synergies")
    synergies_year3: PositiveFloat = Field(
        default=8_000_000.0, description="Run-rate synergies reached in year 3"
    )
    integration_costs: PositiveFloat = Field(
        default=5_000_000.0, description="One-time integration costs"
    )
    revenue_growth_rate: GrowthPercentage = Field(
        default=8.0, description="Annual revenue growth %"
    )
    ebitda_margin: MarginPercentage = Field(default=18.0, description="EBITDA margin %")
    discount_rate: GrowthPercentage = Field(default=12.0, description="Discount rate (WACC) %")
    tax_rate: Percentage = Field(default=25.0, description="Tax rate %")

    @model_validator(mode="after")
    def validate_capital_structure(self) -> "ParameterSet":
        """Reject non-finite inputs and capital structures not summing to 100%."""
        self.validate_finite(self, type(self).model_fields.keys())
        return self.validate_allocation_sum(
            self, ("equity_percentage", "debt_percentage"), total=100.0
        )

    # === COMPUTED PROPERTIES ===

    @property
    def equity_investment(self) -> float:
        return self.purchase_price * self.equity_percentage / 100.0

    @property
    def debt_amount(self) -> float:
        return self.purchase_price * self.debt_percentage / 100.0

    @property
    def expected_earnout(self) -> float:
        """Probability-weighted earnout value."""
        return self.earnout_amount * self.earnout_probability / 100.0


class DealCase(Model):
    """
    A deal's parameters together with the projection conventions applied to them.

    Example:
        ```python
        case = DealCase(parameters=ParameterSet())
        richer_exit = case.with_assumptions(exit_multiple=7.0)
        ```
    """

    parameters: ParameterSet = Field(default_factory=ParameterSet)
    assumptions: ProjectionAssumptions = Field(default=DEAL_SIMULATOR_ASSUMPTIONS)

    def with_parameters(self, **changes: Any) -> "DealCase":
        """Copy with validated parameter overrides."""
        return DealCase(
            parameters=self.parameters.with_overrides(**changes),
            assumptions=self.assumptions,
        )

    def with_assumptions(self, **changes: Any) -> "DealCase":
        """Copy with validated assumption overrides."""
        return DealCase(
            parameters=self.parameters,
            assumptions=self.assumptions.with_overrides(**changes),
        )
