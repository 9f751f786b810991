# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Risk factors consumed by the Monte Carlo engine.

Risk factors are normally produced upstream (document review); the default
set below is the generic M&A risk list used when none is supplied.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, model_validator

from ..core.primitives import (
    FloatBetween0And1,
    Model,
    RiskCategoryEnum,
    ValidationMixin,
)


class RiskFactor(Model, ValidationMixin):
    """
    An independent risk that may reduce (or raise) deal value.

    Impacts are percentage deltas to deal value; -10 means a 10% loss. When
    the risk triggers, the impact is drawn uniformly from
    [impact_low, impact_high]. Bounds given in the wrong order are rejected,
    not swapped.

    Attributes:
        name: Unique, human-readable risk name
        category: Free-text category (see RiskCategoryEnum for conventions)
        probability: Chance the risk triggers in a trial (0-1)
        impact_low: Lower (worst) bound of the impact, in percent
        impact_high: Upper bound of the impact, in percent
        description: Optional explanation
        mitigation: Optional mitigation note

    Example:
        ```python
        churn = RiskFactor(
            name="Customer Churn",
            category="Market",
            probability=0.25,
            impact_low=-15,
            impact_high=-2,
        )
        ```
    """

    name: str = Field(..., min_length=1)
    category: str = Field(default=RiskCategoryEnum.OPERATIONAL.value)
    probability: FloatBetween0And1
    impact_low: float = Field(..., description="Worst-case impact on deal value (%)")
    impact_high: float = Field(..., description="Best-case impact on deal value (%)")
    description: Optional[str] = None
    mitigation: Optional[str] = None

    @model_validator(mode="after")
    def validate_impact_range(self) -> "RiskFactor":
        self.validate_finite(self, ("probability", "impact_low", "impact_high"))
        return self.validate_ordered_range(self, "impact_low", "impact_high")

    @property
    def expected_impact(self) -> float:
        """Probability-weighted midpoint impact, in percent."""
        return self.probability * (self.impact_low + self.impact_high) / 2.0


def default_risk_factors() -> List[RiskFactor]:
    """
    Generic M&A risk set: eight risks across legal, regulatory, integration,
    financial, operational and market categories.

    Returns:
        New list of RiskFactor records
    """
    return [
        RiskFactor(
            name="MAC Clause Trigger",
            category=RiskCategoryEnum.LEGAL.value,
            probability=0.08,
            impact_low=-100,
            impact_high=-100,
            description="Material Adverse Change clause triggered, deal terminates",
        ),
        RiskFactor(
            name="Regulatory Delay",
            category=RiskCategoryEnum.REGULATORY.value,
            probability=0.25,
            impact_low=-8,
            impact_high=-2,
            description="Extended regulatory review increases costs",
        ),
        RiskFactor(
            name="Key Employee Departure",
            category=RiskCategoryEnum.INTEGRATION.value,
            probability=0.35,
            impact_low=-12,
            impact_high=-3,
            description="Loss of critical talent during transition",
        ),
        RiskFactor(
            name="Revenue Shortfall",
            category=RiskCategoryEnum.FINANCIAL.value,
            probability=0.30,
            impact_low=-20,
            impact_high=-5,
            description="Target misses revenue projections",
        ),
        RiskFactor(
            name="Integration Cost Overrun",
            category=RiskCategoryEnum.OPERATIONAL.value,
            probability=0.40,
            impact_low=-10,
            impact_high=-3,
            description="Integration costs exceed budget",
        ),
        RiskFactor(
            name="Customer Churn",
            category=RiskCategoryEnum.MARKET.value,
            probability=0.25,
            impact_low=-15,
            impact_high=-2,
            description="Customers leave due to uncertainty",
        ),
        RiskFactor(
            name="Hidden Liabilities",
            category=RiskCategoryEnum.LEGAL.value,
            probability=0.15,
            impact_low=-25,
            impact_high=-5,
            description="Undisclosed liabilities discovered",
        ),
        RiskFactor(
            name="Synergy Realization Delay",
            category=RiskCategoryEnum.INTEGRATION.value,
            probability=0.45,
            impact_low=-8,
            impact_high=-2,
            description="Synergies take longer to materialize",
        ),
    ]
