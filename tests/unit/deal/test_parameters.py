# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for ParameterSet validation and DealCase derivation.
"""

import pytest
from pydantic import ValidationError

from dealquant.core.primitives import DEAL_SIMULATOR_ASSUMPTIONS
from dealquant.deal import DealCase, ParameterSet


class TestParameterSetDefaults:
    def test_defaults(self, default_params):
        assert default_params.purchase_price == 100_000_000
        assert default_params.equity_percentage == 40
        assert default_params.debt_percentage == 60
        assert default_params.earnout_amount == 10_000_000
        assert default_params.earnout_probability == 70
        assert default_params.synergies_year1 == 2_000_000
        assert default_params.synergies_year3 == 8_000_000
        assert default_params.integration_costs == 5_000_000
        assert default_params.revenue_growth_rate == 8
        assert default_params.ebitda_margin == 18
        assert default_params.discount_rate == 12
        assert default_params.tax_rate == 25

    def test_derived_amounts(self, default_params):
        assert default_params.equity_investment == pytest.approx(40_000_000)
        assert default_params.debt_amount == pytest.approx(60_000_000)
        assert default_params.expected_earnout == pytest.approx(7_000_000)


class TestParameterSetValidation:
    """Out-of-domain inputs are rejected, never clamped."""

    def test_capital_structure_must_sum_to_100(self):
        with pytest.raises(ValidationError, match="must equal 100"):
            ParameterSet(equity_percentage=50, debt_percentage=60)

    def test_capital_structure_tolerance(self):
        params = ParameterSet(equity_percentage=33.3333333, debt_percentage=66.6666667)
        assert params.equity_percentage + params.debt_percentage == pytest.approx(100)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("purchase_price", 0),
            ("purchase_price", -1_000_000),
            ("earnout_probability", 101),
            ("earnout_probability", -5),
            ("synergies_year1", -1),
            ("integration_costs", -1),
            ("tax_rate", 120),
            ("revenue_growth_rate", -100),
            ("revenue_growth_rate", float("nan")),
            ("ebitda_margin", 150),
        ],
    )
    def test_out_of_domain_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ParameterSet(**{field: value})

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ParameterSet(purchase_prise=1_000)

    def test_immutable(self, default_params):
        with pytest.raises(ValidationError):
            default_params.purchase_price = 1.0

    def test_with_overrides_returns_new_instance(self, default_params):
        variant = default_params.with_overrides(synergies_year3=12_000_000)
        assert variant.synergies_year3 == 12_000_000
        assert default_params.synergies_year3 == 8_000_000

    def test_with_overrides_revalidates(self, default_params):
        with pytest.raises(ValidationError):
            default_params.with_overrides(equity_percentage=70)


class TestDealCase:
    def test_defaults_to_simulator_conventions(self):
        case = DealCase()
        assert case.parameters == ParameterSet()
        assert case.assumptions == DEAL_SIMULATOR_ASSUMPTIONS

    def test_with_parameters(self):
        case = DealCase().with_parameters(purchase_price=80_000_000)
        assert case.parameters.purchase_price == 80_000_000
        assert case.assumptions == DEAL_SIMULATOR_ASSUMPTIONS

    def test_with_assumptions(self):
        case = DealCase().with_assumptions(exit_multiple=7.5)
        assert case.assumptions.exit_multiple == 7.5
        assert case.parameters == ParameterSet()
