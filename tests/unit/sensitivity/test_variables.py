# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the deal variable descriptor table.
"""

import pytest

from dealquant.core.primitives import Polarity
from dealquant.sensitivity import (
    EQUITY_PERCENTAGE,
    EXIT_MULTIPLE,
    INTEGRATION_COSTS,
    PURCHASE_PRICE,
    SENSITIVITY_VARIABLES,
    SYNERGIES,
    VARIABLES_BY_KEY,
    case_irr,
)


class TestVariableTable:
    def test_seven_variables(self):
        assert [v.key for v in SENSITIVITY_VARIABLES] == [
            "purchase_price",
            "equity_percentage",
            "synergies",
            "integration_costs",
            "revenue_growth_rate",
            "ebitda_margin",
            "exit_multiple",
        ]
        assert set(VARIABLES_BY_KEY) == {v.key for v in SENSITIVITY_VARIABLES}

    def test_polarities(self):
        assert PURCHASE_PRICE.polarity is Polarity.INVERSE
        assert INTEGRATION_COSTS.polarity is Polarity.INVERSE
        assert SYNERGIES.polarity is Polarity.DIRECT
        assert EXIT_MULTIPLE.polarity is Polarity.DIRECT
        assert EQUITY_PERCENTAGE.polarity is Polarity.DIRECT

    @pytest.mark.parametrize("variable", SENSITIVITY_VARIABLES, ids=lambda v: v.key)
    def test_polarity_matches_projection(self, low_leverage_case, variable):
        """Moving from the low to the high end shifts IRR in the declared direction."""
        low, high = variable.low_high(low_leverage_case)
        low_irr = case_irr(variable.apply(low_leverage_case, low))
        high_irr = case_irr(variable.apply(low_leverage_case, high))
        assert low_irr.converged and high_irr.converged
        direction = 1 if high_irr.value > low_irr.value else -1
        assert direction == variable.polarity.sign

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("purchase_price", (80_000_000, 120_000_000)),
            ("equity_percentage", (20, 80)),
            ("synergies", (2_400_000, 12_000_000)),
            ("integration_costs", (2_500_000, 10_000_000)),
            ("revenue_growth_rate", (0, 15)),
            ("ebitda_margin", (10, 30)),
            ("exit_multiple", (4, 8)),
        ],
    )
    def test_sensitivity_ranges(self, sensitivity_case, key, expected):
        low, high = VARIABLES_BY_KEY[key].low_high(sensitivity_case)
        assert (low, high) == pytest.approx(expected)

    def test_search_ranges(self, sensitivity_case):
        assert PURCHASE_PRICE.search_bounds(sensitivity_case) == pytest.approx((0, 200_000_000))
        assert SYNERGIES.search_bounds(sensitivity_case) == pytest.approx((0, 24_000_000))
        assert EXIT_MULTIPLE.search_bounds(sensitivity_case) == pytest.approx((0, 12))
        assert EQUITY_PERCENTAGE.search_bounds(sensitivity_case) == pytest.approx((20, 100))


class TestApply:
    def test_equity_keeps_capital_structure_whole(self, sensitivity_case):
        case = EQUITY_PERCENTAGE.apply(sensitivity_case, 25)
        assert case.parameters.equity_percentage == 25
        assert case.parameters.debt_percentage == 75

    def test_synergies_scale_year_one(self, sensitivity_case):
        """Year-1 synergies keep their 25% share of run-rate."""
        case = SYNERGIES.apply(sensitivity_case, 4_000_000)
        assert case.parameters.synergies_year3 == 4_000_000
        assert case.parameters.synergies_year1 == pytest.approx(1_000_000)

    def test_synergies_without_run_rate(self, sensitivity_case):
        base = sensitivity_case.with_parameters(synergies_year1=0, synergies_year3=0)
        case = SYNERGIES.apply(base, 3_000_000)
        assert case.parameters.synergies_year3 == 3_000_000
        assert case.parameters.synergies_year1 == 0

    def test_exit_multiple_lives_on_assumptions(self, sensitivity_case):
        case = EXIT_MULTIPLE.apply(sensitivity_case, 7.0)
        assert EXIT_MULTIPLE.value(case) == 7.0
        assert case.parameters == sensitivity_case.parameters

    def test_apply_leaves_base_untouched(self, sensitivity_case):
        PURCHASE_PRICE.apply(sensitivity_case, 1.0)
        assert sensitivity_case.parameters.purchase_price == 100_000_000
