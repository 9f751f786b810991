# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the annual free-cash-flow projection.

Expected values for the default deal ($100M, 40/60, 15% EBITDA ratio,
18% margin, 8% growth, 5x exit) are worked out by hand.
"""

import numpy as np
import pytest

from dealquant.core.primitives import DEAL_SIMULATOR_ASSUMPTIONS, SENSITIVITY_ASSUMPTIONS
from dealquant.deal import CashFlowProjector, DealCase, ParameterSet


@pytest.fixture
def schedule(default_params):
    return CashFlowProjector().project(default_params)


class TestScheduleShape:
    def test_horizon_plus_one_values(self, schedule):
        assert len(schedule) == 8
        assert schedule.horizon_years == 7

    def test_year_zero_is_outlay(self, schedule):
        """Year 0 = -(equity investment + integration costs)."""
        assert schedule.initial_outlay == pytest.approx(-45_000_000)
        assert schedule.equity_investment == pytest.approx(40_000_000)

    def test_component_arrays_start_with_zero(self, schedule):
        for component in (
            schedule.ebitda,
            schedule.synergies,
            schedule.debt_service,
            schedule.earnout,
            schedule.terminal_value,
        ):
            assert len(component) == 8
            assert component[0] == 0.0

    def test_values_are_read_only(self, schedule):
        with pytest.raises(ValueError):
            schedule.values[0] = 0.0


class TestProjectionFormula:
    def test_year_one_cash_flow(self, schedule):
        """EBITDA 2.916M + synergies 4M - interest 3.6M, after 25% tax."""
        assert schedule.ebitda[1] == pytest.approx(2_916_000)
        assert schedule.synergies[1] == pytest.approx(4_000_000)
        assert schedule.debt_service[1] == pytest.approx(3_600_000)
        assert schedule.cash_flows[1] == pytest.approx(2_487_000)

    def test_synergy_ramp(self, schedule):
        assert schedule.synergies[2] == pytest.approx(6_000_000)
        assert schedule.synergies[3:] == pytest.approx((8_000_000,) * 5)

    def test_earnout_in_year_two(self, schedule):
        """Expected earnout = 10M x 70%, received in year 2 only."""
        assert schedule.earnout[2] == pytest.approx(7_000_000)
        assert sum(schedule.earnout) == pytest.approx(7_000_000)
        fcf_2 = (schedule.ebitda[2] + schedule.synergies[2] - schedule.debt_service[2]) * 0.75
        assert schedule.cash_flows[2] == pytest.approx(fcf_2 + 7_000_000)

    def test_terminal_value_in_final_year(self, schedule):
        ebitda_7 = 15_000_000 * 1.08**7 * 0.18
        expected_terminal = (ebitda_7 + 8_000_000) * 5.0 - 60_000_000
        assert schedule.terminal_value[7] == pytest.approx(expected_terminal)
        assert all(v == 0.0 for v in schedule.terminal_value[:7])

        fcf_7 = (ebitda_7 + 8_000_000 - 3_600_000) * 0.75
        assert schedule.cash_flows[7] == pytest.approx(fcf_7 + expected_terminal)

    def test_no_earnout_when_amount_is_zero(self):
        schedule = CashFlowProjector().project(ParameterSet(earnout_amount=0))
        assert sum(schedule.earnout) == 0.0

    def test_all_equity_has_no_debt_service(self):
        params = ParameterSet(equity_percentage=100, debt_percentage=0)
        schedule = CashFlowProjector().project(params)
        assert sum(schedule.debt_service) == 0.0
        assert schedule.initial_outlay == pytest.approx(-105_000_000)

    def test_exit_multiple_comes_from_assumptions(self, default_params):
        low = CashFlowProjector(DEAL_SIMULATOR_ASSUMPTIONS).project(default_params)
        high = CashFlowProjector(
            DEAL_SIMULATOR_ASSUMPTIONS.with_overrides(exit_multiple=6.0)
        ).project(default_params)
        uplift = high.cash_flows[7] - low.cash_flows[7]
        assert uplift == pytest.approx(low.ebitda[7] + low.synergies[7])
        assert high.cash_flows[:7] == pytest.approx(low.cash_flows[:7])

    def test_project_case_uses_case_assumptions(self, default_params):
        case = DealCase(parameters=default_params, assumptions=SENSITIVITY_ASSUMPTIONS)
        schedule = CashFlowProjector().project_case(case)
        assert schedule.ebitda[1] == pytest.approx(12_000_000 * 1.08 * 0.18)

    def test_longer_horizon(self, default_params):
        assumptions = DEAL_SIMULATOR_ASSUMPTIONS.with_overrides(horizon_years=10)
        schedule = CashFlowProjector(assumptions).project(default_params)
        assert len(schedule) == 11
        assert schedule.terminal_value[10] != 0.0


class TestScheduleViews:
    def test_to_series(self, schedule):
        series = schedule.to_series()
        assert series.index.name == "year"
        assert list(series.index) == list(range(8))
        np.testing.assert_allclose(series.to_numpy(), schedule.values)

    def test_to_frame_cumulative(self, schedule):
        frame = schedule.to_frame()
        assert frame["cumulative_cash_flow"].iloc[-1] == pytest.approx(sum(schedule.cash_flows))
        assert list(frame.columns) == [
            "ebitda",
            "synergies",
            "debt_service",
            "earnout",
            "terminal_value",
            "cash_flow",
            "cumulative_cash_flow",
        ]
