# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for the breakeven bisection search.
"""

import pytest

from dealquant.core.primitives import BreakevenSettings
from dealquant.sensitivity import (
    DEFAULT_BREAKEVEN_TARGETS,
    EQUITY_PERCENTAGE,
    EXIT_MULTIPLE,
    PURCHASE_PRICE,
    SYNERGIES,
    BreakevenSolver,
    analyze_sensitivity,
    case_irr,
)


@pytest.fixture
def solver():
    return BreakevenSolver()


class TestSolve:
    def test_recovers_known_exit_multiple(self, solver, sensitivity_case):
        """Solving for the IRR produced at 7x lands near 7x."""
        target = case_irr(EXIT_MULTIPLE.apply(sensitivity_case, 7.0)).value
        result = solver.solve(sensitivity_case, EXIT_MULTIPLE, target)
        assert result.achieved
        assert abs(result.achieved_irr - target) < 0.001
        assert result.value == pytest.approx(7.0, abs=0.15)
        assert result.iterations <= 20

    def test_inverse_variable_searches_downward(self, solver, sensitivity_case):
        """A higher target IRR needs a lower purchase price."""
        target = case_irr(PURCHASE_PRICE.apply(sensitivity_case, 85_000_000)).value
        result = solver.solve(sensitivity_case, PURCHASE_PRICE, target)
        assert result.achieved
        assert abs(result.achieved_irr - target) < 0.001
        assert result.value < 100_000_000

    def test_direct_variable_searches_upward(self, solver, sensitivity_case):
        target = case_irr(SYNERGIES.apply(sensitivity_case, 12_000_000)).value
        result = solver.solve(sensitivity_case, SYNERGIES, target)
        assert result.achieved
        assert result.value > 8_000_000

    def test_equity_share_searches_upward(self, solver, sensitivity_case):
        """IRR rises with the equity share, so bisection keeps the upper half below target."""
        target = case_irr(EQUITY_PERCENTAGE.apply(sensitivity_case, 70.0)).value
        result = solver.solve(sensitivity_case, EQUITY_PERCENTAGE, target)
        assert result.achieved
        assert abs(result.achieved_irr - target) < 0.001
        assert result.value == pytest.approx(70.0, abs=10.0)

    def test_unreachable_target(self, solver, sensitivity_case):
        """The search converges to the bracket end and reports the miss."""
        result = solver.solve(sensitivity_case, EXIT_MULTIPLE, 5.0)
        assert not result.achieved
        assert result.iterations == 20
        assert result.value > 11.99

    def test_custom_bounds(self, solver, sensitivity_case):
        target = case_irr(EXIT_MULTIPLE.apply(sensitivity_case, 6.5)).value
        result = solver.solve(sensitivity_case, EXIT_MULTIPLE, target, bounds=(6.0, 7.0))
        assert result.achieved
        assert 6.0 <= result.value <= 7.0

    def test_inverted_bounds_rejected(self, solver, sensitivity_case):
        with pytest.raises(ValueError):
            solver.solve(sensitivity_case, EXIT_MULTIPLE, 0.15, bounds=(8.0, 4.0))

    def test_zero_width_bracket_is_single_evaluation(self, solver, sensitivity_case):
        no_synergies = sensitivity_case.with_parameters(synergies_year1=0, synergies_year3=0)
        result = solver.solve(no_synergies, SYNERGIES, 0.20)
        assert result.iterations == 0
        assert result.value == 0.0

    def test_iteration_budget(self, sensitivity_case):
        solver = BreakevenSolver(BreakevenSettings(max_iterations=3, tolerance=1e-9))
        result = solver.solve(sensitivity_case, EXIT_MULTIPLE, 0.10)
        assert result.iterations == 3
        assert not result.achieved


class TestTargets:
    def test_default_targets(self):
        assert [t.name for t in DEFAULT_BREAKEVEN_TARGETS] == [
            "synergies_required_for_20pct_irr",
            "max_purchase_price_for_20pct_irr",
            "min_exit_multiple_for_15pct_irr",
        ]
        assert [t.target_irr for t in DEFAULT_BREAKEVEN_TARGETS] == [0.20, 0.20, 0.15]

    def test_solve_targets(self, solver, sensitivity_case):
        results = solver.solve_targets(sensitivity_case)
        assert set(results) == {t.name for t in DEFAULT_BREAKEVEN_TARGETS}
        for result in results.values():
            if result.achieved:
                assert abs(result.achieved_irr - result.target_irr) < 0.001


class TestAnalyzeSensitivity:
    def test_report(self, default_params):
        report = analyze_sensitivity(default_params)
        assert len(report.analysis.results) == 7
        assert len(report.breakevens) == 3
        assert report.base_irr == report.analysis.base_irr.value

    def test_skip_breakevens(self, default_params):
        report = analyze_sensitivity(default_params, targets=())
        assert report.breakevens == {}
