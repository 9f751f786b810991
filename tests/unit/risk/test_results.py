# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for SimulationSummary aggregation on hand-built trial values.
"""

import numpy as np
import pytest

from dealquant.risk import DISTRIBUTION_BUCKETS, RiskFactor, SimulationSummary

BASE = 1_000.0


@pytest.fixture
def risks():
    return [
        RiskFactor(name="A", probability=0.5, impact_low=-10, impact_high=-10),
        RiskFactor(name="B", probability=0.5, impact_low=-30, impact_high=-20),
    ]


def summarize(values, risks, counts=(0, 0), abs_sums=(0.0, 0.0)):
    return SimulationSummary.from_trials(
        final_values=np.asarray(values, dtype=float),
        base_deal_value=BASE,
        risk_factors=risks,
        trigger_counts=np.asarray(counts),
        abs_impact_sums=np.asarray(abs_sums, dtype=float),
        requested_simulations=len(values),
    )


class TestHistogram:
    def test_bucket_edges_are_half_open(self, risks):
        """A value on an edge falls in the bucket starting there."""
        summary = summarize([700.0, 800.0, 900.0, 950.0, 1000.0, 1050.0], risks)
        counts = {b.label: b.count for b in summary.distribution}
        assert counts == {
            "< 70%": 0,
            "70-80%": 1,
            "80-90%": 1,
            "90-95%": 1,
            "95-100%": 1,
            "100-105%": 1,
            "> 105%": 1,
        }

    def test_zero_value_lands_in_lowest_bucket(self, risks):
        summary = summarize([0.0, 500.0], risks)
        assert summary.distribution[0].count == 2
        assert summary.distribution[0].percentage == pytest.approx(100.0)

    def test_bucket_labels(self, risks):
        summary = summarize([1000.0], risks)
        assert [b.label for b in summary.distribution] == [b[0] for b in DISTRIBUTION_BUCKETS]


class TestStatistics:
    def test_basic_statistics(self, risks):
        values = [600.0, 800.0, 1000.0, 1200.0]
        summary = summarize(values, risks)
        assert summary.mean_value == pytest.approx(900.0)
        assert summary.median_value == pytest.approx(900.0)
        assert summary.std_dev == pytest.approx(np.std(values))
        assert summary.min_value == 600.0
        assert summary.max_value == 1200.0
        assert summary.prob_value_below_80 == pytest.approx(0.25)
        assert summary.prob_value_below_90 == pytest.approx(0.5)
        assert summary.prob_value_above_110 == pytest.approx(0.25)

    def test_median_averages_middle_pair(self, risks):
        """Even trial counts average the two middle values instead of taking sorted[N // 2]."""
        summary = summarize([1000.0, 600.0, 1100.0, 800.0], risks)
        assert summary.median_value == pytest.approx(900.0)
        assert summary.median_value != 1000.0
        assert summarize([600.0, 800.0, 1000.0], risks).median_value == 800.0

    def test_percent_of_base(self, risks):
        summary = summarize([500.0] * 100, risks)
        assert summary.var_95_percent_of_base == pytest.approx(50.0)
        assert summary.var_99_percent_of_base == pytest.approx(50.0)
        assert summary.expected_shortfall_percent_of_base == pytest.approx(50.0)

    def test_empty_rejected(self, risks):
        with pytest.raises(ValueError):
            summarize([], risks)

    def test_trials_clamped_flag(self, risks):
        summary = SimulationSummary.from_trials(
            final_values=np.full(10, BASE),
            base_deal_value=BASE,
            risk_factors=risks,
            trigger_counts=np.zeros(2),
            abs_impact_sums=np.zeros(2),
            requested_simulations=20,
        )
        assert summary.trials_clamped


class TestRiskRanking:
    def test_ranked_by_frequency_times_average_impact(self, risks):
        # A: 50% x 10 = 5; B: 20% x 25 = 5 -> tie keeps input order
        summary = summarize([BASE] * 10, risks, counts=(5, 2), abs_sums=(50.0, 50.0))
        assert [r.name for r in summary.top_risks] == ["A", "B"]
        assert summary.top_risks[1].average_impact == pytest.approx(25.0)

        summary = summarize([BASE] * 10, risks, counts=(5, 4), abs_sums=(50.0, 100.0))
        assert [r.name for r in summary.top_risks] == ["B", "A"]
        assert summary.top_risks[0].frequency == pytest.approx(0.4)

    def test_never_triggered_has_zero_impact(self, risks):
        summary = summarize([BASE] * 4, risks, counts=(0, 1), abs_sums=(0.0, 25.0))
        never = next(r for r in summary.top_risks if r.name == "A")
        assert never.average_impact == 0.0
        assert never.score == 0.0
