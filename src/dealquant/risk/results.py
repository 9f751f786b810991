# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Monte Carlo risk simulation result models.

`SimulationSummary` holds the aggregate statistics of a run; it is derived
from the per-trial arrays kept on `RiskSimulationResults`, which also
exposes individual trials as `SimulationResult` records on demand.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from scipy.stats import norm

from .factors import RiskFactor

# (label, lower, upper) as fractions of base value; buckets are [lower, upper)
DISTRIBUTION_BUCKETS: Tuple[Tuple[str, float, float], ...] = (
    ("< 70%", 0.0, 0.70),
    ("70-80%", 0.70, 0.80),
    ("80-90%", 0.80, 0.90),
    ("90-95%", 0.90, 0.95),
    ("95-100%", 0.95, 1.00),
    ("100-105%", 1.00, 1.05),
    ("> 105%", 1.05, math.inf),
)


@dataclass(frozen=True)
class SimulationResult:
    """
    One Monte Carlo trial.

    Attributes:
        scenario_id: 1-based trial number
        base_value: Deal value before risks
        final_value: Value after risks, floored at zero
        total_impact_percent: Sum of triggered impacts (percent, unclamped)
        triggered_risks: Names of the risks that triggered, in input order
    """

    scenario_id: int
    base_value: float
    final_value: float
    total_impact_percent: float
    triggered_risks: Tuple[str, ...]


@dataclass(frozen=True)
class DistributionBucket:
    """Histogram bucket; `share` is the fraction of trials in [lower, upper)."""

    label: str
    lower: float
    upper: float
    count: int
    share: float

    @property
    def percentage(self) -> float:
        return self.share * 100.0


@dataclass(frozen=True)
class RiskContribution:
    """
    Contribution of one risk factor across a run.

    Attributes:
        name: Risk name
        category: Risk category
        trigger_count: Trials in which the risk triggered
        frequency: trigger_count / trials
        average_impact: Mean |impact| in percent when triggered (0 if never)
    """

    name: str
    category: str
    trigger_count: int
    frequency: float
    average_impact: float

    @property
    def score(self) -> float:
        """Ranking key: frequency x average |impact|."""
        return self.frequency * self.average_impact


@dataclass(frozen=True)
class SimulationSummary:  # noqa: PLR0902
    """
    Aggregate statistics over all trials.

    Value-at-risk figures are deal values at adverse percentiles of the
    simulated distribution: VaR95 is the value at sorted index
    floor(0.05 N), VaR99 at floor(0.01 N), so VaR99 <= VaR95 <= median.
    `median_value` is `np.median`, the mean of the two middle values when N
    is even, rather than the upper-middle element sorted[N // 2].
    `std_dev` is the population standard deviation (ddof=0).
    Probabilities and bucket shares are fractions (0-1).
    """

    simulations_run: int
    requested_simulations: int
    base_deal_value: float

    mean_value: float
    median_value: float
    std_dev: float
    min_value: float
    max_value: float
    mean_standard_error: float
    mean_confidence_interval: Tuple[float, float]

    value_at_risk_95: float
    value_at_risk_99: float
    expected_shortfall: float

    prob_value_below_80: float
    prob_value_below_90: float
    prob_value_above_110: float

    distribution: List[DistributionBucket] = field(default_factory=list)
    top_risks: List[RiskContribution] = field(default_factory=list)

    @property
    def trials_clamped(self) -> bool:
        """True when the requested trial count exceeded the cap."""
        return self.requested_simulations > self.simulations_run

    @property
    def var_95_percent_of_base(self) -> float:
        return self.value_at_risk_95 / self.base_deal_value * 100.0

    @property
    def var_99_percent_of_base(self) -> float:
        return self.value_at_risk_99 / self.base_deal_value * 100.0

    @property
    def expected_shortfall_percent_of_base(self) -> float:
        return self.expected_shortfall / self.base_deal_value * 100.0

    @classmethod
    def from_trials(
        cls,
        final_values: np.ndarray,
        base_deal_value: float,
        risk_factors: Sequence[RiskFactor],
        trigger_counts: np.ndarray,
        abs_impact_sums: np.ndarray,
        requested_simulations: int,
        top_risk_count: int = 5,
        confidence: float = 0.95,
    ) -> "SimulationSummary":
        """
        Aggregate per-trial values into summary statistics.

        Args:
            final_values: Final deal value of every trial
            base_deal_value: Deal value before risks
            risk_factors: Risk factors in simulation order
            trigger_counts: Trigger count per risk factor
            abs_impact_sums: Sum of |impact| per risk factor
            requested_simulations: Trial count asked for, before clamping
            top_risk_count: Number of risk contributors to keep
            confidence: Confidence level of the interval around the mean
        """
        n = int(final_values.size)
        if n == 0:
            raise ValueError("Cannot summarize a simulation with no trials")
        ordered = np.sort(final_values)

        mean = float(ordered.mean())
        std_dev = float(ordered.std())

        var95_index = (5 * n) // 100
        var99_index = n // 100
        tail = ordered[:var95_index]
        expected_shortfall = float(tail.mean()) if tail.size else float(ordered[0])

        sample_std = float(ordered.std(ddof=1)) if n > 1 else 0.0
        standard_error = sample_std / math.sqrt(n)
        z = float(norm.ppf(0.5 + confidence / 2.0))

        return cls(
            simulations_run=n,
            requested_simulations=requested_simulations,
            base_deal_value=base_deal_value,
            mean_value=mean,
            median_value=float(np.median(ordered)),
            std_dev=std_dev,
            min_value=float(ordered[0]),
            max_value=float(ordered[-1]),
            mean_standard_error=standard_error,
            mean_confidence_interval=(mean - z * standard_error, mean + z * standard_error),
            value_at_risk_95=float(ordered[var95_index]),
            value_at_risk_99=float(ordered[var99_index]),
            expected_shortfall=expected_shortfall,
            prob_value_below_80=float(np.mean(ordered < base_deal_value * 0.8)),
            prob_value_below_90=float(np.mean(ordered < base_deal_value * 0.9)),
            prob_value_above_110=float(np.mean(ordered > base_deal_value * 1.1)),
            distribution=_histogram(ordered, base_deal_value),
            top_risks=_rank_contributors(
                risk_factors, trigger_counts, abs_impact_sums, n
            )[:top_risk_count],
        )


def _histogram(values: np.ndarray, base_value: float) -> List[DistributionBucket]:
    edges = np.array([upper for _, _, upper in DISTRIBUTION_BUCKETS[:-1]]) * base_value
    # side="right" puts a value equal to an edge in the bucket that starts there
    indices = np.searchsorted(edges, values, side="right")
    counts = np.bincount(indices, minlength=len(DISTRIBUTION_BUCKETS))
    n = values.size
    return [
        DistributionBucket(
            label=label,
            lower=lower * base_value,
            upper=upper * base_value,
            count=int(count),
            share=int(count) / n,
        )
        for (label, lower, upper), count in zip(DISTRIBUTION_BUCKETS, counts)
    ]


def _rank_contributors(
    risk_factors: Sequence[RiskFactor],
    trigger_counts: np.ndarray,
    abs_impact_sums: np.ndarray,
    n: int,
) -> List[RiskContribution]:
    contributions = []
    for risk, count, abs_sum in zip(risk_factors, trigger_counts, abs_impact_sums):
        count = int(count)
        contributions.append(
            RiskContribution(
                name=risk.name,
                category=risk.category,
                trigger_count=count,
                frequency=count / n,
                average_impact=float(abs_sum) / count if count else 0.0,
            )
        )
    return sorted(contributions, key=lambda c: c.score, reverse=True)


@dataclass(frozen=True, eq=False)
class RiskSimulationResults:
    """
    Complete output of one Monte Carlo run.

    Per-trial data is kept as arrays (one row per trial, one column per risk
    factor for `triggered`); `SimulationResult` records are materialized on
    demand.

    Attributes:
        summary: Aggregate statistics
        risk_factors: Risk factors in simulation order
        final_values: Final value per trial (trial order)
        total_impact_percent: Summed impact per trial, in percent
        triggered: Boolean matrix [trial, risk] of triggered risks
        seed_entropy: Entropy of the root SeedSequence; pass it back as `seed`
            to replay an unseeded run
    """

    summary: SimulationSummary
    risk_factors: List[RiskFactor]
    final_values: np.ndarray
    total_impact_percent: np.ndarray
    triggered: np.ndarray
    seed_entropy: Union[int, Sequence[int]]

    def __len__(self) -> int:
        return int(self.final_values.size)

    @property
    def base_deal_value(self) -> float:
        return self.summary.base_deal_value

    def trial(self, index: int) -> SimulationResult:
        """Trial at 0-based `index` (scenario_id is index + 1)."""
        names = tuple(
            risk.name
            for risk, hit in zip(self.risk_factors, self.triggered[index])
            if hit
        )
        return SimulationResult(
            scenario_id=index + 1,
            base_value=self.summary.base_deal_value,
            final_value=float(self.final_values[index]),
            total_impact_percent=float(self.total_impact_percent[index]),
            triggered_risks=names,
        )

    def trials(self) -> Iterator[SimulationResult]:
        for index in range(len(self)):
            yield self.trial(index)

    def worst_scenarios(self, count: int = 5) -> List[SimulationResult]:
        """Lowest-value trials, worst first (ties keep trial order)."""
        order = np.argsort(self.final_values, kind="stable")[:count]
        return [self.trial(int(i)) for i in order]

    def risk_frequency(self) -> pd.Series:
        """Trigger frequency per risk factor, in input order."""
        return pd.Series(
            self.triggered.mean(axis=0),
            index=[risk.name for risk in self.risk_factors],
            name="frequency",
            dtype=float,
        )

    def to_frame(self) -> pd.DataFrame:
        """Per-trial values with one boolean column per risk factor."""
        frame = pd.DataFrame(
            {
                "final_value": self.final_values,
                "total_impact_percent": self.total_impact_percent,
            },
            index=pd.RangeIndex(1, len(self) + 1, name="scenario_id"),
        )
        for column, risk in enumerate(self.risk_factors):
            frame[risk.name] = self.triggered[:, column]
        return frame

    def distribution_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "bucket": b.label,
                    "lower": b.lower,
                    "upper": b.upper,
                    "count": b.count,
                    "percentage": b.percentage,
                }
                for b in self.summary.distribution
            ]
        ).set_index("bucket")
