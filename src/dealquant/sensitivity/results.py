# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Sensitivity and breakeven result models.

IRR figures are decimals (0.15 for 15%), matching the solver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from ..core.calculations import IrrResult
from ..deal.parameters import DealCase


@dataclass(frozen=True)
class SensitivityResult:
    """
    One-at-a-time sensitivity of IRR to a single variable.

    Attributes:
        variable: Variable key
        label: Display name
        unit: Display unit
        base_value / low_value / high_value: Variable values tested
        base_irr / low_irr / high_irr: IRR at each value
        irr_swing: |high_irr - low_irr|
        rank: Tornado rank, 1 = largest swing
        converged: True when all three IRRs converged
    """

    variable: str
    label: str
    unit: str
    base_value: float
    low_value: float
    high_value: float
    base_irr: float
    low_irr: float
    high_irr: float
    irr_swing: float
    rank: int
    converged: bool

    @property
    def downside(self) -> float:
        """low_irr - base_irr"""
        return self.low_irr - self.base_irr

    @property
    def upside(self) -> float:
        """high_irr - base_irr"""
        return self.high_irr - self.base_irr

    @property
    def is_monotonic(self) -> bool:
        """True when low and high IRRs bracket the base IRR."""
        return min(self.low_irr, self.high_irr) <= self.base_irr <= max(
            self.low_irr, self.high_irr
        )


@dataclass(frozen=True)
class SensitivityAnalysis:
    """
    Tornado-ranked sensitivities for one deal case.

    `results` is sorted by IRR swing, largest first, with rows whose IRR
    did not converge placed after all converged rows.
    """

    case: DealCase
    base_irr: IrrResult
    results: List[SensitivityResult]

    @property
    def most_sensitive(self) -> Optional[SensitivityResult]:
        return self.results[0] if self.results else None

    @property
    def unconverged(self) -> List[SensitivityResult]:
        """Rows whose swing rests on at least one non-converged IRR."""
        return [r for r in self.results if not r.converged]

    def result(self, variable: str) -> SensitivityResult:
        for item in self.results:
            if item.variable == variable:
                return item
        raise KeyError(f"No sensitivity result for '{variable}'")

    def to_frame(self) -> pd.DataFrame:
        """Tornado table indexed by variable label, in rank order."""
        frame = pd.DataFrame(
            [
                {
                    "variable": r.label,
                    "rank": r.rank,
                    "low_value": r.low_value,
                    "base_value": r.base_value,
                    "high_value": r.high_value,
                    "low_irr": r.low_irr,
                    "base_irr": r.base_irr,
                    "high_irr": r.high_irr,
                    "downside": r.downside,
                    "upside": r.upside,
                    "irr_swing": r.irr_swing,
                    "converged": r.converged,
                }
                for r in self.results
            ]
        )
        return frame.set_index("variable") if not frame.empty else frame


@dataclass(frozen=True)
class BreakevenResult:
    """
    Value of a variable that produces a target IRR.

    Attributes:
        variable: Variable key searched
        target_irr: Target IRR (decimal)
        value: Solved value (final bracket midpoint when not achieved)
        achieved_irr: IRR at `value`
        achieved: |achieved_irr - target_irr| within tolerance
        iterations: Bisection steps used
        irr_converged: Whether the IRR at `value` converged
    """

    variable: str
    target_irr: float
    value: float
    achieved_irr: float
    achieved: bool
    iterations: int
    irr_converged: bool


@dataclass(frozen=True)
class SensitivityReport:
    """Sensitivity analysis together with the named breakeven targets."""

    analysis: SensitivityAnalysis
    breakevens: Dict[str, BreakevenResult] = field(default_factory=dict)

    @property
    def base_irr(self) -> float:
        return self.analysis.base_irr.value
