# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Sensitivity Analysis API

Public entry point combining the tornado analysis with the named
breakeven targets.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from ..core.primitives import BreakevenSettings, ProjectionAssumptions, SolverSettings
from ..deal.parameters import DealCase, ParameterSet
from .analyzer import SensitivityAnalyzer
from .breakeven import DEFAULT_BREAKEVEN_TARGETS, BreakevenSolver, BreakevenTarget
from .results import SensitivityReport
from .variables import SENSITIVITY_VARIABLES, DealVariable

logger = logging.getLogger(__name__)


def analyze_sensitivity(
    deal: Union[ParameterSet, DealCase, None] = None,
    assumptions: Optional[ProjectionAssumptions] = None,
    variables: Iterable[DealVariable] = SENSITIVITY_VARIABLES,
    targets: Iterable[BreakevenTarget] = DEFAULT_BREAKEVEN_TARGETS,
    solver_settings: Optional[SolverSettings] = None,
    breakeven_settings: Optional[BreakevenSettings] = None,
) -> SensitivityReport:
    """
    Rank IRR sensitivities and solve the breakeven targets for a deal.

    Args:
        deal: Base parameters (projected under `assumptions`) or a DealCase;
            defaults to `ParameterSet()`.
        assumptions: Projection conventions for plain parameters; defaults
            to the sensitivity set (12% base EBITDA ratio, 6x exit).
        variables: Variables to perturb for the tornado.
        targets: Breakeven questions to answer; pass `()` to skip.
        solver_settings: IRR solver configuration.
        breakeven_settings: Bisection configuration.

    Returns:
        SensitivityReport with the ranked analysis and breakevens by name.

    Example:
        ```python
        report = analyze_sensitivity(ParameterSet(purchase_price=150_000_000))
        for row in report.analysis.results[:3]:
            print(row.rank, row.label, f"{row.irr_swing:.2%}")
        print(report.breakevens["min_exit_multiple_for_15pct_irr"].value)
        ```
    """
    analyzer = SensitivityAnalyzer(assumptions, variables, solver_settings)
    case = analyzer.as_case(deal if deal is not None else ParameterSet())

    logger.info(
        f"Analyzing sensitivity: price ${case.parameters.purchase_price:,.0f}, "
        f"exit {case.assumptions.exit_multiple:g}x"
    )
    analysis = analyzer.analyze(case)
    solver = BreakevenSolver(breakeven_settings, analyzer.solver_settings)
    breakevens = solver.solve_targets(case, targets)

    missed = [name for name, result in breakevens.items() if not result.achieved]
    if missed:
        logger.info(f"Breakeven targets not reached within search range: {missed}")
    return SensitivityReport(analysis=analysis, breakevens=breakevens)
