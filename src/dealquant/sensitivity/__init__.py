# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealquant Sensitivity Analysis
Public API for the dealquant.sensitivity subpackage.

Variable descriptors, the tornado analyzer, the breakeven solver and the
`analyze_sensitivity` entry point.
"""

from .analyzer import SensitivityAnalyzer, case_irr
from .api import analyze_sensitivity
from .breakeven import DEFAULT_BREAKEVEN_TARGETS, BreakevenSolver, BreakevenTarget
from .results import (
    BreakevenResult,
    SensitivityAnalysis,
    SensitivityReport,
    SensitivityResult,
)
from .variables import (
    EBITDA_MARGIN,
    EQUITY_PERCENTAGE,
    EXIT_MULTIPLE,
    INTEGRATION_COSTS,
    PURCHASE_PRICE,
    REVENUE_GROWTH,
    SENSITIVITY_VARIABLES,
    SYNERGIES,
    VARIABLES_BY_KEY,
    DealVariable,
    parameter_variable,
)

__all__ = [
    # Variables
    "DealVariable",
    "parameter_variable",
    "SENSITIVITY_VARIABLES",
    "VARIABLES_BY_KEY",
    "PURCHASE_PRICE",
    "EQUITY_PERCENTAGE",
    "SYNERGIES",
    "INTEGRATION_COSTS",
    "REVENUE_GROWTH",
    "EBITDA_MARGIN",
    "EXIT_MULTIPLE",
    # Analysis
    "SensitivityAnalyzer",
    "case_irr",
    "BreakevenSolver",
    "BreakevenTarget",
    "DEFAULT_BREAKEVEN_TARGETS",
    # Results
    "SensitivityResult",
    "SensitivityAnalysis",
    "BreakevenResult",
    "SensitivityReport",
    # Analysis API
    "analyze_sensitivity",
]
