# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealquant Core Framework

Foundational building blocks: primitives, the IRR/NPV solver and the
error taxonomy shared by the deal, risk and sensitivity packages.
"""

from . import primitives
from .calculations import FinancialCalculations, IrrResult
from .exceptions import (
    DealQuantError,
    NonConvergenceError,
    NonConvergenceWarning,
    SimulationCancelledError,
    TrialCountClampedWarning,
)

__all__ = [
    "primitives",
    # Calculations
    "FinancialCalculations",
    "IrrResult",
    # Errors
    "DealQuantError",
    "NonConvergenceError",
    "NonConvergenceWarning",
    "SimulationCancelledError",
    "TrialCountClampedWarning",
]
