# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealquant Core Primitives

Essential building blocks shared by every model in dealquant: the frozen
base model, constrained numeric types, enums, settings and validation.
"""

from .enums import ExecutionStrategy, Polarity, RiskCategoryEnum, ScenarioKind
from .model import Model
from .settings import (
    DEAL_SIMULATOR_ASSUMPTIONS,
    SENSITIVITY_ASSUMPTIONS,
    BreakevenSettings,
    ProjectionAssumptions,
    SimulationSettings,
    SolverSettings,
)
from .types import (
    FloatBetween0And1,
    GrowthPercentage,
    MarginPercentage,
    Percentage,
    PositiveFloat,
    PositiveInt,
    StrictlyPositiveFloat,
)
from .validation import ValidationMixin

__all__ = [
    # Core models
    "Model",
    # Settings
    "ProjectionAssumptions",
    "DEAL_SIMULATOR_ASSUMPTIONS",
    "SENSITIVITY_ASSUMPTIONS",
    "SolverSettings",
    "SimulationSettings",
    "BreakevenSettings",
    # Enums
    "ExecutionStrategy",
    "Polarity",
    "RiskCategoryEnum",
    "ScenarioKind",
    # Types
    "FloatBetween0And1",
    "GrowthPercentage",
    "MarginPercentage",
    "Percentage",
    "PositiveFloat",
    "PositiveInt",
    "StrictlyPositiveFloat",
    # Validation
    "ValidationMixin",
]
