# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class Polarity(str, Enum):
    """
    Direction of the IRR response to an increase in a deal variable.

    Breakeven searches use the polarity to decide which half of the bracket
    to keep; it is declared per variable rather than inferred from names.
    """

    DIRECT = "direct"  # Increasing the variable increases IRR (synergies, exit multiple)
    INVERSE = "inverse"  # Increasing the variable decreases IRR (purchase price)

    @property
    def sign(self) -> int:
        return 1 if self is Polarity.DIRECT else -1


class ScenarioKind(str, Enum):
    """Named deal scenarios run alongside the base case."""

    BASE = "Base Case"
    UPSIDE = "Upside"
    DOWNSIDE = "Downside"
    NO_SYNERGIES = "No Synergies"
    ALL_EQUITY = "All Equity"
    CUSTOM = "Custom"


class ExecutionStrategy(str, Enum):
    """
    How Monte Carlo trial chunks are executed.

    All strategies produce identical results for the same seed: each chunk
    owns an independent random stream and chunks are merged in order.
    """

    SERIAL = "serial"
    THREADS = "threads"
    PROCESSES = "processes"


class RiskCategoryEnum(str, Enum):
    """
    Conventional risk categories.

    `RiskFactor.category` is free text; these are the labels used by the
    default risk set and by upstream risk extraction.
    """

    LEGAL = "Legal"
    FINANCIAL = "Financial"
    OPERATIONAL = "Operational"
    REGULATORY = "Regulatory"
    MARKET = "Market"
    INTEGRATION = "Integration"
    REPUTATION = "Reputation"
