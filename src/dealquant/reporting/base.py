# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Base reporting classes.

Reports take finished result objects and reshape them into
presentation-ready structures. Reports only format and present data,
never perform calculations.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, Tuple, Type

HURDLE_IRR = 0.20
STRONG_MOIC = 2.0
TARGET_PAYBACK_YEARS = 4


class BaseReport(ABC):
    """
    Abstract base class for all report formatters.

    Subclasses declare the result type they accept in `result_type`.
    """

    result_type: ClassVar[Tuple[Type, ...]] = ()

    def __init__(self, results: Any):
        if self.result_type and not isinstance(results, self.result_type):
            expected = " or ".join(t.__name__ for t in self.result_type)
            raise TypeError(
                f"{type(self).__name__} requires {expected}, got {type(results).__name__}"
            )
        self._results = results

    @abstractmethod
    def generate(self, **kwargs) -> Any:
        """Transform the results into the report's output format."""
        pass


def round_or_none(value: Optional[float], digits: int = 0) -> Optional[float]:
    """Round for presentation, passing None through."""
    if value is None:
        return None
    rounded = round(float(value), digits)
    return int(rounded) if digits == 0 else rounded


def percent(value: Optional[float], digits: int = 1) -> Optional[float]:
    """Decimal fraction (0.153) to rounded percent (15.3)."""
    return None if value is None else round_or_none(value * 100.0, digits)
