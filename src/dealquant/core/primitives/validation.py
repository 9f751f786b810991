# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reusable Pydantic validation utilities for common patterns across the codebase.

This module provides standardized validators for:
- Allocation sums (capital structure percentages adding to a total)
- Ordered ranges (low bound not above high bound)
- Finite numeric inputs
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence


class ValidationMixin:
    """
    Mixin class providing reusable validation methods for Pydantic models.

    Intended for `model_validator(mode="after")` hooks: each method inspects
    attributes on the constructed instance and raises `ValueError`, which
    Pydantic surfaces as a `ValidationError`.
    """

    @classmethod
    def validate_allocation_sum(
        cls,
        data: Any,
        fields: Sequence[str],
        total: float = 100.0,
        tolerance: float = 1e-6,
        error_message: Optional[str] = None,
    ) -> Any:
        """
        Validate that a group of percentage fields sums to `total`.

        Args:
            data: Model instance
            fields: Names of the fields that must add up
            total: Required sum
            tolerance: Absolute tolerance on the sum
            error_message: Custom error message

        Returns:
            The validated instance

        Raises:
            ValueError: If the fields do not sum to `total`
        """
        values = [getattr(data, name) for name in fields]
        observed = math.fsum(values)
        if not math.isclose(observed, total, abs_tol=tolerance):
            parts = " + ".join(f"{name} ({value:g})" for name, value in zip(fields, values))
            msg = error_message or f"{parts} must equal {total:g}, got {observed:g}"
            raise ValueError(msg)
        return data

    @classmethod
    def validate_ordered_range(
        cls,
        data: Any,
        low_field: str,
        high_field: str,
        error_message: Optional[str] = None,
    ) -> Any:
        """
        Validate that `low_field` does not exceed `high_field`.

        Out-of-order bounds are rejected rather than swapped.

        Raises:
            ValueError: If low > high
        """
        low = getattr(data, low_field)
        high = getattr(data, high_field)
        if low > high:
            msg = error_message or (
                f"{low_field} ({low:g}) must not exceed {high_field} ({high:g})"
            )
            raise ValueError(msg)
        return data

    @classmethod
    def validate_finite(cls, data: Any, fields: Sequence[str]) -> Any:
        """Reject NaN and infinite values in the named numeric fields."""
        for name in fields:
            value = getattr(data, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value}")
        return data
