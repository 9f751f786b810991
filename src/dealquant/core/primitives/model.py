# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable models; variants are derived through `with_overrides`, which
    re-runs validation so a derived instance is never out of domain.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,  # Immutable models; scenario variants are new instances
        extra="forbid",  # Catches typos and missing field definitions immediately
    )

    def with_overrides(self, **changes: Any) -> "Model":
        """Return a validated copy with the given fields replaced.

        Unlike `model_copy(update=...)`, the result goes through full
        validation, so an invalid override raises `ValidationError`.
        """
        data: Dict[str, Any] = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)
