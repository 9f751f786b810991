# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated

from pydantic import Field

# constrained types
PositiveInt = Annotated[int, Field(ge=0)]
PositiveFloat = Annotated[float, Field(ge=0)]
StrictlyPositiveFloat = Annotated[float, Field(gt=0)]
FloatBetween0And1 = Annotated[float, Field(ge=0, le=1)]
# Percent-denominated inputs (40 means 40%)
Percentage = Annotated[float, Field(ge=0, le=100)]
GrowthPercentage = Annotated[float, Field(gt=-100)]
MarginPercentage = Annotated[float, Field(ge=-100, le=100)]
