# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealquant Reporting
Public API for the dealquant.reporting subpackage.

Report formatters turning deal, risk and sensitivity results into
JSON-ready payloads with rule-based key findings.
"""

from .base import BaseReport
from .payloads import (
    DealSimulationReport,
    RiskSimulationReport,
    SensitivityAnalysisReport,
    deal_key_findings,
    deal_simulation_payload,
    risk_key_findings,
    risk_simulation_payload,
    sensitivity_key_findings,
    sensitivity_payload,
)

__all__ = [
    "BaseReport",
    "DealSimulationReport",
    "RiskSimulationReport",
    "SensitivityAnalysisReport",
    "deal_simulation_payload",
    "risk_simulation_payload",
    "sensitivity_payload",
    "deal_key_findings",
    "risk_key_findings",
    "sensitivity_key_findings",
]
