# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
JSON-shaped payloads for deal, risk and sensitivity results.

Monetary amounts are rounded to whole dollars, IRRs and probabilities are
reported in percent with one decimal, and MOIC to two decimals. Key
findings are rule-based sentences derived from the figures.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..deal.results import DealMetrics, DealSimulationResults
from ..risk.results import RiskSimulationResults
from ..sensitivity.results import BreakevenResult, SensitivityReport
from .base import (
    HURDLE_IRR,
    STRONG_MOIC,
    TARGET_PAYBACK_YEARS,
    BaseReport,
    percent,
    round_or_none,
)

logger = logging.getLogger(__name__)


def _metrics_payload(metrics: DealMetrics) -> Dict[str, Any]:
    return {
        "irr": percent(metrics.irr),
        "irr_converged": metrics.irr_converged,
        "npv": round_or_none(metrics.npv),
        "moic": round_or_none(metrics.moic, 2),
        "payback_years": metrics.payback_year,
        "break_even_year": metrics.break_even_year,
    }


def deal_key_findings(metrics: DealMetrics, horizon_years: int) -> List[str]:
    """Hurdle-rate, MOIC and payback findings for one set of metrics."""
    irr_pct = metrics.irr * 100.0
    hurdle = "exceeds" if metrics.irr > HURDLE_IRR else "falls below"
    findings = [
        f"IRR of {irr_pct:.1f}% {hurdle} typical PE hurdle rates of {HURDLE_IRR:.0%}"
    ]
    if not metrics.irr_converged:
        findings[0] += " (IRR estimate did not converge)"

    if metrics.moic is None:
        findings.append("MOIC is undefined without an equity investment")
    else:
        strength = "strong" if metrics.moic > STRONG_MOIC else "moderate"
        findings.append(f"{metrics.moic:.2f}x MOIC indicates {strength} return potential")

    if metrics.payback_year is None:
        findings.append(
            f"No payback within the {horizon_years}-year horizon raises concerns "
            f"about investment thesis"
        )
    else:
        verdict = (
            "supports"
            if metrics.payback_year <= TARGET_PAYBACK_YEARS
            else "raises concerns about"
        )
        findings.append(f"{metrics.payback_year}-year payback {verdict} investment thesis")
    return findings


class DealSimulationReport(BaseReport):
    """Base case, scenarios and findings of a deal simulation."""

    result_type = (DealSimulationResults,)

    def generate(self, include_cash_flows: bool = True) -> Dict[str, Any]:
        results: DealSimulationResults = self._results
        base_case = _metrics_payload(results.base_case)
        if include_cash_flows:
            base_case["cash_flows"] = [round_or_none(cf) for cf in results.base_case.cash_flows]

        scenarios = []
        for scenario in results.scenarios:
            payload = {"name": scenario.name, "parameters": dict(scenario.overrides)}
            payload.update(_metrics_payload(scenario.metrics))
            payload["multiple_on_invested_capital"] = payload.pop("moic")
            scenarios.append(payload)

        return {
            "parameters": results.parameters.model_dump(),
            "base_case": base_case,
            "scenarios": scenarios,
            "key_findings": deal_key_findings(
                results.base_case, results.assumptions.horizon_years
            ),
        }


def risk_key_findings(results: RiskSimulationResults) -> List[str]:
    summary = results.summary
    base = summary.base_deal_value
    findings = [
        f"Expected deal value is {summary.mean_value / base:.1%} of the "
        f"${base:,.0f} base across {summary.simulations_run:,} simulations",
        f"VaR (95%) of ${summary.value_at_risk_95:,.0f} is "
        f"{summary.var_95_percent_of_base:.0f}% of base value",
        f"{summary.prob_value_below_80:.1%} probability the deal loses more than "
        f"20% of its value",
    ]
    if summary.top_risks:
        top = summary.top_risks[0]
        findings.append(
            f"{top.name} is the largest risk contributor "
            f"(triggered in {top.frequency:.1%} of trials)"
        )
    return findings


class RiskSimulationReport(BaseReport):
    """Configuration, statistics, distribution and worst trials of a Monte Carlo run."""

    result_type = (RiskSimulationResults,)

    def generate(self, worst_count: Optional[int] = 5) -> Dict[str, Any]:
        results: RiskSimulationResults = self._results
        summary = results.summary
        if summary.trials_clamped:
            logger.debug(
                f"Reporting clamped run: {summary.requested_simulations:,} requested, "
                f"{summary.simulations_run:,} run"
            )
        return {
            "config": {
                "base_deal_value": summary.base_deal_value,
                "simulations_run": summary.simulations_run,
                "requested_simulations": summary.requested_simulations,
                "trials_clamped": summary.trials_clamped,
                "risk_factors_count": len(results.risk_factors),
            },
            "risk_factors": [risk.model_dump() for risk in results.risk_factors],
            "summary": {
                "expected_value": round_or_none(summary.mean_value),
                "median_value": round_or_none(summary.median_value),
                "standard_deviation": round_or_none(summary.std_dev),
                "min_scenario": round_or_none(summary.min_value),
                "max_scenario": round_or_none(summary.max_value),
                "mean_confidence_interval": [
                    round_or_none(bound) for bound in summary.mean_confidence_interval
                ],
            },
            "risk_metrics": {
                "value_at_risk_95": round_or_none(summary.value_at_risk_95),
                "value_at_risk_99": round_or_none(summary.value_at_risk_99),
                "expected_shortfall": round_or_none(summary.expected_shortfall),
                "var_95_percent_of_base": round_or_none(summary.var_95_percent_of_base),
                "var_99_percent_of_base": round_or_none(summary.var_99_percent_of_base),
            },
            "probabilities": {
                "below_80_percent": percent(summary.prob_value_below_80),
                "below_90_percent": percent(summary.prob_value_below_90),
                "above_110_percent": percent(summary.prob_value_above_110),
            },
            "distribution": [
                {
                    "bucket": bucket.label,
                    "count": bucket.count,
                    "percentage": percent(bucket.share),
                }
                for bucket in summary.distribution
            ],
            "top_risk_contributors": [
                {
                    "name": risk.name,
                    "category": risk.category,
                    "frequency": percent(risk.frequency),
                    "avg_impact": round_or_none(risk.average_impact, 1),
                }
                for risk in summary.top_risks
            ],
            "worst_scenarios": [
                {
                    "scenario_id": trial.scenario_id,
                    "value": round_or_none(trial.final_value),
                    "impact_percent": round_or_none(trial.total_impact_percent, 1),
                    "risks_triggered": list(trial.triggered_risks),
                }
                for trial in results.worst_scenarios(worst_count or 0)
            ],
            "key_findings": risk_key_findings(results),
        }


def _breakeven_payload(result: BreakevenResult) -> Dict[str, Any]:
    return {
        "variable": result.variable,
        "target_irr": percent(result.target_irr),
        "value": round_or_none(result.value, 2),
        "achieved_irr": percent(result.achieved_irr),
        "achieved": result.achieved,
    }


def sensitivity_key_findings(report: SensitivityReport) -> List[str]:
    """Headline, runner-up, hurdle and convergence findings for a tornado."""
    results = report.analysis.results
    findings = []
    if results:
        findings.append(
            f"{results[0].label} is the most sensitive variable with "
            f"{results[0].irr_swing * 100:.1f}% IRR swing"
        )
        if not results[0].converged:
            findings[0] += " (IRR estimate did not converge)"
    if len(results) > 1:
        findings.append(f"{results[1].label} ranks second in sensitivity")
        if not results[1].converged:
            findings[1] += " (IRR estimate did not converge)"
    hurdle = "exceeds" if report.base_irr >= HURDLE_IRR else "falls below"
    findings.append(
        f"Base case IRR of {report.base_irr * 100:.1f}% {hurdle} typical "
        f"{HURDLE_IRR:.0%} hurdle rate"
    )
    unconverged = report.analysis.unconverged
    if unconverged:
        labels = ", ".join(r.label for r in unconverged)
        findings.append(
            f"IRR did not converge across the tested range for {labels}; "
            f"those swings are low-confidence and ranked last"
        )
    return findings


class SensitivityAnalysisReport(BaseReport):
    """Tornado table, breakevens and findings of a sensitivity analysis."""

    result_type = (SensitivityReport,)

    def generate(self) -> Dict[str, Any]:
        report: SensitivityReport = self._results
        analysis = report.analysis
        return {
            "base_case": {
                "irr": percent(report.base_irr),
                "irr_converged": analysis.base_irr.converged,
                "parameters": analysis.case.parameters.model_dump(),
                "exit_multiple": analysis.case.assumptions.exit_multiple,
            },
            "sensitivity_results": [
                {
                    "variable": r.label,
                    "unit": r.unit,
                    "base_value": r.base_value,
                    "low_value": r.low_value,
                    "high_value": r.high_value,
                    "base_irr": percent(r.base_irr),
                    "low_irr": percent(r.low_irr),
                    "high_irr": percent(r.high_irr),
                    "irr_swing": percent(r.irr_swing),
                    "sensitivity_rank": r.rank,
                    "converged": r.converged,
                }
                for r in analysis.results
            ],
            "tornado_chart_data": [
                {
                    "variable": r.label,
                    "low_irr": percent(r.low_irr),
                    "base_irr": percent(r.base_irr),
                    "high_irr": percent(r.high_irr),
                    "downside": percent(r.downside),
                    "upside": percent(r.upside),
                }
                for r in analysis.results
            ],
            "breakeven_analysis": {
                name: _breakeven_payload(result)
                for name, result in report.breakevens.items()
            },
            "key_findings": sensitivity_key_findings(report),
        }


def deal_simulation_payload(results: DealSimulationResults, **kwargs) -> Dict[str, Any]:
    return DealSimulationReport(results).generate(**kwargs)


def risk_simulation_payload(results: RiskSimulationResults, **kwargs) -> Dict[str, Any]:
    return RiskSimulationReport(results).generate(**kwargs)


def sensitivity_payload(report: SensitivityReport) -> Dict[str, Any]:
    return SensitivityAnalysisReport(report).generate()
