#!/usr/bin/env python3
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Merger Deal Analysis Example

Runs the three dealquant analyses against the default $100M acquisition:

1. **Deterministic projection**: Base case plus Upside, Downside,
   No Synergies and All Equity scenarios
2. **Monte Carlo risk**: Deal value distribution under the default
   due-diligence risk set (seeded, so the output is reproducible)
3. **Sensitivity**: Tornado ranking of seven drivers and the breakeven
   targets (synergies and price for a 20% IRR, exit multiple for 15%)

The JSON payloads printed at the end are the shapes served to the
front end.
"""

import json
import logging

from dealquant.deal import ParameterSet, simulate_deal
from dealquant.reporting import (
    deal_simulation_payload,
    risk_simulation_payload,
    sensitivity_payload,
)
from dealquant.risk import MonteCarloRiskEngine, default_risk_factors
from dealquant.sensitivity import analyze_sensitivity


def run_projection(params: ParameterSet):
    print("Projecting deal cash flows...")
    results = simulate_deal(params)
    base = results.base_case
    print(f"   Base IRR: {base.irr:.2%} (converged: {base.irr_converged})")
    print(f"   NPV: ${base.npv:,.0f}")
    if base.moic is not None:
        print(f"   MOIC: {base.moic:.2f}x")
    print(f"   Payback year: {base.payback_year}")
    print()
    print(results.comparison())
    print()
    return results


def run_risk(params: ParameterSet):
    print("Running Monte Carlo risk simulation...")
    run = MonteCarloRiskEngine().run(
        params.purchase_price, default_risk_factors(), trials=10_000, seed=42
    )
    summary = run.summary
    print(f"   Trials: {summary.simulations_run:,}")
    print(f"   Mean value: ${summary.mean_value:,.0f}")
    print(f"   VaR 95: ${summary.value_at_risk_95:,.0f}")
    print(f"   P(value < 80% of base): {summary.prob_value_below_80:.1%}")
    for contributor in summary.top_risks[:3]:
        print(f"   - {contributor.name}: score {contributor.score:.2f}")
    print()
    return run


def run_sensitivity(params: ParameterSet):
    print("Running sensitivity and breakeven analysis...")
    report = analyze_sensitivity(params)
    print(report.analysis.to_frame()[["low_irr", "high_irr", "irr_swing"]])
    for name, breakeven in report.breakevens.items():
        status = "hit" if breakeven.achieved else "not reachable"
        print(f"   {name}: {breakeven.value:,.2f} ({status})")
    print()
    return report


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    params = ParameterSet()
    deal_results = run_projection(params)
    risk_results = run_risk(params)
    sensitivity_report = run_sensitivity(params)

    payloads = {
        "deal_simulation": deal_simulation_payload(deal_results, include_cash_flows=False),
        "risk_simulation": risk_simulation_payload(risk_results, worst_count=3),
        "sensitivity": sensitivity_payload(sensitivity_report),
    }
    for name, payload in payloads.items():
        print(f"{name} key findings:")
        print(json.dumps(payload["key_findings"], indent=2))


if __name__ == "__main__":
    main()
