# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import importlib
import logging

"""
dealquant - Quantitative Deal Modeling Engine

Deterministic and probabilistic valuation tools for M&A transactions:
cash-flow projection, IRR/NPV solving, named scenarios, Monte Carlo risk
simulation, tornado sensitivity and breakeven analysis.

Key Entry Points:
- dealquant.deal.simulate_deal() - Base case plus Upside/Downside/No Synergies/All Equity
- dealquant.risk.MonteCarloRiskEngine - Deal value distribution under independent risks
- dealquant.sensitivity.analyze_sensitivity() - Tornado ranking and breakeven targets

Example Usage:
    ```python
    from dealquant.deal import ParameterSet, simulate_deal
    from dealquant.risk import MonteCarloRiskEngine, default_risk_factors

    results = simulate_deal(ParameterSet(purchase_price=250_000_000))
    print(f"Deal IRR: {results.base_case.irr:.2%}")

    run = MonteCarloRiskEngine().run(250_000_000, default_risk_factors(), seed=7)
    print(f"VaR 95: ${run.summary.value_at_risk_95:,.0f}")
    ```
"""

# Library logging: applications attach their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "core",
    "deal",
    "reporting",
    "risk",
    "sensitivity",
]


_LAZY_MODULES = {
    "core": "dealquant.core",
    "deal": "dealquant.deal",
    "reporting": "dealquant.reporting",
    "risk": "dealquant.risk",
    "sensitivity": "dealquant.sensitivity",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'dealquant' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
