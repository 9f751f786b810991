# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Monte Carlo risk simulation.

Each trial draws, for every risk factor, whether it triggers and, if so,
an impact uniformly between its bounds. Trials are independent, so the run
is a map over fixed-size chunks followed by a reduction:

1. PARTITION: split N trials into chunks of `SimulationSettings.chunk_size`
2. SEED: give chunk i the i-th child of the root `SeedSequence`
3. MAP: simulate chunks serially or on a thread/process pool
4. REDUCE: concatenate chunk outputs in chunk order and aggregate

Because streams are tied to chunks rather than workers, a seeded run gives
the same numbers under every execution strategy.
"""

from __future__ import annotations

import logging
import math
import threading
import time
import warnings
from concurrent.futures import (
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from ..core.exceptions import SimulationCancelledError, TrialCountClampedWarning
from ..core.primitives import ExecutionStrategy, SimulationSettings
from .factors import RiskFactor, default_risk_factors
from .results import RiskSimulationResults, SimulationSummary

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.SeedSequence]


class CancellationToken:
    """
    Thread-safe cancellation flag checked between trial chunks.

    Example:
        ```python
        token = CancellationToken()
        threading.Timer(2.0, token.cancel).start()
        engine.run(100_000_000, risks, cancel_token=token)
        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class _ChunkTask:
    index: int
    size: int
    seed: np.random.SeedSequence
    base_value: float
    probabilities: np.ndarray
    impact_low: np.ndarray
    impact_high: np.ndarray


@dataclass(frozen=True)
class _ChunkOutcome:
    index: int
    final_values: np.ndarray
    total_impact: np.ndarray
    triggered: np.ndarray
    trigger_counts: np.ndarray
    abs_impact_sums: np.ndarray


def _simulate_chunk(task: _ChunkTask) -> _ChunkOutcome:
    """Simulate one chunk of trials with its own random stream."""
    rng = np.random.default_rng(task.seed)
    shape = (task.size, task.probabilities.size)

    triggered = rng.random(shape) < task.probabilities
    span = task.impact_high - task.impact_low
    impacts = np.where(triggered, task.impact_low + rng.random(shape) * span, 0.0)

    total_impact = impacts.sum(axis=1)
    final_values = np.maximum(0.0, task.base_value * (1.0 + total_impact / 100.0))

    return _ChunkOutcome(
        index=task.index,
        final_values=final_values,
        total_impact=total_impact,
        triggered=triggered,
        trigger_counts=triggered.sum(axis=0),
        abs_impact_sums=np.abs(impacts).sum(axis=0),
    )


def _coerce_risk_factors(
    risk_factors: Iterable[Union[RiskFactor, Mapping[str, Any]]],
) -> List[RiskFactor]:
    factors = [
        risk if isinstance(risk, RiskFactor) else RiskFactor.model_validate(risk)
        for risk in risk_factors
    ]
    seen: Dict[str, int] = {}
    for position, risk in enumerate(factors):
        if risk.name in seen:
            raise ValueError(
                f"Duplicate risk factor name '{risk.name}' at positions "
                f"{seen[risk.name]} and {position}"
            )
        seen[risk.name] = position
    return factors


class MonteCarloRiskEngine:
    """
    Simulates deal value under a set of independent risk factors.

    Example:
        ```python
        engine = MonteCarloRiskEngine()
        run = engine.run(100_000_000, default_risk_factors(), seed=42)
        print(f"Expected value: ${run.summary.mean_value:,.0f}")
        print(f"VaR 95: ${run.summary.value_at_risk_95:,.0f}")
        ```
    """

    def __init__(self, settings: Optional[SimulationSettings] = None):
        self.settings = settings or SimulationSettings()

    def resolve_trials(self, trials: Optional[int]) -> int:
        """
        Apply the default and the resource cap to a requested trial count.

        Requests above `max_trials` are clamped; a TrialCountClampedWarning
        is emitted and the clamp is logged.
        """
        if trials is None:
            return self.settings.default_trials
        if isinstance(trials, bool) or not isinstance(trials, (int, np.integer)):
            raise ValueError(f"trials must be an integer, got {trials!r}")
        if trials < 1:
            raise ValueError(f"trials must be at least 1, got {trials}")
        cap = self.settings.max_trials
        if trials > cap:
            message = f"Requested {trials:,} trials exceeds the cap; running {cap:,}"
            logger.warning(message)
            warnings.warn(message, TrialCountClampedWarning, stacklevel=3)
            return cap
        return int(trials)

    def run(
        self,
        base_deal_value: float,
        risk_factors: Optional[Iterable[Union[RiskFactor, Mapping[str, Any]]]] = None,
        trials: Optional[int] = None,
        *,
        seed: SeedLike = None,
        cancel_token: Optional[CancellationToken] = None,
        timeout: Optional[float] = None,
    ) -> RiskSimulationResults:
        """
        Run the simulation.

        Args:
            base_deal_value: Deal value before risks (> 0)
            risk_factors: RiskFactor records (or mappings validated into
                them); defaults to `default_risk_factors()`
            trials: Trial count; defaults to `settings.default_trials` and is
                clamped to `settings.max_trials`
            seed: Int seed, SeedSequence, or None for fresh entropy
            cancel_token: Optional token checked between chunks
            timeout: Optional wall-clock budget in seconds

        Returns:
            RiskSimulationResults with summary and per-trial data

        Raises:
            ValueError: Invalid base value, trial count or risk list
            pydantic.ValidationError: Invalid risk factor mapping
            SimulationCancelledError: Cancelled or timed out; no partial result
        """
        if not math.isfinite(base_deal_value) or base_deal_value <= 0:
            raise ValueError(f"base_deal_value must be positive, got {base_deal_value}")
        factors = _coerce_risk_factors(
            default_risk_factors() if risk_factors is None else risk_factors
        )
        requested = self.settings.default_trials if trials is None else trials
        n_trials = self.resolve_trials(trials)

        root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
        tasks = self._partition(n_trials, root, base_deal_value, factors)
        deadline = time.monotonic() + timeout if timeout is not None else None

        logger.debug(
            f"Monte Carlo: {n_trials:,} trials x {len(factors)} risks in "
            f"{len(tasks)} chunks ({self.settings.strategy.value})"
        )
        started = time.perf_counter()
        outcomes = self._execute(tasks, n_trials, cancel_token, deadline)
        outcomes.sort(key=lambda outcome: outcome.index)

        final_values = np.concatenate([o.final_values for o in outcomes])
        total_impact = np.concatenate([o.total_impact for o in outcomes])
        triggered = np.concatenate([o.triggered for o in outcomes], axis=0)
        trigger_counts = np.sum([o.trigger_counts for o in outcomes], axis=0)
        abs_impact_sums = np.sum([o.abs_impact_sums for o in outcomes], axis=0)

        summary = SimulationSummary.from_trials(
            final_values=final_values,
            base_deal_value=float(base_deal_value),
            risk_factors=factors,
            trigger_counts=trigger_counts,
            abs_impact_sums=abs_impact_sums,
            requested_simulations=int(requested),
            top_risk_count=self.settings.top_risk_count,
        )
        logger.info(
            f"Monte Carlo complete: {n_trials:,} trials in "
            f"{time.perf_counter() - started:.2f}s, mean ${summary.mean_value:,.0f}, "
            f"VaR95 ${summary.value_at_risk_95:,.0f}"
        )
        return RiskSimulationResults(
            summary=summary,
            risk_factors=factors,
            final_values=final_values,
            total_impact_percent=total_impact,
            triggered=triggered,
            seed_entropy=root.entropy,
        )

    def _partition(
        self,
        n_trials: int,
        root: np.random.SeedSequence,
        base_value: float,
        factors: List[RiskFactor],
    ) -> List[_ChunkTask]:
        probabilities = np.array([r.probability for r in factors], dtype=float)
        impact_low = np.array([r.impact_low for r in factors], dtype=float)
        impact_high = np.array([r.impact_high for r in factors], dtype=float)

        chunk_size = self.settings.chunk_size
        n_chunks = math.ceil(n_trials / chunk_size)
        tasks = []
        for index in range(n_chunks):
            # Same child keys SeedSequence.spawn would hand out, without
            # mutating a caller-supplied SeedSequence between runs.
            child = np.random.SeedSequence(
                root.entropy, spawn_key=tuple(root.spawn_key) + (index,)
            )
            tasks.append(
                _ChunkTask(
                    index=index,
                    size=min(chunk_size, n_trials - index * chunk_size),
                    seed=child,
                    base_value=float(base_value),
                    probabilities=probabilities,
                    impact_low=impact_low,
                    impact_high=impact_high,
                )
            )
        return tasks

    def _execute(
        self,
        tasks: List[_ChunkTask],
        n_trials: int,
        cancel_token: Optional[CancellationToken],
        deadline: Optional[float],
    ) -> List[_ChunkOutcome]:
        if self.settings.strategy is ExecutionStrategy.SERIAL or len(tasks) == 1:
            outcomes = []
            for task in tasks:
                self._check_interrupt(outcomes, n_trials, cancel_token, deadline)
                outcomes.append(_simulate_chunk(task))
            return outcomes
        return self._execute_pooled(tasks, n_trials, cancel_token, deadline)

    def _execute_pooled(
        self,
        tasks: List[_ChunkTask],
        n_trials: int,
        cancel_token: Optional[CancellationToken],
        deadline: Optional[float],
    ) -> List[_ChunkOutcome]:
        executor: Executor
        if self.settings.strategy is ExecutionStrategy.PROCESSES:
            executor = ProcessPoolExecutor(max_workers=self.settings.max_workers)
        else:
            executor = ThreadPoolExecutor(max_workers=self.settings.max_workers)

        outcomes: List[_ChunkOutcome] = []
        try:
            futures: List[Future] = [executor.submit(_simulate_chunk, t) for t in tasks]
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            try:
                for future in as_completed(futures, timeout=remaining):
                    outcomes.append(future.result())
                    self._check_interrupt(outcomes, n_trials, cancel_token, deadline)
            except FuturesTimeoutError:
                raise SimulationCancelledError(
                    sum(o.final_values.size for o in outcomes), n_trials, "timed out"
                ) from None
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
        return outcomes

    @staticmethod
    def _check_interrupt(
        outcomes: List[_ChunkOutcome],
        n_trials: int,
        cancel_token: Optional[CancellationToken],
        deadline: Optional[float],
    ) -> None:
        completed = sum(o.final_values.size for o in outcomes)
        if completed >= n_trials:
            return
        if cancel_token is not None and cancel_token.cancelled:
            logger.info(f"Monte Carlo cancelled after {completed:,} trials")
            raise SimulationCancelledError(completed, n_trials, "cancelled")
        if deadline is not None and time.monotonic() > deadline:
            logger.info(f"Monte Carlo deadline reached after {completed:,} trials")
            raise SimulationCancelledError(completed, n_trials, "timed out")
