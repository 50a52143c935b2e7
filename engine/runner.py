"""
Batch runner — drives the PRNG through both sides' samplers N times and
hands the payout array to the analytics layer.

Every engine variant ends up here; they differ only in how they build the
two side samplers and the worst/best-case anchors.

Draw order is fixed: each iteration samples the FDV side completely, then
the drop side. Reordering would change every value under a given seed, so the
loop stays sequential.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

import numpy as np

from analytics.histogram import log_histogram, threshold_probabilities
from analytics.statistics import compute_stats
from core.config import DEFAULT_THRESHOLDS, EngineSettings
from core.schema import SimulationResult
from core.utils import resolve_seed
from distributions.prng import SeededRandom

logger = logging.getLogger(__name__)

SideSampler = Callable[[SeededRandom], float]


def payout_value(fdv: float, drop_fraction: float, supply_count: float) -> float:
    """Scalar payout formula for anchors; follows the batch's inf/nan behaviour."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float((np.float64(fdv) * drop_fraction) / supply_count)


def run_batch(
    simulation_count: int,
    sample_fdv: SideSampler,
    sample_drop: SideSampler,
    supply_count: float,
    rng: SeededRandom,
) -> np.ndarray:
    """
    value_per_unit = (FDV × drop_fraction) / supply_count, once per iteration.

    sample_fdv must return currency units and sample_drop a decimal fraction.
    No validation here: a non-positive supply yields inf/nan, not an exception.
    """
    n = int(simulation_count)
    fdv = np.empty(n, dtype=float)
    drop = np.empty(n, dtype=float)

    # ========= MAIN SAMPLING LOOP =========
    for i in range(n):
        fdv[i] = sample_fdv(rng)
        drop[i] = sample_drop(rng)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return (fdv * drop) / supply_count


def build_result(
    values: np.ndarray,
    *,
    thresholds: Sequence[float],
    worst_case: float,
    best_case: float,
    settings: EngineSettings,
    seed: int,
    started: float,
) -> SimulationResult:
    """Sort once, then derive stats, histogram and survival probabilities from that array."""
    sorted_values = np.sort(values)

    stats = compute_stats(values, sorted_values, include_std_dev=settings.include_std_dev)
    histogram = log_histogram(sorted_values, settings.histogram_bins, floor=settings.histogram_floor)
    probs = threshold_probabilities(sorted_values, thresholds)

    return SimulationResult(
        stats=stats,
        histogram=histogram,
        threshold_probabilities=probs,
        worst_case=worst_case,
        best_case=best_case,
        execution_time_ms=(time.perf_counter() - started) * 1000.0,
        seed=seed,
        values=values if settings.keep_values else None,
    )


def execute_run(
    *,
    kind: str,
    sample_fdv: SideSampler,
    sample_drop: SideSampler,
    supply_count: float,
    simulation_count: int,
    seed: Optional[int],
    thresholds: Optional[Sequence[float]],
    worst_case: float,
    best_case: float,
    settings: EngineSettings,
    started: Optional[float] = None,
) -> SimulationResult:
    """Seed a fresh generator, run the batch, and assemble the result."""
    if started is None:
        started = time.perf_counter()
    if thresholds is None:
        thresholds = DEFAULT_THRESHOLDS

    seed, self_selected = resolve_seed(seed)
    logger.debug(
        "Starting %s run: %d simulations, seed=%d%s",
        kind, simulation_count, seed, " (self-selected)" if self_selected else "",
    )

    rng = SeededRandom(seed)
    values = run_batch(simulation_count, sample_fdv, sample_drop, supply_count, rng)
    result = build_result(
        values,
        thresholds=thresholds,
        worst_case=worst_case,
        best_case=best_case,
        settings=settings,
        seed=seed,
        started=started,
    )

    logger.debug(
        "Finished %s run in %.1f ms (median=%.4f)",
        kind, result.execution_time_ms, result.stats.median,
    )
    return result
