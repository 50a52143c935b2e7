"""
Summary statistics over one run's sample array.

Callers sort once (np.sort) and hand the same sorted array to the percentile,
histogram, and survival helpers.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from core.schema import SimulationStats

REPORTED_PERCENTILES: Tuple[int, ...] = (5, 10, 25, 50, 75, 90, 95)


def percentile(sorted_values: np.ndarray, p: float) -> float:
    """
    Linear-interpolation rank percentile: r = (p/100)(n-1), blended between
    the values at floor(r) and ceil(r).
    """
    n = len(sorted_values)
    rank = (p / 100.0) * (n - 1)
    lower = int(math.floor(rank))
    upper = int(math.ceil(rank))
    weight = rank - lower
    if upper >= n:
        return float(sorted_values[n - 1])
    return float(sorted_values[lower] * (1.0 - weight) + sorted_values[upper] * weight)


def population_std(values: np.ndarray, mean: float) -> float:
    """sqrt(mean((x - mean)^2)), i.e. ddof=0."""
    diff = np.asarray(values, dtype=float) - mean
    return float(np.sqrt(np.mean(diff * diff)))


def compute_stats(
    values: np.ndarray,
    sorted_values: np.ndarray,
    *,
    include_std_dev: bool = False,
) -> SimulationStats:
    mean = float(np.mean(values))
    return SimulationStats(
        mean=mean,
        median=percentile(sorted_values, 50),
        p5=percentile(sorted_values, 5),
        p10=percentile(sorted_values, 10),
        p25=percentile(sorted_values, 25),
        p75=percentile(sorted_values, 75),
        p90=percentile(sorted_values, 90),
        p95=percentile(sorted_values, 95),
        min=float(sorted_values[0]),
        max=float(sorted_values[-1]),
        std_dev=population_std(values, mean) if include_std_dev else None,
    )
