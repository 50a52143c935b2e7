"""
Shape previews for user-defined ranges.

These are display aids, not part of a simulation run: each range's density is
evaluated on a shared grid and scaled so its own peak is 1, which makes ranges
of very different widths comparable on one chart.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from scipy import stats

from core.schema import Range

from .samplers import truncated_normal_std

DEFAULT_GRID_POINTS = 300


def range_density(x: np.ndarray, r: Range) -> np.ndarray:
    """Normalized PDF of one range evaluated at x (zero outside the range)."""
    x = np.asarray(x, dtype=float)
    lo, hi = r.min_val, r.max_val
    width = hi - lo
    if width <= 0:
        return np.zeros_like(x)

    inside = (x >= lo) & (x <= hi)
    kind = r.distribution_type

    if kind == "linear_increasing":
        dens = 2.0 * (x - lo) / (width * width)
    elif kind == "linear_decreasing":
        dens = 2.0 * (hi - x) / (width * width)
    elif kind == "prediction_centric":
        exp_min = r.expected_min if r.expected_min is not None else lo
        exp_max = r.expected_max if r.expected_max is not None else hi
        mean = (exp_min + exp_max) / 2.0
        std = truncated_normal_std(lo, hi, exp_min, exp_max)
        a, b = (lo - mean) / std, (hi - mean) / std
        dens = stats.truncnorm.pdf(x, a, b, loc=mean, scale=std)
    else:
        dens = np.full_like(x, 1.0 / width)

    return np.where(inside, dens, 0.0)


def preview_densities(
    ranges: Sequence[Range],
    *,
    grid_points: int = DEFAULT_GRID_POINTS,
) -> pd.DataFrame:
    """
    Evaluate every range on a grid spanning all of them.

    Returns
    -------
    DataFrame with column "x" plus one column per range ("range0", "range1", ...),
    each scaled to a peak of 1. Empty when there is nothing to draw.
    """
    if len(ranges) == 0:
        return pd.DataFrame()
    global_min = min(r.min_val for r in ranges)
    global_max = max(r.max_val for r in ranges)
    if global_max <= global_min:
        return pd.DataFrame()

    grid = np.linspace(global_min, global_max, grid_points)
    data = {"x": grid}
    for i, r in enumerate(ranges):
        dens = range_density(grid, r)
        peak = max(float(dens.max()), 0.001)
        data[f"range{i}"] = dens / peak
    return pd.DataFrame(data)


def density_label(value: float) -> str:
    """Qualitative label for a peak-normalized density."""
    if value >= 0.7:
        return "High"
    if value >= 0.3:
        return "Medium"
    return "Low"
