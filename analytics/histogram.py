"""
Log-scale histogram and threshold survival probabilities.

Both expect the run's values already sorted ascending.
"""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

import numpy as np

from core.config import HISTOGRAM_FLOOR
from core.schema import HistogramBin


def log_histogram(
    sorted_values: np.ndarray,
    n_bins: int = 40,
    *,
    floor: float = HISTOGRAM_FLOOR,
) -> Tuple[HistogramBin, ...]:
    """
    Bin values on evenly spaced log10 edges over [max(min, floor), max].

    Values below the floor are left out of every bin. density is count divided
    by the total number of samples (floored ones included), so the densities
    are probability mass per bin, not per unit width.
    """
    total = len(sorted_values)
    with np.errstate(divide="ignore", invalid="ignore"):
        min_val = max(float(sorted_values[0]), floor)
        max_val = float(sorted_values[-1])
        log_min = float(np.log10(min_val))
        log_max = float(np.log10(max_val))
        bin_width = (log_max - log_min) / n_bins

        edges = np.power(10.0, log_min + np.arange(n_bins + 1) * bin_width)

        kept = sorted_values[np.isfinite(sorted_values) & (sorted_values >= min_val)]
        if bin_width > 0:
            idx = np.floor((np.log10(kept) - log_min) / bin_width).astype(np.int64)
            idx = np.clip(idx, 0, n_bins - 1)
        else:
            # every kept value sits on the same edge
            idx = np.zeros(len(kept), dtype=np.int64)
    counts = np.bincount(idx, minlength=n_bins)

    return tuple(
        HistogramBin(
            bin_start=float(edges[i]),
            bin_end=float(edges[i + 1]),
            count=int(counts[i]),
            density=float(counts[i]) / total,
        )
        for i in range(n_bins)
    )


def threshold_probabilities(
    sorted_values: np.ndarray,
    thresholds: Sequence[float],
) -> Dict[float, float]:
    """P(value >= t) for each threshold, via binary search for the first index >= t."""
    n = len(sorted_values)
    if len(thresholds) == 0:
        return {}
    first_at_or_above = np.searchsorted(sorted_values, np.asarray(thresholds, dtype=float), side="left")
    return {t: (n - int(i)) / n for t, i in zip(thresholds, first_at_or_above)}
