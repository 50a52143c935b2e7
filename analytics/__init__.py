"""
Analytics — turn a flat array of simulated payouts into the numbers a caller
displays: percentiles, mean/std, log-scale histogram, survival probabilities.
"""

from .statistics import compute_stats, percentile, population_std
from .histogram import log_histogram, threshold_probabilities
from .summary import summarize_result

__all__ = [
    "compute_stats",
    "percentile",
    "population_std",
    "log_histogram",
    "threshold_probabilities",
    "summarize_result",
]
