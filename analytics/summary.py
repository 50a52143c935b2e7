"""
Tabular views of a SimulationResult for display layers.

The engine returns plain numbers; these helpers lay them out as DataFrames
(one per chart or table) without adding any formatting decisions.
"""

from __future__ import annotations

from typing import Dict

import pandas as pd

from core.schema import SimulationResult

_STAT_LABELS = {
    "mean": "Mean",
    "median": "Median",
    "p5": "P05",
    "p10": "P10",
    "p25": "P25",
    "p75": "P75",
    "p90": "P90",
    "p95": "P95",
    "min": "Min",
    "max": "Max",
    "std_dev": "Std Dev",
}


def stats_table(result: SimulationResult) -> pd.DataFrame:
    rows = [
        {"Statistic": _STAT_LABELS[key], "Value": value}
        for key, value in result.stats.as_dict().items()
    ]
    rows.append({"Statistic": "Worst Case", "Value": result.worst_case})
    rows.append({"Statistic": "Best Case", "Value": result.best_case})
    return pd.DataFrame(rows)


def histogram_table(result: SimulationResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "bin_start": b.bin_start,
                "bin_end": b.bin_end,
                "count": b.count,
                "density": b.density,
            }
            for b in result.histogram
        ],
        columns=["bin_start", "bin_end", "count", "density"],
    )


def threshold_table(result: SimulationResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"threshold": t, "probability": p}
            for t, p in sorted(result.threshold_probabilities.items())
        ],
        columns=["threshold", "probability"],
    )


def summarize_result(result: SimulationResult) -> Dict[str, object]:
    """
    Returns
    -------
    Dict with:
      "summary_table":  one row per statistic plus worst/best case anchors
      "histogram":      one row per log-scale bin
      "thresholds":     survival probability per threshold, ascending
      "seed":           seed the run used (replays a self-seeded run)
    """
    return {
        "summary_table": stats_table(result),
        "histogram": histogram_table(result),
        "thresholds": threshold_table(result),
        "seed": result.seed,
        "execution_time_ms": result.execution_time_ms,
    }
