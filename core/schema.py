"""
Data model for the payout-value Monte Carlo engine.

Inputs (ranges and parameter sets) are frozen dataclasses and are never
mutated by the engine. The three parameter shapes form a tagged union on
their ``kind`` field so callers and dispatchers never have to infer the
engine variant from which attributes happen to be present.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Literal, Optional, Tuple, Union

import numpy as np

DistributionType = Literal[
    "uniform",
    "linear_increasing",
    "linear_decreasing",
    "prediction_centric",
]

DISTRIBUTION_TYPES: Tuple[str, ...] = (
    "uniform",
    "linear_increasing",
    "linear_decreasing",
    "prediction_centric",
)

ZoneShape = Literal[
    "uniform",
    "linear_increasing",
    "linear_decreasing",
    "log_uniform",
    "triangular",
    "truncated_normal",
    "truncated_exponential",
    "plateau_then_decline",
]

ZoneDesign = Literal["absolute", "range_invariant"]


@dataclass(frozen=True)
class Range:
    """
    One user-configurable interval on either side (FDV in millions, drop in percent).

    expected_min / expected_max only matter for "prediction_centric" ranges.
    weight is optional; when any range on a side sets it, explicit weights
    replace width-proportional ones for that side.
    """
    id: str
    min_val: float
    max_val: float
    distribution_type: DistributionType = "uniform"
    expected_min: Optional[float] = None
    expected_max: Optional[float] = None
    weight: Optional[float] = None

    @property
    def width(self) -> float:
        return self.max_val - self.min_val

    def with_distribution(self, distribution_type: DistributionType) -> "Range":
        """Switch shape; prediction-centric gets a 30%-70% expected band by default."""
        if distribution_type == "prediction_centric":
            return replace(
                self,
                distribution_type=distribution_type,
                expected_min=self.min_val + self.width * 0.3,
                expected_max=self.min_val + self.width * 0.7,
            )
        return replace(
            self,
            distribution_type=distribution_type,
            expected_min=None,
            expected_max=None,
        )


@dataclass(frozen=True)
class Zone:
    """A weighted sub-range of a mixture, sampled with its own shape."""
    min_val: float
    max_val: float
    weight: float
    shape: ZoneShape

    # shape-specific parameters
    mode: Optional[float] = None             # triangular (None = auto-mode)
    expected_min: Optional[float] = None     # truncated_normal
    expected_max: Optional[float] = None     # truncated_normal
    decay_rate: Optional[float] = None       # truncated_exponential
    plateau_fraction: Optional[float] = None  # plateau_then_decline


@dataclass(frozen=True)
class FixedFormulaParams:
    """
    Two-zone log-uniform FDV mixture and triangular-plus-uniform-tail drop mixture.

    FDV bounds are in currency units, drop bounds are decimal fractions.
    """
    supply_count: float
    fdv_min_a: float
    fdv_max_a: float
    fdv_prob_a: float
    fdv_min_b: float
    fdv_max_b: float
    drop_min: float
    drop_max: float
    drop_tail_min: float
    drop_tail_max: float
    drop_tail_prob: float
    drop_mode: Optional[float] = None
    simulation_count: int = 200_000
    seed: Optional[int] = None
    kind: Literal["fixed_formula"] = field(default="fixed_formula", init=False)


@dataclass(frozen=True)
class CustomRangesParams:
    """User-defined ranges per side. FDV ranges in millions, drop ranges in percent."""
    supply_count: float
    fdv_ranges: Tuple[Range, ...]
    drop_ranges: Tuple[Range, ...]
    simulation_count: int = 200_000
    seed: Optional[int] = None
    kind: Literal["custom_ranges"] = field(default="custom_ranges", init=False)


@dataclass(frozen=True)
class AutoShapedParams:
    """Min/max per side; the engine shapes a fixed 3-zone mixture inside each span."""
    supply_count: float
    fdv_min_m: float
    fdv_max_m: float
    drop_min_pct: float = 5.0
    drop_max_pct: float = 50.0
    simulation_count: int = 200_000
    seed: Optional[int] = None
    fdv_design: ZoneDesign = "absolute"
    drop_design: ZoneDesign = "range_invariant"
    kind: Literal["auto_shaped"] = field(default="auto_shaped", init=False)


SimulationParams = Union[FixedFormulaParams, CustomRangesParams, AutoShapedParams]


@dataclass(frozen=True)
class SimulationStats:
    mean: float
    median: float
    p5: float
    p10: float
    p25: float
    p75: float
    p90: float
    p95: float
    min: float
    max: float
    std_dev: Optional[float] = None  # fixed-formula engine only

    def as_dict(self) -> Dict[str, float]:
        out = {
            "mean": self.mean,
            "median": self.median,
            "p5": self.p5,
            "p10": self.p10,
            "p25": self.p25,
            "p75": self.p75,
            "p90": self.p90,
            "p95": self.p95,
            "min": self.min,
            "max": self.max,
        }
        if self.std_dev is not None:
            out["std_dev"] = self.std_dev
        return out


@dataclass(frozen=True)
class HistogramBin:
    bin_start: float
    bin_end: float
    count: int
    density: float  # count / total samples (probability mass, not per-width)


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """
    Output of one run. Created fresh per run and never mutated afterwards.

    values is only populated when the engine settings ask for it.
    """
    stats: SimulationStats
    histogram: Tuple[HistogramBin, ...]
    threshold_probabilities: Dict[float, float]
    worst_case: float
    best_case: float
    execution_time_ms: float
    seed: int
    values: Optional[np.ndarray] = None


@dataclass(frozen=True)
class ValidationError:
    """A field-scoped validation failure, for display next to the offending input."""
    field: str
    message: str
    range_id: Optional[str] = None


@dataclass
class ValidationResult:
    """Blocking errors plus advisory warnings for one parameter set."""
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                where = f"{e.field}[{e.range_id}]" if e.range_id else e.field
                lines.append(f"  ✗ {where}: {e.message}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                where = f"{w.field}[{w.range_id}]" if w.range_id else w.field
                lines.append(f"  ⚠ {where}: {w.message}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)
