"""
Engine configuration.
Per-variant output settings live here; distribution shapes live in
distributions/designs.py and the presets in core/presets.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# survival thresholds reported when the caller supplies none
DEFAULT_THRESHOLDS: Tuple[float, ...] = (60, 120, 300)

MIN_SIMULATIONS = 1000
DEFAULT_SIMULATIONS = 200_000
MAX_RANGES_PER_SIDE = 5

# unit conversions: FDV inputs are in millions, drop inputs in percent
FDV_UNIT = 1_000_000
PERCENT = 100

HISTOGRAM_FLOOR = 0.01
WEIGHT_TOLERANCE = 0.001
TRUNCATED_NORMAL_MAX_ATTEMPTS = 100
PRNG_WARMUP = 20

# widths below this are sampled uniformly instead of through a closed-form inverse CDF
MIN_ZONE_WIDTH = 1e-12


@dataclass(frozen=True)
class EngineSettings:
    histogram_bins: int = 40
    include_std_dev: bool = False
    keep_values: bool = False  # retain the raw sample array on the result
    histogram_floor: float = HISTOGRAM_FLOOR


FIXED_FORMULA_SETTINGS = EngineSettings(histogram_bins=50, include_std_dev=True, keep_values=True)
CUSTOM_RANGES_SETTINGS = EngineSettings(histogram_bins=40)
AUTO_SHAPED_SETTINGS = EngineSettings(histogram_bins=40)
