"""
Core package — data model, engine settings, presets, and shared utilities.
No sampling logic lives here.
"""

from .schema import (
    AutoShapedParams,
    CustomRangesParams,
    FixedFormulaParams,
    HistogramBin,
    Range,
    SimulationResult,
    SimulationStats,
    ValidationError,
    ValidationResult,
    Zone,
)
from .config import EngineSettings, DEFAULT_THRESHOLDS
from .utils import generate_range_id, resolve_seed
from .presets import PRESETS, get_preset

__all__ = [
    "AutoShapedParams",
    "CustomRangesParams",
    "FixedFormulaParams",
    "HistogramBin",
    "Range",
    "SimulationResult",
    "SimulationStats",
    "ValidationError",
    "ValidationResult",
    "Zone",
    "EngineSettings",
    "DEFAULT_THRESHOLDS",
    "generate_range_id",
    "resolve_seed",
    "PRESETS",
    "get_preset",
]
