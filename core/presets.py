"""
Named presets and default parameter factories.

Nothing here is built at import time: the default factories create fresh
parameter sets (and fresh range ids) each time they are called.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

from .config import DEFAULT_SIMULATIONS
from .schema import AutoShapedParams, CustomRangesParams, FixedFormulaParams, Range
from .utils import generate_range_id


@dataclass(frozen=True)
class Preset:
    """A named fixed-formula parameter set (without run settings)."""
    name: str
    params: FixedFormulaParams


PRESETS: Dict[str, Preset] = {
    "conservative": Preset(
        name="Conservative",
        params=FixedFormulaParams(
            supply_count=8888,
            fdv_min_a=50_000_000,
            fdv_max_a=150_000_000,
            fdv_prob_a=0.85,
            fdv_min_b=150_000_000,
            fdv_max_b=300_000_000,
            drop_min=0.005,
            drop_mode=0.01,
            drop_max=0.02,
            drop_tail_min=0.02,
            drop_tail_max=0.03,
            drop_tail_prob=0.10,
        ),
    ),
    "base": Preset(
        name="Base",
        params=FixedFormulaParams(
            supply_count=8888,
            fdv_min_a=100_000_000,
            fdv_max_a=500_000_000,
            fdv_prob_a=0.75,
            fdv_min_b=500_000_000,
            fdv_max_b=1_000_000_000,
            drop_min=0.01,
            drop_mode=0.02,
            drop_max=0.04,
            drop_tail_min=0.04,
            drop_tail_max=0.06,
            drop_tail_prob=0.15,
        ),
    ),
    "optimistic": Preset(
        name="Optimistic",
        params=FixedFormulaParams(
            supply_count=8888,
            fdv_min_a=300_000_000,
            fdv_max_a=1_000_000_000,
            fdv_prob_a=0.65,
            fdv_min_b=1_000_000_000,
            fdv_max_b=3_000_000_000,
            drop_min=0.02,
            drop_mode=0.04,
            drop_max=0.06,
            drop_tail_min=0.06,
            drop_tail_max=0.10,
            drop_tail_prob=0.20,
        ),
    ),
}


def get_preset(name: str) -> Preset:
    """
    Return a named preset.

    Parameters
    ----------
    name : str
        One of: "conservative", "base", "optimistic"
    """
    if name not in PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. "
            f"Available: {list(PRESETS.keys())}"
        )
    return PRESETS[name]


def default_fixed_params(
    preset: str = "base",
    *,
    simulation_count: int = DEFAULT_SIMULATIONS,
    seed: Optional[int] = 42,
) -> FixedFormulaParams:
    return replace(get_preset(preset).params, simulation_count=simulation_count, seed=seed)


def default_custom_params(
    *,
    id_factory: Callable[[], str] = generate_range_id,
    simulation_count: int = DEFAULT_SIMULATIONS,
    seed: Optional[int] = None,
) -> CustomRangesParams:
    """One uniform $20M-$100M FDV range and one linearly decreasing 5%-25% drop range."""
    return CustomRangesParams(
        supply_count=8888,
        fdv_ranges=(
            Range(id=id_factory(), min_val=20, max_val=100, distribution_type="uniform"),
        ),
        drop_ranges=(
            Range(id=id_factory(), min_val=5, max_val=25, distribution_type="linear_decreasing"),
        ),
        simulation_count=simulation_count,
        seed=seed,
    )


def default_auto_params(
    *,
    simulation_count: int = DEFAULT_SIMULATIONS,
    seed: Optional[int] = None,
) -> AutoShapedParams:
    return AutoShapedParams(
        supply_count=8888,
        fdv_min_m=20,
        fdv_max_m=200,
        drop_min_pct=5,
        drop_max_pct=50,
        simulation_count=simulation_count,
        seed=seed,
    )


def new_range(
    min_val: float,
    max_val: float,
    *,
    id_factory: Callable[[], str] = generate_range_id,
    weight: Optional[float] = 20,
) -> Range:
    """A fresh uniform range as added from the range editor (default weight 20)."""
    return Range(id=id_factory(), min_val=min_val, max_val=max_val, weight=weight)
