"""
User-defined-ranges engine.

Each side is a list of ranges (FDV in millions, drop in percent), each with
its own shape. Ranges are combined by width-proportional weights, or by the
user's explicit weights when any range on that side sets one. Overlapping
ranges are allowed and simply stack their probability mass.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence

from core.config import CUSTOM_RANGES_SETTINGS, FDV_UNIT, PERCENT, EngineSettings
from core.schema import CustomRangesParams, SimulationResult, ValidationError
from distributions.prng import SeededRandom
from distributions.zones import ZoneMixture
from validation.validators import validate_custom_params

from .runner import execute_run, payout_value


def validate(params: CustomRangesParams) -> List[ValidationError]:
    return validate_custom_params(params)


def run_custom_simulation(
    params: CustomRangesParams,
    thresholds: Optional[Sequence[float]] = None,
    *,
    settings: Optional[EngineSettings] = None,
) -> SimulationResult:
    started = time.perf_counter()
    fdv_mixture = ZoneMixture.from_ranges(params.fdv_ranges)
    drop_mixture = ZoneMixture.from_ranges(params.drop_ranges)

    def sample_fdv(rng: SeededRandom) -> float:
        return fdv_mixture.sample(rng) * FDV_UNIT

    def sample_drop(rng: SeededRandom) -> float:
        return drop_mixture.sample(rng) / PERCENT

    worst_case = payout_value(
        min(r.min_val for r in params.fdv_ranges) * FDV_UNIT,
        min(r.min_val for r in params.drop_ranges) / PERCENT,
        params.supply_count,
    )
    best_case = payout_value(
        max(r.max_val for r in params.fdv_ranges) * FDV_UNIT,
        max(r.max_val for r in params.drop_ranges) / PERCENT,
        params.supply_count,
    )

    return execute_run(
        kind=params.kind,
        sample_fdv=sample_fdv,
        sample_drop=sample_drop,
        supply_count=params.supply_count,
        simulation_count=params.simulation_count,
        seed=params.seed,
        thresholds=thresholds,
        worst_case=worst_case,
        best_case=best_case,
        settings=settings or CUSTOM_RANGES_SETTINGS,
        started=started,
    )


run = run_custom_simulation
