"""
Auto-shaped engine.

The user only picks a min and max per side; the engine lays a fixed 3-zone
mixture over each span (see distributions/designs.py). Zones that would be
empty for the chosen span are left out and the remaining weights rescaled.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence

from core.config import AUTO_SHAPED_SETTINGS, FDV_UNIT, PERCENT, EngineSettings
from core.schema import AutoShapedParams, SimulationResult, ValidationError
from distributions.designs import drop_bounds, drop_zones, fdv_zones
from distributions.zones import ZoneMixture
from validation.validators import validate_auto_params

from .runner import execute_run, payout_value


def build_fdv_mixture(params: AutoShapedParams) -> ZoneMixture:
    """FDV zones in currency units."""
    return ZoneMixture(fdv_zones(params.fdv_min_m * FDV_UNIT, params.fdv_max_m * FDV_UNIT, params.fdv_design))


def build_drop_mixture(params: AutoShapedParams) -> ZoneMixture:
    """Drop zones as decimal fractions."""
    return ZoneMixture(
        drop_zones(params.drop_min_pct / PERCENT, params.drop_max_pct / PERCENT, params.drop_design)
    )


def validate(params: AutoShapedParams) -> List[ValidationError]:
    return validate_auto_params(params)


def run_auto_simulation(
    params: AutoShapedParams,
    thresholds: Optional[Sequence[float]] = None,
    *,
    settings: Optional[EngineSettings] = None,
) -> SimulationResult:
    started = time.perf_counter()
    fdv_mixture = build_fdv_mixture(params)
    drop_mixture = build_drop_mixture(params)

    drop_lo, drop_hi = drop_bounds(
        params.drop_min_pct / PERCENT, params.drop_max_pct / PERCENT, params.drop_design
    )
    worst_case = payout_value(params.fdv_min_m * FDV_UNIT, drop_lo, params.supply_count)
    best_case = payout_value(params.fdv_max_m * FDV_UNIT, drop_hi, params.supply_count)

    return execute_run(
        kind=params.kind,
        sample_fdv=fdv_mixture.sample,
        sample_drop=drop_mixture.sample,
        supply_count=params.supply_count,
        simulation_count=params.simulation_count,
        seed=params.seed,
        thresholds=thresholds,
        worst_case=worst_case,
        best_case=best_case,
        settings=settings or AUTO_SHAPED_SETTINGS,
        started=started,
    )


run = run_auto_simulation
