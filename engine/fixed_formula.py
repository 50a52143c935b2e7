"""
Fixed-formula engine.

FDV:   two log-uniform ranges, A with probability fdv_prob_a, B otherwise
Drop:  uniform tail with probability drop_tail_prob, otherwise triangular
       over [drop_min, drop_max] (explicit mode, or the 20% auto-mode)

Both sides are two-zone mixtures; zone order puts range A first on the FDV
side and the tail first on the drop side.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence

from core.config import FIXED_FORMULA_SETTINGS, EngineSettings
from core.schema import FixedFormulaParams, SimulationResult, ValidationError, Zone
from distributions.zones import ZoneMixture
from validation.validators import validate_fixed_params

from .runner import execute_run, payout_value


def build_fdv_mixture(params: FixedFormulaParams) -> ZoneMixture:
    return ZoneMixture([
        Zone(min_val=params.fdv_min_a, max_val=params.fdv_max_a, weight=params.fdv_prob_a, shape="log_uniform"),
        Zone(min_val=params.fdv_min_b, max_val=params.fdv_max_b, weight=1.0 - params.fdv_prob_a, shape="log_uniform"),
    ])


def build_drop_mixture(params: FixedFormulaParams) -> ZoneMixture:
    return ZoneMixture([
        Zone(
            min_val=params.drop_tail_min,
            max_val=params.drop_tail_max,
            weight=params.drop_tail_prob,
            shape="uniform",
        ),
        Zone(
            min_val=params.drop_min,
            max_val=params.drop_max,
            weight=1.0 - params.drop_tail_prob,
            shape="triangular",
            mode=params.drop_mode,
        ),
    ])


def validate(params: FixedFormulaParams) -> List[ValidationError]:
    return validate_fixed_params(params)


def run_fixed_simulation(
    params: FixedFormulaParams,
    thresholds: Optional[Sequence[float]] = None,
    *,
    settings: Optional[EngineSettings] = None,
) -> SimulationResult:
    """
    Run the fixed-formula engine.

    Returns
    -------
    SimulationResult with std_dev set and the raw values retained
    (unless settings say otherwise).
    """
    started = time.perf_counter()
    fdv_mixture = build_fdv_mixture(params)
    drop_mixture = build_drop_mixture(params)

    # anchors: lowest FDV of range A at the triangular minimum, and the
    # highest FDV at the highest drop either drop zone allows
    worst_case = payout_value(params.fdv_min_a, params.drop_min, params.supply_count)
    best_case = payout_value(
        max(params.fdv_max_a, params.fdv_max_b),
        max(params.drop_max, params.drop_tail_max),
        params.supply_count,
    )

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
        settings=settings or FIXED_FORMULA_SETTINGS,
        started=started,
    )


run = run_fixed_simulation
