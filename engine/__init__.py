"""
Simulation engine — batch runner plus three front-ends that differ only in
how parameters become distributions:

  fixed_formula  — log-uniform FDV mixture × triangular/tail drop mixture
  custom_ranges  — user-defined ranges per side
  auto_shaped    — fixed 3-zone designs over a min/max per side
"""

from __future__ import annotations

from typing import Optional, Sequence

from core.config import EngineSettings
from core.schema import SimulationParams, SimulationResult
from validation.validators import validate_params

from .auto_shaped import run_auto_simulation
from .custom_ranges import run_custom_simulation
from .fixed_formula import run_fixed_simulation

_RUNNERS = {
    "fixed_formula": run_fixed_simulation,
    "custom_ranges": run_custom_simulation,
    "auto_shaped": run_auto_simulation,
}


def run_simulation(
    params: SimulationParams,
    thresholds: Optional[Sequence[float]] = None,
    *,
    settings: Optional[EngineSettings] = None,
) -> SimulationResult:
    """
    Run whichever engine params.kind names. Call validate_params first:
    the engines assume well-formed input.
    """
    kind = getattr(params, "kind", None)
    if not isinstance(kind, str) or kind not in _RUNNERS:
        raise ValueError(
            f"Unknown parameter kind {kind!r}. "
            f"Available: {list(_RUNNERS.keys())}"
        )
    return _RUNNERS[kind](params, thresholds, settings=settings)


__all__ = [
    "run_simulation",
    "run_fixed_simulation",
    "run_custom_simulation",
    "run_auto_simulation",
    "validate_params",
]
