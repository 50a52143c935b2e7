"""
Distributions package — random draws and the shapes they are pushed through.

  1. prng.py      — seeded, reproducible xorshift generator
  2. samplers.py  — inverse-CDF samplers for each supported shape
  3. zones.py     — weighted zone mixtures (selection + within-zone sampling)
  4. designs.py   — the fixed 3-zone designs of the auto-shaped engine
  5. density.py   — per-range density previews for display
"""

from .prng import SeededRandom
from .zones import ZoneMixture, compute_total_weight, has_valid_weights
from .designs import drop_zones, fdv_zones
from .density import preview_densities, density_label

__all__ = [
    "SeededRandom",
    "ZoneMixture",
    "compute_total_weight",
    "has_valid_weights",
    "drop_zones",
    "fdv_zones",
    "preview_densities",
    "density_label",
]
