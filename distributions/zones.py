"""
Zone/mixture composer.

A ZoneMixture is built once per run from an ordered list of weighted zones.
Each call to sample() consumes one draw to pick a zone (first cumulative
weight >= u) and then one more draw for the within-zone inverse CDF
(truncated-normal zones then keep drawing until accepted).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from core.config import WEIGHT_TOLERANCE
from core.schema import Range, Zone

from .prng import SeededRandom
from .samplers import (
    sample_linear_decreasing,
    sample_linear_increasing,
    sample_log_uniform,
    sample_plateau_then_decline,
    sample_triangular,
    sample_truncated_exponential,
    sample_truncated_normal,
    sample_uniform,
)

logger = logging.getLogger(__name__)

# user-facing range shapes → composer zone shapes
_RANGE_SHAPES = {
    "uniform": "uniform",
    "linear_increasing": "linear_increasing",
    "linear_decreasing": "linear_decreasing",
    "prediction_centric": "truncated_normal",
}


def normalize_weights(weights: Sequence[float]) -> List[float]:
    """Rescale to sum to 1 unless already within tolerance. All-zero input is returned as-is."""
    total = sum(weights)
    if total > 0 and abs(total - 1.0) > WEIGHT_TOLERANCE:
        return [w / total for w in weights]
    return list(weights)


def cumulative_weights(weights: Sequence[float]) -> List[float]:
    out: List[float] = []
    running = 0.0
    for w in weights:
        running += w
        out.append(running)
    return out


def select_zone_index(cumulative: Sequence[float], u: float) -> int:
    """
    First index whose cumulative weight is >= u. Ties go to the earliest zone;
    float drift at the top end falls through to the last zone.
    """
    for i, c in enumerate(cumulative):
        if u <= c:
            return i
    return len(cumulative) - 1


def width_proportional_weights(ranges: Sequence[Range]) -> List[float]:
    widths = [r.max_val - r.min_val for r in ranges]
    total_width = sum(widths)
    if total_width == 0:
        return [1.0 / len(ranges)] * len(ranges)
    return [w / total_width for w in widths]


def uses_explicit_weights(ranges: Sequence[Range]) -> bool:
    return any(r.weight is not None for r in ranges)


def compute_total_weight(ranges: Sequence[Range]) -> float:
    """Sum of explicit weights (unset counts as 0)."""
    return float(sum(r.weight or 0.0 for r in ranges))


def has_valid_weights(ranges: Sequence[Range]) -> bool:
    return any((r.weight or 0.0) > 0 for r in ranges)


def range_weights(ranges: Sequence[Range]) -> List[float]:
    """Explicit weights when any range sets one, else width-proportional."""
    if uses_explicit_weights(ranges):
        return [float(r.weight or 0.0) for r in ranges]
    return width_proportional_weights(ranges)


def zones_from_ranges(ranges: Sequence[Range]) -> List[Zone]:
    """Turn user ranges into composer zones (same units as the ranges)."""
    weights = range_weights(ranges)
    zones = []
    for r, w in zip(ranges, weights):
        shape = _RANGE_SHAPES.get(r.distribution_type, "uniform")
        if shape == "truncated_normal":
            zones.append(Zone(
                min_val=r.min_val,
                max_val=r.max_val,
                weight=w,
                shape=shape,
                expected_min=r.expected_min if r.expected_min is not None else r.min_val,
                expected_max=r.expected_max if r.expected_max is not None else r.max_val,
            ))
        else:
            zones.append(Zone(min_val=r.min_val, max_val=r.max_val, weight=w, shape=shape))
    return zones


def sample_zone(zone: Zone, u: float, rng: SeededRandom) -> float:
    shape = zone.shape
    if shape == "uniform":
        return sample_uniform(zone.min_val, zone.max_val, u)
    if shape == "linear_decreasing":
        return sample_linear_decreasing(zone.min_val, zone.max_val, u)
    if shape == "linear_increasing":
        return sample_linear_increasing(zone.min_val, zone.max_val, u)
    if shape == "log_uniform":
        return sample_log_uniform(zone.min_val, zone.max_val, u)
    if shape == "triangular":
        return sample_triangular(zone.min_val, zone.max_val, u, mode=zone.mode)
    if shape == "truncated_normal":
        # u is spent; rejection draws its own pairs
        return sample_truncated_normal(
            zone.min_val, zone.max_val, zone.expected_min, zone.expected_max, rng
        )
    if shape == "truncated_exponential":
        return sample_truncated_exponential(zone.min_val, zone.max_val, u, zone.decay_rate)
    if shape == "plateau_then_decline":
        return sample_plateau_then_decline(zone.min_val, zone.max_val, u, zone.plateau_fraction)
    return sample_uniform(zone.min_val, zone.max_val, u)


class ZoneMixture:
    """
    Weighted mixture of zones with a precomputed cumulative-weight table.

    Usage:
        mixture = ZoneMixture([Zone(0, 10, 0.7, "uniform"), Zone(10, 50, 0.3, "linear_decreasing")])
        x = mixture.sample(rng)
    """

    def __init__(self, zones: Sequence[Zone]):
        if not zones:
            raise ValueError("A mixture needs at least one zone.")
        weights = normalize_weights([z.weight for z in zones])
        self.zones: List[Zone] = [replace(z, weight=w) for z, w in zip(zones, weights)]
        self.cumulative: List[float] = cumulative_weights(weights)

    @classmethod
    def from_ranges(cls, ranges: Sequence[Range]) -> "ZoneMixture":
        return cls(zones_from_ranges(ranges))

    def __len__(self) -> int:
        return len(self.zones)

    @property
    def weights(self) -> List[float]:
        return [z.weight for z in self.zones]

    @property
    def lower_bound(self) -> float:
        return min(z.min_val for z in self.zones)

    @property
    def upper_bound(self) -> float:
        return max(z.max_val for z in self.zones)

    def select(self, u: float) -> Zone:
        return self.zones[select_zone_index(self.cumulative, u)]

    def sample(self, rng: SeededRandom) -> float:
        zone = self.select(rng.next())
        return sample_zone(zone, rng.next(), rng)


def drop_empty_zones(zones: Sequence[Optional[Zone]]) -> List[Zone]:
    """
    Remove absent (None) or zero-width zones before weights are normalized.
    A span with no usable zone keeps its first zone as-is; sampling a degenerate
    span yields degenerate numbers rather than an exception.
    """
    present = [z for z in zones if z is not None]
    kept = [z for z in present if z.max_val > z.min_val]
    if not kept:
        return present[:1]
    if len(kept) != len(zones):
        logger.debug("Dropped %d empty zone(s); %d remain.", len(zones) - len(kept), len(kept))
    return kept
