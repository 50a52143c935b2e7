"""
Fixed three-zone designs for the auto-shaped engine.

Weights and shapes are not user-configurable. Boundaries come in two flavours:
  absolute        : fixed dollar / percentage thresholds
  range_invariant : fixed fractions of the user's min–max span, so resizing
                    the span keeps the qualitative shape

FDV (currency units):
  A  high-probability band near the minimum   uniform             0.75
  B  declining middle band                     linear decreasing   0.24
  C  ultra-rare tail                           uniform             0.01

Drop % (decimal fractions):
  A  psychological floor                       linear increasing   0.50
  B  success & balance                         plateau then decline 0.40
  C  generosity spike                          truncated exponential 0.10
"""

from __future__ import annotations

from typing import List, Tuple

from core.schema import Zone, ZoneDesign

from .zones import drop_empty_zones

FDV_ZONE_WEIGHTS: Tuple[float, float, float] = (0.75, 0.24, 0.01)
DROP_ZONE_WEIGHTS: Tuple[float, float, float] = (0.50, 0.40, 0.10)

# absolute FDV design
FDV_BAND_WIDTH = 30_000_000
FDV_TAIL_THRESHOLD = 200_000_000
FDV_TAIL_CAP = 300_000_000

# range-invariant FDV design: the absolute design laid over a $20M-$300M span
FDV_ZONE_SPLITS: Tuple[float, float] = (3 / 28, 9 / 14)

# absolute drop design, decimals
DROP_FLOOR = (0.05, 0.10)
DROP_BALANCE = (0.10, 0.20)
DROP_SPIKE = (0.20, 0.50)
DROP_ABSOLUTE_BOUNDS = (0.05, 0.50)

# range-invariant drop design: 5/10/20/50 expressed as fractions of a 5%-50% span
DROP_ZONE_SPLITS: Tuple[float, float] = (1 / 9, 4 / 9)

# the flat part of zone B (10%-12% of 10%-20% in the absolute design)
BALANCE_PLATEAU_FRACTION = 0.2
SPIKE_DECAY_RATE = 10.0
# rate × zone width of the absolute spike; keeps the tail shape when rescaled
SPIKE_DECAY_SPAN = SPIKE_DECAY_RATE * (DROP_SPIKE[1] - DROP_SPIKE[0])


def fdv_zones_absolute(fdv_min: float, fdv_max: float) -> List[Zone]:
    w_a, w_b, w_c = FDV_ZONE_WEIGHTS

    a_max = min(fdv_min + FDV_BAND_WIDTH, fdv_max)
    zone_a = Zone(min_val=fdv_min, max_val=a_max, weight=w_a, shape="uniform")

    b_max = min(fdv_max, FDV_TAIL_THRESHOLD)
    zone_b = Zone(min_val=a_max, max_val=b_max, weight=w_b, shape="linear_decreasing")

    zone_c = None
    if fdv_max > FDV_TAIL_THRESHOLD:
        # never start the tail below the user's own band
        c_min = max(FDV_TAIL_THRESHOLD, a_max)
        zone_c = Zone(min_val=c_min, max_val=min(fdv_max, FDV_TAIL_CAP), weight=w_c, shape="uniform")

    return drop_empty_zones([zone_a, zone_b, zone_c])


def fdv_zones_range_invariant(fdv_min: float, fdv_max: float) -> List[Zone]:
    w_a, w_b, w_c = FDV_ZONE_WEIGHTS
    span = fdv_max - fdv_min
    a_max = fdv_min + FDV_ZONE_SPLITS[0] * span
    b_max = fdv_min + FDV_ZONE_SPLITS[1] * span
    return drop_empty_zones([
        Zone(min_val=fdv_min, max_val=a_max, weight=w_a, shape="uniform"),
        Zone(min_val=a_max, max_val=b_max, weight=w_b, shape="linear_decreasing"),
        Zone(min_val=b_max, max_val=fdv_max, weight=w_c, shape="uniform"),
    ])


def drop_zones_absolute() -> List[Zone]:
    w_a, w_b, w_c = DROP_ZONE_WEIGHTS
    return [
        Zone(min_val=DROP_FLOOR[0], max_val=DROP_FLOOR[1], weight=w_a, shape="linear_increasing"),
        Zone(
            min_val=DROP_BALANCE[0],
            max_val=DROP_BALANCE[1],
            weight=w_b,
            shape="plateau_then_decline",
            plateau_fraction=BALANCE_PLATEAU_FRACTION,
        ),
        Zone(
            min_val=DROP_SPIKE[0],
            max_val=DROP_SPIKE[1],
            weight=w_c,
            shape="truncated_exponential",
            decay_rate=SPIKE_DECAY_RATE,
        ),
    ]


def drop_zones_range_invariant(drop_min: float, drop_max: float) -> List[Zone]:
    w_a, w_b, w_c = DROP_ZONE_WEIGHTS
    span = drop_max - drop_min
    a_max = drop_min + DROP_ZONE_SPLITS[0] * span
    b_max = drop_min + DROP_ZONE_SPLITS[1] * span
    spike_width = drop_max - b_max
    decay_rate = SPIKE_DECAY_SPAN / spike_width if spike_width > 0 else SPIKE_DECAY_RATE
    return drop_empty_zones([
        Zone(min_val=drop_min, max_val=a_max, weight=w_a, shape="linear_increasing"),
        Zone(
            min_val=a_max,
            max_val=b_max,
            weight=w_b,
            shape="plateau_then_decline",
            plateau_fraction=BALANCE_PLATEAU_FRACTION,
        ),
        Zone(
            min_val=b_max,
            max_val=drop_max,
            weight=w_c,
            shape="truncated_exponential",
            decay_rate=decay_rate,
        ),
    ])


def fdv_zones(fdv_min: float, fdv_max: float, design: ZoneDesign = "absolute") -> List[Zone]:
    if design == "range_invariant":
        return fdv_zones_range_invariant(fdv_min, fdv_max)
    return fdv_zones_absolute(fdv_min, fdv_max)


def drop_zones(drop_min: float, drop_max: float, design: ZoneDesign = "range_invariant") -> List[Zone]:
    if design == "absolute":
        return drop_zones_absolute()
    return drop_zones_range_invariant(drop_min, drop_max)


def drop_bounds(drop_min: float, drop_max: float, design: ZoneDesign = "range_invariant") -> Tuple[float, float]:
    """Effective (min, max) drop fraction the design can produce."""
    if design == "absolute":
        return DROP_ABSOLUTE_BOUNDS
    return drop_min, drop_max
