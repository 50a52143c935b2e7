"""
Primitive inverse-CDF samplers.

Each sampler maps one uniform draw u in [0, 1) (plus shape parameters) to a
value on [min_val, max_val]. The truncated normal is the exception: it needs
a variable number of draws for rejection, so it takes the generator itself.

Degenerate spans (max_val <= min_val) are the caller's problem; the zone
builders and validators keep them out of here. Where a closed form would
divide by a vanishing width we fall back to the uniform sampler.
"""

from __future__ import annotations

import math
from typing import Optional

from core.config import MIN_ZONE_WIDTH, TRUNCATED_NORMAL_MAX_ATTEMPTS

from .prng import SeededRandom

# triangular auto-mode sits at 20% of the span (biased toward the low end)
AUTO_MODE_FRACTION = 0.20


def sample_uniform(min_val: float, max_val: float, u: float) -> float:
    return min_val + u * (max_val - min_val)


def sample_linear_decreasing(min_val: float, max_val: float, u: float) -> float:
    """
    PDF ∝ (max - x): densest at min, zero at max.
    CDF:  F(x) = 1 - ((max - x) / (max - min))^2
    """
    width = max_val - min_val
    return max_val - math.sqrt(width * width * (1.0 - u))


def sample_linear_increasing(min_val: float, max_val: float, u: float) -> float:
    """
    PDF ∝ (x - min): zero at min, densest at max.
    CDF:  F(x) = ((x - min) / (max - min))^2
    """
    width = max_val - min_val
    return min_val + width * math.sqrt(u)


def sample_log_uniform(min_val: float, max_val: float, u: float) -> float:
    """Uniform in log space; both bounds must be positive."""
    log_min = math.log(min_val)
    log_max = math.log(max_val)
    return math.exp(log_min + u * (log_max - log_min))


def auto_mode(min_val: float, max_val: float) -> float:
    return min_val + AUTO_MODE_FRACTION * (max_val - min_val)


def sample_triangular(
    min_val: float,
    max_val: float,
    u: float,
    mode: Optional[float] = None,
) -> float:
    """Two-branch triangular inverse CDF; mode=None uses the auto-mode."""
    width = max_val - min_val
    if width < MIN_ZONE_WIDTH:
        return sample_uniform(min_val, max_val, u)
    if mode is None:
        mode = auto_mode(min_val, max_val)

    fc = (mode - min_val) / width
    if u < fc:
        return min_val + math.sqrt(u * width * (mode - min_val))
    return max_val - math.sqrt((1.0 - u) * width * (max_val - mode))


def box_muller(u1: float, u2: float) -> float:
    """One standard normal deviate from two uniforms (u1 must be > 0)."""
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def truncated_normal_std(
    min_val: float,
    max_val: float,
    expected_min: float,
    expected_max: float,
) -> float:
    """
    σ = half-width of the expected band, so ~68% of the untruncated normal
    lands inside it. A collapsed band falls back to a quarter of the range.
    """
    half_range = (expected_max - expected_min) / 2.0
    return half_range if half_range > 0 else (max_val - min_val) / 4.0


def sample_truncated_normal(
    min_val: float,
    max_val: float,
    expected_min: float,
    expected_max: float,
    rng: SeededRandom,
    *,
    max_attempts: int = TRUNCATED_NORMAL_MAX_ATTEMPTS,
) -> float:
    """
    Bell curve centred on the expected band, truncated to [min_val, max_val]
    by rejection. Each attempt consumes two draws. After max_attempts the
    clamped mean is returned.
    """
    mean = (expected_min + expected_max) / 2.0
    std = truncated_normal_std(min_val, max_val, expected_min, expected_max)

    for _ in range(max_attempts):
        u1 = rng.next()
        u2 = rng.next()
        if u1 <= 0.0:
            # infinite deviate, never inside the bounds
            continue
        sample = mean + box_muller(u1, u2) * std
        if min_val <= sample <= max_val:
            return sample

    return max(min_val, min(max_val, mean))


def sample_truncated_exponential(
    min_val: float,
    max_val: float,
    u: float,
    decay_rate: float,
) -> float:
    """
    Exponential decay from min_val, truncated to the zone:
    F(x) = (1 - exp(-λ(x - min))) / (1 - exp(-λ(max - min)))
    """
    width = max_val - min_val
    mass = 1.0 - math.exp(-decay_rate * width)
    sample = min_val - math.log(1.0 - u * mass) / decay_rate
    return min(max(sample, min_val), max_val)


def sample_plateau_then_decline(
    min_val: float,
    max_val: float,
    u: float,
    plateau_fraction: float,
) -> float:
    """
    Flat density over the leading plateau_fraction of the zone, then a linear
    ramp down to zero at max_val. The plateau is picked with probability equal
    to its share of the total area; u is rescaled into the chosen piece.
    """
    width = max_val - min_val
    if width < MIN_ZONE_WIDTH:
        return sample_uniform(min_val, max_val, u)

    plateau_end = min_val + plateau_fraction * width
    flat_area = plateau_end - min_val
    decline_area = 0.5 * (max_val - plateau_end)
    flat_weight = flat_area / (flat_area + decline_area)

    if u < flat_weight:
        return sample_uniform(min_val, plateau_end, u / flat_weight)
    u_norm = (u - flat_weight) / (1.0 - flat_weight)
    return sample_linear_decreasing(plateau_end, max_val, u_norm)
