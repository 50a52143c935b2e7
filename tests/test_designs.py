from __future__ import annotations

import pytest

from distributions.designs import (
    DROP_ABSOLUTE_BOUNDS,
    drop_bounds,
    drop_zones,
    drop_zones_absolute,
    drop_zones_range_invariant,
    fdv_zones,
    fdv_zones_absolute,
    fdv_zones_range_invariant,
)
from distributions.prng import SeededRandom
from distributions.zones import ZoneMixture

M = 1_000_000


def _spans(zones):
    return [(z.min_val, z.max_val) for z in zones]


class TestFdvAbsolute:
    def test_no_tail_below_threshold(self):
        zones = fdv_zones_absolute(20 * M, 200 * M)
        assert _spans(zones) == [(20 * M, 50 * M), (50 * M, 200 * M)]
        assert [z.shape for z in zones] == ["uniform", "linear_decreasing"]

    def test_tail_appears_above_threshold(self):
        zones = fdv_zones_absolute(20 * M, 400 * M)
        assert _spans(zones) == [(20 * M, 50 * M), (50 * M, 200 * M), (200 * M, 300 * M)]
        assert [z.weight for z in zones] == [0.75, 0.24, 0.01]

    def test_narrow_span_keeps_only_the_first_band(self):
        zones = fdv_zones_absolute(10 * M, 30 * M)
        assert _spans(zones) == [(10 * M, 30 * M)]

    def test_tail_never_starts_below_the_first_band(self):
        zones = fdv_zones_absolute(250 * M, 400 * M)
        assert _spans(zones) == [(250 * M, 280 * M), (280 * M, 300 * M)]

    def test_weights_renormalize_when_a_zone_is_absent(self):
        mixture = ZoneMixture(fdv_zones_absolute(20 * M, 200 * M))
        assert mixture.weights == pytest.approx([0.75 / 0.99, 0.24 / 0.99])


class TestFdvRangeInvariant:
    def test_reference_span_reproduces_absolute_boundaries(self):
        zones = fdv_zones_range_invariant(20 * M, 300 * M)
        assert [z.min_val for z in zones] == pytest.approx([20 * M, 50 * M, 200 * M])
        assert [z.max_val for z in zones] == pytest.approx([50 * M, 200 * M, 300 * M])

    def test_boundaries_scale_with_span(self):
        zones = fdv_zones_range_invariant(0.0, 28.0)
        assert [z.max_val for z in zones] == pytest.approx([3.0, 18.0, 28.0])

    def test_dispatch(self):
        assert fdv_zones(20 * M, 300 * M, "range_invariant") == fdv_zones_range_invariant(20 * M, 300 * M)
        assert fdv_zones(20 * M, 300 * M) == fdv_zones_absolute(20 * M, 300 * M)


class TestDrop:
    def test_absolute_design_is_fixed(self):
        zones = drop_zones_absolute()
        assert _spans(zones) == [(0.05, 0.10), (0.10, 0.20), (0.20, 0.50)]
        assert [z.shape for z in zones] == [
            "linear_increasing",
            "plateau_then_decline",
            "truncated_exponential",
        ]
        assert zones[2].decay_rate == 10.0

    def test_absolute_design_ignores_user_bounds(self):
        assert drop_zones(0.01, 0.02, "absolute") == drop_zones_absolute()
        assert drop_bounds(0.01, 0.02, "absolute") == DROP_ABSOLUTE_BOUNDS

    def test_range_invariant_splits(self):
        zones = drop_zones_range_invariant(0.05, 0.50)
        assert [z.min_val for z in zones] == pytest.approx([0.05, 0.10, 0.25])
        assert [z.weight for z in zones] == [0.50, 0.40, 0.10]

    def test_range_invariant_decay_scales_with_tail_width(self):
        zones = drop_zones_range_invariant(0.05, 0.50)
        tail = zones[2]
        assert tail.decay_rate * (tail.max_val - tail.min_val) == pytest.approx(3.0)

    def test_default_design_is_range_invariant(self):
        assert drop_zones(0.02, 0.2) == drop_zones_range_invariant(0.02, 0.2)
        assert drop_bounds(0.02, 0.2) == (0.02, 0.2)


@pytest.mark.parametrize("design", ["absolute", "range_invariant"])
def test_design_samples_stay_in_span(design):
    mixture = ZoneMixture(drop_zones(0.05, 0.50, design))
    rng = SeededRandom(21)
    for _ in range(20_000):
        assert 0.05 <= mixture.sample(rng) <= 0.50


def test_degenerate_span_still_builds_a_mixture():
    zones = fdv_zones_range_invariant(50 * M, 50 * M)
    assert len(zones) == 1
    assert ZoneMixture(zones).sample(SeededRandom(1)) == 50 * M
