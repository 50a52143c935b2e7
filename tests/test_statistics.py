from __future__ import annotations

import numpy as np
import pytest

from analytics.histogram import log_histogram, threshold_probabilities
from analytics.statistics import compute_stats, percentile, population_std


@pytest.fixture
def lognormal_values():
    return np.random.default_rng(12).lognormal(mean=4.0, sigma=1.2, size=20_000)


class TestPercentile:
    def test_interpolates_between_ranks(self):
        values = np.array([10.0, 20.0, 30.0, 40.0])
        # rank = 0.5 * 3 = 1.5
        assert percentile(values, 50) == 25.0
        assert percentile(values, 0) == 10.0
        assert percentile(values, 100) == 40.0

    def test_matches_numpy_linear_method(self, lognormal_values):
        sorted_values = np.sort(lognormal_values)
        for p in (5, 10, 25, 50, 75, 90, 95):
            assert percentile(sorted_values, p) == pytest.approx(np.percentile(lognormal_values, p))

    def test_single_value(self):
        assert percentile(np.array([3.5]), 90) == 3.5


class TestComputeStats:
    def test_order_statistics_are_monotone(self, lognormal_values):
        stats = compute_stats(lognormal_values, np.sort(lognormal_values))
        chain = [stats.min, stats.p5, stats.p10, stats.p25, stats.median, stats.p75, stats.p90, stats.p95, stats.max]
        assert all(a <= b for a, b in zip(chain, chain[1:]))
        assert stats.min <= stats.mean <= stats.max

    def test_std_dev_only_on_request(self, lognormal_values):
        sorted_values = np.sort(lognormal_values)
        assert compute_stats(lognormal_values, sorted_values).std_dev is None
        with_std = compute_stats(lognormal_values, sorted_values, include_std_dev=True)
        assert with_std.std_dev == pytest.approx(np.std(lognormal_values))
        assert "std_dev" in with_std.as_dict()

    def test_population_std(self):
        values = np.array([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        assert population_std(values, 5.0) == 2.0


class TestLogHistogram:
    def test_counts_are_conserved(self, lognormal_values):
        sorted_values = np.sort(lognormal_values)
        bins = log_histogram(sorted_values, 40)
        assert len(bins) == 40
        assert sum(b.count for b in bins) == len(sorted_values)
        assert sum(b.density for b in bins) == pytest.approx(1.0)

    def test_edges_are_contiguous_and_span_the_data(self, lognormal_values):
        sorted_values = np.sort(lognormal_values)
        bins = log_histogram(sorted_values, 50)
        for left, right in zip(bins, bins[1:]):
            assert left.bin_end == pytest.approx(right.bin_start)
        assert bins[0].bin_start == pytest.approx(sorted_values[0])
        assert bins[-1].bin_end == pytest.approx(sorted_values[-1])

    def test_edges_are_log_spaced(self):
        bins = log_histogram(np.array([1.0, 10.0, 100.0, 1000.0]), 3)
        assert [b.bin_start for b in bins] == pytest.approx([1.0, 10.0, 100.0])
        assert [b.count for b in bins] == [1, 1, 2]

    def test_values_below_floor_are_dropped_but_counted_in_density(self):
        sorted_values = np.array([0.001, 0.005, 1.0, 10.0])
        bins = log_histogram(sorted_values, 4)
        assert bins[0].bin_start == pytest.approx(0.01)
        assert sum(b.count for b in bins) == 2
        assert sum(b.density for b in bins) == pytest.approx(0.5)

    def test_identical_values_land_in_first_bin(self):
        bins = log_histogram(np.full(100, 5.0), 10)
        assert bins[0].count == 100
        assert all(b.count == 0 for b in bins[1:])


class TestThresholdProbabilities:
    def test_survival_counts_ties(self):
        sorted_values = np.array([10.0, 60.0, 60.0, 120.0, 500.0])
        probs = threshold_probabilities(sorted_values, [60, 120, 300, 1000])
        assert probs == {60: 0.8, 120: 0.4, 300: 0.2, 1000: 0.0}

    def test_below_minimum_is_certain(self):
        assert threshold_probabilities(np.array([5.0, 6.0]), [1]) == {1: 1.0}

    def test_non_increasing_in_threshold(self, lognormal_values):
        sorted_values = np.sort(lognormal_values)
        thresholds = [1, 10, 30, 60, 120, 300, 1000]
        probs = threshold_probabilities(sorted_values, thresholds)
        ordered = [probs[t] for t in thresholds]
        assert all(a >= b for a, b in zip(ordered, ordered[1:]))
        assert all(0.0 <= p <= 1.0 for p in ordered)

    def test_empty_thresholds(self):
        assert threshold_probabilities(np.array([1.0]), []) == {}
