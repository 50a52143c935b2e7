from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from core.config import EngineSettings
from core.presets import default_fixed_params
from core.schema import CustomRangesParams, Range
from distributions.prng import SeededRandom
from distributions.zones import ZoneMixture
from engine import run_auto_simulation, run_custom_simulation, run_fixed_simulation, run_simulation
from engine.runner import payout_value, run_batch


def _stat_chain(stats):
    return [stats.min, stats.p5, stats.p10, stats.p25, stats.median, stats.p75, stats.p90, stats.p95, stats.max]


def test_scenario_a_uniform_sanity(scenario_a_params, keep_values_settings):
    result = run_custom_simulation(scenario_a_params, settings=keep_values_settings)

    assert result.worst_case == pytest.approx((20e6 * 0.05) / 8888)
    assert result.best_case == pytest.approx((100e6 * 0.25) / 8888)
    assert np.all(result.values > 0)
    assert result.worst_case < result.stats.median < result.best_case
    assert len(result.values) == 200_000
    assert result.seed == 42


def test_scenario_b_fixed_formula_reproducible():
    params = default_fixed_params(seed=7, simulation_count=20_000)
    first = run_fixed_simulation(params)
    second = run_fixed_simulation(params)
    assert first.stats == second.stats
    assert np.array_equal(first.values, second.values)
    assert first.histogram == second.histogram
    assert first.threshold_probabilities == second.threshold_probabilities


@pytest.mark.parametrize("fixture_name", ["mixed_custom_params", "auto_params"])
def test_same_seed_same_result(request, fixture_name, keep_values_settings):
    params = request.getfixturevalue(fixture_name)
    first = run_simulation(params, settings=keep_values_settings)
    second = run_simulation(params, settings=keep_values_settings)
    assert np.array_equal(first.values, second.values)
    assert first.stats == second.stats


def test_different_seed_different_result(mixed_custom_params, keep_values_settings):
    first = run_simulation(mixed_custom_params, settings=keep_values_settings)
    second = run_simulation(replace(mixed_custom_params, seed=12), settings=keep_values_settings)
    assert not np.array_equal(first.values, second.values)


def test_self_selected_seed_is_reported_and_replays(mixed_custom_params, keep_values_settings):
    unseeded = replace(mixed_custom_params, seed=None)
    first = run_simulation(unseeded, settings=keep_values_settings)
    replay = run_simulation(replace(unseeded, seed=first.seed), settings=keep_values_settings)
    assert 0 <= first.seed < 2_147_483_647
    assert np.array_equal(first.values, replay.values)


@pytest.mark.parametrize("fixture_name", ["mixed_custom_params", "auto_params"])
def test_result_invariants(request, fixture_name):
    params = request.getfixturevalue(fixture_name)
    result = run_simulation(params, thresholds=[1, 60, 120, 300, 1000])

    chain = _stat_chain(result.stats)
    assert all(a <= b for a, b in zip(chain, chain[1:]))

    n = params.simulation_count
    counted = sum(b.count for b in result.histogram)
    assert counted <= n
    for b in result.histogram:
        assert b.density == pytest.approx(b.count / n)

    ordered = [result.threshold_probabilities[t] for t in (1, 60, 120, 300, 1000)]
    assert all(a >= b for a, b in zip(ordered, ordered[1:]))


def test_fixed_formula_output_shape():
    result = run_fixed_simulation(default_fixed_params(seed=1, simulation_count=5000))
    assert len(result.histogram) == 50
    assert result.stats.std_dev is not None
    assert result.stats.std_dev == pytest.approx(np.std(result.values))
    assert result.values is not None


def test_fixed_formula_anchors():
    params = default_fixed_params("base", seed=1, simulation_count=2000)
    result = run_fixed_simulation(params)
    assert result.worst_case == pytest.approx(100e6 * 0.01 / 8888)
    assert result.best_case == pytest.approx(1e9 * 0.06 / 8888)
    assert result.stats.max <= result.best_case * (1 + 1e-9)


def test_other_engines_output_shape(mixed_custom_params, auto_params):
    for result in (run_simulation(mixed_custom_params), run_simulation(auto_params)):
        assert len(result.histogram) == 40
        assert result.stats.std_dev is None
        assert result.values is None
        assert set(result.threshold_probabilities) == {60, 120, 300}


def test_custom_values_stay_within_anchors(mixed_custom_params, keep_values_settings):
    result = run_custom_simulation(mixed_custom_params, settings=keep_values_settings)
    assert result.worst_case == pytest.approx(20e6 * 0.02 / 5000)
    assert result.best_case == pytest.approx(300e6 * 0.40 / 5000)
    assert result.values.min() >= result.worst_case * (1 - 1e-9)
    assert result.values.max() <= result.best_case * (1 + 1e-9)


@pytest.mark.parametrize("fdv_design", ["absolute", "range_invariant"])
@pytest.mark.parametrize("drop_design", ["absolute", "range_invariant"])
def test_auto_designs_stay_within_anchors(auto_params, keep_values_settings, fdv_design, drop_design):
    params = replace(auto_params, fdv_design=fdv_design, drop_design=drop_design)
    result = run_auto_simulation(params, settings=keep_values_settings)
    assert result.values.min() >= result.worst_case * (1 - 1e-9)
    assert result.values.max() <= result.best_case * (1 + 1e-9)


def test_larger_supply_lowers_every_value(mixed_custom_params, keep_values_settings):
    small = run_simulation(mixed_custom_params, settings=keep_values_settings)
    large = run_simulation(replace(mixed_custom_params, supply_count=10_000), settings=keep_values_settings)
    assert np.all(large.values <= small.values)


def test_zero_supply_yields_non_finite_values_without_raising(keep_values_settings):
    params = CustomRangesParams(
        supply_count=0,
        fdv_ranges=(Range("f", 20, 100),),
        drop_ranges=(Range("d", 5, 25),),
        simulation_count=1000,
        seed=5,
    )
    with np.errstate(invalid="ignore"):
        result = run_custom_simulation(params, settings=keep_values_settings)
    assert not np.any(np.isfinite(result.values))
    assert not np.isfinite(result.worst_case)
    assert sum(b.count for b in result.histogram) == 0


def test_run_batch_draw_order():
    fdv = ZoneMixture.from_ranges([Range("f", 0, 1)])
    drop = ZoneMixture.from_ranges([Range("d", 0, 1)])
    values = run_batch(3, fdv.sample, drop.sample, 1, SeededRandom(9))

    rng = SeededRandom(9)
    expected = []
    for _ in range(3):
        rng.next()
        x = rng.next()
        rng.next()
        y = rng.next()
        expected.append(x * y)
    assert values.tolist() == expected


def test_payout_value():
    assert payout_value(100e6, 0.25, 8888) == pytest.approx(2812.781278)
    assert payout_value(1.0, 0.5, 0) == float("inf")


def test_custom_settings_override(mixed_custom_params):
    result = run_simulation(mixed_custom_params, settings=EngineSettings(histogram_bins=10, include_std_dev=True))
    assert len(result.histogram) == 10
    assert result.stats.std_dev is not None


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        run_simulation(object())
