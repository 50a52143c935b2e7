from __future__ import annotations

import itertools

import pytest

from core.config import EngineSettings
from core.schema import AutoShapedParams, CustomRangesParams, Range


@pytest.fixture
def counter_ids():
    counter = itertools.count(1)
    return lambda: f"r{next(counter)}"


@pytest.fixture
def keep_values_settings():
    return EngineSettings(histogram_bins=40, keep_values=True)


@pytest.fixture
def scenario_a_params():
    return CustomRangesParams(
        supply_count=8888,
        fdv_ranges=(Range(id="fdv", min_val=20, max_val=100, distribution_type="uniform"),),
        drop_ranges=(Range(id="drop", min_val=5, max_val=25, distribution_type="linear_decreasing"),),
        simulation_count=200_000,
        seed=42,
    )


@pytest.fixture
def mixed_custom_params():
    return CustomRangesParams(
        supply_count=5000,
        fdv_ranges=(
            Range(id="a", min_val=20, max_val=60, distribution_type="linear_decreasing"),
            Range(
                id="b",
                min_val=60,
                max_val=300,
                distribution_type="prediction_centric",
                expected_min=100,
                expected_max=150,
            ),
        ),
        drop_ranges=(
            Range(id="c", min_val=2, max_val=10, distribution_type="linear_increasing", weight=70),
            Range(id="d", min_val=10, max_val=40, distribution_type="uniform", weight=30),
        ),
        simulation_count=5000,
        seed=11,
    )


@pytest.fixture
def auto_params():
    return AutoShapedParams(
        supply_count=8888,
        fdv_min_m=20,
        fdv_max_m=400,
        drop_min_pct=5,
        drop_max_pct=50,
        simulation_count=5000,
        seed=3,
    )
