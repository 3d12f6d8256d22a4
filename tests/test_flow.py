"""Regional flow estimation and design-flow adjustments."""

from __future__ import annotations

import pytest

from culvert_sizer import CulvertSizingInput, Region
from culvert_sizer.flow import (
    DesignFlow,
    DischargeTableFlowEstimator,
    RegressionFlowEstimator,
    baseline_rainfall,
    climate_factor,
    estimate_design_flow,
    interpolate_table,
    safety_factor_for_gradient,
)

from .sample_data import build_example_input


def test_regression_uses_square_kilometres() -> None:
    estimator = RegressionFlowEstimator()
    assert estimator.estimate(50.0, Region.COASTAL) == pytest.approx(0.92 * 0.5**0.78)
    assert estimator.estimate(100.0, Region.INTERIOR) == pytest.approx(0.74)


def test_regression_grows_with_area() -> None:
    estimator = RegressionFlowEstimator()
    flows: list[float] = [estimator.estimate(area, Region.NORTHERN) for area in (10, 50, 100, 500, 5000)]
    assert flows == sorted(flows)


def test_discharge_table_interpolates_and_clamps() -> None:
    estimator = DischargeTableFlowEstimator()
    # 7.5 km² sits halfway between the 5 and 10 km² breakpoints.
    assert estimator.estimate(750.0, Region.COASTAL) == pytest.approx((1.1 + 1.8) / 2)
    assert estimator.estimate(1.0, Region.COASTAL) == pytest.approx(0.3)
    assert estimator.estimate(500_000.0, Region.COASTAL) == pytest.approx(59.6)


def test_interpolate_table_rejects_empty_table() -> None:
    with pytest.raises(ValueError):
        interpolate_table((), 1.0)


def test_climate_factor_never_below_floor() -> None:
    assert climate_factor(None, Region.COASTAL) == pytest.approx(1.1)
    assert climate_factor(30.0, Region.COASTAL) == pytest.approx(1.1)
    assert climate_factor(90.0, Region.INTERIOR) == pytest.approx(2.0)
    assert baseline_rainfall(None) == pytest.approx(55.0)


@pytest.mark.parametrize(
    ("gradient", "expected"),
    [(0.0, 1.1), (3.0, 1.1), (3.1, 1.2), (8.0, 1.2), (8.5, 1.3), (25.0, 1.3)],
)
def test_safety_factor_bands(gradient: float, expected: float) -> None:
    assert safety_factor_for_gradient(gradient) == pytest.approx(expected)


def test_design_flow_applies_climate_then_safety() -> None:
    sizing_input: CulvertSizingInput = build_example_input(use_climate_factors=True, projected_rainfall=78.0)
    flow: DesignFlow = estimate_design_flow(sizing_input)
    assert flow.climate_factor == pytest.approx(1.2)
    assert flow.safety_factor == pytest.approx(1.1)
    assert flow.design_flow == pytest.approx(flow.base_flow * 1.2 * 1.1)


def test_climate_factors_never_decrease_design_flow() -> None:
    for rainfall in (None, 10.0, 65.0, 120.0):
        disabled: DesignFlow = estimate_design_flow(build_example_input())
        enabled: DesignFlow = estimate_design_flow(
            build_example_input(use_climate_factors=True, projected_rainfall=rainfall)
        )
        assert enabled.design_flow >= disabled.design_flow


def test_estimator_strategy_is_swappable() -> None:
    sizing_input: CulvertSizingInput = build_example_input()
    table_flow: DesignFlow = estimate_design_flow(sizing_input, DischargeTableFlowEstimator())
    # 0.5 km² is below the first breakpoint, so the first value applies.
    assert table_flow.base_flow == pytest.approx(0.3)
    assert table_flow.design_flow == pytest.approx(0.33)
