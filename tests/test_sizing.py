"""End-to-end sizing behaviour of `compute_culvert_sizing`."""

from __future__ import annotations

import pytest

from culvert_sizer import (
    ControllingFactor,
    CulvertMaterial,
    CulvertSizingInput,
    CulvertSizingResult,
    CulvertType,
    DischargeTableFlowEstimator,
    SizingMethod,
    StreamGeometry,
    ValidationError,
    compute_culvert_sizing,
    determine_controlling_factor,
)
from culvert_sizer.solver import box_capacity, round_capacity
from culvert_sizer.tables import STANDARD_DIAMETERS

from .sample_data import build_example_input, build_narrow_input


def test_example_scenario() -> None:
    sizing_input: CulvertSizingInput = build_example_input()
    result: CulvertSizingResult = compute_culvert_sizing(sizing_input)

    assert sizing_input.stream_geometry.cross_sectional_area == pytest.approx(0.75)
    assert sizing_input.stream_geometry.width_to_depth_ratio == pytest.approx(4.0)
    assert result.base_flow == pytest.approx(0.92 * 0.5**0.78)
    assert result.design_flow == pytest.approx(result.base_flow * 1.1)
    assert result.design_flow > 0
    assert result.climate_factor == 1.0
    assert result.safety_factor == pytest.approx(1.1)
    assert result.recommended_size in STANDARD_DIAMETERS
    assert result.recommended_size == 2000
    assert result.method is SizingMethod.MANNING
    assert result.culvert_type is CulvertType.BOX
    assert (result.box_width, result.box_height) == (2000, 800)
    assert result.capacity.max_flow >= result.design_flow
    assert not result.capacity_capped
    assert not result.transportable
    assert result.transportability_size is None
    assert result.controlling_factor is ControllingFactor.OUTLET
    assert result.risk_factors == ()


def test_example_scenario_with_transportability() -> None:
    hydraulic: CulvertSizingResult = compute_culvert_sizing(build_example_input())
    result: CulvertSizingResult = compute_culvert_sizing(build_example_input(use_transportability=True))

    assert result.transportability_size == 600
    assert result.recommended_size == max(hydraulic.recommended_size, 600)
    assert result.method is SizingMethod.MANNING
    assert "Transportability: 600 mm" in result.comparison_info


def test_transportability_dominates_small_hydraulic_size() -> None:
    geometry = StreamGeometry.from_measurements(top_widths=[0.6], bottom_width=0.3, depths=[0.3])
    sizing_input: CulvertSizingInput = build_example_input(
        drainage_area=2.0,
        stream_gradient=12.0,
        culvert_material=CulvertMaterial.HDPE,
        stream_geometry=geometry,
        use_transportability=True,
    )
    result: CulvertSizingResult = compute_culvert_sizing(sizing_input)

    assert result.transportability_size == 900
    assert result.method is SizingMethod.TRANSPORTABILITY_MATRIX
    assert result.recommended_size == result.transportability_size
    assert result.culvert_type is CulvertType.ROUND
    assert result.capacity == round_capacity(900, CulvertMaterial.HDPE, 12.0)
    assert result.controlling_factor is ControllingFactor.INLET
    assert result.safety_factor == pytest.approx(1.3)
    assert "Very high gradient (>8%) - high debris torrent risk" in result.risk_factors


def test_sizing_is_deterministic() -> None:
    for sizing_input in (build_example_input(), build_narrow_input(use_transportability=True)):
        assert compute_culvert_sizing(sizing_input) == compute_culvert_sizing(sizing_input)


@pytest.mark.parametrize("builder", [build_example_input, build_narrow_input])
def test_larger_drainage_area_never_shrinks_result(builder) -> None:
    previous: CulvertSizingResult | None = None
    for area in (1.0, 10.0, 50.0, 200.0, 1000.0, 5000.0, 20000.0):
        result: CulvertSizingResult = compute_culvert_sizing(builder(drainage_area=area))
        if previous is not None:
            assert result.design_flow >= previous.design_flow
            assert result.recommended_size >= previous.recommended_size
        previous = result


def test_results_are_non_negative() -> None:
    for sizing_input in (
        build_example_input(),
        build_narrow_input(),
        build_example_input(stream_gradient=0.0),
    ):
        result: CulvertSizingResult = compute_culvert_sizing(sizing_input)
        assert sizing_input.stream_geometry.cross_sectional_area >= 0
        assert sizing_input.stream_geometry.width_to_depth_ratio >= 0
        assert result.design_flow >= 0
        assert result.recommended_size >= 0
        assert result.capacity.max_flow >= 0


def test_climate_factors_never_decrease_design_flow() -> None:
    baseline: CulvertSizingResult = compute_culvert_sizing(build_example_input())
    for rainfall in (None, 20.0, 65.0, 100.0):
        adjusted: CulvertSizingResult = compute_culvert_sizing(
            build_example_input(use_climate_factors=True, projected_rainfall=rainfall)
        )
        assert adjusted.design_flow >= baseline.design_flow
        assert adjusted.climate_factor >= 1.1


def test_recommended_size_carries_design_flow() -> None:
    for area in (5.0, 100.0, 800.0):
        sizing_input: CulvertSizingInput = build_narrow_input(drainage_area=area)
        result: CulvertSizingResult = compute_culvert_sizing(sizing_input)
        if result.culvert_type is CulvertType.BOX:
            capacity = box_capacity(result.box_width, result.box_height, sizing_input.culvert_material, 1.5)
        else:
            capacity = round_capacity(result.recommended_size, sizing_input.culvert_material, 1.5)
        assert capacity.max_flow >= result.design_flow * 1.2
        assert not result.capacity_capped


def test_capped_capacity_is_reported() -> None:
    result: CulvertSizingResult = compute_culvert_sizing(build_narrow_input(drainage_area=100_000.0))
    assert result.capacity_capped
    assert result.recommended_size == STANDARD_DIAMETERS[-1]
    assert result.capacity.max_flow < result.required_capacity
    assert "size capped" in result.comparison_info


def test_zero_depth_channel_uses_numeric_fallbacks() -> None:
    geometry = StreamGeometry.from_measurements(top_widths=[2.0], bottom_width=1.0, depths=[0.0])
    result: CulvertSizingResult = compute_culvert_sizing(build_example_input(stream_geometry=geometry))
    assert geometry.width_to_depth_ratio == 0
    assert geometry.cross_sectional_area == 0
    assert result.culvert_type is CulvertType.ROUND
    assert result.recommended_size > 0


def test_alternate_flow_strategy() -> None:
    result: CulvertSizingResult = compute_culvert_sizing(
        build_example_input(), estimator=DischargeTableFlowEstimator()
    )
    assert result.base_flow == pytest.approx(0.3)


def test_invalid_input_is_rejected_before_computation() -> None:
    geometry = StreamGeometry.from_measurements(top_widths=[], bottom_width=1.0, depths=[-0.5])
    sizing_input: CulvertSizingInput = build_example_input(
        drainage_area=0.0, stream_gradient=-1.0, stream_geometry=geometry
    )
    with pytest.raises(ValidationError) as excinfo:
        compute_culvert_sizing(sizing_input)
    assert excinfo.value.fields() == [
        "drainage_area",
        "stream_gradient",
        "stream_geometry.top_widths",
        "stream_geometry.depths",
    ]


@pytest.mark.parametrize(
    ("gradient", "material", "expected"),
    [
        (5.0, CulvertMaterial.HDPE, ControllingFactor.INLET),
        (5.0, CulvertMaterial.CONCRETE, ControllingFactor.INLET),
        (5.0, CulvertMaterial.CSP, ControllingFactor.OUTLET),
        (3.0, CulvertMaterial.HDPE, ControllingFactor.OUTLET),
        (1.0, CulvertMaterial.CONCRETE, ControllingFactor.OUTLET),
    ],
)
def test_controlling_factor(gradient: float, material: CulvertMaterial, expected: ControllingFactor) -> None:
    assert determine_controlling_factor(gradient, material) is expected
