"""Sizing orchestrator.

`compute_culvert_sizing` owns the full sizing workflow:

1. Validate the request (nothing is computed for invalid input).
2. Estimate the regional flow and apply climate and safety adjustments.
3. Size the culvert by the Manning, End-Area and California methods, keeping the largest.
4. Optionally compare against the transportability matrix, keeping the larger again.
5. Classify inlet versus outlet control.
6. Assemble the immutable `CulvertSizingResult`.

Each call owns its own `_SizingRun`; no state is shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from .flow import DesignFlow, FlowEstimator, estimate_design_flow
from .models import CulvertSizingInput, CulvertSizingResult, FlowCapacity
from .solver import HydraulicRecommendation, recommend_hydraulic_size, round_capacity
from .tables import INLET_MAX_ROUGHNESS, INLET_MIN_GRADIENT, MAX_TRANSPORTABLE_SIZE
from .transportability import identify_risk_factors, transportability_size
from .type_helpers import ControllingFactor, CulvertMaterial, CulvertType, SizingMethod, SizingStage

_STAGE_ORDER: tuple[SizingStage, ...] = tuple(SizingStage)


def _stage_list() -> list[SizingStage]:
    """Return an empty list typed for the stage history."""

    return []


@dataclass(slots=True)
class _SizingRun:
    """Tracks the stage a single sizing run has reached."""

    sizing_input: CulvertSizingInput
    stage: SizingStage = SizingStage.IDLE
    history: list[SizingStage] = field(default_factory=_stage_list)

    def advance(self, stage: SizingStage) -> None:
        """Move forward to `stage`; runs never move backwards."""

        if _STAGE_ORDER.index(stage) <= _STAGE_ORDER.index(self.stage):
            raise RuntimeError(f"Sizing run cannot move from {self.stage.value} to {stage.value}.")
        self.history.append(self.stage)
        self.stage = stage
        logger.debug("Sizing run for {request} reached {stage}", request=self.sizing_input.describe(), stage=stage.value)


def determine_controlling_factor(stream_gradient: float, material: CulvertMaterial) -> ControllingFactor:
    """
    Classify the culvert as inlet or outlet controlled.

    Steep, smooth barrels (gradient above 3% and Manning's n below 0.015) are
    inlet controlled. Everything else, including mild or rough barrels, is
    treated as outlet controlled, the conservative choice.
    """

    if stream_gradient > INLET_MIN_GRADIENT and material.manning_n < INLET_MAX_ROUGHNESS:
        return ControllingFactor.INLET
    return ControllingFactor.OUTLET


def compute_culvert_sizing(
    sizing_input: CulvertSizingInput,
    *,
    estimator: FlowEstimator | None = None,
) -> CulvertSizingResult:
    """Run the full sizing workflow for one crossing.

    Args:
        sizing_input: Validated or raw sizing request.
        estimator: Flow estimation strategy; defaults to the regional regression.

    Raises:
        ValidationError: If the request is invalid. No computation is attempted.
    """

    run = _SizingRun(sizing_input=sizing_input)
    sizing_input.assert_valid()
    geometry = sizing_input.stream_geometry

    flow: DesignFlow = estimate_design_flow(sizing_input, estimator)
    run.advance(SizingStage.FLOW_ESTIMATED)

    hydraulic: HydraulicRecommendation = recommend_hydraulic_size(
        flow.design_flow,
        sizing_input.culvert_material,
        sizing_input.stream_gradient,
        geometry,
    )
    run.advance(SizingStage.SIZE_COMPUTED)

    recommended_size: int = hydraulic.size
    method: SizingMethod = hydraulic.method
    culvert_type: CulvertType = hydraulic.culvert_type
    capacity: FlowCapacity = hydraulic.capacity
    box_width: int | None = hydraulic.box_width
    box_height: int | None = hydraulic.box_height
    comparison_info: str = hydraulic.comparison_info
    matrix_size: int | None = None

    if sizing_input.use_transportability:
        matrix_size = transportability_size(geometry.width_to_depth_ratio, sizing_input.stream_gradient)
        if matrix_size > recommended_size:
            recommended_size = matrix_size
            method = SizingMethod.TRANSPORTABILITY_MATRIX
            culvert_type = CulvertType.ROUND
            box_width = box_height = None
            capacity = round_capacity(matrix_size, sizing_input.culvert_material, sizing_input.stream_gradient)
            comparison_info = f"{comparison_info}, Transportability: {matrix_size} mm (selected)"
        else:
            comparison_info = f"{comparison_info}, Transportability: {matrix_size} mm"
        run.advance(SizingStage.TRANSPORTABILITY_CHECKED)

    controlling_factor: ControllingFactor = determine_controlling_factor(
        sizing_input.stream_gradient, sizing_input.culvert_material
    )
    run.advance(SizingStage.CONTROL_DETERMINED)

    result = CulvertSizingResult(
        recommended_size=recommended_size,
        method=method,
        design_flow=flow.design_flow,
        safety_factor=flow.safety_factor,
        controlling_factor=controlling_factor,
        capacity=capacity,
        transportable=recommended_size <= MAX_TRANSPORTABLE_SIZE,
        transportability_size=matrix_size,
        culvert_type=culvert_type,
        box_width=box_width,
        box_height=box_height,
        base_flow=flow.base_flow,
        climate_factor=flow.climate_factor,
        required_capacity=hydraulic.required_capacity,
        capacity_capped=capacity.max_flow < hydraulic.required_capacity,
        comparison_info=comparison_info,
        risk_factors=tuple(identify_risk_factors(sizing_input.stream_gradient, geometry.width_to_depth_ratio)),
    )
    run.advance(SizingStage.COMPLETE)
    logger.info(
        "Sized {request}: {result}",
        request=sizing_input.describe(),
        result=result.describe(),
    )
    return result
