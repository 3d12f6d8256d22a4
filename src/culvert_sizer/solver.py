"""Culvert size solver.

Three sizing methods are evaluated for every crossing:

1. Manning's equation, iterating the standard diameters (or growing a box
   culvert for wide, shallow channels) until full-flow capacity meets the
   design flow with the solver margin.
2. The End-Area method, a step function of the stream cross-sectional area.
3. The California method, a width/depth lookup table that defers to the
   flow-based method when the channel exceeds the table.

`recommend_hydraulic_size` keeps the largest of the three. Equal sizes go to
the culvert that carries more flow, then to End-Area, California and Manning
in that order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from _collections_abc import Sequence

from loguru import logger

from .hydraulics import (
    box_area,
    box_wetted_perimeter,
    hydraulic_radius,
    mannings_flow,
    pipe_area,
    pipe_wetted_perimeter,
    round_to_decimals,
)
from .models import FlowCapacity, StreamGeometry
from .tables import (
    BOX_INCREMENT_MM,
    BOX_MAX_DIMENSION_MM,
    BOX_MIN_DIMENSION_MM,
    BOX_RATIO_THRESHOLD,
    BOX_TARGET_ASPECT,
    CALIFORNIA_DEPTH_BOUNDS,
    CALIFORNIA_TABLE,
    CALIFORNIA_WIDTH_BOUNDS,
    CAPACITY_MARGIN,
    END_AREA_BREAKPOINTS,
    END_AREA_MAX_SIZE,
    MIN_SLOPE,
    STANDARD_DIAMETERS,
)
from .type_helpers import CulvertMaterial, CulvertType, SizingMethod
from .units import metres_to_millimetres, percent_to_decimal


@dataclass(frozen=True, slots=True)
class RoundSizing:
    """Smallest adequate round culvert found by the Manning iteration."""

    diameter: int
    capacity: FlowCapacity
    capped: bool = False


@dataclass(frozen=True, slots=True)
class BoxSizing:
    """Box culvert grown from the measured channel until capacity is adequate."""

    width: int
    height: int
    capacity: FlowCapacity
    capped: bool = False

    @property
    def governing_size(self) -> int:
        return max(self.width, self.height)


@dataclass(frozen=True, slots=True)
class HydraulicRecommendation:
    """Outcome of reconciling the Manning, End-Area and California methods."""

    size: int
    method: SizingMethod
    culvert_type: CulvertType
    capacity: FlowCapacity
    required_capacity: float
    end_area_size: int
    california_size: int | None
    manning_size: int
    box_width: int | None = None
    box_height: int | None = None
    comparison_info: str = ""

    @property
    def capped(self) -> bool:
        return self.capacity.max_flow < self.required_capacity


def effective_slope(stream_gradient: float) -> float:
    """Return the slope (m/m) used for capacity, floored at 0.5%."""

    return max(percent_to_decimal(stream_gradient), MIN_SLOPE)


def _capacity(n: float, area: float, wetted_perimeter: float, slope: float) -> FlowCapacity:
    flow: float = mannings_flow(n, area, hydraulic_radius(area, wetted_perimeter), slope)
    velocity: float = flow / area if area > 0 else 0.0
    return FlowCapacity(max_flow=flow, velocity=velocity)


def round_capacity(diameter_mm: float, material: CulvertMaterial, stream_gradient: float) -> FlowCapacity:
    """Full-flow capacity of a round culvert at the effective slope."""

    return _capacity(
        material.manning_n,
        pipe_area(diameter_mm),
        pipe_wetted_perimeter(diameter_mm),
        effective_slope(stream_gradient),
    )


def box_capacity(
    width_mm: float, height_mm: float, material: CulvertMaterial, stream_gradient: float
) -> FlowCapacity:
    """Full-flow capacity of a box culvert at the effective slope."""

    return _capacity(
        material.manning_n,
        box_area(width_mm, height_mm),
        box_wetted_perimeter(width_mm, height_mm),
        effective_slope(stream_gradient),
    )


def size_round_culvert(
    design_flow: float,
    material: CulvertMaterial,
    stream_gradient: float,
    *,
    sizes: Sequence[int] = STANDARD_DIAMETERS,
    margin: float = CAPACITY_MARGIN,
) -> RoundSizing:
    """Return the smallest standard diameter whose capacity meets `design_flow * margin`.

    When no size is large enough the largest size is returned with `capped=True`.
    """

    required: float = design_flow * margin
    ordered: list[int] = sorted(sizes)
    for diameter in ordered:
        capacity: FlowCapacity = round_capacity(diameter, material, stream_gradient)
        if capacity.max_flow >= required:
            logger.debug(
                "Round culvert {diameter} mm carries {flow:.4f} cms (required {required:.4f})",
                diameter=diameter,
                flow=capacity.max_flow,
                required=required,
            )
            return RoundSizing(diameter=diameter, capacity=capacity)
    largest: int = ordered[-1]
    capacity = round_capacity(largest, material, stream_gradient)
    logger.warning(
        "No standard diameter carries {required:.4f} cms; capped at {diameter} mm ({flow:.4f} cms)",
        required=required,
        diameter=largest,
        flow=capacity.max_flow,
    )
    return RoundSizing(diameter=largest, capacity=capacity, capped=True)


def needs_box_culvert(geometry: StreamGeometry) -> bool:
    """Wide, shallow channels (width/depth above 3) are better served by a box culvert."""

    return geometry.width_to_depth_ratio > BOX_RATIO_THRESHOLD


def _initial_box_dimension(measured_m: float) -> int:
    if measured_m <= 0:
        return BOX_MIN_DIMENSION_MM
    measured_mm: float = round(metres_to_millimetres(measured_m), 6)
    stepped: int = math.ceil(measured_mm / BOX_INCREMENT_MM) * BOX_INCREMENT_MM
    return max(stepped, BOX_MIN_DIMENSION_MM)


def size_box_culvert(
    design_flow: float,
    material: CulvertMaterial,
    stream_gradient: float,
    geometry: StreamGeometry,
    *,
    margin: float = CAPACITY_MARGIN,
) -> BoxSizing:
    """Grow a box culvert from the measured channel until it carries `design_flow * margin`.

    Width grows first while the span is under three times the rise, so the box
    keeps the natural channel shape; otherwise the rise grows.
    """

    required: float = design_flow * margin
    width: int = _initial_box_dimension(geometry.average_top_width)
    height: int = _initial_box_dimension(geometry.average_depth)
    capacity: FlowCapacity = box_capacity(width, height, material, stream_gradient)
    capped: bool = False
    while capacity.max_flow < required:
        if width / height < BOX_TARGET_ASPECT and width < BOX_MAX_DIMENSION_MM:
            width += BOX_INCREMENT_MM
        elif height < BOX_MAX_DIMENSION_MM:
            height += BOX_INCREMENT_MM
        elif width < BOX_MAX_DIMENSION_MM:
            width += BOX_INCREMENT_MM
        else:
            capped = True
            logger.warning(
                "Box culvert capped at {width}x{height} mm ({flow:.4f} of {required:.4f} cms)",
                width=width,
                height=height,
                flow=capacity.max_flow,
                required=required,
            )
            break
        capacity = box_capacity(width, height, material, stream_gradient)
    logger.debug(
        "Box culvert {width}x{height} mm carries {flow:.4f} cms (required {required:.4f})",
        width=width,
        height=height,
        flow=capacity.max_flow,
        required=required,
    )
    return BoxSizing(width=width, height=height, capacity=capacity, capped=capped)


def end_area_size(cross_sectional_area: float) -> int:
    """Return the End-Area diameter (mm) for a stream cross-sectional area (m²)."""

    for max_area, diameter in END_AREA_BREAKPOINTS:
        if cross_sectional_area <= max_area:
            return diameter
    return END_AREA_MAX_SIZE


def _nearest_key(keys: Sequence[float], value: float) -> float:
    return min(keys, key=lambda key: abs(key - value))


def california_size(width: float, depth: float) -> int | None:
    """
    Return the California-method diameter (mm) for a channel width and depth (m).

    Inputs are clamped to the table bounds and snapped to the nearest tabulated
    bin. Returns None when the channel exceeds the table; callers then rely on
    the flow-based method.
    """

    min_width, max_width = CALIFORNIA_WIDTH_BOUNDS
    min_depth, max_depth = CALIFORNIA_DEPTH_BOUNDS
    rounded_width: float = round_to_decimals(min(max(width, min_width), max_width), 1)
    rounded_depth: float = round_to_decimals(min(max(depth, min_depth), max_depth), 1)
    width_key: float = _nearest_key(list(CALIFORNIA_TABLE.keys()), rounded_width)
    row = CALIFORNIA_TABLE[width_key]
    depth_key: float = _nearest_key(list(row.keys()), rounded_depth)
    return row[depth_key]


def recommend_hydraulic_size(
    design_flow: float,
    material: CulvertMaterial,
    stream_gradient: float,
    geometry: StreamGeometry,
    *,
    margin: float = CAPACITY_MARGIN,
) -> HydraulicRecommendation:
    """Size the culvert by every hydraulic method and keep the largest recommendation."""

    required: float = design_flow * margin
    end_area: int = end_area_size(geometry.cross_sectional_area)
    california: int | None = california_size(geometry.average_top_width, geometry.average_depth)

    box: BoxSizing | None = None
    if needs_box_culvert(geometry):
        box = size_box_culvert(design_flow, material, stream_gradient, geometry, margin=margin)
        manning: int = box.governing_size
        manning_capacity: FlowCapacity = box.capacity
        manning_label: str = f"{box.width}x{box.height} mm box"
    else:
        round_sizing: RoundSizing = size_round_culvert(design_flow, material, stream_gradient, margin=margin)
        manning = round_sizing.diameter
        manning_capacity = round_sizing.capacity
        manning_label = f"{manning} mm"

    candidates: list[tuple[SizingMethod, int, FlowCapacity]] = [
        (SizingMethod.END_AREA, end_area, round_capacity(end_area, material, stream_gradient))
    ]
    if california is not None:
        candidates.append((SizingMethod.CALIFORNIA, california, round_capacity(california, material, stream_gradient)))
    candidates.append((SizingMethod.MANNING, manning, manning_capacity))
    method, size, capacity = candidates[0]
    for candidate_method, candidate_size, candidate_capacity in candidates[1:]:
        # Equal sizes go to the candidate that carries more flow.
        if (candidate_size, candidate_capacity.max_flow) > (size, capacity.max_flow):
            method, size, capacity = candidate_method, candidate_size, candidate_capacity

    california_label: str = (
        f"{california} mm" if california is not None else "exceeded (Q100), using flow-based method"
    )
    comparison: str = f"End Area: {end_area} mm vs California: {california_label}, Manning: {manning_label}"

    culvert_type: CulvertType = CulvertType.ROUND
    box_width: int | None = None
    box_height: int | None = None
    if method is SizingMethod.MANNING and box is not None:
        culvert_type, box_width, box_height = CulvertType.BOX, box.width, box.height
    recommendation = HydraulicRecommendation(
        size=size,
        method=method,
        culvert_type=culvert_type,
        capacity=capacity,
        required_capacity=required,
        end_area_size=end_area,
        california_size=california,
        manning_size=manning,
        box_width=box_width,
        box_height=box_height,
        comparison_info=comparison,
    )
    if recommendation.capped:
        recommendation = _with_capped_note(recommendation)
    logger.debug(
        "Hydraulic recommendation {size} mm by {method} ({comparison})",
        size=recommendation.size,
        method=recommendation.method.name,
        comparison=recommendation.comparison_info,
    )
    return recommendation


def _with_capped_note(recommendation: HydraulicRecommendation) -> HydraulicRecommendation:
    note: str = (
        f"; capacity {recommendation.capacity.max_flow:.2f} cms is below the required "
        f"{recommendation.required_capacity:.2f} cms, size capped"
    )
    return replace(recommendation, comparison_info=recommendation.comparison_info + note)
