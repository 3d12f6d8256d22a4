"""Pure hydraulic and geometric primitives used by the sizing methods.

Every helper here is stateless. Malformed numbers (NaN, infinity) are passed
through rather than rejected; callers filter raw field input before it reaches
these functions (see `culvert_sizer.config`).
"""

from __future__ import annotations

import math
from _collections_abc import Iterable

from .units import millimetres_to_metres


def average(values: Iterable[float]) -> float:
    """Return the arithmetic mean, or 0 for an empty input."""

    items: list[float] = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)


def trapezoidal_area(top_width: float, bottom_width: float, depth: float) -> float:
    """Return the cross-sectional area (m²) of a trapezoidal channel."""

    return (top_width + bottom_width) / 2 * depth


def hydraulic_radius(area: float, wetted_perimeter: float) -> float:
    """Return the hydraulic radius (m): flow area over wetted perimeter."""

    return area / wetted_perimeter


def mannings_flow(n: float, area: float, hydraulic_radius: float, slope_decimal: float) -> float:
    """
    Return discharge (m³/s) from Manning's equation.

    Q = (1/n) * A * R^(2/3) * S^(1/2). The slope must already be a decimal
    fraction; percent grades are converted by the caller.
    """

    return (1 / n) * area * hydraulic_radius ** (2 / 3) * math.sqrt(slope_decimal)


def pipe_area(diameter_mm: float) -> float:
    """Return the full-flow area (m²) of a round pipe given its diameter in mm."""

    radius: float = millimetres_to_metres(diameter_mm) / 2
    return math.pi * radius**2


def pipe_wetted_perimeter(diameter_mm: float) -> float:
    """Return the full-flow wetted perimeter (m) of a round pipe given its diameter in mm."""

    return math.pi * millimetres_to_metres(diameter_mm)


def box_area(width_mm: float, height_mm: float) -> float:
    """Return the full-flow area (m²) of a box culvert given its span and rise in mm."""

    return millimetres_to_metres(width_mm) * millimetres_to_metres(height_mm)


def box_wetted_perimeter(width_mm: float, height_mm: float) -> float:
    """Return the full-flow wetted perimeter (m) of a box culvert given its span and rise in mm."""

    return 2 * (millimetres_to_metres(width_mm) + millimetres_to_metres(height_mm))


def width_to_depth_ratio(width: float, depth: float) -> float:
    """Return width / depth, defined as 0 when the depth is 0."""

    if depth == 0:
        return 0.0
    return width / depth


def round_to_decimals(value: float, decimals: int = 2) -> float:
    """Round half away from zero to `decimals` places."""

    if math.isnan(value) or math.isinf(value):
        return value
    factor: float = 10.0**decimals
    return math.copysign(math.floor(abs(value) * factor + 0.5) / factor, value)
