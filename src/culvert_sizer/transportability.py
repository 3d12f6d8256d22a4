"""Transportability sizing: a site-risk floor independent of hydraulics."""

from __future__ import annotations

from _collections_abc import Sequence

from loguru import logger

from .tables import (
    GRADIENT_HIGH_MAX,
    GRADIENT_LOW_MAX,
    GRADIENT_MODERATE_MAX,
    STANDARD_DIAMETERS,
    TRANSPORTABILITY_MATRIX,
    WIDTH_DEPTH_LOW_MAX,
    WIDTH_DEPTH_MEDIUM_MAX,
)
from .type_helpers import GradientRisk, WidthDepthCategory

BRAIDED_CHANNEL_RATIO = 10.0


def classify_width_depth(width_to_depth_ratio: float) -> WidthDepthCategory:
    """Low below 3, medium from 3 up to 6, high from 6."""

    if width_to_depth_ratio < WIDTH_DEPTH_LOW_MAX:
        return WidthDepthCategory.LOW
    if width_to_depth_ratio < WIDTH_DEPTH_MEDIUM_MAX:
        return WidthDepthCategory.MEDIUM
    return WidthDepthCategory.HIGH


def classify_gradient(stream_gradient: float) -> GradientRisk:
    """Low below 1%, moderate from 1% up to 3%, high from 3% up to 8%, very high from 8%."""

    if stream_gradient < GRADIENT_LOW_MAX:
        return GradientRisk.LOW
    if stream_gradient < GRADIENT_MODERATE_MAX:
        return GradientRisk.MODERATE
    if stream_gradient < GRADIENT_HIGH_MAX:
        return GradientRisk.HIGH
    return GradientRisk.VERY_HIGH


def transportability_size(
    width_to_depth_ratio: float,
    stream_gradient: float,
    standard_sizes: Sequence[int] = STANDARD_DIAMETERS,
) -> int:
    """Return the minimum culvert diameter (mm) from the transportability matrix.

    Very high gradients force the same large minimum regardless of channel shape,
    reflecting debris torrent risk.
    """

    gradient_risk: GradientRisk = classify_gradient(stream_gradient)
    category: WidthDepthCategory = classify_width_depth(width_to_depth_ratio)
    index: int = TRANSPORTABILITY_MATRIX[gradient_risk][category]
    size: int = standard_sizes[index]
    logger.debug(
        "Transportability size {size} mm (gradient {risk}, width/depth {category})",
        size=size,
        risk=gradient_risk.value,
        category=category.value,
    )
    return size


def identify_risk_factors(stream_gradient: float, width_to_depth_ratio: float) -> list[str]:
    """Return site risk notes derived from gradient and channel shape."""

    risk_factors: list[str] = []
    if stream_gradient >= GRADIENT_HIGH_MAX:
        risk_factors.append("Very high gradient (>8%) - high debris torrent risk")
    elif stream_gradient >= GRADIENT_MODERATE_MAX:
        risk_factors.append("High gradient (3-8%) - increased sediment transport")
    if width_to_depth_ratio < WIDTH_DEPTH_LOW_MAX:
        risk_factors.append("Low width-to-depth ratio (<3) - may indicate incised channel")
    elif width_to_depth_ratio > BRAIDED_CHANNEL_RATIO:
        risk_factors.append("Very high width-to-depth ratio (>10) - may indicate braided channel")
    return risk_factors
