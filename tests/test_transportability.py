"""Transportability matrix classification and lookup."""

from __future__ import annotations

import pytest

from culvert_sizer.transportability import (
    classify_gradient,
    classify_width_depth,
    identify_risk_factors,
    transportability_size,
)
from culvert_sizer.type_helpers import GradientRisk, WidthDepthCategory


@pytest.mark.parametrize(
    ("ratio", "expected"),
    [(0.0, WidthDepthCategory.LOW), (2.99, WidthDepthCategory.LOW), (3.0, WidthDepthCategory.MEDIUM),
     (4.0, WidthDepthCategory.MEDIUM), (6.0, WidthDepthCategory.HIGH), (15.0, WidthDepthCategory.HIGH)],
)
def test_width_depth_categories(ratio: float, expected: WidthDepthCategory) -> None:
    assert classify_width_depth(ratio) is expected


@pytest.mark.parametrize(
    ("gradient", "expected"),
    [(0.5, GradientRisk.LOW), (1.0, GradientRisk.MODERATE), (2.0, GradientRisk.MODERATE),
     (3.0, GradientRisk.HIGH), (7.9, GradientRisk.HIGH), (8.0, GradientRisk.VERY_HIGH)],
)
def test_gradient_bands(gradient: float, expected: GradientRisk) -> None:
    assert classify_gradient(gradient) is expected


def test_matrix_lookup() -> None:
    assert transportability_size(4.0, 2.0) == 600
    assert transportability_size(2.0, 0.5) == 400
    assert transportability_size(7.0, 5.0) == 800


def test_very_high_gradient_ignores_channel_shape() -> None:
    sizes: set[int] = {transportability_size(ratio, 12.0) for ratio in (1.0, 4.0, 9.0)}
    assert sizes == {900}


def test_risk_factors() -> None:
    assert identify_risk_factors(2.0, 4.0) == []
    assert identify_risk_factors(9.0, 12.0) == [
        "Very high gradient (>8%) - high debris torrent risk",
        "Very high width-to-depth ratio (>10) - may indicate braided channel",
    ]
    assert identify_risk_factors(4.0, 2.0) == [
        "High gradient (3-8%) - increased sediment transport",
        "Low width-to-depth ratio (<3) - may indicate incised channel",
    ]
