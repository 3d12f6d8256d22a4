"""Regional design-flow estimation.

Two interchangeable strategies turn a drainage area (hectares) and a region
into a Q100-equivalent flow in m³/s:

* `RegressionFlowEstimator` applies the regional power-law curve
  ``Q = a * A_km2 ** b``. This is the default strategy.
* `DischargeTableFlowEstimator` interpolates the regional discharge tables,
  clamping to the first/last breakpoint outside the tabulated range.

Climate and risk-based safety adjustments are applied on top of either
strategy by `estimate_design_flow`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping

from loguru import logger

from .models import CulvertSizingInput
from .tables import (
    BASELINE_RAINFALL,
    DEFAULT_BASELINE_RAINFALL,
    DISCHARGE_TABLES,
    MIN_CLIMATE_FACTOR,
    REGION_COEFFICIENTS,
    SAFETY_FACTOR_HIGH,
    SAFETY_FACTOR_LOW,
    SAFETY_FACTOR_MEDIUM,
    SAFETY_LOW_MAX_GRADIENT,
    SAFETY_MEDIUM_MAX_GRADIENT,
)
from .type_helpers import Region
from .units import hectares_to_square_kilometres


class FlowEstimator(ABC):
    """Strategy interface for regional flow estimation."""

    name: str = "flow estimator"

    @abstractmethod
    def estimate(self, drainage_area: float, region: Region) -> float:
        """Return the base design flow (m³/s) for `drainage_area` hectares in `region`."""


class RegressionFlowEstimator(FlowEstimator):
    """Closed-form regional regression ``Q = a * A_km2 ** b``."""

    name = "regional regression"

    def __init__(self, coefficients: Mapping[Region, tuple[float, float]] = REGION_COEFFICIENTS) -> None:
        self.coefficients: Mapping[Region, tuple[float, float]] = coefficients

    def estimate(self, drainage_area: float, region: Region) -> float:
        a, b = self.coefficients[region]
        area_km2: float = hectares_to_square_kilometres(drainage_area)
        flow: float = a * area_km2**b
        logger.debug(
            "Regression flow {flow:.4f} cms for {area:.4f} km2 ({region}, a={a}, b={b})",
            flow=flow,
            area=area_km2,
            region=region.name,
            a=a,
            b=b,
        )
        return flow


class DischargeTableFlowEstimator(FlowEstimator):
    """Linear interpolation over regional (km², m³/s) discharge breakpoints."""

    name = "discharge table"

    def __init__(
        self, tables: Mapping[Region, tuple[tuple[float, float], ...]] = DISCHARGE_TABLES
    ) -> None:
        self.tables: Mapping[Region, tuple[tuple[float, float], ...]] = tables

    def estimate(self, drainage_area: float, region: Region) -> float:
        area_km2: float = hectares_to_square_kilometres(drainage_area)
        flow: float = interpolate_table(self.tables[region], area_km2)
        logger.debug(
            "Table flow {flow:.4f} cms for {area:.4f} km2 ({region})",
            flow=flow,
            area=area_km2,
            region=region.name,
        )
        return flow


def interpolate_table(points: tuple[tuple[float, float], ...], x: float) -> float:
    """Linearly interpolate `points` at `x`, clamping to the edge values outside the table."""

    if not points:
        raise ValueError("Interpolation table must contain at least one point.")
    first_x, first_y = points[0]
    last_x, last_y = points[-1]
    if x <= first_x:
        return first_y
    if x >= last_x:
        return last_y
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        if x0 <= x <= x1:
            if x1 == x0:
                return y0
            return y0 + (x - x0) * (y1 - y0) / (x1 - x0)
    return last_y


def baseline_rainfall(region: Region | None) -> float:
    """Return the regional baseline design rainfall intensity (mm/hr)."""

    if region is None:
        return DEFAULT_BASELINE_RAINFALL
    return BASELINE_RAINFALL.get(region, DEFAULT_BASELINE_RAINFALL)


def climate_factor(projected_rainfall: float | None, region: Region | None) -> float:
    """
    Return the climate multiplier for a projected rainfall intensity.

    The multiplier is ``projected / baseline`` but never less than 1.1, so the
    climate layer can only increase the design flow. Without a projection the
    1.1 minimum applies.
    """

    if projected_rainfall is None:
        return MIN_CLIMATE_FACTOR
    return max(projected_rainfall / baseline_rainfall(region), MIN_CLIMATE_FACTOR)


def safety_factor_for_gradient(stream_gradient: float) -> float:
    """Return the risk-based safety factor for a stream gradient in percent.

    Up to 3% is low risk (1.1), above 3% up to 8% medium (1.2), above 8% high (1.3).
    """

    if stream_gradient > SAFETY_MEDIUM_MAX_GRADIENT:
        return SAFETY_FACTOR_HIGH
    if stream_gradient > SAFETY_LOW_MAX_GRADIENT:
        return SAFETY_FACTOR_MEDIUM
    return SAFETY_FACTOR_LOW


@dataclass(frozen=True, slots=True)
class DesignFlow:
    """Breakdown of the design flow used for sizing."""

    base_flow: float
    climate_factor: float
    safety_factor: float

    @property
    def design_flow(self) -> float:
        return self.base_flow * self.climate_factor * self.safety_factor


def estimate_design_flow(sizing_input: CulvertSizingInput, estimator: FlowEstimator | None = None) -> DesignFlow:
    """Estimate the regional flow and apply the climate then safety adjustments."""

    strategy: FlowEstimator = estimator or RegressionFlowEstimator()
    base_flow: float = strategy.estimate(sizing_input.drainage_area, sizing_input.region)
    factor: float = 1.0
    if sizing_input.use_climate_factors:
        factor = climate_factor(sizing_input.projected_rainfall, sizing_input.region)
    safety: float = safety_factor_for_gradient(sizing_input.stream_gradient)
    flow = DesignFlow(base_flow=base_flow, climate_factor=factor, safety_factor=safety)
    logger.debug(
        "Design flow {design:.4f} cms = {base:.4f} x climate {climate:.3f} x safety {safety} ({strategy})",
        design=flow.design_flow,
        base=base_flow,
        climate=factor,
        safety=safety,
        strategy=strategy.name,
    )
    return flow
