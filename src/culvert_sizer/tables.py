"""Constant engineering tables used by the sizing methods.

All tables are immutable (tuples and read-only mappings) and are built once at
import time.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .type_helpers import GradientRisk, Region, WidthDepthCategory

# Standard round culvert diameters (mm), ascending.
STANDARD_DIAMETERS: tuple[int, ...] = (300, 400, 500, 600, 700, 800, 900, 1000, 1200, 1400, 1600, 1800, 2000)

# Largest culvert (mm) that can be hauled to a typical forestry site.
MAX_TRANSPORTABLE_SIZE = 1800

# Minimum slope (m/m) used in capacity calculations.
MIN_SLOPE = 0.005

# Margin the solver applies on top of the design flow.
CAPACITY_MARGIN = 1.2

# Box culvert dimensions are stepped in 200 mm increments from an 800 mm floor.
BOX_INCREMENT_MM = 200
BOX_MIN_DIMENSION_MM = 800
BOX_MAX_DIMENSION_MM = 6000
BOX_TARGET_ASPECT = 3.0

# Width-to-depth ratio above which a box culvert is preferred.
BOX_RATIO_THRESHOLD = 3.0

# Regional power-law coefficients (a, b) for Q = a * A_km2 ** b.
REGION_COEFFICIENTS: Mapping[Region, tuple[float, float]] = MappingProxyType(
    {
        Region.COASTAL: (0.92, 0.78),
        Region.INTERIOR: (0.74, 0.75),
        Region.NORTHERN: (0.65, 0.72),
    }
)

# Regional Q100 discharge tables: (drainage area km², flow m³/s).
DISCHARGE_TABLES: Mapping[Region, tuple[tuple[float, float], ...]] = MappingProxyType(
    {
        Region.COASTAL: (
            (1, 0.3),
            (5, 1.1),
            (10, 1.8),
            (20, 3.1),
            (50, 6.1),
            (100, 10.3),
            (200, 17.6),
            (500, 34.7),
            (1000, 59.6),
        ),
        Region.INTERIOR: (
            (1, 0.2),
            (5, 0.7),
            (10, 1.3),
            (20, 2.3),
            (50, 4.5),
            (100, 7.4),
            (200, 12.6),
            (500, 24.7),
            (1000, 41.9),
        ),
        Region.NORTHERN: (
            (1, 0.25),
            (5, 0.9),
            (10, 1.5),
            (20, 2.5),
            (50, 5.0),
            (100, 8.5),
            (200, 14.5),
            (500, 28.6),
            (1000, 48.2),
        ),
    }
)

# Baseline design rainfall intensity (mm/hr) per region.
BASELINE_RAINFALL: Mapping[Region, float] = MappingProxyType(
    {
        Region.COASTAL: 65.0,
        Region.INTERIOR: 45.0,
        Region.NORTHERN: 35.0,
    }
)
DEFAULT_BASELINE_RAINFALL = 55.0
MIN_CLIMATE_FACTOR = 1.1

# Risk-based safety factors and the gradient (%) upper bounds of each band.
SAFETY_FACTOR_LOW = 1.1
SAFETY_FACTOR_MEDIUM = 1.2
SAFETY_FACTOR_HIGH = 1.3
SAFETY_LOW_MAX_GRADIENT = 3.0
SAFETY_MEDIUM_MAX_GRADIENT = 8.0

# Cross-sectional area (m²) upper bounds mapped to End-Area diameters (mm).
END_AREA_BREAKPOINTS: tuple[tuple[float, int], ...] = (
    (0.2, 600),
    (0.4, 700),
    (0.6, 800),
    (0.8, 900),
    (1.0, 1000),
    (1.2, 1200),
    (1.5, 1400),
    (1.8, 1600),
    (2.0, 1800),
)
END_AREA_MAX_SIZE = 2000

# California method table: width bin (m) -> depth bin (m) -> diameter (mm).
# None marks cells beyond the table, where the flow-based method takes over.
CALIFORNIA_TABLE: Mapping[float, Mapping[float, int | None]] = MappingProxyType(
    {
        0.5: MappingProxyType({0.1: 600, 0.2: 600, 0.3: 600, 0.4: 700, 0.5: 800}),
        1.0: MappingProxyType({0.1: 600, 0.2: 600, 0.3: 700, 0.4: 900, 0.5: 1000}),
        1.5: MappingProxyType({0.1: 600, 0.2: 700, 0.3: 900, 0.4: 1200, 0.5: 1400}),
        2.0: MappingProxyType({0.1: 600, 0.2: 800, 0.3: 1200, 0.4: 1500, 0.5: 1600}),
        2.5: MappingProxyType({0.1: 600, 0.2: 900, 0.3: 1400, 0.4: 1800, 0.5: 1900}),
        3.0: MappingProxyType({0.1: 700, 0.2: 1000, 0.3: 1600, 0.4: 1900, 0.5: None}),
    }
)
CALIFORNIA_WIDTH_BOUNDS: tuple[float, float] = (0.5, 3.0)
CALIFORNIA_DEPTH_BOUNDS: tuple[float, float] = (0.1, 0.5)

# Category upper bounds (exclusive) for the transportability matrix.
WIDTH_DEPTH_LOW_MAX = 3.0
WIDTH_DEPTH_MEDIUM_MAX = 6.0
GRADIENT_LOW_MAX = 1.0
GRADIENT_MODERATE_MAX = 3.0
GRADIENT_HIGH_MAX = 8.0

# Transportability matrix: indices into STANDARD_DIAMETERS.
TRANSPORTABILITY_MATRIX: Mapping[GradientRisk, Mapping[WidthDepthCategory, int]] = MappingProxyType(
    {
        GradientRisk.LOW: MappingProxyType(
            {WidthDepthCategory.LOW: 1, WidthDepthCategory.MEDIUM: 2, WidthDepthCategory.HIGH: 3}
        ),
        GradientRisk.MODERATE: MappingProxyType(
            {WidthDepthCategory.LOW: 2, WidthDepthCategory.MEDIUM: 3, WidthDepthCategory.HIGH: 4}
        ),
        GradientRisk.HIGH: MappingProxyType(
            {WidthDepthCategory.LOW: 3, WidthDepthCategory.MEDIUM: 4, WidthDepthCategory.HIGH: 5}
        ),
        GradientRisk.VERY_HIGH: MappingProxyType(
            {WidthDepthCategory.LOW: 6, WidthDepthCategory.MEDIUM: 6, WidthDepthCategory.HIGH: 6}
        ),
    }
)

# Controlling-factor heuristic thresholds.
INLET_MIN_GRADIENT = 3.0
INLET_MAX_ROUGHNESS = 0.015
