"""Stream cross-section summary derived from field measurements."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any
from _collections_abc import Mapping, Sequence

from loguru import logger

from .base import Validatable, normalize_sequence
from ..classes_references import FieldError
from ..hydraulics import average, trapezoidal_area, width_to_depth_ratio

MAX_MEASUREMENTS = 5


@dataclass(frozen=True, slots=True)
class StreamGeometry(Validatable):
    """Averaged channel dimensions for a single stream crossing.

    Use `from_measurements` to build an instance; the derived fields are
    computed once there and the object is immutable afterwards.
    """

    top_widths: tuple[float, ...] = ()
    bottom_width: float = 0.0
    depths: tuple[float, ...] = ()
    average_top_width: float = 0.0
    average_depth: float = 0.0
    cross_sectional_area: float = 0.0
    width_to_depth_ratio: float = 0.0

    @classmethod
    def from_measurements(
        cls,
        top_widths: Sequence[float],
        bottom_width: float,
        depths: Sequence[float],
    ) -> "StreamGeometry":
        widths: tuple[float, ...] = tuple(float(value) for value in top_widths)
        depth_values: tuple[float, ...] = tuple(float(value) for value in depths)
        average_top_width: float = average(widths)
        average_depth: float = average(depth_values)
        geometry = cls(
            top_widths=widths,
            bottom_width=float(bottom_width),
            depths=depth_values,
            average_top_width=average_top_width,
            average_depth=average_depth,
            cross_sectional_area=trapezoidal_area(average_top_width, float(bottom_width), average_depth),
            width_to_depth_ratio=width_to_depth_ratio(average_top_width, average_depth),
        )
        logger.debug("Derived {geometry}", geometry=geometry.describe())
        return geometry

    def describe(self) -> str:
        return (
            f"StreamGeometry(top={self.average_top_width:.2f} m, bottom={self.bottom_width:.2f} m, "
            f"depth={self.average_depth:.2f} m, area={self.cross_sectional_area:.2f} m2, "
            f"w/d={self.width_to_depth_ratio:.2f})"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return {
            "top_widths": list(self.top_widths),
            "bottom_width": self.bottom_width,
            "depths": list(self.depths),
            "average_top_width": self.average_top_width,
            "average_depth": self.average_depth,
            "cross_sectional_area": self.cross_sectional_area,
            "width_to_depth_ratio": self.width_to_depth_ratio,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StreamGeometry":
        """Rebuild from raw measurements; stored derived values are recomputed."""
        return cls.from_measurements(
            top_widths=[float(value) for value in normalize_sequence(data.get("top_widths"))],
            bottom_width=float(data.get("bottom_width", 0.0)),
            depths=[float(value) for value in normalize_sequence(data.get("depths"))],
        )

    def validate(self, prefix: str = "") -> list[FieldError]:
        errors: list[FieldError] = []
        for name, values in (("top_widths", self.top_widths), ("depths", self.depths)):
            if not values:
                errors.append(FieldError(f"{prefix}{name}", "At least one measurement is required."))
            elif len(values) > MAX_MEASUREMENTS:
                errors.append(FieldError(f"{prefix}{name}", f"At most {MAX_MEASUREMENTS} measurements are allowed."))
            if any(not math.isfinite(value) or value < 0 for value in values):
                errors.append(FieldError(f"{prefix}{name}", "Measurements must be finite, non-negative numbers."))
        if not math.isfinite(self.bottom_width) or self.bottom_width < 0:
            errors.append(FieldError(f"{prefix}bottom_width", "Bottom width must be a finite, non-negative number."))
        return errors
