"""Sizing request submitted for a single crossing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any
from _collections_abc import Mapping

from .base import Validatable, normalize_mapping, optional_float
from .stream_geometry import StreamGeometry
from ..classes_references import FieldError
from ..type_helpers import CulvertMaterial, Region, coerce_enum


@dataclass(frozen=True, slots=True)
class CulvertSizingInput(Validatable):
    """Everything the orchestrator needs to size one culvert.

    `drainage_area` is always in hectares and `stream_gradient` in percent.
    """

    drainage_area: float
    stream_gradient: float
    region: Region = Region.COASTAL
    culvert_material: CulvertMaterial = CulvertMaterial.CSP
    stream_geometry: StreamGeometry = field(default_factory=StreamGeometry)
    use_climate_factors: bool = False
    projected_rainfall: float | None = None
    use_transportability: bool = False
    stream_name: str = ""

    def describe(self) -> str:
        return (
            f"CulvertSizingInput(area={self.drainage_area:.2f} ha, gradient={self.stream_gradient:.2f}%, "
            f"region={self.region.name}, material={self.culvert_material.name})"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return {
            "stream_name": self.stream_name,
            "drainage_area": self.drainage_area,
            "stream_gradient": self.stream_gradient,
            "region": self.region.name,
            "culvert_material": self.culvert_material.name,
            "stream_geometry": self.stream_geometry.to_dict(),
            "use_climate_factors": self.use_climate_factors,
            "projected_rainfall": self.projected_rainfall,
            "use_transportability": self.use_transportability,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CulvertSizingInput":
        return cls(
            drainage_area=float(data.get("drainage_area", 0.0)),
            stream_gradient=float(data.get("stream_gradient", 0.0)),
            region=coerce_enum(Region, data.get("region"), default=Region.COASTAL),
            culvert_material=coerce_enum(CulvertMaterial, data.get("culvert_material"), default=CulvertMaterial.CSP),
            stream_geometry=StreamGeometry.from_dict(normalize_mapping(data.get("stream_geometry"))),
            use_climate_factors=bool(data.get("use_climate_factors", False)),
            projected_rainfall=optional_float(data.get("projected_rainfall")),
            use_transportability=bool(data.get("use_transportability", False)),
            stream_name=str(data.get("stream_name", "")),
        )

    def validate(self, prefix: str = "") -> list[FieldError]:
        errors: list[FieldError] = []
        if math.isnan(self.drainage_area) or self.drainage_area <= 0:
            errors.append(FieldError(f"{prefix}drainage_area", "Drainage area must be greater than zero."))
        elif math.isinf(self.drainage_area):
            errors.append(FieldError(f"{prefix}drainage_area", "Drainage area must be finite."))
        if math.isnan(self.stream_gradient) or self.stream_gradient < 0:
            errors.append(FieldError(f"{prefix}stream_gradient", "Stream gradient must be zero or greater."))
        elif math.isinf(self.stream_gradient):
            errors.append(FieldError(f"{prefix}stream_gradient", "Stream gradient must be finite."))
        if self.projected_rainfall is not None and (
            math.isnan(self.projected_rainfall) or self.projected_rainfall <= 0
        ):
            errors.append(FieldError(f"{prefix}projected_rainfall", "Projected rainfall must be greater than zero."))
        errors.extend(self.stream_geometry.validate(prefix=f"{prefix}stream_geometry."))
        return errors
