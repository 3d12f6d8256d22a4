"""Result records produced by the sizing orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from _collections_abc import Mapping

from .base import normalize_mapping, normalize_sequence
from ..type_helpers import ControllingFactor, CulvertType, SizingMethod, coerce_enum


@dataclass(frozen=True, slots=True)
class FlowCapacity:
    """Full-flow capacity of a culvert at the effective slope."""

    max_flow: float = 0.0
    velocity: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"max_flow": self.max_flow, "velocity": self.velocity}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FlowCapacity":
        return cls(max_flow=float(data.get("max_flow", 0.0)), velocity=float(data.get("velocity", 0.0)))


@dataclass(frozen=True, slots=True)
class CulvertSizingResult:
    """Recommended culvert and the engineering metrics behind it.

    Attributes:
        recommended_size: Diameter in mm, or the larger of span/rise for a box.
        method: Sizing method that produced `recommended_size`.
        design_flow: Flow (m³/s) after climate and safety adjustments.
        safety_factor: Risk-based multiplier applied to the base flow.
        controlling_factor: Inlet or outlet control heuristic.
        capacity: Capacity of the recommended culvert.
        transportable: Whether the governing dimension can be hauled to site.
        transportability_size: Matrix size when transportability was requested.
        culvert_type: Round pipe or box culvert.
        box_width: Box span in mm (box culverts only).
        box_height: Box rise in mm (box culverts only).
        base_flow: Regional flow estimate before any adjustment.
        climate_factor: Climate multiplier applied (1.0 when disabled).
        required_capacity: Capacity the solver had to reach (design flow with margin).
        capacity_capped: True when no standard size reached `required_capacity`.
        comparison_info: Human readable summary of each method's size.
        risk_factors: Site risk notes derived from gradient and channel shape.
    """

    recommended_size: int
    method: SizingMethod
    design_flow: float
    safety_factor: float
    controlling_factor: ControllingFactor
    capacity: FlowCapacity
    transportable: bool
    transportability_size: int | None = None
    culvert_type: CulvertType = CulvertType.ROUND
    box_width: int | None = None
    box_height: int | None = None
    base_flow: float = 0.0
    climate_factor: float = 1.0
    required_capacity: float = 0.0
    capacity_capped: bool = False
    comparison_info: str = ""
    risk_factors: tuple[str, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        if self.culvert_type is CulvertType.BOX:
            size: str = f"{self.box_width}x{self.box_height} mm box"
        else:
            size = f"{self.recommended_size} mm"
        return (
            f"CulvertSizingResult(size={size}, method={self.method.name}, "
            f"design_flow={self.design_flow:.3f} cms, control={self.controlling_factor.name})"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return {
            "recommended_size": self.recommended_size,
            "method": self.method.name,
            "design_flow": self.design_flow,
            "safety_factor": self.safety_factor,
            "controlling_factor": self.controlling_factor.name,
            "capacity": self.capacity.to_dict(),
            "transportable": self.transportable,
            "transportability_size": self.transportability_size,
            "culvert_type": self.culvert_type.name,
            "box_width": self.box_width,
            "box_height": self.box_height,
            "base_flow": self.base_flow,
            "climate_factor": self.climate_factor,
            "required_capacity": self.required_capacity,
            "capacity_capped": self.capacity_capped,
            "comparison_info": self.comparison_info,
            "risk_factors": list(self.risk_factors),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CulvertSizingResult":
        return cls(
            recommended_size=int(data.get("recommended_size", 0)),
            method=coerce_enum(SizingMethod, data.get("method"), default=SizingMethod.MANNING),
            design_flow=float(data.get("design_flow", 0.0)),
            safety_factor=float(data.get("safety_factor", 1.0)),
            controlling_factor=coerce_enum(
                ControllingFactor, data.get("controlling_factor"), default=ControllingFactor.OUTLET
            ),
            capacity=FlowCapacity.from_dict(normalize_mapping(data.get("capacity"))),
            transportable=bool(data.get("transportable", False)),
            transportability_size=(
                int(data["transportability_size"]) if data.get("transportability_size") is not None else None
            ),
            culvert_type=coerce_enum(CulvertType, data.get("culvert_type"), default=CulvertType.ROUND),
            box_width=int(data["box_width"]) if data.get("box_width") is not None else None,
            box_height=int(data["box_height"]) if data.get("box_height") is not None else None,
            base_flow=float(data.get("base_flow", 0.0)),
            climate_factor=float(data.get("climate_factor", 1.0)),
            required_capacity=float(data.get("required_capacity", 0.0)),
            capacity_capped=bool(data.get("capacity_capped", False)),
            comparison_info=str(data.get("comparison_info", "")),
            risk_factors=tuple(str(value) for value in normalize_sequence(data.get("risk_factors"))),
        )
