"""Enums and enum helpers shared between the sizing models."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

TEnum = TypeVar("TEnum", bound=Enum)


def coerce_enum(enum_cls: type[TEnum], value: Any, *, default: TEnum) -> TEnum:
    """Return enum member from the provided value, accepting names, values and labels."""

    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized: str = value.strip()
        try:
            return enum_cls[normalized.upper().replace(" ", "_").replace("-", "_")]
        except KeyError:
            pass
        for member in enum_cls:
            label: str | None = getattr(member, "label", None)
            aliases: tuple[str, ...] = getattr(member, "aliases", ())
            if label is not None and label.lower() == normalized.lower():
                return member
            if normalized.lower() in aliases:
                return member
    return enum_cls(value)


class _DescribedEnum(str, Enum):
    """Base class for string enums that expose a user-friendly label."""

    _label_: str

    def __new__(cls, value: str, label: str) -> "_DescribedEnum":
        obj: _DescribedEnum = str.__new__(cls, value)
        obj._value_ = value
        obj._label_ = label
        return obj

    @property
    def label(self) -> str:
        return self._label_


class Region(_DescribedEnum):
    """Hydrologic regions with their own regional flow curves."""

    COASTAL = "coastal", "Coastal BC"
    INTERIOR = "interior", "Interior BC"
    NORTHERN = "northern", "Northern BC"

    @property
    def aliases(self) -> tuple[str, ...]:
        if self is Region.COASTAL:
            return ("vancouver island", "coastal bc/vancouver island")
        return ()


class CulvertMaterial(_DescribedEnum):
    """Pipe materials and their Manning's roughness coefficients."""

    CSP = "csp", "CSP (Corrugated Steel Pipe)"
    HDPE = "hdpe", "HDPE (Plastic)"
    CONCRETE = "concrete", "Concrete"

    @property
    def manning_n(self) -> float:
        if self is CulvertMaterial.HDPE:
            return 0.012
        if self is CulvertMaterial.CONCRETE:
            return 0.013
        return 0.024


class SizingMethod(_DescribedEnum):
    """Method that ultimately governed the recommended size."""

    END_AREA = "end-area", "End Area Method"
    CALIFORNIA = "california", "California Method"
    MANNING = "manning", "Manning's Equation"
    TRANSPORTABILITY_MATRIX = "transportability-matrix", "Stream Transportability Matrix"


class ControllingFactor(_DescribedEnum):
    """End of the culvert expected to govern capacity."""

    INLET = "inlet", "Inlet Control"
    OUTLET = "outlet", "Outlet Control"


class CulvertType(_DescribedEnum):
    """Barrel geometry chosen by the solver."""

    ROUND = "round", "Round"
    BOX = "box", "Box"


class GradientRisk(str, Enum):
    """Stream gradient risk bands used by the transportability matrix."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very-high"


class WidthDepthCategory(str, Enum):
    """Width-to-depth ratio bands used by the transportability matrix."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SizingStage(str, Enum):
    """Stages a sizing run passes through, in order."""

    IDLE = "idle"
    FLOW_ESTIMATED = "flow-estimated"
    SIZE_COMPUTED = "size-computed"
    TRANSPORTABILITY_CHECKED = "transportability-checked"
    CONTROL_DETERMINED = "control-determined"
    COMPLETE = "complete"
