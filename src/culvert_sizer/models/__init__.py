"""
Domain models that describe culvert sizing requests and results.

These data classes represent the stream measurements, the sizing request,
the computed recommendation and the field card that pairs them, providing a
structured, in-memory representation that can be serialized to or from JSON.
"""

from __future__ import annotations

from .base import Validatable
from .stream_geometry import StreamGeometry
from .sizing_input import CulvertSizingInput
from .sizing_result import CulvertSizingResult, FlowCapacity
from .field_card import FieldCard, Location

__all__: list[str] = [
    "Validatable",
    "StreamGeometry",
    "CulvertSizingInput",
    "CulvertSizingResult",
    "FlowCapacity",
    "FieldCard",
    "Location",
]
