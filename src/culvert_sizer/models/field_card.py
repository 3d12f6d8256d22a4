"""Persistable field card that pairs a sizing request with its result."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any
from _collections_abc import Mapping

from loguru import logger

from .base import normalize_mapping
from .sizing_input import CulvertSizingInput
from .sizing_result import CulvertSizingResult


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True, slots=True)
class Location:
    """GPS fix captured alongside the measurements. Accuracy is in metres."""

    latitude: float
    longitude: float
    accuracy: float = 0.0

    def describe(self, decimals: int = 6) -> str:
        return f"{self.latitude:.{decimals}f}, {self.longitude:.{decimals}f}"

    def to_dict(self) -> dict[str, Any]:
        return {"latitude": self.latitude, "longitude": self.longitude, "accuracy": self.accuracy}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Location":
        return cls(
            latitude=float(data.get("latitude", 0.0)),
            longitude=float(data.get("longitude", 0.0)),
            accuracy=float(data.get("accuracy", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class FieldCard:
    """A completed sizing calculation as recorded in the field.

    Only `notes` (and the store-managed `updated_at`) change after creation;
    use `with_notes` to obtain the edited copy.
    """

    id: str
    timestamp: datetime
    sizing_input: CulvertSizingInput
    result: CulvertSizingResult
    location: Location | None = None
    name: str = ""
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        sizing_input: CulvertSizingInput,
        result: CulvertSizingResult,
        *,
        location: Location | None = None,
        name: str = "",
        notes: str = "",
        card_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> "FieldCard":
        card = cls(
            id=card_id or str(uuid.uuid4()),
            timestamp=timestamp or utc_now(),
            sizing_input=sizing_input,
            result=result,
            location=location,
            name=name or sizing_input.stream_name,
            notes=notes,
        )
        logger.debug("Assembled field card {card}", card=card.describe())
        return card

    def describe(self) -> str:
        return f"FieldCard(id={self.id}, name={self.name or '<unnamed>'}, size={self.result.recommended_size} mm)"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return self.describe()

    def with_notes(self, notes: str) -> "FieldCard":
        return replace(self, notes=notes)

    def with_timestamps(self, *, created_at: datetime, updated_at: datetime) -> "FieldCard":
        return replace(self, created_at=created_at, updated_at=updated_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": _format_datetime(self.timestamp),
            "name": self.name,
            "notes": self.notes,
            "location": self.location.to_dict() if self.location is not None else None,
            "input": self.sizing_input.to_dict(),
            "result": self.result.to_dict(),
            "created_at": _format_datetime(self.created_at),
            "updated_at": _format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldCard":
        if "id" not in data:
            raise ValueError("Field card records must include an 'id'.")
        location_raw: Any = data.get("location")
        timestamp: datetime | None = _parse_datetime(data.get("timestamp"))
        return cls(
            id=str(data["id"]),
            timestamp=timestamp or utc_now(),
            sizing_input=CulvertSizingInput.from_dict(normalize_mapping(data.get("input"))),
            result=CulvertSizingResult.from_dict(normalize_mapping(data.get("result"))),
            location=Location.from_dict(normalize_mapping(location_raw)) if location_raw else None,
            name=str(data.get("name", "")),
            notes=str(data.get("notes", "")),
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )
