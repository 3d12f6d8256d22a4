"""Shared sample data structures used across tests."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from culvert_sizer import (
    CulvertMaterial,
    CulvertSizingInput,
    FieldCard,
    Location,
    Region,
    StreamGeometry,
    compute_culvert_sizing,
)

CONFIG_MAPPING: dict[str, object] = {
    "stream_name": "Sample Creek",
    "drainage_area": 50.0,
    "stream_gradient": 2.0,
    "region": "Coastal BC",
    "culvert_material": "CSP (Corrugated Steel Pipe)",
    "stream_geometry": {
        "top_widths": [2.0],
        "bottom_width": 1.0,
        "depths": [0.5],
    },
    "use_climate_factors": False,
    "use_transportability": False,
    "location": {"latitude": 49.2827, "longitude": -123.1207, "accuracy": 5.0},
}

CONFIG_JSON: str = json.dumps(CONFIG_MAPPING, indent=2)


def build_example_geometry() -> StreamGeometry:
    """A 2.0 m wide, 0.5 m deep channel over a 1.0 m bed."""

    return StreamGeometry.from_measurements(top_widths=[2.0], bottom_width=1.0, depths=[0.5])


def build_example_input(**overrides: Any) -> CulvertSizingInput:
    """Construct the sizing request that mirrors the fixture configuration."""

    values: dict[str, Any] = {
        "drainage_area": 50.0,
        "stream_gradient": 2.0,
        "region": Region.COASTAL,
        "culvert_material": CulvertMaterial.CSP,
        "stream_geometry": build_example_geometry(),
        "use_climate_factors": False,
        "use_transportability": False,
        "stream_name": "Sample Creek",
    }
    values.update(overrides)
    return CulvertSizingInput(**values)


def build_narrow_input(**overrides: Any) -> CulvertSizingInput:
    """A narrow, incised channel that the solver sizes as a round culvert."""

    values: dict[str, Any] = {
        "drainage_area": 120.0,
        "stream_gradient": 1.5,
        "region": Region.INTERIOR,
        "culvert_material": CulvertMaterial.CSP,
        "stream_geometry": StreamGeometry.from_measurements(
            top_widths=[1.2, 1.4, 1.3], bottom_width=0.6, depths=[0.5, 0.6, 0.55]
        ),
        "stream_name": "Narrow Creek",
    }
    values.update(overrides)
    return CulvertSizingInput(**values)


def build_sample_card(card_id: str = "card-1", **overrides: Any) -> FieldCard:
    sizing_input: CulvertSizingInput = build_example_input(**overrides)
    return FieldCard.create(
        sizing_input,
        compute_culvert_sizing(sizing_input),
        location=Location(latitude=49.2827, longitude=-123.1207, accuracy=5.0),
        notes="Culvert outlet perched 0.3 m.",
        card_id=card_id,
        timestamp=datetime(2024, 6, 1, 10, 30, tzinfo=timezone.utc),
    )


def ticking_clock(start: datetime | None = None, step: timedelta = timedelta(minutes=1)) -> Callable[[], datetime]:
    """Return a clock that advances by `step` on every call."""

    current: list[datetime] = [start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)]

    def clock() -> datetime:
        value: datetime = current[0]
        current[0] = value + step
        return value

    return clock
