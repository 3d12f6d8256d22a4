"""Helpers for loading `CulvertSizingInput` instances from configuration files."""

from __future__ import annotations

from collections.abc import Mapping, Sequence as ABCSequence
from pathlib import Path
from typing import Any, cast

import json
import math

from loguru import logger

from .classes_references import FieldError, ValidationError
from .models import CulvertSizingInput, Location, StreamGeometry
from .type_helpers import CulvertMaterial, Region, coerce_enum

JSONMapping = Mapping[str, Any]


def load_sizing_input_from_json(path: Path) -> CulvertSizingInput:
    """Read a JSON file from disk and create a `CulvertSizingInput`."""

    raw_data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw_data, Mapping):
        raise ValueError("Top-level JSON document must be an object.")
    data: JSONMapping = cast(JSONMapping, raw_data)
    return sizing_input_from_mapping(data)


def sizing_input_from_mapping(config: JSONMapping) -> CulvertSizingInput:
    """
    Build a `CulvertSizingInput` from a parsed configuration mapping.

    Stream measurements may sit at the top level or inside a `stream_geometry`
    object. Every offending field is collected before raising, so a single
    `ValidationError` lists all of them.

    Raises:
        ValidationError: If any field is missing, non-numeric, negative or unknown.
    """
    errors: list[FieldError] = []

    geometry_section_raw: Any = config.get("stream_geometry", config)
    if not isinstance(geometry_section_raw, Mapping):
        errors.append(FieldError("stream_geometry", "Stream geometry must be an object."))
        geometry_section_raw = {}
    geometry_section: JSONMapping = cast(JSONMapping, geometry_section_raw)

    drainage_area: float = _require_float(config, "drainage_area", errors)
    stream_gradient: float = _require_float(config, "stream_gradient", errors)
    region: Region = _parse_region(config.get("region"), errors)
    material: CulvertMaterial = _parse_culvert_material(config.get("culvert_material"), errors)
    top_widths: list[float] = _parse_measurements(geometry_section, "top_widths", errors)
    depths: list[float] = _parse_measurements(geometry_section, "depths", errors)
    bottom_width: float = _require_float(geometry_section, "bottom_width", errors, context="stream_geometry.")

    projected_rainfall: float | None = None
    if config.get("projected_rainfall") is not None:
        projected_rainfall = _require_float(config, "projected_rainfall", errors)

    sizing_input = CulvertSizingInput(
        drainage_area=drainage_area,
        stream_gradient=stream_gradient,
        region=region,
        culvert_material=material,
        stream_geometry=StreamGeometry.from_measurements(
            top_widths=top_widths, bottom_width=bottom_width, depths=depths
        ),
        use_climate_factors=_parse_bool(config, "use_climate_factors", errors),
        projected_rainfall=projected_rainfall,
        use_transportability=_parse_bool(config, "use_transportability", errors),
        stream_name=str(config.get("stream_name", "")),
    )

    # Fields that already failed to parse keep their parse error only.
    reported: set[str] = {error.field for error in errors}
    errors.extend(error for error in sizing_input.validate() if error.field not in reported)
    if errors:
        logger.debug(
            "Rejected sizing configuration: {errors}",
            errors="; ".join(str(error) for error in errors),
        )
        raise ValidationError(errors)
    return sizing_input


def location_from_mapping(config: JSONMapping) -> Location | None:
    """Return the optional `location` block of a sizing configuration."""

    location_raw: Any = config.get("location")
    if location_raw is None:
        return None
    if not isinstance(location_raw, Mapping):
        raise ValueError("Location must be an object with 'latitude' and 'longitude'.")
    entry: JSONMapping = cast(JSONMapping, location_raw)
    errors: list[FieldError] = []
    latitude: float = _require_float(entry, "latitude", errors, context="location.")
    longitude: float = _require_float(entry, "longitude", errors, context="location.")
    accuracy: float = 0.0
    if entry.get("accuracy") is not None:
        accuracy = _require_float(entry, "accuracy", errors, context="location.")
    if errors:
        raise ValidationError(errors)
    return Location(latitude=latitude, longitude=longitude, accuracy=accuracy)


def _require_float(entry: JSONMapping, key: str, errors: list[FieldError], context: str = "") -> float:
    """
    Fetch a mandatory numeric field, recording a `FieldError` when it is missing or non-numeric.

    Returns NaN for rejected values so model validation still runs for the other fields.
    """
    field_name: str = f"{context}{key}"
    if key not in entry or entry[key] is None or entry[key] == "":
        errors.append(FieldError(field_name, "Value is required."))
        return math.nan
    value: Any = entry[key]
    if isinstance(value, bool):
        errors.append(FieldError(field_name, f"Expected a number, got {value!r}."))
        return math.nan
    try:
        number: float = float(value)
    except (TypeError, ValueError):
        errors.append(FieldError(field_name, f"Expected a number, got {value!r}."))
        return math.nan
    if not math.isfinite(number):
        errors.append(FieldError(field_name, "Value must be a finite number."))
        return math.nan
    if number < 0:
        errors.append(FieldError(field_name, "Value must not be negative."))
    return number


def _parse_measurements(entry: JSONMapping, key: str, errors: list[FieldError]) -> list[float]:
    """
    Parse a list of width or depth readings.

    A single number is accepted as a one-item list. Blank readings are skipped,
    matching how partially filled field sheets are entered.
    """
    field_name: str = f"stream_geometry.{key}"
    raw: Any = entry.get(key)
    if raw is None:
        errors.append(FieldError(field_name, "At least one measurement is required."))
        return []
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        raw = [raw]
    if not isinstance(raw, ABCSequence) or isinstance(raw, (str, bytes)):
        errors.append(FieldError(field_name, "Measurements must be a list of numbers."))
        return []
    values: list[float] = []
    for item in cast(ABCSequence[Any], raw):
        if item is None or item == "":
            continue
        try:
            values.append(float(item))
        except (TypeError, ValueError):
            errors.append(FieldError(field_name, f"Expected a number, got {item!r}."))
            return []
    if not values:
        errors.append(FieldError(field_name, "At least one measurement is required."))
    return values


def _parse_bool(entry: JSONMapping, key: str, errors: list[FieldError]) -> bool:
    """Interpret JSON booleans and the usual "yes"/"no" style strings."""
    value: Any = entry.get(key, False)
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    normalized: str = str(value).strip().lower()
    if normalized in {"true", "yes", "y", "on", "1"}:
        return True
    if normalized in {"false", "no", "n", "off", "0", ""}:
        return False
    errors.append(FieldError(key, f"Expected true or false, got {value!r}."))
    return False


def _parse_region(value: Any, errors: list[FieldError]) -> Region:
    """
    Coerce a configuration string into the corresponding `Region` member.

    Accepts the member name, value or display label, ignoring case
    (e.g. "coastal", "COASTAL", "Coastal BC").
    """
    try:
        return coerce_enum(Region, value, default=Region.COASTAL)
    except ValueError:
        errors.append(FieldError("region", f"Unsupported region '{value}'."))
        return Region.COASTAL


def _parse_culvert_material(value: Any, errors: list[FieldError]) -> CulvertMaterial:
    """
    Coerce a configuration string into the corresponding `CulvertMaterial` member.

    Accepts "csp", "HDPE", "Concrete" or the full labels such as
    "CSP (Corrugated Steel Pipe)".
    """
    try:
        return coerce_enum(CulvertMaterial, value, default=CulvertMaterial.CSP)
    except ValueError:
        errors.append(FieldError("culvert_material", f"Unsupported culvert material '{value}'."))
        return CulvertMaterial.CSP
