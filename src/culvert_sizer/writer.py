"""Report and export helpers for field cards."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from loguru import logger

from .hydraulics import round_to_decimals
from .models import CulvertSizingResult, FieldCard
from .type_helpers import CulvertType

if TYPE_CHECKING:
    import pandas as pd

_TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "field_card_report.html.j2"

DATAFRAME_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "timestamp",
    "latitude",
    "longitude",
    "drainage_area",
    "stream_gradient",
    "region",
    "region_name",
    "culvert_material",
    "culvert_material_name",
    "average_top_width",
    "average_depth",
    "cross_sectional_area",
    "width_to_depth_ratio",
    "base_flow",
    "climate_factor",
    "safety_factor",
    "design_flow",
    "recommended_size",
    "culvert_type",
    "box_width",
    "box_height",
    "method",
    "method_name",
    "controlling_factor",
    "capacity",
    "velocity",
    "capacity_capped",
    "transportable",
    "notes",
)


def format_decimal(value: float | None, decimals: int = 2) -> str:
    """Format areas, ratios and flows for display."""

    if value is None:
        return "-"
    return f"{round_to_decimals(value, decimals):.{decimals}f}"


def format_size(value: int | float | None) -> str:
    """Format a culvert dimension as whole millimetres."""

    if value is None:
        return "-"
    return f"{int(round(value))} mm"


def format_culvert(result: CulvertSizingResult) -> str:
    """Return the recommended culvert as "1200 mm round" or "2000 x 800 mm box"."""

    if result.culvert_type is CulvertType.BOX and result.box_width is not None and result.box_height is not None:
        return f"{result.box_width} x {result.box_height} mm box"
    return f"{result.recommended_size} mm round"


def _create_jinja_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["decimal"] = format_decimal
    env.filters["size"] = format_size
    return env


class FieldCardReportWriter:
    """Renders a field card as a printable HTML report."""

    def __init__(self, card: FieldCard) -> None:
        self.card: FieldCard = card
        self.env: Environment = _create_jinja_env()

    def render(self) -> str:
        template = self.env.get_template(REPORT_TEMPLATE)
        return template.render(
            card=self.card,
            sizing_input=self.card.sizing_input,
            geometry=self.card.sizing_input.stream_geometry,
            result=self.card.result,
            culvert=format_culvert(self.card.result),
        )

    def write(self, output_path: Path, *, overwrite: bool = True) -> Path:
        """Render and write the report to disk."""
        output_path = output_path.with_suffix(".html")
        if output_path.exists() and not overwrite:
            raise FileExistsError(f"{output_path} already exists. Set overwrite=True to replace it.")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        logger.info("Wrote report for {card} to {path}", card=self.card.describe(), path=output_path)
        return output_path


def _enum_columns(row: dict[str, Any], key: str, value: Enum) -> None:
    row[key] = value.value
    row[f"{key}_name"] = getattr(value, "label", value.name.replace("_", " ").title())


def field_cards_dataframe(cards: Iterable[FieldCard]) -> "pd.DataFrame":
    """Return a pandas DataFrame with one row per field card, indexed by card id."""
    import pandas as pd

    rows: list[dict[str, Any]] = []
    for card in cards:
        sizing_input = card.sizing_input
        geometry = sizing_input.stream_geometry
        result = card.result
        row: dict[str, Any] = {
            "id": card.id,
            "name": card.name,
            "timestamp": card.timestamp.isoformat(),
            "latitude": card.location.latitude if card.location is not None else None,
            "longitude": card.location.longitude if card.location is not None else None,
            "drainage_area": sizing_input.drainage_area,
            "stream_gradient": sizing_input.stream_gradient,
            "average_top_width": geometry.average_top_width,
            "average_depth": geometry.average_depth,
            "cross_sectional_area": geometry.cross_sectional_area,
            "width_to_depth_ratio": geometry.width_to_depth_ratio,
            "base_flow": result.base_flow,
            "climate_factor": result.climate_factor,
            "safety_factor": result.safety_factor,
            "design_flow": result.design_flow,
            "recommended_size": result.recommended_size,
            "culvert_type": result.culvert_type.value,
            "box_width": result.box_width,
            "box_height": result.box_height,
            "controlling_factor": result.controlling_factor.value,
            "capacity": result.capacity.max_flow,
            "velocity": result.capacity.velocity,
            "capacity_capped": result.capacity_capped,
            "transportable": result.transportable,
            "notes": card.notes,
        }
        _enum_columns(row, "region", sizing_input.region)
        _enum_columns(row, "culvert_material", sizing_input.culvert_material)
        _enum_columns(row, "method", result.method)
        rows.append(row)
    df = pd.DataFrame(rows, columns=list(DATAFRAME_COLUMNS))
    return df.set_index("id")


def export_field_cards_csv(cards: Iterable[FieldCard], output_path: Path, *, overwrite: bool = True) -> Path:
    """Write every card to a CSV file and return its path."""
    output_path = output_path.with_suffix(".csv")
    if output_path.exists() and not overwrite:
        raise FileExistsError(f"{output_path} already exists. Set overwrite=True to replace it.")
    df = field_cards_dataframe(cards)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path)
    logger.info("Exported {count} field card(s) to {path}", count=len(df), path=output_path)
    return output_path


__all__: list[str] = [
    "FieldCardReportWriter",
    "export_field_cards_csv",
    "field_cards_dataframe",
    "format_culvert",
    "format_decimal",
    "format_size",
]
