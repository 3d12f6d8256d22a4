"""Public API for culvert-sizer."""

from .classes_references import FieldError, ValidationError
from .config import load_sizing_input_from_json, location_from_mapping, sizing_input_from_mapping
from .flow import (
    DesignFlow,
    DischargeTableFlowEstimator,
    FlowEstimator,
    RegressionFlowEstimator,
    estimate_design_flow,
)
from .models import (
    CulvertSizingInput,
    CulvertSizingResult,
    FieldCard,
    FlowCapacity,
    Location,
    StreamGeometry,
)
from .sizing import compute_culvert_sizing, determine_controlling_factor
from .store import FieldCardStore, JsonFieldCardStore, MemoryFieldCardStore
from .store_path import resolve_store_path
from .transportability import transportability_size
from .type_helpers import (
    ControllingFactor,
    CulvertMaterial,
    CulvertType,
    Region,
    SizingMethod,
    SizingStage,
)
from .writer import FieldCardReportWriter, export_field_cards_csv, field_cards_dataframe

__all__: list[str] = [
    "FieldError",
    "ValidationError",
    "ControllingFactor",
    "CulvertMaterial",
    "CulvertType",
    "Region",
    "SizingMethod",
    "SizingStage",
    "StreamGeometry",
    "CulvertSizingInput",
    "CulvertSizingResult",
    "FlowCapacity",
    "FieldCard",
    "Location",
    "DesignFlow",
    "FlowEstimator",
    "RegressionFlowEstimator",
    "DischargeTableFlowEstimator",
    "estimate_design_flow",
    "compute_culvert_sizing",
    "determine_controlling_factor",
    "transportability_size",
    "FieldCardStore",
    "MemoryFieldCardStore",
    "JsonFieldCardStore",
    "FieldCardReportWriter",
    "field_cards_dataframe",
    "export_field_cards_csv",
    "load_sizing_input_from_json",
    "location_from_mapping",
    "sizing_input_from_mapping",
    "resolve_store_path",
]
