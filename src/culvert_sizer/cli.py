"""Simple CLI entry point for culvert-sizer."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence, cast

from loguru import logger

from .config import location_from_mapping, sizing_input_from_mapping
from .models import CulvertSizingInput, CulvertSizingResult, FieldCard, Location
from .sizing import compute_culvert_sizing
from .store import FieldCardStore, JsonFieldCardStore
from .store_path import resolve_store_path
from .writer import FieldCardReportWriter, export_field_cards_csv, format_culvert, format_decimal


def main(argv: Sequence[str] | None = None) -> int:
    common: argparse.ArgumentParser = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--store",
        type=Path,
        help="Field card store (JSON). Defaults to $CULVERT_SIZER_STORE, STORE_PATH.txt or ~/.culvert-sizer.",
    )
    common.add_argument("--verbose", action="store_true", help="Log sizing details to stderr.")

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Size stream-crossing culverts from field measurements."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    size_parser: argparse.ArgumentParser = subparsers.add_parser(
        name="size",
        parents=[common],
        help="Compute a culvert recommendation from a JSON sizing request.",
    )
    size_parser.add_argument("--config", type=Path, required=True, help="Path to the JSON sizing request.")
    size_parser.add_argument("--save", action="store_true", help="Save the result as a field card.")
    size_parser.add_argument("--name", default="", help="Field card name (defaults to the stream name).")
    size_parser.add_argument("--notes", default="", help="Notes to attach to the saved field card.")
    size_parser.add_argument("--report", type=Path, help="Optional HTML report destination.")

    subparsers.add_parser(name="list", parents=[common], help="List saved field cards.")

    show_parser: argparse.ArgumentParser = subparsers.add_parser(
        name="show", parents=[common], help="Print a saved field card."
    )
    show_parser.add_argument("card_id", help="Field card id.")

    delete_parser: argparse.ArgumentParser = subparsers.add_parser(
        name="delete", parents=[common], help="Delete a saved field card."
    )
    delete_parser.add_argument("card_id", help="Field card id.")

    report_parser: argparse.ArgumentParser = subparsers.add_parser(
        name="report", parents=[common], help="Write an HTML report for a saved field card."
    )
    report_parser.add_argument("card_id", help="Field card id.")
    report_parser.add_argument("--output", type=Path, required=True, help="Destination .html file.")
    report_parser.add_argument("--overwrite", action="store_true", help="Replace output if it already exists.")

    export_parser: argparse.ArgumentParser = subparsers.add_parser(
        name="export-csv", parents=[common], help="Export every saved field card to CSV."
    )
    export_parser.add_argument("--output", type=Path, required=True, help="Destination .csv file.")
    export_parser.add_argument("--overwrite", action="store_true", help="Replace output if it already exists.")

    args: argparse.Namespace = parser.parse_args(list(argv) if argv is not None else None)
    _configure_logging(verbose=args.verbose)
    try:
        store: FieldCardStore = JsonFieldCardStore(args.store or resolve_store_path())
        if args.command == "size":
            _run_size(
                config_path=args.config,
                store=store,
                save=args.save,
                name=args.name,
                notes=args.notes,
                report=args.report,
            )
            return 0
        if args.command == "list":
            _run_list(store)
            return 0
        if args.command == "show":
            print(json.dumps(_require_card(store, args.card_id).to_dict(), indent=2))
            return 0
        if args.command == "delete":
            if not store.delete_field_card(args.card_id):
                raise ValueError(f"No field card with id '{args.card_id}'.")
            print(f"Deleted field card {args.card_id}")
            return 0
        if args.command == "report":
            card: FieldCard = _require_card(store, args.card_id)
            path: Path = FieldCardReportWriter(card).write(args.output, overwrite=args.overwrite)
            print(f"Wrote report to {path}")
            return 0
        if args.command == "export-csv":
            path = export_field_cards_csv(store.get_field_cards(), args.output, overwrite=args.overwrite)
            print(f"Exported field cards to {path}")
            return 0
    except FileExistsError as exc:
        raise SystemExit(str(exc)) from exc
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc
    parser.error(message=f"Unhandled command {args.command}")
    return 1


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _run_size(
    config_path: Path,
    store: FieldCardStore,
    save: bool,
    name: str,
    notes: str,
    report: Path | None,
) -> None:
    config: Mapping[str, Any] = _load_config(config_path)
    sizing_input: CulvertSizingInput = sizing_input_from_mapping(config)
    location: Location | None = location_from_mapping(config)
    result: CulvertSizingResult = compute_culvert_sizing(sizing_input)
    _print_result(sizing_input, result)

    card: FieldCard = FieldCard.create(sizing_input, result, location=location, name=name, notes=notes)
    if save:
        card = store.save_field_card(card)
        print(f"Saved field card {card.id}")
    if report is not None:
        path: Path = FieldCardReportWriter(card).write(report, overwrite=True)
        print(f"Wrote report to {path}")


def _run_list(store: FieldCardStore) -> None:
    cards: list[FieldCard] = store.get_field_cards()
    if not cards:
        print("No field cards saved.")
        return
    for card in cards:
        print(
            f"{card.id}  {card.timestamp:%Y-%m-%d}  {card.name or '<unnamed>'}  "
            f"{format_culvert(card.result)}  ({card.result.method.label})"
        )


def _load_config(config_path: Path) -> Mapping[str, Any]:
    suffix: str = config_path.suffix.lower()
    if suffix != ".json":
        raise ValueError(f"Unsupported configuration extension '{config_path.suffix}'. Use .json.")
    raw: Any = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(raw, Mapping):
        raise ValueError("Top-level JSON document must be an object.")
    return cast(Mapping[str, Any], raw)


def _require_card(store: FieldCardStore, card_id: str) -> FieldCard:
    card: FieldCard | None = store.get_field_card(card_id)
    if card is None:
        raise ValueError(f"No field card with id '{card_id}'.")
    return card


def _print_result(sizing_input: CulvertSizingInput, result: CulvertSizingResult) -> None:
    geometry = sizing_input.stream_geometry
    print(f"Cross-sectional area: {format_decimal(geometry.cross_sectional_area)} m2")
    print(f"Width to depth ratio: {format_decimal(geometry.width_to_depth_ratio)}")
    print(f"Design flow: {format_decimal(result.design_flow)} m3/s (safety factor {result.safety_factor})")
    print(f"Recommended culvert: {format_culvert(result)} by {result.method.label}")
    print(f"Controlling factor: {result.controlling_factor.label}")
    print(f"Capacity: {format_decimal(result.capacity.max_flow)} m3/s")
    print(f"Transportable: {'yes' if result.transportable else 'no'}")
    print(result.comparison_info)
    for risk in result.risk_factors:
        print(f"Risk: {risk}")
