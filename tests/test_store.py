"""Field-card store behaviour for the memory and JSON implementations."""

from __future__ import annotations

from pathlib import Path

import pytest

from culvert_sizer import FieldCard, FieldCardStore, JsonFieldCardStore, MemoryFieldCardStore

from .sample_data import build_sample_card, ticking_clock


@pytest.fixture(params=["memory", "json"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> FieldCardStore:
    if request.param == "memory":
        return MemoryFieldCardStore(clock=ticking_clock())
    return JsonFieldCardStore(tmp_path / "cards" / "field_cards.json", clock=ticking_clock())


def test_save_and_fetch(store: FieldCardStore) -> None:
    saved: FieldCard = store.save_field_card(build_sample_card("a"))
    assert saved.created_at is not None
    assert saved.updated_at == saved.created_at
    assert store.get_field_card("a") == saved
    assert store.get_field_card("missing") is None
    assert [card.id for card in store.get_field_cards()] == ["a"]


def test_last_write_wins_and_keeps_created_at(store: FieldCardStore) -> None:
    first: FieldCard = store.save_field_card(build_sample_card("a"))
    second: FieldCard = store.save_field_card(first.with_notes("Second visit"))
    assert len(store.get_field_cards()) == 1
    stored: FieldCard | None = store.get_field_card("a")
    assert stored is not None
    assert stored.notes == "Second visit"
    assert second.created_at == first.created_at
    assert second.updated_at is not None and first.updated_at is not None
    assert second.updated_at > first.updated_at


def test_listing_keeps_save_order(store: FieldCardStore) -> None:
    for card_id in ("c", "a", "b"):
        store.save_field_card(build_sample_card(card_id))
    assert [card.id for card in store.get_field_cards()] == ["c", "a", "b"]


def test_delete_and_clear(store: FieldCardStore) -> None:
    store.save_field_card(build_sample_card("a"))
    store.save_field_card(build_sample_card("b"))
    assert store.delete_field_card("a")
    assert not store.delete_field_card("a")
    assert [card.id for card in store.get_field_cards()] == ["b"]
    store.clear()
    assert store.get_field_cards() == []


def test_json_store_persists_between_instances(tmp_path: Path) -> None:
    path: Path = tmp_path / "field_cards.json"
    saved: FieldCard = JsonFieldCardStore(path).save_field_card(build_sample_card("a"))
    reopened = JsonFieldCardStore(path)
    assert reopened.get_field_card("a") == saved


def test_json_store_rejects_malformed_file(tmp_path: Path) -> None:
    path: Path = tmp_path / "field_cards.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid JSON"):
        JsonFieldCardStore(path).get_field_cards()

    path.write_text('{"id": "a"}', encoding="utf-8")
    with pytest.raises(ValueError, match="JSON array"):
        JsonFieldCardStore(path).get_field_cards()


def test_json_store_treats_missing_or_empty_file_as_empty(tmp_path: Path) -> None:
    path: Path = tmp_path / "field_cards.json"
    assert JsonFieldCardStore(path).get_field_cards() == []
    path.write_text("", encoding="utf-8")
    assert JsonFieldCardStore(path).get_field_cards() == []
