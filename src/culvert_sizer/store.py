"""Field-card storage.

`FieldCardStore` is the storage collaborator used to keep completed
calculations. Two implementations ship with the package:

* `MemoryFieldCardStore` keeps cards in a dict, useful for tests and batch runs.
* `JsonFieldCardStore` persists cards as a JSON array on disk.

Both resolve saves last-write-wins by card id. The store owns `created_at`
(kept from the first save) and `updated_at` (refreshed on every save, never
moving backwards).
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections import OrderedDict
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from .models import FieldCard
from .models.base import normalize_mapping
from .models.field_card import utc_now


class FieldCardStore(ABC):
    """Storage interface for field cards."""

    def __init__(self, *, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock: Callable[[], datetime] = clock

    def save_field_card(self, card: FieldCard) -> FieldCard:
        """Insert or replace `card` and return the stored copy with its timestamps set."""

        cards: OrderedDict[str, FieldCard] = self._load()
        existing: FieldCard | None = cards.get(card.id)
        now: datetime = self._clock()
        created_at: datetime = now
        if existing is not None and existing.created_at is not None:
            created_at = existing.created_at
        elif card.created_at is not None:
            created_at = card.created_at
        updated_at: datetime = now
        previous: datetime | None = existing.updated_at if existing is not None else card.updated_at
        if previous is not None and previous > updated_at:
            updated_at = previous
        if updated_at < created_at:
            updated_at = created_at
        stored: FieldCard = card.with_timestamps(created_at=created_at, updated_at=updated_at)
        cards[card.id] = stored
        self._dump(cards)
        logger.info(
            "{action} field card {card}",
            action="Updated" if existing is not None else "Saved",
            card=stored.describe(),
        )
        return stored

    def get_field_cards(self) -> list[FieldCard]:
        """Return every stored card, oldest first."""

        return list(self._load().values())

    def get_field_card(self, card_id: str) -> FieldCard | None:
        return self._load().get(card_id)

    def delete_field_card(self, card_id: str) -> bool:
        """Remove a card; returns False when no card has `card_id`."""

        cards: OrderedDict[str, FieldCard] = self._load()
        if card_id not in cards:
            return False
        del cards[card_id]
        self._dump(cards)
        logger.info("Deleted field card {card_id}", card_id=card_id)
        return True

    def clear(self) -> None:
        self._dump(OrderedDict())
        logger.info("Cleared field card store")

    @abstractmethod
    def _load(self) -> OrderedDict[str, FieldCard]:
        """Return a fresh, mutable copy of the stored cards keyed by id."""

    @abstractmethod
    def _dump(self, cards: OrderedDict[str, FieldCard]) -> None:
        """Replace the stored cards with `cards`."""


class MemoryFieldCardStore(FieldCardStore):
    """Keeps field cards in process memory."""

    def __init__(self, *, clock: Callable[[], datetime] = utc_now) -> None:
        super().__init__(clock=clock)
        self._cards: OrderedDict[str, FieldCard] = OrderedDict()

    def _load(self) -> OrderedDict[str, FieldCard]:
        return OrderedDict(self._cards)

    def _dump(self, cards: OrderedDict[str, FieldCard]) -> None:
        self._cards = OrderedDict(cards)


class JsonFieldCardStore(FieldCardStore):
    """Persists field cards as a JSON array at `path`."""

    def __init__(self, path: Path, *, clock: Callable[[], datetime] = utc_now) -> None:
        super().__init__(clock=clock)
        self.path: Path = Path(path).expanduser()

    def _load(self) -> OrderedDict[str, FieldCard]:
        cards: OrderedDict[str, FieldCard] = OrderedDict()
        if not self.path.exists():
            return cards
        text: str = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return cards
        try:
            raw: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Field card store {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, list):
            raise ValueError(f"Field card store {self.path} must contain a JSON array.")
        for entry in raw:
            if not isinstance(entry, dict):
                raise ValueError(f"Field card store {self.path} contains a non-object entry.")
            card: FieldCard = FieldCard.from_dict(normalize_mapping(entry))
            cards[card.id] = card
        logger.debug("Loaded {count} field card(s) from {path}", count=len(cards), path=self.path)
        return cards

    def _dump(self, cards: OrderedDict[str, FieldCard]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload: list[dict[str, Any]] = [card.to_dict() for card in cards.values()]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.debug("Wrote {count} field card(s) to {path}", count=len(cards), path=self.path)


__all__: list[str] = ["FieldCardStore", "JsonFieldCardStore", "MemoryFieldCardStore"]
