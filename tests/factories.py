"""Builders for domain objects used across test modules."""

from datetime import UTC, datetime

from shortfall.models.card import CardEntry
from shortfall.models.collection import Collection
from shortfall.models.deck import Deck

UPLOADED_AT = datetime(2024, 1, 1, tzinfo=UTC)


def make_deck(deck_id: str, name: str, cards: list[tuple[str, int]]) -> Deck:
    return Deck(
        id=deck_id,
        name=name,
        cards=[CardEntry(name=card_name, quantity=qty) for card_name, qty in cards],
        uploaded_at=UPLOADED_AT,
    )


def make_collection(cards: list[tuple[str, int]]) -> Collection:
    return Collection(
        cards=[CardEntry(name=card_name, quantity=qty) for card_name, qty in cards],
        uploaded_at=UPLOADED_AT,
    )
