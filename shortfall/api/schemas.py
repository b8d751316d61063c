"""
Pydantic models shared by several routers.

Domain dataclasses stay framework-free; these are their wire shapes.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from shortfall.models.analysis import CardOverlap, DeckUsage
from shortfall.models.card import CardEntry
from shortfall.models.deck import Deck


class CardEntryModel(BaseModel):
    """A single card line."""

    name: str
    quantity: int = Field(default=1, ge=1)
    set_code: str | None = None
    set_name: str | None = None
    collector_number: str | None = None
    foil: bool = False
    condition: str | None = None
    language: str | None = None

    @classmethod
    def from_entry(cls, card: CardEntry) -> "CardEntryModel":
        return cls(
            name=card.name,
            quantity=card.quantity,
            set_code=card.set_code,
            set_name=card.set_name,
            collector_number=card.collector_number,
            foil=card.foil,
            condition=card.condition,
            language=card.language,
        )


class DeckResponse(BaseModel):
    """Response model for a single deck."""

    id: str
    name: str
    cards: list[CardEntryModel] = Field(default_factory=list)
    uploaded_at: datetime | None = None
    archidekt_id: str | None = None
    total_cards: int = 0
    refreshable: bool = Field(
        default=False,
        description="True if the deck was imported from Archidekt and can be refreshed",
    )

    @classmethod
    def from_deck(cls, deck: Deck) -> "DeckResponse":
        return cls(
            id=deck.id,
            name=deck.name,
            cards=[CardEntryModel.from_entry(card) for card in deck.cards],
            uploaded_at=deck.uploaded_at,
            archidekt_id=deck.archidekt_id,
            total_cards=deck.total_cards(),
            refreshable=deck.is_refreshable,
        )


class DeckUsageModel(BaseModel):
    """How many copies one deck needs."""

    deck_id: str
    deck_name: str
    quantity: int

    @classmethod
    def from_usage(cls, usage: DeckUsage) -> "DeckUsageModel":
        return cls(deck_id=usage.deck_id, deck_name=usage.deck_name, quantity=usage.quantity)


class CardOverlapModel(BaseModel):
    """Demand and ownership for one card across decks."""

    card_name: str
    total_needed: int
    owned: int
    shortage: int
    decks: list[DeckUsageModel] = Field(default_factory=list)

    @classmethod
    def from_overlap(cls, overlap: CardOverlap) -> "CardOverlapModel":
        return cls(
            card_name=overlap.card_name,
            total_needed=overlap.total_needed,
            owned=overlap.owned,
            shortage=overlap.shortage,
            decks=[DeckUsageModel.from_usage(usage) for usage in overlap.decks],
        )
