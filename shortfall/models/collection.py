from dataclasses import dataclass, field
from datetime import datetime

from shortfall.models.card import CardEntry


@dataclass
class Collection:
    """
    A user's flat card inventory.

    The same card may appear on several lines (different printings).
    Totals per card are always computed by normalized name, never here.
    uploaded_at is None when no collection has been loaded.
    """

    cards: list[CardEntry] = field(default_factory=list)
    uploaded_at: datetime | None = None

    @property
    def is_loaded(self) -> bool:
        """True once a collection upload has happened."""
        return self.uploaded_at is not None

    def total_cards(self) -> int:
        """Total number of card copies across all lines."""
        return sum(card.quantity for card in self.cards)

    def unique_cards(self) -> int:
        """Number of collection lines."""
        return len(self.cards)
