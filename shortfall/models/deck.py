import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime

from shortfall.models.card import CardEntry

# "my-deck_list.CSV" -> "my deck list"
_EXTENSION_PATTERN = re.compile(r"\.(csv|txt)$", re.IGNORECASE)
_SEPARATOR_PATTERN = re.compile(r"[-_]")


@dataclass
class Deck:
    """
    A deck the user wants to build.

    Attributes:
        id: Opaque identifier, unique within a user's deck set
        name: User-assigned display name (not unique, may be renamed)
        cards: Deck entries in list order
        uploaded_at: When the deck was added or last refreshed
        archidekt_id: Set when imported from Archidekt; makes the deck refreshable
    """

    id: str
    name: str
    cards: list[CardEntry] = field(default_factory=list)
    uploaded_at: datetime | None = None
    archidekt_id: str | None = None

    @property
    def is_refreshable(self) -> bool:
        """True if the deck can be re-fetched from Archidekt."""
        return self.archidekt_id is not None

    def total_cards(self) -> int:
        """Total number of card copies in the deck."""
        return sum(card.quantity for card in self.cards)


def new_deck_id() -> str:
    """Generate an opaque deck identifier."""
    return secrets.token_hex(12)


def default_deck_name(filename: str) -> str:
    """Derive a display name from an uploaded file name."""
    name = _EXTENSION_PATTERN.sub("", filename)
    return _SEPARATOR_PATTERN.sub(" ", name).strip()
