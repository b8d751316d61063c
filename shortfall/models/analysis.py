from dataclasses import dataclass, field


@dataclass
class DeckUsage:
    """How many copies of one card a single deck asks for."""

    deck_id: str
    deck_name: str
    quantity: int


@dataclass
class CardOverlap:
    """
    Aggregated demand for one card across all decks.

    Keyed externally by normalized name. card_name is the display form of the
    first occurrence seen while walking decks in order.
    """

    card_name: str
    total_needed: int = 0
    owned: int = 0
    shortage: int = 0
    decks: list[DeckUsage] = field(default_factory=list)

    @property
    def deck_count(self) -> int:
        """Number of distinct decks using this card."""
        return len(self.decks)


@dataclass
class DeckAnalysis:
    """
    Full overlap/shortage result for a collection and a deck set.

    Attributes:
        overlapping_cards: Cards used by two or more decks, biggest shortage first
        cards_not_owned: Every card with a shortage, alphabetical
        total_unique_cards: Distinct cards across all decks
        total_cards_needed: Sum of demand across all decks
        cards_with_shortage: Distinct cards with shortage > 0
    """

    overlapping_cards: list[CardOverlap] = field(default_factory=list)
    cards_not_owned: list[CardOverlap] = field(default_factory=list)
    total_unique_cards: int = 0
    total_cards_needed: int = 0
    cards_with_shortage: int = 0
