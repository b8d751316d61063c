from shortfall.models.analysis import CardOverlap, DeckAnalysis, DeckUsage
from shortfall.models.card import CardEntry
from shortfall.models.collection import Collection
from shortfall.models.deck import Deck, default_deck_name, new_deck_id

__all__ = [
    "CardEntry",
    "CardOverlap",
    "Collection",
    "Deck",
    "DeckAnalysis",
    "DeckUsage",
    "default_deck_name",
    "new_deck_id",
]
