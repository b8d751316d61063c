"""
Plain-text exports in "<quantity> <name>" deck-list form.

The output re-imports through parse_card_list().
"""

from collections.abc import Sequence

from shortfall.analysis.overlap import display_sort_key
from shortfall.models.analysis import CardOverlap, DeckAnalysis
from shortfall.models.card import CardEntry
from shortfall.parsers.names import is_basic_land


def filter_basic_lands(
    cards: Sequence[CardOverlap], include_basic_lands: bool
) -> list[CardOverlap]:
    """Drop basic lands unless they were asked for."""
    if include_basic_lands:
        return list(cards)
    return [card for card in cards if not is_basic_land(card.card_name)]


def format_missing_cards(analysis: DeckAnalysis, include_basic_lands: bool = False) -> str:
    """Shortage of every overlapping card, one line per card."""
    missing = [card for card in analysis.overlapping_cards if card.shortage > 0]
    missing = filter_basic_lands(missing, include_basic_lands)
    return "\n".join(f"{card.shortage} {card.card_name}" for card in missing)


def format_card_entries(cards: Sequence[CardEntry]) -> str:
    """Card entries sorted by name, one line per entry."""
    ordered = sorted(cards, key=lambda card: display_sort_key(card.name))
    return "\n".join(f"{card.quantity} {card.name}" for card in ordered)
