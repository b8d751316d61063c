"""
Cross-deck overlap and shortage analysis.

Walks every deck in order, sums demand per normalized card name, and
compares it against what the collection owns under the same key.
"""

import unicodedata
from collections.abc import Iterable, Sequence

from shortfall.models.analysis import CardOverlap, DeckAnalysis, DeckUsage
from shortfall.models.card import CardEntry
from shortfall.models.collection import Collection
from shortfall.models.deck import Deck
from shortfall.parsers.names import clean_card_name, normalize_card_name


def display_sort_key(name: str) -> tuple[str, str]:
    """
    Alphabetical key for display names.

    Accents and case are ignored first; on a tie lowercase sorts before
    uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), name.swapcase()


def owned_quantities(cards: Iterable[CardEntry]) -> dict[str, int]:
    """Sum collection quantities per normalized name."""
    owned: dict[str, int] = {}
    for card in cards:
        key = normalize_card_name(card.name)
        owned[key] = owned.get(key, 0) + card.quantity
    return owned


def _accumulate_demand(decks: Sequence[Deck]) -> dict[str, CardOverlap]:
    """Build one CardOverlap per normalized name, in first-seen order."""
    overlaps: dict[str, CardOverlap] = {}

    for deck in decks:
        for card in deck.cards:
            # Stored deck names may predate cleaning
            cleaned = clean_card_name(card.name)
            if not cleaned:
                continue

            key = normalize_card_name(cleaned)
            overlap = overlaps.get(key)
            if overlap is None:
                overlap = CardOverlap(card_name=cleaned)
                overlaps[key] = overlap

            overlap.total_needed += card.quantity

            usage = next((u for u in overlap.decks if u.deck_id == deck.id), None)
            if usage is None:
                overlap.decks.append(
                    DeckUsage(deck_id=deck.id, deck_name=deck.name, quantity=card.quantity)
                )
            else:
                usage.quantity += card.quantity

    return overlaps


def analyze_deck_overlaps(collection: Collection, decks: Sequence[Deck]) -> DeckAnalysis:
    """
    Compute overlap and shortage statistics for a deck set.

    Args:
        collection: Owned cards (may be empty)
        decks: Decks in display order; order decides which spelling of a
            card is shown and the order of per-deck usage records

    Returns:
        DeckAnalysis. Summary counters cover every card in any deck, not
        only the overlapping ones.
    """
    overlaps = _accumulate_demand(decks)
    owned = owned_quantities(collection.cards)

    for key, overlap in overlaps.items():
        overlap.owned = owned.get(key, 0)
        overlap.shortage = max(0, overlap.total_needed - overlap.owned)

    all_cards = list(overlaps.values())

    overlapping = sorted(
        (card for card in all_cards if card.deck_count > 1),
        key=lambda card: (-card.shortage, -card.deck_count),
    )
    not_owned = sorted(
        (card for card in all_cards if card.shortage > 0),
        key=lambda card: display_sort_key(card.card_name),
    )

    return DeckAnalysis(
        overlapping_cards=overlapping,
        cards_not_owned=not_owned,
        total_unique_cards=len(all_cards),
        total_cards_needed=sum(card.total_needed for card in all_cards),
        cards_with_shortage=sum(1 for card in all_cards if card.shortage > 0),
    )
