"""
Owned cards not claimed by any deck.

Deck usage is consumed against collection lines in collection order, so
several printings of one card share the usage between them. This is a
greedy approximation, not an optimal allocation.
"""

from collections.abc import Sequence
from dataclasses import replace

from shortfall.models.card import CardEntry
from shortfall.models.collection import Collection
from shortfall.models.deck import Deck
from shortfall.parsers.names import clean_card_name, normalize_card_name


def deck_usage(decks: Sequence[Deck]) -> dict[str, int]:
    """Sum quantities per normalized card name across every deck."""
    usage: dict[str, int] = {}
    for deck in decks:
        for card in deck.cards:
            cleaned = clean_card_name(card.name)
            if not cleaned:
                continue
            key = normalize_card_name(cleaned)
            usage[key] = usage.get(key, 0) + card.quantity
    return usage


def get_unallocated_cards(collection: Collection, decks: Sequence[Deck]) -> list[CardEntry]:
    """
    Subtract deck usage from the collection.

    Collection names are assumed clean and are only normalized.

    Returns:
        Copies of collection entries with the leftover quantity, in
        collection order. Fully used entries are omitted.
    """
    usage = deck_usage(decks)
    result: list[CardEntry] = []

    for card in collection.cards:
        key = normalize_card_name(card.name)
        used = usage.get(key, 0)

        remaining = card.quantity - used
        if remaining > 0:
            result.append(replace(card, quantity=remaining))

        if used > 0:
            usage[key] = max(0, used - card.quantity)

    return result
