from shortfall.analysis.export import (
    filter_basic_lands,
    format_card_entries,
    format_missing_cards,
)
from shortfall.analysis.overlap import analyze_deck_overlaps, display_sort_key
from shortfall.analysis.unallocated import get_unallocated_cards

__all__ = [
    "analyze_deck_overlaps",
    "display_sort_key",
    "filter_basic_lands",
    "format_card_entries",
    "format_missing_cards",
    "get_unallocated_cards",
]
