from shortfall.parsers.card_list import (
    detect_format,
    parse_archidekt_csv,
    parse_card_list,
    parse_deck_list,
    split_csv_line,
)
from shortfall.parsers.names import clean_card_name, is_basic_land, normalize_card_name

__all__ = [
    "clean_card_name",
    "detect_format",
    "is_basic_land",
    "normalize_card_name",
    "parse_archidekt_csv",
    "parse_card_list",
    "parse_deck_list",
    "split_csv_line",
]
