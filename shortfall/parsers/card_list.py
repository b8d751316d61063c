"""
Parser for card list exports.

Supports:
- Archidekt CSV export with header:
  "Quantity,Name,Set Code,Set Name,Collector Number,Foil,Condition,Language"
- The same CSV layout without a header row: "1,Lightning Bolt,2ed,..."
- Free-form deck lists: "1 Lightning Bolt", "1x Lightning Bolt",
  "Lightning Bolt x1", "Lightning Bolt (1)"

Malformed lines are skipped; parsing never raises for string input.
"""

import re
from collections.abc import Callable
from typing import Literal

from shortfall.models.card import CardEntry
from shortfall.parsers.names import clean_card_name

CardListFormat = Literal["csv", "csv_headerless", "deck_list"]

# Substrings that mark the first line as a CSV header
CSV_HEADER_HINTS = ("quantity", "name", "set")

# Header skipping when parse_archidekt_csv() is called without a hint
_STANDALONE_HEADER_HINTS = ("quantity", "name")

# "1,Lightning Bolt,..." at the very start of the content
HEADERLESS_CSV_PATTERN = re.compile(r"^\d+,")

# Leading integer for quantity columns: "4", " 3", "2x"
_QUANTITY_PATTERN = re.compile(r"^\s*([+-]?\d+)")

# Foil column values meaning "foil"
_FOIL_VALUES = frozenset({"true", "foil"})

# Pattern: "4 Lightning Bolt" or "4x Lightning Bolt"
# Groups: (quantity, card_name)
LEADING_QUANTITY_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

# Pattern: "Lightning Bolt x4" or "Lightning Bolt ×4"
# Groups: (card_name, quantity)
TRAILING_MULTIPLIER_PATTERN = re.compile(r"^(.+?)\s*[x×]\s*(\d+)$", re.IGNORECASE)

# Pattern: "Lightning Bolt (4)"
# Groups: (card_name, quantity)
TRAILING_COUNT_PATTERN = re.compile(r"^(.+?)\s*\((\d+)\)$")

# Board section headers: "Commander", "Sideboard (15)", "Mainboard"
SECTION_HEADER_PATTERN = re.compile(r"^(commander|mainboard|sideboard|maybeboard)", re.IGNORECASE)

COMMENT_PREFIXES = ("//", "#")


def split_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into trimmed fields.

    Double quotes toggle quoted mode; commas inside quotes are kept.
    Quote characters never appear in the output.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def _parse_quantity(value: str | None) -> int:
    """Parse a CSV quantity, defaulting to 1 when missing or not positive."""
    if not value:
        return 1
    match = _QUANTITY_PATTERN.match(value)
    if not match:
        return 1
    quantity = int(match.group(1))
    return quantity if quantity > 0 else 1


def _field(fields: list[str], index: int) -> str | None:
    """Return the field at index, or None if absent or empty."""
    if index < len(fields) and fields[index]:
        return fields[index]
    return None


def parse_archidekt_csv(content: str, skip_header: bool | None = None) -> list[CardEntry]:
    """
    Parse Archidekt-style CSV into card entries.

    Column positions:
        0 quantity, 1 name, 2 set code, 3 set name,
        4 collector number, 5 foil, 6 condition, 7 language

    Args:
        content: Raw CSV text
        skip_header: True/False to force header handling. None skips the
            first line only if it mentions "quantity" or "name".

    Returns:
        List of CardEntry in file order. Lines with fewer than two fields
        or an empty cleaned name are skipped.
    """
    if not content or not content.strip():
        return []

    lines = content.strip().split("\n")

    if skip_header is None:
        first_line = lines[0].lower()
        skip_header = any(hint in first_line for hint in _STANDALONE_HEADER_HINTS)

    cards: list[CardEntry] = []

    for line in lines[1:] if skip_header else lines:
        line = line.strip()
        if not line:
            continue

        fields = split_csv_line(line)
        if len(fields) < 2:
            continue

        name = clean_card_name(fields[1])
        if not name:
            continue

        foil = _field(fields, 5)
        cards.append(
            CardEntry(
                name=name,
                quantity=_parse_quantity(fields[0]),
                set_code=_field(fields, 2),
                set_name=_field(fields, 3),
                collector_number=_field(fields, 4),
                foil=foil is not None and foil.lower() in _FOIL_VALUES,
                condition=_field(fields, 6),
                language=_field(fields, 7),
            )
        )

    return cards


def _is_skippable_deck_line(line: str) -> bool:
    """Comments, section headers and blank lines carry no cards."""
    if not line or line.startswith(COMMENT_PREFIXES):
        return True
    return line.endswith(":") or SECTION_HEADER_PATTERN.match(line) is not None


def _split_quantity_and_name(line: str) -> tuple[int, str]:
    """Find quantity and name in a deck-list line, defaulting to 1 copy."""
    match = LEADING_QUANTITY_PATTERN.match(line)
    if match:
        return int(match.group(1)), match.group(2)

    match = TRAILING_MULTIPLIER_PATTERN.match(line)
    if match:
        return int(match.group(2)), match.group(1)

    match = TRAILING_COUNT_PATTERN.match(line)
    if match:
        return int(match.group(2)), match.group(1)

    return 1, line


def parse_deck_list(content: str) -> list[CardEntry]:
    """
    Parse a free-form deck list.

    Accepts:
        - "1 Lightning Bolt" / "1x Lightning Bolt"
        - "Lightning Bolt x1" / "Lightning Bolt ×1"
        - "Lightning Bolt (1)"
        - "Lightning Bolt" (one copy)

    Skips comments ("//", "#"), "Header:" lines and board section headers.
    """
    if not content or not content.strip():
        return []

    cards: list[CardEntry] = []

    for line in content.strip().split("\n"):
        line = line.strip()
        if _is_skippable_deck_line(line):
            continue

        quantity, raw_name = _split_quantity_and_name(line)
        name = clean_card_name(raw_name)

        if name and quantity > 0:
            cards.append(CardEntry(name=name, quantity=quantity))

    return cards


def _has_csv_header(content: str) -> bool:
    first_line = content.strip().split("\n")[0].lower()
    return "," in first_line and any(hint in first_line for hint in CSV_HEADER_HINTS)


def _is_headerless_csv(content: str) -> bool:
    return HEADERLESS_CSV_PATTERN.match(content.strip()) is not None


# First matching predicate wins; anything else is a deck list.
_FORMAT_RULES: tuple[tuple[Callable[[str], bool], CardListFormat], ...] = (
    (_has_csv_header, "csv"),
    (_is_headerless_csv, "csv_headerless"),
)


def detect_format(content: str) -> CardListFormat:
    """
    Auto-detect the shape of card list text.

    Returns:
        - "csv" if the first line has a comma and a header word
        - "csv_headerless" if the text starts with "<digits>,"
        - "deck_list" otherwise
    """
    for predicate, format_name in _FORMAT_RULES:
        if predicate(content):
            return format_name
    return "deck_list"


def parse_card_list(content: str) -> list[CardEntry]:
    """
    Parse card list text of any supported shape.

    Args:
        content: File contents or pasted text

    Returns:
        List of CardEntry. Empty if nothing recognizable was found.
    """
    if not content or not content.strip():
        return []

    format_name = detect_format(content)

    if format_name == "csv":
        # "1,Sunset Revelry,..." mentions a header word but is still a data row
        return parse_archidekt_csv(content, skip_header=not _is_headerless_csv(content))
    if format_name == "csv_headerless":
        return parse_archidekt_csv(content, skip_header=False)
    return parse_deck_list(content)
