"""
Card name cleaning and normalization.

Exports from deck sites decorate names with set codes, collector numbers,
foil markers, categories and color tags, e.g.:

    Lightning Bolt (2ed) 161 *F* [Instant] ^Have,#37d67a^

clean_card_name() strips that decoration for display.
normalize_card_name() produces the key used for every cross-list match.
"""

import re

# Removal rules, applied in order. Each pair is (pattern, replacement).
_CLEANING_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Category/color tag blocks: ^Have,#37d67a^ or ^Category^
    (re.compile(r"\s*\^[^^]*\^\s*"), " "),
    # Set code plus collector number: (abc) 123 or (abc) 123a
    (re.compile(r"\s*\([a-z0-9]+\)\s*\d+[a-z]?\s*", re.IGNORECASE), " "),
    # Bracketed categories: [Artifact], [Land,Creature]
    (re.compile(r"\s*\[[^\]]*\]\s*"), " "),
    # Any parenthesized group left at the end
    (re.compile(r"\s*\([^)]*\)\s*\Z"), ""),
    # Angle-bracket group at the end
    (re.compile(r"\s*<[^>]*>\s*\Z"), ""),
    # Foil marker *F*
    (re.compile(r"\s*\*F\*\s*", re.IGNORECASE), " "),
    # Stray hex color codes like #37d67a
    (re.compile(r"\s*#[0-9a-f]{6}\s*", re.IGNORECASE), " "),
)

_WHITESPACE = re.compile(r"\s+")
_SPLIT_SEPARATOR = re.compile(r"\s*//\s*")
_RIGHT_SINGLE_QUOTE = "’"

BASIC_LANDS = frozenset(
    {
        "plains",
        "island",
        "swamp",
        "mountain",
        "forest",
        "snow-covered plains",
        "snow-covered island",
        "snow-covered swamp",
        "snow-covered mountain",
        "snow-covered forest",
    }
)


def clean_card_name(name: str) -> str:
    """
    Strip export decoration from a raw card name.

    Returns an empty string when nothing but decoration was present;
    callers treat that as "no card".
    """
    for pattern, replacement in _CLEANING_RULES:
        name = pattern.sub(replacement, name)
    return _WHITESPACE.sub(" ", name).strip()


def normalize_card_name(name: str) -> str:
    """
    Map a card name to its comparison key.

    Handles case, spacing around split-card "//" and curly apostrophes:
        "Fire//Ice", "fire  //  ice" -> "fire // ice"
    """
    key = name.lower()
    key = _SPLIT_SEPARATOR.sub(" // ", key)
    key = key.replace(_RIGHT_SINGLE_QUOTE, "'")
    return key.strip()


def is_basic_land(name: str) -> bool:
    """True for the basic lands and their snow-covered versions."""
    return name.lower().strip() in BASIC_LANDS
