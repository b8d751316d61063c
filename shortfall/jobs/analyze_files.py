"""
Analyze collection and deck files from the command line.

Usage:
    shortfall-analyze --collection collection.csv --deck deck-a.txt deck-b.txt
    shortfall-analyze --collection collection.csv --deck deck-a.txt --unallocated
"""

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from shortfall.analysis import (
    analyze_deck_overlaps,
    format_card_entries,
    format_missing_cards,
    get_unallocated_cards,
)
from shortfall.models.collection import Collection
from shortfall.models.deck import Deck, default_deck_name, new_deck_id
from shortfall.parsers.card_list import parse_card_list

logger = logging.getLogger(__name__)


def load_collection_file(path: Path | None) -> Collection:
    """Parse a collection file, or return an empty collection if no path."""
    if path is None:
        return Collection()

    cards = parse_card_list(path.read_text(encoding="utf-8"))
    if not cards:
        logger.warning("No cards found in collection file %s", path)
    return Collection(cards=cards, uploaded_at=datetime.now(UTC))


def load_deck_files(paths: list[Path]) -> list[Deck]:
    """Parse deck files in the given order, skipping files with no cards."""
    decks: list[Deck] = []

    for path in paths:
        cards = parse_card_list(path.read_text(encoding="utf-8"))
        if not cards:
            logger.warning("No cards found in deck file %s, skipping", path)
            continue

        decks.append(
            Deck(
                id=new_deck_id(),
                name=default_deck_name(path.name),
                cards=cards,
                uploaded_at=datetime.now(UTC),
            )
        )
        logger.info("Loaded deck %s with %d entries", path.name, len(cards))

    return decks


def build_report(collection: Collection, decks: list[Deck], include_basic_lands: bool) -> str:
    """Summary lines followed by the missing-card list."""
    analysis = analyze_deck_overlaps(collection, decks)

    lines = [
        f"Decks analyzed: {len(decks)}",
        f"Unique cards needed: {analysis.total_unique_cards}",
        f"Total cards needed: {analysis.total_cards_needed}",
        f"Cards with shortage: {analysis.cards_with_shortage}",
        f"Cards shared by multiple decks: {len(analysis.overlapping_cards)}",
    ]

    missing = format_missing_cards(analysis, include_basic_lands)
    if missing:
        lines.extend(["", "Missing shared cards:", missing])

    return "\n".join(lines)


def run(args: argparse.Namespace) -> str:
    """Run the analysis described by parsed arguments and return the output."""
    collection = load_collection_file(args.collection)
    decks = load_deck_files(args.deck)

    if args.unallocated:
        return format_card_entries(get_unallocated_cards(collection, decks))
    return build_report(collection, decks, args.include_basic_lands)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find cards your decks compete for")
    parser.add_argument(
        "--collection",
        type=Path,
        default=None,
        help="Collection export (Archidekt CSV or deck-list text)",
    )
    parser.add_argument(
        "--deck",
        type=Path,
        nargs="+",
        required=True,
        help="One or more deck files, in priority order",
    )
    parser.add_argument(
        "--unallocated",
        action="store_true",
        help="Print owned cards not used by any deck instead of the report",
    )
    parser.add_argument(
        "--include-basic-lands",
        action="store_true",
        help="Keep basic lands in the missing-card list",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)
    sys.stdout.write(run(args) + "\n")


if __name__ == "__main__":
    main()
