from collections import Counter

from shortfall.analysis.export import filter_basic_lands, format_card_entries, format_missing_cards
from shortfall.analysis.overlap import analyze_deck_overlaps
from shortfall.models.analysis import CardOverlap
from shortfall.models.card import CardEntry
from shortfall.parsers.card_list import parse_card_list
from tests.factories import make_collection, make_deck


def build_analysis():
    collection = make_collection([("Forest", 1), ("Sol Ring", 1), ("Opt", 4)])
    decks = [
        make_deck("a", "A", [("Forest", 5), ("Sol Ring", 1), ("Opt", 2), ("Duress", 1)]),
        make_deck(
            "b", "B", [("Forest", 5), ("Sol Ring", 1), ("Opt", 2), ("Snow-Covered Island", 1)]
        ),
        make_deck("c", "C", [("Snow-Covered Island", 2)]),
    ]
    return analyze_deck_overlaps(collection, decks)


class TestFilterBasicLands:
    def test_drops_basics_by_default(self) -> None:
        cards = [CardOverlap("Forest"), CardOverlap("Snow-Covered Swamp"), CardOverlap("Opt")]

        assert [c.card_name for c in filter_basic_lands(cards, False)] == ["Opt"]

    def test_keeps_basics_when_asked(self) -> None:
        cards = [CardOverlap("Forest"), CardOverlap("Opt")]

        assert [c.card_name for c in filter_basic_lands(cards, True)] == ["Forest", "Opt"]


class TestFormatMissingCards:
    def test_lists_overlapping_shortages_without_basics(self) -> None:
        text = format_missing_cards(build_analysis())

        assert text == "1 Sol Ring"

    def test_includes_basics_when_asked(self) -> None:
        text = format_missing_cards(build_analysis(), include_basic_lands=True)

        assert text.splitlines() == ["9 Forest", "3 Snow-Covered Island", "1 Sol Ring"]

    def test_single_deck_shortages_not_listed(self) -> None:
        text = format_missing_cards(build_analysis(), include_basic_lands=True)

        assert "Duress" not in text

    def test_nothing_missing_gives_empty_text(self) -> None:
        analysis = analyze_deck_overlaps(make_collection([("Opt", 4)]), [])

        assert format_missing_cards(analysis) == ""

    def test_output_reimports_as_deck_list(self) -> None:
        text = format_missing_cards(build_analysis(), include_basic_lands=True)

        cards = parse_card_list(text)

        assert {c.name: c.quantity for c in cards} == {
            "Forest": 9,
            "Snow-Covered Island": 3,
            "Sol Ring": 1,
        }


class TestFormatCardEntries:
    def test_sorted_by_name(self) -> None:
        cards = [CardEntry("Opt", 2), CardEntry("brainstorm", 1), CardEntry("Counterspell", 3)]

        assert format_card_entries(cards).splitlines() == [
            "1 brainstorm",
            "3 Counterspell",
            "2 Opt",
        ]

    def test_repeated_names_stay_separate_and_reimport(self) -> None:
        cards = [CardEntry("Island", 10), CardEntry("Island", 3), CardEntry("Fire // Ice", 1)]

        reimported = parse_card_list(format_card_entries(cards))

        assert Counter((c.name, c.quantity) for c in reimported) == Counter(
            (c.name, c.quantity) for c in cards
        )

    def test_empty(self) -> None:
        assert format_card_entries([]) == ""
