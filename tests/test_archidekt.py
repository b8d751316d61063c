import httpx
import pytest
import respx

from shortfall.models.card import CardEntry
from shortfall.services.archidekt import (
    ArchidektClient,
    ArchidektError,
    DeckNotFoundError,
    deck_api_url,
    extract_deck_id,
    parse_deck_response,
)

DECK_URL = "https://archidekt.com/api/decks/12345/"


def card_entry(name: str, quantity: int, categories: list[str] | None = None) -> dict:
    return {
        "quantity": quantity,
        "categories": categories or [],
        "card": {
            "collectorNumber": "161",
            "edition": {"editioncode": "2ed", "name": "Unlimited Edition"},
            "oracleCard": {"name": name},
        },
    }


DECK_PAYLOAD = {
    "id": 12345,
    "name": "Izzet Tempo",
    "cards": [
        card_entry("Lightning Bolt", 4, ["Burn"]),
        card_entry("Counterspell", 2),
        card_entry("Opt", 3, ["Maybeboard"]),
    ],
}


class TestExtractDeckId:
    @pytest.mark.parametrize(
        "value",
        [
            "12345",
            "  12345 ",
            "https://archidekt.com/decks/12345/izzet-tempo",
            "https://www.archidekt.com/decks/12345",
            "archidekt.com/api/decks/12345/",
            "HTTPS://ARCHIDEKT.COM/decks/12345",
        ],
    )
    def test_extracts(self, value: str) -> None:
        assert extract_deck_id(value) == "12345"

    @pytest.mark.parametrize(
        "value", ["", "abc", "https://moxfield.com/decks/12345", "archidekt.com/decks/"]
    )
    def test_rejects(self, value: str) -> None:
        assert extract_deck_id(value) is None


class TestParseDeckResponse:
    def test_converts_cards_and_drops_maybeboard(self) -> None:
        name, cards = parse_deck_response(DECK_PAYLOAD)

        assert name == "Izzet Tempo"
        assert [(c.name, c.quantity) for c in cards] == [("Lightning Bolt", 4), ("Counterspell", 2)]
        assert cards[0] == CardEntry(
            name="Lightning Bolt",
            quantity=4,
            set_code="2ed",
            set_name="Unlimited Edition",
            collector_number="161",
        )

    def test_maybeboard_match_ignores_case(self) -> None:
        _, cards = parse_deck_response({"cards": [card_entry("Opt", 1, ["MAYBEBOARD"])]})

        assert cards == []

    def test_skips_unusable_entries(self) -> None:
        data = {
            "cards": [
                card_entry("", 1),
                card_entry("Opt", 0),
                card_entry("Duress", "two"),  # type: ignore[arg-type]
                {"quantity": 1},
                card_entry("Shock", 1),
            ]
        }

        _, cards = parse_deck_response(data)

        assert [c.name for c in cards] == ["Shock"]

    def test_missing_fields(self) -> None:
        assert parse_deck_response({}) == ("", [])


class TestArchidektClient:
    def test_api_url(self) -> None:
        assert deck_api_url("12345") == DECK_URL

    @respx.mock
    async def test_fetch_deck(self) -> None:
        route = respx.get(DECK_URL).mock(return_value=httpx.Response(200, json=DECK_PAYLOAD))

        name, cards = await ArchidektClient().fetch_deck("12345")

        assert route.called
        assert route.calls.last.request.headers["Accept"] == "application/json"
        assert name == "Izzet Tempo"
        assert len(cards) == 2

    @respx.mock
    async def test_fetch_with_shared_client(self) -> None:
        respx.get(DECK_URL).mock(return_value=httpx.Response(200, json=DECK_PAYLOAD))

        async with httpx.AsyncClient() as http:
            data = await ArchidektClient(http).fetch_raw("12345")

        assert data["id"] == 12345

    @respx.mock
    async def test_follows_redirects(self) -> None:
        moved_url = "https://archidekt.com/api/decks/67890/"
        respx.get(DECK_URL).mock(
            return_value=httpx.Response(301, headers={"Location": moved_url})
        )
        respx.get(moved_url).mock(return_value=httpx.Response(200, json=DECK_PAYLOAD))

        name, cards = await ArchidektClient().fetch_deck("12345")

        assert name == "Izzet Tempo"
        assert len(cards) == 2

    @respx.mock
    async def test_shared_client_follows_redirects(self) -> None:
        moved_url = "https://archidekt.com/api/decks/67890/"
        respx.get(DECK_URL).mock(
            return_value=httpx.Response(302, headers={"Location": moved_url})
        )
        respx.get(moved_url).mock(return_value=httpx.Response(200, json=DECK_PAYLOAD))

        async with httpx.AsyncClient() as http:
            data = await ArchidektClient(http).fetch_raw("12345")

        assert data["name"] == "Izzet Tempo"

    @respx.mock
    async def test_not_found(self) -> None:
        respx.get(DECK_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(DeckNotFoundError) as exc_info:
            await ArchidektClient().fetch_deck("12345")

        assert exc_info.value.status_code == 404

    @respx.mock
    async def test_upstream_error_keeps_status(self) -> None:
        respx.get(DECK_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(ArchidektError, match="returned 503") as exc_info:
            await ArchidektClient().fetch_raw("12345")

        assert exc_info.value.status_code == 503
        assert not isinstance(exc_info.value, DeckNotFoundError)

    @respx.mock
    async def test_transport_error(self) -> None:
        respx.get(DECK_URL).mock(side_effect=httpx.ConnectError("boom"))

        with pytest.raises(ArchidektError) as exc_info:
            await ArchidektClient().fetch_raw("12345")

        assert exc_info.value.status_code is None

    @respx.mock
    async def test_invalid_json(self) -> None:
        respx.get(DECK_URL).mock(return_value=httpx.Response(200, content=b"<html>"))

        with pytest.raises(ArchidektError, match="Invalid response"):
            await ArchidektClient().fetch_raw("12345")
