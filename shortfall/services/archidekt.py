"""
Archidekt deck import.

Fetches public decks from the Archidekt API and converts them to card
entries. Maybeboard cards are not part of the deck and are dropped.
"""

import logging
import re
from typing import Any

import httpx

from shortfall.config import settings
from shortfall.models.card import CardEntry

logger = logging.getLogger(__name__)

# Raw numeric deck id: "12345"
DECK_ID_PATTERN = re.compile(r"^\d+$")

# Deck URLs: archidekt.com/decks/12345/name, archidekt.com/api/decks/12345/
DECK_URL_PATTERN = re.compile(r"archidekt\.com/(?:api/)?decks/(\d+)", re.IGNORECASE)

MAYBEBOARD_CATEGORY = "maybeboard"


class ArchidektError(Exception):
    """Raised when Archidekt cannot provide a deck."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DeckNotFoundError(ArchidektError):
    """Raised when the deck does not exist or is private."""

    pass


def extract_deck_id(value: str) -> str | None:
    """
    Extract an Archidekt deck id from a URL or raw id.

    Accepts:
        - "12345"
        - "https://archidekt.com/decks/12345/deck-name"
        - "www.archidekt.com/decks/12345"

    Returns:
        The numeric id as a string, or None if nothing matched.
    """
    value = value.strip()
    if DECK_ID_PATTERN.match(value):
        return value

    match = DECK_URL_PATTERN.search(value)
    return match.group(1) if match else None


def deck_api_url(deck_id: str) -> str:
    """Archidekt API URL for one deck."""
    return f"{settings.archidekt_api_url.rstrip('/')}/decks/{deck_id}/"


def _is_maybeboard(entry: dict[str, Any]) -> bool:
    categories = entry.get("categories") or []
    return any(str(category).lower() == MAYBEBOARD_CATEGORY for category in categories)


def _to_card_entry(entry: dict[str, Any]) -> CardEntry | None:
    card = entry.get("card") or {}
    name = ((card.get("oracleCard") or {}).get("name") or "").strip()
    quantity = entry.get("quantity") or 0

    if not name or not isinstance(quantity, int) or quantity <= 0:
        return None

    edition = card.get("edition") or {}
    return CardEntry(
        name=name,
        quantity=quantity,
        set_code=edition.get("editioncode") or None,
        set_name=edition.get("name") or None,
        collector_number=card.get("collectorNumber") or None,
    )


def parse_deck_response(data: dict[str, Any]) -> tuple[str, list[CardEntry]]:
    """
    Convert an Archidekt deck payload to (deck name, cards).

    Maybeboard entries and entries without a name or positive quantity
    are skipped.
    """
    cards: list[CardEntry] = []

    for entry in data.get("cards") or []:
        if _is_maybeboard(entry):
            continue
        card = _to_card_entry(entry)
        if card is not None:
            cards.append(card)

    return str(data.get("name") or ""), cards


class ArchidektClient:
    """
    Thin async client for the Archidekt deck API.

    Pass an httpx.AsyncClient to reuse connections; otherwise a client is
    created per request.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": settings.archidekt_user_agent,
        }

    async def fetch_raw(self, deck_id: str) -> dict[str, Any]:
        """
        Fetch the raw deck JSON.

        Raises:
            DeckNotFoundError: If Archidekt answers 404
            ArchidektError: On any other HTTP or transport failure
        """
        url = deck_api_url(deck_id)

        try:
            if self._client is not None:
                response = await self._client.get(
                    url, headers=self.headers, follow_redirects=True
                )
            else:
                async with httpx.AsyncClient(
                    timeout=settings.archidekt_timeout, follow_redirects=True
                ) as client:
                    response = await client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            logger.warning("archidekt_request_failed", extra={"deck_id": deck_id})
            raise ArchidektError(f"Failed to fetch deck {deck_id}: {e}") from e

        if response.status_code == 404:
            raise DeckNotFoundError(
                "Deck not found. Make sure the URL or ID is correct and the deck is public.",
                status_code=404,
            )
        if response.is_error:
            raise ArchidektError(
                f"Archidekt API returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise ArchidektError(f"Invalid response for deck {deck_id}") from e

        return data

    async def fetch_deck(self, deck_id: str) -> tuple[str, list[CardEntry]]:
        """
        Fetch a deck and convert it to card entries.

        Returns:
            Tuple of (deck name, cards)
        """
        data = await self.fetch_raw(deck_id)
        name, cards = parse_deck_response(data)

        logger.info(
            "archidekt_deck_fetched",
            extra={"deck_id": deck_id, "deck_name": name, "card_count": len(cards)},
        )
        return name, cards
