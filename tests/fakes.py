"""Stand-ins for outbound services used by API tests."""

from typing import Any

from shortfall.models.card import CardEntry
from shortfall.services.archidekt import ArchidektClient, ArchidektError


class FakeArchidektClient(ArchidektClient):
    """Serves canned decks instead of calling Archidekt."""

    def __init__(
        self,
        decks: dict[str, tuple[str, list[CardEntry]]] | None = None,
        error: ArchidektError | None = None,
    ) -> None:
        super().__init__()
        self.decks = decks or {}
        self.error = error
        self.requested: list[str] = []

    async def fetch_raw(self, deck_id: str) -> dict[str, Any]:
        self.requested.append(deck_id)
        if self.error is not None:
            raise self.error
        name, cards = self.decks[deck_id]
        return {
            "id": int(deck_id),
            "name": name,
            "cards": [
                {
                    "quantity": card.quantity,
                    "categories": [],
                    "card": {"oracleCard": {"name": card.name}},
                }
                for card in cards
            ],
        }
