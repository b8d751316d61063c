"""
Key-value persistence for collections and decks.

Values are stored as JSON payloads per (user_id, key). Typed helpers convert
between payloads and domain models. A payload that cannot be read back is
discarded and the empty default returned.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from shortfall.config import COLLECTION_KEY, DECKS_KEY
from shortfall.models.card import CardEntry
from shortfall.models.collection import Collection
from shortfall.models.db import UserStateDB
from shortfall.models.deck import Deck

logger = logging.getLogger(__name__)

# --- Raw key-value operations ---


async def _get_state_row(session: AsyncSession, user_id: str, key: str) -> UserStateDB | None:
    result = await session.execute(
        select(UserStateDB).where(UserStateDB.user_id == user_id, UserStateDB.key == key)
    )
    return result.scalar_one_or_none()


async def load_state(session: AsyncSession, user_id: str, key: str) -> Any | None:
    """
    Load a stored payload.

    Returns None if nothing is stored under this key.
    """
    row = await _get_state_row(session, user_id, key)
    return row.payload if row is not None else None


async def save_state(session: AsyncSession, user_id: str, key: str, payload: Any) -> None:
    """Insert or replace the payload stored under key."""
    row = await _get_state_row(session, user_id, key)
    if row is None:
        session.add(UserStateDB(user_id=user_id, key=key, payload=payload))
    else:
        row.payload = payload
    await session.flush()


async def clear_state(session: AsyncSession, user_id: str, key: str) -> bool:
    """
    Delete the payload stored under key.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(
        delete(UserStateDB).where(UserStateDB.user_id == user_id, UserStateDB.key == key)
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


async def clear_all_data(session: AsyncSession, user_id: str) -> int:
    """
    Delete everything stored for a user.

    Returns the number of deleted values.
    """
    result = await session.execute(delete(UserStateDB).where(UserStateDB.user_id == user_id))
    return int(result.rowcount)  # type: ignore[attr-defined]


# --- Serialization ---


def card_to_payload(card: CardEntry) -> dict[str, Any]:
    """Convert a card entry to a JSON-safe dict."""
    return {
        "name": card.name,
        "quantity": card.quantity,
        "set_code": card.set_code,
        "set_name": card.set_name,
        "collector_number": card.collector_number,
        "foil": card.foil,
        "condition": card.condition,
        "language": card.language,
    }


def payload_to_card(data: dict[str, Any]) -> CardEntry:
    """Convert a stored dict back to a card entry."""
    return CardEntry(
        name=data["name"],
        quantity=int(data.get("quantity", 1)),
        set_code=data.get("set_code"),
        set_name=data.get("set_name"),
        collector_number=data.get("collector_number"),
        foil=bool(data.get("foil", False)),
        condition=data.get("condition"),
        language=data.get("language"),
    )


def _datetime_to_payload(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _payload_to_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def collection_to_payload(collection: Collection) -> dict[str, Any]:
    return {
        "cards": [card_to_payload(card) for card in collection.cards],
        "uploaded_at": _datetime_to_payload(collection.uploaded_at),
    }


def payload_to_collection(data: dict[str, Any]) -> Collection:
    return Collection(
        cards=[payload_to_card(card) for card in data.get("cards", [])],
        uploaded_at=_payload_to_datetime(data.get("uploaded_at")),
    )


def deck_to_payload(deck: Deck) -> dict[str, Any]:
    return {
        "id": deck.id,
        "name": deck.name,
        "cards": [card_to_payload(card) for card in deck.cards],
        "uploaded_at": _datetime_to_payload(deck.uploaded_at),
        "archidekt_id": deck.archidekt_id,
    }


def payload_to_deck(data: dict[str, Any]) -> Deck:
    return Deck(
        id=data["id"],
        name=data["name"],
        cards=[payload_to_card(card) for card in data.get("cards", [])],
        uploaded_at=_payload_to_datetime(data.get("uploaded_at")),
        archidekt_id=data.get("archidekt_id"),
    )


# --- Collection Operations ---


async def load_collection(session: AsyncSession, user_id: str) -> Collection:
    """
    Load a user's collection.

    Returns an empty, unloaded collection if none is stored or the stored
    value is unreadable.
    """
    payload = await load_state(session, user_id, COLLECTION_KEY)
    if payload is None:
        return Collection()

    try:
        return payload_to_collection(payload)
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.exception(
            "stored_state_corrupt", extra={"user_id": user_id, "key": COLLECTION_KEY}
        )
        await clear_state(session, user_id, COLLECTION_KEY)
        return Collection()


async def save_collection(session: AsyncSession, user_id: str, collection: Collection) -> None:
    """Replace a user's stored collection."""
    await save_state(session, user_id, COLLECTION_KEY, collection_to_payload(collection))


# --- Deck Operations ---


async def load_decks(session: AsyncSession, user_id: str) -> list[Deck]:
    """
    Load a user's decks in stored order.

    Returns an empty list if none are stored or the stored value is unreadable.
    """
    payload = await load_state(session, user_id, DECKS_KEY)
    if payload is None:
        return []

    try:
        return [payload_to_deck(deck) for deck in payload]
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.exception("stored_state_corrupt", extra={"user_id": user_id, "key": DECKS_KEY})
        await clear_state(session, user_id, DECKS_KEY)
        return []


async def save_decks(session: AsyncSession, user_id: str, decks: list[Deck]) -> None:
    """
    Replace a user's stored decks.

    Raises ValueError if two decks share an id.
    """
    ids = [deck.id for deck in decks]
    if len(ids) != len(set(ids)):
        msg = f"Duplicate deck ids for user {user_id}"
        raise ValueError(msg)

    await save_state(session, user_id, DECKS_KEY, [deck_to_payload(deck) for deck in decks])
