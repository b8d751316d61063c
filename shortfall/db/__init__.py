from shortfall.db.database import get_session, init_db
from shortfall.db.operations import (
    clear_all_data,
    clear_state,
    collection_to_payload,
    deck_to_payload,
    load_collection,
    load_decks,
    load_state,
    payload_to_collection,
    payload_to_deck,
    save_collection,
    save_decks,
    save_state,
)

__all__ = [
    "clear_all_data",
    "clear_state",
    "collection_to_payload",
    "deck_to_payload",
    "get_session",
    "init_db",
    "load_collection",
    "load_decks",
    "load_state",
    "payload_to_collection",
    "payload_to_deck",
    "save_collection",
    "save_decks",
    "save_state",
]
