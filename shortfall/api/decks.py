"""
Deck API endpoints.

Add decks from text or Archidekt, rename, reorder, refresh and remove them.
Deck order is preserved; it decides which spelling of a shared card is shown
in the analysis.
"""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from shortfall.api.schemas import DeckResponse
from shortfall.db import load_decks, save_decks
from shortfall.db.database import get_session
from shortfall.models.deck import Deck, default_deck_name, new_deck_id
from shortfall.parsers.card_list import parse_card_list
from shortfall.services.archidekt import (
    ArchidektClient,
    ArchidektError,
    DeckNotFoundError,
    extract_deck_id,
)

router = APIRouter(prefix="/decks", tags=["decks"])


def get_archidekt_client() -> ArchidektClient:
    """Dependency providing the Archidekt client."""
    return ArchidektClient()


class DeckListResponse(BaseModel):
    """Response model for a user's decks."""

    user_id: str
    decks: list[DeckResponse]
    count: int


class DeckCreateRequest(BaseModel):
    """Request model for adding a deck from text."""

    text: str = Field(
        ...,
        description="Deck list or CSV text",
        examples=["1 Sol Ring\n1 Command Tower"],
    )
    name: str | None = Field(default=None, description="Deck name")
    filename: str | None = Field(
        default=None,
        description="Uploaded file name, used for the default name when name is absent",
        examples=["atraxa-superfriends.txt"],
    )


class ArchidektImportRequest(BaseModel):
    """Request model for importing a deck from Archidekt."""

    url: str = Field(
        ...,
        description="Archidekt deck URL or numeric deck id",
        examples=["https://archidekt.com/decks/12345/my-deck"],
    )
    name: str | None = Field(default=None, description="Override the Archidekt deck name")


class DeckRenameRequest(BaseModel):
    """Request model for renaming a deck."""

    name: str


class DeckReorderRequest(BaseModel):
    """Request model for moving a deck within the list."""

    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


def _find_deck(decks: list[Deck], deck_id: str) -> Deck:
    for deck in decks:
        if deck.id == deck_id:
            return deck
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Deck '{deck_id}' not found",
    )


def _archidekt_http_error(error: ArchidektError) -> HTTPException:
    if isinstance(error, DeckNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))


def _list_response(user_id: str, decks: list[Deck]) -> DeckListResponse:
    return DeckListResponse(
        user_id=user_id,
        decks=[DeckResponse.from_deck(deck) for deck in decks],
        count=len(decks),
    )


@router.get("/{user_id}", response_model=DeckListResponse)
async def get_user_decks(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckListResponse:
    """Get a user's decks in list order."""
    decks = await load_decks(session, user_id)
    return _list_response(user_id, decks)


@router.post("/{user_id}", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def add_deck(
    user_id: str,
    request: DeckCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Add a deck from text.

    The name defaults to the file name without extension, with dashes and
    underscores turned into spaces.
    """
    name = (request.name or "").strip()
    if not name and request.filename:
        name = default_deck_name(request.filename)
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deck name cannot be empty",
        )

    cards = parse_card_list(request.text)
    if not cards:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid cards found in deck text",
        )

    deck = Deck(id=new_deck_id(), name=name, cards=cards, uploaded_at=datetime.now(UTC))

    decks = await load_decks(session, user_id)
    decks.append(deck)
    await save_decks(session, user_id, decks)

    return DeckResponse.from_deck(deck)


@router.post(
    "/{user_id}/archidekt", response_model=DeckResponse, status_code=status.HTTP_201_CREATED
)
async def import_archidekt_deck(
    user_id: str,
    request: ArchidektImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    client: Annotated[ArchidektClient, Depends(get_archidekt_client)],
) -> DeckResponse:
    """
    Import a public deck from Archidekt.

    Maybeboard cards are excluded. The deck keeps its Archidekt id so it can
    be refreshed later.
    """
    archidekt_id = extract_deck_id(request.url)
    if archidekt_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Not a valid Archidekt deck URL or id",
        )

    try:
        remote_name, cards = await client.fetch_deck(archidekt_id)
    except ArchidektError as e:
        raise _archidekt_http_error(e) from e

    name = (request.name or "").strip() or remote_name.strip() or f"Archidekt {archidekt_id}"
    deck = Deck(
        id=new_deck_id(),
        name=name,
        cards=cards,
        uploaded_at=datetime.now(UTC),
        archidekt_id=archidekt_id,
    )

    decks = await load_decks(session, user_id)
    decks.append(deck)
    await save_decks(session, user_id, decks)

    return DeckResponse.from_deck(deck)


@router.post("/{user_id}/reorder", response_model=DeckListResponse)
async def reorder_decks(
    user_id: str,
    request: DeckReorderRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckListResponse:
    """Move one deck to a new position."""
    decks = await load_decks(session, user_id)

    if request.from_index >= len(decks) or request.to_index >= len(decks):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Index out of range for {len(decks)} decks",
        )

    deck = decks.pop(request.from_index)
    decks.insert(request.to_index, deck)
    await save_decks(session, user_id, decks)

    return _list_response(user_id, decks)


@router.patch("/{user_id}/{deck_id}", response_model=DeckResponse)
async def rename_deck(
    user_id: str,
    deck_id: str,
    request: DeckRenameRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """Rename a deck. Names need not be unique."""
    name = request.name.strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deck name cannot be empty",
        )

    decks = await load_decks(session, user_id)
    deck = _find_deck(decks, deck_id)
    deck.name = name
    await save_decks(session, user_id, decks)

    return DeckResponse.from_deck(deck)


@router.post("/{user_id}/{deck_id}/refresh", response_model=DeckResponse)
async def refresh_deck(
    user_id: str,
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    client: Annotated[ArchidektClient, Depends(get_archidekt_client)],
) -> DeckResponse:
    """
    Re-fetch an imported deck from Archidekt.

    Cards are replaced; the deck keeps its id, name and position.
    """
    decks = await load_decks(session, user_id)
    deck = _find_deck(decks, deck_id)

    if deck.archidekt_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only decks imported from Archidekt can be refreshed",
        )

    try:
        _, cards = await client.fetch_deck(deck.archidekt_id)
    except ArchidektError as e:
        raise _archidekt_http_error(e) from e

    deck.cards = cards
    deck.uploaded_at = datetime.now(UTC)
    await save_decks(session, user_id, decks)

    return DeckResponse.from_deck(deck)


@router.delete("/{user_id}/{deck_id}", response_model=DeckListResponse)
async def remove_deck(
    user_id: str,
    deck_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckListResponse:
    """Remove a deck and return the remaining list."""
    decks = await load_decks(session, user_id)
    deck = _find_deck(decks, deck_id)
    remaining = [d for d in decks if d.id != deck.id]
    await save_decks(session, user_id, remaining)

    return _list_response(user_id, remaining)
