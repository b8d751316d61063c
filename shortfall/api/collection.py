"""
Collection API endpoints.

Upload, read and clear a user's card collection.
"""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from shortfall.api.schemas import CardEntryModel
from shortfall.db import load_collection, save_collection
from shortfall.db.database import get_session
from shortfall.models.collection import Collection
from shortfall.parsers.card_list import parse_card_list

router = APIRouter(prefix="/collection", tags=["collection"])


class CollectionResponse(BaseModel):
    """Response model for collection data."""

    user_id: str
    cards: list[CardEntryModel] = Field(default_factory=list)
    uploaded_at: datetime | None = None
    total_cards: int = 0
    unique_cards: int = 0

    @classmethod
    def from_collection(cls, user_id: str, collection: Collection) -> "CollectionResponse":
        return cls(
            user_id=user_id,
            cards=[CardEntryModel.from_entry(card) for card in collection.cards],
            uploaded_at=collection.uploaded_at,
            total_cards=collection.total_cards(),
            unique_cards=collection.unique_cards(),
        )


class CollectionImportRequest(BaseModel):
    """Request model for importing a collection from text."""

    text: str = Field(
        ...,
        description="Raw collection text (Archidekt CSV, headerless CSV, or deck list)",
        examples=["Quantity,Name,Set Code\n4,Lightning Bolt,2ed"],
    )


@router.get("/{user_id}", response_model=CollectionResponse)
async def get_user_collection(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionResponse:
    """
    Get a user's card collection.

    Returns an empty collection with uploaded_at=null if none was uploaded.
    """
    collection = await load_collection(session, user_id)
    return CollectionResponse.from_collection(user_id, collection)


@router.post("/{user_id}/import", response_model=CollectionResponse)
async def import_user_collection(
    user_id: str,
    request: CollectionImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionResponse:
    """
    Import a collection from text, replacing the stored one.

    The format is auto-detected.
    """
    if not request.text or not request.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Import text cannot be empty",
        )

    cards = parse_card_list(request.text)
    if not cards:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid cards found in import text",
        )

    collection = Collection(cards=cards, uploaded_at=datetime.now(UTC))
    await save_collection(session, user_id, collection)

    return CollectionResponse.from_collection(user_id, collection)


@router.delete("/{user_id}", response_model=CollectionResponse)
async def clear_user_collection(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionResponse:
    """
    Clear a user's collection.

    Decks are kept.
    """
    collection = Collection()
    await save_collection(session, user_id, collection)
    return CollectionResponse.from_collection(user_id, collection)
