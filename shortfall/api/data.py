"""
Stored data management.

Clears everything kept for a user: collection and decks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from shortfall.db import clear_all_data
from shortfall.db.database import get_session

router = APIRouter(prefix="/data", tags=["data"])


class ClearResponse(BaseModel):
    """Response model for clearing user data."""

    user_id: str
    cleared: bool
    message: str = Field(default="", description="User-friendly message about the deletion")


@router.delete("/{user_id}", response_model=ClearResponse)
async def clear_user_data(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ClearResponse:
    """
    Delete the collection and all decks for a user.

    This cannot be undone.
    """
    deleted = await clear_all_data(session, user_id)

    if deleted:
        message = "All data cleared."
    else:
        message = "No stored data found."

    return ClearResponse(user_id=user_id, cleared=deleted > 0, message=message)
