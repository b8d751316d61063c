"""
Analysis API endpoints.

Overlap/shortage analysis and unallocated cards, recomputed from the stored
collection and decks on every request.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from shortfall.analysis import (
    analyze_deck_overlaps,
    filter_basic_lands,
    format_card_entries,
    format_missing_cards,
    get_unallocated_cards,
)
from shortfall.api.schemas import CardEntryModel, CardOverlapModel
from shortfall.db import load_collection, load_decks
from shortfall.db.database import get_session

router = APIRouter(prefix="/analysis", tags=["analysis"])


class DeckAnalysisResponse(BaseModel):
    """Response model for the overlap analysis."""

    user_id: str
    deck_count: int
    collection_loaded: bool
    overlapping_cards: list[CardOverlapModel] = Field(
        default_factory=list,
        description="Cards used by two or more decks, largest shortage first",
    )
    cards_not_owned: list[CardOverlapModel] = Field(
        default_factory=list,
        description="Cards with a shortage, alphabetical",
    )
    total_unique_cards: int = 0
    total_cards_needed: int = 0
    cards_with_shortage: int = 0


class UnallocatedResponse(BaseModel):
    """Response model for owned cards not used by any deck."""

    user_id: str
    cards: list[CardEntryModel] = Field(default_factory=list)
    unique_cards: int = 0
    total_cards: int = 0


@router.get("/{user_id}", response_model=DeckAnalysisResponse)
async def get_deck_analysis(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    include_basic_lands: Annotated[bool, Query()] = True,
) -> DeckAnalysisResponse:
    """
    Analyze card overlaps across a user's decks.

    Basic lands can be left out of the card lists; summary counters always
    cover every card.
    """
    collection = await load_collection(session, user_id)
    decks = await load_decks(session, user_id)
    analysis = analyze_deck_overlaps(collection, decks)

    overlapping = filter_basic_lands(analysis.overlapping_cards, include_basic_lands)
    not_owned = filter_basic_lands(analysis.cards_not_owned, include_basic_lands)

    return DeckAnalysisResponse(
        user_id=user_id,
        deck_count=len(decks),
        collection_loaded=collection.is_loaded,
        overlapping_cards=[CardOverlapModel.from_overlap(card) for card in overlapping],
        cards_not_owned=[CardOverlapModel.from_overlap(card) for card in not_owned],
        total_unique_cards=analysis.total_unique_cards,
        total_cards_needed=analysis.total_cards_needed,
        cards_with_shortage=analysis.cards_with_shortage,
    )


@router.get("/{user_id}/unallocated", response_model=UnallocatedResponse)
async def get_unallocated(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UnallocatedResponse:
    """Owned cards left over after every deck takes what it needs."""
    collection = await load_collection(session, user_id)
    decks = await load_decks(session, user_id)
    cards = get_unallocated_cards(collection, decks)

    return UnallocatedResponse(
        user_id=user_id,
        cards=[CardEntryModel.from_entry(card) for card in cards],
        unique_cards=len(cards),
        total_cards=sum(card.quantity for card in cards),
    )


@router.get("/{user_id}/missing.txt", response_class=PlainTextResponse)
async def export_missing_cards(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    include_basic_lands: Annotated[bool, Query()] = False,
) -> str:
    """Shortages of shared cards as a deck list."""
    collection = await load_collection(session, user_id)
    decks = await load_decks(session, user_id)
    analysis = analyze_deck_overlaps(collection, decks)
    return format_missing_cards(analysis, include_basic_lands)


@router.get("/{user_id}/unallocated.txt", response_class=PlainTextResponse)
async def export_unallocated(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> str:
    """Unallocated cards as an alphabetical deck list."""
    collection = await load_collection(session, user_id)
    decks = await load_decks(session, user_id)
    return format_card_entries(get_unallocated_cards(collection, decks))
