"""Deck API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api.schemas import (
    CardResponse,
    DeckStateResponse,
    DrawRequest,
    JokerCardResponse,
    ResetRequest,
    StandardCardResponse,
)
from core.cards import Card, JokerCard
from core.deck import DeckEngine

router = APIRouter()


def get_engine(request: Request) -> DeckEngine:
    """Return the engine created at application startup."""
    return request.app.state.engine


EngineDep = Annotated[DeckEngine, Depends(get_engine)]


def card_to_response(card: Card) -> CardResponse:
    """Convert a card to its response model."""
    if isinstance(card, JokerCard):
        return JokerCardResponse(
            id=card.id,
            key=card.key,
            label=card.label,
            image=card.image,
        )
    return StandardCardResponse(
        suit=card.suit.value,
        rank=card.rank.label,
        value=card.value,
        key=card.key,
        label=card.label,
        image=card.image,
    )


def deck_state_response(engine: DeckEngine) -> DeckStateResponse:
    """Convert engine state to response."""
    remaining = engine.remaining
    drawn = engine.drawn
    return DeckStateResponse(
        remaining=[card_to_response(c) for c in remaining],
        drawn=[card_to_response(c) for c in drawn],
        remaining_count=len(remaining),
        drawn_count=len(drawn),
        drawn_points=engine.drawn_points,
        can_draw=engine.can_draw,
        can_undo=engine.can_undo(),
        can_redo=engine.can_redo(),
    )


@router.get("/state")
async def get_state(engine: EngineDep) -> DeckStateResponse:
    """Get current deck state."""
    return deck_state_response(engine)


@router.post("/reset")
async def reset_deck(engine: EngineDep, request: ResetRequest | None = None) -> DeckStateResponse:
    """Start over with a fresh ordered deck. Clears undo history."""
    engine.reset((request or ResetRequest()).jokers)
    return deck_state_response(engine)


@router.post("/shuffle")
async def shuffle_deck(engine: EngineDep) -> DeckStateResponse:
    """Shuffle the remaining cards."""
    engine.shuffle()
    return deck_state_response(engine)


@router.post("/draw")
async def draw_cards(request: DrawRequest, engine: EngineDep) -> DeckStateResponse:
    """Draw cards from the top of the deck."""
    engine.draw(request.count)
    return deck_state_response(engine)


@router.post("/sort")
async def sort_drawn(engine: EngineDep) -> DeckStateResponse:
    """Sort the drawn cards."""
    engine.sort_drawn()
    return deck_state_response(engine)


@router.post("/undo")
async def undo(engine: EngineDep) -> DeckStateResponse:
    """Undo the last shuffle, draw or sort."""
    engine.undo()
    return deck_state_response(engine)


@router.post("/redo")
async def redo(engine: EngineDep) -> DeckStateResponse:
    """Redo the last undone action."""
    engine.redo()
    return deck_state_response(engine)
