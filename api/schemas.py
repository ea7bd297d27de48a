"""Pydantic schemas for API requests and responses."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from config import config


# Deck schemas
class ResetRequest(BaseModel):
    """Request to reset the deck."""

    jokers: int = Field(
        default=0,
        ge=0,
        le=config.deck.max_jokers,
        description="Number of jokers added to the fresh deck",
    )


class DrawRequest(BaseModel):
    """Request to draw cards. A count of 0 draws nothing."""

    count: int = Field(..., ge=0, le=config.deck.max_draw, description="Cards to draw")


class StandardCardResponse(BaseModel):
    """Suited card representation."""

    type: Literal["standard"] = "standard"
    suit: str
    rank: str
    value: int
    key: str
    label: str
    image: str


class JokerCardResponse(BaseModel):
    """Joker representation."""

    type: Literal["joker"] = "joker"
    rank: Literal["Joker"] = "Joker"
    id: int
    key: str
    label: str
    image: str


CardResponse = Annotated[
    Union[StandardCardResponse, JokerCardResponse],
    Field(discriminator="type"),
]


class DeckStateResponse(BaseModel):
    """Current deck state."""

    remaining: list[CardResponse]
    drawn: list[CardResponse]
    remaining_count: int
    drawn_count: int
    drawn_points: int
    can_draw: bool
    can_undo: bool
    can_redo: bool

