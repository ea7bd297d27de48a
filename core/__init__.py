"""Core deck engine - 100% UI-agnostic."""

from core.cards import Card, JokerCard, Rank, StandardCard, Suit
from core.deck import DeckEngine, Snapshot
from core.factory import create_jokers, create_standard_deck
from core.sorting import compare, sort_cards

__all__ = [
    "Card",
    "JokerCard",
    "Rank",
    "StandardCard",
    "Suit",
    "DeckEngine",
    "Snapshot",
    "create_jokers",
    "create_standard_deck",
    "compare",
    "sort_cards",
]
