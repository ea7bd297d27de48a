"""Deck state engine, events and undo history."""

from core.deck.events import DeckEvent, EventType
from core.deck.state import Snapshot
from core.deck.history import CommandHistory, SnapshotCommand
from core.deck.engine import DeckEngine

__all__ = [
    "DeckEvent",
    "EventType",
    "Snapshot",
    "CommandHistory",
    "SnapshotCommand",
    "DeckEngine",
]
