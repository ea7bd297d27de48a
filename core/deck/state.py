"""Deck state snapshots."""

from dataclasses import dataclass
from typing import Iterable

from core.cards import Card


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable capture of the remaining and drawn piles.

    Both piles are stored as tuples of frozen cards, so later changes to the
    engine can never alter a snapshot that was already taken.
    """

    remaining: tuple[Card, ...] = ()
    drawn: tuple[Card, ...] = ()

    @classmethod
    def of(cls, remaining: Iterable[Card], drawn: Iterable[Card]) -> "Snapshot":
        """Build a snapshot from any two card iterables."""
        return cls(remaining=tuple(remaining), drawn=tuple(drawn))

    @property
    def is_empty(self) -> bool:
        """Check if neither pile holds a card."""
        return not self.remaining and not self.drawn

    @property
    def total_cards(self) -> int:
        return len(self.remaining) + len(self.drawn)
