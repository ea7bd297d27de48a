"""Deck state engine with undoable shuffle, draw and sort."""

import logging
from random import Random
from typing import Callable, Iterable, Protocol

from core.cards import Card, StandardCard
from core.deck.events import DeckEvent, EventEmitter, EventHandler, EventType
from core.deck.history import CommandHistory
from core.deck.state import Snapshot
from core.errors import ReentrantMutationError, StoreError
from core.factory import create_jokers, create_standard_deck
from core.sorting import sort_cards

logger = logging.getLogger(__name__)


class StateRepository(Protocol):
    """Where the engine loads its piles from and saves them to."""

    def load(self) -> Snapshot | None: ...

    def save(self, remaining: Iterable[Card], drawn: Iterable[Card]) -> None: ...


class DeckEngine:
    """
    Owner of the remaining and drawn piles.

    Every change is published synchronously to subscribers before the
    operation returns. Shuffle, draw and sort are recorded in the undo
    history; reset is not and clears it instead.

    Mutating the engine from inside an event handler raises
    ``ReentrantMutationError``.
    """

    def __init__(
        self,
        repository: StateRepository | None = None,
        rng: Random | None = None,
        max_history: int | None = None,
    ) -> None:
        """
        Initialize the engine, restoring saved state when available.

        Args:
            repository: Persistent store for the piles, or None to keep state in memory only
            rng: Random number generator used for shuffling
            max_history: Maximum undo depth, None for unbounded
        """
        self._rng = rng or Random()
        self._remaining: list[Card] = []
        self._drawn: list[Card] = []
        self._repository = repository
        self.events = EventEmitter()
        self._history = CommandHistory(self, max_depth=max_history)

        saved = repository.load() if repository is not None else None
        if saved is not None and not saved.is_empty:
            self._remaining = list(saved.remaining)
            self._drawn = list(saved.drawn)
            logger.info(
                "Restored deck state: %d remaining, %d drawn",
                len(self._remaining),
                len(self._drawn),
            )
        else:
            self.reset()

        if repository is not None:
            self.events.subscribe(self._persist, EventType.DECK_CHANGED)
            self.events.subscribe(self._persist, EventType.DRAWN_CHANGED)
            self._persist()

    @property
    def remaining(self) -> tuple[Card, ...]:
        """Cards not yet drawn, next to draw first."""
        return tuple(self._remaining)

    @property
    def drawn(self) -> tuple[Card, ...]:
        """Cards drawn so far."""
        return tuple(self._drawn)

    @property
    def drawn_points(self) -> int:
        """Sum of standard card values in the drawn pile. Jokers count 0."""
        return sum(card.value for card in self._drawn if isinstance(card, StandardCard))

    @property
    def can_draw(self) -> bool:
        return bool(self._remaining)

    def snapshot(self) -> Snapshot:
        """Capture the current piles."""
        return Snapshot.of(self._remaining, self._drawn)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to deck events."""
        self.events.subscribe(handler, event_type)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Detach a handler added with :meth:`subscribe`."""
        self.events.unsubscribe(handler, event_type)

    def reset(self, joker_count: int = 0) -> None:
        """
        Replace the piles with a fresh ordered deck and clear history.

        Args:
            joker_count: Number of jokers appended after the 52 standard cards
        """
        self._check_not_emitting("reset")
        if joker_count < 0:
            raise ValueError("joker_count must not be negative")

        self._history.clear()
        self._remaining = [*create_standard_deck(), *create_jokers(joker_count)]
        self._drawn = []
        logger.debug("Deck reset with %d jokers", joker_count)

        self.events.emit_new(EventType.HISTORY_CLEARED)
        self._publish_remaining()
        self._publish_drawn()

    def shuffle(self) -> None:
        """Shuffle the remaining pile. Undoable."""
        self._run("shuffle", self._shuffle)

    def draw(self, count: int) -> None:
        """
        Move up to ``count`` cards from the front of the deck to the drawn pile.

        Drawing more cards than remain takes what is left. A count of zero
        or less does nothing and is not recorded in history.
        """
        if count <= 0:
            return
        self._run("draw", lambda: self._draw(count))

    def sort_drawn(self) -> None:
        """Sort the drawn pile in canonical order. Undoable."""
        self._run("sort", self._sort_drawn)

    def restore(self, snapshot: Snapshot) -> None:
        """Replace both piles with the contents of ``snapshot``."""
        self._check_not_emitting("restore")
        self._remaining = list(snapshot.remaining)
        self._drawn = list(snapshot.drawn)
        self._publish_remaining()
        self._publish_drawn()

    def undo(self) -> None:
        """Revert the most recent shuffle, draw or sort."""
        self._check_not_emitting("undo")
        self._history.undo()

    def redo(self) -> None:
        """Re-apply the most recently undone operation."""
        self._check_not_emitting("redo")
        self._history.redo()

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    @property
    def max_history(self) -> int | None:
        """Maximum undo depth, None when unbounded."""
        return self._history.max_depth

    def _run(self, operation: str, action: Callable[[], None]) -> None:
        """Run a mutation through the history."""
        self._check_not_emitting(operation)
        self._history.run(action)

    def _shuffle(self) -> None:
        """Fisher-Yates shuffle of the remaining pile."""
        cards = self._remaining
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]
        logger.debug("Shuffled %d cards", len(cards))
        self._publish_remaining()

    def _draw(self, count: int) -> None:
        taken = self._remaining[:count]
        del self._remaining[:count]
        self._drawn.extend(taken)
        logger.debug("Drew %d of %d requested cards", len(taken), count)
        self._publish_remaining()
        self._publish_drawn()

    def _sort_drawn(self) -> None:
        self._drawn = sort_cards(self._drawn)
        self._publish_drawn()

    def _publish_remaining(self) -> None:
        self.events.emit_new(EventType.DECK_CHANGED, self.remaining)

    def _publish_drawn(self) -> None:
        self.events.emit_new(EventType.DRAWN_CHANGED, self.drawn)

    def _check_not_emitting(self, operation: str) -> None:
        if self.events.is_emitting:
            raise ReentrantMutationError(operation)

    def _persist(self, event: DeckEvent | None = None) -> None:
        """Save both piles. Store failures are logged, never raised."""
        if self._repository is None:
            return
        try:
            self._repository.save(self._remaining, self._drawn)
        except StoreError as exc:
            logger.warning("Could not persist deck state: %s", exc)
