"""Deck change events and the observer registry."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Callable

from core.cards import Card


class EventType(Enum):
    """Types of deck events."""

    # Carries the new remaining pile
    DECK_CHANGED = auto()
    # Carries the new drawn pile
    DRAWN_CHANGED = auto()
    # Undo/redo stacks were emptied by a reset
    HISTORY_CLEARED = auto()


@dataclass(frozen=True)
class DeckEvent:
    """
    Immutable deck event.

    Events are the only channel through which observers (persistence,
    rendering, streaming) learn about changes to the engine.
    """

    event_type: EventType
    cards: tuple[Card, ...] = ()
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {len(self.cards)} cards"


# Type alias for event handlers
EventHandler = Callable[[DeckEvent], None]


class EventEmitter:
    """
    Synchronous event emitter for deck events.

    Allows subscribing to specific event types or all events. Handlers run
    in subscription order on the caller's thread.
    """

    def __init__(self) -> None:
        """Initialize the event emitter."""
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._emitting = 0

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Unsubscribe from events.

        Unknown handlers are ignored so consumers can detach unconditionally
        on teardown.

        Args:
            handler: Handler to remove
            event_type: Event type to unsubscribe from
        """
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                pass

    def emit(self, event: DeckEvent) -> None:
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        self._emitting += 1
        try:
            # Copy so a handler may unsubscribe itself while being called
            for handler in list(self._handlers.get(event.event_type, ())):
                handler(event)

            for handler in list(self._handlers.get(None, ())):
                handler(event)
        finally:
            self._emitting -= 1

    def emit_new(self, event_type: EventType, cards: tuple[Card, ...] = ()) -> DeckEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            cards: Pile carried by the event

        Returns:
            The created event
        """
        event = DeckEvent(event_type=event_type, cards=cards)
        self.emit(event)
        return event

    @property
    def is_emitting(self) -> bool:
        """Check if handlers are currently being called."""
        return self._emitting > 0

    def handler_count(self, event_type: EventType | None = None) -> int:
        """Return the number of handlers subscribed to ``event_type``."""
        return len(self._handlers.get(event_type, ()))
