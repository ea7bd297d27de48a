"""Exceptions raised by the deck core."""


class DeckError(Exception):
    """Base class for deck errors."""


class ReentrantMutationError(DeckError):
    """A mutating operation was started from inside an observer callback."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Cannot {operation} while observers of another change are running"
        )
        self.operation = operation


class StoreError(DeckError):
    """A key-value store backend failed to read or write."""


class RecordDecodeError(DeckError):
    """A persisted deck record could not be decoded."""
