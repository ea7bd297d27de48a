"""Key-value stores and the deck state repository."""

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterable

import redis

from core.cards import Card, JokerCard, Rank, StandardCard, Suit
from core.deck.state import Snapshot
from core.errors import RecordDecodeError, StoreError

logger = logging.getLogger(__name__)

DEFAULT_STATE_KEY = "deck-of-cards-state"


class KeyValueStore(ABC):
    """Abstract byte store addressed by string keys."""

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Get the value stored under ``key``."""
        ...

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete ``key``. Missing keys are ignored."""
        ...

    def exists(self, key: str) -> bool:
        """Check if a value is stored under ``key``."""
        return self.get(key) is not None


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store for tests and local development."""

    def __init__(self) -> None:
        self._values: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """
    Store each key as a file in a directory.

    Writes go to a temporary file that is then renamed over the target, so a
    crash mid-write never leaves a half-written record behind.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        """Get the file path for ``key``."""
        return self._directory / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreError(f"Cannot read {self._path(key)}: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, self._path(key))
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreError(f"Cannot write {self._path(key)}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StoreError(f"Cannot delete {self._path(key)}: {exc}") from exc


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed store."""

    def __init__(self, redis_client: redis.Redis, prefix: str = "deck:") -> None:
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        """Get Redis key for ``key``."""
        return f"{self._prefix}{key}"

    def get(self, key: str) -> bytes | None:
        try:
            return self._redis.get(self._key(key))
        except redis.RedisError as exc:
            raise StoreError(f"Redis GET failed: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        try:
            self._redis.set(self._key(key), value)
        except redis.RedisError as exc:
            raise StoreError(f"Redis SET failed: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
        except redis.RedisError as exc:
            raise StoreError(f"Redis DEL failed: {exc}") from exc

    def exists(self, key: str) -> bool:
        try:
            return self._redis.exists(self._key(key)) > 0
        except redis.RedisError as exc:
            raise StoreError(f"Redis EXISTS failed: {exc}") from exc


def serialize_card(card: Card) -> dict[str, Any]:
    """Serialize a card to a dict."""
    if isinstance(card, JokerCard):
        return {"type": "joker", "rank": "Joker", "id": card.id}
    return {
        "type": "standard",
        "suit": card.suit.value,
        "rank": card.rank.label,
        "value": card.value,
    }


def deserialize_card(data: dict[str, Any]) -> Card:
    """
    Deserialize a card from a dict.

    Raises:
        RecordDecodeError: If the dict does not describe a valid card
    """
    try:
        card_type = data["type"]
        if card_type == "joker":
            card_id = data["id"]
            if not isinstance(card_id, int) or isinstance(card_id, bool):
                raise ValueError(f"Joker id must be an integer, got {card_id!r}")
            return JokerCard(card_id)
        if card_type == "standard":
            card = StandardCard(Rank.from_label(data["rank"]), Suit(data["suit"]))
            if "value" in data and data["value"] != card.value:
                raise ValueError(f"Value {data['value']!r} does not match {card.label}")
            return card
    except (KeyError, TypeError, ValueError) as exc:
        raise RecordDecodeError(f"Invalid card record {data!r}: {exc}") from exc
    raise RecordDecodeError(f"Unknown card type in {data!r}")


def encode_record(remaining: Iterable[Card], drawn: Iterable[Card]) -> bytes:
    """Encode both piles as one JSON record."""
    record = {
        "remaining": [serialize_card(c) for c in remaining],
        "drawn": [serialize_card(c) for c in drawn],
    }
    return json.dumps(record).encode("utf-8")


def decode_record(raw: bytes) -> Snapshot:
    """
    Decode a JSON record produced by :func:`encode_record`.

    Records written under the older ``deck`` field name are accepted too.

    Raises:
        RecordDecodeError: If the bytes are not a valid record
    """
    try:
        record = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise RecordDecodeError(f"Record is not valid JSON: {exc}") from exc

    if not isinstance(record, dict):
        raise RecordDecodeError("Record must be a JSON object")

    remaining = record.get("remaining", record.get("deck"))
    drawn = record.get("drawn")
    if not isinstance(remaining, list) or not isinstance(drawn, list):
        raise RecordDecodeError("Record must hold 'remaining' and 'drawn' lists")

    for item in (*remaining, *drawn):
        if not isinstance(item, dict):
            raise RecordDecodeError(f"Card record must be an object, got {item!r}")

    return Snapshot.of(
        (deserialize_card(c) for c in remaining),
        (deserialize_card(c) for c in drawn),
    )


class DeckRepository:
    """Persist the remaining and drawn piles as one record under a fixed key."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STATE_KEY) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, remaining: Iterable[Card], drawn: Iterable[Card]) -> None:
        """
        Save both piles.

        Raises:
            StoreError: If the backend write fails
        """
        self._store.set(self._key, encode_record(remaining, drawn))

    def load(self) -> Snapshot | None:
        """
        Load the last saved piles.

        Returns:
            The saved snapshot, or None if nothing usable is stored. A record
            that fails to decode is deleted.
        """
        try:
            raw = self._store.get(self._key)
        except StoreError as exc:
            logger.warning("Could not read saved deck state: %s", exc)
            return None

        if raw is None:
            return None

        try:
            return decode_record(raw)
        except RecordDecodeError as exc:
            logger.warning("Discarding corrupt deck state: %s", exc)
            self.clear()
            return None

    def clear(self) -> None:
        """Delete the saved record."""
        try:
            self._store.delete(self._key)
        except StoreError as exc:
            logger.warning("Could not delete saved deck state: %s", exc)


class BackgroundDeckWriter:
    """
    Save deck records on a worker thread so mutations never wait on the store.

    Saves are written in order by a single worker. When several saves pile
    up before the worker gets to them, only the newest state is written.
    Loading stays synchronous and happens once at engine start-up.
    """

    def __init__(self, repository: DeckRepository) -> None:
        self._repository = repository
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="deck-writer")
        self._lock = threading.Lock()
        self._pending: Snapshot | None = None
        self._last_write: Future[None] | None = None

    @property
    def repository(self) -> DeckRepository:
        return self._repository

    def load(self) -> Snapshot | None:
        return self._repository.load()

    def save(self, remaining: Iterable[Card], drawn: Iterable[Card]) -> None:
        """Queue both piles for writing and return immediately."""
        snapshot = Snapshot.of(remaining, drawn)
        with self._lock:
            queued = self._pending is not None
            self._pending = snapshot
            if not queued:
                self._last_write = self._executor.submit(self._write_pending)

    def _write_pending(self) -> None:
        with self._lock:
            snapshot, self._pending = self._pending, None
        if snapshot is None:
            return
        try:
            self._repository.save(snapshot.remaining, snapshot.drawn)
        except StoreError as exc:
            logger.warning("Could not persist deck state: %s", exc)

    def flush(self, timeout: float | None = None) -> None:
        """
        Wait until every queued save has been written.

        Raises:
            TimeoutError: If the writes do not finish within ``timeout`` seconds
        """
        with self._lock:
            last_write = self._last_write
        if last_write is not None:
            last_write.result(timeout=timeout)

    def close(self) -> None:
        """Write any queued save and stop the worker."""
        self._executor.shutdown(wait=True)
