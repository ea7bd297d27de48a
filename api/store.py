"""Deck engine construction with Redis, file or in-memory persistence."""

import logging

import redis

from config import AppConfig, config
from core.deck import DeckEngine
from core.persistence import (
    BackgroundDeckWriter,
    DeckRepository,
    FileKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
)

logger = logging.getLogger(__name__)


def create_store(app_config: AppConfig = config) -> KeyValueStore:
    """
    Create the key-value store selected by configuration.

    An unreachable Redis server falls back to the in-memory store.
    """
    backend = app_config.store.backend

    if backend == "redis":
        try:
            redis_client = redis.Redis.from_url(app_config.redis.url)
            redis_client.ping()
            logger.info("Using Redis store at %s:%d", app_config.redis.host, app_config.redis.port)
            return RedisKeyValueStore(redis_client)
        except redis.RedisError as exc:
            logger.warning("Redis unavailable (%s), falling back to in-memory store", exc)
            return InMemoryKeyValueStore()

    if backend == "file":
        store = FileKeyValueStore(app_config.store.path)
        logger.info("Using file store in %s", store.directory)
        return store

    if backend == "memory":
        return InMemoryKeyValueStore()

    raise ValueError(f"Unknown store backend: {backend}")


def create_writer(app_config: AppConfig = config) -> BackgroundDeckWriter:
    """Create the background writer over the configured store."""
    repository = DeckRepository(create_store(app_config), key=app_config.store.key)
    return BackgroundDeckWriter(repository)


def create_engine(app_config: AppConfig, writer: BackgroundDeckWriter) -> DeckEngine:
    """Create the engine, restoring whatever state the writer's store holds."""
    return DeckEngine(
        repository=writer,
        max_history=app_config.deck.max_history,
    )
