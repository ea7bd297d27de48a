"""Pytest fixtures for deck tests."""

import pytest
from random import Random

from core.cards import JokerCard, Rank, StandardCard, Suit
from core.deck import DeckEngine
from core.persistence import DeckRepository, InMemoryKeyValueStore


class FirstIndexRandom:
    """Random source that always picks the lowest allowed index."""

    def randint(self, a: int, b: int) -> int:
        return a


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def first_index_rng():
    """Deterministic source for checking the shuffle iteration."""
    return FirstIndexRandom()


@pytest.fixture
def engine(rng):
    """An in-memory engine holding a fresh 52-card deck."""
    return DeckEngine(rng=rng)


@pytest.fixture
def store():
    """An empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def repository(store):
    """A deck repository over the in-memory store."""
    return DeckRepository(store)


@pytest.fixture
def persistent_engine(repository, rng):
    """An engine saving every change to the in-memory repository."""
    return DeckEngine(repository=repository, rng=rng)


@pytest.fixture
def recorder(engine):
    """Collect every event published by the engine."""
    events = []
    engine.subscribe(events.append)
    yield events
    engine.unsubscribe(events.append)


@pytest.fixture
def ace_of_clubs():
    return StandardCard(Rank.ACE, Suit.CLUBS)


@pytest.fixture
def two_of_hearts():
    return StandardCard(Rank.TWO, Suit.HEARTS)


@pytest.fixture
def joker():
    return JokerCard(1)
