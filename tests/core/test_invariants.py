"""Property-based tests for deck invariants."""

from collections import Counter
from random import Random

from hypothesis import given, settings
from hypothesis import strategies as st

from core.deck import DeckEngine
from core.persistence import DeckRepository, InMemoryKeyValueStore

operation_strategy = st.one_of(
    st.just(("shuffle",)),
    st.just(("sort",)),
    st.just(("undo",)),
    st.just(("redo",)),
    st.tuples(st.just("draw"), st.integers(min_value=-3, max_value=60)),
)


def _apply(engine: DeckEngine, operation: tuple) -> None:
    name = operation[0]
    if name == "shuffle":
        engine.shuffle()
    elif name == "sort":
        engine.sort_drawn()
    elif name == "undo":
        engine.undo()
    elif name == "redo":
        engine.redo()
    elif name == "draw":
        engine.draw(operation[1])


@settings(max_examples=60, deadline=None)
@given(
    jokers=st.integers(min_value=0, max_value=2),
    seed=st.integers(min_value=0, max_value=2**32 - 1),
    operations=st.lists(operation_strategy, max_size=25),
)
def test_partition_invariant(jokers, seed, operations):
    """remaining + drawn is always a permutation of the last reset deck."""
    engine = DeckEngine(rng=Random(seed))
    engine.reset(jokers)
    full_deck = Counter(engine.remaining)

    for operation in operations:
        _apply(engine, operation)
        assert Counter(engine.remaining) + Counter(engine.drawn) == full_deck
        assert not set(engine.remaining) & set(engine.drawn)
        assert len(engine.remaining) + len(engine.drawn) == 52 + jokers


@settings(max_examples=30, deadline=None)
@given(seed=st.integers(min_value=0, max_value=2**32 - 1), drawn=st.integers(0, 52))
def test_shuffle_is_a_permutation(seed, drawn):
    engine = DeckEngine(rng=Random(seed))
    engine.draw(drawn)
    before = Counter(engine.remaining)

    engine.shuffle()

    assert Counter(engine.remaining) == before


@settings(max_examples=30, deadline=None)
@given(operations=st.lists(operation_strategy, min_size=1, max_size=15))
def test_undo_all_returns_to_start(operations):
    engine = DeckEngine(rng=Random(0))
    start = engine.snapshot()

    for operation in operations:
        if operation[0] not in ("undo", "redo"):
            _apply(engine, operation)

    while engine.can_undo():
        engine.undo()

    assert engine.snapshot() == start


@settings(max_examples=30, deadline=None)
@given(
    jokers=st.integers(min_value=0, max_value=2),
    seed=st.integers(min_value=0, max_value=1000),
    operations=st.lists(operation_strategy, max_size=10),
)
def test_persisted_state_matches_engine(jokers, seed, operations):
    repository = DeckRepository(InMemoryKeyValueStore())
    engine = DeckEngine(repository=repository, rng=Random(seed))
    engine.reset(jokers)

    for operation in operations:
        _apply(engine, operation)

    reloaded = DeckEngine(repository=repository)
    assert reloaded.snapshot() == engine.snapshot()
