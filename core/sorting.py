"""Canonical ordering for drawn cards."""

from functools import cmp_to_key
from typing import Iterable

from core.cards import Card, JokerCard


def compare(a: Card, b: Card) -> int:
    """
    Compare two cards.

    Standard cards come first, ordered by suit (Clubs, Spades, Hearts,
    Diamonds) and then by descending value so the Ace leads its suit.
    Jokers follow in ascending id order.

    Returns:
        A negative number if ``a`` sorts first, positive if ``b`` does,
        0 only for equal cards.
    """
    a_joker = isinstance(a, JokerCard)
    b_joker = isinstance(b, JokerCard)

    if a_joker and not b_joker:
        return 1
    if b_joker and not a_joker:
        return -1
    if a_joker and b_joker:
        return a.id - b.id

    suit_diff = a.suit.order - b.suit.order
    if suit_diff:
        return suit_diff
    return b.value - a.value


def sort_key(card: Card) -> tuple[int, int, int]:
    """Tuple key equivalent to :func:`compare`."""
    if isinstance(card, JokerCard):
        return (1, card.id, 0)
    return (0, card.suit.order, -card.value)


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    """Return a new list sorted in canonical order."""
    return sorted(cards, key=cmp_to_key(compare))
