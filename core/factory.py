"""Fresh deck and joker construction."""

from core.cards import JokerCard, Rank, StandardCard, Suit


def create_standard_deck() -> list[StandardCard]:
    """
    Create the 52 standard cards in canonical order.

    Suit-major (Clubs, Spades, Hearts, Diamonds), rank-minor (2 up to Ace).
    """
    return [StandardCard(rank, suit) for suit in Suit for rank in Rank]


def create_jokers(count: int) -> list[JokerCard]:
    """
    Create ``count`` jokers with ids 1..count.

    Any count is accepted; zero or negative counts produce no jokers.
    Validating the count is up to the caller.
    """
    return [JokerCard(i + 1) for i in range(max(count, 0))]
