"""Standard and joker cards - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Literal, Union


class Suit(Enum):
    """Card suits, declared in canonical deck order."""

    CLUBS = "Clubs"
    SPADES = "Spades"
    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
        }
        return symbols[self]

    @property
    def order(self) -> int:
        """Position of the suit in canonical order (Clubs first)."""
        return _SUIT_ORDER[self]


_SUIT_ORDER = {suit: index for index, suit in enumerate(Suit)}


class Rank(Enum):
    """Card ranks with their point values (Ace high)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def label(self) -> str:
        """Return the full rank name ('2'..'10', 'Jack', ..., 'Ace')."""
        if self.value <= 10:
            return str(self.value)
        return self.name.title()

    @classmethod
    def from_label(cls, label: str) -> "Rank":
        """Look up a rank by its full name."""
        for rank in cls:
            if rank.label == label:
                return rank
        raise ValueError(f"Invalid rank label: {label}")


@dataclass(frozen=True, slots=True)
class StandardCard:
    """Immutable suited card."""

    type: ClassVar[Literal["standard"]] = "standard"

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"StandardCard({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the numeric value (Jack=11 ... Ace=14)."""
        return self.rank.value

    @property
    def points(self) -> int:
        return self.value

    @property
    def key(self) -> str:
        """Stable identity key, e.g. 'Hearts-King'."""
        return f"{self.suit.value}-{self.rank.label}"

    @property
    def label(self) -> str:
        return f"{self.rank.label} of {self.suit.value}"

    @property
    def image(self) -> str:
        return f"cards/{self.rank.label.lower()}_of_{self.suit.value.lower()}.png"

    @classmethod
    def from_string(cls, s: str) -> "StandardCard":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {str(rank): rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


@dataclass(frozen=True, slots=True)
class JokerCard:
    """Immutable joker, distinguished only by its id."""

    type: ClassVar[Literal["joker"]] = "joker"

    id: int

    def __str__(self) -> str:
        return f"🃏{self.id}"

    def __repr__(self) -> str:
        return f"JokerCard({self.id})"

    @property
    def points(self) -> int:
        """Jokers are worth nothing."""
        return 0

    @property
    def key(self) -> str:
        return f"joker-{self.id}"

    @property
    def label(self) -> str:
        return f"Joker #{self.id}"

    @property
    def image(self) -> str:
        # Joker 1 is drawn red, every other joker black
        variant = "red" if self.id == 1 else "black"
        return f"cards/{variant}_joker.png"


Card = Union[StandardCard, JokerCard]
