"""Tests for card types and the deck factory."""

import pytest

from core.cards import JokerCard, Rank, StandardCard, Suit
from core.factory import create_jokers, create_standard_deck


class TestStandardCard:
    """Tests for the StandardCard class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = StandardCard(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES
        assert card.type == "standard"

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = StandardCard(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test numeric values, Ace high."""
        assert StandardCard(Rank.TWO, Suit.HEARTS).value == 2
        assert StandardCard(Rank.TEN, Suit.HEARTS).value == 10
        assert StandardCard(Rank.JACK, Suit.HEARTS).value == 11
        assert StandardCard(Rank.QUEEN, Suit.HEARTS).value == 12
        assert StandardCard(Rank.KING, Suit.HEARTS).value == 13
        assert StandardCard(Rank.ACE, Suit.HEARTS).value == 14

    def test_card_points_match_value(self):
        card = StandardCard(Rank.KING, Suit.CLUBS)
        assert card.points == card.value

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert StandardCard.from_string("AS") == StandardCard(Rank.ACE, Suit.SPADES)
        assert StandardCard.from_string("2H") == StandardCard(Rank.TWO, Suit.HEARTS)
        assert StandardCard.from_string("10d") == StandardCard(Rank.TEN, Suit.DIAMONDS)
        assert StandardCard.from_string("Tc") == StandardCard(Rank.TEN, Suit.CLUBS)

    def test_card_from_string_with_symbols(self):
        """Test creating cards from strings with suit symbols."""
        assert StandardCard.from_string("A♠") == StandardCard(Rank.ACE, Suit.SPADES)
        assert StandardCard.from_string("K♥") == StandardCard(Rank.KING, Suit.HEARTS)

    @pytest.mark.parametrize("text", ["", "A", "1S", "AX", "11H"])
    def test_card_from_string_invalid(self, text):
        """Test that malformed strings are rejected."""
        with pytest.raises(ValueError):
            StandardCard.from_string(text)

    def test_card_str(self):
        """Test string representation."""
        card = StandardCard(Rank.ACE, Suit.SPADES)
        assert str(card) == "A♠"

    def test_card_key_label_and_image(self):
        """Test display helpers."""
        card = StandardCard(Rank.KING, Suit.HEARTS)
        assert card.key == "Hearts-King"
        assert card.label == "King of Hearts"
        assert card.image == "cards/king_of_hearts.png"

        ten = StandardCard(Rank.TEN, Suit.CLUBS)
        assert ten.label == "10 of Clubs"
        assert ten.image == "cards/10_of_clubs.png"

    def test_card_equality_and_hash(self):
        """Test structural equality and hashing."""
        card1 = StandardCard(Rank.ACE, Suit.SPADES)
        card2 = StandardCard(Rank.ACE, Suit.SPADES)
        card3 = StandardCard(Rank.KING, Suit.SPADES)
        assert card1 == card2
        assert card1 != card3
        assert len({card1, card2}) == 1


class TestJokerCard:
    """Tests for the JokerCard class."""

    def test_joker_fields(self):
        joker = JokerCard(2)
        assert joker.id == 2
        assert joker.type == "joker"
        assert joker.points == 0

    def test_jokers_with_same_id_are_equal(self):
        """Two jokers with the same id are the same logical card."""
        assert JokerCard(1) == JokerCard(1)
        assert JokerCard(1) != JokerCard(2)
        assert len({JokerCard(1), JokerCard(1)}) == 1

    def test_joker_is_not_a_standard_card(self):
        assert JokerCard(1) != StandardCard(Rank.ACE, Suit.CLUBS)

    def test_joker_display_variants(self):
        """Joker 1 is red, others are black."""
        assert JokerCard(1).image == "cards/red_joker.png"
        assert JokerCard(2).image == "cards/black_joker.png"
        assert JokerCard(2).key == "joker-2"
        assert JokerCard(2).label == "Joker #2"

    def test_joker_immutability(self):
        joker = JokerCard(1)
        with pytest.raises(AttributeError):
            joker.id = 2


class TestRankAndSuit:
    """Tests for rank and suit helpers."""

    def test_rank_labels(self):
        assert Rank.TWO.label == "2"
        assert Rank.TEN.label == "10"
        assert Rank.JACK.label == "Jack"
        assert Rank.ACE.label == "Ace"

    def test_rank_from_label(self):
        for rank in Rank:
            assert Rank.from_label(rank.label) is rank

    def test_rank_from_unknown_label(self):
        with pytest.raises(ValueError):
            Rank.from_label("Joker")

    def test_suit_order(self):
        """Clubs < Spades < Hearts < Diamonds."""
        assert [s.order for s in (Suit.CLUBS, Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS)] == [
            0,
            1,
            2,
            3,
        ]


class TestDeckFactory:
    """Tests for fresh deck construction."""

    def test_standard_deck_has_52_unique_cards(self):
        deck = create_standard_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52
        assert len({(c.suit, c.rank) for c in deck}) == 52

    def test_standard_deck_canonical_order(self):
        """Suit-major (Clubs, Spades, Hearts, Diamonds), rank-minor (2..Ace)."""
        deck = create_standard_deck()
        assert deck[0] == StandardCard(Rank.TWO, Suit.CLUBS)
        assert deck[12] == StandardCard(Rank.ACE, Suit.CLUBS)
        assert deck[13] == StandardCard(Rank.TWO, Suit.SPADES)
        assert deck[26] == StandardCard(Rank.TWO, Suit.HEARTS)
        assert deck[-1] == StandardCard(Rank.ACE, Suit.DIAMONDS)
        assert [c.value for c in deck[:13]] == list(range(2, 15))

    def test_standard_deck_is_deterministic(self):
        assert create_standard_deck() == create_standard_deck()

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_create_jokers(self, count):
        jokers = create_jokers(count)
        assert [j.id for j in jokers] == list(range(1, count + 1))

    def test_create_jokers_has_no_upper_bound(self):
        assert len(create_jokers(5)) == 5

    def test_create_jokers_negative_is_empty(self):
        assert create_jokers(-3) == []
