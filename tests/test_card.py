"""牌与牌堆单元测试"""

import random
from collections import Counter

import pytest
from src.engine.card import Card, Rank, Suit, Deck, create_deck, sort_cards
from src.engine.errors import InvalidRank, InvalidSuit


# ============================================================
#  Card
# ============================================================

class TestCard:
    """构造、牌力、相等性"""

    def test_strength_of_face_cards(self):
        assert Card(Suit.SPADE, Rank.ACE).strength == 14
        assert Card(Suit.SPADE, Rank.KING).strength == 13
        assert Card(Suit.SPADE, Rank.QUEEN).strength == 12
        assert Card(Suit.SPADE, Rank.JACK).strength == 11

    def test_numeric_strength_is_literal(self):
        for value in range(2, 11):
            assert Card(Suit.CLUB, value).strength == value

    def test_rank_from_label(self):
        card = Card("heart", "10")
        assert card.rank == Rank.TEN
        assert card.suit == Suit.HEART
        assert Card("diamond", "a").rank == Rank.ACE

    def test_invalid_rank(self):
        with pytest.raises(InvalidRank):
            Card(Suit.SPADE, "1")
        with pytest.raises(InvalidRank):
            Card(Suit.SPADE, 15)
        with pytest.raises(InvalidRank):
            Card(Suit.SPADE, "Z")

    def test_invalid_suit(self):
        with pytest.raises(InvalidSuit):
            Card("star", Rank.ACE)

    def test_immutable(self):
        card = Card(Suit.SPADE, Rank.ACE)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_equality_by_suit_and_rank(self):
        assert Card(Suit.SPADE, Rank.ACE) == Card("spade", "A")
        assert Card(Suit.SPADE, Rank.ACE) != Card(Suit.HEART, Rank.ACE)
        assert len({Card(Suit.SPADE, Rank.ACE), Card("♠", 14)}) == 1

    def test_display(self):
        assert Card(Suit.HEART, Rank.TEN).display == "♥10"
        assert Card(Suit.CLUB, Rank.QUEEN).symbol == "♣"

    def test_sort_cards_descending(self):
        cards = [Card(Suit.SPADE, r) for r in (Rank.TWO, Rank.ACE, Rank.NINE)]
        assert [c.rank for c in sort_cards(cards)] == [Rank.ACE, Rank.NINE, Rank.TWO]


# ============================================================
#  Deck
# ============================================================

class TestDeck:
    """重置、洗牌、抽牌"""

    def test_create_deck_fixed_order(self):
        deck = create_deck()
        assert len(deck) == 52
        assert deck[0] == Card(Suit.SPADE, Rank.ACE)
        assert deck[1] == Card(Suit.SPADE, Rank.TWO)
        assert deck[-1] == Card(Suit.CLUB, Rank.KING)

    def test_reset_has_each_card_once(self):
        for seed in range(20):
            deck = Deck(random.Random(seed))
            assert len(deck) == 52
            assert Counter(deck.cards) == Counter(create_deck())

    def test_shuffle_is_permutation(self):
        deck = Deck(random.Random(7))
        drawn = deck.draw(52)
        assert len(deck) == 0
        assert sorted(drawn, key=lambda c: (c.suit.value, c.strength)) == \
            sorted(create_deck(), key=lambda c: (c.suit.value, c.strength))

    def test_shuffle_changes_order(self):
        deck = Deck(random.Random(1))
        assert deck.cards != create_deck()

    def test_seeded_decks_are_identical(self):
        assert Deck(random.Random(42)).cards == Deck(random.Random(42)).cards

    def test_draw_takes_from_end(self):
        deck = Deck(random.Random(3))
        tail = deck.cards[-5:]
        drawn = deck.draw(5)
        assert set(drawn) == set(tail)
        assert deck.size == 47
        assert not set(drawn) & set(deck.cards)

    def test_draw_never_repeats(self):
        deck = Deck(random.Random(5))
        seen = []
        for _ in range(10):
            seen.extend(deck.draw(5))
        assert len(seen) == len(set(seen)) == 50

    def test_draw_more_than_remaining(self):
        deck = Deck(random.Random(9))
        deck.draw(50)
        assert len(deck.draw(5)) == 2
        assert deck.draw(3) == []

    def test_draw_negative_rejected(self):
        with pytest.raises(ValueError):
            Deck().draw(-1)

    def test_reset_restores_full_deck(self):
        deck = Deck(random.Random(11))
        deck.draw(30)
        deck.reset()
        assert Counter(deck.cards) == Counter(create_deck())
