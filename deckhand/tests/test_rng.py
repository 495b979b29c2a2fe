"""
Tests for the seeded generator and the deck.

Tests:
- Known first values
- Determinism and seed masking
- Shuffle, pick and range
- Canonical deck order and ids
"""

import pytest

from ..engine_core.cards import Rank, Suit, deal, standard_deck
from ..engine_core.rng import MASK, SeededRNG


class TestSeededRNG:
    """Tests for SeededRNG."""

    def test_first_value_seed_42(self):
        """First step of the LCG from seed 42."""
        # 42 * 1103515245 + 12345 = 46347652635; masked to 31 bits
        assert SeededRNG(42).next() == 1250496027 / MASK

    def test_first_value_seed_0(self):
        assert SeededRNG(0).next() == 12345 / MASK

    def test_second_value_seed_42_uses_double_arithmetic(self):
        """
        1250496027 * 1103515245 needs 61 bits, so in doubles both the
        product and the sum with the increment round to multiples of 256.
        JavaScript lands on 1116302080; exact integer math would give
        1116302264.
        """
        rng = SeededRNG(42)
        rng.next()
        value = rng.next()
        assert value == 1116302080 / MASK
        assert value != 1116302264 / MASK

    def test_same_seed_same_sequence(self):
        a = SeededRNG(12345)
        b = SeededRNG(12345)
        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_different_seeds_differ(self):
        a = SeededRNG(1)
        b = SeededRNG(2)
        assert [a.next() for _ in range(10)] != [b.next() for _ in range(10)]

    def test_seed_is_masked_to_32_bits(self):
        a = SeededRNG(42)
        b = SeededRNG(42 + 2**32)
        assert b.seed == 42
        assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]

    def test_values_in_unit_interval(self):
        rng = SeededRNG(7)
        for _ in range(1000):
            assert 0.0 <= rng.next() <= 1.0


class TestShuffle:
    """Tests for Fisher-Yates shuffle."""

    def test_shuffle_is_permutation(self):
        items = list(range(52))
        shuffled = SeededRNG(42).shuffle(items)
        assert sorted(shuffled) == items

    def test_shuffle_does_not_modify_input(self):
        items = list(range(10))
        SeededRNG(42).shuffle(items)
        assert items == list(range(10))

    def test_shuffle_is_deterministic(self):
        assert SeededRNG(99).shuffle(range(52)) == SeededRNG(99).shuffle(range(52))

    def test_shuffle_changes_order(self):
        assert SeededRNG(42).shuffle(range(52)) != list(range(52))

    def test_shuffle_small_inputs(self):
        assert SeededRNG(1).shuffle([]) == []
        assert SeededRNG(1).shuffle(["x"]) == ["x"]


class TestPickAndRange:
    """Tests for pick() and range()."""

    def test_pick_returns_member(self):
        rng = SeededRNG(3)
        items = ["a", "b", "c"]
        for _ in range(50):
            assert rng.pick(items) in items

    def test_pick_empty_raises(self):
        with pytest.raises(ValueError):
            SeededRNG(3).pick([])

    def test_range_is_inclusive(self):
        rng = SeededRNG(11)
        seen = {rng.range(1, 3) for _ in range(500)}
        assert seen == {1, 2, 3}

    def test_range_single_value(self):
        assert SeededRNG(11).range(5, 5) == 5

    def test_range_empty_raises(self):
        with pytest.raises(ValueError):
            SeededRNG(11).range(3, 2)


class TestDeck:
    """Tests for the standard deck."""

    def test_deck_has_52_unique_ids(self):
        deck = standard_deck()
        assert len(deck) == 52
        assert len({c.card_id for c in deck}) == 52

    def test_deck_order_and_ids(self):
        """Suits H, D, C, S; ranks A through K; id carries the position."""
        deck = standard_deck()
        assert deck[0].card_id == "HA-0"
        assert deck[13].card_id == "DA-13"
        assert deck[26].suit == Suit.CLUBS
        assert deck[51].card_id == "SK-51"
        assert deck[51].rank == Rank.KING

    def test_ace_is_high(self):
        deck = standard_deck()
        ace, king = deck[0], deck[12]
        assert ace.value > king.value

    def test_deal_contiguous_hands(self):
        deck = standard_deck()
        hands = deal(deck, 4, 13)
        assert hands[0] == tuple(deck[:13])
        assert hands[3] == tuple(deck[39:])

    def test_deal_too_many_raises(self):
        with pytest.raises(ValueError):
            deal(standard_deck(), 5, 13)

