"""
Tests for trick resolution.
"""

import pytest

from ..engine_core.cards import Card, Rank, Suit
from ..games.spades import TrickPlay, resolve_trick


def play(player_id, label):
    rank, suit = Rank(label[0]), Suit(label[1])
    return TrickPlay(player_id=player_id, card=Card(suit=suit, rank=rank, card_id=f"{suit.value}{rank.value}"))


class TestResolveTrick:
    """Tests for resolve_trick()."""

    def test_highest_of_led_suit_wins(self):
        plays = [play("p1", "5H"), play("p2", "KH"), play("p3", "9H"), play("p4", "2H")]
        assert resolve_trick(plays, Suit.HEARTS) == "p2"

    def test_ace_beats_king(self):
        plays = [play("p1", "KD"), play("p2", "AD"), play("p3", "3D"), play("p4", "QD")]
        assert resolve_trick(plays, Suit.DIAMONDS) == "p2"

    def test_off_suit_never_wins(self):
        plays = [play("p1", "3C"), play("p2", "AH"), play("p3", "AD"), play("p4", "4C")]
        assert resolve_trick(plays, Suit.CLUBS) == "p4"

    def test_spade_trumps_led_suit(self):
        plays = [play("p1", "AH"), play("p2", "KH"), play("p3", "2S"), play("p4", "QH")]
        assert resolve_trick(plays, Suit.HEARTS) == "p3"

    def test_highest_spade_wins(self):
        plays = [play("p1", "AC"), play("p2", "3S"), play("p3", "TS"), play("p4", "5S")]
        assert resolve_trick(plays, Suit.CLUBS) == "p3"

    def test_spades_led(self):
        plays = [play("p1", "4S"), play("p2", "AH"), play("p3", "JS"), play("p4", "9S")]
        assert resolve_trick(plays, Suit.SPADES) == "p3"

    def test_empty_trick_raises(self):
        with pytest.raises(ValueError):
            resolve_trick([], Suit.HEARTS)
