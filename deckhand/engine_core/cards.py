"""
Cards - Standard 52-card deck shared by all games.

Cards are immutable values. A card's id is unique within a deck
and is the only thing actions refer to.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .rng import SeededRNG


class Suit(Enum):
    """Card suits, in deck order."""
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"
    SPADES = "S"


class Rank(Enum):
    """Card ranks, in deck order (not play order)."""
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


# Low -> high for trick resolution
RANK_VALUES: dict[Rank, int] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
    Rank.ACE: 14,
}


@dataclass(frozen=True)
class Card:
    """A single playing card."""
    suit: Suit
    rank: Rank
    card_id: str

    @property
    def value(self) -> int:
        """Play-order value of the rank (2 low, Ace high)."""
        return RANK_VALUES[self.rank]

    @property
    def short(self) -> str:
        """Two-character label, e.g. 'AS' or 'TH'."""
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return self.short


def standard_deck() -> list[Card]:
    """
    Build the 52-card deck in canonical order.

    Ids are '{suit}{rank}-{n}' where n is the position in this order,
    so every peer derives the same ids.
    """
    cards = []
    n = 0
    for suit in Suit:
        for rank in Rank:
            cards.append(Card(suit=suit, rank=rank, card_id=f"{suit.value}{rank.value}-{n}"))
            n += 1
    return cards


def deal(deck: Sequence[Card], num_hands: int, cards_per_hand: int) -> list[tuple[Card, ...]]:
    """Split a (shuffled) deck into contiguous hands."""
    needed = num_hands * cards_per_hand
    if needed > len(deck):
        raise ValueError(f"Cannot deal {needed} cards from a deck of {len(deck)}")
    return [
        tuple(deck[i * cards_per_hand:(i + 1) * cards_per_hand])
        for i in range(num_hands)
    ]


def shuffled_deal(
    rng: SeededRNG,
    num_hands: int,
    cards_per_hand: int,
) -> list[tuple[Card, ...]]:
    """Shuffle a fresh standard deck with rng and deal it."""
    return deal(rng.shuffle(standard_deck()), num_hands, cards_per_hand)
