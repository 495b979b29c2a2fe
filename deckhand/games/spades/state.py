"""
Spades-specific state.

Lives in GameState.payload. Extends the generic state with:
- Hands (one per seat, table order)
- Bids
- Archived tricks and the trick in progress
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from ...engine_core.cards import Card, Suit
from ...engine_core.view import HandCard

NUM_PLAYERS = 4
HAND_SIZE = 13
NUM_TRICKS = 13
MAX_BID = 13
TRUMP = Suit.SPADES


class SpadesPhase(Enum):
    """Bidding -> Playing -> Complete."""
    BIDDING = "bidding"
    PLAYING = "playing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TrickPlay:
    """One card played into a trick."""
    player_id: str
    card: Card


@dataclass(frozen=True)
class Trick:
    """A completed trick: four plays and who took them."""
    winner: str
    plays: tuple[TrickPlay, ...]


@dataclass(frozen=True)
class SpadesState:
    """
    Spades payload.

    hands[i] belongs to the player in seat i. In a player view, other
    seats hold CONCEALED markers instead of cards. bids holds
    (player_id, bid) pairs in the order they were placed.
    """
    hands: tuple[tuple[HandCard, ...], ...]
    bids: tuple[tuple[str, int], ...] = ()
    tricks: tuple[Trick, ...] = ()
    current_trick: tuple[TrickPlay, ...] = ()
    led_suit: Suit | None = None
    bid_phase_complete: bool = False

    @property
    def phase(self) -> SpadesPhase:
        if len(self.tricks) >= NUM_TRICKS:
            return SpadesPhase.COMPLETE
        if not self.bid_phase_complete:
            return SpadesPhase.BIDDING
        return SpadesPhase.PLAYING

    @property
    def bid_map(self) -> dict[str, int]:
        """Bids by player id (a fresh dict)."""
        return dict(self.bids)

    def has_bid(self, player_id: str) -> bool:
        return any(pid == player_id for pid, _ in self.bids)

    def bid_of(self, player_id: str) -> int | None:
        for pid, bid in self.bids:
            if pid == player_id:
                return bid
        return None

    def with_hand(self, seat: int, hand: tuple[HandCard, ...]) -> SpadesState:
        """Return new payload with one hand replaced."""
        hands = list(self.hands)
        hands[seat] = hand
        return replace(self, hands=tuple(hands))

    def _copy_with(self, **kwargs) -> SpadesState:
        return replace(self, **kwargs)
