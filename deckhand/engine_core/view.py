"""
Views - Per-observer projection of state.

A view is the only form of state an automated player or a remote peer
may see. Cards the observer is not entitled to see are replaced by the
CONCEALED marker, which carries no suit, rank or id.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .cards import Card


@dataclass(frozen=True)
class ConcealedCard:
    """Face-down card. Deliberately has no fields."""

    def __str__(self) -> str:
        return "??"


CONCEALED = ConcealedCard()

HandCard = Card | ConcealedCard


def conceal(cards: Iterable[HandCard]) -> tuple[ConcealedCard, ...]:
    """Replace every card with the marker, keeping the count."""
    return tuple(CONCEALED for _ in cards)


def is_concealed(card: HandCard) -> bool:
    return isinstance(card, ConcealedCard)


def visible_cards(cards: Iterable[HandCard]) -> list[Card]:
    """Cards whose faces are known to the observer."""
    return [c for c in cards if isinstance(c, Card)]
