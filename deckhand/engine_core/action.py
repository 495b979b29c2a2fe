"""
Action System - One frozen record per kind of move.

Actions are:
- Immutable facts once recorded (never edited, only appended)
- Compared by meaning: kind, acting player and kind payload.
  game_id, timestamp and seq_num are transport metadata and do not
  take part in equality or hashing.
- Replayed in order to rebuild state
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Union


class ActionKind(Enum):
    """Kind tags, as they appear on the wire."""
    PLACE_BID = "placeBid"
    PLAY_CARD = "playCard"


@dataclass(frozen=True)
class PlaceBid:
    """Bid a number of tricks."""
    player_id: str
    bid: int
    game_id: str = field(default="", compare=False)
    timestamp: float = field(default=0.0, compare=False)
    seq_num: int | None = field(default=None, compare=False)

    kind: ClassVar[ActionKind] = ActionKind.PLACE_BID


@dataclass(frozen=True)
class PlayCard:
    """Play one card from hand to the current trick."""
    player_id: str
    card_id: str
    game_id: str = field(default="", compare=False)
    timestamp: float = field(default=0.0, compare=False)
    seq_num: int | None = field(default=None, compare=False)

    kind: ClassVar[ActionKind] = ActionKind.PLAY_CARD


Action = Union[PlaceBid, PlayCard]


def stamp(action: Action, *, seq_num: int | None = None, timestamp: float | None = None) -> Action:
    """Return a copy of action with transport metadata filled in."""
    return replace(
        action,
        seq_num=action.seq_num if seq_num is None else seq_num,
        timestamp=action.timestamp if timestamp is None else timestamp,
    )


def describe(action: Action) -> str:
    """Short human-readable form for logs."""
    if isinstance(action, PlaceBid):
        return f"{action.player_id} bids {action.bid}"
    if isinstance(action, PlayCard):
        return f"{action.player_id} plays {action.card_id}"
    return repr(action)
