"""
Session models - The persisted unit of a game.

A Session is {seed, players, action history} plus identity. Derived
game state is never stored: it is rebuilt from the session on demand.

Sessions are immutable values. Appending actions returns a new
Session; the log itself is never edited.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..engine_core.action import Action
from ..engine_core.state import GameType, Player


class MessageKind(Enum):
    """Network envelope kinds."""
    ACTION = "action"
    SYNC_REQUEST = "sync-request"
    SYNC_RESPONSE = "sync-response"
    ACK = "ack"
    RECONNECT = "reconnect"


@dataclass(frozen=True)
class Session:
    """
    One game's identity and action log.

    player_id is the local viewer: the seat this peer plays.
    """
    game_id: str
    player_id: str
    seed: int
    players: tuple[Player, ...]
    action_history: tuple[Action, ...] = ()
    created_at: float = 0.0
    game_type: GameType = GameType.SPADES

    @property
    def next_seq(self) -> int:
        """Sequence number the next appended action will get."""
        return len(self.action_history)

    def append(self, *actions: Action) -> Session:
        """Return a new session with actions added to the end of the log."""
        return replace(self, action_history=self.action_history + tuple(actions))

    def with_player(self, player: Player) -> Session:
        """Return a new session with one player record replaced (connectivity)."""
        players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return replace(self, players=players)

    def setup_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for GameReducer.initial_state / rebuild."""
        return {"game_id": self.game_id, "created_at": self.created_at}


@dataclass(frozen=True)
class NetworkMessage:
    """Envelope exchanged through an ActionBroadcaster."""
    kind: MessageKind
    game_id: str
    payload: Any
    timestamp: float
    from_player_id: str
    seq_num: int | None = None


@dataclass(frozen=True)
class SyncRequest:
    """Ask peers for every action after the ones already known."""
    game_id: str
    last_known_action_index: int


@dataclass(frozen=True)
class SyncResponse:
    """Actions starting at from_index in the responder's log."""
    game_id: str
    from_index: int
    actions: tuple[Action, ...]
