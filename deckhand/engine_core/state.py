"""
Game State - Generic state container shared by every rule-set.

Design principles:
- Immutable: every transition returns a new GameState
- Pure: state is a function of (seed, players, action history) only
- Game-agnostic: the rule-set's own data lives in `payload`
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .action import Action


class GameType(Enum):
    """Supported rule-sets. Closed set: one reducer per member."""
    SPADES = "spades"


@dataclass(frozen=True)
class Player:
    """
    A seat at the table.

    Identity fields (player_id, name, is_ai, is_local) never change.
    Connectivity changes by producing a new record.
    """
    player_id: str
    name: str
    is_ai: bool = False
    is_local: bool = True
    is_connected: bool = True

    def with_connected(self, connected: bool) -> Player:
        """Return a copy with a different connectivity flag."""
        return replace(self, is_connected=connected)


@dataclass(frozen=True)
class HouseRules:
    """Table options agreed before the deal."""
    allow_undo_turns: bool = False
    spectator_mode: bool = False
    chat_enabled: bool = False
    options: tuple[tuple[str, Any], ...] = ()

    def option(self, name: str, default: Any = None) -> Any:
        return dict(self.options).get(name, default)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state the reducers operate on.
    """
    game_id: str
    game_type: GameType
    seed: int
    players: tuple[Player, ...]
    current_player_id: str
    payload: Any

    action_history: tuple[Action, ...] = ()
    created_at: float = 0.0
    house_rules: HouseRules = field(default_factory=HouseRules)

    is_game_over: bool = False
    winner: str | None = None

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def player_ids(self) -> tuple[str, ...]:
        return tuple(p.player_id for p in self.players)

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def seat_of(self, player_id: str) -> int:
        """Table position of a player. Raises KeyError for strangers."""
        for i, p in enumerate(self.players):
            if p.player_id == player_id:
                return i
        raise KeyError(f"Player {player_id} is not seated in {self.game_id}")

    def next_player_id(self, player_id: str) -> str:
        """Player after player_id in table order (cyclic)."""
        return self.players[(self.seat_of(player_id) + 1) % self.num_players].player_id

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
