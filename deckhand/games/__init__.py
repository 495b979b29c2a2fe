"""
Games module - Rule-set implementations.

Each game has its own subpackage with:
- Game-specific state (the GameState payload)
- Deterministic setup
- A GameReducer subclass
- A player view

The set of games is closed: every GameType maps to exactly one reducer.
"""

from __future__ import annotations

from ..engine_core.reducer import GameReducer
from ..engine_core.state import GameType
from .spades import SpadesReducer

REDUCERS: dict[GameType, type[GameReducer]] = {
    GameType.SPADES: SpadesReducer,
}


def get_reducer(game_type: GameType | str) -> GameReducer:
    """Reducer instance for a game type (enum member or its value)."""
    return REDUCERS[GameType(game_type)]()
