"""
Spades - Four-player trick-taking game.

Key mechanics:
- 13 cards per player from a seeded shuffle
- One bid per player (0-13 tricks)
- 13 tricks, spades are always trump
- Most tricks wins

This module contains:
- Spades-specific state model
- Deterministic setup
- The reducer
- The player view
"""

from .state import SpadesState, SpadesPhase, Trick, TrickPlay
from .setup import setup_spades_game
from .reducer import SpadesReducer, resolve_trick, tricks_won
from .view import spades_player_view

__all__ = [
    "SpadesState",
    "SpadesPhase",
    "Trick",
    "TrickPlay",
    "setup_spades_game",
    "SpadesReducer",
    "resolve_trick",
    "tricks_won",
    "spades_player_view",
]
