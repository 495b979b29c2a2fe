"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Deals from a seed (SeededRNG)
2. Holds immutable GameState values
3. Generates legal actions
4. Applies actions via the reducer
5. Rebuilds state from an action log
6. Projects state into per-player views
"""

from .rng import SeededRNG
from .cards import Card, Suit, Rank, standard_deck
from .action import Action, ActionKind, PlaceBid, PlayCard
from .state import GameState, GameType, HouseRules, Player
from .reducer import GameReducer
from .view import CONCEALED, ConcealedCard
from .errors import (
    EngineError,
    SetupError,
    InvalidAction,
    CorruptHistory,
    NoLegalActions,
    ContractViolation,
    OutOfSequence,
)

__all__ = [
    "SeededRNG",
    "Card",
    "Suit",
    "Rank",
    "standard_deck",
    "Action",
    "ActionKind",
    "PlaceBid",
    "PlayCard",
    "GameState",
    "GameType",
    "HouseRules",
    "Player",
    "GameReducer",
    "CONCEALED",
    "ConcealedCard",
    "EngineError",
    "SetupError",
    "InvalidAction",
    "CorruptHistory",
    "NoLegalActions",
    "ContractViolation",
    "OutOfSequence",
]
