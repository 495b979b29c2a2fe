"""
Spades Game Setup - Creates the initial game state.

This module handles:
- Player count validation
- Shuffling the standard deck with the session seed
- Dealing 13 cards to each of the 4 seats

The deal is a pure function of (seed, players): every peer that
knows both gets the same hands, card for card and in the same order.
"""

from __future__ import annotations
from typing import Sequence

from ...engine_core.cards import shuffled_deal
from ...engine_core.errors import SetupError
from ...engine_core.rng import SeededRNG
from ...engine_core.state import GameState, GameType, HouseRules, Player
from .state import HAND_SIZE, NUM_PLAYERS, SpadesState


def setup_spades_game(
    seed: int,
    players: Sequence[Player],
    game_id: str | None = None,
    created_at: float = 0.0,
    house_rules: HouseRules | None = None,
) -> GameState:
    """
    Set up a new Spades game.

    Args:
        seed: Seed for the deterministic shuffle
        players: Exactly four players, in table order
        game_id: Session game id (defaults to 'spades_{seed}')
        created_at: Session creation time, carried through verbatim
        house_rules: Table options

    Returns:
        Initial GameState in the bidding phase, first player on turn
    """
    _validate_players(players)

    rng = SeededRNG(seed)
    hands = shuffled_deal(rng, NUM_PLAYERS, HAND_SIZE)

    return GameState(
        game_id=game_id or f"{GameType.SPADES.value}_{seed}",
        game_type=GameType.SPADES,
        seed=seed,
        players=tuple(players),
        current_player_id=players[0].player_id,
        payload=SpadesState(hands=tuple(hands)),
        created_at=created_at,
        house_rules=house_rules or HouseRules(),
    )


def _validate_players(players: Sequence[Player]):
    """Spades needs four distinct seats."""
    if len(players) != NUM_PLAYERS:
        raise SetupError(f"Spades requires exactly {NUM_PLAYERS} players, got {len(players)}")

    ids = [p.player_id for p in players]
    if len(set(ids)) != len(ids):
        raise SetupError(f"Player ids must be unique: {ids}")
