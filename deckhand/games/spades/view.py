"""
Spades player view.

Hands other than the viewer's are face down. Everything else in
Spades is public: bids, the trick on the table, archived tricks and
whose turn it is.
"""

from __future__ import annotations

from ...engine_core.state import GameState
from ...engine_core.view import conceal
from .state import SpadesState


def spades_player_view(state: GameState, viewer_id: str) -> GameState:
    """
    Project state for one observer.

    Hand sizes stay visible. A viewer who is not seated (spectator)
    sees every hand face down.
    """
    gs: SpadesState = state.payload
    hands = tuple(
        hand if player.player_id == viewer_id else conceal(hand)
        for player, hand in zip(state.players, gs.hands)
    )
    return state._copy_with(payload=gs._copy_with(hands=hands))
