"""
Pytest fixtures for Deckhand tests.
"""

import pytest

from ..engine_core.state import GameState, Player
from ..games.spades import SpadesReducer
from ..session import Session


@pytest.fixture
def players() -> tuple[Player, ...]:
    """Four seats in table order."""
    return tuple(Player(player_id=f"p{i}", name=f"Player {i}") for i in range(1, 5))


@pytest.fixture
def reducer() -> SpadesReducer:
    return SpadesReducer()


@pytest.fixture
def new_game(reducer, players) -> GameState:
    """Freshly dealt game, seed 42."""
    return reducer.initial_state(42, players)


@pytest.fixture
def bid_game(reducer, new_game) -> GameState:
    """Seed 42 game with bids 3, 2, 4, 2 placed: playing phase, p1 to lead."""
    state = new_game
    for player_id, bid in zip(["p1", "p2", "p3", "p4"], [3, 2, 4, 2]):
        template = reducer.get_valid_actions(state, player_id)[bid]
        state = reducer.reduce(state, template)
    return state


@pytest.fixture
def session(players) -> Session:
    return Session(game_id="table-1", player_id="p1", seed=42, players=players)


def play_out(reducer, state: GameState) -> GameState:
    """Finish a game by always taking the first legal action."""
    while not state.is_game_over:
        action = reducer.get_valid_actions(state, state.current_player_id)[0]
        state = reducer.reduce(state, action)
    return state
