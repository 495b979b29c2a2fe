"""
Reducer - Applies actions to game state.

Every rule-set implements the abstract operations below. The
orchestration (reduce, rebuild) is shared and final.

Design principles:
- Pure function: (state, action) -> new_state
- reduce() validates live actions; rebuild() trusts the log
- Replay law: rebuild(seed, players, A) == fold(reduce, A)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence, final
import logging

from .action import Action, describe
from .errors import CorruptHistory, InvalidAction
from .state import GameState, GameType, HouseRules, Player

logger = logging.getLogger(__name__)


class GameReducer(ABC):
    """
    Base reducer. One subclass per GameType.

    Stateless - all state is in GameState.
    """
    game_type: GameType

    @abstractmethod
    def initial_state(
        self,
        seed: int,
        players: Sequence[Player],
        *,
        game_id: str | None = None,
        created_at: float = 0.0,
        house_rules: HouseRules | None = None,
    ) -> GameState:
        """
        Deal a new game.

        Raises SetupError if players does not fit the game.
        """

    @abstractmethod
    def get_valid_actions(self, state: GameState, player_id: str) -> list[Action]:
        """
        Legal actions for player_id, in a deterministic order.

        Empty if it is not their turn or they have no moves left.
        """

    @abstractmethod
    def apply_action(self, state: GameState, action: Action) -> GameState:
        """
        Transition assuming the action is legal.

        Must not mutate state. Raises ValueError or KeyError when the
        action cannot be applied at all (unknown player, missing card).
        """

    @abstractmethod
    def is_game_over(self, state: GameState) -> bool:
        """Terminal test."""

    @abstractmethod
    def get_winner(self, state: GameState) -> str | None:
        """Winner's player id, or None while the game is running."""

    @abstractmethod
    def player_view(self, state: GameState, viewer_id: str) -> GameState:
        """State as viewer_id is allowed to see it."""

    @final
    def is_legal(self, state: GameState, action: Action) -> bool:
        """Check that action is one of its player's legal actions."""
        return action in self.get_valid_actions(state, action.player_id)

    @final
    def reduce(self, state: GameState, action: Action) -> GameState:
        """
        Validate and apply a live action.

        Raises InvalidAction (state unchanged) if the action is not legal.
        """
        if not self.is_legal(state, action):
            raise InvalidAction(
                f"Invalid action: {action.kind.value} for player {action.player_id}",
                action=action,
            )

        new_state = self.apply_action(state, action)
        new_state = self._finalize(new_state, state.action_history + (action,))
        logger.debug("%s: %s", state.game_id, describe(action))
        return new_state

    @final
    def rebuild(
        self,
        seed: int,
        players: Sequence[Player],
        actions: Iterable[Action],
        **setup: Any,
    ) -> GameState:
        """
        Reconstruct state by replaying a trusted log from the deal.

        Raises CorruptHistory if an entry cannot be applied.
        """
        actions = tuple(actions)
        state = self.initial_state(seed, players, **setup)

        for index, action in enumerate(actions):
            try:
                state = self.apply_action(state, action)
            except (KeyError, ValueError) as e:
                raise CorruptHistory(str(e), index=index, action=action) from e

        logger.debug("%s: rebuilt from %d actions", state.game_id, len(actions))
        return self._finalize(state, actions)

    def _finalize(self, state: GameState, history: tuple[Action, ...]) -> GameState:
        """Attach history and recompute terminal flags."""
        state = state._copy_with(action_history=history)
        return state._copy_with(
            is_game_over=self.is_game_over(state),
            winner=self.get_winner(state),
        )
