"""
Bot Policy - Interface for automated players.

The contract:
- A bot only ever sees a player view, never the full state
- It asks the reducer for its legal actions on that view
- It returns exactly one of them (value fields such as a bid amount
  may be set on a template action; equality is semantic)

AutomatedPlayer enforces the contract around any BotPolicy.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import logging

from ..engine_core.action import Action, describe
from ..engine_core.errors import ContractViolation, NoLegalActions
from ..engine_core.rng import SeededRNG

if TYPE_CHECKING:
    from ..engine_core.reducer import GameReducer
    from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class BotDecision:
    """
    What a policy chose and why.

    Only `action` reaches the reducer; the rest is for logs and table UIs.
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0
    evaluated_actions: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """Chooses one of the legal actions offered for a seat."""

    @abstractmethod
    def select_action(
        self,
        view: GameState,
        player_id: str,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Pick one of legal_actions.

        Args:
            view: The bot's player view
            player_id: Seat the bot plays for
            legal_actions: Non-empty list from get_valid_actions(view, player_id)

        Returns:
            BotDecision whose action is a member of legal_actions
        """

    def get_name(self) -> str:
        """Name used in logs and contract errors."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Uniform choice driven by SeededRNG, so a seeded bot makes the same
    moves on every replay.
    """

    def __init__(self, seed: int = 0):
        self.rng = SeededRNG(seed)

    def select_action(
        self,
        view: GameState,
        player_id: str,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise NoLegalActions(f"No legal actions available for {player_id}")

        n = len(legal_actions)
        return BotDecision(
            action=self.rng.pick(legal_actions),
            explanation=f"Uniform pick among {n}",
            confidence=1.0 / n,
            evaluated_actions=n,
        )


class FirstLegalPolicy(BotPolicy):
    """Takes legal_actions[0]. Deterministic; handy in tests and simulations."""

    def select_action(
        self,
        view: GameState,
        player_id: str,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise NoLegalActions(f"No legal actions available for {player_id}")

        return BotDecision(
            action=legal_actions[0],
            explanation="First in legal order",
            evaluated_actions=1,
        )


@dataclass
class AutomatedPlayer:
    """
    Seat driven by a BotPolicy.

    Usage:
        bot = AutomatedPlayer(reducer, "p2", SpadesPolicy())
        if bot.is_my_turn(state):
            state = bot.take_turn(state)
    """
    reducer: GameReducer
    player_id: str
    policy: BotPolicy = field(default_factory=FirstLegalPolicy)

    def is_my_turn(self, state: GameState) -> bool:
        return not state.is_game_over and state.current_player_id == self.player_id

    def choose(self, state: GameState) -> BotDecision:
        """
        Pick an action from the bot's view of state.

        Raises NoLegalActions if nothing is legal (never skip silently:
        a skipped turn would desynchronize replay) and ContractViolation
        if the policy strays outside the legal set.
        """
        view = self.reducer.player_view(state, self.player_id)
        legal = self.reducer.get_valid_actions(view, self.player_id)
        if not legal:
            raise NoLegalActions(f"No legal actions for player {self.player_id}")

        decision = self.policy.select_action(view, self.player_id, legal)
        if decision.action.player_id != self.player_id or decision.action not in legal:
            raise ContractViolation(
                f"{self.policy.get_name()} chose {describe(decision.action)}, "
                f"which is not legal for {self.player_id}"
            )

        logger.debug("%s (%s): %s", self.player_id, self.policy.get_name(), describe(decision.action))
        return decision

    def take_turn(self, state: GameState) -> GameState:
        """Choose and apply one action through the validating reducer."""
        decision = self.choose(state)
        return self.reducer.reduce(state, decision.action)
