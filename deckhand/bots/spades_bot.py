"""
Spades Bot - Simple rule-based policy for Spades.

Bidding: one trick per spade held, at least 1.
Playing: follow the led suit low, otherwise shed the lowest
non-spade, otherwise the lowest spade.

The bot does NOT count cards or plan around partners' bids.
"""

from __future__ import annotations
from dataclasses import replace
from typing import TYPE_CHECKING

from ..engine_core.action import Action, PlaceBid, PlayCard
from ..engine_core.cards import Card, Suit
from ..engine_core.errors import NoLegalActions
from ..engine_core.view import visible_cards
from ..games.spades.state import MAX_BID
from .policy import BotDecision, BotPolicy

if TYPE_CHECKING:
    from ..engine_core.state import GameState


class SpadesPolicy(BotPolicy):
    """Rule-based Spades automa."""

    def select_action(
        self,
        view: GameState,
        player_id: str,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise NoLegalActions(f"No legal actions available for {player_id}")

        hand = visible_cards(view.payload.hands[view.seat_of(player_id)])

        if isinstance(legal_actions[0], PlaceBid):
            spades = sum(1 for c in hand if c.suit == Suit.SPADES)
            bid = max(1, min(spades, MAX_BID))
            return BotDecision(
                action=replace(legal_actions[0], bid=bid),
                explanation=f"Holding {spades} spade(s)",
                evaluated_actions=len(legal_actions),
            )

        playable = {a.card_id: a for a in legal_actions if isinstance(a, PlayCard)}
        cards = [c for c in hand if c.card_id in playable]
        card = self._pick_card(cards, view.payload.led_suit)
        return BotDecision(
            action=playable[card.card_id],
            explanation=f"Play {card}",
            evaluated_actions=len(legal_actions),
        )

    def _pick_card(self, cards: list[Card], led_suit: Suit | None) -> Card:
        by_value = sorted(cards, key=lambda c: c.value)
        if led_suit is not None:
            following = [c for c in by_value if c.suit == led_suit]
            if following:
                return following[0]
        off_trump = [c for c in by_value if c.suit != Suit.SPADES]
        return off_trump[0] if off_trump else by_value[0]
