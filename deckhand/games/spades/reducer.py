"""
Spades reducer - core game logic.

Phases:
- Bidding: each player in turn bids 0-13 tricks (no sum constraint)
- Playing: 13 tricks; any card in hand may be played, spades are trump
- Complete: 13 tricks archived; most tricks wins
"""

from __future__ import annotations
from typing import Sequence
import logging

from ...engine_core.action import Action, PlaceBid, PlayCard
from ...engine_core.cards import Suit
from ...engine_core.reducer import GameReducer
from ...engine_core.state import GameState, GameType, HouseRules, Player
from ...engine_core.view import visible_cards
from .setup import setup_spades_game
from .state import MAX_BID, NUM_TRICKS, TRUMP, SpadesPhase, SpadesState, Trick, TrickPlay
from .view import spades_player_view

logger = logging.getLogger(__name__)


class SpadesReducer(GameReducer):
    """
    Rules for four-player Spades.

    Usage:
        reducer = SpadesReducer()
        state = reducer.initial_state(42, players)
        state = reducer.reduce(state, reducer.get_valid_actions(state, "p1")[3])
    """
    game_type = GameType.SPADES

    def initial_state(
        self,
        seed: int,
        players: Sequence[Player],
        *,
        game_id: str | None = None,
        created_at: float = 0.0,
        house_rules: HouseRules | None = None,
    ) -> GameState:
        return setup_spades_game(
            seed,
            players,
            game_id=game_id,
            created_at=created_at,
            house_rules=house_rules,
        )

    def get_valid_actions(self, state: GameState, player_id: str) -> list[Action]:
        gs: SpadesState = state.payload

        if state.is_game_over or gs.phase == SpadesPhase.COMPLETE:
            return []
        if player_id != state.current_player_id or state.get_player(player_id) is None:
            return []

        # Logical clock: position in the log
        timestamp = float(len(state.action_history))

        if gs.phase == SpadesPhase.BIDDING:
            if gs.has_bid(player_id):
                return []
            return [
                PlaceBid(player_id=player_id, bid=bid, game_id=state.game_id, timestamp=timestamp)
                for bid in range(MAX_BID + 1)
            ]

        hand = gs.hands[state.seat_of(player_id)]
        return [
            PlayCard(player_id=player_id, card_id=card.card_id, game_id=state.game_id, timestamp=timestamp)
            for card in visible_cards(hand)
        ]

    def apply_action(self, state: GameState, action: Action) -> GameState:
        if isinstance(action, PlaceBid):
            return self._apply_bid(state, action)
        if isinstance(action, PlayCard):
            return self._apply_play(state, action)
        raise ValueError(f"Spades has no handler for {type(action).__name__}")

    def is_game_over(self, state: GameState) -> bool:
        return len(state.payload.tricks) == NUM_TRICKS

    def get_winner(self, state: GameState) -> str | None:
        if not self.is_game_over(state):
            return None

        counts = tricks_won(state)
        winner = state.players[0].player_id
        most = counts[winner]
        # Strictly greater: ties stay with the earlier seat
        for player_id, won in counts.items():
            if won > most:
                most = won
                winner = player_id
        return winner

    def player_view(self, state: GameState, viewer_id: str) -> GameState:
        return spades_player_view(state, viewer_id)

    def _apply_bid(self, state: GameState, action: PlaceBid) -> GameState:
        """Record a bid and pass the turn."""
        gs: SpadesState = state.payload
        state.seat_of(action.player_id)  # KeyError for strangers

        if gs.phase != SpadesPhase.BIDDING:
            raise ValueError(f"Bid from {action.player_id} outside the bidding phase")
        if gs.has_bid(action.player_id):
            raise ValueError(f"{action.player_id} has already bid")
        if not 0 <= action.bid <= MAX_BID:
            raise ValueError(f"Bid {action.bid} out of range 0-{MAX_BID}")

        bids = gs.bids + ((action.player_id, action.bid),)
        complete = len(bids) == state.num_players

        if complete:
            next_player = state.players[0].player_id
        else:
            next_player = state.next_player_id(action.player_id)

        return state._copy_with(
            payload=gs._copy_with(bids=bids, bid_phase_complete=complete),
            current_player_id=next_player,
        )

    def _apply_play(self, state: GameState, action: PlayCard) -> GameState:
        """Move a card from hand to the trick; resolve the trick on the fourth play."""
        gs: SpadesState = state.payload
        seat = state.seat_of(action.player_id)

        if gs.phase != SpadesPhase.PLAYING:
            raise ValueError(f"Card play from {action.player_id} outside the playing phase")

        hand = gs.hands[seat]
        card = None
        for c in visible_cards(hand):
            if c.card_id == action.card_id:
                card = c
                break
        if card is None:
            raise ValueError(f"Card {action.card_id} not in {action.player_id}'s hand")

        new_hand = tuple(c for c in hand if c != card)
        plays = gs.current_trick + (TrickPlay(player_id=action.player_id, card=card),)
        led_suit = card.suit if len(plays) == 1 else gs.led_suit

        if len(plays) < state.num_players:
            payload = gs.with_hand(seat, new_hand)._copy_with(
                current_trick=plays,
                led_suit=led_suit,
            )
            return state._copy_with(
                payload=payload,
                current_player_id=state.next_player_id(action.player_id),
            )

        winner = resolve_trick(plays, led_suit)
        logger.debug(
            "%s: trick %d to %s (%s)",
            state.game_id,
            len(gs.tricks) + 1,
            winner,
            " ".join(str(p.card) for p in plays),
        )
        payload = gs.with_hand(seat, new_hand)._copy_with(
            tricks=gs.tricks + (Trick(winner=winner, plays=plays),),
            current_trick=(),
            led_suit=None,
        )
        return state._copy_with(payload=payload, current_player_id=winner)


def resolve_trick(
    plays: Sequence[TrickPlay],
    led_suit: Suit | None,
    trump: Suit = TRUMP,
) -> str:
    """
    Winner of a complete trick.

    Highest trump if any trump was played, otherwise the highest card
    of the led suit. Off-suit cards never win.
    """
    if not plays:
        raise ValueError("Cannot resolve an empty trick")

    candidates = [p for p in plays if p.card.suit == trump]
    if not candidates:
        candidates = [p for p in plays if p.card.suit == led_suit]
    if not candidates:
        return plays[0].player_id
    return max(candidates, key=lambda p: p.card.value).player_id


def tricks_won(state: GameState) -> dict[str, int]:
    """Archived trick count per player, in table order."""
    counts = {p.player_id: 0 for p in state.players}
    for trick in state.payload.tricks:
        counts[trick.winner] = counts.get(trick.winner, 0) + 1
    return counts
