"""
API Service - Business logic layer between the HTTP API and the engine.

The service:
1. Deals games and keeps one ReplayManager per game (this process is
   the host, so its logs assign sequence numbers)
2. Validates and applies submitted actions
3. Runs automated seats
4. Serves filtered views only

This layer is framework-agnostic (used by FastAPI, the CLI and tests).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging
import secrets
import time
import uuid

from pydantic import ValidationError

from .. import __version__
from ..bots import AutomatedPlayer, SpadesPolicy
from ..config import Settings
from ..engine_core.cards import Card
from ..engine_core.errors import EngineError
from ..engine_core.state import GameState, GameType
from ..engine_core.view import visible_cards
from ..games import get_reducer
from ..games.spades import tricks_won
from ..session import ReplayManager, Session, SyncRequest
from ..session.wire import action_from_wire, action_to_model, player_from_model, player_to_wire
from .schemas import (
    ActionListResponse,
    BotTurnResponse,
    CardInfo,
    CreateGameRequest,
    CreateGameResponse,
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GamePhaseName,
    GameViewResponse,
    HealthResponse,
    PlayerInfo,
    SubmitActionResponse,
    SyncRequestBody,
    SyncResponseBody,
    TrickInfo,
    TrickPlayInfo,
)

logger = logging.getLogger(__name__)

MAX_BOT_ACTIONS = 256


@dataclass
class HostedGame:
    """A game hosted by this process."""
    manager: ReplayManager
    bots: dict[str, AutomatedPlayer] = field(default_factory=dict)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        created = service.create_game(CreateGameRequest(players=[...]))
        view = service.get_view(created.game_id, "p1")
    """
    settings: Settings = field(default_factory=Settings)
    _games: dict[str, HostedGame] = field(default_factory=dict)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def create_game(self, request: CreateGameRequest) -> CreateGameResponse | ErrorResponse:
        """Deal a new game and host it."""
        try:
            game_type = GameType(request.game_type)
        except ValueError:
            return _error(ErrorCode.VALIDATION_ERROR, f"Unknown game type: {request.game_type}")

        seed = request.seed
        if seed is None:
            seed = self.settings.default_seed
            if seed is None:
                seed = secrets.randbelow(2**31)

        players = tuple(player_from_model(p) for p in request.players)
        host_id = request.host_player_id or (players[0].player_id if players else "")

        session = Session(
            game_id=f"{game_type.value}_{uuid.uuid4().hex[:12]}",
            player_id=host_id,
            seed=seed,
            players=players,
            created_at=time.time(),
            game_type=game_type,
        )
        reducer = get_reducer(game_type)
        manager = ReplayManager(reducer, session)

        try:
            state = manager.get_current_state()
        except EngineError as e:
            return _engine_error(e)

        bots = {
            p.player_id: AutomatedPlayer(reducer, p.player_id, SpadesPolicy())
            for p in players if p.is_ai
        }
        self._games[session.game_id] = HostedGame(manager=manager, bots=bots)
        logger.info("Game %s created (seed=%d, %d bot(s))", session.game_id, seed, len(bots))

        return CreateGameResponse(
            game_id=session.game_id,
            seed=seed,
            players=[player_to_wire(p) for p in players],
            view=build_view(manager.reducer.player_view(state, host_id), host_id),
        )

    def end_game(self, game_id: str) -> bool:
        """Stop hosting a game. Its log is discarded."""
        return self._games.pop(game_id, None) is not None

    def list_games(self) -> GameListResponse:
        return GameListResponse(games=list(self._games), count=len(self._games))

    def health(self) -> HealthResponse:
        return HealthResponse(
            version=__version__,
            environment=self.settings.env,
            active_games=len(self._games),
        )

    def get_session(self, game_id: str) -> Session | None:
        game = self._games.get(game_id)
        return game.manager.session if game else None

    # =========================================================================
    # Views and actions
    # =========================================================================

    def get_view(self, game_id: str, viewer_id: str) -> GameViewResponse | ErrorResponse:
        game = self._games.get(game_id)
        if not game:
            return _not_found(game_id)
        return build_view(game.manager.get_view(viewer_id), viewer_id)

    def get_actions(self, game_id: str, player_id: str) -> ActionListResponse | ErrorResponse:
        game = self._games.get(game_id)
        if not game:
            return _not_found(game_id)
        actions = game.manager.get_valid_actions(player_id)
        return ActionListResponse(
            game_id=game_id,
            player_id=player_id,
            actions=[action_to_model(a) for a in actions],
        )

    def submit_action(self, game_id: str, data: dict[str, Any]) -> SubmitActionResponse | ErrorResponse:
        """Validate and apply a wire action."""
        game = self._games.get(game_id)
        if not game:
            return _not_found(game_id)

        try:
            action = action_from_wire(data)
        except ValidationError as e:
            return _error(ErrorCode.VALIDATION_ERROR, "Malformed action", {"errors": e.errors(include_url=False, include_context=False)})

        before = game.manager.session.next_seq
        try:
            game.manager.receive(action)
        except EngineError as e:
            return _engine_error(e)

        if game.manager.session.next_seq == before:
            return _error(
                ErrorCode.OUT_OF_SEQUENCE,
                f"Action #{action.seq_num} is already in the log; nothing was applied",
                {"expected": before, "received": action.seq_num},
            )

        seq = before
        return SubmitActionResponse(
            game_id=game_id,
            seq_num=seq,
            view=build_view(game.manager.get_view(action.player_id), action.player_id),
        )

    def run_bots(self, game_id: str) -> BotTurnResponse | ErrorResponse:
        """Let automated seats move until a human is on turn or the game ends."""
        game = self._games.get(game_id)
        if not game:
            return _not_found(game_id)

        taken = []
        try:
            state = game.manager.get_current_state()
            while not state.is_game_over and state.current_player_id in game.bots:
                if len(taken) >= MAX_BOT_ACTIONS:
                    break
                decision = game.bots[state.current_player_id].choose(state)
                state = game.manager.submit(decision.action)
                taken.append(game.manager.session.action_history[-1])
        except EngineError as e:
            return _engine_error(e)

        return BotTurnResponse(
            game_id=game_id,
            actions=[action_to_model(a) for a in taken],
            current_player_id=state.current_player_id,
            is_game_over=state.is_game_over,
            winner=state.winner,
        )

    def sync(self, game_id: str, request: SyncRequestBody) -> SyncResponseBody | ErrorResponse:
        """Serve the actions a reconnecting peer is missing."""
        game = self._games.get(game_id)
        if not game:
            return _not_found(game_id)
        response = game.manager.sync_response(
            SyncRequest(game_id=game_id, last_known_action_index=request.last_known_action_index)
        )
        return SyncResponseBody(
            game_id=game_id,
            from_index=response.from_index,
            actions=[action_to_model(a) for a in response.actions],
        )


# =============================================================================
# Converters
# =============================================================================

def card_info(card: Card) -> CardInfo:
    return CardInfo(card_id=card.card_id, suit=card.suit.value, rank=card.rank.value, label=card.short)


def build_view(view: GameState, viewer_id: str) -> GameViewResponse:
    """Convert a filtered GameState into the API response."""
    gs = view.payload
    won = tricks_won(view)

    players = []
    hand: list[CardInfo] = []
    for player, cards in zip(view.players, gs.hands):
        players.append(PlayerInfo(
            player_id=player.player_id,
            name=player.name,
            is_ai=player.is_ai,
            is_connected=player.is_connected,
            is_current_turn=player.player_id == view.current_player_id,
            hand_count=len(cards),
            bid=gs.bid_of(player.player_id),
            tricks_won=won[player.player_id],
        ))
        if player.player_id == viewer_id:
            hand = [card_info(c) for c in visible_cards(cards)]

    return GameViewResponse(
        game_id=view.game_id,
        game_type=view.game_type.value,
        seed=view.seed,
        viewer_id=viewer_id,
        phase=GamePhaseName(gs.phase.value),
        current_player_id=view.current_player_id,
        players=players,
        hand=hand,
        current_trick=[
            TrickPlayInfo(player_id=p.player_id, card=card_info(p.card)) for p in gs.current_trick
        ],
        led_suit=gs.led_suit.value if gs.led_suit else None,
        tricks=[
            TrickInfo(
                winner=t.winner,
                plays=[TrickPlayInfo(player_id=p.player_id, card=card_info(p.card)) for p in t.plays],
            )
            for t in gs.tricks
        ],
        action_count=len(view.action_history),
        is_game_over=view.is_game_over,
        winner=view.winner,
    )


def _error(code: ErrorCode, message: str, details: dict[str, Any] | None = None) -> ErrorResponse:
    return ErrorResponse(error=message, error_code=code, details=details)


def _not_found(game_id: str) -> ErrorResponse:
    return _error(ErrorCode.GAME_NOT_FOUND, f"Game {game_id} not found")


def _engine_error(e: EngineError) -> ErrorResponse:
    logger.warning("Engine error: %s", e)
    return _error(ErrorCode(e.code), e.message)
