"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a host application (table UI,
relay server) and the engine. Game state only ever leaves the engine as
a GameView: one player's filtered projection.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has ended
- INVALID_ACTION: Action is not legal for its player right now
- SETUP_ERROR: Player list does not fit the game type
- CORRUPT_HISTORY: Stored log cannot be replayed
- OUT_OF_SEQUENCE: Action arrived ahead of missing actions
- NO_LEGAL_ACTIONS / CONTRACT_VIOLATION: Automated player failure
- VALIDATION_ERROR: Request body is malformed
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..session.wire import ActionModel, PlayerModel


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    SETUP_ERROR = "SETUP_ERROR"
    CORRUPT_HISTORY = "CORRUPT_HISTORY"
    OUT_OF_SEQUENCE = "OUT_OF_SEQUENCE"
    NO_LEGAL_ACTIONS = "NO_LEGAL_ACTIONS"
    CONTRACT_VIOLATION = "CONTRACT_VIOLATION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GamePhaseName(str, Enum):
    """Phases reported to clients."""
    BIDDING = "bidding"
    PLAYING = "playing"
    COMPLETE = "complete"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A face-up card. Face-down cards are never sent, only counted."""
    card_id: str
    suit: str
    rank: str
    label: str


class PlayerInfo(BaseModel):
    """Seat information for display."""
    player_id: str
    name: str
    is_ai: bool
    is_connected: bool = True
    is_current_turn: bool = False
    hand_count: int = 0
    bid: Optional[int] = None
    tricks_won: int = 0


class TrickPlayInfo(BaseModel):
    player_id: str
    card: CardInfo


class TrickInfo(BaseModel):
    """An archived trick."""
    winner: str
    plays: list[TrickPlayInfo]


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to deal a new game."""
    game_type: str = Field("spades", description="Built-in game type")
    seed: Optional[int] = Field(None, ge=0, le=0xFFFFFFFF, description="Deal seed (random if omitted)")
    players: list[PlayerModel] = Field(description="Seats in table order")
    host_player_id: Optional[str] = Field(None, description="Local seat of the host (default: first)")


class SyncRequestBody(BaseModel):
    """Ask for actions after the last one the caller knows."""
    last_known_action_index: int = Field(-1, ge=-1)


# =============================================================================
# Response Models
# =============================================================================

class GameViewResponse(BaseModel):
    """One player's view of a game."""
    game_id: str
    game_type: str
    seed: int
    viewer_id: str
    phase: GamePhaseName
    current_player_id: str
    players: list[PlayerInfo]
    hand: list[CardInfo] = Field(default_factory=list, description="Viewer's own cards")
    current_trick: list[TrickPlayInfo] = Field(default_factory=list)
    led_suit: Optional[str] = None
    tricks: list[TrickInfo] = Field(default_factory=list)
    action_count: int = 0
    is_game_over: bool = False
    winner: Optional[str] = None


class CreateGameResponse(BaseModel):
    """Response after dealing a game."""
    game_id: str
    seed: int
    players: list[PlayerModel]
    view: GameViewResponse


class ActionListResponse(BaseModel):
    """Legal actions for one player."""
    game_id: str
    player_id: str
    actions: list[ActionModel]


class SubmitActionResponse(BaseModel):
    """Result of an accepted action."""
    game_id: str
    seq_num: int
    view: GameViewResponse


class SyncResponseBody(BaseModel):
    """Missing actions, starting at from_index."""
    game_id: str
    from_index: int
    actions: list[ActionModel]


class BotTurnResponse(BaseModel):
    """Actions taken by automated seats until a human is on turn."""
    game_id: str
    actions: list[ActionModel]
    current_player_id: str
    is_game_over: bool = False
    winner: Optional[str] = None


class GameListResponse(BaseModel):
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    success: bool
    game_id: str


class ErrorResponse(BaseModel):
    """Standardized error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str
    active_games: int = 0
