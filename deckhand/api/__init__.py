"""
API Module - HTTP interface for game hosts.

Exposes hosted games over REST:
1. Deal a game from a seed
2. Fetch one player's view and legal actions
3. Submit actions and run automated seats
4. Serve sync requests from reconnecting peers

All games live in memory for the life of the process.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    SyncRequestBody,
    # Responses
    CreateGameResponse,
    GameViewResponse,
    ActionListResponse,
    SubmitActionResponse,
    SyncResponseBody,
    BotTurnResponse,
    ErrorResponse,
    ErrorCode,
    # Shared
    PlayerInfo,
    CardInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "SyncRequestBody",
    # Responses
    "CreateGameResponse",
    "GameViewResponse",
    "ActionListResponse",
    "SubmitActionResponse",
    "SyncResponseBody",
    "BotTurnResponse",
    "ErrorResponse",
    "ErrorCode",
    # Shared
    "PlayerInfo",
    "CardInfo",
    # Service
    "APIService",
    "create_app",
]
