"""
FastAPI Application - REST API for game hosts.

Endpoints:
    GET    /api/v1/health                      Service health
    POST   /api/v1/games                       Deal a new game
    GET    /api/v1/games                       List hosted games
    DELETE /api/v1/games/{id}                  End a game
    GET    /api/v1/games/{id}/view             One player's view
    GET    /api/v1/games/{id}/actions          Legal actions for a player
    POST   /api/v1/games/{id}/actions          Submit an action
    POST   /api/v1/games/{id}/sync             Actions after a known index
    POST   /api/v1/games/{id}/bot-turn         Let automated seats move

Actions use the camelCase wire format (see session.wire). Every
response carries a filtered view; full state never leaves the host.
"""

from typing import Annotated, Any, Union


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, Body, Query
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .. import __version__
    from ..config import Settings
    from .service import APIService
    from .schemas import (
        ActionListResponse,
        BotTurnResponse,
        CreateGameRequest,
        CreateGameResponse,
        EndGameResponse,
        ErrorCode,
        ErrorResponse,
        GameListResponse,
        GameViewResponse,
        HealthResponse,
        SubmitActionResponse,
        SyncRequestBody,
        SyncResponseBody,
    )

    api_service = service or APIService(settings=Settings.from_env())

    app = FastAPI(
        title="Deckhand Engine API",
        description="""
Deterministic card-game engine. Games are dealt from a seed and rebuilt
from their action log; clients only ever receive their own view.

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist or has ended |
| `INVALID_ACTION` | Action is not legal for its player now |
| `SETUP_ERROR` | Player list does not fit the game type |
| `OUT_OF_SEQUENCE` | Action arrived ahead of missing actions; sync first |
| `CORRUPT_HISTORY` | Stored log cannot be replayed |
| `VALIDATION_ERROR` | Malformed request body |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_service.settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    status_codes = {
        ErrorCode.GAME_NOT_FOUND: 404,
        ErrorCode.OUT_OF_SEQUENCE: 409,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    def as_response(result):
        """Pass models through, turn ErrorResponse into a JSONResponse."""
        if isinstance(result, ErrorResponse):
            return JSONResponse(
                status_code=status_codes.get(result.error_code, 400),
                content=result.model_dump(mode="json"),
            )
        return result

    errors = {
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Game not found"},
    }

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return api_service.health()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=CreateGameResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Deal a new game",
    )
    async def create_game(request: CreateGameRequest) -> Union[CreateGameResponse, JSONResponse]:
        """
        Deal a new game from a seed.

        Omit `seed` for a random deal. The response carries the host's view.
        """
        return as_response(api_service.create_game(request))

    @app.get("/api/v1/games", response_model=GameListResponse, tags=["Games"])
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        responses=errors,
        tags=["Games"],
    )
    async def end_game(game_id: str) -> Union[EndGameResponse, JSONResponse]:
        if not api_service.end_game(game_id):
            return as_response(ErrorResponse(
                error=f"Game {game_id} not found",
                error_code=ErrorCode.GAME_NOT_FOUND,
            ))
        return EndGameResponse(success=True, game_id=game_id)

    @app.get(
        "/api/v1/games/{game_id}/view",
        response_model=GameViewResponse,
        responses=errors,
        tags=["Games"],
        summary="Get one player's view",
    )
    async def get_view(
        game_id: str,
        viewer: Annotated[str, Query(description="Player id; unknown ids see no hands")],
    ) -> Union[GameViewResponse, JSONResponse]:
        return as_response(api_service.get_view(game_id, viewer))

    # =========================================================================
    # Action Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games/{game_id}/actions",
        response_model=ActionListResponse,
        responses=errors,
        tags=["Actions"],
        summary="List legal actions for a player",
    )
    async def get_actions(
        game_id: str,
        viewer: Annotated[str, Query(description="Player id")],
    ) -> Union[ActionListResponse, JSONResponse]:
        return as_response(api_service.get_actions(game_id, viewer))

    @app.post(
        "/api/v1/games/{game_id}/actions",
        response_model=SubmitActionResponse,
        responses={**errors, 409: {"model": ErrorResponse, "description": "Sync required"}},
        tags=["Actions"],
        summary="Submit an action",
    )
    async def submit_action(
        game_id: str,
        action: Annotated[dict[str, Any], Body(description="Action in wire format")],
    ) -> Union[SubmitActionResponse, JSONResponse]:
        """
        Submit an action such as
        `{"kind": "placeBid", "playerId": "p1", "bid": 3}`.

        Illegal actions are rejected and the game is unchanged.
        """
        return as_response(api_service.submit_action(game_id, action))

    @app.post(
        "/api/v1/games/{game_id}/bot-turn",
        response_model=BotTurnResponse,
        responses=errors,
        tags=["Actions"],
        summary="Run automated seats",
    )
    async def bot_turn(game_id: str) -> Union[BotTurnResponse, JSONResponse]:
        return as_response(api_service.run_bots(game_id))

    @app.post(
        "/api/v1/games/{game_id}/sync",
        response_model=SyncResponseBody,
        responses=errors,
        tags=["Actions"],
        summary="Fetch actions after a known index",
    )
    async def sync(game_id: str, request: SyncRequestBody) -> Union[SyncResponseBody, JSONResponse]:
        return as_response(api_service.sync(game_id, request))

    return app


# For running directly: uvicorn deckhand.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
