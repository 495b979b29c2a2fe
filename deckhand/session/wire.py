"""
Wire format - Pydantic models for actions, envelopes and session records.

JSON field names are camelCase to match the other peers:

    {"kind": "placeBid", "playerId": "p1", "gameId": "g", "timestamp": 0, "bid": 3}
    {"kind": "playCard", "playerId": "p1", "gameId": "g", "timestamp": 4, "cardId": "S2-40"}

The `kind` field discriminates action variants.
"""

from __future__ import annotations
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..engine_core.action import Action, PlaceBid, PlayCard
from ..engine_core.errors import CorruptHistory
from ..engine_core.state import GameType, Player
from ..games.spades.state import MAX_BID
from .models import MessageKind, NetworkMessage, Session, SyncRequest, SyncResponse


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class _ActionModel(_WireModel):
    player_id: str = Field(alias="playerId", min_length=1)
    game_id: str = Field(default="", alias="gameId")
    timestamp: float = 0.0
    seq_num: int | None = Field(default=None, alias="seqNum", ge=0)


class PlaceBidModel(_ActionModel):
    kind: Literal["placeBid"] = "placeBid"
    bid: int = Field(ge=0, le=MAX_BID)


class PlayCardModel(_ActionModel):
    kind: Literal["playCard"] = "playCard"
    card_id: str = Field(alias="cardId", min_length=1)


ActionModel = Annotated[Union[PlaceBidModel, PlayCardModel], Field(discriminator="kind")]

_action_adapter: TypeAdapter = TypeAdapter(ActionModel)


class PlayerModel(_WireModel):
    id: str = Field(min_length=1)
    name: str
    is_ai: bool = Field(default=False, alias="isAI")
    is_local: bool = Field(default=True, alias="isLocal")
    is_connected: bool = Field(default=True, alias="isConnected")


class NetworkMessageModel(_WireModel):
    kind: Literal["action", "sync-request", "sync-response", "ack", "reconnect"]
    game_id: str = Field(alias="gameId")
    payload: Any = None
    timestamp: float = 0.0
    from_player_id: str = Field(alias="fromPlayerId")
    seq_num: int | None = Field(default=None, alias="seqNum")


class SyncRequestModel(_WireModel):
    game_id: str = Field(alias="gameId")
    last_known_action_index: int = Field(alias="lastKnownActionIndex", ge=-1)


class SyncResponseModel(_WireModel):
    game_id: str = Field(alias="gameId")
    from_index: int = Field(default=0, alias="fromIndex", ge=0)
    actions: list[ActionModel] = Field(default_factory=list)


class SessionRecord(_WireModel):
    """Persistence shape: stored and loaded verbatim."""
    game_id: str = Field(alias="gameId")
    player_id: str = Field(alias="playerId")
    seed: int
    players: list[PlayerModel]
    action_history: list[dict[str, Any]] = Field(default_factory=list, alias="actionHistory")
    created_at: float = Field(default=0.0, alias="createdAt")
    game_type: str = Field(default=GameType.SPADES.value, alias="gameType")


# =============================================================================
# Actions
# =============================================================================

def action_to_model(action: Action) -> PlaceBidModel | PlayCardModel:
    common = {
        "player_id": action.player_id,
        "game_id": action.game_id,
        "timestamp": action.timestamp,
        "seq_num": action.seq_num,
    }
    if isinstance(action, PlaceBid):
        return PlaceBidModel(bid=action.bid, **common)
    if isinstance(action, PlayCard):
        return PlayCardModel(card_id=action.card_id, **common)
    raise TypeError(f"Not an action: {action!r}")


def action_from_model(model: PlaceBidModel | PlayCardModel) -> Action:
    common = {
        "player_id": model.player_id,
        "game_id": model.game_id,
        "timestamp": model.timestamp,
        "seq_num": model.seq_num,
    }
    if isinstance(model, PlaceBidModel):
        return PlaceBid(bid=model.bid, **common)
    return PlayCard(card_id=model.card_id, **common)


def action_to_wire(action: Action) -> dict[str, Any]:
    """Action -> JSON-ready dict (camelCase, seqNum omitted when unset)."""
    return action_to_model(action).model_dump(by_alias=True, exclude_none=True)


def action_from_wire(data: dict[str, Any]) -> Action:
    """
    JSON dict -> Action.

    Raises pydantic.ValidationError for malformed input.
    """
    return action_from_model(_action_adapter.validate_python(data))


# =============================================================================
# Players and sessions
# =============================================================================

def player_to_wire(player: Player) -> dict[str, Any]:
    return PlayerModel(
        id=player.player_id,
        name=player.name,
        is_ai=player.is_ai,
        is_local=player.is_local,
        is_connected=player.is_connected,
    ).model_dump(by_alias=True)


def player_from_model(model: PlayerModel) -> Player:
    return Player(
        player_id=model.id,
        name=model.name,
        is_ai=model.is_ai,
        is_local=model.is_local,
        is_connected=model.is_connected,
    )


def session_to_record(session: Session) -> dict[str, Any]:
    """Session -> persistence dict."""
    return {
        "gameId": session.game_id,
        "playerId": session.player_id,
        "seed": session.seed,
        "players": [player_to_wire(p) for p in session.players],
        "actionHistory": [action_to_wire(a) for a in session.action_history],
        "createdAt": session.created_at,
        "gameType": session.game_type.value,
    }


def session_from_record(data: dict[str, Any]) -> Session:
    """
    Persistence dict -> Session.

    A malformed entry in the stored log raises CorruptHistory with its
    index; a malformed envelope raises pydantic.ValidationError.
    """
    record = SessionRecord.model_validate(data)

    actions = []
    for index, entry in enumerate(record.action_history):
        try:
            actions.append(action_from_wire(entry))
        except ValidationError as e:
            raise CorruptHistory(f"malformed action: {e.errors()[0]['msg']}", index=index) from e

    return Session(
        game_id=record.game_id,
        player_id=record.player_id,
        seed=record.seed,
        players=tuple(player_from_model(p) for p in record.players),
        action_history=tuple(actions),
        created_at=record.created_at,
        game_type=GameType(record.game_type),
    )


# =============================================================================
# Envelopes
# =============================================================================

def message_to_wire(message: NetworkMessage) -> dict[str, Any]:
    return NetworkMessageModel(
        kind=message.kind.value,
        game_id=message.game_id,
        payload=message.payload,
        timestamp=message.timestamp,
        from_player_id=message.from_player_id,
        seq_num=message.seq_num,
    ).model_dump(by_alias=True, exclude_none=True)


def message_from_wire(data: dict[str, Any]) -> NetworkMessage:
    model = NetworkMessageModel.model_validate(data)
    return NetworkMessage(
        kind=MessageKind(model.kind),
        game_id=model.game_id,
        payload=model.payload,
        timestamp=model.timestamp,
        from_player_id=model.from_player_id,
        seq_num=model.seq_num,
    )


def sync_request_to_wire(request: SyncRequest) -> dict[str, Any]:
    return SyncRequestModel(
        game_id=request.game_id,
        last_known_action_index=request.last_known_action_index,
    ).model_dump(by_alias=True)


def sync_request_from_wire(data: dict[str, Any]) -> SyncRequest:
    model = SyncRequestModel.model_validate(data)
    return SyncRequest(game_id=model.game_id, last_known_action_index=model.last_known_action_index)


def sync_response_to_wire(response: SyncResponse) -> dict[str, Any]:
    return {
        "gameId": response.game_id,
        "fromIndex": response.from_index,
        "actions": [action_to_wire(a) for a in response.actions],
    }


def sync_response_from_wire(data: dict[str, Any]) -> SyncResponse:
    model = SyncResponseModel.model_validate(data)
    return SyncResponse(
        game_id=model.game_id,
        from_index=model.from_index,
        actions=tuple(action_from_model(a) for a in model.actions),
    )
