"""
Tests for the wire format.

Tests:
- Action JSON shapes (camelCase, kind discriminator)
- Validation of malformed input
- Session records
- Envelopes and sync payloads
"""

import json

import pytest
from pydantic import ValidationError

from ..engine_core.action import PlaceBid, PlayCard
from ..engine_core.errors import CorruptHistory
from ..session import MessageKind, NetworkMessage, ReplayManager, SyncRequest, replay
from ..session.wire import (
    action_from_wire,
    action_to_wire,
    message_from_wire,
    message_to_wire,
    session_from_record,
    session_to_record,
    sync_request_from_wire,
    sync_request_to_wire,
)


class TestActionWire:
    """Tests for action serialization."""

    def test_place_bid_shape(self):
        data = action_to_wire(PlaceBid(player_id="p1", bid=3, game_id="g", timestamp=2.0))
        assert data == {"kind": "placeBid", "playerId": "p1", "gameId": "g", "timestamp": 2.0, "bid": 3}

    def test_play_card_shape_with_seq(self):
        data = action_to_wire(PlayCard(player_id="p2", card_id="S2-40", seq_num=7))
        assert data["kind"] == "playCard"
        assert data["cardId"] == "S2-40"
        assert data["seqNum"] == 7

    def test_from_wire_keeps_metadata(self):
        action = action_from_wire(
            {"kind": "playCard", "playerId": "p2", "gameId": "g", "timestamp": 4, "cardId": "HA-0", "seqNum": 4}
        )
        assert action == PlayCard(player_id="p2", card_id="HA-0")
        assert action.game_id == "g"
        assert action.timestamp == 4.0
        assert action.seq_num == 4

    def test_defaults_for_missing_metadata(self):
        action = action_from_wire({"kind": "placeBid", "playerId": "p1", "bid": 0})
        assert action.game_id == ""
        assert action.seq_num is None

    @pytest.mark.parametrize("data", [
        {"kind": "pass", "playerId": "p1"},
        {"kind": "placeBid", "playerId": "p1", "bid": 14},
        {"kind": "placeBid", "playerId": "p1", "bid": -1},
        {"kind": "placeBid", "playerId": "", "bid": 1},
        {"kind": "playCard", "playerId": "p1"},
        {"playerId": "p1", "bid": 1},
    ])
    def test_malformed_actions_rejected(self, data):
        with pytest.raises(ValidationError):
            action_from_wire(data)


class TestSessionRecord:
    """Tests for persisted sessions."""

    def test_record_rebuilds_same_state(self, reducer, session):
        manager = ReplayManager(reducer, session)
        for player_id, bid in [("p1", 3), ("p2", 2), ("p3", 4), ("p4", 2)]:
            manager.submit(manager.get_valid_actions(player_id)[bid])
        manager.submit(manager.get_valid_actions("p1")[0])

        record = json.loads(json.dumps(session_to_record(manager.session)))
        assert record["gameId"] == "table-1"
        assert record["players"][0] == {
            "id": "p1", "name": "Player 1", "isAI": False, "isLocal": True, "isConnected": True,
        }

        loaded = session_from_record(record)
        assert loaded == manager.session
        assert replay(reducer, loaded) == manager.get_current_state()

    def test_malformed_log_entry_is_corrupt(self, session):
        record = session_to_record(session.append(PlaceBid(player_id="p1", bid=3)))
        record["actionHistory"].append({"kind": "playCard", "playerId": "p2"})

        with pytest.raises(CorruptHistory) as exc:
            session_from_record(record)
        assert exc.value.index == 1

    def test_malformed_envelope_rejected(self):
        with pytest.raises(ValidationError):
            session_from_record({"gameId": "g", "seed": 1})


class TestEnvelopes:
    """Tests for network envelopes."""

    def test_message_wire(self):
        message = NetworkMessage(
            kind=MessageKind.SYNC_REQUEST,
            game_id="g",
            payload=sync_request_to_wire(SyncRequest("g", -1)),
            timestamp=3.0,
            from_player_id="p2",
        )
        data = message_to_wire(message)
        assert data["kind"] == "sync-request"
        assert data["fromPlayerId"] == "p2"
        assert data["payload"] == {"gameId": "g", "lastKnownActionIndex": -1}
        assert "seqNum" not in data

        assert message_from_wire(data) == message

    def test_sync_request_index_floor(self):
        with pytest.raises(ValidationError):
            sync_request_from_wire({"gameId": "g", "lastKnownActionIndex": -2})

    def test_unknown_message_kind_rejected(self):
        with pytest.raises(ValidationError):
            message_from_wire({"kind": "gossip", "gameId": "g", "fromPlayerId": "p1"})
