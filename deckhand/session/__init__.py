"""
Session Module - Action logs, replay and peer synchronization.

A session is one game's {seed, players, action history}:
- Created when a table starts a game
- Grows by appending actions, never by editing them
- Rebuilt into GameState whenever state is needed

Persistence, if any, stores the session record verbatim
(see wire.session_to_record).
"""

from .models import Session, NetworkMessage, MessageKind, SyncRequest, SyncResponse
from .manager import ReplayManager, replay
from .broadcaster import ActionBroadcaster, MockBroadcaster

__all__ = [
    "Session",
    "NetworkMessage",
    "MessageKind",
    "SyncRequest",
    "SyncResponse",
    "ReplayManager",
    "replay",
    "ActionBroadcaster",
    "MockBroadcaster",
]
