"""
Replay Manager - Owns one session's action log and rebuilds state from it.

LIFECYCLE:
1. A session starts from {seed, players} with an empty log
2. Local moves go through submit(): validated, sequenced, appended
3. Remote moves arrive through receive() or handle_message()
4. A reconnecting peer catches up with handle_reconnection()
5. Any state anyone sees is rebuilt from the log, then filtered

RULES:
- The log is append-only; the session value is replaced, never edited
- get_current_state() always rebuilds; nothing derived is cached
- Sequence numbers are positions in the log. The log that assigns
  them (the host) is authoritative; duplicates are dropped and gaps
  must be filled by a sync before more actions are accepted
"""

from __future__ import annotations
from typing import Iterable
import logging

from pydantic import ValidationError

from ..engine_core.action import Action, describe, stamp
from ..engine_core.errors import InvalidAction, OutOfSequence
from ..engine_core.reducer import GameReducer
from ..engine_core.state import GameState
from .broadcaster import ActionBroadcaster
from .models import MessageKind, NetworkMessage, Session, SyncRequest, SyncResponse
from .wire import (
    action_from_wire,
    action_to_wire,
    sync_request_from_wire,
    sync_request_to_wire,
    sync_response_from_wire,
    sync_response_to_wire,
)

logger = logging.getLogger(__name__)


def replay(reducer: GameReducer, session: Session) -> GameState:
    """Rebuild the state of a session from its seed and log."""
    return reducer.rebuild(
        session.seed,
        session.players,
        session.action_history,
        **session.setup_kwargs(),
    )


class ReplayManager:
    """
    Reconnection and validation for one session.

    Usage:
        manager = ReplayManager(SpadesReducer(), session)
        state = manager.submit(action)
        view = manager.get_view()
    """

    def __init__(
        self,
        reducer: GameReducer,
        session: Session,
        broadcaster: ActionBroadcaster | None = None,
    ):
        self.reducer = reducer
        self._session = session
        self._broadcaster = broadcaster
        self._inbox: list[NetworkMessage] = []
        if broadcaster is not None:
            broadcaster.on_message(self._inbox.append)

    @property
    def session(self) -> Session:
        return self._session

    def get_session(self) -> Session:
        return self._session

    def get_current_state(self) -> GameState:
        """Authoritative state, rebuilt from the log."""
        return replay(self.reducer, self._session)

    def get_view(self, viewer_id: str | None = None) -> GameState:
        """Current state as viewer_id (default: the local player) may see it."""
        return self.reducer.player_view(
            self.get_current_state(),
            viewer_id or self._session.player_id,
        )

    def get_valid_actions(self, player_id: str | None = None) -> list[Action]:
        """Legal actions for a player, computed on that player's view."""
        player_id = player_id or self._session.player_id
        return self.reducer.get_valid_actions(self.get_view(player_id), player_id)

    def validate_incoming_action(self, action: Action) -> bool:
        """Check an action against the legal set of the rebuilt state."""
        return self.reducer.is_legal(self.get_current_state(), action)

    def submit(self, action: Action) -> GameState:
        """
        Validate, sequence and append a live action.

        Raises InvalidAction (log unchanged) if the action is not legal.
        """
        seq = self._session.next_seq
        action = stamp(action, seq_num=seq)
        new_state = self.reducer.reduce(self.get_current_state(), action)
        self._session = self._session.append(action)
        logger.info("%s #%d: %s", self._session.game_id, seq, describe(action))
        return new_state

    def receive(self, action: Action) -> GameState:
        """
        Accept an action from a peer.

        Actions already in the log (by seq_num) are dropped. A seq_num
        past the end of the log raises OutOfSequence: request a sync.
        """
        expected = self._session.next_seq
        if action.seq_num is not None:
            if action.seq_num < expected:
                logged = self._session.action_history[action.seq_num]
                if logged != action:
                    logger.warning(
                        "%s #%d: conflicting action %s dropped, log has %s",
                        self._session.game_id,
                        action.seq_num,
                        describe(action),
                        describe(logged),
                    )
                else:
                    logger.debug("%s #%d: duplicate dropped", self._session.game_id, action.seq_num)
                return self.get_current_state()
            if action.seq_num > expected:
                raise OutOfSequence(
                    f"Expected action #{expected}, received #{action.seq_num}",
                    expected=expected,
                    received=action.seq_num,
                )
        return self.submit(action)

    def handle_reconnection(self, new_actions: Iterable[Action]) -> GameState:
        """
        Append actions from a peer's log and rebuild.

        The rebuilt state replaces this peer's view of the game. The log
        is trusted: entries are not validated, but an entry that cannot
        be applied raises CorruptHistory and leaves the session as it was.
        """
        start = self._session.next_seq
        stamped = tuple(
            stamp(a, seq_num=start + i) for i, a in enumerate(new_actions)
        )
        candidate = self._session.append(*stamped)
        state = replay(self.reducer, candidate)
        self._session = candidate
        logger.info(
            "%s: reconnected with %d new action(s), log length %d",
            candidate.game_id,
            len(stamped),
            candidate.next_seq,
        )
        return state

    def set_connected(self, player_id: str, connected: bool) -> Session:
        """Record a peer going offline or coming back."""
        for player in self._session.players:
            if player.player_id == player_id:
                self._session = self._session.with_player(player.with_connected(connected))
                break
        return self._session

    # =========================================================================
    # Sync
    # =========================================================================

    def sync_request(self) -> SyncRequest:
        """What this peer needs to ask for to catch up."""
        return SyncRequest(
            game_id=self._session.game_id,
            last_known_action_index=self._session.next_seq - 1,
        )

    def sync_response(self, request: SyncRequest) -> SyncResponse:
        """Every action after the requester's last known index."""
        start = max(request.last_known_action_index + 1, 0)
        return SyncResponse(
            game_id=self._session.game_id,
            from_index=start,
            actions=self._session.action_history[start:],
        )

    def apply_sync_response(self, response: SyncResponse) -> GameState:
        """Append the part of a sync response this peer does not have yet."""
        known = self._session.next_seq
        if response.from_index > known:
            raise OutOfSequence(
                f"Sync starts at #{response.from_index}, log ends at #{known - 1}",
                expected=known,
                received=response.from_index,
            )
        missing = response.actions[known - response.from_index:]
        if not missing:
            return self.get_current_state()
        return self.handle_reconnection(missing)

    # =========================================================================
    # Messaging
    # =========================================================================

    def _envelope(self, kind: MessageKind, payload, seq_num: int | None = None) -> NetworkMessage:
        return NetworkMessage(
            kind=kind,
            game_id=self._session.game_id,
            payload=payload,
            timestamp=float(self._session.next_seq),
            from_player_id=self._session.player_id,
            seq_num=seq_num,
        )

    def handle_message(self, message: NetworkMessage) -> NetworkMessage | None:
        """
        Process one envelope from a peer.

        Returns the reply to send back, if any. Illegal or malformed
        actions are logged and dropped without a reply.
        """
        if message.game_id != self._session.game_id:
            logger.warning("Message for game %s ignored by %s", message.game_id, self._session.game_id)
            return None
        if message.from_player_id == self._session.player_id:
            return None

        if message.kind == MessageKind.ACTION:
            try:
                action = action_from_wire(message.payload)
                self.receive(action)
            except OutOfSequence as e:
                logger.warning("%s: %s, requesting sync", self._session.game_id, e.message)
                return self._envelope(MessageKind.SYNC_REQUEST, sync_request_to_wire(self.sync_request()))
            except InvalidAction as e:
                logger.warning("%s: rejected action from %s: %s", self._session.game_id, message.from_player_id, e.message)
                return None
            except ValidationError as e:
                logger.warning(
                    "%s: malformed action from %s (%d error(s))",
                    self._session.game_id,
                    message.from_player_id,
                    e.error_count(),
                )
                return None
            return self._envelope(MessageKind.ACK, None, seq_num=action.seq_num)

        if message.kind in (MessageKind.SYNC_REQUEST, MessageKind.RECONNECT):
            response = self.sync_response(sync_request_from_wire(message.payload))
            return self._envelope(MessageKind.SYNC_RESPONSE, sync_response_to_wire(response))

        if message.kind == MessageKind.SYNC_RESPONSE:
            self.apply_sync_response(sync_response_from_wire(message.payload))
            return None

        # ACK: nothing to do
        return None

    async def publish(self, action: Action) -> GameState:
        """Submit locally, then broadcast the sequenced action."""
        state = self.submit(action)
        if self._broadcaster is not None:
            sent = self._session.action_history[-1]
            await self._broadcaster.send(
                self._envelope(MessageKind.ACTION, action_to_wire(sent), seq_num=sent.seq_num)
            )
        return state

    async def request_sync(self, reconnect: bool = False) -> None:
        """Ask peers for missing actions."""
        if self._broadcaster is None:
            return
        kind = MessageKind.RECONNECT if reconnect else MessageKind.SYNC_REQUEST
        await self._broadcaster.send(self._envelope(kind, sync_request_to_wire(self.sync_request())))

    async def process_inbox(self) -> int:
        """
        Handle every queued incoming message, sending replies.

        Returns the number of messages handled.
        """
        handled = 0
        while self._inbox:
            message = self._inbox.pop(0)
            reply = self.handle_message(message)
            handled += 1
            if reply is not None and self._broadcaster is not None:
                await self._broadcaster.send(reply)
        return handled
