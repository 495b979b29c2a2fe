"""
Action broadcaster - Abstract transport for exchanging messages with peers.

Only the contract lives here. Delivery is "eventually, in no
particular order": no acknowledgment, retry or deduplication is
promised by a transport. Sequencing is handled by the ReplayManager.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable

from .models import NetworkMessage

MessageCallback = Callable[[NetworkMessage], None]


class ActionBroadcaster(ABC):
    """Send/receive surface consumed by the session layer."""

    @abstractmethod
    async def send(self, message: NetworkMessage) -> None:
        """Send a message to every peer."""
        ...

    @abstractmethod
    def on_message(self, callback: MessageCallback) -> None:
        """Register a listener for incoming messages."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Stop delivering messages."""
        ...


class MockBroadcaster(ActionBroadcaster):
    """
    In-process broadcaster for tests.

    Every sent message is recorded and delivered synchronously to all
    listeners, including the sender's own.
    """

    def __init__(self) -> None:
        self._listeners: list[MessageCallback] = []
        self._outgoing: list[NetworkMessage] = []

    @property
    def sent_messages(self) -> list[NetworkMessage]:
        return self._outgoing.copy()

    async def send(self, message: NetworkMessage) -> None:
        self._outgoing.append(message)
        for listener in list(self._listeners):
            listener(message)

    def on_message(self, callback: MessageCallback) -> None:
        self._listeners.append(callback)

    async def disconnect(self) -> None:
        self._listeners = []
