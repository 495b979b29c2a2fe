"""
Engine errors.

Every engine failure carries a stable error code so hosts can map it
to a response without inspecting the message.
"""

from __future__ import annotations
from typing import Any


class EngineError(Exception):
    """Base exception for engine failures."""
    code = "ENGINE_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class SetupError(EngineError):
    """The player list does not fit the game type."""
    code = "SETUP_ERROR"


class InvalidAction(EngineError):
    """A live action is not in the legal set for its player."""
    code = "INVALID_ACTION"

    def __init__(self, message: str, action: Any = None):
        self.action = action
        super().__init__(message)


class CorruptHistory(EngineError):
    """A stored action log cannot be replayed."""
    code = "CORRUPT_HISTORY"

    def __init__(self, message: str, index: int, action: Any = None):
        self.index = index
        self.action = action
        super().__init__(f"action #{index}: {message}")


class NoLegalActions(EngineError):
    """An automated player was asked to move with nothing legal to do."""
    code = "NO_LEGAL_ACTIONS"


class ContractViolation(EngineError):
    """An automated player produced an action outside the legal set."""
    code = "CONTRACT_VIOLATION"


class OutOfSequence(EngineError):
    """A remote action arrived ahead of actions this peer has not seen."""
    code = "OUT_OF_SEQUENCE"

    def __init__(self, message: str, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(message)
