"""
Configuration - Environment variables.

    DECKHAND_ENV            development | production
    DECKHAND_LOG_LEVEL      DEBUG, INFO, ...
    DECKHAND_LOG_DIR        write timestamped log files here (optional)
    DECKHAND_DEFAULT_SEED   fixed seed for games created without one (optional)
    ALLOWED_ORIGINS         comma-separated CORS origins for the API
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


def _log_level(name: str) -> int:
    """Level name (DEBUG, INFO, ...) or number -> logging level."""
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r} (DECKHAND_LOG_LEVEL)")
    return level


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    log_level: int = logging.INFO
    log_dir: str | None = None
    default_seed: int | None = None
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("DECKHAND_ENV", "development"),
            log_level=_log_level(os.getenv("DECKHAND_LOG_LEVEL", "INFO")),
            log_dir=os.getenv("DECKHAND_LOG_DIR") or None,
            default_seed=_optional_int(os.getenv("DECKHAND_DEFAULT_SEED")),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )
