"""
Deckhand - Deterministic card-game engine

Games are pure functions of a seed and an action log. The engine provides:
- Seeded dealing
- Legal action generation and validated reduction
- Replay of stored or synced action logs
- Per-player views that never leak hidden cards
- Automated players bound to the legal-action contract
"""

__version__ = "0.1.0"
