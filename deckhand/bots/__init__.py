"""
Bots module - Automated player implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- AutomatedPlayer: Enforces the legal-action contract around a policy
- RandomPolicy / FirstLegalPolicy: Baselines
- SpadesPolicy: Rule-based Spades bot
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, AutomatedPlayer
from .spades_bot import SpadesPolicy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "AutomatedPlayer",
    "SpadesPolicy",
]
