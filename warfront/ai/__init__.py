"""AI decision engine and archetypes."""

from .aggressor import AggressorAI
from .base import AIState, BaseArchetype
from .economist import EconomistAI
from .engine import ARCHETYPES, AIEngine, create_archetype
from .hybrid import HybridAI
from .settings import BehaviorProbabilities, TricksterSettings
from .trickster import TricksterAI

__all__ = [
    "AIEngine",
    "AIState",
    "ARCHETYPES",
    "AggressorAI",
    "BaseArchetype",
    "BehaviorProbabilities",
    "EconomistAI",
    "HybridAI",
    "TricksterAI",
    "TricksterSettings",
    "create_archetype",
]
