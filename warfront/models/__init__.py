"""Data models for Warfront."""

from .decision import Decision
from .fleet import FleetComposition, FleetMovement
from .game import CombatEvent, GameState
from .player import BuildOrder, Economy, FleetState, Intelligence, PlayerState, Resources

__all__ = [
    "BuildOrder",
    "CombatEvent",
    "Decision",
    "Economy",
    "FleetComposition",
    "FleetMovement",
    "FleetState",
    "GameState",
    "Intelligence",
    "PlayerState",
    "Resources",
]
