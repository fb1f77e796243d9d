"""Simulation engine: fleet movement, combat and turn orchestration."""

from .combat import CombatResult, RandomFactors, resolve_combat
from .movement import MovementSummary, create_fleet_movement, process_fleet_movements
from .turn_executor import TurnExecutor, TurnResult

__all__ = [
    "CombatResult",
    "MovementSummary",
    "RandomFactors",
    "TurnExecutor",
    "TurnResult",
    "create_fleet_movement",
    "process_fleet_movements",
    "resolve_combat",
]
