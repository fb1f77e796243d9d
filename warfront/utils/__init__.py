"""Utility functions and constants for Warfront."""

from .constants import (
    BUILDABLE_TYPES,
    MAX_UNITS_PER_TYPE,
    RNG_SEED_DEFAULT,
    SCAN_COSTS,
    STRUCTURE_STATS,
    UNIT_STATS,
    UNIT_TYPES,
)
from .error_reporter import ErrorReporter, ErrorResponse, GameError
from .rng import GameRNG

__all__ = [
    "BUILDABLE_TYPES",
    "MAX_UNITS_PER_TYPE",
    "RNG_SEED_DEFAULT",
    "SCAN_COSTS",
    "STRUCTURE_STATS",
    "UNIT_STATS",
    "UNIT_TYPES",
    "ErrorReporter",
    "ErrorResponse",
    "GameError",
    "GameRNG",
]
