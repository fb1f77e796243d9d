"""Game state container."""

from dataclasses import dataclass, field

from ..utils.constants import AI_SIDE, PLAYER_SIDE
from .fleet import FleetComposition
from .player import PlayerState


@dataclass
class CombatEvent:
    """Record of a combat that occurred.

    Attributes:
        turn: Turn the combat was resolved
        attacker: "player" or "ai"
        attacker_fleet: Attacking composition before combat
        defender_fleet: Defending composition before combat
        outcome: "decisive_attacker", "decisive_defender" or "close_battle"
        attacker_casualties: Ships the attacker lost
        defender_casualties: Ships the defender lost
        attacker_survivors: Ships the attacker kept
        defender_survivors: Ships the defender kept
        strength_ratio: Attacker strength / defender strength
    """

    turn: int
    attacker: str
    attacker_fleet: FleetComposition
    defender_fleet: FleetComposition
    outcome: str
    attacker_casualties: FleetComposition
    defender_casualties: FleetComposition
    attacker_survivors: FleetComposition
    defender_survivors: FleetComposition
    strength_ratio: float


@dataclass
class GameState:
    """Canonical two-sided game state.

    The orchestrator owns this object; the AI engine reads it and keeps its
    own refreshed copy of the AI side.
    """

    turn: int = 1  # Current turn number (starts at 1)
    player: PlayerState = field(default_factory=PlayerState)
    ai: PlayerState = field(default_factory=PlayerState)
    combat_log: list[CombatEvent] = field(default_factory=list)
    winner: str | None = None  # "player", "ai", or None

    def __post_init__(self):
        """Validate game data after initialization."""
        if self.turn < 1:
            raise ValueError(f"Invalid turn: {self.turn} (must be >= 1)")
        if self.winner not in (None, PLAYER_SIDE, AI_SIDE):
            raise ValueError(f"Invalid winner: {self.winner} (must be None, 'player', or 'ai')")

    def side(self, side_id: str) -> PlayerState:
        """Return the state of "player" or "ai"."""
        if side_id == PLAYER_SIDE:
            return self.player
        if side_id == AI_SIDE:
            return self.ai
        raise ValueError(f"Unknown side: {side_id}")

    def opponent(self, side_id: str) -> PlayerState:
        """Return the state of the side opposing side_id."""
        if side_id == PLAYER_SIDE:
            return self.ai
        if side_id == AI_SIDE:
            return self.player
        raise ValueError(f"Unknown side: {side_id}")

    @property
    def is_game_over(self) -> bool:
        return self.winner is not None
