"""Per-side state: resources, fleets, economy and intelligence."""

import copy
from dataclasses import dataclass, field

from ..utils.constants import BUILDABLE_TYPES, STARTING_RESOURCES
from .fleet import FleetComposition, FleetMovement


@dataclass
class Resources:
    """Resource stockpiles and per-turn income."""

    metal: int = STARTING_RESOURCES["metal"]
    energy: int = STARTING_RESOURCES["energy"]
    metal_income: int = STARTING_RESOURCES["metal_income"]
    energy_income: int = STARTING_RESOURCES["energy_income"]

    @property
    def total_income(self) -> int:
        return self.metal_income + self.energy_income


@dataclass
class BuildOrder:
    """A queued construction job."""

    unit_type: str  # Any of BUILDABLE_TYPES
    quantity: int
    turns_remaining: int

    def __post_init__(self):
        """Validate build order after initialization."""
        if self.unit_type not in BUILDABLE_TYPES:
            raise ValueError(f"Invalid unit type: {self.unit_type}")
        if self.quantity <= 0:
            raise ValueError(f"Invalid quantity: {self.quantity} (must be > 0)")
        if self.turns_remaining < 0:
            raise ValueError(f"Invalid turns_remaining: {self.turns_remaining} (must be >= 0)")


@dataclass
class Economy:
    """Economic structures and the construction queue."""

    reactors: int = 0
    mines: int = 0
    construction_queue: list[BuildOrder] = field(default_factory=list)


@dataclass
class Intelligence:
    """What a side knows about its opponent."""

    last_scan_turn: int = 0
    known_enemy_fleet: FleetComposition = field(default_factory=FleetComposition)


@dataclass
class FleetState:
    """A side's home fleet plus everything it has in flight."""

    home_system: FleetComposition = field(default_factory=FleetComposition)
    outbound: list[FleetMovement] = field(default_factory=list)

    def total_ships(self) -> int:
        """Ships at home and in flight."""
        return self.home_system.total + sum(m.composition.total for m in self.outbound)


@dataclass
class PlayerState:
    """Everything one side owns."""

    resources: Resources = field(default_factory=Resources)
    fleet: FleetState = field(default_factory=FleetState)
    economy: Economy = field(default_factory=Economy)
    intelligence: Intelligence = field(default_factory=Intelligence)
    has_been_attacked: bool = False

    def snapshot(self) -> "PlayerState":
        """Deep copy, so readers cannot mutate the canonical state."""
        return copy.deepcopy(self)
