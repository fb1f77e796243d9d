"""Fleet composition and in-transit movement models."""

import math
from dataclasses import dataclass

from ..utils.constants import MAX_UNITS_PER_TYPE, UNIT_FIELDS, UNIT_STATS, UNIT_TYPES


@dataclass
class FleetComposition:
    """Counts of the three unit classes.

    A composition is always owned by something longer-lived: a home system
    or a fleet movement.
    """

    frigates: int = 0
    cruisers: int = 0
    battleships: int = 0

    def __post_init__(self):
        """Validate counts after initialization."""
        errors = validate_fleet_composition(self)
        if errors:
            raise ValueError(f"Invalid fleet composition {self}: {'; '.join(errors)}")

    @property
    def total(self) -> int:
        """Total number of ships."""
        return self.frigates + self.cruisers + self.battleships

    def is_empty(self) -> bool:
        return self.total == 0

    def count(self, unit_type: str) -> int:
        """Return the count for a unit class name ("frigate", ...)."""
        return getattr(self, UNIT_FIELDS[unit_type])

    def copy(self) -> "FleetComposition":
        return FleetComposition(self.frigates, self.cruisers, self.battleships)

    def __add__(self, other: "FleetComposition") -> "FleetComposition":
        return FleetComposition(
            frigates=self.frigates + other.frigates,
            cruisers=self.cruisers + other.cruisers,
            battleships=self.battleships + other.battleships,
        )

    def subtract(self, other: "FleetComposition") -> "FleetComposition":
        """Remove other's ships, clamping each count at zero."""
        return FleetComposition(
            frigates=max(0, self.frigates - other.frigates),
            cruisers=max(0, self.cruisers - other.cruisers),
            battleships=max(0, self.battleships - other.battleships),
        )

    def contains(self, other: "FleetComposition") -> bool:
        """True if this composition has at least other's ships of every class."""
        return (
            self.frigates >= other.frigates
            and self.cruisers >= other.cruisers
            and self.battleships >= other.battleships
        )

    def scaled(self, ratio: float) -> "FleetComposition":
        """Take floor(count * ratio) of every class."""
        return FleetComposition(
            frigates=math.floor(self.frigates * ratio),
            cruisers=math.floor(self.cruisers * ratio),
            battleships=math.floor(self.battleships * ratio),
        )

    def add_units(self, unit_type: str, quantity: int) -> None:
        """Add completed units of one class in place."""
        field_name = UNIT_FIELDS[unit_type]
        setattr(self, field_name, getattr(self, field_name) + quantity)

    def to_dict(self) -> dict[str, int]:
        return {
            "frigates": self.frigates,
            "cruisers": self.cruisers,
            "battleships": self.battleships,
        }


def validate_fleet_composition(composition: FleetComposition) -> list[str]:
    """Check a composition for negative or overflowing counts.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    for unit_type in UNIT_TYPES:
        field_name = UNIT_FIELDS[unit_type]
        value = getattr(composition, field_name)
        if not isinstance(value, int) or isinstance(value, bool):
            errors.append(f"{field_name.capitalize()} count must be an integer")
        elif value < 0:
            errors.append(f"{field_name.capitalize()[:-1]} count cannot be negative")
        elif value > MAX_UNITS_PER_TYPE:
            errors.append("Unit counts exceed reasonable maximum")
    return errors


def calculate_fleet_build_cost(composition: FleetComposition) -> dict[str, int]:
    """Total metal/energy needed to build a composition."""
    return _sum_costs(composition, "build_cost")


def calculate_fleet_upkeep(composition: FleetComposition) -> dict[str, int]:
    """Total per-turn metal/energy upkeep of a composition."""
    return _sum_costs(composition, "upkeep_cost")


def _sum_costs(composition: FleetComposition, key: str) -> dict[str, int]:
    metal = 0
    energy = 0
    for unit_type in UNIT_TYPES:
        count = composition.count(unit_type)
        metal += count * UNIT_STATS[unit_type][key]["metal"]
        energy += count * UNIT_STATS[unit_type][key]["energy"]
    return {"metal": metal, "energy": energy}


@dataclass
class FleetMovement:
    """A fleet in flight toward a target and back.

    Only the composition and turn numbers are stored. The mission phase
    (outbound, combat, returning) is derived from the current turn by
    engine.movement.mission_phase.
    """

    composition: FleetComposition  # Ships debited from the owner's home fleet
    target: str  # Target identifier (e.g., "ai_home", or "home" when returning)
    arrival_turn: int  # Turn the fleet engages at its target
    return_turn: int  # Turn the fleet is back home

    def __post_init__(self):
        """Validate movement data after initialization."""
        if self.composition.is_empty():
            raise ValueError("Cannot create a fleet movement with no ships")
        if not self.target or not self.target.strip():
            raise ValueError("Movement target cannot be empty")
        if self.return_turn <= self.arrival_turn:
            raise ValueError(
                f"Invalid return_turn: {self.return_turn} "
                f"(must be after arrival_turn {self.arrival_turn})"
            )
