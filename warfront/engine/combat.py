"""Combat resolution between two fleet compositions.

Combat rules:
- Each side's strength is the sum over its unit classes of
  count x random multiplier x (effectiveness against each enemy class x enemy count)
- ratio = attacker strength / defender strength
    ratio >= 2.0 -> decisive_attacker
    ratio <= 0.5 -> decisive_defender
    otherwise    -> close_battle
- Casualty rate per side: close battle 40-60%, decisive winner 10-30%,
  decisive loser 70-90%. Each class loses floor(count x rate).

Random multipliers are drawn from the shared RNG unless the caller injects
them, which keeps tests deterministic.
"""

import logging
import math
from dataclasses import dataclass

from ..models.fleet import FleetComposition, FleetMovement
from ..utils.constants import (
    CLOSE_BATTLE_CASUALTIES,
    DECISIVE_LOSER_CASUALTIES,
    DECISIVE_RATIO,
    DECISIVE_WINNER_CASUALTIES,
    RANDOM_FACTOR_RANGE,
    UNIT_STATS,
    UNIT_TYPES,
)
from ..utils.rng import GameRNG
from .movement import create_returning_fleet

logger = logging.getLogger(__name__)

DECISIVE_ATTACKER = "decisive_attacker"
DECISIVE_DEFENDER = "decisive_defender"
CLOSE_BATTLE = "close_battle"
OUTCOMES = (DECISIVE_ATTACKER, DECISIVE_DEFENDER, CLOSE_BATTLE)

# Shared source for normal play; callers may pass their own seeded GameRNG
_shared_rng = GameRNG()


@dataclass
class RandomFactors:
    """Per-unit-class strength multipliers for one side."""

    frigate: float = 1.0
    cruiser: float = 1.0
    battleship: float = 1.0

    @classmethod
    def draw(cls, rng: GameRNG) -> "RandomFactors":
        """Draw each multiplier independently from RANDOM_FACTOR_RANGE."""
        low, high = RANDOM_FACTOR_RANGE
        return cls(
            frigate=rng.uniform(low, high),
            cruiser=rng.uniform(low, high),
            battleship=rng.uniform(low, high),
        )

    def get(self, unit_type: str) -> float:
        return getattr(self, unit_type)


@dataclass
class CombatResult:
    """Outcome of one combat resolution.

    Attributes:
        outcome: "decisive_attacker", "decisive_defender" or "close_battle"
        attacker_survivors: Attacker ships remaining
        defender_survivors: Defender ships remaining
        attacker_casualties: Attacker ships lost
        defender_casualties: Defender ships lost
        strength_ratio: Attacker strength / defender strength (inf if the
            defender has no strength and the attacker wins)
        attacker_strength: Raw attacker strength
        defender_strength: Raw defender strength
    """

    outcome: str
    attacker_survivors: FleetComposition
    defender_survivors: FleetComposition
    attacker_casualties: FleetComposition
    defender_casualties: FleetComposition
    strength_ratio: float
    attacker_strength: float
    defender_strength: float


@dataclass
class CombatResolution:
    """Combat result for an arriving movement plus what it leaves behind.

    Attributes:
        combat_result: The resolved combat
        returning_fleet: Survivors heading home, or None if annihilated
        defender_fleet: Defender's home fleet after combat
    """

    combat_result: CombatResult
    returning_fleet: FleetMovement | None
    defender_fleet: FleetComposition


def unit_type_strength(
    unit_count: int,
    unit_type: str,
    enemy: FleetComposition,
    random_factor: float,
) -> float:
    """Strength of one unit class against an enemy composition."""
    if unit_count == 0:
        return 0.0
    effectiveness = UNIT_STATS[unit_type]["effectiveness"]
    base = sum(unit_count * effectiveness[enemy_type] * enemy.count(enemy_type) for enemy_type in UNIT_TYPES)
    return base * random_factor


def combat_strength(
    own: FleetComposition, enemy: FleetComposition, factors: RandomFactors
) -> float:
    """Total strength of a composition measured against an enemy composition."""
    return sum(
        unit_type_strength(own.count(unit_type), unit_type, enemy, factors.get(unit_type))
        for unit_type in UNIT_TYPES
    )


def determine_outcome(attacker_strength: float, defender_strength: float) -> str:
    """Classify a battle from the two strengths.

    Zero attacker strength is a decisive defender win; zero defender strength
    (with a non-zero attacker) is a decisive attacker win.
    """
    if attacker_strength == 0:
        return DECISIVE_DEFENDER
    if defender_strength == 0:
        return DECISIVE_ATTACKER

    ratio = attacker_strength / defender_strength
    if ratio >= DECISIVE_RATIO:
        return DECISIVE_ATTACKER
    if ratio <= 1 / DECISIVE_RATIO:
        return DECISIVE_DEFENDER
    return CLOSE_BATTLE


def casualty_rate(outcome: str, is_winner: bool, rng: GameRNG) -> float:
    """Draw the fraction of each unit class a side loses."""
    if outcome == CLOSE_BATTLE:
        low, high = CLOSE_BATTLE_CASUALTIES
    elif is_winner:
        low, high = DECISIVE_WINNER_CASUALTIES
    else:
        low, high = DECISIVE_LOSER_CASUALTIES
    return rng.uniform(low, high)


def apply_casualties(
    fleet: FleetComposition, rate: float
) -> tuple[FleetComposition, FleetComposition]:
    """Split a fleet into (survivors, casualties) at the given loss rate."""
    casualties = FleetComposition(
        frigates=math.floor(fleet.frigates * rate),
        cruisers=math.floor(fleet.cruisers * rate),
        battleships=math.floor(fleet.battleships * rate),
    )
    survivors = FleetComposition(
        frigates=fleet.frigates - casualties.frigates,
        cruisers=fleet.cruisers - casualties.cruisers,
        battleships=fleet.battleships - casualties.battleships,
    )
    return survivors, casualties


def calculate_casualties(
    fleet: FleetComposition, outcome: str, is_winner: bool, rng: GameRNG | None = None
) -> tuple[FleetComposition, FleetComposition]:
    """Draw a casualty rate for the outcome and apply it.

    Returns:
        Tuple of (survivors, casualties)
    """
    rate = casualty_rate(outcome, is_winner, rng or _shared_rng)
    return apply_casualties(fleet, rate)


def resolve_combat(
    attacker: FleetComposition,
    defender: FleetComposition,
    attacker_factors: RandomFactors | None = None,
    defender_factors: RandomFactors | None = None,
    rng: GameRNG | None = None,
) -> CombatResult:
    """Resolve combat between two compositions.

    Pure with respect to its inputs: neither composition is modified.

    Args:
        attacker: Attacking composition
        defender: Defending composition
        attacker_factors: Injected attacker multipliers (drawn if None)
        defender_factors: Injected defender multipliers (drawn if None)
        rng: Random source (the shared engine RNG if None)

    Returns:
        CombatResult with outcome, survivors and casualties for both sides
    """
    rng = rng or _shared_rng
    if attacker_factors is None:
        attacker_factors = RandomFactors.draw(rng)
    if defender_factors is None:
        defender_factors = RandomFactors.draw(rng)

    attacker_strength = combat_strength(attacker, defender, attacker_factors)
    defender_strength = combat_strength(defender, attacker, defender_factors)

    if defender.is_empty() and not attacker.is_empty():
        # Nothing to fight: both strengths are zero, but the attacker holds the field
        outcome = DECISIVE_ATTACKER
    else:
        outcome = determine_outcome(attacker_strength, defender_strength)

    if defender_strength > 0:
        strength_ratio = attacker_strength / defender_strength
    else:
        strength_ratio = math.inf if outcome == DECISIVE_ATTACKER else 0.0

    attacker_survivors, attacker_casualties = calculate_casualties(
        attacker, outcome, outcome == DECISIVE_ATTACKER, rng
    )
    defender_survivors, defender_casualties = calculate_casualties(
        defender, outcome, outcome == DECISIVE_DEFENDER, rng
    )

    logger.debug(
        "Combat %s vs %s: %s (ratio %.2f)",
        attacker.to_dict(),
        defender.to_dict(),
        outcome,
        strength_ratio,
    )

    return CombatResult(
        outcome=outcome,
        attacker_survivors=attacker_survivors,
        defender_survivors=defender_survivors,
        attacker_casualties=attacker_casualties,
        defender_casualties=defender_casualties,
        strength_ratio=strength_ratio,
        attacker_strength=attacker_strength,
        defender_strength=defender_strength,
    )


def process_combat_movement(
    movement: FleetMovement,
    defender_home_fleet: FleetComposition,
    current_turn: int,
    rng: GameRNG | None = None,
) -> CombatResolution:
    """Resolve an arriving movement against the defender's home fleet.

    Attacker survivors become a returning movement; defender survivors become
    the defender's new home fleet. Casualties are discarded.
    """
    result = resolve_combat(movement.composition, defender_home_fleet, rng=rng)
    returning_fleet = create_returning_fleet(result.attacker_survivors, movement, current_turn)
    return CombatResolution(
        combat_result=result,
        returning_fleet=returning_fleet,
        defender_fleet=result.defender_survivors,
    )


def check_fleet_elimination(
    home_fleet: FleetComposition, movements: list[FleetMovement]
) -> bool:
    """True if a side has no ships at home and none in flight."""
    if not home_fleet.is_empty():
        return False
    return all(m.composition.is_empty() for m in movements)
