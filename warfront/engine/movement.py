"""Fleet movement state machine.

A movement created at turn T arrives at T+1 and is home at T+3. Its mission
phase is never stored; it is computed from the turn numbers:

- outbound:  current_turn <  arrival_turn
- combat:    current_turn == arrival_turn
- returning: current_turn >  arrival_turn

While a movement is in transit its owner's home system is vulnerable and the
fleet itself is invisible to scans.
"""

from dataclasses import dataclass, field

from ..models.fleet import FleetComposition, FleetMovement, validate_fleet_composition
from ..utils.constants import RETURN_CYCLE_TURNS, TRANSIT_TURNS

OUTBOUND = "outbound"
COMBAT = "combat"
RETURNING = "returning"
MISSION_PHASES = (OUTBOUND, COMBAT, RETURNING)

HOME_TARGET = "home"


@dataclass
class MovementSummary:
    """One-shot classification of movements for the current turn.

    Attributes:
        still_advancing: Movements still outbound
        ready_for_combat: Movements engaging their target this turn
        returning: Movements on their way home
    """

    still_advancing: list[FleetMovement] = field(default_factory=list)
    ready_for_combat: list[FleetMovement] = field(default_factory=list)
    returning: list[FleetMovement] = field(default_factory=list)


def create_fleet_movement(
    composition: FleetComposition, target: str, current_turn: int
) -> FleetMovement:
    """Create an attack movement on the fixed three-turn cycle.

    The caller must already have debited the composition from the owner's
    home fleet.

    Raises:
        ValueError: If the composition is empty or the target is blank
    """
    return FleetMovement(
        composition=composition,
        target=target,
        arrival_turn=current_turn + TRANSIT_TURNS,
        return_turn=current_turn + RETURN_CYCLE_TURNS,
    )


def mission_phase(movement: FleetMovement, current_turn: int) -> str:
    """Derive the mission phase of a movement at current_turn."""
    if current_turn < movement.arrival_turn:
        return OUTBOUND
    if current_turn == movement.arrival_turn:
        return COMBAT
    return RETURNING


def is_in_transit(movement: FleetMovement, current_turn: int) -> bool:
    """True from departure until the fleet is home (the vulnerability window)."""
    return movement.arrival_turn - 1 <= current_turn < movement.return_turn


def can_recall(movement: FleetMovement, current_turn: int) -> bool:
    """A movement can only be recalled before its departure takes effect."""
    return current_turn < movement.arrival_turn - 1


def recall_fleet(
    movements: list[FleetMovement], index: int, current_turn: int
) -> FleetComposition:
    """Remove a movement that has not departed and return its ships.

    Args:
        movements: Owner's movement list (modified in place)
        index: Position of the movement to recall
        current_turn: Current turn number

    Returns:
        The recalled composition, to be merged back into the home fleet

    Raises:
        ValueError: If the movement has already departed
    """
    movement = movements[index]
    if not can_recall(movement, current_turn):
        raise ValueError(
            f"Fleet bound for {movement.target} already departed "
            f"(arrival turn {movement.arrival_turn}, current turn {current_turn})"
        )
    del movements[index]
    return movement.composition


def process_fleet_movements(
    movements: list[FleetMovement], current_turn: int
) -> MovementSummary:
    """Classify movements by their phase at current_turn.

    This never resolves combat; movements in the combat phase are handed back
    for the caller to resolve.
    """
    summary = MovementSummary()
    for movement in movements:
        phase = mission_phase(movement, current_turn)
        if phase == COMBAT:
            summary.ready_for_combat.append(movement)
        elif phase == RETURNING:
            summary.returning.append(movement)
        else:
            summary.still_advancing.append(movement)
    return summary


def create_returning_fleet(
    survivors: FleetComposition, original_movement: FleetMovement, current_turn: int
) -> FleetMovement | None:
    """Send combat survivors home on a one-turn return leg.

    The returning movement counts the combat turn as its arrival, so it is in
    the returning phase from the next turn and is home at current_turn + 1.

    Returns:
        The returning movement, or None if the raiding fleet was annihilated
    """
    if survivors.is_empty():
        return None
    return FleetMovement(
        composition=survivors,
        target=HOME_TARGET,
        arrival_turn=current_turn,
        return_turn=current_turn + TRANSIT_TURNS,
    )


def has_returned(movement: FleetMovement, current_turn: int) -> bool:
    """True once a returning movement's ships are back in the home system."""
    return current_turn >= movement.return_turn


def validate_fleet_movement(movement: FleetMovement, current_turn: int) -> list[str]:
    """Check a freshly created movement before it enters the state machine.

    Returns:
        List of error messages (empty if valid)
    """
    errors = validate_fleet_composition(movement.composition)
    if movement.arrival_turn <= current_turn:
        errors.append("Arrival turn must be in the future")
    if movement.return_turn <= movement.arrival_turn:
        errors.append("Return turn must be after arrival turn")
    if not movement.target or not movement.target.strip():
        errors.append("Movement target cannot be empty")
    if movement.composition.is_empty():
        errors.append("Cannot send empty fleet")
    return errors


def is_home_system_vulnerable(movements: list[FleetMovement], current_turn: int) -> bool:
    """A home system is vulnerable while any of its fleets is in transit."""
    return any(is_in_transit(m, current_turn) for m in movements)


def counter_attack_window(movement: FleetMovement) -> tuple[int, int, int]:
    """Return (start_turn, end_turn, duration) of a movement's vulnerability window."""
    start_turn = movement.arrival_turn - 1
    end_turn = movement.return_turn - 1
    return start_turn, end_turn, end_turn - start_turn + 1


def visible_fleet(
    home_fleet: FleetComposition, movements: list[FleetMovement], current_turn: int
) -> FleetComposition:
    """What an enemy scan can see.

    Movements in transit are invisible. A movement that has not departed yet
    still sits in the home system and is counted.
    """
    visible = home_fleet.copy()
    for movement in movements:
        if not is_in_transit(movement, current_turn):
            visible = visible + movement.composition
    return visible
