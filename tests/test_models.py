"""Tests for data models."""

import pytest

from warfront.models.decision import Decision
from warfront.models.fleet import (
    FleetComposition,
    FleetMovement,
    calculate_fleet_build_cost,
    calculate_fleet_upkeep,
    validate_fleet_composition,
)
from warfront.models.game import GameState
from warfront.models.player import BuildOrder, FleetState, PlayerState, Resources
from warfront.utils.constants import MAX_UNITS_PER_TYPE


def test_fleet_composition_defaults_to_empty():
    """Test that a default composition holds no ships."""
    fleet = FleetComposition()
    assert fleet.total == 0
    assert fleet.is_empty()


def test_fleet_composition_rejects_negative_counts():
    """Test that negative counts fail validation."""
    with pytest.raises(ValueError, match="cannot be negative"):
        FleetComposition(frigates=-1)


def test_fleet_composition_rejects_overflow():
    """Test that absurd counts fail validation."""
    with pytest.raises(ValueError, match="exceed reasonable maximum"):
        FleetComposition(cruisers=MAX_UNITS_PER_TYPE + 1)


def test_validate_fleet_composition_reports_each_problem():
    """Test validation messages for a composition mutated after creation."""
    fleet = FleetComposition()
    fleet.frigates = -3
    fleet.battleships = MAX_UNITS_PER_TYPE + 1

    errors = validate_fleet_composition(fleet)

    assert "Frigate count cannot be negative" in errors
    assert "Unit counts exceed reasonable maximum" in errors
    assert len(errors) == 2


def test_fleet_composition_arithmetic():
    """Test addition, clamped subtraction and containment."""
    a = FleetComposition(frigates=5, cruisers=2, battleships=1)
    b = FleetComposition(frigates=2, cruisers=3)

    assert a + b == FleetComposition(frigates=7, cruisers=5, battleships=1)
    assert a.subtract(b) == FleetComposition(frigates=3, cruisers=0, battleships=1)
    assert a.contains(FleetComposition(frigates=5, battleships=1))
    assert not a.contains(b)


def test_fleet_composition_scaled_floors_each_class():
    """Test that scaling takes the floor of every class."""
    fleet = FleetComposition(frigates=5, cruisers=3, battleships=1)

    scaled = fleet.scaled(0.7)

    assert scaled == FleetComposition(frigates=3, cruisers=2, battleships=0)
    # Original is untouched
    assert fleet.frigates == 5


def test_add_units_updates_in_place():
    """Test adding completed units of one class."""
    fleet = FleetComposition(cruisers=1)
    fleet.add_units("cruiser", 2)
    fleet.add_units("battleship", 1)

    assert fleet.to_dict() == {"frigates": 0, "cruisers": 3, "battleships": 1}


def test_fleet_build_cost_and_upkeep():
    """Test cost tables summed over a mixed composition."""
    fleet = FleetComposition(frigates=1, cruisers=1, battleships=1)

    assert calculate_fleet_build_cost(fleet) == {"metal": 34, "energy": 20}
    assert calculate_fleet_upkeep(fleet) == {"metal": 17, "energy": 10}


def test_fleet_movement_rejects_empty_composition():
    """Test that a movement needs ships."""
    with pytest.raises(ValueError, match="no ships"):
        FleetMovement(composition=FleetComposition(), target="ai_home", arrival_turn=2, return_turn=4)


def test_fleet_movement_rejects_return_before_arrival():
    """Test that the return turn must come after arrival."""
    with pytest.raises(ValueError, match="Invalid return_turn"):
        FleetMovement(
            composition=FleetComposition(frigates=1),
            target="ai_home",
            arrival_turn=4,
            return_turn=4,
        )


def test_fleet_movement_rejects_blank_target():
    """Test that a movement needs a target."""
    with pytest.raises(ValueError, match="target cannot be empty"):
        FleetMovement(
            composition=FleetComposition(frigates=1), target="  ", arrival_turn=2, return_turn=4
        )


def test_decision_constructors():
    """Test the tagged decision constructors."""
    fleet = FleetComposition(frigates=3)

    assert Decision.build("frigate", 2).describe() == "build 2 frigate"
    assert Decision.attack("ai_home", fleet).fleet is fleet
    assert Decision.scan("deep").scan_type == "deep"
    assert Decision.wait().describe() == "wait"


def test_decision_validation():
    """Test that malformed decisions are rejected at construction."""
    with pytest.raises(ValueError, match="Invalid action"):
        Decision(action="retreat")
    with pytest.raises(ValueError, match="Invalid build type"):
        Decision.build("dreadnought", 1)
    with pytest.raises(ValueError, match="Invalid quantity"):
        Decision.build("frigate", 0)
    with pytest.raises(ValueError, match="target cannot be empty"):
        Decision.attack("", FleetComposition(frigates=1))
    with pytest.raises(ValueError, match="empty fleet"):
        Decision.attack("ai_home", FleetComposition())
    with pytest.raises(ValueError, match="Invalid scan type"):
        Decision.scan("orbital")


def test_build_order_validation():
    """Test build order validation."""
    with pytest.raises(ValueError, match="Invalid unit type"):
        BuildOrder(unit_type="dreadnought", quantity=1, turns_remaining=1)
    with pytest.raises(ValueError, match="Invalid quantity"):
        BuildOrder(unit_type="frigate", quantity=0, turns_remaining=1)


def test_resources_total_income():
    """Test starting income."""
    resources = Resources()
    assert resources.total_income == 20000


def test_fleet_state_counts_ships_in_flight():
    """Test that total ships include outbound movements."""
    fleet = FleetState(
        home_system=FleetComposition(frigates=3),
        outbound=[
            FleetMovement(
                composition=FleetComposition(cruisers=2),
                target="ai_home",
                arrival_turn=2,
                return_turn=4,
            )
        ],
    )
    assert fleet.total_ships() == 5


def test_player_snapshot_is_independent():
    """Test that a snapshot cannot mutate the original state."""
    player = PlayerState()
    player.fleet.home_system = FleetComposition(frigates=4)

    snapshot = player.snapshot()
    snapshot.resources.metal = 0
    snapshot.fleet.home_system.frigates = 0

    assert player.resources.metal == 10000
    assert player.fleet.home_system.frigates == 4


def test_game_state_validation():
    """Test game state validation."""
    with pytest.raises(ValueError, match="Invalid turn"):
        GameState(turn=0)
    with pytest.raises(ValueError, match="Invalid winner"):
        GameState(winner="draw")


def test_game_state_sides():
    """Test side and opponent lookup."""
    game = GameState()

    assert game.side("player") is game.player
    assert game.opponent("player") is game.ai
    assert game.opponent("ai") is game.player
    with pytest.raises(ValueError, match="Unknown side"):
        game.side("neutral")
    assert not game.is_game_over
