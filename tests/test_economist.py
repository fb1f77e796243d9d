"""Tests for the economist archetype."""

from warfront.ai.base import AIState
from warfront.ai.economist import EconomistAI
from warfront.models.fleet import FleetComposition
from warfront.models.game import GameState
from warfront.models.player import Resources
from warfront.utils.constants import PLAYER_HOME


def create_game(ai_fleet=None, player_fleet=None, ai_resources=None):
    """Create a game with the given home fleets."""
    game = GameState()
    game.ai.fleet.home_system = ai_fleet or FleetComposition()
    game.player.fleet.home_system = player_fleet or FleetComposition()
    if ai_resources is not None:
        game.ai.resources = ai_resources
    return game


def create_ai_state(game):
    ai_state = AIState(archetype="economist")
    ai_state.refresh(game.ai)
    return ai_state


def test_builds_mine_when_incomes_even(scripted_rng):
    """Test economic play favors metal on a tie."""
    game = create_game(FleetComposition(frigates=10), FleetComposition(frigates=1))
    ai = EconomistAI(rng=scripted_rng([0.5]))

    decision = ai.make_decision(game, create_ai_state(game))

    assert decision.action == "build"
    assert decision.build_type == "mine"


def test_builds_reactor_when_energy_behind(scripted_rng):
    """Test economic play grows the lower income."""
    resources = Resources(metal_income=12000, energy_income=10000)
    game = create_game(FleetComposition(frigates=10), FleetComposition(frigates=1), resources)
    ai = EconomistAI(rng=scripted_rng([0.5]))

    decision = ai.make_decision(game, create_ai_state(game))

    assert decision.build_type == "reactor"


def test_defensive_floor_builds_cruiser(scripted_rng):
    """Test the defensive fallback keeps a minimum fleet."""
    game = create_game(FleetComposition(frigates=2), FleetComposition(frigates=1))
    ai = EconomistAI(rng=scripted_rng([0.9]))

    decision = ai.make_decision(game, create_ai_state(game))

    assert decision.action == "build"
    assert decision.build_type == "cruiser"
    assert decision.quantity == 1


def test_scans_once_floor_is_met(scripted_rng):
    """Test the opportunistic deep scan."""
    game = create_game(FleetComposition(frigates=10), FleetComposition(frigates=1))
    ai = EconomistAI(rng=scripted_rng([0.9, 0.1]))

    decision = ai.make_decision(game, create_ai_state(game))

    assert decision.action == "scan"
    assert decision.scan_type == "deep"


def test_waits_above_income_target(scripted_rng):
    """Test that a developed economy with a full fleet waits."""
    resources = Resources(metal_income=15000, energy_income=15000)
    game = create_game(FleetComposition(frigates=10), FleetComposition(frigates=1), resources)
    ai = EconomistAI(rng=scripted_rng([0.5, 0.9]))

    decision = ai.make_decision(game, create_ai_state(game))

    assert decision.action == "wait"


def test_military_under_threat_defends(scripted_rng):
    """Test the military branch falls back to defense with a small fleet."""
    game = create_game(FleetComposition(frigates=2), FleetComposition(battleships=10))
    ai = EconomistAI(rng=scripted_rng([0.1]))
    ai_state = create_ai_state(game)

    decision = ai.make_decision(game, ai_state)

    assert ai_state.threat_level == 1.0
    assert decision.build_type == "cruiser"


def test_never_attacks_without_advantage():
    """Test that an even opponent is never attacked."""
    game = create_game(FleetComposition(frigates=20), FleetComposition(frigates=20))
    ai = EconomistAI()

    for _ in range(50):
        decision = ai.make_decision(game, create_ai_state(game))
        assert decision.action != "attack"


def test_attacks_with_overwhelming_advantage(scripted_rng):
    """Test the conservative attack once size, economy and strength all favor it."""
    resources = Resources(metal_income=20000, energy_income=20000)
    game = create_game(FleetComposition(frigates=20, cruisers=5), FleetComposition(frigates=5), resources)
    # Military roll, then a 0.48 attack ratio
    ai = EconomistAI(rng=scripted_rng([0.1, 0.8]))
    ai_state = create_ai_state(game)

    decision = ai.make_decision(game, ai_state)

    assert ai_state.threat_level == 0.0
    assert ai_state.economic_advantage > 0.3
    assert decision.action == "attack"
    assert decision.target == PLAYER_HOME
    # floor(20 x 0.48) frigates and floor(5 x 0.48) cruisers
    assert decision.fleet == FleetComposition(frigates=9, cruisers=2)
    assert 0.4 * 25 <= decision.fleet.total <= 0.5 * 25
    assert ai.validate_decision(decision, ai_state)


def test_no_attack_without_two_to_one_strength(scripted_rng):
    """Test that a large, rich fleet still holds back short of 2:1 odds."""
    resources = Resources(metal_income=20000, energy_income=20000)
    # 32.5 fleet value against 17: just under double
    game = create_game(FleetComposition(frigates=20, cruisers=5), FleetComposition(frigates=17), resources)
    ai = EconomistAI(rng=scripted_rng([0.1, 0.9], default=0.9))
    ai_state = create_ai_state(game)

    decision = ai.make_decision(game, ai_state)
    military = ai._military_decision(game, ai_state)

    assert ai_state.economic_advantage > 0.3
    assert decision.action == "wait"
    assert military.action == "wait"
