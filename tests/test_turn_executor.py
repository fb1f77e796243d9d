"""Tests for Turn Executor - Full Turn Integration."""

import pytest

from warfront.ai.engine import ARCHETYPES, AIEngine
from warfront.engine.combat import CLOSE_BATTLE
from warfront.engine.turn_executor import TurnExecutor
from warfront.models.decision import Decision
from warfront.models.fleet import FleetComposition
from warfront.models.game import GameState
from warfront.models.player import FleetState, PlayerState
from warfront.utils.constants import AI_HOME, RNG_SEED_DEFAULT
from warfront.utils.error_reporter import ErrorReporter
from warfront.utils.rng import GameRNG


class ScriptedAIEngine:
    """Stand-in AI engine that always returns the same decision."""

    def __init__(self, decision=None):
        self.decision = decision or Decision.wait()
        self.rng = GameRNG(RNG_SEED_DEFAULT)

    def process_turn(self, game_state):
        return self.decision


def create_basic_game(player_frigates=10, ai_frigates=10):
    """Create a game with a frigate squadron at each home system."""
    return GameState(
        player=PlayerState(fleet=FleetState(home_system=FleetComposition(frigates=player_frigates))),
        ai=PlayerState(fleet=FleetState(home_system=FleetComposition(frigates=ai_frigates))),
    )


def create_executor(ai_decision=None):
    return TurnExecutor(
        ScriptedAIEngine(ai_decision), rng=GameRNG(RNG_SEED_DEFAULT), error_reporter=ErrorReporter()
    )


def test_execute_turn_increments_turn_counter():
    """Test that turn counter increments after execution."""
    game = create_basic_game()
    executor = create_executor()

    game, result = executor.execute_turn(game)

    assert game.turn == 2
    assert result.turn == 1
    assert result.player_decision is None
    assert result.ai_decision.action == "wait"
    assert result.winner is None


def test_income_phase_charges_upkeep():
    """Test income minus fleet upkeep."""
    game = create_basic_game()
    executor = create_executor()

    executor.execute_phase_income(game)

    # 10 frigates cost 20 metal and 10 energy per turn
    assert game.player.resources.metal == 19980
    assert game.player.resources.energy == 19990


def test_income_never_goes_negative():
    """Test stockpiles clamp at zero when upkeep exceeds income."""
    game = create_basic_game()
    game.player.resources.metal = 0
    game.player.resources.metal_income = 0
    executor = create_executor()

    executor.execute_phase_income(game)

    assert game.player.resources.metal == 0


def test_build_queues_and_completes():
    """Test a build is paid for up front and delivered after its build time."""
    game = create_basic_game()
    executor = create_executor()

    applied, problem = executor.execute_phase_player(game, Decision.build("cruiser", 2))

    assert problem is None
    assert applied.build_type == "cruiser"
    assert game.player.resources.metal == 9980
    assert game.player.resources.energy == 9988
    assert len(game.player.economy.construction_queue) == 1

    executor.execute_phase_income(game)
    assert game.player.fleet.home_system.cruisers == 0

    executor.execute_phase_income(game)
    assert game.player.fleet.home_system.cruisers == 2
    assert game.player.economy.construction_queue == []


def test_structure_raises_income():
    """Test a completed reactor adds energy income."""
    game = create_basic_game()
    executor = create_executor()

    executor.execute_phase_player(game, Decision.build("reactor", 1))
    executor.execute_phase_income(game)

    assert game.player.economy.reactors == 1
    assert game.player.resources.energy_income == 10500
    assert game.player.resources.metal_income == 10000


def test_unaffordable_player_decision_is_rejected():
    """Test a rejected player command is reported as user input."""
    game = create_basic_game()
    reporter = ErrorReporter()
    executor = TurnExecutor(ScriptedAIEngine(), error_reporter=reporter)

    applied, problem = executor.execute_phase_player(game, Decision.build("battleship", 1000))

    assert applied is None
    assert "Cannot afford" in problem
    assert game.player.resources.metal == 10000
    assert reporter.recent()[-1].category == "user_input"


def test_invalid_ai_decision_is_replaced_by_wait():
    """Test an AI decision it cannot carry out is reported as a defect."""
    game = create_basic_game()
    executor = create_executor(Decision.attack("player_home", FleetComposition(frigates=50)))

    game, result = executor.execute_turn(game)

    assert result.ai_decision.action == "wait"
    assert result.rejected and result.rejected[0].startswith("ai:")
    error = executor.error_reporter.recent()[-1]
    assert error.category == "game_logic"
    assert error.severity == "high"
    assert game.ai.fleet.home_system.frigates == 10


def test_scan_reveals_home_fleet():
    """Test a scan reports the opponent's visible ships."""
    game = create_basic_game(ai_frigates=7)
    executor = create_executor()

    executor.execute_phase_player(game, Decision.scan("deep"))

    assert game.player.resources.energy == 7500
    assert game.player.intelligence.last_scan_turn == 1
    assert game.player.intelligence.known_enemy_fleet == FleetComposition(frigates=7)


def test_attack_round_trip():
    """Test launch, combat and return of an attacking fleet."""
    game = create_basic_game()
    executor = create_executor()

    # Turn 1: launch
    game, result = executor.execute_turn(game, Decision.attack(AI_HOME, FleetComposition(frigates=5)))
    assert game.player.fleet.home_system.frigates == 5
    assert len(game.player.fleet.outbound) == 1
    assert result.combat_events == []

    # Turn 2: combat at the AI home system
    game, result = executor.execute_turn(game)
    assert len(result.combat_events) == 1
    event = result.combat_events[0]
    assert event.attacker == "player"
    assert event.outcome == CLOSE_BATTLE
    assert event.attacker_survivors == FleetComposition(frigates=3)
    assert 5 <= game.ai.fleet.home_system.frigates <= 6
    assert game.ai.has_been_attacked
    assert game.combat_log == [event]
    assert len(game.player.fleet.outbound) == 1

    # Turn 3: survivors back home
    game, result = executor.execute_turn(game)
    assert game.player.fleet.home_system.frigates == 8
    assert game.player.fleet.outbound == []


def test_victory_when_defender_eliminated():
    """Test that wiping out an attacked side ends the game."""
    game = create_basic_game(ai_frigates=0)
    executor = create_executor()

    game, _ = executor.execute_turn(game, Decision.attack(AI_HOME, FleetComposition(frigates=10)))
    game, result = executor.execute_turn(game)

    assert result.winner == "player"
    assert game.is_game_over
    with pytest.raises(ValueError, match="already over"):
        executor.execute_turn(game)


def test_unattacked_side_with_no_ships_is_not_eliminated():
    """Test elimination needs the side to have been attacked."""
    game = create_basic_game(player_frigates=0, ai_frigates=0)
    executor = create_executor()

    executor.execute_phase_victory_check(game)

    assert game.winner is None


def test_mutual_elimination_goes_to_ai():
    """Test the tie-break when both sides are wiped out."""
    game = create_basic_game(player_frigates=0, ai_frigates=0)
    game.player.has_been_attacked = True
    game.ai.has_been_attacked = True
    executor = create_executor()

    executor.execute_phase_victory_check(game)

    assert game.winner == "ai"


def test_full_games_keep_state_non_negative():
    """Test several turns against every archetype."""
    for label in ARCHETYPES:
        rng = GameRNG(42)
        game = create_basic_game()
        executor = TurnExecutor(AIEngine(label, rng=rng), rng=rng)

        for _ in range(12):
            game, result = executor.execute_turn(game)
            for side in (game.player, game.ai):
                assert side.resources.metal >= 0
                assert side.resources.energy >= 0
                home = side.fleet.home_system
                assert min(home.frigates, home.cruisers, home.battleships) >= 0

        assert game.turn == 13


def play_seeded_game(seed):
    """Play eight turns against the hybrid AI with an opening player attack."""
    game = create_basic_game()
    executor = TurnExecutor(AIEngine("hybrid", rng=GameRNG(seed)))

    game, _ = executor.execute_turn(game, Decision.attack(AI_HOME, FleetComposition(frigates=5)))
    for _ in range(7):
        if game.is_game_over:
            break
        game, _ = executor.execute_turn(game)
    return executor, game


def test_executor_defaults_to_ai_engine_rng():
    """Test combat draws from the AI engine's RNG when none is given."""
    engine = AIEngine("economist", rng=GameRNG(7))

    assert TurnExecutor(engine).rng is engine.rng


def test_seeded_games_replay_identically():
    """Test one seed reproduces the same combats without passing an executor RNG."""
    first_executor, first = play_seeded_game(7)
    _, second = play_seeded_game(7)

    assert first_executor.rng is first_executor.ai_engine.rng
    assert len(first.combat_log) >= 1
    assert first.combat_log == second.combat_log
    assert first.ai.fleet.home_system == second.ai.fleet.home_system
    assert first.player.fleet.home_system == second.player.fleet.home_system
