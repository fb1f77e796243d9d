"""Turn execution orchestrator.

This module coordinates one turn in order:
1. Income (stockpiles grow, upkeep is paid, construction advances)
2. Player decision (validated, then applied)
3. AI decision (validated, then applied)
4. Fleet movement and combat for both sides
5. Victory assessment
6. Turn counter increments

One side's decision is fully applied before the other's is computed.

Architecture:
Each phase is an independent method that can be tested on its own;
execute_turn composes them.
"""

import logging
from dataclasses import dataclass, field

from ..ai.base import decision_problem
from ..ai.engine import AIEngine
from ..models.decision import Decision
from ..models.fleet import calculate_fleet_upkeep
from ..models.game import CombatEvent, GameState
from ..models.player import BuildOrder, PlayerState
from ..utils.constants import (
    AI_SIDE,
    PLAYER_SIDE,
    SCAN_COSTS,
    SIDES,
    STRUCTURE_STATS,
    UNIT_STATS,
)
from ..utils.error_reporter import ErrorReporter
from ..utils.rng import GameRNG
from .combat import check_fleet_elimination, process_combat_movement
from .movement import (
    create_fleet_movement,
    has_returned,
    process_fleet_movements,
    validate_fleet_movement,
    visible_fleet,
)

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """Everything that happened in one turn.

    Attributes:
        turn: Turn number that was executed
        player_decision: Player decision as applied (None if none was given
            or it was rejected)
        ai_decision: AI decision as applied
        combat_events: Combats resolved this turn
        rejected: Messages for decisions that were refused
        winner: "player", "ai", or None if the game continues
    """

    turn: int
    player_decision: Decision | None
    ai_decision: Decision
    combat_events: list[CombatEvent] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)
    winner: str | None = None


class TurnExecutor:
    """Orchestrates the turn phases in the correct order."""

    def __init__(
        self,
        ai_engine: AIEngine,
        rng: GameRNG | None = None,
        error_reporter: ErrorReporter | None = None,
    ):
        """Initialize the executor.

        Args:
            ai_engine: Engine playing the AI side
            rng: RNG used for combat (defaults to the AI engine's RNG so a
                seeded game replays)
            error_reporter: Collector for rejected decisions and engine defects
        """
        self.ai_engine = ai_engine
        self.rng = rng or ai_engine.rng
        self.error_reporter = error_reporter or ErrorReporter()

    # =========================================================================
    # INDEPENDENT PHASE METHODS
    # =========================================================================

    def execute_phase_income(self, game: GameState) -> GameState:
        """Grow stockpiles, pay fleet upkeep and advance construction for both sides."""
        for side_id in SIDES:
            self._collect_income(game.side(side_id))
        return game

    def execute_phase_player(self, game: GameState, decision: Decision | None) -> tuple[Decision | None, str | None]:
        """Validate and apply the player's decision.

        Returns:
            Tuple of (applied decision or None, rejection message or None)
        """
        if decision is None:
            return None, None
        problem = decision_problem(decision, game.player)
        if problem is not None:
            logger.warning("Turn %d: player decision rejected: %s", game.turn, problem)
            self.error_reporter.report_user_input_error(problem)
            return None, problem
        self.apply_decision(game, PLAYER_SIDE, decision)
        return decision, None

    def execute_phase_ai(self, game: GameState) -> tuple[Decision, str | None]:
        """Ask the AI for its decision, validate it and apply it.

        A decision the AI cannot carry out is an engine defect: it is reported
        and replaced by wait.

        Returns:
            Tuple of (applied decision, defect message or None)
        """
        decision = self.ai_engine.process_turn(game)
        problem = decision_problem(decision, game.ai)
        if problem is not None:
            self.error_reporter.report(
                "game_logic",
                "high",
                f"AI produced an invalid decision: {problem}",
                {"turn": game.turn, "decision": decision.describe()},
            )
            return Decision.wait(), problem
        self.apply_decision(game, AI_SIDE, decision)
        return decision, None

    def execute_phase_movement(self, game: GameState) -> list[CombatEvent]:
        """Advance every movement of both sides and resolve arriving attacks."""
        events = []
        for side_id in SIDES:
            events.extend(self._advance_movements(game, side_id))
        game.combat_log.extend(events)
        return events

    def execute_phase_victory_check(self, game: GameState) -> GameState:
        """Set game.winner if a side has been attacked and has no ships left.

        If both sides are eliminated in the same turn the AI wins.
        """
        player_out = self._is_eliminated(game.player)
        ai_out = self._is_eliminated(game.ai)
        if player_out:
            game.winner = AI_SIDE
        elif ai_out:
            game.winner = PLAYER_SIDE
        return game

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def execute_turn(
        self, game: GameState, player_decision: Decision | None = None
    ) -> tuple[GameState, TurnResult]:
        """Execute one full turn.

        Args:
            game: Canonical game state (modified in place)
            player_decision: The player's action for this turn, if any

        Returns:
            Tuple of (updated game state, turn result)
        """
        if game.is_game_over:
            raise ValueError(f"Game is already over (winner: {game.winner})")

        turn = game.turn
        rejected = []

        game = self.execute_phase_income(game)

        applied_player, problem = self.execute_phase_player(game, player_decision)
        if problem:
            rejected.append(f"player: {problem}")

        ai_decision, problem = self.execute_phase_ai(game)
        if problem:
            rejected.append(f"ai: {problem}")

        combat_events = self.execute_phase_movement(game)
        game = self.execute_phase_victory_check(game)

        game.turn += 1

        logger.info(
            "Turn %d complete: player=%s ai=%s combats=%d winner=%s",
            turn,
            applied_player.describe() if applied_player else "none",
            ai_decision.describe(),
            len(combat_events),
            game.winner,
        )

        result = TurnResult(
            turn=turn,
            player_decision=applied_player,
            ai_decision=ai_decision,
            combat_events=combat_events,
            rejected=rejected,
            winner=game.winner,
        )
        return game, result

    # =========================================================================
    # DECISION APPLICATION
    # =========================================================================

    def apply_decision(self, game: GameState, side_id: str, decision: Decision) -> None:
        """Mutate the side's state for an already validated decision."""
        side = game.side(side_id)

        if decision.action == "build":
            self._queue_build(side, decision.build_type, decision.quantity)
        elif decision.action == "attack":
            self._launch_attack(game, side, decision)
        elif decision.action == "scan":
            side.resources.energy -= SCAN_COSTS[decision.scan_type]
            opponent = game.opponent(side_id)
            side.intelligence.last_scan_turn = game.turn
            side.intelligence.known_enemy_fleet = visible_fleet(
                opponent.fleet.home_system, opponent.fleet.outbound, game.turn
            )

    def _queue_build(self, side: PlayerState, build_type: str, quantity: int) -> None:
        if build_type in UNIT_STATS:
            stats = UNIT_STATS[build_type]
        else:
            stats = STRUCTURE_STATS[build_type]
        side.resources.metal -= stats["build_cost"]["metal"] * quantity
        side.resources.energy -= stats["build_cost"]["energy"] * quantity
        side.economy.construction_queue.append(
            BuildOrder(unit_type=build_type, quantity=quantity, turns_remaining=stats["build_time"])
        )

    def _launch_attack(self, game: GameState, side: PlayerState, decision: Decision) -> None:
        side.fleet.home_system = side.fleet.home_system.subtract(decision.fleet)
        movement = create_fleet_movement(decision.fleet.copy(), decision.target, game.turn)
        errors = validate_fleet_movement(movement, game.turn)
        if errors:
            # Return the ships; a movement that fails validation never departs
            side.fleet.home_system = side.fleet.home_system + decision.fleet
            self.error_reporter.report_state_errors(errors)
            return
        side.fleet.outbound.append(movement)

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    def _collect_income(self, side: PlayerState) -> None:
        resources = side.resources
        upkeep = calculate_fleet_upkeep(side.fleet.home_system)
        for movement in side.fleet.outbound:
            in_flight = calculate_fleet_upkeep(movement.composition)
            upkeep["metal"] += in_flight["metal"]
            upkeep["energy"] += in_flight["energy"]
        resources.metal = max(0, resources.metal + resources.metal_income - upkeep["metal"])
        resources.energy = max(0, resources.energy + resources.energy_income - upkeep["energy"])

        still_building = []
        for order in side.economy.construction_queue:
            order.turns_remaining -= 1
            if order.turns_remaining > 0:
                still_building.append(order)
            elif order.unit_type in UNIT_STATS:
                side.fleet.home_system.add_units(order.unit_type, order.quantity)
            else:
                self._complete_structure(side, order)
        side.economy.construction_queue = still_building

    def _complete_structure(self, side: PlayerState, order: BuildOrder) -> None:
        bonus = STRUCTURE_STATS[order.unit_type]["income_bonus"]
        if order.unit_type == "reactor":
            side.economy.reactors += order.quantity
        else:
            side.economy.mines += order.quantity
        side.resources.metal_income += bonus["metal"] * order.quantity
        side.resources.energy_income += bonus["energy"] * order.quantity

    def _advance_movements(self, game: GameState, side_id: str) -> list[CombatEvent]:
        attacker = game.side(side_id)
        defender = game.opponent(side_id)
        summary = process_fleet_movements(attacker.fleet.outbound, game.turn)
        remaining = list(summary.still_advancing)
        events = []

        for movement in summary.ready_for_combat:
            defender_before = defender.fleet.home_system.copy()
            resolution = process_combat_movement(movement, defender_before, game.turn, self.rng)
            result = resolution.combat_result
            defender.fleet.home_system = resolution.defender_fleet
            defender.has_been_attacked = True
            if resolution.returning_fleet is not None:
                remaining.append(resolution.returning_fleet)

            events.append(
                CombatEvent(
                    turn=game.turn,
                    attacker=side_id,
                    attacker_fleet=movement.composition,
                    defender_fleet=defender_before,
                    outcome=result.outcome,
                    attacker_casualties=result.attacker_casualties,
                    defender_casualties=result.defender_casualties,
                    attacker_survivors=result.attacker_survivors,
                    defender_survivors=result.defender_survivors,
                    strength_ratio=result.strength_ratio,
                )
            )
            logger.debug(
                "Turn %d: %s attack lost %d ships, defender lost %d (%s)",
                game.turn,
                side_id,
                result.attacker_casualties.total,
                result.defender_casualties.total,
                result.outcome,
            )

        for movement in summary.returning:
            if has_returned(movement, game.turn):
                attacker.fleet.home_system = attacker.fleet.home_system + movement.composition
            else:
                remaining.append(movement)

        attacker.fleet.outbound = remaining
        return events

    def _is_eliminated(self, side: PlayerState) -> bool:
        return side.has_been_attacked and check_fleet_elimination(
            side.fleet.home_system, side.fleet.outbound
        )
