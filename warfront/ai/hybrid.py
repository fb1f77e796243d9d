"""Hybrid archetype: an adaptive four-strategy state machine.

States: aggressive, economic, defensive, opportunistic.

Each turn:
1. With probability adaptive_variation, react to the opponent's posture
   (a large fleet under threat, or a strong opposing economy).
2. Count down the strategy timer. At zero, re-select the strategy from the
   threat level and economic advantage and restart the timer at 2-4 turns.
3. Decide with the sub-strategy matching the current state.
"""

import logging
from typing import Any

from ..models.decision import Decision
from ..models.game import GameState
from ..utils.constants import SCAN_COSTS
from ..utils.rng import GameRNG
from .base import AIState, BaseArchetype, dominant_unit_type, max_affordable_quantity
from .settings import ARCHETYPE_PROBABILITIES

logger = logging.getLogger(__name__)

AGGRESSIVE = "aggressive"
ECONOMIC = "economic"
DEFENSIVE = "defensive"
OPPORTUNISTIC = "opportunistic"
STRATEGIES = (AGGRESSIVE, ECONOMIC, DEFENSIVE, OPPORTUNISTIC)

STRATEGY_DURATION_RANGE = (2, 4)

# Strategy re-selection thresholds
HIGH_THREAT = 0.7
ECONOMIC_LEAD = 0.3

# Reactive adaptation thresholds
ENEMY_FLEET_REACTION_SIZE = 5
REACTION_THREAT_MIN = 0.5
ENEMY_INCOME_REACTION = 20000

# Sub-strategy parameters
AGGRESSIVE_FLEET_MIN = 4
AGGRESSIVE_ATTACK_RATIO_RANGE = (0.7, 0.9)
ECONOMIC_TARGET_INCOME = 20000
ECONOMIC_DEFENSE_FLOOR = 3
DEFENSIVE_FLEET_TARGET = 8
DEFENSIVE_SCAN_CHANCE = 0.4
OPPORTUNISTIC_ENEMY_FLEET_MAX = 2
OPPORTUNISTIC_FLEET_MIN = 3
OPPORTUNISTIC_ATTACK_RATIO = 0.8


class HybridAI(BaseArchetype):
    """Switches between four sub-strategies on a timer and in reaction to the opponent."""

    name = "hybrid"

    def __init__(self, rng: GameRNG | None = None):
        super().__init__(ARCHETYPE_PROBABILITIES["hybrid"], rng)
        self.current_strategy = self.rng.choice(STRATEGIES)
        self.strategy_duration = self.rng.randint(*STRATEGY_DURATION_RANGE)
        self.turns_remaining = self.strategy_duration

    def internal_state(self) -> dict[str, Any]:
        return {
            "current_strategy": self.current_strategy,
            "strategy_duration": self.strategy_duration,
            "turns_remaining": self.turns_remaining,
        }

    def make_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        self.update_assessment(game_state, ai_state)

        if self.should_adapt_behavior():
            self._adapt_strategy(game_state, ai_state)

        self.turns_remaining -= 1
        if self.turns_remaining <= 0:
            self._set_strategy(self.select_new_strategy(ai_state), "timer")
            self.strategy_duration = self.rng.randint(*STRATEGY_DURATION_RANGE)
            self.turns_remaining = self.strategy_duration

        return self._execute_strategy(game_state, ai_state)

    # ----- state machine -----

    def select_new_strategy(self, ai_state: AIState) -> str:
        """Pick the next strategy from the current assessments."""
        if ai_state.threat_level > HIGH_THREAT:
            return DEFENSIVE if self.rng.random() < 0.7 else AGGRESSIVE
        if ai_state.economic_advantage < -ECONOMIC_LEAD:
            return ECONOMIC if self.rng.random() < 0.6 else OPPORTUNISTIC
        if ai_state.economic_advantage > ECONOMIC_LEAD:
            return AGGRESSIVE if self.rng.random() < 0.6 else OPPORTUNISTIC
        return self.rng.choice(STRATEGIES)

    def _adapt_strategy(self, game_state: GameState, ai_state: AIState) -> None:
        """Mirror the opponent's posture."""
        enemy = game_state.player
        if enemy.fleet.home_system.total > ENEMY_FLEET_REACTION_SIZE and ai_state.threat_level > REACTION_THREAT_MIN:
            self._set_strategy(DEFENSIVE if self.rng.random() < 0.6 else AGGRESSIVE, "enemy fleet")

        if enemy.resources.total_income > ENEMY_INCOME_REACTION and ai_state.economic_advantage < 0:
            self._set_strategy(ECONOMIC if self.rng.random() < 0.5 else AGGRESSIVE, "enemy economy")

    def _set_strategy(self, strategy: str, reason: str) -> None:
        if strategy != self.current_strategy:
            logger.debug("Hybrid strategy %s -> %s (%s)", self.current_strategy, strategy, reason)
        self.current_strategy = strategy

    def _execute_strategy(self, game_state: GameState, ai_state: AIState) -> Decision:
        if self.current_strategy == AGGRESSIVE:
            return self._aggressive_decision(ai_state)
        if self.current_strategy == ECONOMIC:
            return self._economic_decision(ai_state)
        if self.current_strategy == DEFENSIVE:
            return self._defensive_decision(game_state, ai_state)
        return self._opportunistic_decision(game_state, ai_state)

    # ----- sub-strategies -----

    def _aggressive_decision(self, ai_state: AIState) -> Decision:
        home = ai_state.fleet.home_system
        if home.total >= AGGRESSIVE_FLEET_MIN:
            ratio = self.rng.uniform(*AGGRESSIVE_ATTACK_RATIO_RANGE)
            decision = self.attack_decision(ai_state, self.plan_attack(home, ratio))
            if decision is not None:
                return decision

        resources = ai_state.resources
        if self.can_afford_build(resources, "frigate", 2):
            return self.build_random_quantity(resources, "frigate", 1, 3)
        if self.can_afford_build(resources, "cruiser"):
            return Decision.build("cruiser", 1)
        return Decision.wait()

    def _economic_decision(self, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        if resources.total_income < ECONOMIC_TARGET_INCOME:
            if resources.metal_income <= resources.energy_income:
                if self.can_afford_build(resources, "mine"):
                    return Decision.build("mine", 1)
            elif self.can_afford_build(resources, "reactor"):
                return Decision.build("reactor", 1)

        if ai_state.fleet.home_system.total < ECONOMIC_DEFENSE_FLOOR and self.can_afford_build(
            resources, "cruiser"
        ):
            return Decision.build("cruiser", 1)
        return Decision.wait()

    def _defensive_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        shortfall = DEFENSIVE_FLEET_TARGET - ai_state.fleet.home_system.total
        if shortfall > 0:
            # Fill the gap with counters to the enemy's dominant class
            wanted = self.optimal_fleet_composition(shortfall, game_state.player.fleet.home_system)
            counter = dominant_unit_type(wanted)
            if self.can_afford_build(resources, counter):
                quantity = min(wanted.count(counter), max_affordable_quantity(resources, counter))
                return Decision.build(counter, quantity)

        if resources.energy >= SCAN_COSTS["deep"] and self.rng.random() < DEFENSIVE_SCAN_CHANCE:
            return Decision.scan("deep")
        return Decision.wait()

    def _opportunistic_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        enemy = game_state.player
        home = ai_state.fleet.home_system

        if enemy.fleet.home_system.total <= OPPORTUNISTIC_ENEMY_FLEET_MAX and home.total >= OPPORTUNISTIC_FLEET_MIN:
            decision = self.attack_decision(ai_state, self.plan_attack(home, OPPORTUNISTIC_ATTACK_RATIO))
            if decision is not None:
                return decision

        if enemy.resources.total_income > ai_state.resources.total_income:
            return self._economic_decision(ai_state)

        return self.first_affordable(ai_state.resources, [("cruiser", 1), ("frigate", 2)])
