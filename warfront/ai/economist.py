"""Economist archetype: grows the economy, fights only with overwhelming odds."""

from ..models.decision import Decision
from ..models.game import GameState
from ..utils.constants import SCAN_COSTS
from ..utils.rng import GameRNG
from .base import AIState, BaseArchetype, fleet_strength
from .settings import ARCHETYPE_PROBABILITIES

MILITARY_THREAT_MIN = 0.5
TARGET_INCOME = 25000
ATTACK_FLEET_MIN = 10
ATTACK_ECONOMIC_ADVANTAGE_MIN = 0.3
ATTACK_STRENGTH_ADVANTAGE = 2.0
ATTACK_RATIO_RANGE = (0.4, 0.5)
DEFENSIVE_FLEET_FLOOR = 8
SCAN_CHANCE = 0.3


class EconomistAI(BaseArchetype):
    """Builds mines and reactors, keeps a defensive floor and scans."""

    name = "economist"

    def __init__(self, rng: GameRNG | None = None):
        super().__init__(ARCHETYPE_PROBABILITIES["economist"], rng)

    def make_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        self.update_assessment(game_state, ai_state)

        # Military play when threatened, or when the odds are overwhelming
        if (
            ai_state.threat_level > MILITARY_THREAT_MIN or self._has_attack_advantage(game_state, ai_state)
        ) and self.rng.random() < self.behavior_probabilities.military_focus:
            return self._military_decision(game_state, ai_state)

        if self.rng.random() < self.behavior_probabilities.economic_focus:
            return self._economic_decision(ai_state)

        return self._defensive_decision(ai_state)

    def _economic_decision(self, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        if resources.total_income < TARGET_INCOME:
            # Grow whichever income is lower
            if resources.metal_income <= resources.energy_income:
                if self.can_afford_build(resources, "mine"):
                    return Decision.build("mine", 1)
            elif self.can_afford_build(resources, "reactor"):
                return Decision.build("reactor", 1)
        return self._defensive_decision(ai_state)

    def _has_attack_advantage(self, game_state: GameState, ai_state: AIState) -> bool:
        """Fleet size, economic lead and 2:1 strength all favor an attack."""
        home = ai_state.fleet.home_system
        if home.total < ATTACK_FLEET_MIN or ai_state.economic_advantage <= ATTACK_ECONOMIC_ADVANTAGE_MIN:
            return False
        enemy_strength = fleet_strength(game_state.player.fleet.home_system)
        return fleet_strength(home) >= enemy_strength * ATTACK_STRENGTH_ADVANTAGE

    def _military_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        if self._has_attack_advantage(game_state, ai_state):
            # Conservative: commit only 40-50% of the home fleet
            ratio = self.rng.uniform(*ATTACK_RATIO_RANGE)
            decision = self.attack_decision(ai_state, self.plan_attack(ai_state.fleet.home_system, ratio))
            if decision is not None:
                return decision
        return self._defensive_decision(ai_state)

    def _defensive_decision(self, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        if ai_state.fleet.home_system.total < DEFENSIVE_FLEET_FLOOR:
            decision = self.first_affordable(
                resources, [("cruiser", 1), ("frigate", 2), ("battleship", 1)]
            )
            if decision.action != "wait":
                return decision

        if resources.energy >= SCAN_COSTS["deep"] and self.rng.random() < SCAN_CHANCE:
            return Decision.scan("deep")
        return Decision.wait()
