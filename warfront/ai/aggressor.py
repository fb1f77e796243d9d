"""Aggressor archetype: military first, attacks early and often."""

import logging

from ..models.decision import Decision
from ..models.game import GameState
from ..utils.rng import GameRNG
from .base import AIState, BaseArchetype
from .settings import ARCHETYPE_PROBABILITIES

logger = logging.getLogger(__name__)

ATTACK_FLEET_MIN = 5
ATTACK_THREAT_MAX = 0.8
DEFENSIVE_THREAT_MIN = 0.7
ATTACK_RATIO_RANGE = (0.6, 0.8)
ECONOMY_INCOME_CEILING = 15000


class AggressorAI(BaseArchetype):
    """Builds and attacks; only turtles when badly outgunned."""

    name = "aggressor"

    def __init__(self, rng: GameRNG | None = None):
        super().__init__(ARCHETYPE_PROBABILITIES["aggressor"], rng)

    def make_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        self.update_assessment(game_state, ai_state)

        if self.should_adapt_behavior() and ai_state.threat_level > DEFENSIVE_THREAT_MIN:
            logger.debug("Aggressor turtling at threat %.2f", ai_state.threat_level)
            return self._defensive_decision(ai_state)

        if self.rng.random() < self.behavior_probabilities.military_focus:
            return self._military_decision(game_state, ai_state)

        return self._economic_decision(ai_state)

    def _defensive_decision(self, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        if self.can_afford_build(resources, "battleship"):
            return Decision.build("battleship", 1)
        if self.can_afford_build(resources, "cruiser"):
            return self.build_random_quantity(resources, "cruiser", 1, 3)
        if self.can_afford_build(resources, "frigate"):
            return self.build_random_quantity(resources, "frigate", 1, 5)
        return Decision.wait()

    def _military_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        home = ai_state.fleet.home_system
        if home.total >= ATTACK_FLEET_MIN and ai_state.threat_level < ATTACK_THREAT_MAX:
            ratio = self.rng.uniform(*ATTACK_RATIO_RANGE)
            decision = self.attack_decision(ai_state, self.plan_attack(home, ratio))
            if decision is not None:
                return decision
        return self._build_military_units(ai_state)

    def _build_military_units(self, ai_state: AIState) -> Decision:
        # Fast, cheap units first
        resources = ai_state.resources
        if self.can_afford_build(resources, "frigate", 3):
            return self.build_random_quantity(resources, "frigate", 1, 3)
        if self.can_afford_build(resources, "cruiser", 2):
            return self.build_random_quantity(resources, "cruiser", 1, 2)
        if self.can_afford_build(resources, "battleship"):
            return Decision.build("battleship", 1)
        return Decision.wait()

    def _economic_decision(self, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        if resources.total_income < ECONOMY_INCOME_CEILING:
            if resources.metal_income < resources.energy_income and self.can_afford_build(resources, "mine"):
                return Decision.build("mine", 1)
            if self.can_afford_build(resources, "reactor"):
                return Decision.build("reactor", 1)
        return self._build_military_units(ai_state)
