"""Trickster archetype: misdirection and unexpected builds.

Deceptive moves (misdirection scans and builds chosen to confuse rather than
counter) are gated by a cooldown counter. When the opponent has not scanned
for a while the trickster sometimes drops the act and plays straight.
"""

import logging
from typing import Any

from ..models.decision import Decision
from ..models.game import GameState
from ..utils.constants import SCAN_COSTS, UNIT_TYPES
from ..utils.rng import GameRNG
from .base import AIState, BaseArchetype, counter_unit_type, dominant_unit_type, fleet_strength
from .settings import ARCHETYPE_PROBABILITIES, TricksterSettings

logger = logging.getLogger(__name__)

# Quantity to build when countering each unit class
COUNTER_QUANTITIES = {"battleship": 1, "frigate": 3, "cruiser": 2}


class TricksterAI(BaseArchetype):
    """Biased toward deception; straightforward only when unobserved."""

    name = "trickster"

    def __init__(self, rng: GameRNG | None = None, settings: TricksterSettings | None = None):
        super().__init__(ARCHETYPE_PROBABILITIES["trickster"], rng)
        self.settings = settings or TricksterSettings()
        self.cooldown_remaining = 0

    def internal_state(self) -> dict[str, Any]:
        return {"cooldown_remaining": self.cooldown_remaining}

    def make_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        self.update_assessment(game_state, ai_state)
        if self.cooldown_remaining > 0:
            self.cooldown_remaining -= 1

        turns_since_enemy_scan = game_state.turn - game_state.player.intelligence.last_scan_turn
        if (
            turns_since_enemy_scan > self.settings.scan_silence_turns
            and self.rng.random() < self.settings.straightforward_chance
        ):
            return self._straightforward_decision(game_state, ai_state)

        if self.rng.random() < self.behavior_probabilities.deception_chance and self.cooldown_remaining == 0:
            decision = self._deceptive_decision(game_state, ai_state)
            if decision.action != "wait":
                self.cooldown_remaining = self.settings.deception_cooldown
                logger.debug("Trickster deceiving with %s", decision.describe())
                return decision

        return self._balanced_decision(ai_state)

    # ----- deception -----

    def _deceptive_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        if (
            ai_state.resources.energy >= SCAN_COSTS["basic"]
            and self.rng.random() < self.settings.deceptive_scan_chance
        ):
            # Scan to look like intelligence gathering
            return Decision.scan("basic")
        return self._build_unexpected_units(game_state, ai_state)

    def _build_unexpected_units(self, game_state: GameState, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        enemy_dominant = dominant_unit_type(game_state.player.fleet.home_system)

        # Build what the enemy does not expect as the counter
        if enemy_dominant == "frigate" and self.can_afford_build(resources, "cruiser"):
            return self.build_random_quantity(resources, "cruiser", 1, 2)
        if enemy_dominant == "cruiser" and self.can_afford_build(resources, "battleship"):
            return Decision.build("battleship", 1)
        if enemy_dominant == "battleship" and self.can_afford_build(resources, "frigate", 3):
            return self.build_random_quantity(resources, "frigate", 2, 5)

        return self._build_random_unit(ai_state)

    # ----- straightforward play -----

    def _straightforward_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        home = ai_state.fleet.home_system
        if (
            home.total >= self.settings.straightforward_fleet_min
            and ai_state.threat_level < self.settings.straightforward_threat_max
        ):
            enemy_strength = fleet_strength(game_state.player.fleet.home_system)
            if fleet_strength(home) >= enemy_strength * self.settings.attack_advantage:
                ratio = self.rng.uniform(self.settings.attack_ratio_min, self.settings.attack_ratio_max)
                decision = self.attack_decision(ai_state, self.plan_attack(home, ratio))
                if decision is not None:
                    return decision
        return self._build_optimal_units(game_state, ai_state)

    def _build_optimal_units(self, game_state: GameState, ai_state: AIState) -> Decision:
        counter = counter_unit_type(dominant_unit_type(game_state.player.fleet.home_system))
        return self.first_affordable(
            ai_state.resources, [(counter, COUNTER_QUANTITIES[counter]), ("frigate", 1)]
        )

    # ----- balanced play -----

    def _balanced_decision(self, ai_state: AIState) -> Decision:
        if self.rng.random() < 0.5:
            return self._economic_decision(ai_state)
        return self._build_random_unit(ai_state)

    def _economic_decision(self, ai_state: AIState) -> Decision:
        resources = ai_state.resources
        target = self.settings.economy_income_target
        if resources.metal_income < target and self.can_afford_build(resources, "mine"):
            return Decision.build("mine", 1)
        if resources.energy_income < target and self.can_afford_build(resources, "reactor"):
            return Decision.build("reactor", 1)
        return self._build_random_unit(ai_state)

    def _build_random_unit(self, ai_state: AIState) -> Decision:
        unit_type = self.rng.choice(UNIT_TYPES)
        if self.can_afford_build(ai_state.resources, unit_type):
            return Decision.build(unit_type, 1)
        return Decision.wait()
