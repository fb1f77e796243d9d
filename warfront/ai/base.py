"""Shared AI capability: state, assessments and affordability checks.

Every archetype reads the canonical game state plus its own AIState and
returns exactly one Decision per turn. The helpers here are the primitives
all archetypes share.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..models.decision import Decision
from ..models.fleet import FleetComposition
from ..models.game import GameState
from ..models.player import PlayerState, Resources
from ..utils.constants import (
    FLEET_VALUE_WEIGHTS,
    PLAYER_HOME,
    SCAN_COSTS,
    STRUCTURE_STATS,
    UNIT_STATS,
    UNIT_TYPES,
)
from ..utils.rng import GameRNG
from .settings import ARCHETYPE_PROBABILITIES, BehaviorProbabilities


# Rock-paper-scissors: each class is countered by the class strong against it
COUNTER_UNITS = {
    "frigate": "battleship",
    "cruiser": "frigate",
    "battleship": "cruiser",
}


@dataclass
class AIState(PlayerState):
    """The AI's own copy of its side, plus its assessments.

    Resources, fleet, economy and intelligence are refreshed from the
    canonical game state at the start of every turn.
    """

    archetype: str = "aggressor"
    behavior_probabilities: BehaviorProbabilities = field(
        default_factory=lambda: ARCHETYPE_PROBABILITIES["aggressor"]
    )
    threat_level: float = 0.0  # 0-1, danger posed by the enemy fleet
    economic_advantage: float = 0.0  # -1..1, own vs enemy income
    last_decision: Decision | None = None
    internal_state: dict[str, Any] = field(default_factory=dict)  # Archetype-private state

    def refresh(self, source: PlayerState) -> None:
        """Replace the mirrored side state with a copy of source."""
        self.resources = copy.deepcopy(source.resources)
        self.fleet = copy.deepcopy(source.fleet)
        self.economy = copy.deepcopy(source.economy)
        self.intelligence = copy.deepcopy(source.intelligence)
        self.has_been_attacked = source.has_been_attacked


def fleet_strength(fleet: FleetComposition) -> float:
    """Coarse fleet value used by AI heuristics (not the combat matrix)."""
    return sum(fleet.count(unit_type) * FLEET_VALUE_WEIGHTS[unit_type] for unit_type in UNIT_TYPES)


def build_costs(build_type: str) -> dict[str, int]:
    """Fixed base build cost of one unit or structure."""
    if build_type in UNIT_STATS:
        return UNIT_STATS[build_type]["build_cost"]
    return STRUCTURE_STATS[build_type]["build_cost"]


def can_afford_build(resources: Resources, build_type: str, quantity: int = 1) -> bool:
    """True if the stockpiles cover quantity x the base build cost."""
    costs = build_costs(build_type)
    return resources.metal >= costs["metal"] * quantity and resources.energy >= costs["energy"] * quantity


def max_affordable_quantity(resources: Resources, build_type: str) -> int:
    """Largest quantity of build_type the stockpiles cover."""
    costs = build_costs(build_type)
    return min(resources.metal // costs["metal"], resources.energy // costs["energy"])


def dominant_unit_type(fleet: FleetComposition) -> str:
    """Most numerous unit class; ties favor frigate, then cruiser."""
    if fleet.is_empty():
        return "frigate"
    if fleet.frigates >= fleet.cruisers and fleet.frigates >= fleet.battleships:
        return "frigate"
    if fleet.cruisers >= fleet.battleships:
        return "cruiser"
    return "battleship"


def counter_unit_type(unit_type: str) -> str:
    """Unit class that is effective against unit_type."""
    return COUNTER_UNITS[unit_type]


def calculate_threat_level(enemy_home: FleetComposition, own_home: FleetComposition) -> float:
    """Danger from the enemy home fleet on a 0-1 scale.

    An AI with no fleet at all is under maximum threat.
    """
    own_strength = fleet_strength(own_home)
    if own_strength == 0:
        return 1.0
    ratio = fleet_strength(enemy_home) / own_strength
    return min(1.0, max(0.0, ratio - 0.5))


def calculate_economic_advantage(own: Resources, enemy: Resources) -> float:
    """Normalized income difference on a -1..1 scale."""
    own_income = own.total_income
    enemy_income = enemy.total_income
    if own_income + enemy_income == 0:
        return 0.0
    return (own_income - enemy_income) / (own_income + enemy_income)


def decision_problem(decision: Decision, state: PlayerState) -> str | None:
    """Explain why a side cannot carry out a decision.

    Returns:
        Error message, or None if the decision is affordable and available
    """
    if decision.action == "build":
        if not decision.build_type or not decision.quantity:
            return "Build decision is missing its type or quantity"
        if not can_afford_build(state.resources, decision.build_type, decision.quantity):
            return f"Cannot afford {decision.quantity} {decision.build_type}"
        return None
    if decision.action == "attack":
        if decision.fleet is None or not decision.target or decision.fleet.is_empty():
            return "Attack decision is missing its target or fleet"
        if not state.fleet.home_system.contains(decision.fleet):
            return f"Fleet {decision.fleet.to_dict()} exceeds home fleet {state.fleet.home_system.to_dict()}"
        return None
    if decision.action == "scan":
        if decision.scan_type not in SCAN_COSTS:
            return f"Unknown scan type: {decision.scan_type}"
        if state.resources.energy < SCAN_COSTS[decision.scan_type]:
            return f"Not enough energy for a {decision.scan_type} scan"
        return None
    if decision.action == "wait":
        return None
    return f"Unknown action: {decision.action}"


class BaseArchetype(ABC):
    """Base class for AI archetypes.

    Subclasses implement make_decision and keep whatever private state they
    need on the instance.
    """

    name = "base"

    def __init__(self, probabilities: BehaviorProbabilities, rng: GameRNG | None = None):
        self.behavior_probabilities = probabilities
        self.rng = rng or GameRNG()

    @abstractmethod
    def make_decision(self, game_state: GameState, ai_state: AIState) -> Decision:
        """Produce this turn's decision, updating ai_state assessments."""

    def internal_state(self) -> dict[str, Any]:
        """Archetype-private state, for inspection and debugging."""
        return {}

    # ----- assessments -----

    def update_assessment(self, game_state: GameState, ai_state: AIState) -> None:
        """Recompute threat level and economic advantage against the player."""
        ai_state.threat_level = calculate_threat_level(
            game_state.player.fleet.home_system, ai_state.fleet.home_system
        )
        ai_state.economic_advantage = calculate_economic_advantage(
            ai_state.resources, game_state.player.resources
        )

    def should_adapt_behavior(self) -> bool:
        """Roll against adaptive_variation."""
        return self.rng.random() < self.behavior_probabilities.adaptive_variation

    # ----- availability checks -----

    def can_afford_build(self, resources: Resources, build_type: str, quantity: int = 1) -> bool:
        return can_afford_build(resources, build_type, quantity)

    def has_available_fleet(self, ai_state: AIState, required: FleetComposition) -> bool:
        """True if the home fleet holds every ship in required."""
        return ai_state.fleet.home_system.contains(required)

    def validate_decision(self, decision: Decision, ai_state: AIState) -> bool:
        """Check a decision is affordable and the ships are available."""
        return decision_problem(decision, ai_state) is None

    # ----- planning helpers -----

    def plan_attack(self, available: FleetComposition, ratio: float) -> FleetComposition | None:
        """Commit floor(count x ratio) of each class, or None if that is no ships."""
        attack_fleet = available.scaled(ratio)
        if attack_fleet.is_empty():
            return None
        return attack_fleet

    def attack_decision(self, ai_state: AIState, attack_fleet: FleetComposition | None) -> Decision | None:
        """Attack decision for a planned fleet, if the ships are available."""
        if attack_fleet is None or not self.has_available_fleet(ai_state, attack_fleet):
            return None
        return Decision.attack(PLAYER_HOME, attack_fleet)

    def first_affordable(self, resources: Resources, options: list[tuple[str, int]]) -> Decision:
        """Build the first affordable (unit, quantity) option, else wait."""
        for build_type, quantity in options:
            if self.can_afford_build(resources, build_type, quantity):
                return Decision.build(build_type, quantity)
        return Decision.wait()

    def build_random_quantity(self, resources: Resources, build_type: str, low: int, high: int) -> Decision:
        """Build randint(low, high) of build_type, capped at what the stockpiles cover.

        Callers check that at least one unit is affordable first.
        """
        quantity = min(self.rng.randint(low, high), max_affordable_quantity(resources, build_type))
        return Decision.build(build_type, quantity)

    def optimal_fleet_composition(
        self, target_strength: float, threat: FleetComposition | None = None
    ) -> FleetComposition:
        """Composition of roughly target_strength ships.

        Against a known threat, all ships are the counter to its dominant
        class; otherwise a 50/30/20 frigate/cruiser/battleship mix.
        """
        if threat is not None:
            counter = counter_unit_type(dominant_unit_type(threat))
            composition = FleetComposition()
            composition.add_units(counter, int(target_strength))
            return composition
        return FleetComposition(
            frigates=int(target_strength * 0.5),
            cruisers=int(target_strength * 0.3),
            battleships=int(target_strength * 0.2),
        )
