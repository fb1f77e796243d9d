"""AI engine: owns one archetype and its AIState for a whole game."""

import logging

from ..models.decision import Decision
from ..models.game import GameState
from ..utils.rng import GameRNG
from .aggressor import AggressorAI
from .base import AIState, BaseArchetype
from .economist import EconomistAI
from .hybrid import HybridAI
from .settings import ARCHETYPE_PROBABILITIES
from .trickster import TricksterAI

logger = logging.getLogger(__name__)

ARCHETYPES: dict[str, type[BaseArchetype]] = {
    "aggressor": AggressorAI,
    "economist": EconomistAI,
    "trickster": TricksterAI,
    "hybrid": HybridAI,
}


def create_archetype(archetype: str, rng: GameRNG | None = None) -> BaseArchetype:
    """Build the strategy for an archetype label.

    Raises:
        ValueError: If the label is not a known archetype
    """
    if archetype not in ARCHETYPES:
        raise ValueError(f"Unknown AI archetype: {archetype}")
    return ARCHETYPES[archetype](rng=rng)


class AIEngine:
    """Drives the AI side: refresh state, decide, remember the decision.

    The archetype is chosen once at construction and fixed for the session.
    """

    def __init__(self, archetype: str, rng: GameRNG | None = None):
        """Initialize the engine.

        Args:
            archetype: "aggressor", "economist", "trickster" or "hybrid"
            rng: Shared game RNG (a fresh unseeded one if None); the turn
                executor draws combat from the same source

        Raises:
            ValueError: If the archetype label is unknown
        """
        self.rng = rng or GameRNG()
        self.strategy = create_archetype(archetype, self.rng)
        self.ai_state = AIState(
            archetype=archetype,
            behavior_probabilities=ARCHETYPE_PROBABILITIES[archetype],
            internal_state=self.strategy.internal_state(),
        )

    @property
    def archetype(self) -> str:
        return self.ai_state.archetype

    def process_turn(self, game_state: GameState) -> Decision:
        """Refresh the AI's view of the game and return this turn's decision.

        Args:
            game_state: Canonical game state (read only)

        Returns:
            The archetype's decision for this turn
        """
        self._update_ai_state(game_state)
        decision = self.strategy.make_decision(game_state, self.ai_state)
        self.ai_state.last_decision = decision
        self.ai_state.internal_state = self.strategy.internal_state()
        logger.debug(
            "Turn %d: %s AI (threat %.2f, economy %+.2f) decided to %s",
            game_state.turn,
            self.archetype,
            self.ai_state.threat_level,
            self.ai_state.economic_advantage,
            decision.describe(),
        )
        return decision

    def validate_decision(self, decision: Decision) -> bool:
        """Check a decision against the AI's own refreshed state."""
        return self.strategy.validate_decision(decision, self.ai_state)

    def get_ai_state(self) -> AIState:
        """Return a copy of the current AI state."""
        state = AIState(
            archetype=self.ai_state.archetype,
            behavior_probabilities=self.ai_state.behavior_probabilities,
            threat_level=self.ai_state.threat_level,
            economic_advantage=self.ai_state.economic_advantage,
            last_decision=self.ai_state.last_decision,
            internal_state=dict(self.ai_state.internal_state),
        )
        state.refresh(self.ai_state)
        return state

    def _update_ai_state(self, game_state: GameState) -> None:
        # Threat and economic advantage are assessed by the archetype itself
        self.ai_state.refresh(game_state.ai)
