"""Pydantic models for AI archetype tuning.

Probabilities are fixed for an archetype's lifetime; bad values are rejected
when the model is built.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BehaviorProbabilities(BaseModel):
    """Probability set that characterizes an archetype."""

    military_focus: float = Field(ge=0.0, le=1.0, description="Chance to pursue military actions")
    economic_focus: float = Field(ge=0.0, le=1.0, description="Chance to pursue economic actions")
    aggression_level: float = Field(ge=0.0, le=1.0, description="General appetite for attacking")
    deception_chance: float = Field(ge=0.0, le=1.0, description="Chance to act deceptively")
    adaptive_variation: float = Field(ge=0.0, le=1.0, description="Chance to deviate from the plan")

    model_config = ConfigDict(frozen=True)


ARCHETYPE_PROBABILITIES: dict[str, BehaviorProbabilities] = {
    "aggressor": BehaviorProbabilities(
        military_focus=0.8,
        economic_focus=0.2,
        aggression_level=0.9,
        deception_chance=0.1,
        adaptive_variation=0.2,
    ),
    "economist": BehaviorProbabilities(
        military_focus=0.25,
        economic_focus=0.75,
        aggression_level=0.3,
        deception_chance=0.1,
        adaptive_variation=0.25,
    ),
    "trickster": BehaviorProbabilities(
        military_focus=0.4,
        economic_focus=0.3,
        aggression_level=0.6,
        deception_chance=0.7,
        adaptive_variation=0.3,
    ),
    "hybrid": BehaviorProbabilities(
        military_focus=0.6,
        economic_focus=0.6,
        aggression_level=0.5,
        deception_chance=0.2,
        adaptive_variation=0.4,
    ),
}


class TricksterSettings(BaseModel):
    """Tunable thresholds for the trickster archetype."""

    deception_cooldown: int = Field(default=3, ge=1, description="Turns between deceptive moves")
    straightforward_chance: float = Field(
        default=0.3, ge=0.0, le=1.0, description="Chance to play straight when unobserved"
    )
    scan_silence_turns: int = Field(
        default=3, ge=0, description="Turns without an enemy scan before playing straight"
    )
    deceptive_scan_chance: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Chance a deceptive move is a misdirection scan"
    )
    straightforward_fleet_min: int = Field(default=6, ge=1, description="Fleet size needed to attack")
    straightforward_threat_max: float = Field(
        default=0.6, ge=0.0, le=1.0, description="Attack only below this threat level"
    )
    attack_advantage: float = Field(
        default=1.2, gt=0.0, description="Required own/enemy fleet value ratio to attack"
    )
    attack_ratio_min: float = Field(default=0.5, gt=0.0, le=1.0)
    attack_ratio_max: float = Field(default=0.7, gt=0.0, le=1.0)
    economy_income_target: int = Field(
        default=15000, ge=0, description="Per-resource income below which to build structures"
    )

    @model_validator(mode="after")
    def check_attack_ratio_range(self) -> "TricksterSettings":
        """Ensure the attack ratio range is ordered."""
        if self.attack_ratio_min > self.attack_ratio_max:
            raise ValueError("attack_ratio_min must not exceed attack_ratio_max")
        return self
