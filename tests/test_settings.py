"""Tests for AI tuning models."""

import pytest
from pydantic import ValidationError

from warfront.ai.settings import ARCHETYPE_PROBABILITIES, BehaviorProbabilities, TricksterSettings


def test_archetype_probabilities():
    """Test the fixed probability sets."""
    assert ARCHETYPE_PROBABILITIES["aggressor"].military_focus == 0.8
    assert ARCHETYPE_PROBABILITIES["economist"].economic_focus == 0.75
    assert ARCHETYPE_PROBABILITIES["trickster"].deception_chance == 0.7
    assert ARCHETYPE_PROBABILITIES["hybrid"].adaptive_variation == 0.4


def test_probabilities_must_be_in_range():
    """Test out-of-range probabilities are rejected."""
    with pytest.raises(ValidationError):
        BehaviorProbabilities(
            military_focus=1.5,
            economic_focus=0.5,
            aggression_level=0.5,
            deception_chance=0.5,
            adaptive_variation=0.5,
        )


def test_probabilities_are_frozen():
    """Test probabilities cannot change for an archetype's lifetime."""
    probabilities = ARCHETYPE_PROBABILITIES["aggressor"]

    with pytest.raises(ValidationError):
        probabilities.military_focus = 0.1


def test_trickster_settings_defaults():
    """Test the trickster's default thresholds."""
    settings = TricksterSettings()

    assert settings.deception_cooldown == 3
    assert settings.straightforward_chance == 0.3
    assert settings.attack_ratio_min == 0.5
    assert settings.attack_ratio_max == 0.7
