"""Shared test fixtures."""

import pytest

from warfront.utils.rng import GameRNG


class ScriptedRNG(GameRNG):
    """GameRNG whose random() replays a fixed list of values.

    Every other draw (uniform, randint, choice) is derived from random(), so
    the list controls the whole stream. Once exhausted, default is returned.
    """

    def __init__(self, values, default=0.5):
        super().__init__(seed=0)
        self.values = list(values)
        self.default = default

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRNG instances."""
    return ScriptedRNG
