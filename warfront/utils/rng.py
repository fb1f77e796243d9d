"""Seedable RNG wrapper for deterministic gameplay."""

import random


class GameRNG:
    """Wrapper around Python's random.Random for deterministic game behavior.

    All randomness in the engine goes through one instance of this class so
    that a seeded game replays identically. Every draw is derived from
    random(), so a subclass that scripts random() scripts the whole stream.
    """

    def __init__(self, seed: int | None = None):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness, or None to seed
                from system entropy
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self.rng.random()

    def uniform(self, low: float, high: float) -> float:
        """Return random float in [low, high)."""
        return low + self.random() * (high - low)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return a + int(self.random() * (b - a + 1))

    def choice(self, seq):
        """Choose random element from non-empty sequence."""
        return seq[int(self.random() * len(seq))]

    def get_state(self):
        """Get the current state of the RNG for serialization.

        Returns:
            RNG state tuple that can be used with set_state
        """
        return self.rng.getstate()

    def set_state(self, state):
        """Set the state of the RNG for deserialization.

        Args:
            state: RNG state tuple from get_state
        """
        self.rng.setstate(state)
