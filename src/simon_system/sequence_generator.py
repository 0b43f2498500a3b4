"""
Random signal generator for growing the Simon sequence
"""

import random
from typing import Optional


class SequenceGenerator:
    """
    Picks the next signal of the sequence, uniformly and independently.

    Repeats are allowed (the same color may come up several times in a
    row), exactly like the tabletop game.

    Example:
        generator = SequenceGenerator(signal_count=4, seed=42)
        generator.next_signal()  # -> 0..3, reproducible for seed 42
    """

    def __init__(self, signal_count: int, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            signal_count: Number of signals to choose from
            seed: Seed for a private random.Random (ignored when rng is given)
            rng: Random instance to draw from
        """
        if signal_count < 1:
            raise ValueError(f"signal_count must be positive, got {signal_count}")
        self.signal_count = signal_count
        self._rng = rng if rng is not None else random.Random(seed)

    def next_signal(self) -> int:
        """Return a signal index in [0, signal_count)"""
        return self._rng.randrange(self.signal_count)

    def __str__(self) -> str:
        return f"SequenceGenerator(signal_count={self.signal_count})"
