"""
RandomOpponent: picks a uniformly random available move.

- Useful as a fast, low-difficulty baseline for bulk runs against the computer.
- No resources; choose() samples from the referee's available moves; close() is a no-op.

"""
from __future__ import annotations
import random
from typing import Optional

from .referee import Referee


class RandomOpponent:
    """Simple opponent that picks a uniformly random available move.
    Pass a seed for reproducible games.
    """
    name: str = "Random"

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def choose(self, ref: Referee) -> Optional[int]:
        moves = ref.available_moves()
        return self._rng.choice(moves) if moves else None

    def close(self):
        pass
