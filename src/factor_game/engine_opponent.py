"""
Computer opponent backed by the move engine.

- choose(): select_move() once a number has been claimed; for the opening it applies the
  same least-replies rule to the opening candidates.
- close(): no resources to release.

"""
from __future__ import annotations
import logging
from typing import Optional

from .move_engine import least_reply_move, reply_counts, select_move
from .move_validator import opening_moves
from .referee import Referee


class EngineOpponent:
    """Greedy one-ply opponent: leaves the other side as few replies as possible."""
    name: str = "Computer"

    def __init__(self):
        self.log = logging.getLogger("EngineOpponent")

    def choose(self, ref: Referee) -> Optional[int]:
        claimed = ref.claimed
        last = ref.last_move
        if last is None:
            return least_reply_move(opening_moves(claimed), claimed)
        move = select_move(last, claimed)
        if move is not None and self.log.isEnabledFor(logging.DEBUG):
            self.log.debug("Reply to %d: chose %d, opponent replies=%d", last, move, reply_counts([move], claimed)[move])
        return move

    def close(self):
        pass
