"""
Move engine: legal move generation and the computer's move choice.

- legal_moves(): divisors and multiples of the last move, minus the last move and anything claimed.
- select_move(): greedy one-ply lookahead; picks the candidate that leaves the opponent
  with the fewest legal replies. Candidates are scanned in ascending order and the first
  one reaching the minimum wins, so the choice is deterministic.

Everything here is pure: the claimed set passed in is never mutated.
"""
from __future__ import annotations
from typing import AbstractSet, Iterable, Optional

from .number_theory import divisors_of, multiples_of

# Returned by select_move when the side to move has nothing to play (it has lost).
NO_MOVE: Optional[int] = None


def legal_moves(last_move: int, claimed: AbstractSet[int]) -> set[int]:
    """Return the numbers that may follow last_move given the claimed set."""
    candidates = divisors_of(last_move) | set(multiples_of(last_move))
    candidates.discard(last_move)
    return {m for m in candidates if m not in claimed}


def reply_counts(candidates: Iterable[int], claimed: AbstractSet[int]) -> dict[int, int]:
    """Map each candidate (ascending) to the number of replies it would leave the opponent."""
    counts: dict[int, int] = {}
    for move in sorted(candidates):
        counts[move] = len(legal_moves(move, claimed | {move}))
    return counts


def least_reply_move(candidates: Iterable[int], claimed: AbstractSet[int]) -> Optional[int]:
    """Return the candidate with the fewest opponent replies, first in ascending order on ties."""
    best_move = NO_MOVE
    min_replies = None
    for move, replies in reply_counts(candidates, claimed).items():
        if min_replies is None or replies < min_replies:
            min_replies = replies
            best_move = move
    return best_move


def select_move(last_move: int, claimed: AbstractSet[int]) -> Optional[int]:
    """Choose the computer's reply to last_move, or NO_MOVE if there is none."""
    candidates = legal_moves(last_move, claimed)
    if not candidates:
        return NO_MOVE
    return least_reply_move(candidates, frozenset(claimed))


__all__ = [
    "NO_MOVE",
    "legal_moves",
    "reply_counts",
    "least_reply_move",
    "select_move",
]
