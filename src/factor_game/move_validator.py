"""
Move parsing/validation helpers for human input.

Applies the board-level rules on top of the move engine:
- the opening move (no last move yet) must be an unclaimed number below OPENING_LIMIT;
- every later move must be in legal_moves(last_move, claimed).

parse_move() never raises; a failed parse is reported through ParsedMove["reason"].
Digit strings longer than the board allows are rejected before conversion.
"""
from __future__ import annotations

import re
from typing import AbstractSet, Optional, TypedDict

from .move_engine import legal_moves
from .number_theory import BOARD_SIZE

OPENING_LIMIT = 50
NUMBER_RE = re.compile(r"^[+]?\d+$")

# Human-readable text for each rejection reason
REASON_MESSAGES = {
    "empty_reply": "Please enter a number.",
    "bad_number": "Please enter a whole number.",
    "out_of_range": "Numbers run from 1 to 100.",
    "already_claimed": "That number has already been taken.",
    "opening_too_high": f"First move must be less than {OPENING_LIMIT}.",
    "illegal_move": "Invalid move. Please select a factor or multiple.",
    "game_over": "The game is over. Start a new game to keep playing.",
}


class ParsedMove(TypedDict, total=False):
    ok: bool
    number: int
    reason: str


def _primary_token(text: str) -> str:
    tokens = (text or "").replace(",", " ").split()
    return tokens[0] if tokens else ""


def opening_moves(claimed: AbstractSet[int]) -> list[int]:
    """Numbers the first player may open with."""
    return [n for n in range(1, OPENING_LIMIT) if n not in claimed]


def available_moves(last_move: Optional[int], claimed: AbstractSet[int]) -> list[int]:
    """Sorted moves open to the side to move: opening moves before the first move, legal moves after."""
    if last_move is None:
        return opening_moves(claimed)
    return sorted(legal_moves(last_move, claimed))


def _rejection(number: int, last_move: Optional[int], claimed: AbstractSet[int]) -> Optional[str]:
    if number < 1 or number > BOARD_SIZE:
        return "out_of_range"
    if number in claimed:
        return "already_claimed"
    if last_move is None:
        return "opening_too_high" if number >= OPENING_LIMIT else None
    if number not in legal_moves(last_move, claimed):
        return "illegal_move"
    return None


def is_legal_move(number: int, last_move: Optional[int], claimed: AbstractSet[int]) -> bool:
    return _rejection(number, last_move, claimed) is None


def parse_move(raw_text: str, last_move: Optional[int], claimed: AbstractSet[int]) -> ParsedMove:
    """
    Parse a board number from raw text and check it against the current position.
    Returns ParsedMove with ok/number or a reason on failure.
    """
    token = _primary_token(raw_text)
    if not token:
        return {"ok": False, "reason": "empty_reply"}
    if not NUMBER_RE.match(token):
        return {"ok": False, "reason": "bad_number"}
    digits = token.lstrip("+").lstrip("0")
    if len(digits) > len(str(BOARD_SIZE)):
        return {"ok": False, "reason": "out_of_range"}
    number = int(digits) if digits else 0
    reason = _rejection(number, last_move, claimed)
    if reason:
        return {"ok": False, "number": number, "reason": reason}
    return {"ok": True, "number": number}


__all__ = [
    "OPENING_LIMIT",
    "REASON_MESSAGES",
    "ParsedMove",
    "available_moves",
    "is_legal_move",
    "opening_moves",
    "parse_move",
]
