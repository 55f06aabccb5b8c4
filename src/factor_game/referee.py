"""
Referee: centralized game state and export utilities.

- Owns the 100-cell board, the claimed set, the last move and the player to move.
- Applies validated moves (raw text or plain numbers) and switches turns.
- Manages result overrides and the termination reason.
- Exposes status() for the current result and export() for a JSON-ready snapshot.

Used by GameRunner and the HTTP sessions to track state and record outcomes.

"""
from __future__ import annotations
import datetime
from dataclasses import dataclass
from typing import Optional

from .move_validator import available_moves, parse_move
from .number_theory import BOARD_SIZE

PLAYER_ONE = 1
PLAYER_TWO = 2
RESULTS = {PLAYER_ONE: "1-0", PLAYER_TWO: "0-1"}


@dataclass
class Cell:
    number: int
    owner: Optional[int] = None


def other_player(player: int) -> int:
    return PLAYER_TWO if player == PLAYER_ONE else PLAYER_ONE


class Referee:
    """Plain referee around the board, the claimed set and the turn order."""
    def __init__(self):
        self._headers: dict[str, str] = {}
        self.reset()

    def reset(self) -> None:
        self.board: list[Cell] = [Cell(number=n) for n in range(1, BOARD_SIZE + 1)]
        self.move_stack: list[int] = []
        self.current_player: int = PLAYER_ONE
        self._claimed: set[int] = set()
        self._result_override: Optional[str] = None
        self.termination_reason: Optional[str] = None

    # ---------------- Header / Result Management -----------------
    def set_headers(self, event: str = "Factor Multiple Game", date: Optional[str] = None,
                    player_one: str = "Player 1", player_two: str = "Player 2") -> None:
        date = date or datetime.date.today().strftime("%Y.%m.%d")
        self._headers.update({
            "Event": event,
            "Date": date,
            "Player1": player_one,
            "Player2": player_two,
        })

    def set_result(self, result: str, termination_reason: Optional[str] = None) -> None:
        self._result_override = result
        if termination_reason:
            self.termination_reason = termination_reason

    def forfeit(self, player: int, termination_reason: str) -> None:
        """The given player loses immediately (e.g. an illegal or missing move)."""
        self.set_result(RESULTS[other_player(player)], termination_reason)

    # ---------------- State -----------------
    @property
    def claimed(self) -> frozenset[int]:
        return frozenset(self._claimed)

    @property
    def last_move(self) -> Optional[int]:
        return self.move_stack[-1] if self.move_stack else None

    def owner_of(self, number: int) -> Optional[int]:
        return self.board[number - 1].owner

    def available_moves(self) -> list[int]:
        return available_moves(self.last_move, self._claimed)

    # ---------------- Move Application -----------------
    def apply_move(self, raw: str | int) -> tuple[bool, str | None]:
        """Validate and claim a number for the player to move. Returns (ok, rejection_reason)."""
        if self.status() != "*":
            return False, "game_over"
        parsed = parse_move(str(raw), self.last_move, self._claimed)
        if not parsed.get("ok"):
            return False, parsed.get("reason")
        number = parsed["number"]
        self.board[number - 1].owner = self.current_player
        self._claimed.add(number)
        self.move_stack.append(number)
        self.current_player = other_player(self.current_player)
        if self.is_game_over():
            self.termination_reason = self.termination_reason or "no_legal_moves"
        return True, None

    # ---------------- Status / Export -----------------
    def is_game_over(self) -> bool:
        return self.last_move is not None and not self.available_moves()

    def status(self) -> str:
        if self._result_override:
            return self._result_override
        if self.is_game_over():
            # The player to move is stuck, so the other one wins
            return RESULTS[other_player(self.current_player)]
        return "*"

    def winner(self) -> Optional[int]:
        result = self.status()
        for player, res in RESULTS.items():
            if res == result:
                return player
        return None

    def export(self) -> dict:
        return {
            "headers": dict(self._headers),
            "board": [{"number": c.number, "owner": c.owner} for c in self.board],
            "claimed": sorted(self._claimed),
            "moves": list(self.move_stack),
            "last_move": self.last_move,
            "current_player": self.current_player,
            "available_moves": self.available_moves() if self.status() == "*" else [],
            "result": self.status(),
            "winner": self.winner(),
            "termination_reason": self.termination_reason,
        }
