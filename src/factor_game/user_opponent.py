from __future__ import annotations
"""Interactive human opponent that only allows legal moves."""
from .move_validator import OPENING_LIMIT, REASON_MESSAGES, parse_move
from .referee import Referee


class UserOpponent:
    name = "Human"

    def __init__(self, name: str | None = None, input_fn=input, print_fn=print):
        if name:
            self.name = name
        self._input = input_fn
        self._print = print_fn

    def choose(self, ref: Referee):
        """Prompt the user for a legal number; repeat until valid."""
        while True:
            last = ref.last_move
            if last is None:
                self._print(f"\n{self.name}, select a number less than {OPENING_LIMIT} to start.")
            else:
                self._print(f"\n{self.name}'s turn. Pick a factor or multiple of {last}.")
                self._print("Legal moves:", " ".join(str(n) for n in ref.available_moves()))
            raw = self._input("Enter a number: ").strip()
            if not raw:
                continue
            parsed = parse_move(raw, last, ref.claimed)
            if parsed.get("ok"):
                return parsed["number"]
            self._print(REASON_MESSAGES.get(parsed.get("reason"), "Illegal move. Please try again."))

    def close(self):
        return
