from .move_validator import parse_move
from .referee import Referee


class HumanOpponent:
    """Opponent that defers move choice to an external controller (web UI).

    The web layer will call provide_move(raw) when the human submits a number.
    Until then, choose() raises if invoked without a pending move.
    """
    name = "Human"

    def __init__(self, name: str | None = None):
        if name:
            self.name = name
        self._pending: str | None = None

    def provide_move(self, raw: str | int):
        self._pending = str(raw)

    def choose(self, ref: Referee) -> int | None:
        if self._pending is None:
            raise RuntimeError("Human move not yet provided")
        raw = self._pending
        self._pending = None
        parsed = parse_move(raw, ref.last_move, ref.claimed)
        return parsed.get("number") if parsed.get("ok") else None

    def close(self):
        pass
