"""
Single-game runner and config.

- GameConfig: knobs for ply cap, per-ply logging, history output and cancellation.
- GameRunner: orchestrates one game between two players (computer, random, console or web human).
  - Asks the player to move for a number, applies it through the Referee, and records the ply.
  - A player that returns no number, or an illegal one, forfeits the game.
  - Writes a structured history JSON for inspection and exposes metrics/summary at the end.

"""
from __future__ import annotations
import time, logging, statistics, json, threading
from dataclasses import dataclass
import os
from datetime import datetime

from .number_theory import BOARD_SIZE
from .referee import PLAYER_ONE, PLAYER_TWO, Referee


@dataclass
class GameConfig:
    # Every ply claims a fresh number, so no game can outlast the board
    max_plies: int = BOARD_SIZE
    # Console logging of moves as they happen (INFO); otherwise per-ply lines go to DEBUG
    game_log: bool = False
    # Optional path or directory to dump the structured history JSON
    history_log_path: str | None = None
    history_log_every_turn: bool = False
    cancel_event: threading.Event | None = None


class GameRunner:
    def __init__(self, player_one, player_two, cfg: GameConfig | None = None):
        self.log = logging.getLogger("GameRunner")
        self.players = {PLAYER_ONE: player_one, PLAYER_TWO: player_two}
        self.cfg = cfg or GameConfig()
        self.ref = Referee()
        self.ref.set_headers(player_one=self.player_name(PLAYER_ONE), player_two=self.player_name(PLAYER_TWO))
        self.cancel_event = self.cfg.cancel_event
        self.records: list[dict] = []  # list of dicts per ply
        self.start_ts = time.time()
        self._prepare_history_path()

    @property
    def termination_reason(self) -> str | None:
        return self.ref.termination_reason

    def _cancelled(self) -> bool:
        return bool(self.cancel_event and self.cancel_event.is_set())

    def player_name(self, player: int) -> str:
        named = getattr(self.players[player], "name", None)
        if not named or self._same_names():
            return f"{named or 'Player'} {player}"
        return named

    def _same_names(self) -> bool:
        return getattr(self.players[PLAYER_ONE], "name", None) == getattr(self.players[PLAYER_TWO], "name", None)

    def _prepare_history_path(self):
        p = self.cfg.history_log_path
        if not p:
            return
        try:
            ext = os.path.splitext(p)[1]
            if os.path.isdir(p) or ext == "":
                os.makedirs(p, exist_ok=True)
                ts = datetime.now().strftime("%Y%m%d-%H%M%S")
                resolved = os.path.join(p, f"hist_{ts}.json")
            else:
                dir_path = os.path.dirname(p)
                if dir_path:
                    os.makedirs(dir_path, exist_ok=True)
                resolved = p
            self.cfg.history_log_path = resolved
        except Exception:
            self.log.exception("Failed to prepare history path; disabling history logging")
            self.cfg.history_log_path = None

    # --------------- Structured history export ---------------
    def export_structured_history(self) -> dict:
        """Return a structured representation of the game suitable for inspection.
        Includes headers, result, termination reason, and per-ply entries.
        """
        moves = []
        for idx, rec in enumerate(self.records):
            moves.append({
                "ply": idx + 1,
                "player": rec.get("player"),
                "name": rec.get("name"),
                "number": rec.get("number"),
                "legal": bool(rec.get("ok")),
                "replies_left": rec.get("replies_left"),
                "ms": rec.get("ms"),
            })
        data = {
            "headers": self.ref.export()["headers"],
            "result": self.ref.status(),
            "winner": self.ref.winner(),
            "termination_reason": self.termination_reason,
            "moves": moves,
            "players": {str(p): self.player_name(p) for p in (PLAYER_ONE, PLAYER_TWO)},
        }
        terminated = data["result"] != "*"
        data["terminated"] = terminated
        if terminated:
            data["moves"].append({
                "event": "termination",
                "ply": len(moves),
                "result": data["result"],
                "reason": self.termination_reason or "no_legal_moves",
            })
        return data

    def dump_structured_history_json(self):
        path = self.cfg.history_log_path
        if not path:
            return
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self.export_structured_history(), f, ensure_ascii=False, indent=2)
            self.log.info("Wrote structured history to %s", path)
        except Exception:
            self.log.exception("Failed writing structured history")

    # ---------------- Turns -----------------
    def needs_turn_from(self, player: int) -> bool:
        return self.ref.status() == "*" and self.ref.current_player == player

    def step(self) -> bool:
        """Play one ply for the player to move. Returns False if the move was rejected or the game is over."""
        if self.ref.status() != "*" or self._cancelled():
            return False
        player = self.ref.current_player
        opp = self.players[player]
        t0 = time.perf_counter()
        number = opp.choose(self.ref)
        ms = int((time.perf_counter() - t0) * 1000)
        if number is None:
            ok, reason = False, "no_move"
        else:
            ok, reason = self.ref.apply_move(number)
        replies_left = len(self.ref.available_moves()) if ok else None
        self.records.append({
            "player": player,
            "name": self.player_name(player),
            "number": number,
            "ok": ok,
            "reason": reason,
            "ms": ms,
            "replies_left": replies_left,
        })
        ply = len(self.records)
        if self.cfg.game_log:
            self.log.info("[ply %d] %s: number=%s legal=%s replies_left=%s time_ms=%d", ply, self.player_name(player), number, ok, replies_left, ms)
        else:
            self.log.debug("Ply %d %s number %s ok=%s reason=%s", ply, self.player_name(player), number, ok, reason)
        if not ok:
            # an illegal or missing move loses immediately
            self.ref.forfeit(player, "illegal_move")
            self.log.error("Terminating due to illegal move by %s at ply %d (%s)", self.player_name(player), ply, reason)
        if self.cfg.history_log_path and self.cfg.history_log_every_turn:
            self.dump_structured_history_json()
        return ok

    def play(self) -> str:
        while self.ref.status() == "*" and len(self.records) < self.cfg.max_plies:
            if self._cancelled():
                self.ref.termination_reason = self.ref.termination_reason or "cancelled"
                break
            self.step()
        result = self.ref.status()
        self.log.info("Game finished result=%s reason=%s plies=%d", result, self.termination_reason, len(self.records))
        self.dump_structured_history_json()
        return result

    def verify_history_result(self) -> dict:
        """Replay recorded moves on a fresh referee to cross-check the final status.
        Returns dict with keys: reconstructed_result, referee_result, mismatch(bool)
        """
        ref = Referee()
        for rec in self.records:
            if not rec.get("ok"):
                ref.forfeit(rec["player"], "illegal_move")
                break
            ok, reason = ref.apply_move(rec["number"])
            if not ok:
                return {"error": f"illegal_sequence_at:{rec['number']}:{reason}"}
        reconstructed = ref.status()
        referee_res = self.ref.status()
        return {"reconstructed_result": reconstructed, "referee_result": referee_res, "mismatch": reconstructed != referee_res}

    # ---------------- Metrics -----------------
    def metrics(self) -> dict:
        m: dict = {
            "plies_total": len(self.records),
            "result": self.ref.status(),
            "winner": self.ref.winner(),
            "winner_name": self.player_name(self.ref.winner()) if self.ref.winner() else None,
            "termination_reason": self.termination_reason,
            "duration_s": round(time.time() - self.start_ts, 2),
            "opening_move": self.ref.move_stack[0] if self.ref.move_stack else None,
        }
        for player in (PLAYER_ONE, PLAYER_TWO):
            recs = [r for r in self.records if r["player"] == player]
            latencies = [r["ms"] for r in recs if r.get("ms") is not None]
            m[f"player{player}_name"] = self.player_name(player)
            m[f"player{player}_moves"] = len(recs)
            m[f"player{player}_illegal_moves"] = sum(1 for r in recs if not r.get("ok"))
            m[f"player{player}_ms_avg"] = statistics.mean(latencies) if latencies else 0
        return m

    def summary(self) -> dict:
        m = self.metrics()
        m["moves"] = list(self.ref.move_stack)
        m["loser_stuck_on"] = self.ref.last_move if self.termination_reason == "no_legal_moves" else None
        m["history_verification"] = self.verify_history_result()
        m["structured_history_path"] = self.cfg.history_log_path
        return m


__all__ = ["GameConfig", "GameRunner"]
