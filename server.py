"""
Minimal Flask API that wires the factor/multiple game engine into a UI.

Endpoints:
- POST /api/games                  -> start a game session ({"mode": "vs_computer" | "vs_player"})
- GET  /api/games/<id>             -> current session state (board, legal moves, message, winner)
- POST /api/games/<id>/move        -> submit a human move; in vs_computer mode the computer replies
- POST /api/games/<id>/restart     -> start over in the same mode
- GET  /api/games/<id>/history     -> structured history of the session's game

Sessions live in memory only and are dropped after SETTINGS.session_ttl_s of inactivity.
"""
from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Dict, Optional

from flask import Flask, jsonify, request

from factor_game.config import SETTINGS
from factor_game.engine_opponent import EngineOpponent
from factor_game.game import GameConfig, GameRunner
from factor_game.human_opponent import HumanOpponent
from factor_game.move_validator import OPENING_LIMIT, REASON_MESSAGES, parse_move

logging.basicConfig(level=getattr(logging, SETTINGS.log_level, logging.INFO), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = Flask(__name__)
sessions_lock = threading.Lock()

MODES = ("vs_computer", "vs_player")
GAMES: Dict[str, dict] = {}


def _cleanup_stale_games(max_age_s: int = SETTINGS.session_ttl_s):
    now = time.time()
    with sessions_lock:
        expired = [gid for gid, sess in GAMES.items() if now - sess.get("updated_at", now) > max_age_s]
        for gid in expired:
            GAMES.pop(gid, None)
    if expired:
        logging.info("Dropped %d stale game session(s)", len(expired))


def _new_runner(mode: str) -> GameRunner:
    if mode == "vs_computer":
        players = (HumanOpponent(name="Player 1"), EngineOpponent())
    else:
        players = (HumanOpponent(name="Player 1"), HumanOpponent(name="Player 2"))
    return GameRunner(*players, cfg=GameConfig(game_log=False))


def _find_session(game_id: str) -> Optional[dict]:
    _cleanup_stale_games()
    with sessions_lock:
        return GAMES.get(game_id)


def _status_message(runner: GameRunner) -> str:
    ref = runner.ref
    winner = ref.winner()
    if winner is not None:
        loser = 2 if winner == 1 else 1
        if ref.termination_reason == "illegal_move":
            return f"{runner.player_name(winner)} wins! {runner.player_name(loser)} forfeited."
        return f"{runner.player_name(winner)} wins! No more moves for {runner.player_name(loser)}."
    if ref.last_move is None:
        return f"{runner.player_name(ref.current_player)}, select a number less than {OPENING_LIMIT} to start."
    return f"{runner.player_name(ref.current_player)}'s turn. Pick a factor or multiple of {ref.last_move}."


def _serialize_session(session: dict, computer_move: Optional[int] = None, message: Optional[str] = None) -> dict:
    runner: GameRunner = session["runner"]
    state = runner.ref.export()
    winner = state["winner"]
    return {
        "game_id": session["id"],
        "mode": session["mode"],
        "status": "finished" if state["result"] != "*" else "running",
        "board": state["board"],
        "moves": state["moves"],
        "last_move": state["last_move"],
        "current_player": state["current_player"],
        "to_move": runner.player_name(state["current_player"]) if state["result"] == "*" else None,
        "legal_moves": state["available_moves"],
        "computer_move": computer_move,
        "result": state["result"],
        "winner": winner,
        "winner_name": runner.player_name(winner) if winner else None,
        "termination_reason": state["termination_reason"],
        "message": message or _status_message(runner),
    }


def _computer_to_move(runner: GameRunner) -> bool:
    return runner.needs_turn_from(runner.ref.current_player) and isinstance(runner.players[runner.ref.current_player], EngineOpponent)


def _play_computer_turn(session: dict) -> Optional[int]:
    """Let the computer reply; returns the number it claimed (None if it had nothing to play)."""
    runner: GameRunner = session["runner"]
    if SETTINGS.computer_delay_ms > 0:
        time.sleep(SETTINGS.computer_delay_ms / 1000)
    ok = runner.step()
    session["updated_at"] = time.time()
    if not ok:
        logging.warning("Computer produced no legal move in game %s", session["id"])
        return None
    return runner.ref.last_move


@app.route("/api/games", methods=["POST"])
def create_game():
    """Start a game session in memory."""
    _cleanup_stale_games()
    data = request.get_json(force=True, silent=True) or {}
    mode = str(data.get("mode", "vs_computer")).lower()
    if mode not in MODES:
        return jsonify({"error": f"mode must be one of {', '.join(MODES)}"}), 400
    game_id = f"game_{int(time.time())}_{uuid.uuid4().hex[:6]}"
    session = {
        "id": game_id,
        "mode": mode,
        "runner": _new_runner(mode),
        "created_at": time.time(),
        "updated_at": time.time(),
        "lock": threading.Lock(),
    }
    with sessions_lock:
        GAMES[game_id] = session
    logging.info("Started %s game %s", mode, game_id)
    return jsonify(_serialize_session(session)), 201


@app.route("/api/games/<game_id>", methods=["GET"])
def get_game(game_id: str):
    session = _find_session(game_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    with session["lock"]:
        return jsonify(_serialize_session(session))


@app.route("/api/games/<game_id>/move", methods=["POST"])
def game_move(game_id: str):
    session = _find_session(game_id)
    if not session:
        return jsonify({"error": "not found"}), 404

    data = request.get_json(force=True, silent=True) or {}
    raw_move = data.get("number")
    if raw_move is None:
        return jsonify({"error": "number is required"}), 400

    with session["lock"]:
        runner: GameRunner = session["runner"]
        ref = runner.ref
        if ref.status() != "*":
            return jsonify({"error": "game_over", "message": REASON_MESSAGES["game_over"]}), 400
        player = runner.players[ref.current_player]
        if not isinstance(player, HumanOpponent):
            return jsonify({"error": "not_human_turn", "to_move": runner.player_name(ref.current_player)}), 400

        parsed = parse_move(str(raw_move), ref.last_move, ref.claimed)
        if not parsed.get("ok"):
            reason = parsed.get("reason") or "invalid_move"
            return jsonify({"error": reason, "message": REASON_MESSAGES.get(reason, reason)}), 400

        player.provide_move(parsed["number"])
        runner.step()
        session["updated_at"] = time.time()

        computer_move = None
        if _computer_to_move(runner):
            computer_move = _play_computer_turn(session)
        return jsonify(_serialize_session(session, computer_move=computer_move))


@app.route("/api/games/<game_id>/restart", methods=["POST"])
def restart_game(game_id: str):
    session = _find_session(game_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    with session["lock"]:
        session["runner"] = _new_runner(session["mode"])
        session["updated_at"] = time.time()
        return jsonify(_serialize_session(session))


@app.route("/api/games/<game_id>/history", methods=["GET"])
def game_history(game_id: str):
    session = _find_session(game_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    with session["lock"]:
        return jsonify(session["runner"].export_structured_history())


@app.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = request.headers.get("Origin", "*")
    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    # Prevent caching so the UI always sees the freshest state
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return response


@app.route("/api/<path:path>", methods=["OPTIONS"])
def cors_preflight(path: str):
    resp = app.make_response(("", 204))
    resp.headers["Access-Control-Allow-Origin"] = request.headers.get("Origin", "*")
    resp.headers["Access-Control-Allow-Credentials"] = "true"
    resp.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return resp


if __name__ == "__main__":
    app.run(host=SETTINGS.server_host, port=SETTINGS.server_port, debug=True)
