import argparse
import json
import logging
from factor_game.config import SETTINGS
from factor_game.game import GameRunner, GameConfig
from factor_game.engine_opponent import EngineOpponent
from factor_game.random_opponent import RandomOpponent
from factor_game.user_opponent import UserOpponent

MODES = {
    "vs-computer": ("human", "computer"),
    "vs-player": ("human", "human"),
}


def load_json_config(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except Exception as e:
        logging.getLogger("play_one").error("Failed to read config %s: %s", path, e)
        return {}


def build_player(kind: str, seed: int | None, label: str):
    if kind == "computer":
        return EngineOpponent()
    if kind == "random":
        return RandomOpponent(seed=seed)
    if kind == "human":
        return UserOpponent(name=label)
    raise ValueError(f"Unsupported player type '{kind}'. Use human, computer or random.")


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Play one factor/multiple game on the 1..100 board.")
    ap.add_argument("--config", default=None, help="Optional JSON config file to load defaults from.")
    ap.add_argument("--mode", choices=sorted(MODES), default=None, help="Preset pairing (player 1 is always the human)")
    ap.add_argument("--player-one", choices=["human", "computer", "random"], default=None, help="Player 1 type (overrides --mode)")
    ap.add_argument("--player-two", choices=["human", "computer", "random"], default=None, help="Player 2 type (overrides --mode)")
    ap.add_argument("--seed", type=int, default=None, help="Seed for random players")
    ap.add_argument("--history-out", default=None, help="Path to JSON file or directory for the structured history")
    ap.add_argument("--save-history", action="store_true", help="Write the structured history under the configured history_dir")
    ap.add_argument("--game-log", action="store_true", help="Log every ply at INFO")
    ap.add_argument("--history-every-turn", action="store_true", help="Rewrite the history JSON after every ply")
    ap.add_argument("--log-level", default=None, help="Python logging level (e.g., INFO, DEBUG)")

    args = ap.parse_args()

    cfg_dict = load_json_config(args.config) if args.config else {}

    # Resolve values with precedence: CLI arg if provided -> config -> default
    def pick(*keys, default=None):
        for k in keys:
            v = getattr(args, k, None)
            if v is not None:
                return v
            if k in cfg_dict and cfg_dict[k] is not None:
                return cfg_dict[k]
        return default

    log_level = str(pick("log_level", default=SETTINGS.log_level)).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("play_one")

    mode = pick("mode", default="vs-computer")
    if mode not in MODES:
        raise ValueError(f"Unknown mode '{mode}'. Choose one of: {', '.join(sorted(MODES))}.")
    kind_one = pick("player_one", default=MODES[mode][0])
    kind_two = pick("player_two", default=MODES[mode][1])
    seed = pick("seed", default=None)

    p1 = build_player(kind_one, seed, "Player 1")
    p2 = build_player(kind_two, None if seed is None else int(seed) + 1, "Player 2")
    gcfg = GameConfig(
        game_log=args.game_log or bool(cfg_dict.get("game_log", False)),
        history_log_every_turn=args.history_every_turn or bool(cfg_dict.get("history_every_turn", False)),
        history_log_path=pick("history_out", default=(SETTINGS.history_dir if args.save_history else None)),
    )

    runner = GameRunner(p1, p2, cfg=gcfg)
    log.info("Starting game: %s vs %s", runner.player_name(1), runner.player_name(2))
    try:
        result = runner.play()
    finally:
        p1.close()
        p2.close()
    summary = runner.summary()

    winner = summary["winner_name"]
    print("Result:", result)
    print("Termination:", runner.termination_reason)
    print("Moves:", " ".join(str(n) for n in summary["moves"]))
    if winner:
        print(f"{winner} wins!")
    print("Metrics:", runner.metrics())
