import argparse, json, logging, os, statistics, time

from factor_game.config import SETTINGS
from factor_game.game import GameRunner, GameConfig
from factor_game.engine_opponent import EngineOpponent
from factor_game.random_opponent import RandomOpponent

PLAYER_KINDS = ("computer", "random")


def _parse_log_level(name: str | None) -> int:
    name = (name or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def _build(kind: str, seed: int | None):
    if kind == "computer":
        return EngineOpponent()
    if kind == "random":
        return RandomOpponent(seed=seed)
    raise ValueError(f"Unsupported player type '{kind}'. Use one of: {', '.join(PLAYER_KINDS)}.")


def run_games(a_kind: str, b_kind: str, games: int, seed: int | None, out_dir: str | None, jsonl_f=None) -> dict:
    """Play `games` games between A and B, alternating who opens. Returns aggregate stats."""
    log = logging.getLogger("run_many")
    wins = {"a": 0, "b": 0}
    plies = []
    reasons: dict[str, int] = {}
    for i in range(games):
        game_seed = None if seed is None else seed + i
        a, b = _build(a_kind, game_seed), _build(b_kind, game_seed)
        a_opens = i % 2 == 0
        p1, p2 = (a, b) if a_opens else (b, a)
        hist_path = os.path.join(out_dir, f"g{i+1:03d}.json") if out_dir else None
        runner = GameRunner(p1, p2, cfg=GameConfig(history_log_path=hist_path))
        runner.play()
        m = runner.metrics()
        winner = m["winner"]
        if winner is not None:
            a_won = (winner == 1) == a_opens
            wins["a" if a_won else "b"] += 1
        plies.append(m["plies_total"])
        reason = m["termination_reason"] or "unknown"
        reasons[reason] = reasons.get(reason, 0) + 1
        m.update({"game": i + 1, "a": a_kind, "b": b_kind, "a_opens": a_opens})
        if jsonl_f:
            jsonl_f.write(json.dumps(m) + "\n")
        log.debug("Game %d: %s", i + 1, m)
    return {
        "games": games,
        "a": a_kind,
        "b": b_kind,
        "a_wins": wins["a"],
        "b_wins": wins["b"],
        "a_win_rate": (wins["a"] / games) if games else 0.0,
        "avg_plies": statistics.mean(plies) if plies else 0,
        "termination_reasons": reasons,
    }


def main():
    ap = argparse.ArgumentParser(description="Run many automated games between two computer players.")
    ap.add_argument("--a", choices=PLAYER_KINDS, default="computer", help="Player A type")
    ap.add_argument("--b", choices=PLAYER_KINDS, default="random", help="Player B type")
    ap.add_argument("--games", type=int, default=20)
    ap.add_argument("--seed", type=int, default=None, help="Base seed for random players")
    ap.add_argument("--out-dir", default=None, help="Directory for per-game histories and metrics.jsonl")
    ap.add_argument("--log-level", default=None)
    args = ap.parse_args()

    logging.basicConfig(level=_parse_log_level(args.log_level or SETTINGS.log_level), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("run_many")

    jsonl_f = None
    if args.out_dir:
        os.makedirs(args.out_dir, exist_ok=True)
        jsonl_f = open(os.path.join(args.out_dir, "metrics.jsonl"), "w", encoding="utf-8")
    t0 = time.time()
    try:
        summary = run_games(args.a, args.b, args.games, args.seed, args.out_dir, jsonl_f)
    finally:
        if jsonl_f:
            jsonl_f.close()
    summary["duration_s"] = round(time.time() - t0, 2)
    log.info("Finished %d games in %.2fs", args.games, summary["duration_s"])
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
