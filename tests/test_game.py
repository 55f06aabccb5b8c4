import json
import os
import tempfile
import threading
import unittest

from factor_game.engine_opponent import EngineOpponent
from factor_game.game import GameConfig, GameRunner
from factor_game.random_opponent import RandomOpponent


class ScriptedPlayer:
    """Plays a fixed list of numbers, then returns None."""

    def __init__(self, numbers, name=None):
        self._numbers = list(numbers)
        if name:
            self.name = name

    def choose(self, ref):
        return self._numbers.pop(0) if self._numbers else None

    def close(self):
        pass


class GameRunnerTests(unittest.TestCase):
    def test_scripted_game_ends_when_player_is_stuck(self):
        runner = GameRunner(ScriptedPlayer([2, 53], name="Alice"), ScriptedPlayer([1], name="Bob"))
        self.assertEqual(runner.play(), "1-0")
        self.assertEqual(runner.termination_reason, "no_legal_moves")
        m = runner.metrics()
        self.assertEqual(m["plies_total"], 3)
        self.assertEqual(m["winner"], 1)
        self.assertEqual(m["winner_name"], "Alice")
        self.assertEqual(m["opening_move"], 2)
        self.assertEqual(runner.records[-1]["replies_left"], 0)

    def test_illegal_move_forfeits(self):
        runner = GameRunner(ScriptedPlayer([2]), ScriptedPlayer([3]))
        self.assertEqual(runner.play(), "1-0")
        self.assertEqual(runner.termination_reason, "illegal_move")
        self.assertEqual(runner.records[-1]["reason"], "illegal_move")
        self.assertEqual(runner.metrics()["player2_illegal_moves"], 1)
        self.assertFalse(runner.verify_history_result()["mismatch"])

    def test_missing_move_forfeits(self):
        runner = GameRunner(ScriptedPlayer([]), ScriptedPlayer([]))
        self.assertEqual(runner.play(), "0-1")
        self.assertEqual(runner.records[-1]["reason"], "no_move")

    def test_computer_self_play_is_consistent(self):
        runner = GameRunner(EngineOpponent(), EngineOpponent())
        result = runner.play()
        self.assertIn(result, ("1-0", "0-1"))
        self.assertEqual(runner.termination_reason, "no_legal_moves")
        self.assertEqual(runner.player_name(1), "Computer 1")
        numbers = [r["number"] for r in runner.records]
        self.assertEqual(len(numbers), len(set(numbers)))
        self.assertTrue(all(r["ok"] for r in runner.records))
        self.assertFalse(runner.verify_history_result()["mismatch"])
        # deterministic
        again = GameRunner(EngineOpponent(), EngineOpponent())
        again.play()
        self.assertEqual(again.ref.move_stack, runner.ref.move_stack)

    def test_computer_against_random(self):
        for seed in range(5):
            runner = GameRunner(RandomOpponent(seed=seed), EngineOpponent())
            self.assertIn(runner.play(), ("1-0", "0-1"))
            self.assertFalse(runner.summary()["history_verification"]["mismatch"])

    def test_needs_turn_from(self):
        runner = GameRunner(ScriptedPlayer([2, 53]), ScriptedPlayer([1]))
        self.assertTrue(runner.needs_turn_from(1))
        self.assertFalse(runner.needs_turn_from(2))
        runner.step()
        self.assertTrue(runner.needs_turn_from(2))
        runner.play()
        self.assertFalse(runner.needs_turn_from(1))
        self.assertFalse(runner.needs_turn_from(2))

    def test_history_rewritten_every_turn(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "game.json")
            runner = GameRunner(ScriptedPlayer([2, 53]), ScriptedPlayer([1]), cfg=GameConfig(history_log_path=path, history_log_every_turn=True))
            runner.step()
            with open(path, "r", encoding="utf-8") as f:
                first = json.load(f)
            runner.step()
            with open(path, "r", encoding="utf-8") as f:
                second = json.load(f)
        self.assertFalse(first["terminated"])
        self.assertEqual([m["number"] for m in first["moves"]], [2])
        self.assertEqual([m["number"] for m in second["moves"]], [2, 1])

    def test_cancelled_before_start(self):
        ev = threading.Event()
        ev.set()
        runner = GameRunner(EngineOpponent(), EngineOpponent(), cfg=GameConfig(cancel_event=ev))
        self.assertEqual(runner.play(), "*")
        self.assertEqual(runner.termination_reason, "cancelled")
        self.assertEqual(runner.records, [])

    def test_history_written_to_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            runner = GameRunner(ScriptedPlayer([2, 53]), ScriptedPlayer([1]), cfg=GameConfig(history_log_path=tmp))
            runner.play()
            path = runner.cfg.history_log_path
            self.assertEqual(os.path.dirname(path), tmp)
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        self.assertTrue(data["terminated"])
        self.assertEqual([m["number"] for m in data["moves"][:-1]], [2, 1, 53])
        self.assertEqual(data["moves"][-1]["event"], "termination")
        self.assertEqual(data["moves"][-1]["reason"], "no_legal_moves")
        self.assertEqual(data["winner"], 1)


if __name__ == "__main__":
    unittest.main()
