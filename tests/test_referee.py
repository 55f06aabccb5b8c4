import unittest

from factor_game.referee import PLAYER_ONE, PLAYER_TWO, Referee, other_player


class RefereeTests(unittest.TestCase):
    def setUp(self):
        self.ref = Referee()

    def test_fresh_board(self):
        self.assertEqual(self.ref.status(), "*")
        self.assertIsNone(self.ref.last_move)
        self.assertEqual(self.ref.current_player, PLAYER_ONE)
        self.assertEqual(len(self.ref.board), 100)
        self.assertEqual(self.ref.available_moves(), list(range(1, 50)))
        self.assertIsNone(self.ref.winner())

    def test_apply_and_reject(self):
        self.assertEqual(self.ref.apply_move("50"), (False, "opening_too_high"))
        self.assertEqual(self.ref.move_stack, [])
        self.assertEqual(self.ref.apply_move(12), (True, None))
        self.assertEqual(self.ref.owner_of(12), PLAYER_ONE)
        self.assertEqual(self.ref.current_player, PLAYER_TWO)
        self.assertEqual(self.ref.apply_move(13), (False, "illegal_move"))
        self.assertEqual(self.ref.apply_move("12"), (False, "already_claimed"))
        self.assertEqual(self.ref.current_player, PLAYER_TWO)
        self.assertEqual(self.ref.apply_move("36"), (True, None))
        self.assertEqual(self.ref.owner_of(36), PLAYER_TWO)
        self.assertEqual(self.ref.claimed, frozenset({12, 36}))
        self.assertEqual(self.ref.last_move, 36)

    def test_stuck_player_loses(self):
        for n in (2, 1, 53):
            ok, _ = self.ref.apply_move(n)
            self.assertTrue(ok)
        # 53 only divides by 1, which is taken; player 2 has nothing left
        self.assertTrue(self.ref.is_game_over())
        self.assertEqual(self.ref.status(), "1-0")
        self.assertEqual(self.ref.winner(), PLAYER_ONE)
        self.assertEqual(self.ref.termination_reason, "no_legal_moves")
        self.assertEqual(self.ref.apply_move(4), (False, "game_over"))

    def test_forfeit(self):
        self.ref.apply_move(12)
        self.ref.forfeit(PLAYER_TWO, "illegal_move")
        self.assertEqual(self.ref.status(), "1-0")
        self.assertEqual(self.ref.termination_reason, "illegal_move")

    def test_reset(self):
        self.ref.apply_move(12)
        self.ref.forfeit(PLAYER_TWO, "illegal_move")
        self.ref.reset()
        self.assertEqual(self.ref.status(), "*")
        self.assertEqual(self.ref.claimed, frozenset())
        self.assertIsNone(self.ref.termination_reason)
        self.assertTrue(all(c.owner is None for c in self.ref.board))

    def test_export(self):
        self.ref.set_headers(player_one="Alice", player_two="Computer")
        self.ref.apply_move(12)
        data = self.ref.export()
        self.assertEqual(data["headers"]["Player1"], "Alice")
        self.assertEqual(data["claimed"], [12])
        self.assertEqual(data["available_moves"], [1, 2, 3, 4, 6, 24, 36, 48, 60, 72, 84, 96])
        self.assertEqual(data["board"][11], {"number": 12, "owner": 1})
        self.assertEqual(data["result"], "*")

    def test_other_player(self):
        self.assertEqual(other_player(PLAYER_ONE), PLAYER_TWO)
        self.assertEqual(other_player(PLAYER_TWO), PLAYER_ONE)


if __name__ == "__main__":
    unittest.main()
