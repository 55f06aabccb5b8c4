import unittest

from factor_game.number_theory import BOARD_SIZE, divisors_of, multiples_of


def _brute_divisors(n: int) -> set[int]:
    return {d for d in range(1, n + 1) if n % d == 0}


class DivisorsTests(unittest.TestCase):
    def test_matches_brute_force_on_whole_board(self):
        for n in range(1, BOARD_SIZE + 1):
            divs = divisors_of(n)
            self.assertEqual(divs, _brute_divisors(n), n)
            self.assertIn(1, divs)
            self.assertIn(n, divs)
            self.assertTrue(all(n % d == 0 for d in divs))

    def test_perfect_square_counted_once(self):
        self.assertEqual(divisors_of(36), {1, 2, 3, 4, 6, 9, 12, 18, 36})
        self.assertEqual(divisors_of(1), {1})

    def test_zero_is_empty(self):
        self.assertEqual(divisors_of(0), set())


class MultiplesTests(unittest.TestCase):
    def test_properties_on_whole_board(self):
        for n in range(1, BOARD_SIZE + 1):
            mults = multiples_of(n)
            self.assertEqual(mults, sorted(set(mults)))
            self.assertTrue(all(m % n == 0 and m > n for m in mults))
            if mults:
                self.assertLessEqual(mults[-1], BOARD_SIZE)
                self.assertLess(BOARD_SIZE, mults[-1] + n)

    def test_examples(self):
        self.assertEqual(multiples_of(12), [24, 36, 48, 60, 72, 84, 96])
        self.assertEqual(multiples_of(50), [100])
        self.assertEqual(multiples_of(51), [])
        self.assertEqual(multiples_of(7, limit=30), [14, 21, 28])

    def test_zero_is_empty(self):
        self.assertEqual(multiples_of(0), [])


if __name__ == "__main__":
    unittest.main()
