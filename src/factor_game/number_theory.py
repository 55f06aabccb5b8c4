"""
Divisor and multiple helpers for the 1..100 board.

- divisors_of(): every positive divisor of n (1 and n included), paired scan up to isqrt(n).
- multiples_of(): 2n, 3n, ... up to the board limit, ascending.

"""
from __future__ import annotations
from math import isqrt

BOARD_SIZE = 100


def divisors_of(n: int) -> set[int]:
    if n == 0:
        return set()
    divisors: set[int] = set()
    for i in range(1, isqrt(n) + 1):
        if n % i == 0:
            divisors.add(i)
            divisors.add(n // i)
    return divisors


def multiples_of(n: int, limit: int = BOARD_SIZE) -> list[int]:
    """Return the multiples of n strictly greater than n and not above limit."""
    if n == 0:
        return []
    return list(range(n * 2, limit + 1, n))


__all__ = ["BOARD_SIZE", "divisors_of", "multiples_of"]
