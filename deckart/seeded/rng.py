#!/usr/bin/env python3
"""
Seeded pseudo-random stream (mulberry32).

The constants, the 32-bit wraparound and the operation order are fixed so the
stream matches other mulberry32 implementations bit for bit.
"""

import math
from typing import Callable, Sequence, TypeVar

MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_SCALE = 4294967296.0

T = TypeVar("T")


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


class Mulberry32:
    """Deterministic float stream in [0, 1) from one 32-bit seed."""

    def __init__(self, seed: int):
        self.seed = seed & MASK32
        self._state = self.seed
        self.draws = 0

    def next_float(self) -> float:
        self._state = (self._state + _INCREMENT) & MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        self.draws += 1
        return ((t ^ (t >> 14)) & MASK32) / _SCALE

    __call__ = next_float


Rng = Callable[[], float]


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def pick(rng: Rng, items: Sequence[T]) -> T:
    return items[math.floor(rng() * len(items))]
