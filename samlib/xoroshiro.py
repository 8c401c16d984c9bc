"""The xoroshiro128+ pseudo-random generator with clock and entropy seeding."""

from __future__ import annotations

import os
import time
from typing import Iterator, Optional

_MASK64 = (1 << 64) - 1


def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & _MASK64


def _clock() -> int:
    return time.perf_counter_ns() & _MASK64


def _entropy64() -> Optional[int]:
    try:
        return int.from_bytes(os.urandom(8), "little")
    except NotImplementedError:
        return None


class Xoroshiro128Plus:
    """A xoroshiro128+ generator.

    With no seeds given, both halves of the state come from the system
    entropy source when it is available and from a high-resolution clock
    otherwise. ``flags`` records which halves came from entropy (bit 0 for
    the first, bit 1 for the second).
    """

    def __init__(self, s0: Optional[int] = None, s1: Optional[int] = None) -> None:
        if s0 is not None and s1 is not None:
            self._s0 = s0 & _MASK64
            self._s1 = s1 & _MASK64
            self.flags = 0
        else:
            self._s0 = self._s1 = 0
            self.flags = self._reseed()

    def _reseed(self) -> int:
        self._s0 = _clock()
        self._s1 = _clock()
        flags = 0
        first = _entropy64()
        if first is not None:
            self._s0 = first
            flags |= 1
        second = _entropy64()
        if second is not None:
            self._s1 = second
            flags |= 2
        self.flags = flags
        return flags

    @property
    def state(self) -> tuple[int, int]:
        """The two 64-bit state words."""
        return self._s0, self._s1

    def finish_seed(self) -> None:
        """Replace the second state word from the clock if no entropy was used."""
        if self.flags == 0:
            self._s1 = _clock()

    def next(self) -> int:
        """Return the next 64-bit value."""
        s0, s1 = self._s0, self._s1
        result = (s0 + s1) & _MASK64
        s1 ^= s0
        self._s0 = _rotl(s0, 55) ^ s1 ^ ((s1 << 14) & _MASK64)
        self._s1 = _rotl(s1, 36)
        return result

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()


_generator = Xoroshiro128Plus(0, 0)


def init_seed() -> int:
    """Seed the shared generator; returns which halves came from entropy (0-3)."""
    return _generator._reseed()


def finish_seed() -> None:
    """Refresh the shared generator's second word from the clock if needed."""
    _generator.finish_seed()


def rand128() -> int:
    """Return the next value from the shared generator."""
    return _generator.next()