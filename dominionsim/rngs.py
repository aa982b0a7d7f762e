"""Multi-stream Lehmer random number generator.

The generator keeps 256 independent streams.  Each stream is a
multiplicative linear congruential generator with modulus 2**31 - 1 and
multiplier 48271.  It returns reals strictly between 0.0 and 1.0.
"""

from __future__ import annotations

import math
import sys
import time
from typing import Sequence

MODULUS = 2147483647
MULTIPLIER = 48271
CHECK = 399268537
STREAMS = 256
A256 = 22925
DEFAULT = 123456789

_SEARCH_RANGE = 1000000000


def _step(state: int, multiplier: int) -> int:
    """Advance a state by one multiplication modulo MODULUS without overflow."""
    q, r = divmod(MODULUS, multiplier)
    t = multiplier * (state % q) - r * (state // q)
    return t if t > 0 else t + MODULUS


class RandomStreams:
    """A set of 256 random number streams with one selected at a time."""

    def __init__(self) -> None:
        self._seeds = [0] * STREAMS
        self._seeds[0] = DEFAULT
        self._stream = 0
        self._initialized = False

    @property
    def stream(self) -> int:
        """Index of the currently selected stream."""
        return self._stream

    def random(self) -> float:
        """Return the next value of the current stream, in (0.0, 1.0)."""
        state = _step(self._seeds[self._stream], MULTIPLIER)
        self._seeds[self._stream] = state
        return state / MODULUS

    def plant_seeds(self, x: int) -> None:
        """Seed stream 0 with ``x`` and derive the states of all other streams."""
        self._initialized = True
        current = self._stream
        self.select_stream(0)
        self.put_seed(x)
        self._stream = current
        for j in range(1, STREAMS):
            self._seeds[j] = _step(self._seeds[j - 1], A256)

    def put_seed(self, x: int) -> None:
        """Set the state of the current stream.

        A positive ``x`` is reduced modulo MODULUS; a negative ``x`` takes
        the state from the system clock.  A state of zero is not valid and
        raises ValueError.
        """
        if x > 0:
            x %= MODULUS
        if x < 0:
            x = int(time.time()) % MODULUS
        if x == 0:
            raise ValueError("seed must be a positive integer below the modulus")
        self._seeds[self._stream] = x

    def get_seed(self) -> int:
        """Return the state of the current stream."""
        return self._seeds[self._stream]

    def select_stream(self, index: int) -> None:
        """Make stream ``index`` (taken modulo 256) the current stream."""
        self._stream = (index & 0xFFFFFFFF) % STREAMS
        if not self._initialized and self._stream != 0:
            self.plant_seeds(DEFAULT)


def find_value(seed: int, target: int) -> int:
    """Count draws on stream 1 seeded with ``seed`` until ``target`` comes up.

    Each draw is scaled to an integer in [0, 10**9).  Returns the number of
    draws taken, the last of which produced ``target``.
    """
    if not 0 <= target < _SEARCH_RANGE:
        raise ValueError(f"target must lie in [0, {_SEARCH_RANGE})")
    streams = RandomStreams()
    streams.select_stream(1)
    streams.put_seed(seed)
    draws = 0
    while True:
        draws += 1
        if math.floor(streams.random() * _SEARCH_RANGE) == target:
            return draws


def main(argv: Sequence[str] | None = None) -> int:
    """Search a seeded stream for a target value given on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print("Not enough inputs:  seed target")
        return 1
    try:
        seed = int(args[0])
        target = int(args[1])
        find_value(seed, target)
    except ValueError as exc:
        print(exc)
        return 1
    print("Found the bug!")
    return 0


if __name__ == "__main__":
    sys.exit(main())