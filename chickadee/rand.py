"""Linear congruential pseudorandom number generators."""

from __future__ import annotations

import threading
from collections.abc import Callable

RAND_MAX = 0x7FFFFFFF
DEFAULT_SEED = 819234718
_MULTIPLIER = 6364136223846793005
_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1


def _expand_seed(seed: int) -> int:
    seed &= _MASK32
    return (seed << 32) | seed


def _step(state: int) -> int:
    return (state * _MULTIPLIER + 1) & _MASK64


def _output(state: int) -> int:
    return (state >> 33) & RAND_MAX


def _uniform(lo: int, hi: int, engine: Callable[[], int]) -> int:
    if lo > hi:
        raise ValueError("lo must not exceed hi")
    if hi - lo > RAND_MAX:
        raise ValueError("range is wider than RAND_MAX")
    amount = hi - lo + 1
    per = (RAND_MAX + 1) // amount
    bound = per * amount
    while True:
        r = engine()
        if r < bound:
            return lo + r // per


class _GlobalState:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.seeded = False
        self.state = 0


_global = _GlobalState()


def srand(seed: int) -> None:
    """Seed the shared generator with a 32-bit seed."""
    with _global.lock:
        _global.state = _expand_seed(seed)
        _global.seeded = True


def rand() -> int:
    """Return the next value in [0, RAND_MAX] from the shared generator."""
    with _global.lock:
        if not _global.seeded:
            _global.state = _expand_seed(DEFAULT_SEED)
            _global.seeded = True
        _global.state = _step(_global.state)
        return _output(_global.state)


def rand_between(lo: int, hi: int) -> int:
    """Return a value roughly uniformly distributed in [lo, hi]."""
    return _uniform(lo, hi, rand)


class RandEngine:
    """A generator with its own state, producing the same sequence as `rand`."""

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self._state = 0
        self.seed(seed)

    @property
    def state(self) -> int:
        return self._state

    def seed(self, s: int) -> None:
        """Reseed. Seeds that fit in 32 bits are doubled into both halves of
        the state; larger seeds are used as the 64-bit state directly."""
        if s < 0:
            raise ValueError("seed must be non-negative")
        self._state = _expand_seed(s) if s <= _MASK32 else s & _MASK64

    def __call__(self) -> int:
        self._state = _step(self._state)
        return _output(self._state)

    def between(self, lo: int, hi: int) -> int:
        """Return a value roughly uniformly distributed in [lo, hi]."""
        return _uniform(lo, hi, self)