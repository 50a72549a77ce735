"""
Engine: the seedable pseudo-random source behind every generator.

A single 32-bit state advanced by a linear congruential recurrence.
Each instance owns its state; there is no module-level generator.
"""

import logging
import math
import time
from typing import Callable, Optional, Union

import numpy as np

from .errors import RangeError, SeedforgeError

logger = logging.getLogger(__name__)

SeedValue = Union[int, float, str, None]

MASK_32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0

# Numerical Recipes LCG constants
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223


def hash_string(value: str) -> int:
    """sdbm hash of a string, truncated to 32 bits."""
    h = 0
    for ch in value:
        h = (ord(ch) + (h << 6) + (h << 16) - h) & MASK_32
    return h


def mix32(value: int) -> int:
    """murmur3 finalizer: spread nearby seeds across the state space."""
    h = value & MASK_32
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & MASK_32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & MASK_32
    h ^= h >> 16
    return h


def normalize_seed(*values: SeedValue) -> Optional[int]:
    """
    Combine seed values into a single 32-bit integer.

    Earlier values weigh more: value i contributes (len(values) - i) * v.
    Returns None when no usable value was given.
    """
    usable = False
    total = 0
    count = len(values)
    for i, value in enumerate(values):
        if value is None:
            continue
        if isinstance(value, bool):
            seedling = int(value)
        elif isinstance(value, str):
            seedling = hash_string(value)
        elif isinstance(value, int):
            seedling = value
        elif isinstance(value, float) and math.isfinite(value):
            seedling = int(value)
        else:
            raise TypeError(
                f"seedforge: Seed must be an int, finite float or str, got {value!r}"
            )
        total += (count - i) * seedling
        usable = True

    if not usable:
        return None
    return total & MASK_32


class Engine:
    """
    Seedable uniform deviate source.

    Two engines seeded alike and driven through the same calls produce
    identical sequences. Not suitable for secrets.
    """

    def __init__(self, *seeds: SeedValue):
        self._state = 0
        self.seed_value: Optional[int] = None
        self.seed(*seeds)

    def seed(self, *values: SeedValue) -> None:
        """Reset state from the given seed values (current time if none)."""
        normalized = normalize_seed(*values)
        if normalized is None:
            normalized = time.time_ns() & MASK_32
            logger.debug(f"Seeding engine from clock: {normalized}")
        else:
            logger.debug(f"Seeding engine with {normalized}")
        self.seed_value = normalized
        self._state = mix32(normalized)

    @property
    def state(self) -> int:
        return self._state

    def getstate(self) -> int:
        return self._state

    def setstate(self, state: int) -> None:
        if not isinstance(state, int) or isinstance(state, bool):
            raise TypeError("seedforge: Engine state must be an int")
        self._state = state & MASK_32

    def next_uint32(self) -> int:
        """Advance one step and return the raw 32-bit state."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) & MASK_32
        return self._state

    def next(self) -> float:
        """Advance one step and return a float in [0, 1)."""
        return self.next_uint32() / TWO_POW_32

    def random(self) -> float:
        return self.next()

    def draws(self, size: int) -> np.ndarray:
        """Return `size` consecutive deviates as a float64 array."""
        if size < 0:
            raise RangeError("seedforge: size cannot be less than zero.")
        return np.fromiter((self.next() for _ in range(size)), dtype=np.float64, count=size)

    def __repr__(self) -> str:
        return f"Engine(seed={self.seed_value}, state={self._state})"


class FunctionSource:
    """
    Wrap a caller-supplied uniform generator (e.g. random.random).

    Output is only as reproducible as the wrapped function.
    """

    def __init__(self, fn: Callable[[], float]):
        if not callable(fn):
            raise TypeError("seedforge: FunctionSource requires a callable")
        self._fn = fn
        self.seed_value: Optional[int] = None

    def seed(self, *values: SeedValue) -> None:
        raise SeedforgeError("seedforge: A function-backed source cannot be reseeded")

    def next(self) -> float:
        value = self._fn()
        if not 0.0 <= value < 1.0:
            raise RangeError(
                f"seedforge: Random source returned {value!r}, expected a value in [0, 1)"
            )
        return value

    def random(self) -> float:
        return self.next()

    def draws(self, size: int) -> np.ndarray:
        if size < 0:
            raise RangeError("seedforge: size cannot be less than zero.")
        return np.fromiter((self.next() for _ in range(size)), dtype=np.float64, count=size)
