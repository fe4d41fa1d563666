"""
Deterministic random source for galaxy generation.

A string seed is hashed with 32-bit FNV-1a and drives a Mulberry32 generator.
All generation code draws through RandomSource so that the triple
(seed, internal_state, call_count) fully describes every future value.
"""

from __future__ import annotations

import math
from typing import List, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

_UINT32 = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def _uint32(n: int) -> int:
    """Convert to unsigned 32-bit integer."""
    return n & _UINT32


def hash_seed(seed: str) -> int:
    """Hash a seed string to an unsigned 32-bit integer using FNV-1a."""
    if not isinstance(seed, str) or not seed:
        raise ValueError("seed must be a non-empty string")

    h = _FNV_OFFSET
    # UTF-16 code units keep hashes stable for non-BMP characters
    data = seed.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _uint32(h * _FNV_PRIME)
    return h


class Mulberry32:
    """
    Mulberry32 generator on an unsigned 32-bit state.

    The state is advanced before every output, so the stored state is
    always the one that produced the most recent value.
    """

    def __init__(self, state: int):
        self.state = _uint32(int(state))

    def next(self) -> float:
        """Generate next random number in [0, 1)."""
        self.state = _uint32(self.state + 0x6D2B79F5)
        s = self.state
        t = _uint32((s ^ (s >> 15)) * (s | 1))
        t = _uint32(t ^ _uint32(t + _uint32((t ^ (t >> 7)) * (t | 61))))
        return _uint32(t ^ (t >> 14)) / 4294967296


class RandomState(BaseModel):
    """Serializable snapshot of a RandomSource."""

    seed: str = Field(min_length=1, description="Original seed string")
    internal_state: int = Field(ge=0, le=_UINT32, description="Generator state")
    call_count: int = Field(ge=0, description="Number of next() calls made")


class RandomSource:
    """
    Seedable random source with resumable state.

    Every logical draw calls next() exactly once, except the degenerate
    cases (next_int with min == max, next_choice on one element) which
    return without drawing.
    """

    def __init__(self, seed: str):
        """Initialize with a non-empty seed string."""
        self.seed = seed
        self._rng = Mulberry32(hash_seed(seed))
        self.call_count = 0

    def next(self) -> float:
        """Generate random float in [0, 1)."""
        self.call_count += 1
        return self._rng.next()

    def next_int(self, min_value: int, max_value: int) -> int:
        """Generate random integer in [min_value, max_value] inclusive."""
        for name, value in (("min_value", min_value), ("max_value", max_value)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")

        if min_value > max_value:
            raise ValueError(f"min ({min_value}) must be <= max ({max_value})")

        if min_value == max_value:
            return min_value

        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def next_bool(self) -> bool:
        """Generate random boolean value."""
        return self.next() < 0.5

    def next_choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not isinstance(seq, Sequence):
            raise TypeError("next_choice requires an ordered sequence")
        if len(seq) == 0:
            raise ValueError("Cannot choose from an empty sequence")
        if len(seq) == 1:
            return seq[0]
        return seq[self.next_int(0, len(seq) - 1)]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of items."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def get_state(self) -> RandomState:
        """Serialize generator state for save/load."""
        return RandomState(
            seed=self.seed,
            internal_state=self._rng.state,
            call_count=self.call_count,
        )

    def set_state(self, state: RandomState) -> None:
        """Restore generator state from a snapshot."""
        if not isinstance(state, RandomState):
            state = RandomState.model_validate(state)

        self.seed = state.seed
        self._rng = Mulberry32(state.internal_state)
        self.call_count = state.call_count

    @classmethod
    def from_state(cls, state: RandomState) -> RandomSource:
        """Create a source that continues from a saved snapshot."""
        if not isinstance(state, RandomState):
            state = RandomState.model_validate(state)
        source = cls(state.seed)
        source.set_state(state)
        return source
