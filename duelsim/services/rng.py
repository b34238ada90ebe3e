"""Deterministic random number generation for duel simulations.

Every simulated sample must be reproducible from a seed, and independent
streams (per round, per Monte Carlo sample, per duel direction) are forked
from a master seed with derive_seed() rather than by sharing a generator.

Usage:
    rng = DeterministicRng(derive_seed("match", 12345))
    sub = DeterministicRng(derive_seed("round", 12345, round_index))
"""

import hashlib
import math
from typing import Any

MASK_64 = 0xFFFFFFFFFFFFFFFF

# Zero is a fixed point of xorshift, so it is remapped.
ZERO_SEED_REPLACEMENT = 0x9E3779B97F4A7C15
XORSHIFT_MULTIPLIER = 0x2545F4914F6CDD1D

# Keeps log() finite in Box-Muller
MIN_UNIFORM_FOR_LOG = 1e-7


def derive_seed(*parts: Any) -> int:
    """Derive a stable 64-bit seed from an ordered list of labeled values.

    The parts are joined as strings with "|", hashed with SHA-256 and the
    first 8 bytes are read as a little-endian unsigned integer. Any change to
    this byte layout changes every downstream simulation result.
    """
    joined = "|".join(str(p) for p in parts)
    digest = hashlib.sha256(joined.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


class DeterministicRng:
    """xorshift64* generator owning a single 64-bit state word.

    Not thread-safe. Give each worker its own instance seeded via
    derive_seed().
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int):
        seed &= MASK_64
        self._state = ZERO_SEED_REPLACEMENT if seed == 0 else seed

    @property
    def state(self) -> int:
        return self._state

    def next_u64(self) -> int:
        x = self._state
        x ^= x >> 12
        x ^= (x << 25) & MASK_64
        x ^= x >> 27
        self._state = x
        return (x * XORSHIFT_MULTIPLIER) & MASK_64

    def next_uniform01(self) -> float:
        """Float in [0, 1) built from the top 53 bits of next_u64()."""
        return (self.next_u64() >> 11) / float(1 << 53)

    def next_normal(self, mean: float, stddev: float) -> float:
        """Normal sample via Box-Muller over two uniform draws."""
        u1 = max(MIN_UNIFORM_FOR_LOG, self.next_uniform01())
        u2 = self.next_uniform01()
        z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return mean + stddev * z0

    def fork(self, *labels: Any) -> "DeterministicRng":
        """New independent generator seeded from labels and one draw of this one."""
        return DeterministicRng(derive_seed(*labels, self.next_u64()))
