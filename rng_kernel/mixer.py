"""
RNG Kernel — Bit-Mixer v1.0

Bijective avalanche function used to spread a single seed across every
state word. Pure functions, no hidden entropy.

mix(w) = avalanche(w + GOLDEN_GAMMA), where avalanche is
xorshift 27, multiply, xorshift 33, multiply, xorshift 27.
Each round is invertible, so unmix() recovers the input exactly.
"""

from __future__ import annotations

from typing import List

from .constants import (
    GOLDEN_GAMMA,
    MIX_MULTIPLIER_1,
    MIX_MULTIPLIER_1_INVERSE,
    MIX_MULTIPLIER_2,
    MIX_MULTIPLIER_2_INVERSE,
    MIX_SHIFT_1,
    MIX_SHIFT_2,
    MIX_SHIFT_3,
)
from .domain_types import MASK64, WORD_BITS


def mix(word: int) -> int:
    """Map one 64-bit word to a well-distributed 64-bit word."""
    x = (word + GOLDEN_GAMMA) & MASK64
    x ^= x >> MIX_SHIFT_1
    x = (x * MIX_MULTIPLIER_1) & MASK64
    x ^= x >> MIX_SHIFT_2
    x = (x * MIX_MULTIPLIER_2) & MASK64
    return x ^ (x >> MIX_SHIFT_3)


def unmix(word: int) -> int:
    """Exact inverse of mix()."""
    x = _unxorshift_right(word & MASK64, MIX_SHIFT_3)
    x = (x * MIX_MULTIPLIER_2_INVERSE) & MASK64
    x = _unxorshift_right(x, MIX_SHIFT_2)
    x = (x * MIX_MULTIPLIER_1_INVERSE) & MASK64
    x = _unxorshift_right(x, MIX_SHIFT_1)
    return (x - GOLDEN_GAMMA) & MASK64


def seed_words(seed: int, count: int) -> List[int]:
    """
    Derive count state words from one seed.

    Word i is mix(seed + i * GOLDEN_GAMMA). Word 0 is mix(seed), so
    distinct seeds always give distinct first words.
    """
    seed &= MASK64
    return [mix(seed + i * GOLDEN_GAMMA) for i in range(count)]


def _unxorshift_right(value: int, shift: int) -> int:
    """Invert value ^= value >> shift."""
    result = value
    applied = shift
    while applied < WORD_BITS:
        result = value ^ (result >> shift)
        applied += shift
    return result
