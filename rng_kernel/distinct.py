"""
RNG Kernel — DistinctRandom v1.0

One-word counter generator, tag "DisR". The state walks a Weyl sequence
(state += GOLDEN_GAMMA each step) and each output is the Bit-Mixer applied
to the new counter. Since the mixer is a bijection, every output appears
exactly once per 2**64-step period.

Stepping by n is a single multiply-add, so skip() is O(1) in both
directions.
"""

from __future__ import annotations

from typing import ClassVar

from .constants import GOLDEN_GAMMA
from .domain_types import MASK64, GeneratorCapabilities
from .generator import AbstractRandom
from .mixer import mix


class DistinctRandom(AbstractRandom):
    """Counter-based generator with constant-time skip and previous."""

    TAG: ClassVar[str] = "DisR"
    STATE_COUNT: ClassVar[int] = 1
    CAPABILITIES: ClassVar[GeneratorCapabilities] = GeneratorCapabilities(
        supports_read_access=True,
        supports_write_access=True,
        supports_skip=True,
        supports_previous=True,
    )

    def _next_word(self) -> int:
        counter = (self._state[0] + GOLDEN_GAMMA) & MASK64
        self._state[0] = counter
        return mix(counter)

    def previous_ulong(self) -> int:
        counter = self._state[0]
        self._state[0] = (counter - GOLDEN_GAMMA) & MASK64
        return mix(counter)

    def skip(self, distance: int) -> int:
        counter = (self._state[0] + GOLDEN_GAMMA * distance) & MASK64
        self._state[0] = counter
        return mix(counter)

