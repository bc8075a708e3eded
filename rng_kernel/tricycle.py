"""
RNG Kernel — TricycleRandom v1.0

Three-word generator, tag "TriR". Every 192-bit pattern is a valid state.

Forward step (returns the old state A):
    A' = M * C
    B' = A ^ B ^ C
    C' = rotl(B, 41) + K

Every operation has an exact inverse (M is odd, so M * M_inv == 1 mod 2**64),
which is what makes previous_ulong() possible. There is no closed-form
jump, so skip() is refused.
"""

from __future__ import annotations

from typing import ClassVar

from .constants import (
    TRICYCLE_INCREMENT,
    TRICYCLE_MULTIPLIER,
    TRICYCLE_MULTIPLIER_INVERSE,
    TRICYCLE_ROTATION,
)
from .domain_types import MASK64, GeneratorCapabilities, rotate_left, rotate_right, to_word
from .generator import AbstractRandom


class TricycleRandom(AbstractRandom):
    """
    Invertible three-state generator.

    If state A has just been set verbatim, the next call to next_ulong()
    returns it as-is; later outputs are well mixed.
    """

    TAG: ClassVar[str] = "TriR"
    STATE_COUNT: ClassVar[int] = 3
    CAPABILITIES: ClassVar[GeneratorCapabilities] = GeneratorCapabilities(
        supports_read_access=True,
        supports_write_access=True,
        supports_skip=False,
        supports_previous=True,
    )

    # -- Named state words --------------------------------------------------

    @property
    def state_a(self) -> int:
        return self._state[0]

    @state_a.setter
    def state_a(self, value: int) -> None:
        self._state[0] = to_word(value)

    @property
    def state_b(self) -> int:
        return self._state[1]

    @state_b.setter
    def state_b(self, value: int) -> None:
        self._state[1] = to_word(value)

    @property
    def state_c(self) -> int:
        return self._state[2]

    @state_c.setter
    def state_c(self, value: int) -> None:
        self._state[2] = to_word(value)

    # -- Transitions --------------------------------------------------------

    def _next_word(self) -> int:
        fa, fb, fc = self._state
        self._state[0] = (TRICYCLE_MULTIPLIER * fc) & MASK64
        self._state[1] = fa ^ fb ^ fc
        self._state[2] = (rotate_left(fb, TRICYCLE_ROTATION) + TRICYCLE_INCREMENT) & MASK64
        return fa

    def previous_ulong(self) -> int:
        na, nb, nc = self._state
        c = (TRICYCLE_MULTIPLIER_INVERSE * na) & MASK64
        b = rotate_right((nc - TRICYCLE_INCREMENT) & MASK64, TRICYCLE_ROTATION)
        a = nb ^ b ^ c
        self._state = [a, b, c]
        return a
