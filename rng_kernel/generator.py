"""
RNG Kernel — Generator Core v1.0

AbstractRandom is the uniform-stream contract every generator implements.
Concrete generators provide _next_word(), one raw transition (and optionally
previous_ulong() and skip()); every other output is derived here from it.

Bounded integer conventions:
  - next_X()               full range of type X
  - next_X(bound)          same as next_X(0, bound)
  - next_X(inner, outer)   [inner, outer) when inner <= outer,
                           (outer, inner] when outer < inner
  - Empty ranges (inner == outer) return inner after consuming one step.
  - Bounds outside the range of type X raise InvalidParameterError, so the
    unsigned families reject negative bounds.

Floating outputs scale a unit value u by the same rule:
inner + (outer - inner) * u.

Instances are NOT thread-safe. Share one across threads only behind
external locking.

Equality and hash follow the current state words, so the hash changes with
every draw. Do not keep a generator in a set or as a dict key while drawing
from it; key on hashing.state_hash(generator) or string_serialize() instead.
"""

from __future__ import annotations

import secrets
from typing import ClassVar, List, Optional, Tuple

from .constants import DOUBLE_UNIT, FLOAT_UNIT
from .domain_types import (
    INT_RANGE,
    LONG_RANGE,
    MASK64,
    UINT_RANGE,
    ULONG_RANGE,
    GeneratorCapabilities,
    IntegerRange,
    to_signed32,
    to_signed64,
    to_word,
)
from .errors import InvalidParameterError, MalformedStateError, UnsupportedOperationError
from .math_utils import probit
from .mixer import seed_words
from .serialization import decode_words, encode_state, parse_tag

_EXCLUSIVE_DOUBLE_UNIT = 2.0 ** -52
_EXCLUSIVE_FLOAT_UNIT = 2.0 ** -23


class AbstractRandom:
    """
    Base for all generators. State is a fixed-length list of 64-bit words.

    Construct with a seed (expanded through the Bit-Mixer), with no
    argument (OS entropy), or verbatim via from_state().
    """

    TAG: ClassVar[str] = ""
    STATE_COUNT: ClassVar[int] = 0
    CAPABILITIES: ClassVar[GeneratorCapabilities] = GeneratorCapabilities()

    def __init__(self, seed: Optional[int] = None) -> None:
        self._state: List[int] = [0] * self.STATE_COUNT
        if seed is None:
            self._state = [secrets.randbits(64) for _ in range(self.STATE_COUNT)]
        else:
            self.seed(seed)

    @classmethod
    def from_state(cls, *words: int):
        """Build an instance whose state words are exactly the given values."""
        if len(words) != cls.STATE_COUNT:
            raise InvalidParameterError(
                "words",
                f"{cls.__name__} needs {cls.STATE_COUNT} state words, got {len(words)}",
            )
        instance = cls.__new__(cls)
        instance._state = [to_word(w) for w in words]
        return instance

    # -- Capabilities -------------------------------------------------------

    @property
    def tag(self) -> str:
        return self.TAG

    @property
    def state_count(self) -> int:
        return self.STATE_COUNT

    @property
    def supports_read_access(self) -> bool:
        return self.CAPABILITIES.supports_read_access

    @property
    def supports_write_access(self) -> bool:
        return self.CAPABILITIES.supports_write_access

    @property
    def supports_skip(self) -> bool:
        return self.CAPABILITIES.supports_skip

    @property
    def supports_previous(self) -> bool:
        return self.CAPABILITIES.supports_previous

    # -- State access -------------------------------------------------------

    @property
    def state(self) -> Tuple[int, ...]:
        """Immutable snapshot of every state word."""
        return tuple(self._state)

    def seed(self, seed: int) -> None:
        """Reinitialize every state word from seed via the Bit-Mixer."""
        self._state = seed_words(seed, self.STATE_COUNT)

    def select_state(self, selection: int) -> int:
        """
        Return the state word at index selection.

        Any index outside [0, state_count) selects the last word; this is
        the documented recovery behavior, not an error.
        """
        if not self.supports_read_access:
            raise UnsupportedOperationError("select_state")
        return self._state[self._resolve_index(selection)]

    def set_selected_state(self, selection: int, value: int) -> None:
        """Replace one state word. Out-of-range selections write the last word."""
        if not self.supports_write_access:
            raise UnsupportedOperationError("set_selected_state")
        self._state[self._resolve_index(selection)] = to_word(value)

    def set_state(self, *values: int) -> None:
        """
        Assign values to state words cyclically: word i gets
        values[i % len(values)]. Extra values are ignored.
        """
        if not self.supports_write_access:
            raise UnsupportedOperationError("set_state")
        if not values:
            raise InvalidParameterError("values", "set_state needs at least one value")
        count = len(values)
        for i in range(self.STATE_COUNT):
            self._state[i] = to_word(values[i % count])

    def _resolve_index(self, selection: int) -> int:
        if 0 <= selection < self.STATE_COUNT:
            return selection
        return self.STATE_COUNT - 1

    # -- Copy / serialization -----------------------------------------------

    def copy(self):
        """Independent generator with identical state and capabilities."""
        return type(self).from_state(*self._state)

    def string_serialize(self) -> str:
        return encode_state(self.TAG, self._state)

    def string_deserialize(self, data: str):
        """
        Overwrite this generator's state from serialized text and return self.
        Text for another generator type is rejected without mutation.
        """
        tag = parse_tag(data)
        if tag != self.TAG:
            raise MalformedStateError(
                f"Tag {tag!r} does not match {type(self).__name__} (tag {self.TAG!r})"
            )
        self._state = decode_words(data, self.STATE_COUNT)
        return self

    # -- Equality -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractRandom):
            return NotImplemented
        return type(self) is type(other) and self._state == other._state

    def __hash__(self) -> int:
        """Hash of the current state; changes whenever the state advances."""
        return hash((type(self).__name__, tuple(self._state)))

    def __repr__(self) -> str:
        words = ", ".join(f"0x{w:016X}" for w in self._state)
        return f"{type(self).__name__}.from_state({words})"

    # -- Raw stepping -------------------------------------------------------

    def _next_word(self) -> int:
        """Advance exactly one transition and return the raw 64-bit output."""
        raise NotImplementedError

    def previous_ulong(self) -> int:
        """
        Undo the most recent next_ulong(): restore the state it started from
        and return the value it produced.
        """
        raise UnsupportedOperationError(
            "previous_ulong", f"{type(self).__name__} cannot step backwards"
        )

    def skip(self, distance: int) -> int:
        """
        Move the state by distance steps (negative rewinds) without producing
        the intermediate outputs. Returns the output of the step that produced
        the new state, as if next_ulong() had been called distance times.
        """
        raise UnsupportedOperationError(
            "skip", f"{type(self).__name__} has no closed-form jump"
        )

    # -- Integer outputs ----------------------------------------------------

    def next_bits(self, bits: int) -> int:
        """The top bits (1..64) of one output."""
        if not 1 <= bits <= 64:
            raise InvalidParameterError("bits", f"must be in [1, 64], got {bits}")
        return self._next_word() >> (64 - bits)

    def next_bool(self) -> bool:
        return self._next_word() >> 63 == 1

    def next_bytes(self, count: int) -> bytes:
        if count < 0:
            raise InvalidParameterError("count", f"must be non-negative, got {count}")
        out = bytearray()
        while len(out) < count:
            out += self._next_word().to_bytes(8, "little")
        return bytes(out[:count])

    def next_ulong(self, inner_bound: Optional[int] = None, outer_bound: Optional[int] = None) -> int:
        """Advance one step; unsigned 64-bit output, optionally bounded."""
        if inner_bound is None and outer_bound is None:
            return self._next_word()
        return self._next_bounded(ULONG_RANGE, inner_bound, outer_bound)

    def next_long(self, inner_bound: Optional[int] = None, outer_bound: Optional[int] = None) -> int:
        if inner_bound is None and outer_bound is None:
            return to_signed64(self._next_word())
        return self._next_bounded(LONG_RANGE, inner_bound, outer_bound)

    def next_uint(self, inner_bound: Optional[int] = None, outer_bound: Optional[int] = None) -> int:
        if inner_bound is None and outer_bound is None:
            return self._next_word() >> 32
        return self._next_bounded(UINT_RANGE, inner_bound, outer_bound)

    def next_int(self, inner_bound: Optional[int] = None, outer_bound: Optional[int] = None) -> int:
        if inner_bound is None and outer_bound is None:
            return to_signed32(self._next_word() >> 32)
        return self._next_bounded(INT_RANGE, inner_bound, outer_bound)

    def _next_bounded(
        self,
        family: IntegerRange,
        inner_bound: Optional[int],
        outer_bound: Optional[int],
    ) -> int:
        if outer_bound is None:
            inner_bound, outer_bound = 0, inner_bound
        elif inner_bound is None:
            inner_bound = 0
        for name, value in (("inner_bound", inner_bound), ("outer_bound", outer_bound)):
            if not family.contains(value):
                raise InvalidParameterError(
                    name,
                    f"{value} is outside the {family.name} range "
                    f"[{family.min_value}, {family.max_value}]",
                )
        if inner_bound <= outer_bound:
            return inner_bound + self._next_below(outer_bound - inner_bound)
        return inner_bound - self._next_below(inner_bound - outer_bound)

    def _next_below(self, n: int) -> int:
        """
        Uniform int in [0, n) by Lemire's multiply-shift with rejection.
        Unbiased for every n up to 2**64. n == 0 yields 0.
        """
        m = self._next_word() * n
        low = m & MASK64
        if low < n:
            threshold = ((1 << 64) - n) % n
            while low < threshold:
                m = self._next_word() * n
                low = m & MASK64
        return m >> 64

    # -- Floating outputs ---------------------------------------------------

    def next_double(self, inner_bound: Optional[float] = None, outer_bound: Optional[float] = None) -> float:
        """[0, 1) with 53 bits of precision, then scaled by the bounds."""
        unit = (self._next_word() >> 11) * DOUBLE_UNIT
        return _scale(unit, inner_bound, outer_bound)

    def next_inclusive_double(self, inner_bound: Optional[float] = None, outer_bound: Optional[float] = None) -> float:
        """[0, 1], both endpoints reachable."""
        unit = self._next_below((1 << 53) + 1) * DOUBLE_UNIT
        return _scale(unit, inner_bound, outer_bound)

    def next_exclusive_double(self, inner_bound: Optional[float] = None, outer_bound: Optional[float] = None) -> float:
        """(0, 1), neither endpoint reachable."""
        unit = ((self._next_word() >> 12) + 0.5) * _EXCLUSIVE_DOUBLE_UNIT
        return _scale(unit, inner_bound, outer_bound)

    def next_float(self, inner_bound: Optional[float] = None, outer_bound: Optional[float] = None) -> float:
        """[0, 1) on the 24-bit single-precision grid."""
        unit = (self._next_word() >> 40) * FLOAT_UNIT
        return _scale(unit, inner_bound, outer_bound)

    def next_inclusive_float(self, inner_bound: Optional[float] = None, outer_bound: Optional[float] = None) -> float:
        unit = self._next_below((1 << 24) + 1) * FLOAT_UNIT
        return _scale(unit, inner_bound, outer_bound)

    def next_exclusive_float(self, inner_bound: Optional[float] = None, outer_bound: Optional[float] = None) -> float:
        unit = ((self._next_word() >> 41) + 0.5) * _EXCLUSIVE_FLOAT_UNIT
        return _scale(unit, inner_bound, outer_bound)

    def next_normal(self, mean: float = 0.0, std_dev: float = 1.0) -> float:
        """Normally distributed value; one step per call."""
        return probit(self.next_exclusive_double()) * std_dev + mean


def _scale(unit: float, inner_bound: Optional[float], outer_bound: Optional[float]) -> float:
    if inner_bound is None and outer_bound is None:
        return unit
    if outer_bound is None:
        return unit * inner_bound
    if inner_bound is None:
        inner_bound = 0.0
    return inner_bound + (outer_bound - inner_bound) * unit
