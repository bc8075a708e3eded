"""
RNG Kernel — Core Domain Types v1.0

Pure data and 64-bit word arithmetic. No generator logic.
Every state word is an unsigned 64-bit integer; Python ints are masked
after every operation that could leave that range.

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

State word:
    One unsigned 64-bit integer composing a generator's internal state.

Jump-ahead / Skip:
    Moving a generator's state by many steps without producing the
    intermediate outputs.

Tag:
    Short string identifying a concrete generator type for serialization
    and registry lookup.

────────────────────────────────────────────────
"""

from __future__ import annotations

from dataclasses import dataclass


# ── Word Width ────────────────────────────────────────────────
WORD_BITS: int = 64
MASK64: int = (1 << WORD_BITS) - 1
MASK32: int = (1 << 32) - 1

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


# ── Word Arithmetic ───────────────────────────────────────────

def to_word(value: int) -> int:
    """Reduce any int to an unsigned 64-bit word (two's complement for negatives)."""
    return value & MASK64


def to_signed64(word: int) -> int:
    """Reinterpret an unsigned 64-bit word as a signed int64."""
    word &= MASK64
    return word - (1 << 64) if word > _INT64_MAX else word


def to_signed32(value: int) -> int:
    """Reinterpret the low 32 bits of value as a signed int32."""
    value &= MASK32
    return value - (1 << 32) if value > _INT32_MAX else value


def rotate_left(word: int, amount: int) -> int:
    amount &= WORD_BITS - 1
    word &= MASK64
    return ((word << amount) | (word >> (WORD_BITS - amount))) & MASK64


def rotate_right(word: int, amount: int) -> int:
    amount &= WORD_BITS - 1
    word &= MASK64
    return ((word >> amount) | (word << (WORD_BITS - amount))) & MASK64


def mod_inverse64(constant: int) -> int:
    """
    Multiplicative inverse of an odd constant modulo 2**64.
    Hard fail on even constants, which have no inverse.
    """
    if constant & 1 == 0:
        raise ValueError(f"Constant {constant:#x} is even and has no inverse mod 2**64")
    return pow(constant, -1, 1 << WORD_BITS)


# ── Capabilities ──────────────────────────────────────────────

@dataclass(frozen=True)
class GeneratorCapabilities:
    """
    Fixed per algorithm. Callers query these before invoking an optional
    operation; invoking an unsupported one raises UnsupportedOperationError.
    """

    supports_read_access: bool = True
    supports_write_access: bool = True
    supports_skip: bool = False
    supports_previous: bool = False

    def to_dict(self) -> dict:
        return {
            "supports_read_access": self.supports_read_access,
            "supports_write_access": self.supports_write_access,
            "supports_skip": self.supports_skip,
            "supports_previous": self.supports_previous,
        }


# ── Integer Output Ranges ─────────────────────────────────────

@dataclass(frozen=True)
class IntegerRange:
    """Closed range of values an integer output family can take."""

    name: str
    min_value: int
    max_value: int

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value


ULONG_RANGE = IntegerRange("ulong", 0, MASK64)
LONG_RANGE = IntegerRange("long", _INT64_MIN, _INT64_MAX)
UINT_RANGE = IntegerRange("uint", 0, MASK32)
INT_RANGE = IntegerRange("int", _INT32_MIN, _INT32_MAX)
