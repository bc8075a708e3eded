"""
RNG Kernel — Canonical Hashing v1.0

Deterministic canonical serialization + SHA-256 hashing of generator state.
Two generators hash equal iff they have the same tag and state words,
which makes the hash a compact determinism fingerprint for replay checks.
"""

from __future__ import annotations

import hashlib

from .generator import AbstractRandom


def canonical_serialize(generator: AbstractRandom) -> bytes:
    """UTF-8 bytes of the generator's string serialization."""
    return generator.string_serialize().encode("utf-8")


def state_hash(generator: AbstractRandom) -> str:
    """SHA-256 of canonical serialization. Lowercase hex string."""
    return hashlib.sha256(canonical_serialize(generator)).hexdigest()
