# file: rng_kernel/test_serialization.py
"""
RNG Kernel — Serialization / Registry Tests

Deterministic tests:
  1-3:   Encode format and round trips
  4-8:   Malformed input rejection
  9-13:  Registry lookup, overwrite, unknown tags
  14:    State hash stability

Run:  py -3 -m rng_kernel.test_serialization
"""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rng_kernel.distinct import DistinctRandom
from rng_kernel.domain_types import MASK64
from rng_kernel.errors import (
    MalformedStateError,
    SerializationError,
    UnknownTagError,
)
from rng_kernel.hashing import canonical_serialize, state_hash
from rng_kernel.registry import GeneratorRegistry, register_builtin_generators
from rng_kernel.serialization import decode_words, encode_state, parse_tag
from rng_kernel.tricycle import TricycleRandom


def _header(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def _expect(exc_type, fn, *args) -> Exception:
    try:
        fn(*args)
    except exc_type as exc:
        return exc
    raise AssertionError(f"{fn.__name__}{args} did not raise {exc_type.__name__}")


def _registry() -> GeneratorRegistry:
    return register_builtin_generators(GeneratorRegistry())


# ══════════════════════════════════════════════════════════════
# Format and round trips (1 – 3)
# ══════════════════════════════════════════════════════════════

def test_01_exact_format() -> None:
    """#TriR`A~B~C` with unpadded uppercase hex."""
    _header("Test 01 -- Exact text format")
    g = TricycleRandom.from_state(0xA, 0xBEEF, 0)
    assert g.string_serialize() == "#TriR`A~BEEF~0`"
    assert DistinctRandom.from_state(MASK64).string_serialize() == "#DisR`FFFFFFFFFFFFFFFF`"
    assert encode_state("X", [1, 2]) == "#X`1~2`"
    print("  [PASS]")


def test_02_registry_round_trip() -> None:
    """deserialize(g.string_serialize()) == g for every registered type."""
    _header("Test 02 -- Registry round trip")
    registry = _registry()
    for tag in registry.tags():
        for seed in (0, 1, -1, 2**63, 123456789):
            g = registry.create(tag, seed)
            for _ in range(seed % 5):
                g.next_ulong()
            text = g.string_serialize()
            back = registry.deserialize(text)
            assert back == g, f"{tag}: {text} did not round-trip"
            assert type(back) is type(g)
            assert back.string_serialize() == text
    print("  [PASS]")


def test_03_deserialize_into_instance() -> None:
    """string_deserialize overwrites and returns self; lowercase hex accepted."""
    _header("Test 03 -- string_deserialize into instance")
    g = TricycleRandom(1)
    same = g.string_deserialize("#TriR`ff~0~DeadBeef`")
    assert same is g
    assert g.state == (0xFF, 0, 0xDEADBEEF)
    print("  [PASS]")


# ══════════════════════════════════════════════════════════════
# Malformed input (4 – 8)
# ══════════════════════════════════════════════════════════════

def test_04_wrong_word_count() -> None:
    _header("Test 04 -- Wrong word count")
    g = TricycleRandom(3)
    before = g.state
    _expect(MalformedStateError, g.string_deserialize, "#TriR`1~2`")
    _expect(MalformedStateError, g.string_deserialize, "#TriR`1~2~3~4`")
    _expect(MalformedStateError, g.string_deserialize, "#TriR``")
    assert g.state == before, "failed deserialize mutated state"
    print("  [PASS]")


def test_05_non_hex_payload() -> None:
    _header("Test 05 -- Non-hex payload")
    for text in (
        "#TriR`1~2~XYZ`",
        "#TriR`1~-2~3`",
        "#TriR`0x1~2~3`",
        "#TriR`1_0~2~3`",
        "#TriR`1~~3`",
        "#TriR`10000000000000000~2~3`",
        "#TriR`1~2~3\n`",
        "#TriR`1\n~2~3`",
        "#TriR` 1~2~3`",
    ):
        _expect(MalformedStateError, decode_words, text, 3)
    g = TricycleRandom(0)
    before = g.state
    _expect(MalformedStateError, g.string_deserialize, "#TriR`1~2~3\n`")
    _expect(MalformedStateError, g.string_deserialize, "#TriR`1~2~3`\n")
    assert g.state == before
    print("  [PASS]")


def test_06_bad_delimiters() -> None:
    _header("Test 06 -- Bad delimiters")
    for text in ("TriR`1~2~3`", "#TriR1~2~3", "#TriR`1~2~3", "#TriR`1~2~3`junk", "#`1~2~3`", ""):
        _expect(MalformedStateError, TricycleRandom(0).string_deserialize, text)
    print("  [PASS]")


def test_07_wrong_concrete_type() -> None:
    """Deserializing another type's text into an instance fails."""
    _header("Test 07 -- Wrong concrete type")
    text = DistinctRandom(9).string_serialize()
    exc = _expect(MalformedStateError, TricycleRandom(0).string_deserialize, text)
    assert "DisR" in str(exc)
    print("  [PASS]")


def test_08_parse_tag() -> None:
    _header("Test 08 -- parse_tag")
    assert parse_tag("#TriR`1~2~3`") == "TriR"
    assert parse_tag("#DisR`0`") == "DisR"
    _expect(MalformedStateError, parse_tag, 42)
    _expect(MalformedStateError, encode_state, "bad tag", [1])
    _expect(MalformedStateError, parse_tag, "#TriR\n`1~2~3`")
    _expect(MalformedStateError, encode_state, "TriR\n", [1])
    assert issubclass(MalformedStateError, SerializationError)
    print("  [PASS]")


# ══════════════════════════════════════════════════════════════
# Registry (9 – 13)
# ══════════════════════════════════════════════════════════════

def test_09_unknown_tag() -> None:
    _header("Test 09 -- Unknown tag")
    registry = _registry()
    exc = _expect(UnknownTagError, registry.deserialize, "#NoSuch`1`")
    assert exc.tag == "NoSuch"
    _expect(UnknownTagError, registry.get, "NoSuch")
    _expect(UnknownTagError, GeneratorRegistry().deserialize, "#TriR`1~2~3`")
    print("  [PASS]")


def test_10_last_registration_wins() -> None:
    """A second prototype for the same tag is the one deserialize uses."""
    _header("Test 10 -- Last registration wins")

    class AuditedTricycle(TricycleRandom):
        pass

    registry = _registry()
    previous = registry.register(AuditedTricycle.from_state(0, 0, 0))
    assert type(previous) is TricycleRandom
    g = registry.deserialize("#TriR`1~2~3`")
    assert type(g) is AuditedTricycle
    assert g.state == (1, 2, 3)
    assert len(registry) == 2
    print("  [PASS]")


def test_11_registry_returns_copies() -> None:
    """Prototypes are never handed out or shared."""
    _header("Test 11 -- Registry hands out copies")
    registry = _registry()
    a = registry.get("TriR")
    a.next_ulong()
    b = registry.get("TriR")
    assert b == TricycleRandom.from_state(1, 1, 1)
    assert a is not b
    print("  [PASS]")


def test_12_create_and_tags() -> None:
    _header("Test 12 -- create() and tags()")
    registry = _registry()
    assert registry.tags() == ["DisR", "TriR"]
    assert "TriR" in registry and "Nope" not in registry
    assert registry.create("TriR", 77) == TricycleRandom(77)
    assert registry.create("DisR", 77) == DistinctRandom(77)
    print("  [PASS]")


def test_13_unregister() -> None:
    _header("Test 13 -- unregister()")
    registry = _registry()
    removed = registry.unregister("DisR")
    assert type(removed) is DistinctRandom
    assert "DisR" not in registry
    _expect(UnknownTagError, registry.unregister, "DisR")
    print("  [PASS]")


# ══════════════════════════════════════════════════════════════
# Hashing (14)
# ══════════════════════════════════════════════════════════════

def test_14_state_hash() -> None:
    _header("Test 14 -- State hash")
    g = TricycleRandom(11)
    h1 = state_hash(g)
    assert h1 == state_hash(g.copy())
    assert len(h1) == 64 and h1 == h1.lower()
    assert canonical_serialize(g) == g.string_serialize().encode("utf-8")
    g.next_ulong()
    assert state_hash(g) != h1
    g.previous_ulong()
    assert state_hash(g) == h1
    print(f"  SHA-256 = {h1}")
    print("  [PASS]")


# ══════════════════════════════════════════════════════════════
# Runner
# ══════════════════════════════════════════════════════════════

def main() -> None:
    tests = [
        test_01_exact_format,
        test_02_registry_round_trip,
        test_03_deserialize_into_instance,
        test_04_wrong_word_count,
        test_05_non_hex_payload,
        test_06_bad_delimiters,
        test_07_wrong_concrete_type,
        test_08_parse_tag,
        test_09_unknown_tag,
        test_10_last_registration_wins,
        test_11_registry_returns_copies,
        test_12_create_and_tags,
        test_13_unregister,
        test_14_state_hash,
    ]
    results = []
    for fn in tests:
        try:
            fn()
            results.append(True)
        except Exception as e:
            print(f"\n[ERROR] {fn.__name__}: {e}")
            import traceback
            traceback.print_exc()
            results.append(False)

    passed = sum(results)
    total = len(results)
    print(f"\n{'='*60}")
    print(f"  RESULTS: {passed}/{total} tests passed")
    print(f"{'='*60}")
    sys.exit(0 if all(results) else 1)


if __name__ == "__main__":
    main()
