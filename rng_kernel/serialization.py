# file: rng_kernel/serialization.py
"""
RNG Kernel — State Text Encoder / Decoder v1.0

Format:  #<tag>`<word0>~<word1>~...~<wordN-1>`

Rules:
  - Tag follows '#' and runs up to the first backtick.
  - Words are uppercase hexadecimal, unpadded, separated by '~'.
  - The payload ends at the next backtick; nothing may follow it.
  - Each word is 1-16 hex digits. No sign, no '0x', no underscores.
  - Word count must equal the target generator's state count.
  - No mutation. Decoding only returns values.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from .domain_types import MASK64
from .errors import MalformedStateError


TAG_PREFIX = "#"
PAYLOAD_DELIMITER = "`"
WORD_SEPARATOR = "~"

_HEX_WORD = re.compile(r"[0-9A-Fa-f]{1,16}")
_TAG_PATTERN = re.compile(r"[^#`~\s]+")


# ══════════════════════════════════════════════════════════════
# Encoder
# ══════════════════════════════════════════════════════════════

def encode_state(tag: str, words: Sequence[int]) -> str:
    """Serialize a tag and its state words. Byte-identical for identical input."""
    validate_tag(tag)
    body = WORD_SEPARATOR.join(f"{w & MASK64:X}" for w in words)
    return f"{TAG_PREFIX}{tag}{PAYLOAD_DELIMITER}{body}{PAYLOAD_DELIMITER}"


def validate_tag(tag: str) -> None:
    """Hard fail on empty tags or tags containing delimiter characters."""
    if not isinstance(tag, str) or not _TAG_PATTERN.fullmatch(tag):
        raise MalformedStateError(
            f"Invalid tag {tag!r}: must be non-empty and free of '#', '`', '~' and whitespace"
        )


# ══════════════════════════════════════════════════════════════
# Decoder
# ══════════════════════════════════════════════════════════════

def parse_tag(text: str) -> str:
    """Extract the leading tag from serialized state text."""
    if not isinstance(text, str):
        raise MalformedStateError(
            f"Serialized state must be str, got {type(text).__name__}"
        )
    if not text.startswith(TAG_PREFIX):
        raise MalformedStateError(
            f"Serialized state must start with {TAG_PREFIX!r}: {text[:32]!r}"
        )
    end = text.find(PAYLOAD_DELIMITER)
    if end == -1:
        raise MalformedStateError(f"Missing opening backtick: {text[:32]!r}")
    tag = text[1:end]
    validate_tag(tag)
    return tag


def decode_words(text: str, expected_count: int) -> List[int]:
    """
    Strict decoding of the word payload.

    Fails on: missing delimiters, trailing text, non-hex words,
    words wider than 64 bits, word count != expected_count.
    """
    parse_tag(text)
    start = text.index(PAYLOAD_DELIMITER)
    end = text.find(PAYLOAD_DELIMITER, start + 1)
    if end == -1:
        raise MalformedStateError(f"Missing closing backtick: {text[:48]!r}")
    if end != len(text) - 1:
        raise MalformedStateError(
            f"Unexpected text after closing backtick: {text[end + 1:][:32]!r}"
        )

    body = text[start + 1:end]
    raw_words = body.split(WORD_SEPARATOR) if body else []
    if len(raw_words) != expected_count:
        raise MalformedStateError(
            f"Expected {expected_count} state words, got {len(raw_words)}"
        )

    words: List[int] = []
    for i, raw in enumerate(raw_words):
        if not _HEX_WORD.fullmatch(raw):
            raise MalformedStateError(
                f"State word {i} is not 1-16 hexadecimal digits: {raw!r}"
            )
        words.append(int(raw, 16))
    return words
