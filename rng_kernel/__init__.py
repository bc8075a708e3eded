"""
RNG Kernel v1.0
Deterministic pseudo-random generators with exact backward stepping,
jump-ahead, state access and lossless text serialization.
All state words: unsigned 64-bit integers.
"""

from .domain_types import (
    MASK64, GeneratorCapabilities, IntegerRange,
    rotate_left, rotate_right, mod_inverse64, to_word,
)
from .errors import (
    RandomError,
    InvalidParameterError,
    UnsupportedOperationError,
    UndefinedStatisticError,
    SerializationError,
    MalformedStateError,
    UnknownTagError,
)
from .mixer import mix, unmix, seed_words
from .math_utils import probit
from .generator import AbstractRandom
from .tricycle import TricycleRandom
from .distinct import DistinctRandom
from .serialization import encode_state, parse_tag, decode_words
from .registry import GeneratorRegistry, register_builtin_generators
from .hashing import canonical_serialize, state_hash

__all__ = [
    "MASK64",
    "GeneratorCapabilities",
    "IntegerRange",
    "rotate_left",
    "rotate_right",
    "mod_inverse64",
    "to_word",
    "RandomError",
    "InvalidParameterError",
    "UnsupportedOperationError",
    "UndefinedStatisticError",
    "SerializationError",
    "MalformedStateError",
    "UnknownTagError",
    "mix",
    "unmix",
    "seed_words",
    "probit",
    "AbstractRandom",
    "TricycleRandom",
    "DistinctRandom",
    "encode_state",
    "parse_tag",
    "decode_words",
    "GeneratorRegistry",
    "register_builtin_generators",
    "canonical_serialize",
    "state_hash",
]
