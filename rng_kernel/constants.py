"""
RNG Kernel — Algorithm Constants

All magic numbers live here as module-level values.
Every multiplicative constant used in a forward step is odd, and its
inverse modulo 2**64 is derived here rather than written by hand.
"""

from .domain_types import mod_inverse64

# --- Seeding / Bit-Mixer ---
# 2**64 / golden ratio, rounded to odd.
GOLDEN_GAMMA: int = 0x9E3779B97F4A7C15

MIX_MULTIPLIER_1: int = 0x3C79AC492BA7B653
MIX_MULTIPLIER_2: int = 0x1C69B3F74AC4AE35
MIX_SHIFT_1: int = 27
MIX_SHIFT_2: int = 33
MIX_SHIFT_3: int = 27

MIX_MULTIPLIER_1_INVERSE: int = mod_inverse64(MIX_MULTIPLIER_1)
MIX_MULTIPLIER_2_INVERSE: int = mod_inverse64(MIX_MULTIPLIER_2)

# --- TricycleRandom ---
TRICYCLE_MULTIPLIER: int = 0xD1342543DE82EF95
TRICYCLE_INCREMENT: int = 0xC6BC279692B5C323
TRICYCLE_ROTATION: int = 41

TRICYCLE_MULTIPLIER_INVERSE: int = mod_inverse64(TRICYCLE_MULTIPLIER)

# --- Unit-interval conversion ---
DOUBLE_UNIT: float = 2.0 ** -53
FLOAT_UNIT: float = 2.0 ** -24
