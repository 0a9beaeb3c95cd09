"""
Modular arithmetic primitives.

Provides:
1. Pure Python reference implementations on plain ints (exact, any width)
2. numpy uint64 lane versions with overflow-safe multiplication
"""

from .reference import (
    xgcd, gcd,
    add_mod, sub_mod, neg_mod, mul_mod, mul_mod_widen, mul_mod_double_add,
    inv_mod, is_invertible_mod, power, pow_mod,
)
from .vectorized import (
    MAX_LANE_MODULUS,
    encode_vec, decode_vec,
    add_mod_vec, sub_mod_vec, neg_mod_vec, mul_mod_vec, pow_mod_vec,
)

__all__ = [
    "xgcd", "gcd",
    "add_mod", "sub_mod", "neg_mod", "mul_mod", "mul_mod_widen",
    "mul_mod_double_add", "inv_mod", "is_invertible_mod", "power", "pow_mod",
    "MAX_LANE_MODULUS", "encode_vec", "decode_vec",
    "add_mod_vec", "sub_mod_vec", "neg_mod_vec", "mul_mod_vec", "pow_mod_vec",
]
