"""
Vectorized modular arithmetic on numpy uint64 lanes.

Unlike the pure-Python reference, lanes live in a fixed 64-bit word, so a
product of two residues near a 64-bit modulus wraps silently.  Every routine
here keeps intermediates below the modulus:

  add:  compare against n - b before adding, never form a + b >= 2^64
  mul:  double-and-add over the bits of b, built on the safe add

Supported moduli: 2 <= n <= 2^64 - 1.  Results match the big-int reference
lane by lane.
"""

from typing import Iterable, List

import numpy as np

from ..errors import ConfigurationError
from .reference import power

MAX_LANE_MODULUS = (1 << 64) - 1

_ONE = np.uint64(1)


def _lane_modulus(n: int) -> np.uint64:
    if not 2 <= n <= MAX_LANE_MODULUS:
        raise ConfigurationError(
            f"Lane modulus must be in [2, 2^64-1], got {n}"
        )
    return np.uint64(n)


def _lanes(a) -> np.ndarray:
    return np.asarray(a, dtype=np.uint64)


# ---------------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------------

def encode_vec(values: Iterable[int], n: int) -> np.ndarray:
    """Reduce arbitrary Python integers mod n into a uint64 lane array.

    Accepts nested sequences or arrays; the shape is preserved.
    """
    _lane_modulus(n)
    objs = np.asarray(values, dtype=object)
    flat = [int(v) % n for v in objs.ravel()]
    return np.array(flat, dtype=np.uint64).reshape(objs.shape)


def decode_vec(lanes: np.ndarray) -> List[int]:
    """Flatten lanes back to a list of Python ints."""
    return [int(v) for v in _lanes(lanes).ravel()]


# ---------------------------------------------------------------------------
# Lane arithmetic
# ---------------------------------------------------------------------------

def add_mod_vec(a, b, n: int) -> np.ndarray:
    """(a + b) mod n per lane.  Assumes 0 <= a, b < n."""
    n64 = _lane_modulus(n)
    a, b = _lanes(a), _lanes(b)
    gap = n64 - b
    with np.errstate(over="ignore"):
        return np.where(a >= gap, a - gap, a + b)


def sub_mod_vec(a, b, n: int) -> np.ndarray:
    """(a - b) mod n per lane.  Assumes 0 <= a, b < n."""
    n64 = _lane_modulus(n)
    a, b = _lanes(a), _lanes(b)
    with np.errstate(over="ignore"):
        return np.where(a >= b, a - b, a + (n64 - b))


def neg_mod_vec(a, n: int) -> np.ndarray:
    """(-a) mod n per lane."""
    n64 = _lane_modulus(n)
    a = _lanes(a)
    with np.errstate(over="ignore"):
        return np.where(a == 0, np.uint64(0), n64 - a)


def mul_mod_vec(a, b, n: int) -> np.ndarray:
    """(a * b) mod n per lane by double-and-add.

    Loops over the bit length of the largest multiplier; each round is one
    conditional safe add and one safe doubling, so no lane ever wraps.
    """
    n64 = _lane_modulus(n)
    a, b = np.broadcast_arrays(_lanes(a) % n64, _lanes(b) % n64)
    result = np.zeros(a.shape, dtype=np.uint64)
    if b.size == 0:
        return result

    addend = a.copy()
    for bit in range(int(b.max()).bit_length()):
        take = ((b >> np.uint64(bit)) & _ONE).astype(bool)
        result = np.where(take, add_mod_vec(result, addend, n), result)
        addend = add_mod_vec(addend, addend, n)
    return result


def pow_mod_vec(base, exp: int, n: int) -> np.ndarray:
    """base^exp mod n per lane (shared exponent, exp >= 0)."""
    n64 = _lane_modulus(n)
    base = _lanes(base) % n64
    one = np.ones(base.shape, dtype=np.uint64)
    return power(base, exp, one, lambda x, y: mul_mod_vec(x, y, n))
