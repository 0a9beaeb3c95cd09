"""
Convenience constructors built on the core residue types.

  - from_rational:        residue of a fraction via modular division
  - random_residue/...:   uniform samples from an external RNG
  - zeros / ones:         numpy object arrays of residues
  - to_lanes/from_lanes:  bridge to the uint64 lane routines
"""

import numbers
from fractions import Fraction
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from .arith.vectorized import MAX_LANE_MODULUS
from .errors import ModulusMismatchError, ConfigurationError
from .gaussian import GaussianResidue
from .residue import Residue, check_modulus


def from_rational(modulus, q: Union[numbers.Rational, str]) -> Residue:
    """Residue of ``q`` = p/d as p * d^-1 mod N.

    ``q`` may be any Rational or a string such as "3/4".  A denominator
    sharing a factor with N raises InvertibilityError.
    """
    if isinstance(q, str):
        q = Fraction(q)
    if not isinstance(q, numbers.Rational):
        raise TypeError(f"Expected a rational, got {q!r}")
    return Residue(modulus, q)


# ---------------------------------------------------------------------------
# Random values
# ---------------------------------------------------------------------------

def _draw_below(n: int, rng) -> int:
    """Uniform integer in [0, n) from a numpy Generator or random.Random."""
    if rng is None:
        rng = np.random.default_rng()
    if not hasattr(rng, "integers"):
        return rng.randrange(n)
    if n <= MAX_LANE_MODULUS:
        return int(rng.integers(0, n, dtype=np.uint64))
    # Wider than uint64: rejection-sample from raw bytes
    nbytes = (n.bit_length() + 7) // 8
    mask = (1 << n.bit_length()) - 1
    while True:
        x = int.from_bytes(rng.bytes(nbytes), "little") & mask
        if x < n:
            return x


def random_residue(modulus, rng=None) -> Residue:
    """Uniformly distributed Residue mod N."""
    n = check_modulus(modulus)
    return Residue(n, _draw_below(n, rng))


def random_gaussian(modulus, rng=None) -> GaussianResidue:
    """Uniformly distributed GaussianResidue mod N."""
    n = check_modulus(modulus)
    return GaussianResidue(n, _draw_below(n, rng), _draw_below(n, rng))


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def _filled(fill, shape) -> np.ndarray:
    arr = np.empty(shape, dtype=object)
    arr.fill(fill)
    return arr


def zeros(modulus, shape, gaussian: bool = False) -> np.ndarray:
    """Object array of zero residues; supports elementwise arithmetic."""
    cls = GaussianResidue if gaussian else Residue
    return _filled(cls.zero(modulus), shape)


def ones(modulus, shape, gaussian: bool = False) -> np.ndarray:
    """Object array of one residues."""
    cls = GaussianResidue if gaussian else Residue
    return _filled(cls.one(modulus), shape)


def to_lanes(residues: Iterable[Residue],
             modulus: Optional[int] = None) -> Tuple[np.ndarray, int]:
    """Pack Residues of one modulus into a uint64 lane array.

    Returns (lanes, modulus).  ``modulus`` is required for an empty input.
    """
    if not isinstance(residues, np.ndarray):
        residues = list(residues)
    objs = np.asarray(residues, dtype=object)
    flat = objs.ravel()
    if modulus is None:
        if flat.size == 0:
            raise ValueError("to_lanes() needs a modulus for an empty input")
        modulus = flat[0].modulus
    if modulus > MAX_LANE_MODULUS:
        raise ConfigurationError(
            f"Modulus {modulus} is too wide for uint64 lanes"
        )
    for r in flat:
        if not isinstance(r, Residue):
            raise TypeError(f"to_lanes() takes Residues, got {r!r}")
        if r.modulus != modulus:
            raise ModulusMismatchError(
                f"{r!r} does not have modulus {modulus}"
            )
    lanes = np.array([r.value for r in flat], dtype=np.uint64)
    return lanes.reshape(objs.shape), modulus


def from_lanes(lanes: np.ndarray, modulus: int) -> np.ndarray:
    """Unpack a uint64 lane array into an object array of Residues."""
    n = check_modulus(modulus)
    lanes = np.asarray(lanes, dtype=np.uint64)
    out = np.empty(lanes.shape, dtype=object)
    for idx in np.ndindex(lanes.shape):
        out[idx] = Residue(n, int(lanes[idx]))
    return out
