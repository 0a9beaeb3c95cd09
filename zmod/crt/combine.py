"""
Chinese Remainder Theorem combination of residues.

Two residues r1 (mod m1) and r2 (mod m2) with gcd(m1, m2) = 1 merge into
one residue mod m1*m2.  With Bezout coefficients u*m1 + v*m2 = 1:

    e1 = v*m2    (= 1 mod m1, 0 mod m2)
    e2 = u*m1    (= 0 mod m1, 1 mod m2)
    x  = r1*e1 + r2*e2   mod m1*m2

Longer argument lists fold left to right, so the result is deterministic.
Every product goes through mul_mod and stays inside the word size.
"""

from typing import List, Sequence

from ..arith.reference import xgcd, add_mod, mul_mod
from ..config import WORD_BITS, MAX_MODULUS
from ..errors import CRTError
from ..residue import Residue


def crt_pair(r1: Residue, r2: Residue) -> Residue:
    """Combine two residues of coprime moduli."""
    m1, m2 = r1.modulus, r2.modulus
    g, u, v = xgcd(m1, m2)
    if g != 1:
        raise CRTError(f"Moduli {m1} and {m2} are not coprime (gcd={g})")

    M = m1 * m2
    if M > MAX_MODULUS:
        raise CRTError(
            f"Combined modulus {m1}*{m2}={M} does not fit in a "
            f"{WORD_BITS}-bit word"
        )

    e1 = mul_mod(v % M, m2, M)
    e2 = mul_mod(u % M, m1, M)
    x = add_mod(mul_mod(r1.value, e1, M), mul_mod(r2.value, e2, M), M)
    return Residue._raw(M, x)


def crt(*residues: Residue) -> Residue:
    """Residue mod prod(m_i) congruent to each r_i mod m_i.

    Raises CRTError if no residues are given or two moduli share a factor.

        >>> crt(Residue(10, 3), Residue(17, 5))
        Residue(170, 73)
    """
    if not residues:
        raise CRTError("crt() needs at least one residue")
    for r in residues:
        if not isinstance(r, Residue):
            raise TypeError(f"crt() takes Residue arguments, got {r!r}")

    result = residues[0]
    for r in residues[1:]:
        result = crt_pair(result, r)
    return result


CRT = crt


def crt_reconstruct(values: Sequence[int], moduli: Sequence[int]) -> int:
    """Integer form of crt(): returns x in [0, prod(moduli)).

    Values need not be reduced.
    """
    if len(values) != len(moduli):
        raise ValueError(
            f"Got {len(values)} values but {len(moduli)} moduli"
        )
    residues: List[Residue] = [Residue(m, v) for v, m in zip(values, moduli)]
    return crt(*residues).value
