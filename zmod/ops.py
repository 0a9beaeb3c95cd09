"""
Function-style accessors over Residue and GaussianResidue.

    value(x)          canonical int, or (real, imag) pair
    modulus(x)        N
    is_invertible(x)  True iff inverse(x) succeeds
    inverse(x)        multiplicative inverse
    conj(x), norm(x)  Gaussian only
"""

from .gaussian import GaussianResidue
from .residue import Residue


def _check(x, kinds=(Residue, GaussianResidue)):
    if not isinstance(x, kinds):
        names = " or ".join(k.__name__ for k in kinds)
        raise TypeError(f"Expected {names}, got {type(x).__name__}")
    return x


def value(x):
    return _check(x).value


def modulus(x) -> int:
    return _check(x).modulus


def is_invertible(x) -> bool:
    return _check(x).is_invertible()


def inverse(x):
    return _check(x).inverse()


def conj(x: GaussianResidue) -> GaussianResidue:
    return _check(x, (GaussianResidue,)).conjugate()


def norm(x: GaussianResidue) -> Residue:
    return _check(x, (GaussianResidue,)).norm()
