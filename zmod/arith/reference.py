"""
Pure-Python modular arithmetic primitives.

These are the building blocks of Residue, GaussianResidue and CRT.
Every function takes canonical operands in [0, n) and returns a canonical
result; all operations are exact (integer arithmetic, no floating-point).
"""

import operator
from typing import Callable, Tuple, TypeVar

from ..config import get_config
from ..errors import InvertibilityError

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Extended Euclid
# ---------------------------------------------------------------------------

def xgcd(p: int, q: int) -> Tuple[int, int, int]:
    """Extended Euclidean algorithm.

    Returns (g, u, v) with g = gcd(p, q) >= 0 and u*p + v*q == g.
    Requires q > 0; p may be zero or negative.
    """
    old_r, r = p, q
    old_u, u = 1, 0
    old_v, v = 0, 1
    while r != 0:
        quot = old_r // r
        old_r, r = r, old_r - quot * r
        old_u, u = u, old_u - quot * u
        old_v, v = v, old_v - quot * v
    if old_r < 0:
        old_r, old_u, old_v = -old_r, -old_u, -old_v
    return old_r, old_u, old_v


def gcd(p: int, q: int) -> int:
    return xgcd(p, q)[0]


# ---------------------------------------------------------------------------
# Scalar modular arithmetic
# ---------------------------------------------------------------------------

def add_mod(a: int, b: int, n: int) -> int:
    """(a + b) mod n.  Assumes 0 <= a, b < n."""
    s = a + b
    return s - n if s >= n else s


def sub_mod(a: int, b: int, n: int) -> int:
    """(a - b) mod n.  Assumes 0 <= a, b < n."""
    return a - b if a >= b else a - b + n


def neg_mod(a: int, n: int) -> int:
    """(-a) mod n."""
    return 0 if a == 0 else n - a


def mul_mod_widen(a: int, b: int, n: int) -> int:
    """(a * b) mod n through a double-width intermediate."""
    return (a * b) % n


def mul_mod_double_add(a: int, b: int, n: int) -> int:
    """(a * b) mod n by binary double-and-add.

    Walks the bits of b from the least significant end, doubling a mod n
    each round and adding it in when the bit is set.  No intermediate ever
    reaches 2n, so the result is exact in a fixed-width word.
    """
    result = 0
    while b:
        if b & 1:
            result = add_mod(result, a, n)
        a = add_mod(a, a, n)
        b >>= 1
    return result


_MUL_IMPLS = {
    "widen": mul_mod_widen,
    "double_and_add": mul_mod_double_add,
}


def mul_mod(a: int, b: int, n: int) -> int:
    """(a * b) mod n, exact for every n in the configured word size.

    Dispatches on ArithConfig.mul_strategy.
    """
    return _MUL_IMPLS[get_config().mul_strategy](a, b, n)


def inv_mod(a: int, n: int) -> int:
    """Modular inverse a^{-1} mod n via extended Euclid.

    Raises InvertibilityError when gcd(a, n) != 1 (including a == 0).
    """
    g, u, _ = xgcd(a % n, n)
    if g != 1:
        raise InvertibilityError(f"No inverse: gcd({a},{n})={g}")
    return u % n


def is_invertible_mod(a: int, n: int) -> bool:
    return gcd(a % n, n) == 1


# ---------------------------------------------------------------------------
# Exponentiation
# ---------------------------------------------------------------------------

def power(base: T, exp: int, one: T,
          mul: Callable[[T, T], T] = operator.mul) -> T:
    """base**exp by square-and-multiply, for any monoid.

    ``one`` is the identity and ``mul`` the multiplication; exp must be
    non-negative.  exp == 0 returns ``one`` whatever the base.
    """
    if exp < 0:
        raise ValueError(f"power() needs a non-negative exponent, got {exp}")
    result = one
    while exp:
        if exp & 1:
            result = mul(result, base)
        exp >>= 1
        if exp:
            base = mul(base, base)
    return result


def pow_mod(base: int, exp: int, n: int) -> int:
    """base^exp mod n.  A negative exp inverts base first."""
    base %= n
    if exp < 0:
        base = inv_mod(base, n)
        exp = -exp
    return power(base, exp, 1, lambda x, y: mul_mod(x, y, n))
