"""
Residues of plain integers modulo N (the ring Z_N).

A Residue is an immutable (N, value) pair with value always the canonical
representative in [0, N).  Integers and rationals are promoted on entry to
every binary operation; combining with a GaussianResidue or an integral
``complex`` promotes the result to Z_N[i].

    >>> Residue(10, 13)
    Residue(10, 3)
    >>> Residue(10, 3) == -7
    True
    >>> Residue(10, 3) ** -1
    Residue(10, 7)
"""

import numbers
import operator

from .arith.reference import (
    add_mod, sub_mod, neg_mod, mul_mod, inv_mod, is_invertible_mod, power,
)
from .config import WORD_BITS, MAX_MODULUS
from .errors import ConfigurationError, ModulusMismatchError, InvertibilityError


def check_modulus(modulus) -> int:
    """Validate a modulus and return it as a plain int."""
    if isinstance(modulus, bool) or not isinstance(modulus, numbers.Integral):
        raise ConfigurationError(f"Modulus must be an integer, got {modulus!r}")
    n = int(modulus)
    if n < 2:
        raise ConfigurationError(f"Modulus must be >= 2, got {n}")
    if n > MAX_MODULUS:
        raise ConfigurationError(
            f"Modulus {n} does not fit in a {WORD_BITS}-bit word "
            f"(max {MAX_MODULUS})"
        )
    return n


def complex_parts(value: complex, modulus: int):
    """(real, imag) of an integral complex number, reduced mod ``modulus``."""
    if not (value.real.is_integer() and value.imag.is_integer()):
        raise TypeError(f"Complex value {value!r} does not have integer parts")
    return int(value.real) % modulus, int(value.imag) % modulus


def reduce_value(value, modulus: int) -> int:
    """Canonical representative of ``value`` in [0, modulus).

    Rationals go through modular division, so a denominator sharing a
    factor with the modulus raises InvertibilityError.
    """
    if isinstance(value, Residue):
        if value.modulus != modulus:
            raise ModulusMismatchError(
                f"Cannot reinterpret {value!r} modulo {modulus}"
            )
        return value.value
    if isinstance(value, numbers.Integral):
        return int(value) % modulus
    if isinstance(value, numbers.Rational):
        num = int(value.numerator) % modulus
        return mul_mod(num, inv_mod(int(value.denominator), modulus), modulus)
    if isinstance(value, complex):
        re, im = complex_parts(value, modulus)
        if im != 0:
            raise TypeError(
                f"{value!r} has an imaginary part; use GaussianResidue"
            )
        return re
    raise TypeError(
        f"Cannot build a residue from {type(value).__name__} {value!r}"
    )


class Residue:
    """Element of Z_N."""

    __slots__ = ("_modulus", "_value")

    def __init__(self, modulus, value=0):
        n = check_modulus(modulus)
        self._modulus = n
        self._value = reduce_value(value, n)

    @classmethod
    def _raw(cls, modulus: int, value: int) -> "Residue":
        # Trusted fast path: modulus already checked, value canonical.
        obj = object.__new__(cls)
        obj._modulus = modulus
        obj._value = value
        return obj

    @classmethod
    def zero(cls, modulus) -> "Residue":
        return cls(modulus, 0)

    @classmethod
    def one(cls, modulus) -> "Residue":
        return cls(modulus, 1)

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def value(self) -> int:
        """Canonical integer in [0, modulus)."""
        return self._value

    # -- promotion ----------------------------------------------------------

    def _coerce(self, other):
        """Canonical int for ``other`` in this ring, or NotImplemented."""
        if isinstance(other, Residue):
            if other._modulus != self._modulus:
                raise ModulusMismatchError(
                    f"Operands have different moduli: {self!r} and {other!r}"
                )
            return other._value
        if isinstance(other, numbers.Rational):
            return reduce_value(other, self._modulus)
        return NotImplemented

    def _complex_op(self, other, op, reflected=False):
        """Promote to Z_N[i] when the other operand is a plain complex."""
        if not isinstance(other, complex):
            return NotImplemented
        from .gaussian import GaussianResidue
        g = self.to_gaussian()
        c = GaussianResidue(self._modulus, other)
        return op(c, g) if reflected else op(g, c)

    def to_gaussian(self):
        """This value embedded in Z_N[i] with a zero imaginary part."""
        from .gaussian import GaussianResidue
        return GaussianResidue._raw(self, Residue._raw(self._modulus, 0))

    # -- arithmetic ---------------------------------------------------------

    def __add__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.add)
        return Residue._raw(self._modulus, add_mod(self._value, v, self._modulus))

    def __radd__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.add, reflected=True)
        return Residue._raw(self._modulus, add_mod(v, self._value, self._modulus))

    def __sub__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.sub)
        return Residue._raw(self._modulus, sub_mod(self._value, v, self._modulus))

    def __rsub__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.sub, reflected=True)
        return Residue._raw(self._modulus, sub_mod(v, self._value, self._modulus))

    def __mul__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.mul)
        return Residue._raw(self._modulus, mul_mod(self._value, v, self._modulus))

    def __rmul__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.mul, reflected=True)
        return Residue._raw(self._modulus, mul_mod(v, self._value, self._modulus))

    def __truediv__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.truediv)
        return self * Residue._raw(self._modulus, v).inverse()

    def __rtruediv__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return self._complex_op(other, operator.truediv, reflected=True)
        return Residue._raw(self._modulus, v) * self.inverse()

    def __neg__(self):
        return Residue._raw(self._modulus, neg_mod(self._value, self._modulus))

    def __pos__(self):
        return self

    def __pow__(self, exp, mod=None):
        if mod is not None or not isinstance(exp, numbers.Integral):
            return NotImplemented
        exp = int(exp)
        base = self
        if exp < 0:
            base = self.inverse()
            exp = -exp
        return power(base, exp, Residue._raw(self._modulus, 1))

    def inverse(self) -> "Residue":
        """Multiplicative inverse; InvertibilityError unless gcd(value, N) == 1."""
        try:
            inv = inv_mod(self._value, self._modulus)
        except InvertibilityError:
            raise InvertibilityError(f"{self!r} is not invertible") from None
        return Residue._raw(self._modulus, inv)

    def is_invertible(self) -> bool:
        return is_invertible_mod(self._value, self._modulus)

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other):
        if isinstance(other, Residue):
            return self._modulus == other._modulus and self._value == other._value
        if isinstance(other, numbers.Integral):
            return int(other) % self._modulus == self._value
        if isinstance(other, numbers.Rational):
            try:
                return reduce_value(other, self._modulus) == self._value
            except InvertibilityError:
                return False
        if isinstance(other, complex):
            return self.to_gaussian() == other
        return NotImplemented

    def __hash__(self):
        return hash((self._modulus, self._value))

    # -- conversion / display -----------------------------------------------

    def __int__(self):
        return self._value

    def __bool__(self):
        return self._value != 0

    def __repr__(self):
        return f"Residue({self._modulus}, {self._value})"

    def __str__(self):
        return f"{self._value} mod {self._modulus}"
