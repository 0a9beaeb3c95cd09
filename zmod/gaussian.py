"""
Residues of Gaussian integers modulo N (the ring Z_N[i]).

A GaussianResidue a + b*i keeps both components as Residues of the same
modulus, so every operation below decomposes into scalar Residue
arithmetic:

    (a + bi) + (c + di) = (a + c) + (b + d)i
    (a + bi) * (c + di) = (ac - bd) + (ad + bc)i
    conj(a + bi)        = a - bi
    norm(a + bi)        = a^2 + b^2              (a scalar Residue)
    (a + bi)^-1         = conj(a + bi) * norm^-1

Integers, rationals, Residues and integral ``complex`` values are promoted
on entry.  A value with b == 0 compares and hashes equal to the matching
Residue.
"""

import numbers

from .arith.reference import power
from .errors import ModulusMismatchError, InvertibilityError
from .residue import Residue, check_modulus, complex_parts, reduce_value


class GaussianResidue:
    """Element of Z_N[i]."""

    __slots__ = ("_re", "_im")

    def __init__(self, modulus, real=0, imag=0):
        n = check_modulus(modulus)
        if isinstance(real, GaussianResidue):
            if real.modulus != n:
                raise ModulusMismatchError(
                    f"Cannot reinterpret {real!r} modulo {n}"
                )
            a, b = real.value
        elif isinstance(real, complex):
            a, b = complex_parts(real, n)
        else:
            a, b = reduce_value(real, n), 0
        self._re = Residue._raw(n, a)
        self._im = Residue._raw(n, b) + reduce_value(imag, n)

    @classmethod
    def _raw(cls, re: Residue, im: Residue) -> "GaussianResidue":
        obj = object.__new__(cls)
        obj._re = re
        obj._im = im
        return obj

    @classmethod
    def zero(cls, modulus) -> "GaussianResidue":
        return cls(modulus, 0, 0)

    @classmethod
    def one(cls, modulus) -> "GaussianResidue":
        return cls(modulus, 1, 0)

    @property
    def modulus(self) -> int:
        return self._re.modulus

    @property
    def real(self) -> Residue:
        return self._re

    @property
    def imag(self) -> Residue:
        return self._im

    @property
    def value(self):
        """Canonical (real, imag) integer pair."""
        return self._re.value, self._im.value

    # -- promotion ----------------------------------------------------------

    def _coerce(self, other):
        """``other`` as a GaussianResidue of this modulus, or NotImplemented."""
        if isinstance(other, GaussianResidue):
            if other.modulus != self.modulus:
                raise ModulusMismatchError(
                    f"Operands have different moduli: {self!r} and {other!r}"
                )
            return other
        if isinstance(other, Residue):
            if other.modulus != self.modulus:
                raise ModulusMismatchError(
                    f"Operands have different moduli: {self!r} and {other!r}"
                )
            return other.to_gaussian()
        if isinstance(other, (numbers.Rational, complex)):
            return GaussianResidue(self.modulus, other)
        return NotImplemented

    # -- arithmetic ---------------------------------------------------------

    def __add__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return GaussianResidue._raw(self._re + o._re, self._im + o._im)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return GaussianResidue._raw(self._re - o._re, self._im - o._im)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return o - self

    def __mul__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        a, b, c, d = self._re, self._im, o._re, o._im
        return GaussianResidue._raw(a * c - b * d, a * d + b * c)

    __rmul__ = __mul__

    def __truediv__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self * o.inverse()

    def __rtruediv__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return o * self.inverse()

    def __neg__(self):
        return GaussianResidue._raw(-self._re, -self._im)

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
        return power(base, exp, GaussianResidue.one(self.modulus))

    def conjugate(self) -> "GaussianResidue":
        return GaussianResidue._raw(self._re, -self._im)

    def norm(self) -> Residue:
        """a^2 + b^2 mod N; x is invertible exactly when this is."""
        return self._re * self._re + self._im * self._im

    def inverse(self) -> "GaussianResidue":
        """conj(x) * norm(x)^-1; InvertibilityError if the norm is not invertible."""
        nrm = self.norm()
        if not nrm.is_invertible():
            raise InvertibilityError(
                f"{self!r} is not invertible: norm {nrm.value} shares a "
                f"factor with {self.modulus}"
            )
        scale = nrm.inverse()
        return GaussianResidue._raw(self._re * scale, -self._im * scale)

    def is_invertible(self) -> bool:
        return self.norm().is_invertible()

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other):
        if isinstance(other, GaussianResidue):
            return self.modulus == other.modulus and self.value == other.value
        if isinstance(other, (Residue, numbers.Rational)):
            return self._im.value == 0 and self._re == other
        if isinstance(other, complex):
            if not (other.real.is_integer() and other.imag.is_integer()):
                return False
            return self._re == int(other.real) and self._im == int(other.imag)
        return NotImplemented

    def __hash__(self):
        if self._im.value == 0:
            return hash(self._re)
        return hash((self.modulus, self._re.value, self._im.value))

    # -- display ------------------------------------------------------------

    def __bool__(self):
        return bool(self._re) or bool(self._im)

    def __repr__(self):
        return f"GaussianResidue({self.modulus}, {self._re.value}, {self._im.value})"

    def __str__(self):
        return f"{self._re.value} + {self._im.value}i mod {self.modulus}"
