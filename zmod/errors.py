"""
Error kinds raised by the residue arithmetic.

Every error is fatal to the call that raised it; nothing is retried or
downgraded internally.  The concrete classes also derive from the matching
built-in exception so generic handlers keep working.
"""


class ZmodError(Exception):
    """Base class for all zmod errors."""


class ConfigurationError(ZmodError, ValueError):
    """Invalid modulus (N < 2 or wider than the word size) or bad config."""


class ModulusMismatchError(ZmodError, ValueError):
    """Arithmetic attempted between residues of different moduli."""


class InvertibilityError(ZmodError, ZeroDivisionError):
    """Inversion, division or a negative power of a non-invertible value."""


class CRTError(ZmodError, ValueError):
    """CRT requested on moduli that are not pairwise coprime."""
