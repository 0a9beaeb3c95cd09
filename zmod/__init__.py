"""
zmod: exact modular arithmetic over Z_N and the Gaussian integers Z_N[i].

  Residue(N, a)              a mod N
  GaussianResidue(N, a, b)   a + b*i mod N
  crt(r1, r2, ...)           Chinese Remainder combination

All values are immutable; mixed operations promote ints, rationals and
integral complex numbers on entry.  Multiplication stays exact for any
modulus that fits the configured word size (64 bits by default).
"""

__version__ = "0.3.0"

from .errors import (
    ZmodError, ConfigurationError, ModulusMismatchError,
    InvertibilityError, CRTError,
)
from .config import ArithConfig, get_config, set_config, load_config
from .residue import Residue
from .gaussian import GaussianResidue
from .crt import crt, CRT, crt_pair, crt_reconstruct
from .ops import value, modulus, is_invertible, inverse, conj, norm
from .helpers import (
    from_rational, random_residue, random_gaussian,
    zeros, ones, to_lanes, from_lanes,
)
from .logging import RunLogger, RunManifest, create_manifest

__all__ = [
    "ZmodError", "ConfigurationError", "ModulusMismatchError",
    "InvertibilityError", "CRTError",
    "ArithConfig", "get_config", "set_config", "load_config",
    "Residue", "GaussianResidue",
    "crt", "CRT", "crt_pair", "crt_reconstruct",
    "value", "modulus", "is_invertible", "inverse", "conj", "norm",
    "from_rational", "random_residue", "random_gaussian",
    "zeros", "ones", "to_lanes", "from_lanes",
    "RunLogger", "RunManifest", "create_manifest",
    "__version__",
]
