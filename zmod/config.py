"""
Arithmetic configuration.

The word size bounds every modulus (and therefore every canonical value):
a modulus must fit in ``WORD_BITS`` unsigned bits.  It is read once from
ZMOD_WORD_BITS when this module is imported and never changes afterwards,
so a value built at any point stays valid for the life of the process.

The multiply strategy picks how ``mul_mod`` stays exact.  Both strategies
give identical results, so it may be switched at any time:

  - "widen":          double-width intermediate, then reduce
  - "double_and_add": binary accumulation, every intermediate < N

Sources, lowest to highest precedence:
  1. ArithConfig defaults
  2. Environment: ZMOD_WORD_BITS (import time only), ZMOD_MUL_STRATEGY
  3. A YAML file passed to load_config() / set_config()
"""

import hashlib
import json
import os
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Dict, Any, Mapping, Optional, Union

import yaml

from .errors import ConfigurationError

MUL_STRATEGIES = ("widen", "double_and_add")

WORD_BITS_MIN = 8
WORD_BITS_MAX = 128
DEFAULT_WORD_BITS = 64


def word_bits_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """Word size named by ZMOD_WORD_BITS, or DEFAULT_WORD_BITS if unset."""
    env = os.environ if environ is None else environ
    bits = env.get("ZMOD_WORD_BITS")
    if not bits:
        return DEFAULT_WORD_BITS
    try:
        n = int(bits)
    except ValueError:
        raise ConfigurationError(
            f"ZMOD_WORD_BITS must be an integer, got {bits!r}"
        ) from None
    if not WORD_BITS_MIN <= n <= WORD_BITS_MAX:
        raise ConfigurationError(
            f"ZMOD_WORD_BITS must be in [{WORD_BITS_MIN}, {WORD_BITS_MAX}], got {n}"
        )
    return n


# Fixed for the process
WORD_BITS = word_bits_from_env()
MAX_MODULUS = (1 << WORD_BITS) - 1


@dataclass(frozen=True)
class ArithConfig:
    """Process-wide arithmetic settings."""
    word_bits: int = WORD_BITS      # Must equal WORD_BITS to be activated
    mul_strategy: str = "widen"     # See MUL_STRATEGIES

    def __post_init__(self):
        if isinstance(self.word_bits, bool) or not isinstance(self.word_bits, int):
            raise ConfigurationError(
                f"word_bits must be an integer, got {self.word_bits!r}"
            )
        if not WORD_BITS_MIN <= self.word_bits <= WORD_BITS_MAX:
            raise ConfigurationError(
                f"word_bits must be in [{WORD_BITS_MIN}, {WORD_BITS_MAX}], "
                f"got {self.word_bits}"
            )
        if self.mul_strategy not in MUL_STRATEGIES:
            raise ConfigurationError(
                f"Unknown mul_strategy: {self.mul_strategy!r}. "
                f"Available: {list(MUL_STRATEGIES)}"
            )

    @property
    def max_modulus(self) -> int:
        """Largest modulus representable in word_bits unsigned bits."""
        return (1 << self.word_bits) - 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def config_hash(self) -> str:
        """Deterministic short hash, recorded in run manifests."""
        s = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(s.encode()).hexdigest()[:16]

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  base: Optional["ArithConfig"] = None) -> "ArithConfig":
        """Build a config from a mapping, filling gaps from ``base``."""
        base = base or cls()
        unknown = set(data) - {"word_bits", "mul_strategy"}
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys: {sorted(unknown)}"
            )
        return replace(base, **data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ArithConfig":
        """Defaults with the strategy overridden by ZMOD_MUL_STRATEGY.

        word_bits is always the process WORD_BITS.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        strategy = env.get("ZMOD_MUL_STRATEGY")
        if strategy:
            data["mul_strategy"] = strategy.strip().lower()
        return cls.from_dict(data)


def load_config(path: Union[str, Path],
                base: Optional[ArithConfig] = None) -> ArithConfig:
    """Load an ArithConfig from YAML.

    The file is either a flat mapping or has the settings under an
    ``arith:`` key, e.g.::

        arith:
          word_bits: 64
          mul_strategy: double_and_add
    """
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path}: expected a mapping, got {type(raw).__name__}")
    section = raw.get("arith", raw)
    if not isinstance(section, dict):
        raise ConfigurationError(f"{path}: 'arith' must be a mapping")
    return ArithConfig.from_dict(section, base=base or ArithConfig.from_env())


_active: Optional[ArithConfig] = None


def get_config() -> ArithConfig:
    """Return the active config, initialising it from the environment."""
    global _active
    if _active is None:
        _active = ArithConfig.from_env()
    return _active


def set_config(config: Union[ArithConfig, str, Path, None] = None) -> ArithConfig:
    """Replace the active config.

    Accepts an ArithConfig, a path to a YAML file, or None to reset to the
    environment defaults.  Returns the previously active config so callers
    can restore it.

    Only the multiply strategy can change here; a config naming a word size
    other than WORD_BITS raises ConfigurationError and leaves the active
    config untouched.
    """
    global _active
    if config is None:
        new = ArithConfig.from_env()
    elif isinstance(config, ArithConfig):
        new = config
    else:
        new = load_config(config)
    if new.word_bits != WORD_BITS:
        raise ConfigurationError(
            f"word_bits is fixed at {WORD_BITS} for this process "
            f"(set ZMOD_WORD_BITS before importing zmod), got {new.word_bits}"
        )
    previous = get_config()
    _active = new
    return previous
