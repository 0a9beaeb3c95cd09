"""
CRT (Chinese Remainder Theorem) combination of residues with distinct,
pairwise-coprime moduli.
"""

from .combine import crt, CRT, crt_pair, crt_reconstruct

__all__ = ["crt", "CRT", "crt_pair", "crt_reconstruct"]
