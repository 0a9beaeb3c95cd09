#!/usr/bin/env python3
"""
Validation script for zmod.

Runs a sequence of checks:
1. Active configuration
2. Scalar residue arithmetic against big-int reference
3. Overflow exactness near the word size
4. Inversion and exponentiation
5. Gaussian residue identities
6. CRT combination
7. uint64 lane arithmetic

Every check is echoed to stdout and written to checks.jsonl (failures also
to failures.jsonl) under --output-dir, together with a manifest.json.

Usage:
    python scripts/validate_zmod.py
    python scripts/validate_zmod.py --config zmod.yaml --output-dir runs/validate
"""

import argparse
import random
import sys
import os
import time
import traceback
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np

from zmod import (
    Residue, GaussianResidue, crt, crt_reconstruct, get_config, set_config,
    InvertibilityError, CRTError, RunLogger, create_manifest,
)
from zmod.config import MAX_MODULUS
from zmod.arith import xgcd, mul_mod_widen, mul_mod_double_add
from zmod.arith.vectorized import encode_vec, decode_vec, mul_mod_vec, add_mod_vec


def section(name: str):
    print(f"\n{'='*60}")
    print(f"  {name}")
    print(f"{'='*60}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="zmod validation suite")
    parser.add_argument("--output-dir", default="runs/validate",
                        help="Directory for manifest and JSONL logs")
    parser.add_argument("--config", default=None,
                        help="YAML file with an 'arith' section")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    if args.config:
        set_config(args.config)
    cfg = get_config()

    out = Path(args.output_dir)
    run_id = time.strftime("validate_%Y%m%d_%H%M%S")
    create_manifest(run_id, cfg).save(out / "manifest.json")

    print("zmod Validation Suite")
    print(f"Python: {sys.version}")
    print(f"CWD: {os.getcwd()}")

    rng = random.Random(args.seed)
    results = []

    with RunLogger(out) as logger:

        def check(name: str, passed: bool, detail: str = ""):
            status = "PASS" if passed else "FAIL"
            mark = "✓" if passed else "✗"
            print(f"  [{status}] {mark} {name}" + (f" -- {detail}" if detail else ""))
            results.append(logger.log_check(name, passed, detail))

        def timed(name, fn):
            t0 = time.time()
            try:
                fn()
            except Exception as e:
                check(name, False, f"{type(e).__name__}: {e}")
                traceback.print_exc()
            logger.log_metrics({"section": name, "wall_time_sec": time.time() - t0})

        # -----------------------------------------------------------
        # 1. Configuration
        # -----------------------------------------------------------
        def run_config():
            section("1. Configuration")
            print(f"  word_bits    = {cfg.word_bits}")
            print(f"  mul_strategy = {cfg.mul_strategy}")
            print(f"  config_hash  = {cfg.config_hash()}")
            check("active config matches process word size",
                  cfg.max_modulus == MAX_MODULUS, f"max modulus {MAX_MODULUS}")

        timed("config", run_config)

        # -----------------------------------------------------------
        # 2. Scalar arithmetic
        # -----------------------------------------------------------
        def run_scalar():
            section("2. Scalar Residue Arithmetic")
            bound = min(cfg.max_modulus, 10**18)
            n_trials = 500
            errors = 0
            for _ in range(n_trials):
                n = rng.randint(2, bound)
                a, b = rng.randint(-n, 2 * n), rng.randint(-n, 2 * n)
                x, y = Residue(n, a), Residue(n, b)
                if ((x + y).value != (a + b) % n or (x - y).value != (a - b) % n
                        or (x * y).value != (a * b) % n):
                    errors += 1
            check("add/sub/mul vs big-int", errors == 0,
                  f"{n_trials} random moduli, {errors} errors")

            errors = 0
            for _ in range(n_trials):
                p, q = rng.randint(0, 10**12), rng.randint(0, 10**12)
                g, u, v = xgcd(p, q)
                if g < 0 or u * p + v * q != g:
                    errors += 1
            check("xgcd Bezout identity", errors == 0, f"{errors} errors")

        timed("scalar", run_scalar)

        # -----------------------------------------------------------
        # 3. Overflow exactness
        # -----------------------------------------------------------
        def run_overflow():
            section("3. Overflow Exactness")
            n = 10**18
            check("10^15 * 10^15 mod 10^18 == 0",
                  (Residue(n, 10**15) * Residue(n, 10**15)).value == 0)
            if cfg.max_modulus >= 2**64 - 59:
                n = 2**64 - 59
                a, b = n - 12345, n - 67890
                want = (a * b) % n
                check("widen near 2^64", mul_mod_widen(a, b, n) == want)
                check("double-and-add near 2^64", mul_mod_double_add(a, b, n) == want)
            else:
                print(f"  (skipping 2^64 checks, word_bits={cfg.word_bits})")

        timed("overflow", run_overflow)

        # -----------------------------------------------------------
        # 4. Inversion and powers
        # -----------------------------------------------------------
        def run_inverse():
            section("4. Inversion and Exponentiation")
            check("3^-1 mod 10 == 7", Residue(10, 3).inverse() == Residue(10, 7))
            try:
                Residue(10, 2).inverse()
                check("2 mod 10 not invertible", False, "no error raised")
            except InvertibilityError as e:
                check("2 mod 10 not invertible", True, str(e))

            p = 1000003 if cfg.max_modulus >= 1000003 else 251
            errors = 0
            for _ in range(100):
                x = Residue(p, rng.randint(1, p - 1))
                k = rng.randint(1, 10**6)
                if x ** -k != (x ** k).inverse() or x ** (p - 1) != 1:
                    errors += 1
            check("negative powers and Fermat", errors == 0, f"{errors} errors")

        timed("inverse", run_inverse)

        # -----------------------------------------------------------
        # 5. Gaussian residues
        # -----------------------------------------------------------
        def run_gaussian():
            section("5. Gaussian Residues")
            i = GaussianResidue(13, 0, 1)
            check("i^2 == -1 mod 13", i * i == -1)

            errors = 0
            for n in [6, 7, 10]:
                for _ in range(100):
                    x = GaussianResidue(n, rng.randrange(n), rng.randrange(n))
                    y = GaussianResidue(n, rng.randrange(n), rng.randrange(n))
                    if (x * y).conjugate() != x.conjugate() * y.conjugate():
                        errors += 1
                    if x * x.conjugate() != x.norm():
                        errors += 1
                    if x.is_invertible() and x * x.inverse() != 1:
                        errors += 1
            check("conjugate, norm and inverse identities", errors == 0,
                  f"{errors} errors")

        timed("gaussian", run_gaussian)

        # -----------------------------------------------------------
        # 6. CRT
        # -----------------------------------------------------------
        def run_crt():
            section("6. CRT Combination")
            r = crt(Residue(10, 3), Residue(17, 5))
            check("crt(3 mod 10, 5 mod 17) == 73 mod 170", r == Residue(170, 73))

            primes = [1000003, 1000033, 1000037]
            if cfg.max_modulus < primes[0] * primes[1] * primes[2]:
                primes = [13, 7, 2]
            M = primes[0] * primes[1] * primes[2]
            errors = 0
            for _ in range(100):
                x = rng.randint(0, M - 1)
                if crt_reconstruct([x % p for p in primes], primes) != x:
                    errors += 1
            check("3-prime reconstruction", errors == 0, f"{errors} errors")

            try:
                crt(Residue(4, 1), Residue(6, 1))
                check("non-coprime moduli rejected", False, "no error raised")
            except CRTError as e:
                check("non-coprime moduli rejected", True, str(e))

        timed("crt", run_crt)

        # -----------------------------------------------------------
        # 7. Lanes
        # -----------------------------------------------------------
        def run_lanes():
            section("7. uint64 Lane Arithmetic")
            n = 2**64 - 59
            gen = np.random.default_rng(args.seed)
            a = [int(v) for v in gen.integers(0, n, size=1024, dtype=np.uint64)]
            b = [int(v) for v in gen.integers(0, n, size=1024, dtype=np.uint64)]
            la, lb = encode_vec(a, n), encode_vec(b, n)

            t0 = time.time()
            prod = decode_vec(mul_mod_vec(la, lb, n))
            dt = time.time() - t0
            check("mul_mod_vec vs big-int",
                  prod == [(x * y) % n for x, y in zip(a, b)],
                  f"1024 lanes in {dt*1000:.1f} ms")
            check("add_mod_vec vs big-int",
                  decode_vec(add_mod_vec(la, lb, n)) == [(x + y) % n for x, y in zip(a, b)])

        timed("lanes", run_lanes)

        summary = logger.summary

    # ---------------------------------------------------------------
    # Summary
    # ---------------------------------------------------------------
    section("Summary")

    n_pass = sum(1 for r in results if r)
    n_fail = sum(1 for r in results if not r)
    print(f"\n  {n_pass}/{len(results)} checks passed, {n_fail} failed")
    print(f"  Logged {summary['checks_logged']} checks to {out}")

    if n_fail == 0:
        print("\n  All checks PASSED.")
    else:
        print(f"\n  Some checks FAILED. See {out / 'failures.jsonl'}")

    return 0 if n_fail == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
