# -----------------------------------------------------------------------------
#  modular.py
#  Modular arithmetic, Chinese remaindering and rational reconstruction
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Sequence

import gmpy2
from gmpy2 import mpz
from sympy.ntheory.residue_ntheory import sqrt_mod

from numcore.errors import InvalidArgument, NotInvertible, UnsatisfiableSystem

logger = logging.getLogger(__name__)


def _positive_modulus(m: mpz, what: str = "modulus") -> mpz:
    if m <= 0:
        raise InvalidArgument(f"{what} must be positive, got {m}")
    return m


def powm(x: mpz, e: mpz, m: mpz) -> mpz:
    """
    x**e mod m in [0, m). A negative exponent raises the inverse of x to -e,
    so it requires gcd(x, m) == 1.
    """
    _positive_modulus(m)
    if e < 0:
        inv = invmod(x, m)
        if inv is None:
            raise NotInvertible(f"{x} is not invertible mod {m}")
        x, e = inv, -e
    return gmpy2.powmod(x, e, m)


def invmod(x: mpz, m: mpz) -> mpz | None:
    """Inverse of x modulo m > 0 in [0, m), or None when gcd(x, m) != 1."""
    _positive_modulus(m)
    if m == 1:
        return mpz(0)
    if gmpy2.gcd(x, m) != 1:
        return None
    return gmpy2.invert(x, m)


def negmod(x: mpz, m: mpz) -> mpz:
    """(-x) mod m, normalized into [0, m)."""
    _positive_modulus(m)
    return gmpy2.f_mod(-x, m)


def sqrtmod(x: mpz, n: mpz) -> mpz | None:
    """A square root of x modulo n > 0 in [0, n // 2], or None."""
    _positive_modulus(n)
    if n == 1:
        return mpz(0)
    root = sqrt_mod(int(x) % int(n), int(n))
    if root is None:
        return None
    return mpz(min(root, int(n) - root))


# --- Chinese remaindering -----------------------------------------------------

def _check_congruence(r: mpz, m: mpz, i: int | str) -> None:
    if m <= 1:
        raise InvalidArgument(f"modulus m{i} must be > 1, got {m}")
    if not 0 <= r < m:
        raise InvalidArgument(f"residue r{i} must satisfy 0 <= r{i} < m{i}, got {r} mod {m}")


def _combine(r1: mpz, m1: mpz, r2: mpz, m2: mpz) -> mpz:
    # x = r1 + m1 * t with t ≡ (r2 - r1) / m1 (mod m2)
    t = gmpy2.f_mod((r2 - r1) * gmpy2.invert(m1, m2), m2)
    return r1 + m1 * t


def crt(r1: mpz, m1: mpz, r2: mpz, m2: mpz) -> mpz:
    """
    Unique x in [0, m1*m2) with x ≡ r1 (mod m1) and x ≡ r2 (mod m2).
    Requires m1, m2 > 1 coprime and 0 <= ri < mi.
    """
    _check_congruence(r1, m1, 1)
    _check_congruence(r2, m2, 2)
    if gmpy2.gcd(m1, m2) != 1:
        raise InvalidArgument(f"moduli {m1} and {m2} are not coprime")
    return _combine(r1, m1, r2, m2)


def multi_crt(residues: Sequence[mpz], moduli: Sequence[mpz], *, signed: bool = False) -> mpz:
    """
    Solve x ≡ residues[i] (mod moduli[i]) for all i.

    The result lies in [0, M) with M the product of the moduli, or in
    (-M/2, M/2] when ``signed`` is set. Moduli that are not pairwise coprime
    raise UnsatisfiableSystem.
    """
    if len(residues) != len(moduli):
        raise InvalidArgument(
            f"got {len(residues)} residues for {len(moduli)} moduli"
        )
    for i, (r, m) in enumerate(zip(residues, moduli, strict=True)):
        _check_congruence(r, m, i)

    x, big_m = mpz(0), mpz(1)
    for i, (r, m) in enumerate(zip(residues, moduli, strict=True)):
        if gmpy2.gcd(big_m, m) != 1:
            raise UnsatisfiableSystem(f"modulus #{i} ({m}) shares a factor with an earlier modulus")
        x = _combine(x, big_m, r, m) if big_m > 1 else r
        big_m *= m

    logger.debug("combined %d congruences, modulus has %d bits", len(moduli), big_m.bit_length())
    if signed and 2 * x > big_m:
        x -= big_m
    return x


# --- Rational reconstruction --------------------------------------------------

def reconstruct(a: mpz, m: mpz, n_bound: mpz, d_bound: mpz) -> tuple[mpz, mpz] | None:
    """
    Find n/d with |n| <= n_bound, 0 < d <= d_bound, gcd(n, d) == 1 and
    n ≡ a*d (mod m), or None. Requires 2*n_bound*d_bound < m.

    Runs the extended Euclidean algorithm on (m, a mod m), stopping at the
    first remainder within n_bound. Each step keeps r_i ≡ s_i * a (mod m).
    """
    _positive_modulus(m)
    if n_bound < 0 or d_bound < 0:
        raise InvalidArgument("reconstruction bounds must be non-negative")
    if 2 * n_bound * d_bound >= m:
        raise InvalidArgument(
            f"bounds too large: need 2*{n_bound}*{d_bound} < {m}"
        )

    r0, r1 = m, gmpy2.f_mod(a, m)
    s0, s1 = mpz(0), mpz(1)
    while r1 > n_bound:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1

    if s1 == 0 or abs(s1) > d_bound:
        return None
    num, den = (r1, s1) if s1 > 0 else (-r1, -s1)
    if gmpy2.gcd(num, den) != 1:
        return None
    return num, den


def reconstruct_default(a: mpz, m: mpz) -> tuple[mpz, mpz] | None:
    """Reconstruction with both bounds floor(sqrt((m - 1) / 2))."""
    _positive_modulus(m)
    bound = gmpy2.isqrt((m - 1) // 2)
    if bound == 0:
        return None
    return reconstruct(a, m, bound, bound)
