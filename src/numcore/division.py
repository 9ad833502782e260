# -----------------------------------------------------------------------------
#  division.py
#  Rounding-mode division on gmpy2 mpz values
# -----------------------------------------------------------------------------

"""
Every function here works on ``mpz`` operands and returns ``mpz`` results.

Quotient/remainder pairs satisfy ``a == q*b + r`` and differ only in how the
quotient is rounded:

    floor     (fdiv)  q toward -inf,  r has the sign of b
    ceiling   (cdiv)  q toward +inf,  r has the sign opposite to b
    truncate  (tdiv)  q toward 0,     r has the sign of a
    nearest   (ndiv)  q to the closest integer, ties away from zero

The ``*_2exp`` variants divide by ``2**e`` and agree with the general form.
"""

from __future__ import annotations

import operator
from collections.abc import Callable

import gmpy2
from gmpy2 import mpz

from numcore.errors import DivisionByZero, InexactDivision, InvalidArgument

WORD_BITS = 64
WORD_LIMIT = 1 << WORD_BITS


def check_word(e: int, what: str = "exponent") -> int:
    """Require 0 <= e < 2**64 (the native unsigned word range)."""
    e = operator.index(e)
    if not 0 <= e < WORD_LIMIT:
        raise InvalidArgument(f"{what} must be in [0, 2^{WORD_BITS}), got {e}")
    return e


def _nonzero(b: mpz) -> None:
    if not b:
        raise DivisionByZero("division by zero")


# --- General divisors --------------------------------------------------------

def fdiv_qr(a: mpz, b: mpz) -> tuple[mpz, mpz]:
    _nonzero(b)
    return gmpy2.f_divmod(a, b)


def cdiv_qr(a: mpz, b: mpz) -> tuple[mpz, mpz]:
    _nonzero(b)
    return gmpy2.c_divmod(a, b)


def tdiv_qr(a: mpz, b: mpz) -> tuple[mpz, mpz]:
    _nonzero(b)
    return gmpy2.t_divmod(a, b)


def ndiv_qr(a: mpz, b: mpz) -> tuple[mpz, mpz]:
    """Round the quotient to nearest; when 2|r| == |b| move away from zero."""
    q, r = tdiv_qr(a, b)
    if 2 * abs(r) >= abs(b):
        if (r < 0) == (b < 0):
            q, r = q + 1, r - b
        else:
            q, r = q - 1, r + b
    return q, r


MODES: dict[str, Callable[[mpz, mpz], tuple[mpz, mpz]]] = {
    "floor": fdiv_qr,
    "ceiling": cdiv_qr,
    "truncate": tdiv_qr,
    "nearest": ndiv_qr,
}


def divmod_mode(a: mpz, b: mpz, mode: str) -> tuple[mpz, mpz]:
    try:
        fn = MODES[mode]
    except KeyError:
        raise InvalidArgument(f"unknown rounding mode {mode!r}; expected one of {sorted(MODES)}") from None
    return fn(a, b)


# --- Powers of two -----------------------------------------------------------

def fdiv_qr_2exp(a: mpz, e: int) -> tuple[mpz, mpz]:
    e = check_word(e)
    return gmpy2.f_div_2exp(a, e), gmpy2.f_mod_2exp(a, e)


def cdiv_qr_2exp(a: mpz, e: int) -> tuple[mpz, mpz]:
    e = check_word(e)
    return gmpy2.c_div_2exp(a, e), gmpy2.c_mod_2exp(a, e)


def tdiv_qr_2exp(a: mpz, e: int) -> tuple[mpz, mpz]:
    e = check_word(e)
    return gmpy2.t_div_2exp(a, e), gmpy2.t_mod_2exp(a, e)


# --- Exact and symmetric -------------------------------------------------------

def divexact(a: mpz, b: mpz) -> mpz:
    _nonzero(b)
    if not gmpy2.is_divisible(a, b):
        raise InexactDivision(f"{b} does not divide {a}")
    return gmpy2.divexact(a, b)


def smod(a: mpz, n: mpz) -> mpz:
    """Centered remainder: y ≡ a (mod n) with -n/2 < y <= n/2, n > 0."""
    if n <= 0:
        raise InvalidArgument(f"modulus must be positive, got {n}")
    r = gmpy2.f_mod(a, n)
    if 2 * r > n:
        r -= n
    return r
