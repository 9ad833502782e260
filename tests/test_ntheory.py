# tests/test_ntheory.py
"""
GCD family, symbols, roots and logarithms, primality, arithmetic functions
and combinatorial sequences.

Run: pytest -v tests/test_ntheory.py
"""

from __future__ import annotations

import math
import random

import pytest

from numcore import (
    Integer,
    InvalidArgument,
    binomial,
    factorial,
    fibonacci,
    fmma,
    fmms,
    gcd,
    lcm,
    primorial,
    xgcd,
)

# ---------- GCD family --------------------------------------------------------

XGCD_CASES = [
    (21, 14, (7, -13, 20)),
    (0, 0, (0, 0, 0)),
    (0, -5, (5, 0, -1)),
    (5, 0, (5, 1, 0)),
    (-4, 4, (4, -1, 0)),
    (4, 4, (4, 1, 0)),
]


@pytest.mark.parametrize("a,b,expected", XGCD_CASES, ids=[f"xgcd({a},{b})" for a, b, _ in XGCD_CASES])
def test_xgcd_table(a, b, expected):
    assert xgcd(a, b) == expected
    assert Integer(a).xgcd(b) == expected


def test_bezout_identity_sweep():
    rng = random.Random(314)
    for _ in range(500):
        a = rng.randint(-(10**25), 10**25)
        b = rng.randint(-(10**25), 10**25)
        d, s, t = xgcd(a, b)
        assert d == math.gcd(a, b)
        assert s * a + t * b == d


def test_gcd_lcm_coprime_divides():
    assert gcd(0, 0) == 0
    assert gcd(-12, 18) == 6
    assert lcm(4, 6) == 12
    assert lcm(-4, 6) == 12
    assert lcm(7, 0) == 0
    assert Integer(8).is_coprime(15)
    assert not Integer(8).is_coprime(14)
    assert Integer(-3).divides(12)
    assert not Integer(5).divides(12)
    assert Integer(0).divides(0)
    assert not Integer(0).divides(3)


def test_fused_multiply_add():
    assert fmma(2, 3, 4, 5) == 26
    assert fmms(2, 3, 4, 5) == -14
    assert Integer(10).addmul(3, 4) == 22
    assert Integer(10).submul(3, 4) == -2
    assert Integer(2).mul2(3, -5) == -30


# ---------- symbols -----------------------------------------------------------

SYMBOL_CASES = [
    ("jacobi", 2, 7, 1),
    ("jacobi", 3, 7, -1),
    ("jacobi", 7, 21, 0),
    ("jacobi", 1001, 9907, -1),
    ("kronecker", 2, -5, -1),
    ("kronecker", 3, 8, -1),
    ("kronecker", 5, 0, 0),
    ("kronecker", 1, 0, 1),
]


@pytest.mark.parametrize(
    "fn,a,n,expected", SYMBOL_CASES, ids=[f"{f}({a},{n})" for f, a, n, _ in SYMBOL_CASES]
)
def test_symbols(fn, a, n, expected):
    assert getattr(Integer(a), fn)(n) == expected


@pytest.mark.parametrize("n", [8, 0, -7], ids=["even", "zero", "negative"])
def test_jacobi_rejects_bad_modulus(n):
    with pytest.raises(InvalidArgument):
        Integer(2).jacobi(n)


# ---------- roots, powers, logarithms -----------------------------------------


def test_square_detection_and_sqrtrem():
    assert Integer(49).is_square()
    assert Integer(0).is_square()
    assert not Integer(50).is_square()
    assert not Integer(-4).is_square()
    assert Integer(10).sqrtrem() == (3, 1)
    assert Integer(10**40).sqrt() == 10**20
    with pytest.raises(InvalidArgument):
        Integer(-1).sqrtrem()


def test_sqrtrem_sweep():
    rng = random.Random(8)
    for _ in range(200):
        n = rng.randint(0, 10**50)
        s, r = Integer(n).sqrtrem()
        assert s * s + r == n
        assert 0 <= r <= 2 * s


PERFECT_POWER_CASES = [
    (16, (2, 4)),
    (64, (2, 6)),
    (-8, (-2, 3)),
    (-64, (-4, 3)),
    (3**10 * 5**10, (15, 10)),
    (0, (0, 2)),
    (1, (1, 2)),
    (-1, (-1, 3)),
    (12, None),
    (-4, None),
    (72, None),
    (2, None),
]


@pytest.mark.parametrize(
    "n,expected", PERFECT_POWER_CASES, ids=[f"pp({n})" for n, _ in PERFECT_POWER_CASES]
)
def test_perfect_power(n, expected):
    assert Integer(n).perfect_power() == expected


LOG_CASES = [
    (3, 2, 2, 1),
    (1, 10, 0, 0),
    (1000, 10, 3, 3),
    (1001, 10, 4, 3),
    (999, 10, 3, 2),
    (2**100, 2, 100, 100),
    (2**100 + 1, 2, 101, 100),
    (10**50, 7, 60, 59),
]


@pytest.mark.parametrize(
    "x,b,c,f", LOG_CASES, ids=[f"log({x},{b})" for x, b, _, _ in LOG_CASES]
)
def test_clog_flog(x, b, c, f):
    assert Integer(x).clog(b) == c
    assert Integer(x).flog(b) == f


@pytest.mark.parametrize("x,b", [(0, 2), (-5, 2), (5, 1), (5, 0)], ids=["x-zero", "x-neg", "base-one", "base-zero"])
def test_log_domain(x, b):
    with pytest.raises(InvalidArgument):
        Integer(x).flog(b)
    with pytest.raises(InvalidArgument):
        Integer(x).clog(b)


def test_log_with_huge_base():
    # a one-step answer must not cost powers of a 40000-bit base
    x, b = Integer(2**40001), 2**40000 + 1
    assert x.flog(b) == 1
    assert x.clog(b) == 2
    assert Integer(b).flog(b) == 1 and Integer(b).clog(b) == 1
    assert Integer(b - 1).flog(b) == 0


def test_remove():
    assert Integer(72).remove(2) == (9, 3)
    assert Integer(-24).remove(2) == (-3, 3)
    assert Integer(7).remove(3) == (7, 0)
    assert Integer(1000).remove(10) == (1, 3)
    with pytest.raises(InvalidArgument):
        Integer(72).remove(1)
    with pytest.raises(InvalidArgument):
        Integer(0).remove(2)


# ---------- primes ------------------------------------------------------------

PRIME_CASES = [
    (2, True),
    (97, True),
    (1, False),
    (-7, False),
    (561, False),
    (2**61 - 1, True),
    (2**64 + 13, True),
    (2**89 - 1, True),
    ((2**61 - 1) * (2**31 - 1), False),
]


@pytest.mark.parametrize("n,expected", PRIME_CASES, ids=[f"is_prime({n})" for n, _ in PRIME_CASES])
def test_is_prime(n, expected):
    assert Integer(n).is_prime() is expected


def test_is_prime_rejects_zero():
    with pytest.raises(InvalidArgument):
        Integer(0).is_prime()


def test_next_prime():
    assert Integer(13).next_prime() == 17
    assert Integer(2).next_prime() == 3
    assert Integer(-5).next_prime() == 2
    assert Integer(0).next_prime() == 2
    assert Integer(2**64).next_prime() == 2**64 + 13


def test_primorial():
    assert primorial(13) == 30030
    assert primorial(0) == 1
    assert primorial(1) == 1
    with pytest.raises(InvalidArgument):
        primorial(-1)
    with pytest.raises(InvalidArgument):
        primorial(2**64)


# ---------- arithmetic functions ----------------------------------------------

ARITH_CASES = [
    (1, 1, 1, 1, 1),
    (12, 4, 0, 6, 28),
    (30, 8, -1, 8, 72),
    (36, 12, 0, 9, 91),
    (97, 96, -1, 2, 98),
]


@pytest.mark.parametrize(
    "n,phi,mu,tau,sigma", ARITH_CASES, ids=[f"n={n}" for n, *_ in ARITH_CASES]
)
def test_arithmetic_functions(n, phi, mu, tau, sigma):
    x = Integer(n)
    assert x.euler_phi() == phi
    assert x.moebius_mu() == mu
    assert x.divisor_sigma(0) == tau
    assert x.divisor_sigma(1) == sigma
    assert x.divisor_sigma() == sigma


def test_arithmetic_functions_on_zero_and_negatives():
    assert Integer(0).moebius_mu() == 0
    assert Integer(0).divisor_sigma(1) == 0
    assert Integer(-6).moebius_mu() == 1
    assert Integer(-12).divisor_sigma(1) == 28
    assert Integer(12).divisor_sigma(2) == 210
    with pytest.raises(InvalidArgument):
        Integer(0).euler_phi()
    with pytest.raises(InvalidArgument):
        Integer(-5).euler_phi()


def test_euler_phi_against_gcd_count():
    for n in range(1, 200):
        assert Integer(n).euler_phi() == sum(1 for k in range(1, n + 1) if math.gcd(k, n) == 1)


# ---------- combinatorial sequences -------------------------------------------


def test_combinatorial_sequences():
    assert factorial(0) == 1
    assert factorial(20) == math.factorial(20)
    assert fibonacci(0) == 0
    assert fibonacci(6) == 8
    assert fibonacci(100) == 354224848179261915075
    assert binomial(5, 3) == 10
    assert binomial(3, 5) == 0
    assert binomial(100, 50) == math.comb(100, 50)


def test_rising_factorial():
    assert Integer(2).rising_factorial(4) == 120
    assert Integer(7).rising_factorial(0) == 1
    assert Integer(-2).rising_factorial(3) == 0
    assert Integer(-3).rising_factorial(2) == 6
    assert Integer(1).rising_factorial(50) == math.factorial(50)
    assert Integer(10).rising_factorial(37) == math.factorial(46) // math.factorial(9)


@pytest.mark.parametrize(
    "call",
    [
        lambda: factorial(-1),
        lambda: fibonacci(2**64),
        lambda: binomial(5, -1),
        lambda: Integer(3).rising_factorial(-1),
        lambda: Integer(3).pow(-2),
    ],
    ids=["factorial", "fibonacci", "binomial", "rising", "pow"],
)
def test_word_range_arguments(call):
    with pytest.raises(InvalidArgument):
        call()
