# -----------------------------------------------------------------------------
#  ntheory.py
#  GCD family, primality, factorization and arithmetic functions on mpz values
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from functools import lru_cache
from time import perf_counter

import gmpy2
from gmpy2 import mpz
from sympy import factorint, isprime, nextprime, rf
from sympy import sieve

from numcore.config import PRIMALITY_METHODS
from numcore.division import check_word
from numcore.errors import ConfigError, InvalidArgument
from numcore.runtime import CFG

logger = logging.getLogger(__name__)


def _sign(x: mpz) -> int:
    return (x > 0) - (x < 0)


# --- GCD family ----------------------------------------------------------------

def _gcdinv(x: mpz, y: mpz) -> tuple[mpz, mpz]:
    """For 0 <= x < y: (d, s) with d = gcd(x, y), s*x ≡ d (mod y), 0 <= s < y."""
    d, s, _ = gmpy2.gcdext(x, y)
    return d, gmpy2.f_mod(s, y)


def xgcd(f: mpz, g: mpz) -> tuple[mpz, mpz, mpz]:
    """
    (d, a, b) with d = gcd(f, g) >= 0 and a*f + b*g == d.

    The cofactor belonging to the smaller operand (in absolute value) is
    reduced into [0, |larger|) before signs are restored, so that
    xgcd(21, 14) == (7, -13, 20).
    """
    if f == 0:
        return abs(g), mpz(0), mpz(_sign(g))
    if abs(f) == abs(g):
        return abs(f), mpz(_sign(f)), mpz(0)

    f1, g1 = abs(f), abs(g)
    if f1 < g1:
        d, a = _gcdinv(f1, g1)
        b = (d - a * f1) // g1
    else:
        d, b = _gcdinv(g1, f1)
        a = (d - b * g1) // f1

    if f < 0:
        a = -a
    if g < 0:
        b = -b
    return d, a, b


def jacobi(a: mpz, n: mpz) -> int:
    if n <= 0 or gmpy2.is_even(n):
        raise InvalidArgument(f"Jacobi symbol needs an odd positive modulus, got {n}")
    return int(gmpy2.jacobi(a, n))


def kronecker(a: mpz, n: mpz) -> int:
    return int(gmpy2.kronecker(a, n))


# --- Roots and logarithms ------------------------------------------------------

def perfect_power(n: mpz) -> tuple[mpz, int] | None:
    """
    (base, e) with n == base**e and e >= 2 maximal, or None.
    Negative n only admits odd exponents.
    """
    if n == 0:
        return mpz(0), 2
    if n == 1:
        return mpz(1), 2
    if n == -1:
        return mpz(-1), 3

    neg = n < 0
    base, e = abs(n), 1
    if not gmpy2.is_power(base):
        return None

    found = True
    while found and base > 1:
        found = False
        for p in sieve.primerange(3 if neg else 2, base.bit_length() + 1):
            root, exact = gmpy2.iroot(base, p)
            if exact:
                base, e, found = root, e * p, True
                break

    if e == 1:
        return None
    return (-base if neg else base), e


def _log_domain(x: mpz, b: mpz) -> None:
    if x < 1:
        raise InvalidArgument(f"logarithm input must be >= 1, got {x}")
    if b < 2:
        raise InvalidArgument(f"logarithm base must be >= 2, got {b}")


def flog(x: mpz, b: mpz) -> mpz:
    """Largest k with b**k <= x."""
    _log_domain(x, b)
    # b**lo <= 2**(lo*bits(b)) <= x  and  b**hi >= 2**(hi*(bits(b)-1)) > x
    lo = (x.bit_length() - 1) // b.bit_length()
    hi = x.bit_length() // (b.bit_length() - 1) + 1
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if b**mid <= x:
            lo = mid
        else:
            hi = mid
    return mpz(lo)


def clog(x: mpz, b: mpz) -> mpz:
    """Smallest k with b**k >= x."""
    k = flog(x, b)
    return k if b**k == x else k + 1


# --- Primality -----------------------------------------------------------------

@lru_cache(maxsize=128)
def _isprime_lru(n: int) -> bool:
    """Process-wide cache for primality of n."""
    return isprime(n)


def _primality_method() -> str:
    method = str(CFG("PRIMALITY.METHOD", "bpsw")).strip().lower()
    if method not in PRIMALITY_METHODS:
        raise ConfigError(f"PRIMALITY.METHOD must be one of {PRIMALITY_METHODS}, got {method!r}")
    return method


def is_prime(n: mpz) -> bool:
    """
    Primality under the configured method:

      bpsw          sympy.isprime, deterministic below 2**64, Baillie-PSW above
      miller-rabin  gmpy2.is_prime with PRIMALITY.MR_ROUNDS random bases
                    (a composite passes with probability <= 4**-rounds)
    """
    if n == 0:
        raise InvalidArgument("primality of zero is undefined")
    if n < 2:
        return False
    method = _primality_method()
    if n.bit_length() > 64:
        logger.debug("testing %d-bit candidate with %s", n.bit_length(), method)
    if method == "bpsw":
        return _isprime_lru(int(n))
    return bool(gmpy2.is_prime(n, int(CFG("PRIMALITY.MR_ROUNDS", 32))))


def next_prime(n: mpz) -> mpz:
    """Smallest prime strictly greater than n."""
    if n < 2:
        return mpz(2)
    if _primality_method() == "bpsw":
        return mpz(nextprime(int(n)))
    rounds = int(CFG("PRIMALITY.MR_ROUNDS", 32))
    c = gmpy2.next_prime(n)
    while not gmpy2.is_prime(c, rounds):
        c = gmpy2.next_prime(c)
    return c


def primorial(n: int) -> mpz:
    return gmpy2.primorial(check_word(n, "primorial argument"))


# --- Factorization and arithmetic functions ----------------------------------------

def factor_map(n: mpz) -> dict[mpz, int]:
    """
    Complete factorization of |n| as {prime: exponent}; {} for n = ±1.

    Trial division always runs; Pollard rho, p-1 and ECM follow the
    FACTORING.* switches of the active profile.
    """
    if n == 0:
        raise InvalidArgument("cannot factor zero")
    n = abs(n)
    if n == 1:
        return {}

    t0 = perf_counter()
    fac = factorint(
        int(n),
        use_trial=True,
        use_rho=bool(CFG("FACTORING.USE_RHO", True)),
        use_pm1=bool(CFG("FACTORING.USE_PM1", True)),
        use_ecm=bool(CFG("FACTORING.USE_ECM", True)),
        verbose=False,
    )
    logger.debug(
        "factored %d-bit input into %d primes in %.3fs",
        n.bit_length(), len(fac), perf_counter() - t0,
    )
    return {mpz(p): int(e) for p, e in fac.items()}


def euler_phi(n: mpz) -> mpz:
    if n <= 0:
        raise InvalidArgument(f"Euler phi needs n > 0, got {n}")
    phi = mpz(1)
    for p, e in factor_map(n).items():
        phi *= (p - 1) * p ** (e - 1)
    return phi


def moebius_mu(n: mpz) -> int:
    if n == 0:
        return 0
    fac = factor_map(n)
    if any(e > 1 for e in fac.values()):
        return 0
    return -1 if len(fac) % 2 else 1


def _tau_from_fac(fac: dict[mpz, int]) -> mpz:
    t = mpz(1)
    for e in fac.values():
        t *= e + 1
    return t


def _sigma_k_from_fac(fac: dict[mpz, int], k: int) -> mpz:
    s = mpz(1)
    for p, e in fac.items():
        pk = p**k
        s *= (pk ** (e + 1) - 1) // (pk - 1)
    return s


def divisor_sigma(n: mpz, k: int) -> mpz:
    """Sum of the k-th powers of the positive divisors of |n|; k = 0 counts them."""
    k = check_word(k, "divisor power")
    if n == 0:
        return mpz(0)
    fac = factor_map(n)
    return _tau_from_fac(fac) if k == 0 else _sigma_k_from_fac(fac, k)


# --- Combinatorial sequences -----------------------------------------------------

def factorial(n: int) -> mpz:
    return gmpy2.fac(check_word(n, "factorial argument"))


def fibonacci(n: int) -> mpz:
    return gmpy2.fib(check_word(n, "Fibonacci index"))


def binomial(n: int, k: int) -> mpz:
    """n choose k for word-sized n, k >= 0; zero when k > n."""
    return gmpy2.comb(check_word(n, "binomial n"), check_word(k, "binomial k"))


def rising_factorial(x: mpz, k: int) -> mpz:
    """x (x+1) ... (x+k-1); 1 for k = 0."""
    k = check_word(k, "rising factorial length")
    return mpz(int(rf(int(x), k)))
