# -----------------------------------------------------------------------------
#  product.py
#  Prime-power factorization results
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from gmpy2 import mpz

from numcore import ntheory
from numcore.errors import InvalidArgument
from numcore.fmt import format_factorization
from numcore.integer import Integer
from numcore.modular import powm


class Product(Mapping):
    """
    Immutable mapping prime -> multiplicity, iterated in ascending prime order.

    The sign of the factored value is not stored; factor(-12) and factor(12)
    give the same Product.
    """

    __slots__ = ("_fac",)

    def __init__(self, factors: Mapping[Any, Any] | Iterable[tuple[Any, Any]] = ()):
        items = factors.items() if isinstance(factors, Mapping) else factors
        fac: dict[Integer, Integer] = {}
        for p, e in items:
            p, e = Integer(p), Integer(e)
            if p <= 1 or not ntheory.is_prime(mpz(int(p))):
                raise InvalidArgument(f"factor base must be a prime, got {p}")
            if e <= 0:
                raise InvalidArgument(f"multiplicity of {p} must be positive, got {e}")
            fac[p] = fac.get(p, Integer(0)) + e
        self._fac = dict(sorted(fac.items()))

    def __getitem__(self, p: Any) -> Integer:
        return self._fac[p]

    def __iter__(self) -> Iterator[Integer]:
        return iter(self._fac)

    def __len__(self) -> int:
        return len(self._fac)

    def __hash__(self) -> int:
        return hash(frozenset(self._fac.items()))

    def __repr__(self) -> str:
        body = ", ".join(f"{p}: {e}" for p, e in self._fac.items())
        return f"Product({{{body}}})"

    def __str__(self) -> str:
        return format_factorization(self._fac)

    def evaluate(self) -> Integer:
        """The value prod(p**e)."""
        acc = mpz(1)
        for p, e in self._fac.items():
            acc *= int(p) ** int(e)
        return Integer(acc)

    def evaluate_mod(self, m: Any) -> Integer:
        """prod(p**e) mod m for m > 0, reducing after every factor."""
        m = Integer(m)
        if m <= 0:
            raise InvalidArgument(f"modulus must be positive, got {m}")
        mv = mpz(int(m))
        acc = mpz(1) % mv
        for p, e in self._fac.items():
            acc = acc * powm(mpz(int(p)), mpz(int(e)), mv) % mv
        return Integer(acc)

    def divisors(self) -> list[Integer]:
        """All positive divisors of the evaluated value, ascending."""
        ds = [mpz(1)]
        for p, e in self._fac.items():
            cur = []
            pe = mpz(1)
            for _ in range(int(e) + 1):
                for d in ds:
                    cur.append(d * pe)
                pe *= int(p)
            ds = cur
        return [Integer(d) for d in sorted(ds)]


def factor(n: Any) -> Product:
    """
    Factor |n| into primes. factor(±1) is the empty Product; zero raises
    InvalidArgument.
    """
    fac = ntheory.factor_map(mpz(int(Integer(n))))
    return Product(fac)
