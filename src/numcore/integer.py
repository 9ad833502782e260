# -----------------------------------------------------------------------------
#  integer.py
#  Arbitrary-precision Integer value type
# -----------------------------------------------------------------------------

"""
``Integer`` wraps a GMP ``mpz`` and exposes the full engine as methods.

Values are immutable: every method returns a new ``Integer`` (bit mutators
included). An ``Integer`` compares and hashes equal to the ``int`` with the
same value, so both can share dict keys and sets.

Absence (no inverse, no modular root, no reconstruction) is reported as
``None``; violated preconditions raise the classes in ``numcore.errors``.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

import gmpy2
from gmpy2 import mpz

from numcore import division, modular, ntheory
from numcore.digits import check_base, format_radix, parse_radix
from numcore.division import WORD_BITS, WORD_LIMIT, check_word
from numcore.errors import InvalidArgument, NotInvertible
from numcore.fmt import abbr_int_fast
from numcore.rational import Rational
from numcore.runtime import CFG

if TYPE_CHECKING:
    from numcore.product import Product

_MPZ = type(mpz(0))
_SI_MIN = -(1 << (WORD_BITS - 1))
_SI_MAX = (1 << (WORD_BITS - 1)) - 1
_WORD_MASK = WORD_LIMIT - 1


def _to_mpz(x: Any) -> mpz | None:
    """mpz value of an Integer-like operand, or None when x is not one."""
    if isinstance(x, Integer):
        return x._v
    if isinstance(x, (int, _MPZ)):
        return mpz(x)
    return None


def _arg(x: Any, what: str = "operand") -> mpz:
    v = _to_mpz(x)
    if v is None:
        raise TypeError(f"{what} must be an Integer or int, got {type(x).__name__}")
    return v


def _wrap(v: mpz) -> Integer:
    obj = object.__new__(Integer)
    object.__setattr__(obj, "_v", v)
    return obj


def _bit_index(i: int) -> int:
    return check_word(i, "bit index")


class Integer:
    """Signed arbitrary-precision integer."""

    __slots__ = ("_v",)

    def __init__(self, value: Any = 0, base: int | None = None):
        if isinstance(value, str):
            v = parse_radix(value, 10 if base is None else base)
        elif base is not None:
            raise TypeError("base is only accepted together with a str value")
        elif isinstance(value, float):
            raise TypeError("Integer() does not accept floats; convert explicitly first")
        else:
            v = _to_mpz(value)
            if v is None:
                try:
                    v = mpz(operator.index(value))
                except TypeError:
                    raise TypeError(
                        f"cannot build an Integer from {type(value).__name__}"
                    ) from None
        object.__setattr__(self, "_v", v)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Integer is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Integer is immutable")

    # --- Construction and formatting -------------------------------------------

    @classmethod
    def from_str(cls, s: str, base: int = 10) -> Integer:
        return _wrap(parse_radix(s, base))

    def to_str_radix(self, base: int = 10) -> str:
        return format_radix(self._v, base)

    @classmethod
    def from_limbs(cls, words: Iterable[int]) -> Integer:
        """Non-negative value sum(w_i * 2**(64*i)) of little-endian 64-bit words."""
        v = mpz(0)
        for i, w in enumerate(words):
            v |= mpz(check_word(w, f"limb {i}")) << (WORD_BITS * i)
        return _wrap(v)

    def limbs(self) -> list[int]:
        """Little-endian 64-bit words of a positive value."""
        if self._v <= 0:
            raise InvalidArgument(f"limbs() needs a positive value, got {self._v}")
        v = int(self._v)
        return [(v >> (WORD_BITS * i)) & _WORD_MASK for i in range(self.size())]

    @classmethod
    def from_bytes(cls, data: bytes) -> Integer:
        from numcore.serialize import decode
        return decode(data)

    def to_bytes(self) -> bytes:
        from numcore.serialize import encode
        return encode(self)

    def __str__(self) -> str:
        return format_radix(self._v, 10)

    def __repr__(self) -> str:
        limit = int(CFG("FORMATTING.REPR_ABBR_DIGITS", 40))
        return f"Integer({abbr_int_fast(self._v, threshold=limit)})"

    def __format__(self, spec: str) -> str:
        return format(int(self._v), spec)

    def __reduce__(self):
        return (Integer, (int(self._v),))

    def __copy__(self) -> Integer:
        return self

    def __deepcopy__(self, memo: dict) -> Integer:
        return self

    # --- Conversions and inspection --------------------------------------------

    def __int__(self) -> int:
        return int(self._v)

    def __index__(self) -> int:
        return int(self._v)

    def __bool__(self) -> bool:
        return bool(self._v)

    def __hash__(self) -> int:
        return hash(int(self._v))

    def sign(self) -> int:
        return int(gmpy2.sign(self._v))

    def abs(self) -> Integer:
        return _wrap(abs(self._v))

    def is_zero(self) -> bool:
        return self._v == 0

    def is_one(self) -> bool:
        return self._v == 1

    def is_even(self) -> bool:
        return bool(gmpy2.is_even(self._v))

    def is_odd(self) -> bool:
        return bool(gmpy2.is_odd(self._v))

    def bits(self) -> int:
        """Bit length of |self|; 0 for zero."""
        return int(self._v.bit_length())

    def size(self) -> int:
        """Number of 64-bit words in |self|; 0 for zero."""
        return (self.bits() + WORD_BITS - 1) // WORD_BITS

    def sizeinbase(self, base: int) -> int:
        """Digits of |self| in base 2..62; may exceed the exact count by one."""
        check_base(base)
        return int(gmpy2.num_digits(abs(self._v), base))

    def fits_si(self) -> bool:
        return _SI_MIN <= self._v <= _SI_MAX

    def abs_fits_ui(self) -> bool:
        return abs(self._v) < WORD_LIMIT

    def get_si(self) -> int | None:
        return int(self._v) if self.fits_si() else None

    def get_ui(self) -> int | None:
        return int(self._v) if 0 <= self._v < WORD_LIMIT else None

    # --- Comparison ------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        o = _to_mpz(other)
        return NotImplemented if o is None else self._v == o

    def __ne__(self, other: Any) -> bool:
        o = _to_mpz(other)
        return NotImplemented if o is None else self._v != o

    def __lt__(self, other: Any) -> bool:
        o = _to_mpz(other)
        return NotImplemented if o is None else self._v < o

    def __le__(self, other: Any) -> bool:
        o = _to_mpz(other)
        return NotImplemented if o is None else self._v <= o

    def __gt__(self, other: Any) -> bool:
        o = _to_mpz(other)
        return NotImplemented if o is None else self._v > o

    def __ge__(self, other: Any) -> bool:
        o = _to_mpz(other)
        return NotImplemented if o is None else self._v >= o

    # --- Elementary arithmetic -------------------------------------------------

    def __neg__(self) -> Integer:
        return _wrap(-self._v)

    def __pos__(self) -> Integer:
        return self

    def __abs__(self) -> Integer:
        return _wrap(abs(self._v))

    def __invert__(self) -> Integer:
        return _wrap(~self._v)

    def __add__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(self._v + o)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(self._v - o)

    def __rsub__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(o - self._v)

    def __mul__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(self._v * o)

    __rmul__ = __mul__

    def __floordiv__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(division.fdiv_qr(self._v, o)[0])

    def __rfloordiv__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(division.fdiv_qr(o, self._v)[0])

    def __mod__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(division.fdiv_qr(self._v, o)[1])

    def __rmod__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(division.fdiv_qr(o, self._v)[1])

    def __divmod__(self, other: Any) -> tuple[Integer, Integer]:
        o = _to_mpz(other)
        if o is None:
            return NotImplemented
        q, r = division.fdiv_qr(self._v, o)
        return _wrap(q), _wrap(r)

    def __rdivmod__(self, other: Any) -> tuple[Integer, Integer]:
        o = _to_mpz(other)
        if o is None:
            return NotImplemented
        q, r = division.fdiv_qr(o, self._v)
        return _wrap(q), _wrap(r)

    def __pow__(self, exp: Any, mod: Any = None) -> Integer:
        e = _to_mpz(exp)
        if e is None:
            return NotImplemented
        if mod is not None:
            return self.powm(e, mod)
        return self.pow(e)

    def __rpow__(self, base: Any) -> Integer:
        b = _to_mpz(base)
        return NotImplemented if b is None else _wrap(b).pow(self._v)

    def __lshift__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else self.mul_2exp(o)

    def __rshift__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else self.fdiv_q_2exp(o)

    def __and__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(self._v & o)

    __rand__ = __and__

    def __or__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(self._v | o)

    __ror__ = __or__

    def __xor__(self, other: Any) -> Integer:
        o = _to_mpz(other)
        return NotImplemented if o is None else _wrap(self._v ^ o)

    __rxor__ = __xor__

    def addmul(self, x: Any, y: Any) -> Integer:
        """self + x*y"""
        return _wrap(self._v + _arg(x) * _arg(y))

    def submul(self, x: Any, y: Any) -> Integer:
        """self - x*y"""
        return _wrap(self._v - _arg(x) * _arg(y))

    def mul2(self, x: Any, y: Any) -> Integer:
        return _wrap(self._v * _arg(x) * _arg(y))

    def mul_2exp(self, e: int) -> Integer:
        return _wrap(self._v << check_word(e))

    def pow(self, e: int) -> Integer:
        return _wrap(self._v ** check_word(e))

    # --- Bits ------------------------------------------------------------------
    # Negative values behave as infinite two's complement.

    def test_bit(self, i: int) -> bool:
        return bool(gmpy2.bit_test(self._v, _bit_index(i)))

    def set_bit(self, i: int) -> Integer:
        return _wrap(gmpy2.bit_set(self._v, _bit_index(i)))

    def clear_bit(self, i: int) -> Integer:
        return _wrap(gmpy2.bit_clear(self._v, _bit_index(i)))

    def complement_bit(self, i: int) -> Integer:
        return _wrap(gmpy2.bit_flip(self._v, _bit_index(i)))

    # --- Division ---------------------------------------------------------------

    def fdiv_qr(self, d: Any) -> tuple[Integer, Integer]:
        q, r = division.fdiv_qr(self._v, _arg(d, "divisor"))
        return _wrap(q), _wrap(r)

    def cdiv_qr(self, d: Any) -> tuple[Integer, Integer]:
        q, r = division.cdiv_qr(self._v, _arg(d, "divisor"))
        return _wrap(q), _wrap(r)

    def tdiv_qr(self, d: Any) -> tuple[Integer, Integer]:
        q, r = division.tdiv_qr(self._v, _arg(d, "divisor"))
        return _wrap(q), _wrap(r)

    def ndiv_qr(self, d: Any) -> tuple[Integer, Integer]:
        q, r = division.ndiv_qr(self._v, _arg(d, "divisor"))
        return _wrap(q), _wrap(r)

    def div_qr(self, d: Any, mode: str = "floor") -> tuple[Integer, Integer]:
        """Quotient and remainder under 'floor', 'ceiling', 'truncate' or 'nearest'."""
        q, r = division.divmod_mode(self._v, _arg(d, "divisor"), mode)
        return _wrap(q), _wrap(r)

    def fdiv_q(self, d: Any) -> Integer:
        return self.fdiv_qr(d)[0]

    def fdiv_r(self, d: Any) -> Integer:
        return self.fdiv_qr(d)[1]

    def cdiv_q(self, d: Any) -> Integer:
        return self.cdiv_qr(d)[0]

    def cdiv_r(self, d: Any) -> Integer:
        return self.cdiv_qr(d)[1]

    def tdiv_q(self, d: Any) -> Integer:
        return self.tdiv_qr(d)[0]

    def tdiv_r(self, d: Any) -> Integer:
        return self.tdiv_qr(d)[1]

    def ndiv_q(self, d: Any) -> Integer:
        return self.ndiv_qr(d)[0]

    def ndiv_r(self, d: Any) -> Integer:
        return self.ndiv_qr(d)[1]

    def fdiv_qr_2exp(self, e: int) -> tuple[Integer, Integer]:
        q, r = division.fdiv_qr_2exp(self._v, e)
        return _wrap(q), _wrap(r)

    def cdiv_qr_2exp(self, e: int) -> tuple[Integer, Integer]:
        q, r = division.cdiv_qr_2exp(self._v, e)
        return _wrap(q), _wrap(r)

    def tdiv_qr_2exp(self, e: int) -> tuple[Integer, Integer]:
        q, r = division.tdiv_qr_2exp(self._v, e)
        return _wrap(q), _wrap(r)

    def fdiv_q_2exp(self, e: int) -> Integer:
        return self.fdiv_qr_2exp(e)[0]

    def fdiv_r_2exp(self, e: int) -> Integer:
        return self.fdiv_qr_2exp(e)[1]

    def cdiv_q_2exp(self, e: int) -> Integer:
        return self.cdiv_qr_2exp(e)[0]

    def cdiv_r_2exp(self, e: int) -> Integer:
        return self.cdiv_qr_2exp(e)[1]

    def tdiv_q_2exp(self, e: int) -> Integer:
        return self.tdiv_qr_2exp(e)[0]

    def tdiv_r_2exp(self, e: int) -> Integer:
        return self.tdiv_qr_2exp(e)[1]

    def divexact(self, d: Any) -> Integer:
        return _wrap(division.divexact(self._v, _arg(d, "divisor")))

    def divides(self, other: Any) -> bool:
        """True when self | other (zero divides only zero)."""
        o = _arg(other)
        if self._v == 0:
            return o == 0
        return bool(gmpy2.is_divisible(o, self._v))

    def symmetric_remainder(self, n: Any) -> Integer:
        """y ≡ self (mod n) with -n/2 < y <= n/2."""
        return _wrap(division.smod(self._v, _arg(n, "modulus")))

    smod = symmetric_remainder

    # --- Modular arithmetic ------------------------------------------------------

    def powm(self, e: Any, m: Any) -> Integer:
        return _wrap(modular.powm(self._v, _arg(e, "exponent"), _arg(m, "modulus")))

    def mod_inverse(self, m: Any) -> Integer | None:
        inv = modular.invmod(self._v, _arg(m, "modulus"))
        return None if inv is None else _wrap(inv)

    def invert(self, m: Any) -> Integer:
        inv = self.mod_inverse(m)
        if inv is None:
            raise NotInvertible(f"{self._v} is not invertible mod {m}")
        return inv

    def negmod(self, m: Any) -> Integer:
        return _wrap(modular.negmod(self._v, _arg(m, "modulus")))

    def sqrtmod(self, n: Any) -> Integer | None:
        root = modular.sqrtmod(self._v, _arg(n, "modulus"))
        return None if root is None else _wrap(root)

    def rational_reconstruct(self, m: Any) -> Rational | None:
        """Fraction n/d ≡ self (mod m) with |n|, d <= floor(sqrt((m - 1) / 2))."""
        res = modular.reconstruct_default(self._v, _arg(m, "modulus"))
        return None if res is None else Rational(_wrap(res[0]), _wrap(res[1]))

    def rational_reconstruct2(self, m: Any, n_bound: Any, d_bound: Any) -> Rational | None:
        res = modular.reconstruct(
            self._v, _arg(m, "modulus"), _arg(n_bound, "n_bound"), _arg(d_bound, "d_bound")
        )
        return None if res is None else Rational(_wrap(res[0]), _wrap(res[1]))

    # --- GCD family and symbols -----------------------------------------------

    def gcd(self, other: Any) -> Integer:
        return _wrap(gmpy2.gcd(self._v, _arg(other)))

    def xgcd(self, other: Any) -> tuple[Integer, Integer, Integer]:
        d, a, b = ntheory.xgcd(self._v, _arg(other))
        return _wrap(d), _wrap(a), _wrap(b)

    def lcm(self, other: Any) -> Integer:
        return _wrap(gmpy2.lcm(self._v, _arg(other)))

    def is_coprime(self, other: Any) -> bool:
        return gmpy2.gcd(self._v, _arg(other)) == 1

    def jacobi(self, n: Any) -> int:
        return ntheory.jacobi(self._v, _arg(n, "modulus"))

    def kronecker(self, n: Any) -> int:
        return ntheory.kronecker(self._v, _arg(n, "modulus"))

    # --- Roots, powers and logarithms ---------------------------------------------

    def is_square(self) -> bool:
        return self._v >= 0 and bool(gmpy2.is_square(self._v))

    def sqrt(self) -> Integer:
        return self.sqrtrem()[0]

    def sqrtrem(self) -> tuple[Integer, Integer]:
        """(s, r) with self == s*s + r and 0 <= r <= 2*s."""
        if self._v < 0:
            raise InvalidArgument(f"square root of negative value {self._v}")
        s, r = gmpy2.isqrt_rem(self._v)
        return _wrap(s), _wrap(r)

    def perfect_power(self) -> tuple[Integer, int] | None:
        res = ntheory.perfect_power(self._v)
        return None if res is None else (_wrap(res[0]), res[1])

    def clog(self, base: Any) -> Integer:
        return _wrap(ntheory.clog(self._v, _arg(base, "base")))

    def flog(self, base: Any) -> Integer:
        return _wrap(ntheory.flog(self._v, _arg(base, "base")))

    def remove(self, f: Any) -> tuple[Integer, int]:
        """Strip every factor f > 1: (self / f**k, k) with k maximal."""
        fv = _arg(f, "factor")
        if fv <= 1:
            raise InvalidArgument(f"factor to remove must be > 1, got {fv}")
        if self._v == 0:
            raise InvalidArgument("cannot remove factors from zero")
        y, k = gmpy2.remove(self._v, fv)
        return _wrap(y), int(k)

    # --- Primes and arithmetic functions ------------------------------------------

    def is_prime(self) -> bool:
        return ntheory.is_prime(self._v)

    def next_prime(self) -> Integer:
        return _wrap(ntheory.next_prime(self._v))

    def factor(self) -> Product:
        from numcore.product import factor
        return factor(self)

    def euler_phi(self) -> Integer:
        return _wrap(ntheory.euler_phi(self._v))

    def moebius_mu(self) -> int:
        return ntheory.moebius_mu(self._v)

    def divisor_sigma(self, k: int = 1) -> Integer:
        return _wrap(ntheory.divisor_sigma(self._v, k))

    def rising_factorial(self, k: int) -> Integer:
        return _wrap(ntheory.rising_factorial(self._v, k))


# --- Module-level helpers --------------------------------------------------------

def fmma(a: Any, b: Any, c: Any, d: Any) -> Integer:
    """a*b + c*d"""
    return _wrap(_arg(a) * _arg(b) + _arg(c) * _arg(d))


def fmms(a: Any, b: Any, c: Any, d: Any) -> Integer:
    """a*b - c*d"""
    return _wrap(_arg(a) * _arg(b) - _arg(c) * _arg(d))


def gcd(a: Any, b: Any) -> Integer:
    return Integer(a).gcd(b)


def xgcd(a: Any, b: Any) -> tuple[Integer, Integer, Integer]:
    return Integer(a).xgcd(b)


def lcm(a: Any, b: Any) -> Integer:
    return Integer(a).lcm(b)


def crt(r1: Any, m1: Any, r2: Any, m2: Any) -> Integer:
    """x in [0, m1*m2) with x ≡ r1 (mod m1) and x ≡ r2 (mod m2)."""
    return _wrap(modular.crt(_arg(r1), _arg(m1), _arg(r2), _arg(m2)))


def multi_crt(residues: Sequence[Any], moduli: Sequence[Any], *, signed: bool = False) -> Integer:
    rs = [_arg(r, "residue") for r in residues]
    ms = [_arg(m, "modulus") for m in moduli]
    return _wrap(modular.multi_crt(rs, ms, signed=signed))


def factorial(n: int) -> Integer:
    return _wrap(ntheory.factorial(n))


def fibonacci(n: int) -> Integer:
    return _wrap(ntheory.fibonacci(n))


def binomial(n: int, k: int) -> Integer:
    return _wrap(ntheory.binomial(n, k))


def primorial(n: int) -> Integer:
    return _wrap(ntheory.primorial(n))
