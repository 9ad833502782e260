# -----------------------------------------------------------------------------
#  digits.py
#  Radix conversion for bases 2..62 and decimal digit counting
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from functools import cache

import gmpy2
from gmpy2 import mpz

from numcore.errors import ParseError

MIN_BASE = 2
MAX_BASE = 62

# GMP digit order: bases up to 36 are case-insensitive, above that upper case
# letters are 10..35 and lower case letters 36..61.
ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_CASE_FOLD_LIMIT = 36


def check_base(base: int) -> int:
    if isinstance(base, bool) or not isinstance(base, int):
        raise ParseError(f"base must be an int, got {type(base).__name__}")
    if not MIN_BASE <= base <= MAX_BASE:
        raise ParseError(f"base must be in [{MIN_BASE}, {MAX_BASE}], got {base}")
    return base


@cache
def _numeral_re(base: int) -> re.Pattern[str]:
    digits = ALPHABET[:base]
    if base <= _CASE_FOLD_LIMIT:
        digits = "".join(sorted(set(digits + digits.lower())))
    return re.compile(f"-?[{re.escape(digits)}]+")


def parse_radix(s: str, base: int = 10) -> mpz:
    """
    Parse a numeral with an optional leading '-' in the given base.

    No whitespace, '+', '_' or '0x'-style prefixes are accepted: every
    character after the sign must be a digit of the base.
    """
    check_base(base)
    if not isinstance(s, str):
        raise ParseError(f"expected str, got {type(s).__name__}")
    if not s or s == "-":
        raise ParseError("empty numeral")
    if _numeral_re(base).fullmatch(s) is None:
        bad = next(
            (ch for ch in s.removeprefix("-") if _numeral_re(base).fullmatch(ch) is None),
            s,
        )
        raise ParseError(f"invalid digit {bad!r} for base {base} in {s!r}")
    return mpz(s, base)


def format_radix(x: mpz, base: int = 10) -> str:
    """Minimal-length numeral of x; '-' only for negatives, zero is '0'."""
    check_base(base)
    x = mpz(x)
    s = abs(x).digits(base)
    # gmpy2 tags bases 2, 8 and 16 with 0b/0o/0x; a real numeral never starts with 0
    if len(s) > 1 and s[0] == "0":
        s = s[2:]
    return "-" + s if x < 0 else s


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(mpz(n))
    if n == 0:
        return 1
    # sizeinbase may overshoot by one; correct against a power of ten
    est = gmpy2.num_digits(n, 10)
    if n < mpz(10) ** (est - 1):
        est -= 1
    return int(est)
