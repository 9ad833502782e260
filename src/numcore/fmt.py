# src/numcore/fmt.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from numcore.digits import dec_digits


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    n = int(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    # If not long enough, fall back to normal str()
    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    # compute first/last blocks exactly
    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    # zero-pad last block to width 'tail'
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_factorization(fac: Mapping[Any, Any]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"
