# src/numcore/rational.py
from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from numcore.integer import Integer


class Rational(NamedTuple):
    """
    A reduced fraction recovered by rational reconstruction.

    The denominator is always positive and coprime to the numerator, so
    equal fractions compare and hash equal.
    """
    numerator: Integer
    denominator: Integer

    def to_fraction(self) -> Fraction:
        return Fraction(int(self.numerator), int(self.denominator))

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"
