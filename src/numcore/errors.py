# -----------------------------------------------------------------------------
#  errors.py
#  Error classes raised by the integer engine
# -----------------------------------------------------------------------------

from __future__ import annotations


class NumcoreError(Exception):
    """Base class for every error raised by numcore."""


class ParseError(NumcoreError, ValueError):
    pass


class DivisionByZero(NumcoreError, ZeroDivisionError):
    pass


class InexactDivision(NumcoreError, ArithmeticError):
    pass


class InvalidArgument(NumcoreError, ValueError):
    pass


class NotInvertible(NumcoreError, ArithmeticError):
    pass


class UnsatisfiableSystem(NumcoreError, ArithmeticError):
    pass


class DecodeError(NumcoreError, ValueError):
    pass


class ConfigError(NumcoreError, ValueError):
    pass
