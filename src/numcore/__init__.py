from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numcore")
except PackageNotFoundError:
    __version__ = "0+unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API re-exports
from .config import has_profile, load_settings, read_current_profile
from .errors import (
    ConfigError,
    DecodeError,
    DivisionByZero,
    InexactDivision,
    InvalidArgument,
    NotInvertible,
    NumcoreError,
    ParseError,
    UnsatisfiableSystem,
)
from .integer import (
    Integer,
    binomial,
    crt,
    factorial,
    fibonacci,
    fmma,
    fmms,
    gcd,
    lcm,
    multi_crt,
    primorial,
    xgcd,
)
from .product import Product, factor
from .rational import Rational
from .runtime import APPLY, CFG
from .serialize import decode, encode
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "ConfigError",
    "DecodeError",
    "DivisionByZero",
    "InexactDivision",
    "Integer",
    "InvalidArgument",
    "NotInvertible",
    "NumcoreError",
    "ParseError",
    "Product",
    "Rational",
    "UnsatisfiableSystem",
    "__version__",
    "binomial",
    "crt",
    "decode",
    "encode",
    "factor",
    "factorial",
    "fibonacci",
    "fmma",
    "fmms",
    "gcd",
    "has_profile",
    "lcm",
    "load_settings",
    "multi_crt",
    "primorial",
    "read_current_profile",
    "workspace_dir",
    "xgcd",
]
