# -----------------------------------------------------------------------------
#  serialize.py
#  Portable byte encoding of Integer values
# -----------------------------------------------------------------------------

"""
Layout::

    byte 0    sign tag: 0x00 zero, 0x01 positive, 0x02 negative
    byte 1..  |x| big-endian, no leading zero byte (absent for zero)

The encoding is canonical: every value has exactly one byte string and
``decode`` refuses anything else.
"""

from __future__ import annotations

from typing import Any

from numcore.errors import DecodeError
from numcore.integer import Integer

TAG_ZERO = 0x00
TAG_POS = 0x01
TAG_NEG = 0x02


def encode(x: Any) -> bytes:
    v = int(Integer(x))
    if v == 0:
        return bytes([TAG_ZERO])
    mag = abs(v)
    tag = TAG_POS if v > 0 else TAG_NEG
    return bytes([tag]) + mag.to_bytes((mag.bit_length() + 7) // 8, "big")


def decode(data: bytes | bytearray | memoryview) -> Integer:
    buf = bytes(data)
    if not buf:
        raise DecodeError("empty buffer")
    tag, body = buf[0], buf[1:]
    if tag == TAG_ZERO:
        if body:
            raise DecodeError(f"zero tag followed by {len(body)} byte(s)")
        return Integer(0)
    if tag not in (TAG_POS, TAG_NEG):
        raise DecodeError(f"unknown sign tag 0x{tag:02x}")
    if not body:
        raise DecodeError("missing magnitude")
    if body[0] == 0:
        raise DecodeError("magnitude has a leading zero byte")
    mag = int.from_bytes(body, "big")
    return Integer(mag if tag == TAG_POS else -mag)
