# tests/test_serialize.py
"""
Portable byte encoding: layout, canonical-form checks and round trips.

Run: pytest -v tests/test_serialize.py
"""

from __future__ import annotations

import random

import pytest

from numcore import DecodeError, Integer, decode, encode

ENCODE_CASES = [
    (0, b"\x00"),
    (1, b"\x01\x01"),
    (-1, b"\x02\x01"),
    (255, b"\x01\xff"),
    (256, b"\x01\x01\x00"),
    (-256, b"\x02\x01\x00"),
    (2**64, b"\x01\x01" + b"\x00" * 8),
]


@pytest.mark.parametrize("v,data", ENCODE_CASES, ids=[str(v) for v, _ in ENCODE_CASES])
def test_encode_layout(v, data):
    assert encode(v) == data
    assert Integer(v).to_bytes() == data
    assert decode(data) == v
    assert Integer.from_bytes(data) == v


BAD_BUFFERS = [
    (b"", "empty"),
    (b"\x03\x01", "unknown-tag"),
    (b"\xff", "unknown-tag-alone"),
    (b"\x00\x00", "zero-with-body"),
    (b"\x01", "positive-no-magnitude"),
    (b"\x02", "negative-no-magnitude"),
    (b"\x01\x00\x01", "leading-zero"),
    (b"\x02\x00", "negative-zero"),
]


@pytest.mark.parametrize("data", [d for d, _ in BAD_BUFFERS], ids=[i for _, i in BAD_BUFFERS])
def test_decode_rejects_malformed(data):
    with pytest.raises(DecodeError):
        decode(data)


def test_decode_accepts_buffer_types():
    assert decode(bytearray(b"\x02\x05")) == -5
    assert decode(memoryview(b"\x01\x05")) == 5


def test_round_trip_sweep():
    rng = random.Random(1234)
    for _ in range(300):
        bits = rng.randint(0, 2000)
        v = rng.getrandbits(bits) * rng.choice([1, -1])
        data = encode(v)
        assert decode(data) == v
        assert encode(decode(data)) == data
