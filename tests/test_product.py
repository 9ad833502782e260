# tests/test_product.py
"""
Factorization into Product and the Product mapping itself.

Run: pytest -v tests/test_product.py
"""

from __future__ import annotations

import logging
import random

import pytest

from numcore import Integer, InvalidArgument, Product, factor

FACTOR_CASES = [
    (360, {2: 3, 3: 2, 5: 1}),
    (-12, {2: 2, 3: 1}),
    (97, {97: 1}),
    (2**10, {2: 10}),
    (1, {}),
    (-1, {}),
    ((2**61 - 1) * (2**31 - 1), {2**31 - 1: 1, 2**61 - 1: 1}),
    (600851475143, {71: 1, 839: 1, 1471: 1, 6857: 1}),
]


@pytest.mark.parametrize("n,expected", FACTOR_CASES, ids=[f"factor({n})" for n, _ in FACTOR_CASES])
def test_factor_table(n, expected):
    prod = factor(n)
    assert dict(prod) == expected
    assert prod.evaluate() == abs(n)
    assert Integer(n).factor() == prod


def test_factor_round_trip_sweep():
    rng = random.Random(360)
    for _ in range(150):
        n = rng.randint(-(10**15), 10**15) or 1
        prod = factor(n)
        assert prod.evaluate() == abs(n)
        assert all(p.is_prime() and e >= 1 for p, e in prod.items())


def test_factor_zero_rejected():
    with pytest.raises(InvalidArgument):
        factor(0)


def test_prime_is_singleton():
    prod = factor(1_000_003)
    assert len(prod) == 1
    assert prod[1_000_003] == 1


def test_product_mapping_protocol():
    prod = factor(360)
    assert list(prod) == [2, 3, 5]
    assert all(type(p) is Integer and type(e) is Integer for p, e in prod.items())
    assert 3 in prod and 7 not in prod
    assert str(prod) == "2^3 × 3^2 × 5"
    assert str(factor(1)) == "1"
    assert repr(factor(12)) == "Product({2: 2, 3: 1})"
    assert hash(prod) == hash(factor(-360))
    assert len({prod, factor(360)}) == 1


def test_product_construction():
    prod = Product({5: 1, 2: 3})
    assert list(prod) == [2, 5]
    assert Product([(3, 1), (3, 2)]) == {3: 3}
    with pytest.raises(InvalidArgument):
        Product({1: 2})
    with pytest.raises(InvalidArgument):
        Product({4: 1})
    with pytest.raises(InvalidArgument):
        Product([(2, 1), (15, 2)])
    with pytest.raises(InvalidArgument):
        Product({3: 0})
    with pytest.raises(TypeError):
        prod[7] = 1


def test_evaluate_mod():
    prod = factor(360)
    assert prod.evaluate_mod(7) == 360 % 7
    assert prod.evaluate_mod(1) == 0
    assert factor(1).evaluate_mod(5) == 1
    big = Product({2**61 - 1: 1000, 3: 500})
    m = 10**9 + 7
    assert big.evaluate_mod(m) == (pow(2**61 - 1, 1000, m) * pow(3, 500, m)) % m
    with pytest.raises(InvalidArgument):
        prod.evaluate_mod(0)


def test_divisors():
    assert factor(12).divisors() == [1, 2, 3, 4, 6, 12]
    assert factor(1).divisors() == [1]
    assert factor(97).divisors() == [1, 97]
    assert len(factor(720720).divisors()) == Integer(720720).divisor_sigma(0)


def test_factor_logs_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="numcore")
    factor(2**40 - 1)
    assert any("factored" in r.getMessage() for r in caplog.records)
