import itertools

import pytest
from hypothesis import given
from hypothesis import strategies as st

from slaphcontract.cartesian import CartesianProduct


def test_small_example_order():
    assert list(CartesianProduct([2, 3])) == [
        (0, 0),
        (1, 0),
        (0, 1),
        (1, 1),
        (0, 2),
        (1, 2),
    ]


def test_no_lengths_gives_single_empty_combination():
    product = CartesianProduct([])
    assert len(product) == 1
    assert list(product) == [()]


def test_zero_length_gives_nothing():
    product = CartesianProduct([3, 0, 2])
    assert len(product) == 0
    assert list(product) == []


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        CartesianProduct([2, -1])


def test_iterable_twice():
    product = CartesianProduct([2, 2])
    expected = [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert list(product) == expected
    assert list(product) == expected


@given(st.lists(st.integers(min_value=1, max_value=4), max_size=4))
def test_matches_reversed_itertools_product(lengths):
    product = CartesianProduct(lengths)
    expected = [
        tuple(reversed(combo))
        for combo in itertools.product(*(range(n) for n in reversed(lengths)))
    ]
    assert list(product) == expected


@given(st.lists(st.integers(min_value=0, max_value=4), max_size=4))
def test_length_and_uniqueness(lengths):
    product = CartesianProduct(lengths)
    combos = list(product)
    assert len(combos) == len(product)
    assert len(set(combos)) == len(combos)
    for combo in combos:
        assert len(combo) == len(lengths)
        assert all(0 <= idx < n for idx, n in zip(combo, lengths))