import math
import struct
import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from slaphcontract import io_utils

_OPPOSITE = ">" if sys.byteorder == "little" else "<"
_NATIVE = "<" if sys.byteorder == "little" else ">"


def test_is_nan():
    assert io_utils.is_nan(float("nan"))
    assert not io_utils.is_nan(1.0)
    assert not io_utils.is_nan(float("inf"))


def test_big_endian_matches_platform():
    assert io_utils.big_endian() == (sys.byteorder == "big")


def test_byte_swap_words():
    data = bytes(range(1, 9))
    assert io_utils.byte_swap(data) == bytes([4, 3, 2, 1, 8, 7, 6, 5])


def test_byte_swap_double_words():
    data = bytes(range(1, 17))
    assert io_utils.byte_swap_double(data) == bytes(range(8, 0, -1)) + bytes(
        range(16, 8, -1)
    )


def test_byte_swap_assign_matches_struct():
    values = [1.5, -2.25, 1e300]
    big = struct.pack(">3d", *values)
    little = struct.pack("<3d", *values)
    assert io_utils.byte_swap_assign(big) == little
    assert io_utils.byte_swap_assign(little) == big


def test_byte_swap_assign_singleprec_matches_struct():
    values = [0.5, -3.0]
    assert io_utils.byte_swap_assign_singleprec(struct.pack(">2f", *values)) == (
        struct.pack("<2f", *values)
    )


@given(st.binary().map(lambda b: b[: len(b) - len(b) % 8]))
def test_swaps_are_involutions(data):
    assert io_utils.byte_swap(io_utils.byte_swap(data)) == data
    assert io_utils.byte_swap_double(io_utils.byte_swap_double(data)) == data


@pytest.mark.parametrize(
    "func",
    [
        io_utils.byte_swap,
        io_utils.byte_swap_double,
        io_utils.byte_swap_assign,
        io_utils.byte_swap_assign_singleprec,
        io_utils.byte_swap_assign_single2double,
        io_utils.single2double,
    ],
)
def test_bad_length_raises(func):
    with pytest.raises(ValueError):
        func(b"\x00\x01\x02")


def test_single2double_of_swapped_floats():
    data = struct.pack(_OPPOSITE + "3f", 1.5, -0.25, 8.0)
    assert io_utils.byte_swap_assign_single2double(data) == [1.5, -0.25, 8.0]


def test_double2single_swapped_layout():
    assert io_utils.byte_swap_assign_double2single([1.5, -0.25]) == struct.pack(
        _OPPOSITE + "2f", 1.5, -0.25
    )


def test_double2single_native_layout():
    assert io_utils.double2single([2.0, -4.5]) == struct.pack(_NATIVE + "2f", 2.0, -4.5)


def test_double2single_rounds_to_single_precision():
    narrowed = io_utils.single2double(io_utils.double2single([0.1]))
    expected = struct.unpack("f", struct.pack("f", 0.1))[0]
    assert narrowed == [expected]
    assert narrowed[0] != 0.1


@given(
    st.lists(
        st.floats(width=32, allow_nan=False, allow_infinity=False), max_size=20
    )
)
def test_single_precision_round_trips(values):
    assert io_utils.single2double(io_utils.double2single(values)) == values
    swapped = io_utils.byte_swap_assign_double2single(values)
    assert io_utils.byte_swap_assign_single2double(swapped) == values


def test_nan_survives_conversion():
    (value,) = io_utils.single2double(io_utils.double2single([math.nan]))
    assert io_utils.is_nan(value)