"""Byte-order and precision conversions for binary lattice data."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Iterable


def is_nan(x):
    """Whether ``x`` is not equal to itself (a NaN)."""
    return x != x


def big_endian():
    """Whether the machine stores integers most significant byte first."""
    return sys.byteorder == "big"


def _swap_words(data, width):
    data = bytes(data)
    if len(data) % width:
        raise ValueError(f"data length {len(data)} is not a multiple of {width}")
    out = bytearray(len(data))
    for offset in range(0, len(data), width):
        out[offset : offset + width] = data[offset : offset + width][::-1]
    return bytes(out)


def byte_swap(data):
    """Reverse the byte order of every 4-byte word."""
    return _swap_words(data, 4)


def byte_swap_double(data):
    """Reverse the byte order of every 8-byte word."""
    return _swap_words(data, 8)


def byte_swap_assign(data):
    """Return a copy of 8-byte doubles with their byte order reversed."""
    return _swap_words(data, 8)


def byte_swap_assign_singleprec(data):
    """Return a copy of 4-byte floats with their byte order reversed."""
    return _swap_words(data, 4)


def byte_swap_assign_single2double(data):
    """Read byte-swapped single-precision floats and widen them to doubles."""
    values = array("f")
    values.frombytes(_swap_words(data, values.itemsize))
    return values.tolist()


def byte_swap_assign_double2single(values: Iterable[float]):
    """Narrow doubles to single precision and return them byte-swapped."""
    narrowed = array("f", values)
    narrowed.byteswap()
    return narrowed.tobytes()


def single2double(values):
    """Widen native single-precision floats (raw bytes) to a list of doubles."""
    widened = array("f")
    data = bytes(values)
    if len(data) % widened.itemsize:
        raise ValueError(
            f"data length {len(data)} is not a multiple of {widened.itemsize}"
        )
    widened.frombytes(data)
    return widened.tolist()


def double2single(values: Iterable[float]):
    """Narrow doubles to native single-precision floats, returned as raw bytes."""
    return array("f", values).tobytes()