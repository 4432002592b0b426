"""Iteration over time-slice pairs of time-diluted quark lines."""

from __future__ import annotations

import copy
import enum
import itertools
from collections.abc import Iterator


class DilutionType(enum.Enum):
    """How time slices are grouped into dilution blocks."""

    BLOCK = "B"
    INTERLACE = "I"


def _not_implemented(dilution_type):
    return ValueError(f"This dilution scheme is not implemented: {dilution_type!r}")


class BlockIterator:
    """Position within the slice pairs of one pair of dilution blocks."""

    def __init__(
        self,
        slice_source,
        slice_sink,
        block_source,
        block_sink,
        num_slice,
        num_block,
        pass_,
        dilution_type,
        one_sink_slice=False,
    ):
        self._slice_source = slice_source
        self._slice_sink = slice_sink
        self._block_source = block_source
        self._block_sink = block_sink
        self._num_slice = num_slice
        self._num_block = num_block
        self._pass = pass_
        self._type = dilution_type
        self._one_sink_slice = one_sink_slice

    def advance(self):
        """Step to the next slice pair and return this iterator."""
        block_size = self._num_slice // self._num_block
        if self._type is DilutionType.BLOCK:
            block_source_begin = self._block_source * block_size
            block_source_end = (self._block_source + 1) * block_size
            block_sink_begin = self._block_sink * block_size
            block_sink_end = (self._block_sink + 1) * block_size

            self._slice_sink += block_size if self._one_sink_slice else 1

            if self._slice_sink == block_sink_end:
                self._slice_sink = block_sink_begin
                self._slice_source += 1

            if self._slice_source == block_source_end:
                self._next_pass(block_sink_begin, block_source_begin)
        elif self._type is DilutionType.INTERLACE:
            block_source_begin = self._block_source
            block_sink_begin = self._block_sink

            self._slice_sink += self._num_slice if self._one_sink_slice else block_size

            if self._slice_sink >= self._num_slice:
                self._slice_sink = block_sink_begin
                self._slice_source += block_size

            if self._slice_source >= self._num_slice:
                self._next_pass(block_sink_begin, block_source_begin)
        else:
            raise _not_implemented(self._type)
        return self

    def _next_pass(self, new_source, new_sink):
        self._slice_source = new_source
        self._slice_sink = new_sink
        self._pass += 1
        if self._block_source == self._block_sink:
            self._pass += 1
        self._block_source, self._block_sink = self._block_sink, self._block_source

    def same_position(self, other):
        """Whether both iterators are at the same block pair and pass.

        The current slices are not compared.
        """
        return (
            self._block_source == other._block_source
            and self._block_sink == other._block_sink
            and self._num_slice == other._num_slice
            and self._num_block == other._num_block
            and self._pass == other._pass
            and self._type == other._type
        )

    def source(self):
        return self._slice_source

    def sink(self):
        return self._slice_sink

    def source_block(self):
        return self._block_source

    def sink_block(self):
        return self._block_sink

    def qline_id(self):
        """Index of the source slice within ``[0, 2 * block_size)``.

        The first half belongs to the first pass, the second half to the pass
        with source and sink blocks exchanged.
        """
        block_size = self._num_slice // self._num_block
        if self._type is DilutionType.BLOCK:
            return self._slice_source % block_size + self._pass * block_size
        if self._type is DilutionType.INTERLACE:
            return self._slice_source // block_size + self._pass * block_size
        raise _not_implemented(self._type)

    def __repr__(self):
        return (
            f"BlockIterator(source={self._slice_source}, sink={self._slice_sink}, "
            f"source_block={self._block_source}, sink_block={self._block_sink}, "
            f"pass={self._pass}, type={self._type.value})"
        )


class DilutionIterator:
    """One pair of dilution blocks (source block, sink block)."""

    def __init__(
        self,
        block_source,
        block_sink,
        num_slice,
        num_block,
        dilution_type,
        one_sink_slice=False,
    ):
        self._block_source = block_source
        self._block_sink = block_sink
        self._num_slice = num_slice
        self._num_block = num_block
        self._type = dilution_type
        self._one_sink_slice = one_sink_slice

    def _make(self, pass_):
        block_size = self._num_slice // self._num_block
        if self._type is DilutionType.BLOCK:
            slice_source = self._block_source * block_size
            slice_sink = self._block_sink * block_size
        else:
            slice_source = self._block_source
            slice_sink = self._block_sink
        return BlockIterator(
            slice_source,
            slice_sink,
            self._block_source,
            self._block_sink,
            self._num_slice,
            self._num_block,
            pass_,
            self._type,
            self._one_sink_slice,
        )

    def begin(self):
        """Iterator at the first slice pair."""
        return self._make(0)

    def end(self):
        """Iterator past the last slice pair."""
        return self._make(2)

    def __iter__(self) -> Iterator[BlockIterator]:
        current = self.begin()
        stop = self.end()
        while not current.same_position(stop):
            yield copy.copy(current)
            current.advance()

    def source(self):
        return self._block_source

    def sink(self):
        return self._block_sink

    def one_sink_slice(self):
        """A copy that visits only one sink slice per source slice."""
        result = copy.copy(self)
        result._one_sink_slice = True
        return result

    def __repr__(self):
        return (
            f"DilutionIterator(source_block={self._block_source}, "
            f"sink_block={self._block_sink})"
        )


class DilutionScheme:
    """All unordered pairs of dilution blocks of a time dilution."""

    def __init__(self, num_slice, block_size, dilution_type):
        self._num_slice = num_slice
        self._num_block = num_slice // block_size
        self._type = dilution_type

    @staticmethod
    def make_full_dilution(num_slice):
        return DilutionScheme(num_slice, num_slice, DilutionType.BLOCK)

    def _pairs(self):
        for block_source in range(self._num_block):
            for block_sink in range(block_source, self._num_block):
                yield block_source, block_sink

    def __getitem__(self, i):
        if not 0 <= i < len(self):
            raise IndexError("dilution block pair index out of range")
        block_source, block_sink = next(itertools.islice(self._pairs(), i, None))
        return DilutionIterator(
            block_source, block_sink, self._num_slice, self._num_block, self._type
        )

    def __len__(self):
        return self._num_block * (self._num_block + 1) // 2

    def __iter__(self) -> Iterator[DilutionIterator]:
        for block_source, block_sink in self._pairs():
            yield DilutionIterator(
                block_source, block_sink, self._num_slice, self._num_block, self._type
            )

    def time_to_block(self, time):
        """Dilution block that a time slice belongs to."""
        block_size = self._num_slice // self._num_block
        if self._type is DilutionType.BLOCK:
            return time // block_size
        if self._type is DilutionType.INTERLACE:
            return time % block_size
        raise _not_implemented(self._type)