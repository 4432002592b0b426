"""Cartesian product of index ranges."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator


class CartesianProduct:
    """All index combinations for a sequence of lookup-table lengths.

    Each combination is a tuple with one index per length. The first index
    varies fastest.
    """

    def __init__(self, lengths: Iterable[int]):
        self._lengths = tuple(lengths)
        if any(length < 0 for length in self._lengths):
            raise ValueError("lengths must not be negative")

    def __len__(self) -> int:
        return math.prod(self._lengths)

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        for number in range(len(self)):
            combination = []
            for length in self._lengths:
                number, index = divmod(number, length)
                combination.append(index)
            yield tuple(combination)