"""Compensated (Kahan–Neumaier) and plain floating-point accumulators."""

from __future__ import annotations

import copy


class KahanAccumulator:
    """Sum numbers with compensation for the lost low-order bits.

    Works with any numeric type that supports addition, subtraction and
    ``abs``; the most sensible are ``float`` and ``complex``.
    """

    __slots__ = ("_sum", "_c")

    def __init__(self):
        self._sum = 0.0
        self._c = 0.0

    def value(self):
        """Return the compensated sum."""
        return self._sum + self._c

    def add(self, right):
        """Add a single number and return this accumulator."""
        total = self._sum + right
        if abs(self._sum) >= abs(right):
            self._c += (self._sum - total) + right
        else:
            self._c += (right - total) + self._sum
        self._sum = total
        return self

    def merge(self, other):
        """Fold another accumulator into this one and return this accumulator."""
        self._sum += other._sum
        self._c += other._c
        return self

    def __iadd__(self, right):
        if isinstance(right, KahanAccumulator):
            return self.merge(right)
        return self.add(right)

    def __add__(self, right):
        result = copy.copy(self)
        result += right
        return result

    def __repr__(self):
        return f"KahanAccumulator(value={self.value()!r})"


class NativeAccumulator:
    """Sum numbers with plain floating-point addition."""

    __slots__ = ("_sum",)

    def __init__(self):
        self._sum = 0.0

    def value(self):
        """Return the sum."""
        return self._sum

    def add(self, right):
        """Add a single number and return this accumulator."""
        self._sum += right
        return self

    def merge(self, other):
        """Fold another accumulator into this one and return this accumulator."""
        self._sum += other._sum
        return self

    def __iadd__(self, right):
        if isinstance(right, NativeAccumulator):
            return self.merge(right)
        return self.add(right)

    def __add__(self, right):
        result = copy.copy(self)
        result += right
        return result

    def __repr__(self):
        return f"NativeAccumulator(value={self.value()!r})"