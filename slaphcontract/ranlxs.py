"""The ranlxs random number generator (single-precision luxury RANLUX).

A subtract-with-borrow generator on 24-bit integers with skipping, as in the
"User's guide for ranlxs and ranlxd v3.2" and "Algorithms used in ranlux
v3.0". The generated numbers are multiples of 2**-24 in ``[0, 1)``.
"""

from __future__ import annotations

from collections.abc import Sequence

_BASE = 0x1000000
_MASK = 0xFFFFFF
_ONE_BIT = 2.0**-24
_STATE_SIZE = 105
_LEVELS = {0: 109, 1: 202, 2: 397}
# Upper bound on the stored numbers as checked when a state is restored.
_STATE_NUM_LIMIT = 167777216


class RanlxsError(ValueError):
    """Raised for a bad luxury level, seed or state."""


class Ranlxs:
    """One independent ranlxs generator."""

    def __init__(self, level=0, seed=1):
        if level not in _LEVELS:
            raise RanlxsError("Bad choice of luxury level (should be 0, 1 or 2)")

        rest = seed
        xbit = []
        for _ in range(31):
            xbit.append(rest % 2)
            rest //= 2
        if seed <= 0 or rest != 0:
            raise RanlxsError("Bad choice of seed (should be between 1 and 2^31-1)")

        num = [0] * 96
        ibit, jbit = 0, 18
        for i in range(4):
            for k in range(24):
                ix = 0
                for _ in range(24):
                    ix = 2 * ix + xbit[ibit]
                    xbit[ibit] = (xbit[ibit] + xbit[jbit]) % 2
                    ibit = (ibit + 1) % 31
                    jbit = (jbit + 1) % 31
                if k % 4 == i:
                    ix = 16777215 - ix
                num[4 * k + i] = ix

        self._num = num
        self._carry = [0, 0, 0, 0]
        self._pr = _LEVELS[level]
        self._prm = self._pr % 12
        self._ir = 0
        self._jr = 7
        self._is = 95
        self._is_old = 0

    def _update(self):
        num = self._num
        carry = self._carry
        pi, pj = self._ir, self._jr
        for _ in range(self._pr):
            lo_i, lo_j = 8 * pi, 8 * pj
            for lane in range(4):
                d = num[lo_j + lane] - num[lo_i + lane] - carry[lane]
                if d < 0:
                    num[lo_i + 4 + lane] += 1
                num[lo_i + lane] = (d + _BASE) & _MASK
            for lane in range(4):
                d = num[lo_j + 4 + lane] - num[lo_i + 4 + lane]
                carry[lane] = 1 if d < 0 else 0
                num[lo_i + 4 + lane] = (d + _BASE) & _MASK
            pi = (pi + 1) % 12
            pj = (pj + 1) % 12

        self._ir = (self._ir + self._prm) % 12
        self._jr = (self._jr + self._prm) % 12
        self._is = 8 * self._ir
        self._is_old = self._is

    def random(self, n):
        """Return the next ``n`` random numbers as a list of floats."""
        result = []
        for _ in range(n):
            self._is = (self._is + 1) % 96
            if self._is == self._is_old:
                self._update()
            result.append(_ONE_BIT * self._num[self._is])
        return result

    @staticmethod
    def state_size():
        """Number of integers needed to store the generator state."""
        return _STATE_SIZE

    def get_state(self):
        """Return the state as a list of ``state_size()`` integers."""
        return [
            _STATE_SIZE,
            *self._num,
            *self._carry,
            self._pr,
            self._ir,
            self._jr,
            self._is,
        ]

    def reset(self, state: Sequence[int]):
        """Restore the generator to a state returned by ``get_state``."""
        state = list(state)
        if len(state) < _STATE_SIZE or state[0] != _STATE_SIZE:
            raise RanlxsError("Unexpected input data")
        num = state[1:97]
        if any(not 0 <= value < _STATE_NUM_LIMIT for value in num):
            raise RanlxsError("Unexpected input data")
        carry = state[97:101]
        if any(value not in (0, 1) for value in carry):
            raise RanlxsError("Unexpected input data")
        pr, ir, jr, is_ = state[101:105]
        if (
            pr not in _LEVELS.values()
            or not 0 <= ir <= 11
            or not 0 <= jr <= 11
            or jr != (ir + 7) % 12
            or not 0 <= is_ <= 95
        ):
            raise RanlxsError("Unexpected input data")

        self._num = num
        self._carry = carry
        self._pr = pr
        self._prm = pr % 12
        self._ir = ir
        self._jr = jr
        self._is = is_
        self._is_old = 8 * ir

    @classmethod
    def from_state(cls, state):
        """Create a generator in the given state."""
        generator = cls()
        generator.reset(state)
        return generator