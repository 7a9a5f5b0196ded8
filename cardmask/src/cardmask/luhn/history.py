"""Fixed-size digit history with running window sums."""
from __future__ import annotations

from typing import List

from ..errors import WindowRangeError
from ..models import DEFAULT_BOUNDS, WindowBounds


class DigitHistory:
    """Keep the last ``max_length`` values and one running sum per window length.

    Values are stored twice, back to back, in a buffer of ``2 * max_length``
    slots: the write cursor moves over the upper half and each value is mirrored
    into the lower half. Looking ``n`` values behind the cursor is then a single
    subtraction that never leaves the buffer::

        [v0, v1, v2, v3, v0, v1, v2, v3]
                         ^ cursor range starts here

    ``sums[i]`` is the sum of the last ``min(total, min_length + i)`` values, so
    appending costs one subtraction and one addition per window length instead
    of re-summing the window.
    """

    __slots__ = ("bounds", "_values", "_sums", "_cursor", "_total")

    def __init__(self, bounds: WindowBounds = DEFAULT_BOUNDS) -> None:
        self.bounds = bounds
        self._values: List[int] = [0] * (2 * bounds.max_length)
        self._sums: List[int] = [0] * bounds.span
        self._cursor = bounds.max_length
        self._total = 0

    @property
    def total(self) -> int:
        """Number of values appended since the last reset."""
        return self._total

    def append(self, value: int) -> None:
        self._total += 1
        total = self._total
        values = self._values
        sums = self._sums
        cursor = self._cursor
        length = self.bounds.min_length
        for index in range(len(sums)):
            if total >= length:
                sums[index] -= values[cursor - length]
            sums[index] += value
            length += 1

        capacity = self.bounds.max_length
        values[cursor] = value
        values[cursor - capacity] = value
        if cursor == 2 * capacity - 1:
            self._cursor = capacity
        else:
            self._cursor = cursor + 1

    def window_sum(self, length: int) -> int:
        self._check_length(length)
        return self._sums[length - self.bounds.min_length]

    def window_sum_divisible(self, length: int) -> bool:
        """Return whether the last ``length`` values sum to a multiple of ten.

        Always ``False`` while fewer than ``length`` values have been appended.
        """
        self._check_length(length)
        if self._total < length:
            return False
        return self._sums[length - self.bounds.min_length] % 10 == 0

    def reset(self) -> None:
        values = self._values
        sums = self._sums
        for index in range(len(values)):
            values[index] = 0
        for index in range(len(sums)):
            sums[index] = 0
        self._cursor = self.bounds.max_length
        self._total = 0

    def _check_length(self, length: int) -> None:
        if length not in self.bounds:
            raise WindowRangeError(
                f"window {length} outside [{self.bounds.min_length}, {self.bounds.max_length}]"
            )


__all__ = ["DigitHistory"]
