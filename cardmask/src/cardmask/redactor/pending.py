"""Bookkeeping for the digit run that is still open."""
from __future__ import annotations

from typing import Iterator, List

from ..errors import PendingOffsetError, WindowRangeError


class PendingBuffer:
    """Bytes of the open run, addressed by absolute stream position.

    ``base`` is the stream position of the first buffered byte, which equals the
    number of bytes already handed to the sink.
    """

    __slots__ = ("data", "base")

    def __init__(self) -> None:
        self.data = bytearray()
        self.base = 0

    def __len__(self) -> int:
        return len(self.data)

    def append(self, value: int) -> None:
        self.data.append(value)

    def overwrite(self, position: int, value: int) -> None:
        offset = position - self.base
        if not 0 <= offset < len(self.data):
            raise PendingOffsetError(
                f"position {position} is outside the pending run [{self.base}, {self.base + len(self.data)})"
            )
        self.data[offset] = value

    def advance(self, count: int) -> None:
        """Account for ``count`` bytes written to the sink outside the buffer."""
        self.base += count

    def take(self) -> bytes:
        """Return and clear the buffered run, moving ``base`` past it."""
        chunk = bytes(self.data)
        self.base += len(chunk)
        self.data.clear()
        return chunk


class PositionRing:
    """Absolute stream positions of the most recent digits.

    Uses the same mirrored layout as :class:`~cardmask.luhn.history.DigitHistory`
    so the newest ``capacity`` entries are always contiguous below the cursor.
    """

    __slots__ = ("_capacity", "_slots", "_cursor")

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._slots: List[int] = [0] * (2 * capacity)
        self._cursor = capacity

    def record(self, position: int) -> None:
        cursor = self._cursor
        self._slots[cursor] = self._slots[cursor - self._capacity] = position
        if cursor == 2 * self._capacity - 1:
            self._cursor = self._capacity
        else:
            self._cursor = cursor + 1

    def latest(self, count: int) -> Iterator[int]:
        """Yield the ``count`` most recent positions, newest first."""
        if not 0 < count <= self._capacity:
            raise WindowRangeError(f"cannot look back {count} digits with capacity {self._capacity}")
        head = self._cursor - 1 if self._cursor > self._capacity else 2 * self._capacity - 1
        for index in range(head, head - count, -1):
            yield self._slots[index]

    def reset(self) -> None:
        self._cursor = self._capacity


__all__ = ["PendingBuffer", "PositionRing"]
