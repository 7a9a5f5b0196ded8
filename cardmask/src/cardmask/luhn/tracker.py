"""Luhn parity tracking over two digit histories."""
from __future__ import annotations

from typing import Tuple

from ..models import DEFAULT_BOUNDS, WindowBounds
from .history import DigitHistory


def luhn_double(digit: int) -> int:
    """Double ``digit`` and add the digits of the result (``7 -> 14 -> 5``)."""
    if digit < 5:
        return digit * 2
    return (digit - 5) * 2 + 1


class ParityTracker:
    """Track Luhn sums for every window length as digits arrive.

    One history receives plain digits and the other doubled digits. Which one
    is which flips on every append, so the current history always treats the
    newest digit as the undoubled check digit, while the alternate history is
    already prepared for the digit that has not arrived yet.
    """

    __slots__ = ("_histories", "_current")

    def __init__(self, bounds: WindowBounds = DEFAULT_BOUNDS) -> None:
        self._histories: Tuple[DigitHistory, DigitHistory] = (
            DigitHistory(bounds),
            DigitHistory(bounds),
        )
        self._current = 0

    @property
    def total(self) -> int:
        """Digits appended to the current run."""
        return self._histories[self._current].total

    def append(self, digit: int) -> None:
        if not 0 <= digit <= 9:
            raise ValueError(f"Expected a decimal digit, got {digit!r}")
        self._current ^= 1
        self._histories[self._current].append(digit)
        self._histories[self._current ^ 1].append(luhn_double(digit))

    def check_window(self, length: int) -> bool:
        """Return whether the last ``length`` digits pass the Luhn checksum."""
        return self._histories[self._current].window_sum_divisible(length)

    def reset(self) -> None:
        for history in self._histories:
            history.reset()


__all__ = ["ParityTracker", "luhn_double"]
