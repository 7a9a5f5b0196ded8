"""Utility validation helpers."""
from __future__ import annotations

from typing import Sequence

import regex

_SEPARATORS = regex.compile(r"[ -]")
_DIGITS_ONLY = regex.compile(r"[0-9]+")


def strip_separators(value: str) -> str:
    return _SEPARATORS.sub("", value)


def luhn_checksum(digits: Sequence[int]) -> int:
    checksum = 0
    parity = len(digits) % 2
    for index, digit in enumerate(digits):
        if index % 2 == parity:
            digit *= 2
            if digit > 9:
                digit -= 9
        checksum += digit
    return checksum


def luhn_valid(value: str, min_length: int | None = None, max_length: int | None = None) -> bool:
    """Check a whole value, ignoring space and hyphen separators.

    Values containing anything other than ASCII digits and separators, or
    whose digit count falls outside the optional bounds, are invalid.
    """

    compact = strip_separators(value)
    if not _DIGITS_ONLY.fullmatch(compact):
        return False
    if min_length is not None and len(compact) < min_length:
        return False
    if max_length is not None and len(compact) > max_length:
        return False
    return luhn_checksum([int(char) for char in compact]) % 10 == 0


__all__ = ["strip_separators", "luhn_checksum", "luhn_valid"]
