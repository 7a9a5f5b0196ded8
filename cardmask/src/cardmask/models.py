"""Shared domain models used across cardmask."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

REDACTION_BYTE = ord("X")
SEPARATOR_BYTES = frozenset(b" -")


@dataclass(slots=True, frozen=True)
class WindowBounds:
    """Inclusive range of run suffix lengths checked against the Luhn sum."""

    min_length: int = 14
    max_length: int = 16

    def __post_init__(self) -> None:
        if self.min_length < 1:
            raise ValueError(f"min_length must be at least 1, got {self.min_length}")
        if self.max_length < self.min_length:
            raise ValueError(
                f"max_length ({self.max_length}) must not be below min_length ({self.min_length})"
            )

    @property
    def span(self) -> int:
        return self.max_length - self.min_length + 1

    def __contains__(self, length: object) -> bool:
        return isinstance(length, int) and self.min_length <= length <= self.max_length


DEFAULT_BOUNDS = WindowBounds()


@dataclass(slots=True)
class RedactionStats:
    bytes_read: int = 0
    bytes_written: int = 0
    runs: int = 0
    digits: int = 0
    windows_redacted: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


__all__ = ["REDACTION_BYTE", "SEPARATOR_BYTES", "WindowBounds", "DEFAULT_BOUNDS", "RedactionStats"]
