"""Incremental Luhn checksum exports."""
from .history import DigitHistory
from .tracker import ParityTracker, luhn_double

__all__ = ["DigitHistory", "ParityTracker", "luhn_double"]
