"""Central exception hierarchy"""
from __future__ import annotations


class CardmaskError(Exception):
    """Base exception for all failures"""


class ConfigError(CardmaskError, ValueError):
    """Raised when configuration cannot be read or fails validation"""


class ContractViolation(CardmaskError, AssertionError):
    """Raised when internal bookkeeping is used outside its contract.

    These indicate a defect in the caller and are never caught by cardmask.
    """


class WindowRangeError(ContractViolation):
    """Raised for a window length outside the configured bounds"""


class PendingOffsetError(ContractViolation):
    """Raised when a digit position maps outside the pending run buffer"""


__all__ = [
    "CardmaskError",
    "ConfigError",
    "ContractViolation",
    "WindowRangeError",
    "PendingOffsetError",
]
