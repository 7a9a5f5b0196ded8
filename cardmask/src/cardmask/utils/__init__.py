"""Utility exports."""
from .checks import luhn_checksum, luhn_valid, strip_separators

__all__ = ["luhn_checksum", "luhn_valid", "strip_separators"]
