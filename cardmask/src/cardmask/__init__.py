"""Streaming redaction of Luhn-valid digit runs."""
import logging as _logging

from .models import DEFAULT_BOUNDS, RedactionStats, WindowBounds
from .redactor import StreamRedactor, redact_bytes, redact_stream
from .version import __version__

__all__ = [
    "DEFAULT_BOUNDS",
    "RedactionStats",
    "WindowBounds",
    "StreamRedactor",
    "redact_bytes",
    "redact_stream",
    "__version__",
]

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
