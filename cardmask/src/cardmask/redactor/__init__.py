"""Redaction package exports."""
from .engine import StreamRedactor, redact_bytes, redact_stream
from .pending import PendingBuffer, PositionRing

__all__ = ["StreamRedactor", "redact_bytes", "redact_stream", "PendingBuffer", "PositionRing"]
