"""Streaming redaction of Luhn-valid digit runs."""
from __future__ import annotations

import io
import logging
from typing import BinaryIO

import structlog

from ..io import ByteSink, ByteSource
from ..luhn import ParityTracker
from ..models import DEFAULT_BOUNDS, REDACTION_BYTE, SEPARATOR_BYTES, RedactionStats, WindowBounds
from .pending import PendingBuffer, PositionRing

_stdlib_logger = logging.getLogger(__name__)
logger = structlog.wrap_logger(_stdlib_logger, wrapper_class=structlog.stdlib.BoundLogger)

_ZERO = ord("0")
_NINE = ord("9")


class StreamRedactor:
    """Single-pass filter that masks digit runs passing the Luhn checksum.

    Bytes belonging to an open run (digits and the separators between them)
    are held back in a pending buffer. After every digit the trailing windows
    are checked from ``max_length`` down to ``min_length``; the first window
    that passes is overwritten with ``X`` in the pending buffer. The buffer is
    written out when the run ends, that is on any byte that is neither a digit
    nor a separator, or at end of stream.
    """

    def __init__(self, sink: ByteSink, bounds: WindowBounds = DEFAULT_BOUNDS) -> None:
        self.sink = sink
        self.bounds = bounds
        self.stats = RedactionStats()
        self._tracker = ParityTracker(bounds)
        self._positions = PositionRing(bounds.max_length)
        self._pending = PendingBuffer()
        self._position = 0

    @property
    def in_run(self) -> bool:
        return self._tracker.total > 0

    def feed(self, value: int) -> None:
        position = self._position
        self._position += 1
        self.stats.bytes_read += 1
        if _ZERO <= value <= _NINE:
            self._on_digit(value, position)
        elif value in SEPARATOR_BYTES:
            if self._tracker.total > 0:
                self._pending.append(value)
            else:
                self._emit_byte(value)
        else:
            self._close_run()
            self._emit_byte(value)

    def feed_bytes(self, data: bytes | bytearray) -> None:
        for value in data:
            self.feed(value)

    def finish(self) -> None:
        """Handle end of stream by writing out any open run."""
        self._close_run()

    def run(self, source: ByteSource) -> RedactionStats:
        """Filter ``source`` into the sink until end of stream, then close the sink.

        I/O errors propagate as raised; the open run is then neither written
        nor is the sink closed.
        """
        while True:
            value = source.read_byte()
            if value is None:
                break
            self.feed(value)
            if not source.available():
                self.sink.flush()
        self.finish()
        self.sink.close()
        logger.info("stream.complete", **self.stats.as_dict())
        return self.stats

    def _on_digit(self, value: int, position: int) -> None:
        tracker = self._tracker
        tracker.append(value - _ZERO)
        self._positions.record(position)
        self._pending.append(value)
        longest = min(self.bounds.max_length, tracker.total)
        for length in range(longest, self.bounds.min_length - 1, -1):
            if tracker.check_window(length):
                self._redact(length)
                break

    def _redact(self, length: int) -> None:
        pending = self._pending
        for position in self._positions.latest(length):
            pending.overwrite(position, REDACTION_BYTE)
        self.stats.windows_redacted += 1
        if _stdlib_logger.isEnabledFor(logging.DEBUG):
            logger.debug("window.redacted", length=length, run_digits=self._tracker.total)

    def _close_run(self) -> None:
        digits = self._tracker.total
        if digits == 0:
            return
        chunk = self._pending.take()
        self.sink.write(chunk)
        self.stats.bytes_written += len(chunk)
        self.stats.runs += 1
        self.stats.digits += digits
        self._tracker.reset()
        self._positions.reset()
        if _stdlib_logger.isEnabledFor(logging.DEBUG):
            logger.debug("run.flushed", run_bytes=len(chunk), run_digits=digits)

    def _emit_byte(self, value: int) -> None:
        self.sink.write_byte(value)
        self._pending.advance(1)
        self.stats.bytes_written += 1


def redact_stream(
    source: BinaryIO,
    destination: BinaryIO,
    *,
    bounds: WindowBounds = DEFAULT_BOUNDS,
    read_size: int = 8192,
    flush_size: int = 64 * 1024,
) -> RedactionStats:
    """Filter ``source`` into ``destination``; neither stream is closed."""
    sink = ByteSink(destination, flush_size=flush_size)
    redactor = StreamRedactor(sink, bounds)
    return redactor.run(ByteSource(source, read_size=read_size))


def redact_bytes(data: bytes, *, bounds: WindowBounds = DEFAULT_BOUNDS) -> bytes:
    output = io.BytesIO()
    redact_stream(io.BytesIO(data), output, bounds=bounds)
    return output.getvalue()


__all__ = ["StreamRedactor", "redact_stream", "redact_bytes"]
