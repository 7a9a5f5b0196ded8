"""Byte-at-a-time adapters over binary streams."""
from __future__ import annotations

from typing import BinaryIO

_DEFAULT_READ_SIZE = 8192
_DEFAULT_FLUSH_SIZE = 64 * 1024


class ByteSource:
    """Sequential reader yielding one byte value at a time.

    Data is fetched in chunks. When the wrapped stream offers ``read1`` it is
    used so that a pipe or terminal returns whatever is ready instead of
    blocking until a full chunk arrives.
    """

    __slots__ = ("_stream", "_read_size", "_chunk", "_pos", "_eof")

    def __init__(self, stream: BinaryIO, *, read_size: int = _DEFAULT_READ_SIZE) -> None:
        if read_size < 1:
            raise ValueError("read_size must be positive")
        self._stream = stream
        self._read_size = read_size
        self._chunk = b""
        self._pos = 0
        self._eof = False

    def read_byte(self) -> int | None:
        """Return the next byte value, or ``None`` once the stream is exhausted."""
        if self._pos >= len(self._chunk):
            if self._eof or not self._fill():
                return None
        value = self._chunk[self._pos]
        self._pos += 1
        return value

    def available(self) -> int:
        """Bytes already fetched from the stream and not yet consumed."""
        return len(self._chunk) - self._pos

    def _fill(self) -> bool:
        reader = getattr(self._stream, "read1", None) or self._stream.read
        chunk = reader(self._read_size)
        if not chunk:
            self._eof = True
            self._chunk = b""
            self._pos = 0
            return False
        self._chunk = chunk
        self._pos = 0
        return True


class ByteSink:
    """Buffered writer with an explicit flush and a single close."""

    __slots__ = ("_stream", "_buffer", "_flush_size", "_close_stream", "_closed")

    def __init__(
        self,
        stream: BinaryIO,
        *,
        flush_size: int = _DEFAULT_FLUSH_SIZE,
        close_stream: bool = False,
    ) -> None:
        if flush_size < 1:
            raise ValueError("flush_size must be positive")
        self._stream = stream
        self._buffer = bytearray()
        self._flush_size = flush_size
        self._close_stream = close_stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes | bytearray) -> None:
        self._ensure_open()
        self._buffer += data
        if len(self._buffer) >= self._flush_size:
            self._drain()

    def write_byte(self, value: int) -> None:
        self._ensure_open()
        self._buffer.append(value)
        if len(self._buffer) >= self._flush_size:
            self._drain()

    def flush(self) -> None:
        self._ensure_open()
        self._drain()
        self._stream.flush()

    def close(self) -> None:
        """Flush buffered bytes and close; the wrapped stream only if owned."""
        if self._closed:
            raise ValueError("Sink already closed")
        self.flush()
        self._closed = True
        if self._close_stream:
            self._stream.close()

    def _drain(self) -> None:
        if self._buffer:
            self._stream.write(bytes(self._buffer))
            self._buffer.clear()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed sink")


__all__ = ["ByteSource", "ByteSink"]
