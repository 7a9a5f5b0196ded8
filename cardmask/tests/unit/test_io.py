import io

import pytest

from cardmask.io import ByteSink, ByteSource


def test_source_reads_bytes_in_order_and_reports_buffered_count() -> None:
    source = ByteSource(io.BytesIO(b"abcde"), read_size=2)
    assert source.available() == 0
    assert source.read_byte() == ord("a")
    assert source.available() == 1
    assert source.read_byte() == ord("b")
    assert source.available() == 0
    assert [source.read_byte() for _ in range(3)] == [ord("c"), ord("d"), ord("e")]
    assert source.read_byte() is None
    assert source.read_byte() is None


def test_source_without_read1_falls_back_to_read() -> None:
    class _PlainReader:
        def __init__(self, data: bytes) -> None:
            self._inner = io.BytesIO(data)

        def read(self, size: int = -1) -> bytes:
            return self._inner.read(size)

    source = ByteSource(_PlainReader(b"xy"))
    assert source.read_byte() == ord("x")
    assert source.read_byte() == ord("y")
    assert source.read_byte() is None


def test_sink_buffers_until_flush() -> None:
    destination = io.BytesIO()
    sink = ByteSink(destination)
    sink.write(b"abc")
    sink.write_byte(ord("d"))
    assert destination.getvalue() == b""
    sink.flush()
    assert destination.getvalue() == b"abcd"


def test_sink_writes_through_once_flush_size_reached() -> None:
    destination = io.BytesIO()
    sink = ByteSink(destination, flush_size=4)
    sink.write(b"abc")
    assert destination.getvalue() == b""
    sink.write_byte(ord("d"))
    assert destination.getvalue() == b"abcd"


def test_sink_close_flushes_and_keeps_borrowed_stream_open() -> None:
    destination = io.BytesIO()
    sink = ByteSink(destination)
    sink.write(b"tail")
    sink.close()
    assert sink.closed
    assert not destination.closed
    assert destination.getvalue() == b"tail"
    with pytest.raises(ValueError):
        sink.write(b"more")
    with pytest.raises(ValueError):
        sink.close()


def test_sink_closes_owned_stream() -> None:
    destination = io.BytesIO()
    ByteSink(destination, close_stream=True).close()
    assert destination.closed


@pytest.mark.parametrize("size", [0, -1])
def test_sizes_must_be_positive(size: int) -> None:
    with pytest.raises(ValueError):
        ByteSource(io.BytesIO(), read_size=size)
    with pytest.raises(ValueError):
        ByteSink(io.BytesIO(), flush_size=size)
