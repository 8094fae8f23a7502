import socket
import threading

import pytest

from starkit.netio import LineReader, read_n, write_all


@pytest.fixture
def pair():
    a, b = socket.socketpair()
    a.settimeout(5)
    b.settimeout(5)
    yield a, b
    a.close()
    b.close()


def test_write_all_then_read_n_round_trip(pair):
    a, b = pair
    assert write_all(a, b"abcdef") == 6
    assert read_n(b, 6) == b"abcdef"


def test_read_n_joins_several_sends(pair):
    a, b = pair
    a.sendall(b"ab")
    a.sendall(b"cd")
    a.sendall(b"ef")
    assert read_n(b, 6) == b"abcdef"


def test_read_n_returns_short_at_end_of_stream(pair):
    a, b = pair
    a.sendall(b"xy")
    a.close()
    assert read_n(b, 5) == b"xy"


def test_read_n_zero_bytes(pair):
    _, b = pair
    assert read_n(b, 0) == b""


def test_read_n_rejects_negative(pair):
    _, b = pair
    with pytest.raises(ValueError):
        read_n(b, -1)


def test_write_all_large_payload(pair):
    a, b = pair
    payload = bytes(range(256)) * 4096
    received = {}

    def reader():
        received["data"] = read_n(b, len(payload))

    thread = threading.Thread(target=reader)
    thread.start()
    assert write_all(a, payload) == len(payload)
    thread.join(10)
    assert received["data"] == payload


def test_read_line_splits_lines(pair):
    a, b = pair
    a.sendall(b"one\ntwo\nthree")
    a.close()
    reader = LineReader(b)
    assert reader.read_line(100) == b"one\n"
    assert reader.read_line(100) == b"two\n"
    assert reader.read_line(100) == b"three"
    assert reader.read_line(100) == b""


def test_read_line_respects_maxlen(pair):
    a, b = pair
    a.sendall(b"abcdef\n")
    a.close()
    reader = LineReader(b)
    assert reader.read_line(3) == b"ab"
    assert reader.read_line(100) == b"cdef\n"


def test_read_line_across_small_chunks(pair):
    a, b = pair
    a.sendall(b"hello world\nnext\n")
    a.close()
    reader = LineReader(b, chunk_size=2)
    assert reader.read_line(64) == b"hello world\n"
    assert reader.read_line(64) == b"next\n"


def test_read_line_with_maxlen_one_reads_nothing(pair):
    a, b = pair
    a.sendall(b"z\n")
    reader = LineReader(b)
    assert reader.read_line(1) == b""
    assert reader.read_line(10) == b"z\n"


def test_read_byte_sequence_and_eof(pair):
    a, b = pair
    a.sendall(b"qr")
    a.close()
    reader = LineReader(b)
    assert [reader.read_byte(), reader.read_byte(), reader.read_byte()] == [b"q", b"r", b""]


def test_invalid_arguments(pair):
    _, b = pair
    with pytest.raises(ValueError):
        LineReader(b, chunk_size=0)
    with pytest.raises(ValueError):
        LineReader(b).read_line(0)