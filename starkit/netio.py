"""Socket helpers for exact-length reads, complete writes and line reading."""

from __future__ import annotations

import socket

_DEFAULT_CHUNK_SIZE = 100


def read_n(sock: socket.socket, n: int) -> bytes:
    """Read up to ``n`` bytes, stopping early only at end of stream.

    Fewer than ``n`` bytes are returned only if the peer closed the connection.
    """
    if n < 0:
        raise ValueError("n must not be negative")
    chunks = bytearray()
    while len(chunks) < n:
        chunk = sock.recv(n - len(chunks))
        if not chunk:
            break
        chunks += chunk
    return bytes(chunks)


def write_all(sock: socket.socket, data: bytes) -> int:
    """Write every byte of ``data`` and return how many were written."""
    sock.sendall(data)
    return len(data)


class LineReader:
    """Buffered byte and line reader over a connected socket."""

    def __init__(self, sock: socket.socket, chunk_size: int = _DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self._sock = sock
        self._chunk_size = chunk_size
        self._buffer = b""
        self._pos = 0

    def read_byte(self) -> bytes:
        """Return the next byte, or ``b""`` at end of stream."""
        if self._pos >= len(self._buffer):
            self._buffer = self._sock.recv(self._chunk_size)
            self._pos = 0
            if not self._buffer:
                return b""
        byte = self._buffer[self._pos : self._pos + 1]
        self._pos += 1
        return byte

    def read_line(self, maxlen: int) -> bytes:
        """Read one line of at most ``maxlen - 1`` bytes, newline included.

        Returns fewer bytes at end of stream and ``b""`` once the stream is exhausted.
        """
        if maxlen < 1:
            raise ValueError("maxlen must be at least 1")
        line = bytearray()
        while len(line) < maxlen - 1:
            byte = self.read_byte()
            if not byte:
                break
            line += byte
            if byte == b"\n":
                break
        return bytes(line)