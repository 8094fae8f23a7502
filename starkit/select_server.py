"""Single-threaded select() echo server that transforms each message it receives."""

from __future__ import annotations

import select
import socket
import threading
from typing import Callable, Optional

DEFAULT_PORT = 8888
BUFFER_SIZE = 8192
_FD_SETSIZE = 1024

Handler = Callable[[bytes], bytes]


def uppercase(data: bytes) -> bytes:
    """Return ``data`` with ASCII letters upper-cased."""
    return data.upper()


class SelectServer:
    """TCP server multiplexing its connections with ``select``.

    Every chunk a client sends is cut at its first NUL byte, passed to the
    handler, and the handler's result is written back to the same client.
    """

    def __init__(
        self,
        port: int = DEFAULT_PORT,
        handler: Optional[Handler] = None,
        host: str = "",
        backlog: int = 128,
    ) -> None:
        self.handler: Handler = handler if handler is not None else uppercase
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._listener.bind((host, port))
            self._listener.listen(backlog)
        except OSError:
            self._listener.close()
            raise
        self._wake_r, self._wake_w = socket.socketpair()
        self._wake_r.setblocking(False)
        self._wake_w.setblocking(False)
        self._clients: list[socket.socket] = []
        self._state_lock = threading.Lock()
        self._closed = False
        self._released = False
        self._serving_thread: Optional[threading.Thread] = None
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> tuple[str, int]:
        """The (host, port) the server listens on."""
        return self._listener.getsockname()

    def start(self) -> threading.Thread:
        """Run the server loop in a background daemon thread."""
        if self._thread is not None:
            raise RuntimeError("server already started")
        self._thread = threading.Thread(
            target=self.serve_forever, name="select-server", daemon=True
        )
        self._thread.start()
        return self._thread

    def serve_forever(self) -> None:
        """Serve connections until :meth:`close` is called."""
        with self._state_lock:
            if self._closed:
                return
            if self._serving_thread is not None:
                raise RuntimeError("server is already running")
            self._serving_thread = threading.current_thread()
        try:
            while True:
                watched = [self._listener, self._wake_r, *self._clients]
                readable, _, _ = select.select(watched, [], [])
                if self._wake_r in readable:
                    break
                if self._listener in readable:
                    self._accept()
                for client in [c for c in self._clients if c in readable]:
                    self._service(client)
        finally:
            self._finished.set()
            with self._state_lock:
                closed = self._closed
            if closed:
                self._release()

    def close(self) -> None:
        """Stop serving and close the listening socket and all connections."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            serving = self._serving_thread
        try:
            self._wake_w.send(b"\0")
        except OSError:
            pass
        if serving is None:
            self._release()
        elif serving is not threading.current_thread():
            self._finished.wait()
            self._release()

    def __enter__(self) -> SelectServer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _accept(self) -> None:
        try:
            conn, _ = self._listener.accept()
        except (ConnectionAbortedError, InterruptedError, BlockingIOError):
            return
        if len(self._clients) >= _FD_SETSIZE - 1:
            conn.close()
            return
        self._clients.append(conn)

    def _service(self, client: socket.socket) -> None:
        try:
            data = client.recv(BUFFER_SIZE)
        except OSError:
            data = b""
        if not data:
            self._drop(client)
            return
        reply = self.handler(data.partition(b"\0")[0])
        if not reply:
            return
        try:
            client.sendall(reply)
        except OSError:
            self._drop(client)

    def _drop(self, client: socket.socket) -> None:
        self._clients.remove(client)
        client.close()

    def _release(self) -> None:
        with self._state_lock:
            if self._released:
                return
            self._released = True
        for client in self._clients:
            client.close()
        self._clients.clear()
        self._listener.close()
        self._wake_r.close()
        self._wake_w.close()