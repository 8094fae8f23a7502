"""Interactive client: sends a greeting, then one input word per server reply."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Iterator, Optional, TextIO

from .select_server import DEFAULT_PORT, SelectServer

DEFAULT_HOST = "127.0.0.1"
_BUFFER_SIZE = 1024


def _words(stream: TextIO) -> Iterator[str]:
    for line in iter(stream.readline, ""):
        yield from line.split()


def run_client(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    first_message: str = "hello,socket",
    input_stream: Optional[TextIO] = None,
    output_stream: Optional[TextIO] = None,
) -> int:
    """Talk to the server and return the number of replies received.

    Each reply is printed on its own line; after each reply the next
    whitespace-separated word of input is sent. The session ends when the
    server closes the connection or the input runs out.
    """
    source = input_stream if input_stream is not None else sys.stdin
    out = output_stream if output_stream is not None else sys.stdout
    words = _words(source)
    replies = 0
    with socket.create_connection((host, port)) as sock:
        sock.sendall(first_message.encode())
        while True:
            data = sock.recv(_BUFFER_SIZE)
            if not data:
                break
            replies += 1
            text = data.partition(b"\0")[0].decode("utf-8", errors="replace")
            print(text, file=out, flush=True)
            word = next(words, None)
            if word is None:
                break
            sock.sendall(word.encode())
    return replies


def main(argv: list[str] | None = None) -> int:
    """Start a server in the background (unless told not to) and run the client."""
    parser = argparse.ArgumentParser(description="Talk to the select server.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="server address to connect to")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server port")
    parser.add_argument(
        "--no-server",
        action="store_true",
        help="connect to an existing server instead of starting one",
    )
    args = parser.parse_args(argv)
    try:
        if args.no_server:
            run_client(args.host, args.port)
        else:
            with SelectServer(args.port) as server:
                server.start()
                run_client(args.host, server.address[1])
    except OSError as exc:
        print(f"client: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())