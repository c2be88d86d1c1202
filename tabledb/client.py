"""Interactive line-based TCP client for the query server."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Optional, Sequence, TextIO

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7432
_BUFFER_SIZE = 1024


def run_client(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Send each input line to the server and print its reply.

    Stops at end of input or when the server disconnects. Returns the number
    of replies received; raises OSError when the connection cannot be made.
    """
    source = stdin if stdin is not None else sys.stdin
    sink = stdout if stdout is not None else sys.stdout
    replies = 0
    with socket.create_connection((host, port)) as connection:
        while True:
            sink.write("Enter command: ")
            sink.flush()
            line = source.readline()
            if not line:
                break
            text = line.rstrip("\r\n") + "\n"
            connection.sendall(text.encode("utf-8"))
            data = connection.recv(_BUFFER_SIZE)
            if not data:
                sys.stderr.write("Server disconnected\n")
                break
            replies += 1
            sink.write("Message from the server: " + data.decode("utf-8", errors="replace"))
            sink.flush()
    return replies


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the server and relay commands from standard input."""
    parser = argparse.ArgumentParser(description="Send queries to the server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        run_client(args.host, args.port, sys.stdin, sys.stdout)
    except OSError:
        sys.stderr.write("Connection failed\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())