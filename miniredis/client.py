"""An interactive line-based client for the key-value server."""

from __future__ import annotations

import socket
import sys
from collections.abc import Sequence
from typing import IO

from .errors import (
    MiniRedisError,
    StreamClosedError,
    StreamNotConnectedError,
    StreamNotFlushedError,
    StreamNotReadableError,
    StreamNotWritableError,
)
from .server import DEFAULT_ADDRESS, parse_address

_HELP_TEXT = """\
MiniRedis Client

Connects to a MiniRedis server and sends commands to it.

USAGE:
    miniredis-client <ADDRESS>

ARGS:
    <ADDRESS>    The address of the server to connect to [default: 127.0.0.1:6379]

EXAMPLES:
    miniredis-client 127.0.0.1:6379
    miniredis-client --help

COMMANDS IN THE CLIENT:
    GET <KEY>             Get the value of a key
    SET <KEY> <VALUE>     Set the value of a key
    DEL <KEY>             Delete a key"""


def _read_line(reader: IO) -> str:
    """Read one line from a text or binary stream and return it as text."""
    try:
        line = reader.readline()
    except OSError as exc:
        raise StreamNotReadableError() from exc
    if isinstance(line, bytes):
        try:
            return line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StreamNotReadableError() from exc
    return line


class Client:
    """Reads commands from the terminal, sends them to a server and prints replies."""

    def __init__(self, address: str) -> None:
        self.address = address

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Client:
        """Build a client from command-line arguments, program name first."""
        address = args[1] if len(args) > 1 else DEFAULT_ADDRESS
        return cls(address)

    def _connect(self) -> socket.socket:
        try:
            host, port = parse_address(self.address)
        except MiniRedisError as exc:
            raise StreamNotConnectedError(self.address) from exc
        try:
            return socket.create_connection((host, port))
        except OSError as exc:
            raise StreamNotConnectedError(self.address) from exc

    def run(self) -> None:
        """Connect and relay commands from standard input until ``quit`` or end of input."""
        with self._connect() as sock:
            try:
                reader = sock.makefile("rb")
                writer = sock.makefile("wb")
            except OSError as exc:
                raise StreamClosedError() from exc

            with reader, writer:
                print(f"Connected to server at {self.address}")
                while True:
                    print("> ", end="")
                    try:
                        sys.stdout.flush()
                    except (OSError, ValueError) as exc:
                        raise StreamNotFlushedError() from exc

                    raw = self.read_input(sys.stdin)
                    if not raw:
                        break
                    text = raw.rstrip("\r\n")
                    if not text.strip():
                        continue
                    if text == "quit":
                        break

                    self.send_input(text, writer)
                    response = self.read_response(reader)
                    print(response.rstrip("\r\n"))

    def read_input(self, reader: IO) -> str:
        """Read one line typed by the user, line ending included."""
        return _read_line(reader)

    def send_input(self, text: str, writer: IO) -> None:
        """Send ``text`` followed by a newline to the server."""
        try:
            writer.write(text.encode("utf-8") + b"\n")
            writer.flush()
        except (OSError, ValueError) as exc:
            raise StreamNotWritableError() from exc

    def read_response(self, reader: IO) -> str:
        """Read one reply line from the server, line ending included."""
        return _read_line(reader)

    @staticmethod
    def print_help() -> None:
        """Print usage information."""
        print(_HELP_TEXT)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; ``argv`` excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    if "--help" in args or "-h" in args:
        Client.print_help()
        return 0

    client = Client.from_args(["miniredis-client", *args])
    try:
        client.run()
    except MiniRedisError as exc:
        print(f"Client failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())