"""A line-based key-value server that answers GET, SET and DEL commands."""

from __future__ import annotations

import os
import socket
import socketserver
import sys
import threading
from collections.abc import Sequence
from typing import BinaryIO

from .errors import (
    AddressNotBoundError,
    InvalidArgumentsError,
    InvalidCommandError,
    MiniRedisError,
    StreamNotReadableError,
    StreamNotWritableError,
)
from .kv_store import KVStore

DEFAULT_ADDRESS = "127.0.0.1:6379"

_HELP_TEXT = """\
MiniRedis Server

Starts the MiniRedis server and listens for client connections.

USAGE:
    miniredis server <ADDRESS>

ARGS:
    <ADDRESS>    The address to listen on [default: 127.0.0.1:6379]

EXAMPLES:
    miniredis server 127.0.0.1:6379
    miniredis server --help"""


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6-host]:port``) into a host and a port number."""
    host, sep, port_text = address.rpartition(":")
    if not sep or not (port_text.isascii() and port_text.isdigit()):
        raise AddressNotBoundError()
    port = int(port_text)
    if port > 65535:
        raise AddressNotBoundError()
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not host:
        raise AddressNotBoundError()
    return host, port


def parse_command(line: str) -> tuple[str, list[str]] | None:
    """Split a request line into an upper-cased command and its arguments.

    Returns None when the line holds nothing but whitespace.
    """
    parts = line.split()
    if not parts:
        return None
    command, *args = parts
    return command.upper(), args


def handle_command(command: str, args: Sequence[str], store: KVStore) -> str:
    """Run one command against ``store`` and return the reply text."""
    args = list(args)
    match command:
        case "GET":
            if len(args) != 1:
                raise InvalidArgumentsError(args)
            value = store.get(args[0])
            return "nil" if value is None else value
        case "SET":
            if len(args) != 2:
                raise InvalidArgumentsError(args)
            key, value = args
            store.set(key, value)
            return "OK"
        case "DEL":
            if len(args) != 1:
                raise InvalidArgumentsError(args)
            store.delete(args[0])
            return "OK"
        case _:
            raise InvalidCommandError(command)


def handle_client(reader: BinaryIO, writer: BinaryIO, store: KVStore) -> None:
    """Serve requests read line by line from ``reader`` until it is exhausted.

    Each non-blank line gets exactly one reply line on ``writer``; command
    errors are sent back as their message.
    """
    while True:
        try:
            raw = reader.readline()
        except OSError as exc:
            raise StreamNotReadableError() from exc
        if not raw:
            break
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StreamNotReadableError() from exc

        parsed = parse_command(line)
        if parsed is None:
            continue
        command, args = parsed

        try:
            response = handle_command(command, args, store)
        except MiniRedisError as exc:
            response = str(exc)

        try:
            writer.write(response.encode("utf-8") + b"\n")
            writer.flush()
        except OSError as exc:
            raise StreamNotWritableError() from exc


class _ClientHandler(socketserver.StreamRequestHandler):
    def handle(self) -> None:
        try:
            handle_client(self.rfile, self.wfile, self.server.store)
        except MiniRedisError:
            # A broken connection ends only that client's session.
            pass


class _ThreadedServer(socketserver.ThreadingMixIn, socketserver.TCPServer):
    daemon_threads = True
    block_on_close = False
    allow_reuse_address = os.name != "nt"
    request_queue_size = 128

    def __init__(self, sockaddr: tuple, family: int, store: KVStore) -> None:
        self.address_family = family
        self.store = store
        super().__init__(sockaddr, _ClientHandler)


class Server:
    """Listens on an address and serves every client in its own thread.

    ``server_address`` holds the bound ``(host, port)`` once the server is
    listening, and None before that.
    """

    def __init__(self, address: str) -> None:
        self.address = address
        self.store = KVStore()
        self.server_address: tuple[str, int] | None = None
        self._lock = threading.Lock()
        self._listener: _ThreadedServer | None = None
        self._stop_requested = False

    @classmethod
    def from_args(cls, args: Sequence[str]) -> Server:
        """Build a server from command-line arguments, program name first."""
        address = args[1] if len(args) > 1 else DEFAULT_ADDRESS
        return cls(address)

    def run(self) -> None:
        """Bind to the address and serve clients until ``shutdown`` is called."""
        host, port = parse_address(self.address)
        try:
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
            family, _, _, _, sockaddr = infos[0]
            listener = _ThreadedServer(sockaddr, family, self.store)
        except (OSError, IndexError) as exc:
            raise AddressNotBoundError() from exc

        with self._lock:
            if self._stop_requested:
                listener.server_close()
                return
            self._listener = listener
            self.server_address = tuple(listener.server_address[:2])

        print(f"MiniRedis is running on {self.address}", flush=True)
        try:
            listener.serve_forever()
        finally:
            listener.server_close()
            with self._lock:
                self._listener = None
                self.server_address = None

    def shutdown(self) -> None:
        """Stop a running server; call it from a thread other than ``run``'s."""
        with self._lock:
            self._stop_requested = True
            listener = self._listener
        if listener is not None:
            listener.shutdown()

    @staticmethod
    def print_help() -> None:
        """Print usage information."""
        print(_HELP_TEXT)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; ``argv`` excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    if "--help" in args or "-h" in args:
        Server.print_help()
        return 0

    server = Server.from_args(["miniredis-server", *args])
    try:
        server.run()
    except MiniRedisError as exc:
        print(f"Server failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())