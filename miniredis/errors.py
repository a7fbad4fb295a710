"""Errors raised by the key-value store, the server and the client."""

from __future__ import annotations

from collections.abc import Iterable

_HELP_HINT = "Run 'miniredis-client --help' for more information."

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _quote(text: str) -> str:
    """Render a string in double quotes with special characters escaped."""
    return '"' + "".join(_ESCAPES.get(char, char) for char in text) + '"'


def _format_list(items: Iterable[str]) -> str:
    return "[" + ", ".join(_quote(item) for item in items) + "]"


class MiniRedisError(Exception):
    """Base class of every error the package raises."""

    default_message = "MiniRedis error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)

    def __str__(self) -> str:
        return str(self.args[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MiniRedisError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class StoreLockedError(MiniRedisError):
    """The key-value store could not be accessed."""

    default_message = "Could not access the key value store as it is locked."


class InvalidCommandError(MiniRedisError):
    """The command name is not one the server knows."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Invalid command: {command}. {_HELP_HINT}")


class InvalidArgumentsError(MiniRedisError):
    """The command was given the wrong arguments."""

    def __init__(self, arguments: Iterable[str]) -> None:
        self.arguments = list(arguments)
        super().__init__(
            f"Invalid arguments: {_format_list(self.arguments)}. {_HELP_HINT}"
        )


class StreamClosedError(MiniRedisError):
    """The stream is closed."""

    default_message = "The stream is closed."


class StreamNotReadableError(MiniRedisError):
    """The stream could not be read from."""

    default_message = "Could not read from the stream."


class StreamNotWritableError(MiniRedisError):
    """The stream could not be written to."""

    default_message = "Could not write to the stream."


class StreamNotConnectedError(MiniRedisError):
    """A connection to the given address could not be made."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Could not connect to the stream at {address}.")


class StreamNotFlushedError(MiniRedisError):
    """The stream could not be flushed."""

    default_message = "Could not flush the stream."


class AddressNotBoundError(MiniRedisError):
    """The server could not bind to its address."""

    default_message = "Could not bind to the address."