import pytest

from miniredis.errors import (
    AddressNotBoundError,
    InvalidArgumentsError,
    InvalidCommandError,
    MiniRedisError,
    StoreLockedError,
    StreamClosedError,
    StreamNotConnectedError,
    StreamNotFlushedError,
    StreamNotReadableError,
    StreamNotWritableError,
)


@pytest.mark.parametrize(
    ("error", "message"),
    [
        (StoreLockedError(), "Could not access the key value store as it is locked."),
        (StreamClosedError(), "The stream is closed."),
        (StreamNotReadableError(), "Could not read from the stream."),
        (StreamNotWritableError(), "Could not write to the stream."),
        (StreamNotFlushedError(), "Could not flush the stream."),
        (AddressNotBoundError(), "Could not bind to the address."),
    ],
)
def test_plain_error_messages(error, message):
    assert str(error) == message


def test_invalid_command_message_names_command():
    error = InvalidCommandError("UNKNOWN")
    assert error.command == "UNKNOWN"
    assert str(error) == (
        "Invalid command: UNKNOWN. Run 'miniredis-client --help' for more information."
    )


def test_invalid_arguments_message_lists_arguments():
    error = InvalidArgumentsError(["testkey", "extra"])
    assert error.arguments == ["testkey", "extra"]
    assert str(error) == (
        'Invalid arguments: ["testkey", "extra"]. '
        "Run 'miniredis-client --help' for more information."
    )


def test_invalid_arguments_message_with_no_arguments():
    assert str(InvalidArgumentsError([])).startswith("Invalid arguments: []. ")


def test_invalid_arguments_escapes_quotes():
    error = InvalidArgumentsError(['a"b'])
    assert '["a\\"b"]' in str(error)


def test_stream_not_connected_message_names_address():
    error = StreamNotConnectedError("127.0.0.1:6379")
    assert error.address == "127.0.0.1:6379"
    assert str(error) == "Could not connect to the stream at 127.0.0.1:6379."


@pytest.mark.parametrize(
    ("make", "expected_matches"),
    [
        (lambda: InvalidArgumentsError(["testkey"]), 2),
        (lambda: InvalidCommandError("X"), 2),
        (lambda: StreamClosedError(), 2),
    ],
)
def test_errors_with_equal_fields_are_equal(make, expected_matches):
    errors = [make(), make(), InvalidCommandError("other"), StreamNotFlushedError()]
    assert errors.count(make()) == expected_matches


def test_equal_errors_hash_alike():
    unique = {InvalidCommandError("X"), InvalidCommandError("X"), InvalidCommandError("Y")}
    assert len(unique) == 2


def test_errors_with_different_fields_or_kinds_differ():
    assert InvalidArgumentsError(["a"]) != InvalidArgumentsError(["b"])
    assert StreamClosedError() != StreamNotReadableError()
    assert InvalidCommandError("a") != StreamNotConnectedError("a")


def test_errors_are_caught_as_base_error():
    with pytest.raises(MiniRedisError) as info:
        raise InvalidCommandError("FOO")
    assert info.value == InvalidCommandError("FOO")


def test_arguments_are_copied():
    arguments = ["key"]
    error = InvalidArgumentsError(arguments)
    arguments.append("more")
    assert error.arguments == ["key"]