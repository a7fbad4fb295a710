# miniredis

A small in-memory key-value server that speaks a plain line-based protocol
over TCP, and an interactive client to go with it. It has no dependencies
beyond the Python standard library and needs Python 3.10 or later.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
miniredis-server                  # listens on 127.0.0.1:6379
miniredis-server 0.0.0.0:7000     # listens on a chosen address
miniredis-server [::1]:7000       # IPv6 addresses go in brackets
miniredis-server --help
```

The address is `host:port`. Only the first argument is used. Each connection
is served in its own thread, and all connections share one store. If the
address cannot be parsed or bound, the server prints
`Server failed: Could not bind to the address.` to standard error and exits
with status 1.

## Running the client

```
miniredis-client                  # connects to 127.0.0.1:6379
miniredis-client localhost:7000
miniredis-client --help
```

When the client is connected, type one command per line and it prints the
server's reply. Blank lines are skipped. Type `quit`, or end the input, to
leave. If the server cannot be reached, the client prints
`Client failed: Could not connect to the stream at <ADDRESS>.` to standard
error and exits with status 1.

## Protocol and commands

Every request is one line of text, and every non-blank request gets exactly
one reply line. Command names are case-insensitive. Arguments are separated
by whitespace, so keys and values cannot contain spaces.

| Command             | Reply                                    |
|---------------------|------------------------------------------|
| `GET <KEY>`         | the stored value, or `nil`               |
| `SET <KEY> <VALUE>` | `OK`                                     |
| `DEL <KEY>`         | `OK`, even if the key did not exist      |

An unknown command gets a reply that starts with `Invalid command:`. A
command with the wrong number of arguments gets a reply that starts with
`Invalid arguments:`. Blank lines get no reply.

```
> SET greeting hello
OK
> GET greeting
hello
> DEL greeting
OK
> GET greeting
nil
```

## Using it from Python

```python
import threading

from miniredis.kv_store import KVStore
from miniredis.server import Server, handle_command, parse_command

store = KVStore()
store.set("key", "value")
assert store.get("key") == "value"
store.delete("key")
assert store.get("key") is None

command, args = parse_command("set colour blue\n")
assert (command, args) == ("SET", ["colour", "blue"])
assert handle_command(command, args, store) == "OK"

server = Server("127.0.0.1:0")          # port 0 picks a free port
thread = threading.Thread(target=server.run, daemon=True)
thread.start()
# once listening, server.server_address holds the bound (host, port)
server.shutdown()                       # run() returns after this
thread.join()
```

- `miniredis.kv_store.KVStore` — a thread-safe store of string keys and
  values with `get`, `set` and `delete`.
- `miniredis.server` — `parse_address`, `parse_command`, `handle_command`,
  `handle_client` (serves one connection from a binary reader and writer),
  the `Server` class and the `main` entry point.
- `miniredis.client` — the `Client` class (`run`, `read_input`, `send_input`,
  `read_response`) and the `main` entry point.
- `miniredis.errors` — the errors, all derived from `MiniRedisError`, such as
  `InvalidCommandError`, `InvalidArgumentsError`, `AddressNotBoundError` and
  `StreamNotConnectedError`. Their messages are the reply text the server
  sends back.

## What it does not do

The store lives only in the server's memory: nothing is written to disk, and
all data is lost when the server stops. There are no expiry times, no data
types other than strings, no authentication, and the protocol is a plain line
protocol, not the one spoken by Redis clients.