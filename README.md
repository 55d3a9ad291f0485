# duochat

A small chat over TCP that you run from the console. One program plays either
role:

- **client**: connects to a host and port and exchanges messages with it.
- **server**: listens on a port, accepts any number of peers and sends each
  of your messages to all of them.

Messages you send appear in the history as `[나]: …`. Messages received from
the other side appear as `[남]: …`.

## Installing

```
pip install .
```

## Running

To start a server listening on port 9000:

```
duochat --mode server --port 9000
```

To connect to it as a client from another terminal:

```
duochat --mode client --host 127.0.0.1 --port 9000
```

`--mode` is `client` by default. If `--port` is left out, nothing is
connected at start and you can connect later with `/connect`.

Each line you type is sent as a message. Lines that start with `/` are
commands:

| command                   | effect                                                |
|---------------------------|-------------------------------------------------------|
| `/client`, `/server`      | switch role; clears the history and closes sockets    |
| `/connect [host] port`    | connect (client) or start listening (server)          |
| `/clear`                  | forget the chat history                               |
| `/quit`                   | leave; end of input or Ctrl-C also quits              |

Errors, such as sending with nobody connected, are printed to standard error
as `error: …`. Run `duochat --help` to see the options.

## Using it from Python

```python
from duochat.session import ChatSession, Mode

session = ChatSession(on_line=print)
session.set_mode(Mode.SERVER)
host, port = session.connect(None, 9000)   # the host is ignored in server mode
...
session.send("hello")                      # goes to every connected peer
print(session.history, session.peer_count)
session.close()
```

`ChatSession` can also be used as a context manager, which closes it on exit.

- `connect` returns the remote address in client mode and the listening
  address in server mode. It raises `ChatError` when the host or port is
  missing, when the port is not a number from 0 to 65535, or when the socket
  cannot be opened.
- `send` raises `ChatError` when there is nothing to send to. That means no
  connection in client mode, or no listening socket or no connected peers in
  server mode.

The lower-level parts live in `duochat.sockets`:

- `connect(host, port, on_message)` returns a started `Connection`.
- `Listener(port, on_accept, host="")` hands each accepted socket to
  `on_accept` once `start()` is called. `address()` reports where the
  listener is bound.

## What it does not do

- There is no graphical window. The program is a console front end only.
- Messages are not framed. Each chunk read from the network, of up to 1023
  bytes, is reported as one line. A long or fast stream of text may therefore
  arrive split or joined.
- In server mode, messages from one peer are shown locally but are not passed
  on to the other peers.
- There are no nicknames, no encryption and no stored history.

## Running the tests

```
pip install .[test]
pytest
```