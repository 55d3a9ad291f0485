"""Console front end for a chat session."""

from __future__ import annotations

import argparse
import sys

from duochat.session import ChatError, ChatSession, Mode

_HELP = (
    "commands: /client, /server, /connect [host] port, /clear, /quit; "
    "any other line is sent as a message"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duochat",
        description="Chat over TCP as a client or as a server.",
        epilog=_HELP,
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        default=Mode.CLIENT.value,
        help="act as a client or as a server (default: client)",
    )
    parser.add_argument("--host", default="", help="server address to connect to")
    parser.add_argument("--port", type=int, help="port to connect to or listen on")
    return parser


def _error(message: str) -> None:
    print(f"error: {message}", file=sys.stderr, flush=True)


def _connect(session: ChatSession, host: str, port) -> None:
    try:
        address = session.connect(host, port)
    except ChatError as exc:
        _error(str(exc))
        return
    if session.mode is Mode.SERVER:
        print(f"listening on port {address[1]}", flush=True)
    else:
        print(f"connected to {address[0]}:{address[1]}", flush=True)


def _handle(session: ChatSession, line: str) -> bool:
    """Act on one line of input; return False when the user wants to quit."""
    if not line.startswith("/"):
        try:
            session.send(line)
        except ChatError as exc:
            _error(str(exc))
        return True

    command, *args = line.split()
    if command == "/quit":
        return False
    if command == "/clear":
        session.clear()
    elif command in ("/client", "/server"):
        session.set_mode(Mode(command[1:]))
    elif command == "/connect":
        if len(args) == 1:
            _connect(session, "", args[0])
        elif len(args) == 2:
            _connect(session, args[0], args[1])
        else:
            _error("usage: /connect [host] port")
    else:
        _error(f"unknown command {command}; {_HELP}")
    return True


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    with ChatSession(on_line=lambda line: print(line, flush=True)) as session:
        session.set_mode(Mode(args.mode))
        if args.port is not None:
            _connect(session, args.host, args.port)
        try:
            for raw in sys.stdin:
                if not _handle(session, raw.rstrip("\r\n")):
                    break
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())