"""A chat session that acts either as a client or as a server."""

from __future__ import annotations

import enum
import socket
import threading
from typing import Callable, Optional

from duochat.sockets import Connection, Listener, connect

MY_PREFIX = "[나]: "
PEER_PREFIX = "[남]: "


class Mode(enum.Enum):
    CLIENT = "client"
    SERVER = "server"


class ChatError(Exception):
    """Raised when a chat action cannot be carried out."""


def _parse_port(text: str) -> int:
    try:
        number = int(text)
    except ValueError:
        raise ChatError(f"invalid port: {text!r}") from None
    if not 0 <= number <= 65535:
        raise ChatError(f"port out of range: {number}")
    return number


class ChatSession:
    """Holds the chat history and the sockets of one side of a chat."""

    def __init__(self, on_line: Optional[Callable[[str], None]] = None):
        self._on_line = on_line
        self._lock = threading.RLock()
        self._history: list[str] = []
        self._mode = Mode.CLIENT
        self._client: Optional[Connection] = None
        self._listener: Optional[Listener] = None
        self._peers: list[Connection] = []

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def history(self) -> list[str]:
        with self._lock:
            return list(self._history)

    @property
    def peer_count(self) -> int:
        with self._lock:
            return len(self._peers)

    def add_line(self, line: str) -> None:
        """Append a line to the history and report it."""
        with self._lock:
            self._history.append(line)
            if self._on_line is not None:
                self._on_line(line)

    def set_mode(self, mode: Mode | str) -> None:
        """Switch between client and server, clearing history and sockets."""
        mode = Mode(mode)
        with self._lock:
            self._history.clear()
            self._mode = mode
        if mode is Mode.CLIENT:
            self._cleanup_server()
        else:
            self._cleanup_client()

    def connect(self, host: str | None, port: int | str | None) -> tuple[str, int]:
        """Connect to a server or start listening, depending on the mode.

        Returns the remote address in client mode and the listening
        address in server mode.
        """
        host = (host or "").strip()
        port_text = "" if port is None else str(port).strip()

        if self._mode is Mode.CLIENT:
            if not host or not port_text:
                raise ChatError("IP or port is missing")
            number = _parse_port(port_text)
            self._cleanup_client()
            try:
                connection = connect(host, number, self._receive)
            except OSError as exc:
                raise ChatError(f"cannot connect to {host}:{number}: {exc}") from exc
            with self._lock:
                self._client = connection
            return host, number

        if not port_text:
            raise ChatError("port is missing")
        number = _parse_port(port_text)
        self._cleanup_server()
        try:
            listener = Listener(number, self._accept)
        except OSError as exc:
            raise ChatError(f"cannot listen on port {number}: {exc}") from exc
        with self._lock:
            self._listener = listener
        listener.start()
        return listener.address()

    def send(self, text: str) -> None:
        """Send text to the server or to every connected peer."""
        with self._lock:
            if self._mode is Mode.CLIENT:
                if self._client is None:
                    raise ChatError("no client connection")
                targets = [self._client]
            else:
                if self._listener is None:
                    raise ChatError("no server socket")
                if not self._peers:
                    raise ChatError("no connected peers")
                targets = list(self._peers)
        data = text.encode("utf-8")
        for target in targets:
            try:
                target.send(data)
            except OSError:
                pass
        self.add_line(MY_PREFIX + text)

    def clear(self) -> None:
        """Forget the chat history."""
        with self._lock:
            self._history.clear()

    def close(self) -> None:
        """Close every socket the session holds."""
        self._cleanup_client()
        self._cleanup_server()

    def __enter__(self) -> "ChatSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _receive(self, text: str) -> None:
        self.add_line(PEER_PREFIX + text)

    def _accept(self, sock: socket.socket) -> None:
        connection = Connection(sock, self._receive)
        with self._lock:
            if self._listener is None:
                sock.close()
                return
            self._peers.append(connection)
        connection.start()

    def _cleanup_client(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

    def _cleanup_server(self) -> None:
        with self._lock:
            listener, self._listener = self._listener, None
            peers, self._peers = self._peers, []
        if listener is not None:
            listener.close()
        for peer in peers:
            peer.close()