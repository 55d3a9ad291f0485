"""Threaded TCP connections and a listener used by the chat session."""

from __future__ import annotations

import socket
import threading
from typing import Callable, Optional

RECEIVE_SIZE = 1023
"""Largest number of bytes read from a peer in one receive call."""

_POLL_INTERVAL = 0.2
_JOIN_TIMEOUT = 2.0


def _decode(chunk: bytes) -> str:
    """Turn a received chunk into text, stopping at the first NUL byte."""
    return chunk.split(b"\0", 1)[0].decode("utf-8", errors="replace")


class Connection:
    """A connected stream socket that reports every received chunk as text."""

    def __init__(self, sock: socket.socket, on_message: Callable[[str], None]):
        self._sock = sock
        self._on_message = on_message
        self._thread: Optional[threading.Thread] = None
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def start(self) -> None:
        """Begin reading from the socket in a background thread."""
        if self._thread is not None:
            raise RuntimeError("connection already started")
        self._thread = threading.Thread(target=self._read_loop, daemon=True)
        self._thread.start()

    def _read_loop(self) -> None:
        while not self._closed.is_set():
            try:
                chunk = self._sock.recv(RECEIVE_SIZE)
            except OSError:
                break
            if not chunk:
                break
            self._on_message(_decode(chunk))

    def send(self, data: str | bytes) -> None:
        """Send text (encoded as UTF-8) or raw bytes to the peer."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._sock.sendall(data)

    def close(self) -> None:
        """Shut the connection down and wait for the reader to finish."""
        if self._closed.is_set():
            return
        self._closed.set()
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(_JOIN_TIMEOUT)
        self._sock.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def connect(host: str, port: int, on_message: Callable[[str], None]) -> Connection:
    """Open a connection to host:port and start reading from it."""
    sock = socket.create_connection((host, port))
    connection = Connection(sock, on_message)
    connection.start()
    return connection


class Listener:
    """A listening socket that hands each accepted socket to a callback."""

    def __init__(
        self,
        port: int,
        on_accept: Callable[[socket.socket], None],
        host: str = "",
    ):
        self._on_accept = on_accept
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._sock.bind((host, port))
            self._sock.listen()
            self._sock.settimeout(_POLL_INTERVAL)
        except OSError:
            self._sock.close()
            raise
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Begin accepting connections in a background thread."""
        if self._thread is not None:
            raise RuntimeError("listener already started")
        self._thread = threading.Thread(target=self._accept_loop, daemon=True)
        self._thread.start()

    def _accept_loop(self) -> None:
        while not self._stop.is_set():
            try:
                client, _ = self._sock.accept()
            except TimeoutError:
                continue
            except OSError:
                break
            if self._stop.is_set():
                client.close()
                break
            client.setblocking(True)
            self._on_accept(client)

    def address(self) -> tuple[str, int]:
        """Return the (host, port) the listener is bound to."""
        host, port = self._sock.getsockname()[:2]
        return host, port

    def close(self) -> None:
        """Stop accepting and release the listening socket."""
        if self._stop.is_set():
            return
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(_JOIN_TIMEOUT)
        self._sock.close()

    def __enter__(self) -> "Listener":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()