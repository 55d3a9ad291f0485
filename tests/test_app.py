import io
import queue

import pytest

from duochat.app import build_parser, main
from duochat.sockets import Listener


def _run(monkeypatch, argv, stdin_text):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin_text))
    return main(argv)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.mode == "client"
    assert args.host == ""
    assert args.port is None


def test_parser_reads_options():
    args = build_parser().parse_args(["--mode", "server", "--port", "5000"])
    assert args.mode == "server"
    assert args.port == 5000


def test_parser_rejects_unknown_mode():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--mode", "relay"])


def test_message_without_connection_reports_error(monkeypatch, capsys):
    assert _run(monkeypatch, [], "hello\n") == 0
    captured = capsys.readouterr()
    assert "no client connection" in captured.err
    assert "hello" not in captured.out


def test_server_without_peers_reports_error(monkeypatch, capsys):
    assert _run(monkeypatch, [], "/server\n/connect 0\nhello\n/quit\n") == 0
    captured = capsys.readouterr()
    assert "listening on port" in captured.out
    assert "no connected peers" in captured.err


def test_bad_connect_usage_and_unknown_command(monkeypatch, capsys):
    assert _run(monkeypatch, [], "/connect\n/bogus\n") == 0
    err = capsys.readouterr().err
    assert "usage: /connect" in err
    assert "unknown command /bogus" in err


def test_client_sends_message_to_server(monkeypatch, capsys):
    accepted = queue.Queue()
    with Listener(0, accepted.put, "127.0.0.1") as listener:
        listener.start()
        port = listener.address()[1]
        argv = ["--host", "127.0.0.1", "--port", str(port)]
        assert _run(monkeypatch, argv, "hello\n/quit\nignored\n") == 0
        peer = accepted.get(timeout=5)
        peer.settimeout(5)
        received = b""
        with peer:
            while chunk := peer.recv(1024):
                received += chunk
    assert received == b"hello"
    out = capsys.readouterr().out
    assert f"connected to 127.0.0.1:{port}" in out
    assert "[나]: hello" in out