import io
import socket

import pytest

from starkit.client import main, run_client
from starkit.select_server import SelectServer


@pytest.fixture
def server():
    srv = SelectServer(port=0, host="127.0.0.1")
    srv.start()
    yield srv
    srv.close()


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_session_sends_each_word(server):
    out = io.StringIO()
    replies = run_client(
        "127.0.0.1",
        server.address[1],
        input_stream=io.StringIO("second third\n"),
        output_stream=out,
    )
    assert replies == 3
    assert out.getvalue() == "HELLO,SOCKET\nSECOND\nTHIRD\n"


def test_empty_input_stops_after_first_reply(server):
    out = io.StringIO()
    replies = run_client(
        "127.0.0.1",
        server.address[1],
        first_message="ping",
        input_stream=io.StringIO(""),
        output_stream=out,
    )
    assert replies == 1
    assert out.getvalue() == "PING\n"


def test_words_span_lines(server):
    out = io.StringIO()
    replies = run_client(
        "127.0.0.1",
        server.address[1],
        first_message="a",
        input_stream=io.StringIO("b\n\n  c  d\n"),
        output_stream=out,
    )
    assert replies == 4
    assert out.getvalue().split() == ["A", "B", "C", "D"]


def test_connection_refused_raises():
    with pytest.raises(ConnectionRefusedError):
        run_client(
            "127.0.0.1",
            _free_port(),
            input_stream=io.StringIO(""),
            output_stream=io.StringIO(),
        )


def test_main_against_existing_server(server, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("next\n"))
    code = main(["--no-server", "--port", str(server.address[1])])
    assert code == 0
    assert capsys.readouterr().out == "HELLO,SOCKET\nNEXT\n"


def test_main_starts_its_own_server(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    code = main(["--port", "0"])
    assert code == 0
    assert capsys.readouterr().out == "HELLO,SOCKET\n"


def test_main_reports_connection_failure(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    code = main(["--no-server", "--port", str(_free_port())])
    assert code == 1
    assert capsys.readouterr().err.startswith("client: ")