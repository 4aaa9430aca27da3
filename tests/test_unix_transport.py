"""Tests for the Unix-socket transport (infra/unix_transport.py).

Framing is exercised over :func:`socket.socketpair`; the connect path
uses a socket file under ``tmp_path`` that nothing listens on.
"""

from __future__ import annotations

import json
import socket
from collections.abc import Iterator
from pathlib import Path

import pytest

from ctlkit.core.models import Action, ParseResult
from ctlkit.core.requests import MessageType, Request, build_request
from ctlkit.core.session import ControlSession
from ctlkit.exceptions import ConnectionFailedError, ProtocolError
from ctlkit.infra.unix_transport import UnixSocketTransport, decode_record, encode_request


@pytest.fixture()
def pair() -> Iterator[tuple[UnixSocketTransport, socket.socket]]:
    client, daemon = socket.socketpair()
    transport = UnixSocketTransport("<pair>", sock=client)
    try:
        yield transport, daemon
    finally:
        transport.close()
        daemon.close()


# ---------------------------------------------------------------------------
# Framing
# ---------------------------------------------------------------------------

class TestEncodeRequest:
    def test_one_json_line(self) -> None:
        request = build_request(ParseResult(Action.KILL_XID, xid=0xFF))
        line = encode_request(request)
        assert line.endswith(b"\n")
        assert line.count(b"\n") == 1
        assert json.loads(line) == {"type": "ctl_kill_proposal", "data": {"xid": 255}}

    def test_empty_payload(self) -> None:
        assert json.loads(encode_request(Request(MessageType.CTL_RELOAD))) == {
            "type": "ctl_reload",
            "data": {},
        }


class TestDecodeRecord:
    def test_valid(self) -> None:
        record = decode_record(b'{"type":"ctl_show_main_info","data":{"text":"hi"}}')
        assert record.type is MessageType.CTL_SHOW_MAIN_INFO
        assert record.data == {"text": "hi"}

    def test_missing_data_defaults_to_empty(self) -> None:
        assert decode_record(b'{"type":"ctl_end"}').data == {}

    @pytest.mark.parametrize(
        ("line", "message"),
        [
            (b"not json", "malformed"),
            (b"\xff\xfe", "malformed"),
            (b"[1, 2]", "not an object"),
            (b'{"type":"ctl_bogus"}', "unknown reply type"),
            (b'{"data":{}}', "unknown reply type"),
            (b'{"type":"ctl_end","data":[1]}', "data is not an object"),
        ],
    )
    def test_invalid(self, line: bytes, message: str) -> None:
        with pytest.raises(ProtocolError, match=message):
            decode_record(line)


# ---------------------------------------------------------------------------
# Socket round trip
# ---------------------------------------------------------------------------

class TestSocketPair:
    def test_send_writes_one_line(self, pair: tuple[UnixSocketTransport, socket.socket]) -> None:
        transport, daemon = pair
        transport.send(build_request(ParseResult(Action.SHOW_MAIN)))
        assert daemon.recv(4096) == b'{"type":"ctl_show_main_info","data":{}}\n'

    def test_replies_split_across_chunks(self, pair: tuple[UnixSocketTransport, socket.socket]) -> None:
        transport, daemon = pair
        daemon.sendall(b'{"type":"ctl_show_main_info","data":{"text":"a"}}\n{"type":"ctl_')
        daemon.sendall(b'end"}\n')
        daemon.shutdown(socket.SHUT_WR)
        types = [record.type for record in transport.replies()]
        assert types == [MessageType.CTL_SHOW_MAIN_INFO, MessageType.CTL_END]

    def test_blank_lines_are_skipped(self, pair: tuple[UnixSocketTransport, socket.socket]) -> None:
        transport, daemon = pair
        daemon.sendall(b'\n\n{"type":"ctl_end"}\n')
        daemon.shutdown(socket.SHUT_WR)
        assert [r.type for r in transport.replies()] == [MessageType.CTL_END]

    def test_truncated_record(self, pair: tuple[UnixSocketTransport, socket.socket]) -> None:
        transport, daemon = pair
        daemon.sendall(b'{"type":"ctl_end"')
        daemon.shutdown(socket.SHUT_WR)
        with pytest.raises(ProtocolError, match="truncated"):
            list(transport.replies())

    def test_session_over_socket(self, pair: tuple[UnixSocketTransport, socket.socket]) -> None:
        transport, daemon = pair
        daemon.sendall(
            b'{"type":"ctl_show_main_info","data":{"text":"x"}}\n{"type":"ctl_end"}\n',
        )
        seen = []
        count = ControlSession(transport).execute(
            build_request(ParseResult(Action.SHOW_MAIN)), seen.append,
        )
        assert count == 1
        assert seen[0].data == {"text": "x"}

    def test_close_is_idempotent(self, pair: tuple[UnixSocketTransport, socket.socket]) -> None:
        transport, _daemon = pair
        transport.close()
        transport.close()
        with pytest.raises(ProtocolError, match="not connected"):
            transport.send(Request(MessageType.CTL_RELOAD))


# ---------------------------------------------------------------------------
# Connecting
# ---------------------------------------------------------------------------

class TestConnect:
    def test_missing_socket(self, tmp_path: Path) -> None:
        path = str(tmp_path / "absent.sock")
        with pytest.raises(ConnectionFailedError, match="absent.sock") as exc_info:
            with UnixSocketTransport(path):
                pass
        assert exc_info.value.hint is not None
        assert "-s" in exc_info.value.hint

    def test_unconnected_replies(self) -> None:
        with pytest.raises(ProtocolError, match="not connected"):
            list(UnixSocketTransport("/nowhere").replies())

    def test_connects_to_listening_socket(self, tmp_path: Path) -> None:
        path = str(tmp_path / "d.sock")
        server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            server.bind(path)
            server.listen(1)
            with UnixSocketTransport(path) as transport:
                transport.send(Request(MessageType.CTL_RELOAD))
                conn, _ = server.accept()
                with conn:
                    assert conn.recv(4096) == b'{"type":"ctl_reload","data":{}}\n'
        finally:
            server.close()
