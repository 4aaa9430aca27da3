"""Unix-domain socket implementation of :class:`~ctlkit.core.protocols.ControlTransport`.

Framing is one JSON object per line::

    {"type": "ctl_show_main_info", "data": {"text": "..."}}

This module is the **only** place that touches the control socket.  All
``OSError`` and JSON decoding failures are caught here and re-raised as
:class:`~ctlkit.exceptions.ConnectionFailedError` or
:class:`~ctlkit.exceptions.ProtocolError`.
"""

from __future__ import annotations

import json
import logging
import socket
from collections.abc import Iterator
from typing import Any

from ctlkit.core.requests import MessageType, ReplyRecord, Request
from ctlkit.exceptions import ConnectionFailedError, ProtocolError

logger = logging.getLogger(__name__)

_RECV_SIZE: int = 4096


def encode_request(request: Request) -> bytes:
    """Serialise *request* as one newline-terminated JSON line."""
    message = {"type": request.type.value, "data": request.payload}
    return json.dumps(message, separators=(",", ":")).encode("utf-8") + b"\n"


def decode_record(line: bytes) -> ReplyRecord:
    """Parse one JSON line into a :class:`ReplyRecord`.

    Raises
    ------
    ProtocolError
        When the line is not a JSON object with a known ``type``.
    """
    try:
        message: Any = json.loads(line)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProtocolError(f"malformed reply record: {exc}") from exc

    if not isinstance(message, dict):
        raise ProtocolError("malformed reply record: not an object")

    try:
        record_type = MessageType(message.get("type"))
    except ValueError as exc:
        raise ProtocolError(f"unknown reply type: {message.get('type')!r}") from exc

    data = message.get("data") or {}
    if not isinstance(data, dict):
        raise ProtocolError("malformed reply record: data is not an object")
    return ReplyRecord(record_type, data)


class UnixSocketTransport:
    """Control channel over an ``AF_UNIX`` stream socket.

    Usage::

        with UnixSocketTransport("/var/run/netcfgd.sock") as transport:
            ControlSession(transport).execute(request, on_record)

    Parameters
    ----------
    path:
        Filesystem path of the daemon's control socket.
    sock:
        An already-connected socket.  When given, :meth:`connect` is a
        no-op; used with :func:`socket.socketpair` in tests.
    """

    def __init__(self, path: str, *, sock: socket.socket | None = None) -> None:
        self.path: str = path
        self._sock: socket.socket | None = sock
        self._buffer: bytes = b""

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> UnixSocketTransport:
        self.connect()
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Connect to :attr:`path`.

        Raises
        ------
        ConnectionFailedError
            When the socket cannot be created or connected.
        """
        if self._sock is not None:
            return
        logger.debug("connecting to %s", self.path)
        try:
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        except OSError as exc:
            raise ConnectionFailedError(f"socket: {exc}") from exc
        try:
            sock.connect(self.path)
        except OSError as exc:
            sock.close()
            raise ConnectionFailedError(
                f"connect: {self.path}: {exc.strerror or exc}",
                hint="Is the daemon running?  Use -s to select another socket.",
            ) from exc
        self._sock = sock

    def close(self) -> None:
        """Close the socket (idempotent)."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def send(self, request: Request) -> None:
        sock = self._require_socket()
        try:
            sock.sendall(encode_request(request))
        except OSError as exc:
            raise ProtocolError(f"write error: {exc}") from exc

    def replies(self) -> Iterator[ReplyRecord]:
        sock = self._require_socket()
        while True:
            while b"\n" in self._buffer:
                line, self._buffer = self._buffer.split(b"\n", 1)
                if line.strip():
                    yield decode_record(line)
            try:
                chunk = sock.recv(_RECV_SIZE)
            except OSError as exc:
                raise ProtocolError(f"read error: {exc}") from exc
            if not chunk:
                if self._buffer.strip():
                    raise ProtocolError("truncated reply record")
                return
            self._buffer += chunk

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise ProtocolError("transport is not connected")
        return self._sock
