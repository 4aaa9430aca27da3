"""Core control session — one request, then the reply stream.

The session depends on a :class:`~ctlkit.core.protocols.ControlTransport`
injected at construction time.  Rendering is delegated to a callback so
the core never prints.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ctlkit.core.protocols import ControlTransport
from ctlkit.core.requests import ReplyRecord, Request
from ctlkit.exceptions import CtlError, ProtocolError

logger = logging.getLogger(__name__)


class ControlSession:
    """Drive one request/reply exchange over *transport*.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`ControlTransport` protocol.
    """

    def __init__(self, transport: ControlTransport) -> None:
        self._transport: ControlTransport = transport

    def execute(
        self,
        request: Request,
        on_record: Callable[[ReplyRecord], None],
    ) -> int:
        """Send *request* and feed reply records to *on_record*.

        Fire-and-forget requests return as soon as the write completes.
        Otherwise every record up to, but not including, the end record
        is passed to *on_record*.

        Returns
        -------
        int
            Number of records delivered to *on_record*.

        Raises
        ------
        ProtocolError
            When the stream closes before the end record, or the
            transport fails unexpectedly.
        """
        self._send(request)
        if not request.expects_reply:
            logger.debug("%s sent, no reply expected", request.type.name)
            return 0

        delivered = 0
        try:
            for record in self._transport.replies():
                if record.is_end:
                    logger.debug("end of stream after %d records", delivered)
                    return delivered
                on_record(record)
                delivered += 1
        except CtlError:
            raise
        except OSError as exc:
            raise ProtocolError(f"read error: {exc}") from exc

        raise ProtocolError("pipe closed")

    def _send(self, request: Request) -> None:
        logger.debug("sending %s %s", request.type.name, request.payload)
        try:
            self._transport.send(request)
        except CtlError:
            raise
        except OSError as exc:
            raise ProtocolError(f"write error: {exc}") from exc
