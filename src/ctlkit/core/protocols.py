"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the parser and the control session stay testable
without a kernel interface table or a running daemon.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ctlkit.core.requests import ReplyRecord, Request


class InterfaceResolver(Protocol):
    """Contract for interface-name lookups."""

    def index_of(self, name: str) -> int | None:
        """Return the interface index for *name*, or ``None`` if unknown."""
        ...  # pragma: no cover


class ControlTransport(Protocol):
    """Contract for the local channel to a daemon's control socket.

    Implementations must map all socket and decoding exceptions to
    :class:`~ctlkit.exceptions.CtlError` subclasses.
    """

    def send(self, request: Request) -> None:
        """Write *request* completely to the channel.

        Raises
        ------
        ProtocolError
            When the write fails.
        """
        ...  # pragma: no cover

    def replies(self) -> Iterator[ReplyRecord]:
        """Yield reply records in arrival order.

        The iterator ends when the peer closes the channel.

        Raises
        ------
        ProtocolError
            When a record cannot be read or decoded.
        """
        ...  # pragma: no cover
