"""Shared pytest fixtures and configuration for the ctlkit test suite.

Guidelines
----------
* No real control sockets — the transport is faked or a socketpair.
* Interface names resolve through a dict-backed fake, never the host.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

import pytest

from ctlkit.core.requests import MessageType, ReplyRecord, Request


class FakeResolver:
    """Dict-backed :class:`~ctlkit.core.protocols.InterfaceResolver`."""

    def __init__(self, table: Mapping[str, int] | None = None) -> None:
        self.table: dict[str, int] = dict(table or {})
        self.lookups: list[str] = []

    def index_of(self, name: str) -> int | None:
        self.lookups.append(name)
        return self.table.get(name)


class FakeTransport:
    """In-memory :class:`~ctlkit.core.protocols.ControlTransport`.

    Records sent requests and replays *records*.  Usable as the context
    manager returned by a transport factory.
    """

    def __init__(self, records: list[ReplyRecord] | None = None) -> None:
        self.records: list[ReplyRecord] = list(records or [])
        self.sent: list[Request] = []
        self.path: str | None = None
        self.closed: bool = False

    def __enter__(self) -> FakeTransport:
        return self

    def __exit__(self, *_args: object) -> None:
        self.closed = True

    def send(self, request: Request) -> None:
        self.sent.append(request)

    def replies(self) -> Iterator[ReplyRecord]:
        yield from self.records

    def factory(self, path: str) -> FakeTransport:
        self.path = path
        return self


def end_record() -> ReplyRecord:
    return ReplyRecord(MessageType.CTL_END)


@pytest.fixture()
def resolver() -> FakeResolver:
    return FakeResolver({"em0": 3, "vio0": 1, "lo0": 5})
