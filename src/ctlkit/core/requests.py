"""Map a parsed command to the single request sent to the daemon.

Pure data transformation — no I/O.  Every :class:`~ctlkit.core.models.Action`
maps to exactly one :class:`Request`.  Some requests are *fire and
forget*: the daemon sends no reply and the client only confirms locally
that the request was written.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from ctlkit.core.models import Action, ParseResult


class MessageType(enum.Enum):
    """Control message types shared by requests and reply records."""

    CTL_RELOAD = "ctl_reload"
    CTL_LOG_VERBOSE = "ctl_log_verbose"
    CTL_KILL_PROPOSAL = "ctl_kill_proposal"
    CTL_SHOW_MAIN_INFO = "ctl_show_main_info"
    CTL_SHOW_FRONTEND_INFO = "ctl_show_frontend_info"
    CTL_SHOW_ENGINE_INFO = "ctl_show_engine_info"
    CTL_SHOW_PROPOSALS = "ctl_show_proposals"
    CTL_SHOW_DHCLIENT = "ctl_show_dhclient"
    CTL_SHOW_SLAAC = "ctl_show_slaac"
    CTL_END = "ctl_end"


@dataclass(frozen=True, slots=True)
class Request:
    """One outbound control message."""

    type: MessageType
    payload: dict[str, Any] = field(default_factory=dict)

    confirmation: str | None = None
    """Local confirmation for fire-and-forget requests, else ``None``."""

    @property
    def expects_reply(self) -> bool:
        return self.confirmation is None


@dataclass(frozen=True, slots=True)
class ReplyRecord:
    """One record of the daemon's reply stream."""

    type: MessageType
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def is_end(self) -> bool:
        return self.type is MessageType.CTL_END


_SHOW_TYPES: dict[Action, MessageType] = {
    Action.SHOW_MAIN: MessageType.CTL_SHOW_MAIN_INFO,
    Action.SHOW_FRONTEND: MessageType.CTL_SHOW_FRONTEND_INFO,
    Action.SHOW_DHCLIENT: MessageType.CTL_SHOW_DHCLIENT,
    Action.SHOW_SLAAC: MessageType.CTL_SHOW_SLAAC,
}


def build_request(result: ParseResult) -> Request:
    """Return the request for *result*.

    Raises
    ------
    ValueError
        If a required captured value is missing.  Results produced by
        the shipped grammars always carry it.
    """
    action = result.action

    if action is Action.RELOAD:
        return Request(MessageType.CTL_RELOAD, confirmation="reload request sent.")

    if action in (Action.LOG_VERBOSE, Action.LOG_BRIEF):
        verbose = 1 if action is Action.LOG_VERBOSE else 0
        return Request(
            MessageType.CTL_LOG_VERBOSE,
            {"verbose": verbose},
            confirmation="logging request sent.",
        )

    if action is Action.KILL_XID:
        if result.xid is None:
            raise ValueError("kill requires a transaction id")
        return Request(
            MessageType.CTL_KILL_PROPOSAL,
            {"xid": result.xid},
            confirmation=f"kill proposal '0x{result.xid:x}' request sent.",
        )

    if action is Action.SHOW_PROPOSALS:
        payload: dict[str, Any] = {}
        if result.interface_index is not None:
            payload["ifindex"] = result.interface_index
        if result.source is not None:
            payload["source"] = int(result.source)
        return Request(MessageType.CTL_SHOW_PROPOSALS, payload)

    if action is Action.SHOW_ENGINE:
        payload = {"name": result.name} if result.name is not None else {}
        return Request(MessageType.CTL_SHOW_ENGINE_INFO, payload)

    return Request(_SHOW_TYPES[action])
