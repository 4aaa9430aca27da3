"""Reply-record rendering for the CLI layer.

Each ``show`` action has a renderer that prints the records it expects
and ignores every other record type.  Daemon-supplied text is printed
with Rich markup disabled.
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Callable, Mapping
from typing import Any

from ctlkit.cli.console import out
from ctlkit.core.models import Action
from ctlkit.core.requests import MessageType, ReplyRecord

logger = logging.getLogger(__name__)

RecordRenderer = Callable[[ReplyRecord], None]

PROPOSAL_ADDRESS_FIELDS: tuple[str, ...] = (
    "gateway",
    "ifa",
    "netmask",
    "dns1",
    "dns2",
    "dns3",
    "dns4",
)
"""Optional proposal fields, in display order.  Absent keys are skipped."""


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def format_address(value: object) -> str:
    """Render an IPv4/IPv6 address, or ``<invalid address>``."""
    try:
        return str(ipaddress.ip_address(str(value)))
    except ValueError:
        return "<invalid address>"


def format_prefix(address: object, bits: object, *, version: int) -> str:
    """Render ``address/bits`` for the given IP *version*."""
    invalid = f"<invalid IPv{version}>"
    try:
        network = ipaddress.ip_network(f"{address}/{bits}", strict=False)
    except ValueError:
        return invalid
    if network.version != version:
        return invalid
    return str(network)


def format_main_info(data: Mapping[str, Any]) -> str:
    return f"main says: '{data.get('text', '')}'"


def format_frontend_info(data: Mapping[str, Any]) -> str:
    parts: list[str] = []
    if "opts" in data:
        parts.append(f"0x{int(data['opts']):x}")
    parts.append(str(data.get("yesno", 0)))
    parts.append(str(data.get("integer", 0)))
    parts.append(f"'{data.get('global_text', '')}'")
    return "frontend says: " + " ".join(parts)


def format_proposal(data: Mapping[str, Any]) -> list[str]:
    """Render a proposal record: a header plus one line per present address."""
    lines = [
        f"xid: 0x{int(data.get('xid', 0)):x} index: {data.get('index', 0)} "
        f"source: {data.get('source', 0)} mtu: {data.get('mtu', 0)}"
    ]
    for name in PROPOSAL_ADDRESS_FIELDS:
        if name in data:
            lines.append(f"{name:>20}: {format_address(data[name])}")
    lines.append("")
    return lines


def format_engine_info(data: Mapping[str, Any]) -> str:
    yesno = "yes" if data.get("yesno") else "no"
    v4 = format_prefix(data.get("group_v4address"), data.get("group_v4_bits"), version=4)
    v6 = format_prefix(data.get("group_v6address"), data.get("group_v6_bits"), version=6)
    return (
        f"engine says: '{data.get('name', ''):<16}' {yesno} {data.get('integer', 0)} "
        f"\t{v4:<16} \t{v6:<46}"
    )


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def _only(
    types: tuple[MessageType, ...],
    fmt: Callable[[Mapping[str, Any]], str | list[str]],
) -> RecordRenderer:
    def render(record: ReplyRecord) -> None:
        if record.type not in types:
            logger.debug("ignoring %s record", record.type.name)
            return
        text = fmt(record.data)
        for line in [text] if isinstance(text, str) else text:
            out.print(line, markup=False, soft_wrap=True)

    return render


_PROPOSAL_TYPES = (MessageType.CTL_SHOW_DHCLIENT, MessageType.CTL_SHOW_SLAAC)

RENDERERS: dict[Action, RecordRenderer] = {
    Action.SHOW_MAIN: _only((MessageType.CTL_SHOW_MAIN_INFO,), format_main_info),
    Action.SHOW_FRONTEND: _only((MessageType.CTL_SHOW_FRONTEND_INFO,), format_frontend_info),
    Action.SHOW_ENGINE: _only((MessageType.CTL_SHOW_ENGINE_INFO,), format_engine_info),
    Action.SHOW_PROPOSALS: _only(_PROPOSAL_TYPES, format_proposal),
    Action.SHOW_DHCLIENT: _only(_PROPOSAL_TYPES, format_proposal),
    Action.SHOW_SLAAC: _only(_PROPOSAL_TYPES, format_proposal),
}


def _ignore(record: ReplyRecord) -> None:
    logger.debug("no renderer, ignoring %s record", record.type.name)


def renderer_for(action: Action) -> RecordRenderer:
    """Return the renderer for *action*; unknown actions print nothing."""
    return RENDERERS.get(action, _ignore)
