"""Infrastructure: interface-name resolution.

Backed by :func:`socket.if_nametoindex`, which consults the host's
interface table.  Lookup failures are reported as ``None`` — the
parser turns them into an ``InvalidValueError``.
"""

from __future__ import annotations

import logging
import socket

logger = logging.getLogger(__name__)


class SystemInterfaceResolver:
    """Concrete :class:`~ctlkit.core.protocols.InterfaceResolver` for the host.

    Satisfies the protocol structurally — no explicit inheritance.
    """

    def index_of(self, name: str) -> int | None:
        try:
            index = socket.if_nametoindex(name)
        except (OSError, ValueError) as exc:
            logger.debug("if_nametoindex(%r) failed: %s", name, exc)
            return None
        return index if index > 0 else None
