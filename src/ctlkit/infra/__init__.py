"""Infrastructure layer — operating-system integration.

This layer wraps the host interface table and the daemons' control
sockets.  Every raw ``OSError`` or decoding error must be caught here
and re-raised as a :class:`~ctlkit.exceptions.CtlError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from ctlkit.infra.interfaces import SystemInterfaceResolver
from ctlkit.infra.unix_transport import UnixSocketTransport

__all__: list[str] = [
    "SystemInterfaceResolver",
    "UnixSocketTransport",
]
