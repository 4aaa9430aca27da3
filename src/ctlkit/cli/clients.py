"""Profiles of the shipped control clients.

A profile binds a program name to its daemon's default control socket
and command grammar.  Everything else — parsing, request mapping, the
reply loop — is shared by every client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from ctlkit.core.grammar import Grammar
from ctlkit.core.grammars import NETCFGD_GRAMMAR, NEWD_GRAMMAR


@dataclass(frozen=True, slots=True)
class ClientProfile:
    """Static description of one control client."""

    prog: str
    """Program name shown in usage and error output."""

    description: str

    default_socket: str
    """Control socket used when neither ``-s`` nor the env var is set."""

    socket_env: str
    """Environment variable overriding :attr:`default_socket`."""

    grammar: Grammar

    def socket_path(self, override: str | None = None) -> str:
        """Resolve the control socket: ``-s`` value, env var, then default."""
        if override:
            return override
        return os.environ.get(self.socket_env) or self.default_socket


NETCFGCTL = ClientProfile(
    prog="netcfgctl",
    description="Control the network configuration daemon.",
    default_socket="/var/run/netcfgd.sock",
    socket_env="NETCFGCTL_SOCKET",
    grammar=NETCFGD_GRAMMAR,
)

NEWDCTL = ClientProfile(
    prog="newdctl",
    description="Control the newd daemon.",
    default_socket="/var/run/newd.sock",
    socket_env="NEWDCTL_SOCKET",
    grammar=NEWD_GRAMMAR,
)

CLIENTS: dict[str, ClientProfile] = {
    profile.prog: profile for profile in (NETCFGCTL, NEWDCTL)
}
