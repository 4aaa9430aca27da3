"""CLI application entry points for the ctlkit control clients.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ctlkit.exceptions.CtlError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
Rich and returning well-defined exit codes.

Architecture notes
------------------
* No parsing logic lives here — argv is handed to the core grammar
  parser after the global options are stripped.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from typing import NoReturn

from ctlkit.cli import exit_codes
from ctlkit.cli.clients import CLIENTS, NETCFGCTL, NEWDCTL, ClientProfile
from ctlkit.cli.console import console, escape_markup, get_rich_console, out
from ctlkit.cli.render import renderer_for
from ctlkit.core.parser import CommandParser
from ctlkit.core.protocols import ControlTransport, InterfaceResolver
from ctlkit.core.requests import build_request
from ctlkit.core.session import ControlSession
from ctlkit.exceptions import CtlError, EnvironmentError, UsageError
from ctlkit.version import __version__

logger = logging.getLogger(__name__)

TransportFactory = Callable[[str], AbstractContextManager[ControlTransport]]

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_log_handler: logging.Handler | None = None


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def _build_log_handler() -> logging.Handler:
    """Route log records through Rich on stderr when it is installed."""
    try:
        from rich.logging import RichHandler

        return RichHandler(
            console=get_rich_console(),
            show_time=False,
            show_path=False,
        )
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        return handler


def _configure_logging(level: str) -> None:
    global _log_handler

    package_logger = logging.getLogger("ctlkit")
    package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if _log_handler is None:
        _log_handler = _build_log_handler()
        package_logger.addHandler(_log_handler)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Report option errors through the error boundary, not ``sys.exit(2)``."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=self.format_usage().rstrip())


def _build_parser(profile: ClientProfile) -> argparse.ArgumentParser:
    """Construct the global option scanner for *profile*.

    Only global options are declared here; everything after them is the
    command, parsed by the client's grammar.
    """
    parser = _ArgumentParser(
        prog=profile.prog,
        description=profile.description,
        usage=f"{profile.prog} [-s socket] command [argument ...]",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-s",
        "--socket",
        default=None,
        help=f"Control socket (default {profile.default_socket}, "
        f"or ${profile.socket_env}).",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CTLKIT_LOG", "WARNING"),
        help="Logging level (default WARNING, or $CTLKIT_LOG).",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command words, e.g. 'show main'. Abbreviations are accepted.",
    )
    return parser


def _default_resolver() -> InterfaceResolver:
    from ctlkit.infra.interfaces import SystemInterfaceResolver

    return SystemInterfaceResolver()


def _default_transport(path: str) -> AbstractContextManager[ControlTransport]:
    from ctlkit.infra.unix_transport import UnixSocketTransport

    return UnixSocketTransport(path)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    profile: ClientProfile = NETCFGCTL,
    *,
    resolver: InterfaceResolver | None = None,
    transport_factory: TransportFactory | None = None,
) -> int:
    """Run one control-client invocation.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    profile:
        The client to run.
    resolver, transport_factory:
        Overrides for the host interface table and the control socket.
        Accepting them enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    CtlError
        On parse, connection or protocol failure.
    """
    parser = _build_parser(profile)
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    command_parser = CommandParser(profile.grammar, resolver or _default_resolver())
    result = command_parser.parse(args.command)
    request = build_request(result)
    logger.debug("parsed %s into %s", args.command, result)

    socket_path = profile.socket_path(args.socket)
    open_transport = transport_factory or _default_transport
    with open_transport(socket_path) as transport:
        ControlSession(transport).execute(request, renderer_for(result.action))

    if request.confirmation is not None:
        out.print(request.confirmation, markup=False, soft_wrap=True)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def run_client(
    profile: ClientProfile,
    argv: Sequence[str] | None = None,
    *,
    resolver: InterfaceResolver | None = None,
    transport_factory: TransportFactory | None = None,
) -> int:
    """Run :func:`main` and map every outcome to an exit code.

    This guarantees the process never exits with a raw stack trace
    during normal usage.
    """
    try:
        return main(
            argv, profile, resolver=resolver, transport_factory=transport_factory,
        )
    except CtlError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            console.print(exc.hint, markup=False)
        return exit_codes.GENERAL_ERROR
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        return exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        logger.debug("unexpected error", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        return exit_codes.UNEXPECTED_ERROR


def netcfgctl() -> None:
    """Console-script entry point for ``netcfgctl``."""
    sys.exit(run_client(NETCFGCTL))


def newdctl() -> None:
    """Console-script entry point for ``newdctl``."""
    sys.exit(run_client(NEWDCTL))


def dispatch(argv: Sequence[str] | None = None) -> int:
    """Select a client by name: ``python -m ctlkit <client> ...``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in CLIENTS:
        names = "|".join(CLIENTS)
        console.print(f"usage: python -m ctlkit {{{names}}} [-s socket] command [argument ...]", markup=False)
        return exit_codes.GENERAL_ERROR
    return run_client(CLIENTS[args[0]], args[1:])
