"""Custom exception hierarchy for ctlkit.

All exceptions that cross layer boundaries must inherit from
:class:`CtlError`.  Raw socket and decoding exceptions must NEVER
propagate beyond the infrastructure layer — they are caught there and
re-raised as a typed subclass defined here.

Hierarchy
---------
CtlError
├── ParseError
│   ├── UnknownArgumentError
│   ├── AmbiguousArgumentError
│   ├── MissingArgumentError
│   ├── SuperfluousArgumentError
│   └── InvalidValueError
├── UsageError
├── GrammarDefinitionError
├── ConnectionFailedError
├── ProtocolError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class CtlError(Exception):
    """Base exception for all ctlkit errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command-line parsing --------------------------------------------------

class ParseError(CtlError):
    """Raised when argv does not form a command of the active grammar.

    Parameters
    ----------
    message:
        One-line description, e.g. ``"unknown argument: foo"``.
    word:
        The offending input word, or ``None`` at end of input.
    valid_args:
        Legal tokens of the table where matching failed.  Rendered as
        the hint when non-empty.
    """

    def __init__(
        self,
        message: str,
        *,
        word: str | None = None,
        valid_args: Sequence[str] = (),
    ) -> None:
        self.word: str | None = word
        self.valid_args: tuple[str, ...] = tuple(valid_args)
        super().__init__(message, hint=format_valid_args(self.valid_args))


class UnknownArgumentError(ParseError):
    """Raised when a word matches no node of the active table."""


class AmbiguousArgumentError(ParseError):
    """Raised when an abbreviation matches more than one node."""


class MissingArgumentError(ParseError):
    """Raised when input ends where the active table requires a word."""


class SuperfluousArgumentError(ParseError):
    """Raised when input remains after a complete command was matched."""


class InvalidValueError(ParseError):
    """Raised when a positional value fails conversion."""


class UsageError(CtlError):
    """Raised when the global options before the command are malformed."""


# --- Grammar definitions ---------------------------------------------------

class GrammarDefinitionError(CtlError):
    """Raised when a grammar definition is malformed."""


# --- Daemon communication --------------------------------------------------

class ConnectionFailedError(CtlError):
    """Raised when the control socket cannot be reached."""


class ProtocolError(CtlError):
    """Raised when the reply stream is truncated or malformed."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(CtlError):
    """Raised when a required runtime dependency is not available."""


def format_valid_args(valid_args: Sequence[str]) -> str | None:
    """Render *valid_args* as the ``valid commands/args`` hint block.

    Returns ``None`` when there is nothing to list.
    """
    if not valid_args:
        return None
    return "\n".join(
        ("valid commands/args:", *(f"  {arg}" for arg in valid_args))
    )
