"""Domain models for ctlkit.

Grammar nodes, tables and parse results are **frozen** dataclasses —
immutable value objects with no behaviour beyond data access.  Grammar
definitions are built once at import time and shared read-only by every
parse; a :class:`ParseResult` is created fresh by each parse.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Symbolic identifiers
# ---------------------------------------------------------------------------

class Action(enum.Enum):
    """Command completed by an accepted grammar path."""

    RELOAD = "reload"
    SHOW_MAIN = "show main"
    SHOW_FRONTEND = "show frontend"
    SHOW_ENGINE = "show engine"
    SHOW_PROPOSALS = "show proposals"
    SHOW_DHCLIENT = "show dhclient"
    SHOW_SLAAC = "show slaac"
    LOG_VERBOSE = "log verbose"
    LOG_BRIEF = "log brief"
    KILL_XID = "kill"


class ProposalSource(enum.IntEnum):
    """Origin of a network configuration proposal.

    The lowercase member name is the command-line keyword; the value is
    the numeric payload sent to the daemon.
    """

    DHCLIENT = 1
    SLAAC = 2

    @property
    def keyword(self) -> str:
        return self.name.lower()

    @classmethod
    def from_keyword(cls, word: str) -> ProposalSource | None:
        """Return the member whose keyword equals *word* exactly."""
        for member in cls:
            if member.keyword == word:
                return member
        return None


class NodeKind(enum.Enum):
    KEYWORD = "keyword"
    POSITIONAL = "positional"
    EMPTY = "empty"


class ValueKind(enum.Enum):
    """Shape of the value consumed by a positional node."""

    TEXT = "text"
    """Free-text name, captured verbatim."""

    IFNAME = "ifname"
    """Interface name, resolved to an interface index."""

    XID = "xid"
    """Hexadecimal unsigned 32-bit transaction identifier."""

    SOURCE = "source"
    """One of the :class:`ProposalSource` keywords."""


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GrammarNode:
    """One entry of a grammar table.

    Use :func:`keyword`, :func:`positional` and :func:`empty` rather than
    the constructor.
    """

    kind: NodeKind

    keyword: str = ""
    """Literal command word.  Only meaningful for keyword nodes."""

    value_kind: ValueKind | None = None
    """Value shape.  Only meaningful for positional nodes."""

    action: Action | None = None
    """Command completed when this node matches, if any."""

    child: str | None = None
    """Name of the table that becomes active after this node."""

    placeholder: str | None = None
    """Usage text overriding the default positional placeholder."""


@dataclass(frozen=True, slots=True)
class GrammarTable:
    """Named, ordered set of candidate nodes.

    Order only affects display and which positional node is tried first.
    """

    name: str
    nodes: tuple[GrammarNode, ...]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[GrammarNode]:
        return iter(self.nodes)


def keyword(
    text: str,
    action: Action | None = None,
    child: str | None = None,
) -> GrammarNode:
    return GrammarNode(NodeKind.KEYWORD, keyword=text, action=action, child=child)


def positional(
    value_kind: ValueKind,
    action: Action | None = None,
    child: str | None = None,
    *,
    placeholder: str | None = None,
) -> GrammarNode:
    return GrammarNode(
        NodeKind.POSITIONAL,
        value_kind=value_kind,
        action=action,
        child=child,
        placeholder=placeholder,
    )


def empty(action: Action | None = None) -> GrammarNode:
    return GrammarNode(NodeKind.EMPTY, action=action)


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseResult:
    """Typed command descriptor produced by one successful parse."""

    action: Action

    interface_index: int | None = None
    """Kernel index of the interface named on the command line."""

    interface_name: str | None = None
    """The interface name as typed, kept for display."""

    xid: int | None = None
    """Proposal transaction id (unsigned 32-bit)."""

    source: ProposalSource | None = None

    name: str | None = None
    """Free-text name, e.g. a newd group."""
