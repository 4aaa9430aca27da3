"""Match one input word against the candidate nodes of a grammar table.

Every node of the table is evaluated, so that non-unique abbreviations
are detected rather than resolved by table order.  Positional
conversion failures are returned as :class:`InvalidValue` instead of
being raised; the parser decides how to report them.

Matching rules
--------------
* **empty** — matches when the word is absent or ``""``.
* **keyword** — matches when the word is a non-empty, case-sensitive
  prefix of the keyword.
* **text / ifname / xid positional** — eligible only when the word is
  non-empty and no earlier node has matched.  A conversion failure of an
  ifname or xid stops the evaluation immediately.
* **source positional** — matches only an exact source keyword; a
  mismatch fails this node alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from ctlkit.core.models import GrammarNode, GrammarTable, NodeKind, ProposalSource, ValueKind
from ctlkit.core.protocols import InterfaceResolver

IF_NAMESIZE: int = 16
"""Kernel interface-name buffer size, including the terminating NUL."""

MAX_NAME_LEN: int = 16
"""Longest free-text name accepted by a text positional."""

XID_MAX: int = 2**32 - 1

_HEX_RE = re.compile(r"(?:0[xX])?([0-9A-Fa-f]+)")


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InterfaceRef:
    """An interface name together with its resolved index."""

    name: str
    index: int


MatchValue = Union[InterfaceRef, ProposalSource, int, str, None]


@dataclass(frozen=True, slots=True)
class Matched:
    node: GrammarNode
    value: MatchValue = None
    """Converted positional value, or ``None`` for keyword/empty nodes."""


@dataclass(frozen=True, slots=True)
class Ambiguous:
    count: int


@dataclass(frozen=True, slots=True)
class NoMatch:
    pass


@dataclass(frozen=True, slots=True)
class MissingArgument:
    pass


@dataclass(frozen=True, slots=True)
class InvalidValue:
    reason: str


MatchOutcome = Union[Matched, Ambiguous, NoMatch, MissingArgument, InvalidValue]


# ---------------------------------------------------------------------------
# Positional conversions
# ---------------------------------------------------------------------------

def _convert_ifname(word: str, resolver: InterfaceResolver) -> InterfaceRef | InvalidValue:
    if len(word) >= IF_NAMESIZE:
        return InvalidValue(f"interface name too long: {word}")
    index = resolver.index_of(word)
    if index is None:
        return InvalidValue(f"unknown interface: {word}")
    return InterfaceRef(word, index)


def _convert_xid(word: str) -> int | InvalidValue:
    match = _HEX_RE.fullmatch(word)
    if match is None:
        return InvalidValue(f"xid is not hexadecimal: {word}")
    value = int(match.group(1), 16)
    if value > XID_MAX:
        return InvalidValue(f"xid is too large: {word}")
    return value


def _convert_text(word: str) -> str | InvalidValue:
    if len(word) > MAX_NAME_LEN:
        return InvalidValue(f"name too long: {word}")
    return word


def _convert_positional(
    node: GrammarNode,
    word: str,
    resolver: InterfaceResolver,
) -> InterfaceRef | int | str | InvalidValue:
    if node.value_kind is ValueKind.IFNAME:
        return _convert_ifname(word, resolver)
    if node.value_kind is ValueKind.XID:
        return _convert_xid(word)
    return _convert_text(word)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def match_word(
    word: str | None,
    table: GrammarTable,
    resolver: InterfaceResolver,
) -> MatchOutcome:
    """Evaluate *word* against every node of *table*.

    Parameters
    ----------
    word:
        The next input word, or ``None`` at end of input.
    table:
        The currently active grammar table.
    resolver:
        Interface-name lookup used by ifname positionals.

    Returns
    -------
    MatchOutcome
        :class:`Matched` for exactly one match, :class:`Ambiguous` for
        several, :class:`MissingArgument` when input ended and nothing
        matched, :class:`NoMatch` otherwise, or :class:`InvalidValue`
        when a positional conversion failed.
    """
    count = 0
    matched: Matched | None = None

    for node in table:
        if node.kind is NodeKind.EMPTY:
            if not word:
                count += 1
                matched = Matched(node)

        elif node.kind is NodeKind.KEYWORD:
            if word and node.keyword.startswith(word):
                count += 1
                matched = Matched(node)

        elif node.value_kind is ValueKind.SOURCE:
            source = ProposalSource.from_keyword(word) if word else None
            if source is not None:
                count += 1
                matched = Matched(node, source)

        elif count == 0 and word:
            value = _convert_positional(node, word, resolver)
            if isinstance(value, InvalidValue):
                return value
            count += 1
            matched = Matched(node, value)

    if count > 1:
        return Ambiguous(count)
    if matched is not None:
        return matched
    if word is None:
        return MissingArgument()
    return NoMatch()
