"""Turn an argument list into a :class:`~ctlkit.core.models.ParseResult`.

The driver walks the grammar from its root table.  Each step matches the
next word (or end of input) against the active table, folds the matched
node's value and action into a per-call accumulator, consumes the word
and either descends into the node's child table or stops.

Guarantees
----------
* No I/O and no process exits — every failure is a
  :class:`~ctlkit.exceptions.ParseError` subclass carrying the legal
  tokens of the table where matching failed.
* No state survives between calls; parsing the same argv twice yields
  equal results.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ctlkit.core.grammar import Grammar
from ctlkit.core.matcher import (
    Ambiguous,
    InterfaceRef,
    InvalidValue,
    Matched,
    MatchValue,
    MissingArgument,
    match_word,
)
from ctlkit.core.models import Action, NodeKind, ParseResult, ProposalSource
from ctlkit.core.protocols import InterfaceResolver
from ctlkit.core.usage import describe
from ctlkit.exceptions import (
    AmbiguousArgumentError,
    InvalidValueError,
    MissingArgumentError,
    SuperfluousArgumentError,
    UnknownArgumentError,
)

logger = logging.getLogger(__name__)


def _fold_value(fields: dict[str, Any], value: MatchValue) -> None:
    """Store a converted positional value in the field for its type."""
    if isinstance(value, InterfaceRef):
        fields["interface_name"] = value.name
        fields["interface_index"] = value.index
    elif isinstance(value, ProposalSource):
        fields["source"] = value
    elif isinstance(value, int):
        fields["xid"] = value
    elif isinstance(value, str):
        fields["name"] = value


def parse(
    args: Sequence[str],
    grammar: Grammar,
    resolver: InterfaceResolver,
) -> ParseResult:
    """Parse *args* against *grammar*.

    Parameters
    ----------
    args:
        Command words, without the program name or global options.
    grammar:
        The client's command grammar.
    resolver:
        Interface-name lookup for ifname positionals.

    Raises
    ------
    UnknownArgumentError
        A word matched nothing in the active table.
    AmbiguousArgumentError
        An abbreviation matched several nodes.
    MissingArgumentError
        Input ended where a word was required.
    InvalidValueError
        A positional value could not be converted.
    SuperfluousArgumentError
        Words remained after the command was complete.
    """
    table = grammar.root_table
    cursor = 0
    action: Action | None = None
    fields: dict[str, Any] = {}

    while True:
        word = args[cursor] if cursor < len(args) else None
        outcome = match_word(word, table, resolver)

        if not isinstance(outcome, Matched):
            valid_args = describe(table)
            logger.debug("no match for %r in table %s: %s", word, table.name, outcome)
            if isinstance(outcome, InvalidValue):
                raise InvalidValueError(outcome.reason, word=word, valid_args=valid_args)
            if isinstance(outcome, Ambiguous):
                raise AmbiguousArgumentError(
                    f"ambiguous argument: {word}", word=word, valid_args=valid_args,
                )
            if isinstance(outcome, MissingArgument):
                raise MissingArgumentError(
                    "missing argument", word=None, valid_args=valid_args,
                )
            raise UnknownArgumentError(
                f"unknown argument: {word}", word=word, valid_args=valid_args,
            )

        node = outcome.node
        logger.debug("matched %r in table %s: %s", word, table.name, node)
        if node.kind is NodeKind.POSITIONAL:
            _fold_value(fields, outcome.value)
        if node.action is not None:
            action = node.action

        if word is None:
            break
        cursor += 1

        if node.kind is NodeKind.EMPTY or node.child is None:
            break
        table = grammar.table(node.child)

    if cursor < len(args):
        raise SuperfluousArgumentError(
            f"superfluous argument: {args[cursor]}", word=args[cursor],
        )

    if action is None:
        raise MissingArgumentError(
            "missing argument: no command given", valid_args=describe(table),
        )

    return ParseResult(action=action, **fields)


class CommandParser:
    """Grammar-bound parser for callers that parse repeatedly.

    Holds only the immutable grammar and the resolver; each
    :meth:`parse` call builds its own result.
    """

    def __init__(self, grammar: Grammar, resolver: InterfaceResolver) -> None:
        self._grammar: Grammar = grammar
        self._resolver: InterfaceResolver = resolver

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    def parse(self, args: Sequence[str]) -> ParseResult:
        """Parse *args*; see :func:`ctlkit.core.parser.parse`."""
        return parse(args, self._grammar, self._resolver)
