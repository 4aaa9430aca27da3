"""Command grammars of the shipped control clients.

Both grammars are validated once, at import time.  The ``log`` table is
identical for both daemons and is shared.
"""

from __future__ import annotations

from ctlkit.core.grammar import Grammar, build_grammar
from ctlkit.core.models import (
    Action,
    GrammarTable,
    ValueKind,
    empty,
    keyword,
    positional,
)

LOG_TABLE = GrammarTable(
    "log",
    (
        keyword("verbose", Action.LOG_VERBOSE),
        keyword("brief", Action.LOG_BRIEF),
    ),
)


# ---------------------------------------------------------------------------
# netcfgctl
# ---------------------------------------------------------------------------

NETCFGD_GRAMMAR: Grammar = build_grammar(
    "main",
    [
        GrammarTable(
            "main",
            (
                keyword("reload", Action.RELOAD),
                keyword("show", child="show"),
                keyword("log", child="log"),
                keyword("kill", child="kill"),
            ),
        ),
        GrammarTable(
            "show",
            (
                keyword("proposals", Action.SHOW_PROPOSALS, child="show_proposals"),
                keyword("main", Action.SHOW_MAIN),
                keyword("frontend", Action.SHOW_FRONTEND),
                keyword("dhclient", Action.SHOW_DHCLIENT),
                keyword("slaac", Action.SHOW_SLAAC),
            ),
        ),
        # The source node comes first: an ifname node only claims words
        # that nothing earlier in the table matched.
        GrammarTable(
            "show_proposals",
            (
                empty(),
                positional(ValueKind.SOURCE),
                positional(ValueKind.IFNAME),
            ),
        ),
        LOG_TABLE,
        GrammarTable(
            "kill",
            (positional(ValueKind.XID, Action.KILL_XID),),
        ),
    ],
)


# ---------------------------------------------------------------------------
# newdctl
# ---------------------------------------------------------------------------

NEWD_GRAMMAR: Grammar = build_grammar(
    "main",
    [
        GrammarTable(
            "main",
            (
                keyword("reload", Action.RELOAD),
                keyword("show", child="show"),
                keyword("log", child="log"),
            ),
        ),
        GrammarTable(
            "show",
            (
                keyword("main", Action.SHOW_MAIN),
                keyword("frontend", Action.SHOW_FRONTEND),
                keyword("engine", Action.SHOW_ENGINE, child="show_engine"),
            ),
        ),
        GrammarTable(
            "show_engine",
            (
                empty(),
                positional(ValueKind.TEXT, placeholder="<group>"),
            ),
        ),
        LOG_TABLE,
    ],
)
