"""Core layer — command grammars, parsing and request mapping.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Grammars are immutable; parse results are created per call.
"""

from ctlkit.core.grammar import Grammar, build_grammar
from ctlkit.core.grammars import NETCFGD_GRAMMAR, NEWD_GRAMMAR
from ctlkit.core.models import Action, GrammarNode, GrammarTable, ParseResult, ProposalSource, ValueKind
from ctlkit.core.parser import CommandParser, parse
from ctlkit.core.protocols import ControlTransport, InterfaceResolver
from ctlkit.core.requests import MessageType, ReplyRecord, Request, build_request
from ctlkit.core.session import ControlSession

__all__: list[str] = [
    "Action",
    "CommandParser",
    "ControlSession",
    "ControlTransport",
    "Grammar",
    "GrammarNode",
    "GrammarTable",
    "InterfaceResolver",
    "MessageType",
    "NETCFGD_GRAMMAR",
    "NEWD_GRAMMAR",
    "ParseResult",
    "ProposalSource",
    "ReplyRecord",
    "Request",
    "ValueKind",
    "build_grammar",
    "build_request",
    "parse",
]
