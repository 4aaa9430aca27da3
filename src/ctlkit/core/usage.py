"""Describe the legal next tokens of a grammar table.

Pure text transform — the caller decides where the lines are shown.
"""

from __future__ import annotations

from ctlkit.core.models import GrammarNode, GrammarTable, NodeKind, ProposalSource, ValueKind
from ctlkit.exceptions import GrammarDefinitionError

_PLACEHOLDERS: dict[ValueKind, str] = {
    ValueKind.TEXT: "<name>",
    ValueKind.IFNAME: "<ifname>",
    ValueKind.XID: "<xid>",
    ValueKind.SOURCE: "|".join(source.keyword for source in ProposalSource),
}


def describe_node(node: GrammarNode) -> str:
    """Return the usage text for a single node."""
    if node.kind is NodeKind.EMPTY:
        return "<cr>"
    if node.kind is NodeKind.KEYWORD:
        return node.keyword
    if node.placeholder is not None:
        return node.placeholder
    if node.value_kind is None:
        raise GrammarDefinitionError("positional node without a value kind")
    return _PLACEHOLDERS[node.value_kind]


def describe(table: GrammarTable) -> list[str]:
    """Return one usage line per node of *table*, in table order."""
    return [describe_node(node) for node in table]
