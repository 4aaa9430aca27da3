"""Grammar registry and definition-time validation.

A :class:`Grammar` owns every table of one client's command language.
Nodes refer to their child tables by name, so tables can be shared by
several parents (and may even form cycles) without any node owning
another table.

:func:`build_grammar` is the only way to obtain a :class:`Grammar`.  It
rejects definitions the parser could not use safely:

* dangling root or child table names;
* more than one empty node in a table;
* keyword nodes without text and positional nodes without a value kind;
* a path from the root on which two nodes carry an action;
* an accepted path (ending at a leaf or an empty node) carrying no
  action at all.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ctlkit.core.models import GrammarTable, NodeKind
from ctlkit.core.usage import describe_node
from ctlkit.exceptions import GrammarDefinitionError


@dataclass(frozen=True, slots=True)
class Grammar:
    """Immutable registry of named grammar tables."""

    root: str
    tables: Mapping[str, GrammarTable]

    @property
    def root_table(self) -> GrammarTable:
        return self.tables[self.root]

    def table(self, name: str) -> GrammarTable:
        return self.tables[name]


def build_grammar(root: str, tables: Iterable[GrammarTable]) -> Grammar:
    """Register *tables*, validate them and return a :class:`Grammar`.

    Raises
    ------
    GrammarDefinitionError
        If the definition has any of the defects listed in the module
        docstring.
    """
    registry: dict[str, GrammarTable] = {}
    for table in tables:
        if table.name in registry:
            raise GrammarDefinitionError(f"duplicate table: {table.name}")
        registry[table.name] = table

    if root not in registry:
        raise GrammarDefinitionError(f"unknown root table: {root}")

    for table in registry.values():
        _check_table(table, registry)

    _check_paths(root, registry)

    return Grammar(root=root, tables=MappingProxyType(registry))


# ---------------------------------------------------------------------------
# Per-table checks
# ---------------------------------------------------------------------------

def _check_table(table: GrammarTable, registry: Mapping[str, GrammarTable]) -> None:
    empties = sum(1 for node in table if node.kind is NodeKind.EMPTY)
    if empties > 1:
        raise GrammarDefinitionError(
            f"table {table.name} has {empties} empty nodes, at most one allowed",
        )

    for node in table:
        if node.kind is NodeKind.KEYWORD and not node.keyword:
            raise GrammarDefinitionError(f"table {table.name} has an empty keyword")
        if node.kind is NodeKind.POSITIONAL and node.value_kind is None:
            raise GrammarDefinitionError(
                f"table {table.name} has a positional node without a value kind",
            )
        if node.child is not None and node.child not in registry:
            raise GrammarDefinitionError(
                f"table {table.name} refers to unknown table {node.child}",
            )


# ---------------------------------------------------------------------------
# Path checks
# ---------------------------------------------------------------------------

def _check_paths(root: str, registry: Mapping[str, GrammarTable]) -> None:
    """Walk every path from *root*, tracking whether an action was set.

    The state space is ``(table name, action seen)``, so the walk
    terminates on cyclic grammars.
    """
    seen: set[tuple[str, bool]] = set()
    stack: list[tuple[str, bool, tuple[str, ...]]] = [(root, False, ())]

    while stack:
        name, has_action, path = stack.pop()
        if (name, has_action) in seen:
            continue
        seen.add((name, has_action))

        for node in registry[name]:
            here = (*path, describe_node(node))
            if has_action and node.action is not None:
                raise GrammarDefinitionError(
                    f"path '{' '.join(here)}' sets the action twice",
                )
            after = has_action or node.action is not None

            if node.kind is NodeKind.EMPTY or node.child is None:
                if not after:
                    raise GrammarDefinitionError(
                        f"path '{' '.join(here)}' completes without an action",
                    )
                continue

            stack.append((node.child, after, here))
