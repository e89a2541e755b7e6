"""Predicate search over declaration trees.

Traversal order is owned by Namespace.walk() (depth-first, pre-order); this
module only decides which visited nodes match.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .nodes import Declaration


@dataclass(frozen=True, slots=True)
class DeclarationQuery:
    """Conjunction of optional filters. An empty query matches every node.

    kind: class or tuple of classes, matched with isinstance so that a base
          kind (e.g. ClassNamespace) also matches its specialisations.
    """

    name: str | None = None
    kind: type[Declaration] | tuple[type[Declaration], ...] | None = None

    def matches(self, node: Declaration) -> bool:
        if self.name is not None and node.name != self.name:
            return False
        return self.kind is None or isinstance(node, self.kind)


def first_match(nodes: Iterable[Declaration], query: DeclarationQuery) -> Declaration | None:
    """Return the first node matching query, stopping the traversal there."""
    for node in nodes:
        if query.matches(node):
            return node
    return None


def all_matches(nodes: Iterable[Declaration], query: DeclarationQuery) -> list[Declaration]:
    return [node for node in nodes if query.matches(node)]


__all__ = ["DeclarationQuery", "all_matches", "first_match"]
