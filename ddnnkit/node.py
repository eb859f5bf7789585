"""Node kinds and nodes of a d-DNNF."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class NodeKind(enum.Enum):
    """The kinds of nodes a d-DNNF is made of."""

    AND = "and"
    OR = "or"
    LITERAL = "literal"
    TRUE = "true"
    FALSE = "false"


_INNER_KINDS = (NodeKind.AND, NodeKind.OR)


@dataclass(eq=False)
class Node:
    """A single d-DNNF node together with the values used while counting.

    ``count`` holds the model count of the sub-graph, ``temp`` the count under
    the current query, ``partial_derivative`` the derivative annotated from the
    root, and ``marker`` the state of the marking algorithm.
    """

    kind: NodeKind
    children: tuple[int, ...] = ()
    literal: int | None = None
    count: int = 0
    temp: int = 0
    partial_derivative: int = 0
    marker: bool = False
    parents: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.children = tuple(self.children)
        if self.kind not in _INNER_KINDS and self.children:
            raise ValueError(f"{self.kind.value} nodes cannot have children")
        if self.kind is NodeKind.LITERAL:
            if not isinstance(self.literal, int) or self.literal == 0:
                raise ValueError("a literal node needs a non-zero literal")
        elif self.literal is not None:
            raise ValueError(f"{self.kind.value} nodes do not carry a literal")


def and_node(children) -> Node:
    """Create a conjunction over the nodes at the given indices."""
    return Node(NodeKind.AND, children=tuple(children))


def or_node(children) -> Node:
    """Create a disjunction over the nodes at the given indices."""
    return Node(NodeKind.OR, children=tuple(children))


def literal_node(literal: int) -> Node:
    """Create a literal node; negative values denote negated variables."""
    return Node(NodeKind.LITERAL, literal=literal)


def true_node() -> Node:
    """Create a node that is always satisfied."""
    return Node(NodeKind.TRUE)


def false_node() -> Node:
    """Create a node that is never satisfied."""
    return Node(NodeKind.FALSE)