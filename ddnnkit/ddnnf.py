"""The d-DNNF container with its core and dead feature bookkeeping."""

from __future__ import annotations

import math

from .node import Node, NodeKind


class Ddnnf:
    """A d-DNNF whose nodes are stored in postorder, the root being last.

    On construction every node is linked to its parents, its model count is
    computed and the core and dead features are determined.
    """

    def __init__(self, nodes, number_of_variables: int) -> None:
        self.nodes: list[Node] = list(nodes)
        self.number_of_variables = number_of_variables
        self.literals: dict[int, int] = {}
        self.true_nodes: list[int] = []
        self.core: set[int] = set()
        self.md: list[int] = []
        self.max_worker = 4
        self._link_and_count()
        self.calculate_core()

    def _link_and_count(self) -> None:
        for node in self.nodes:
            node.parents = []

        for index, node in enumerate(self.nodes):
            for child in node.children:
                if not 0 <= child < index:
                    raise ValueError(
                        f"node {index} refers to child {child}, "
                        "children must precede their parents"
                    )
                parents = self.nodes[child].parents
                if index not in parents:
                    parents.append(index)

            if node.kind is NodeKind.AND:
                node.count = math.prod(self.nodes[c].count for c in node.children)
            elif node.kind is NodeKind.OR:
                node.count = sum(self.nodes[c].count for c in node.children)
            elif node.kind is NodeKind.FALSE:
                node.count = 0
            else:
                node.count = 1
                if node.kind is NodeKind.LITERAL:
                    self.literals[node.literal] = index
                else:
                    self.true_nodes.append(index)

            node.temp = node.count
            node.partial_derivative = 0
            node.marker = False

    def rc(self) -> int:
        """The model count of the root; constant between computations."""
        return self.nodes[-1].count

    def rt(self) -> int:
        """The temporary count of the root, changed by computations."""
        return self.nodes[-1].temp

    def get_core(self) -> set[int]:
        """A copy of the core (positive) and dead (negative) features."""
        return set(self.core)

    def map_features_opposing_indexes(self, features) -> list[int]:
        """Indices of the literal nodes that oppose the given features."""
        return [self.literals[-f] for f in features if -f in self.literals]

    def calculate_core(self) -> None:
        """Determine features that occur with a single polarity only."""
        n = self.number_of_variables
        self.core = {
            f
            for f in range(-n, n + 1)
            if f in self.literals and -f not in self.literals
        }

    def has_no_effect_on_query(self, feature: int) -> bool:
        """Whether the feature is an included core or an excluded dead feature."""
        return feature != 0 and feature in self.core

    def makes_query_unsat(self, feature: int) -> bool:
        """Whether the feature is an excluded core or an included dead feature."""
        return feature != 0 and -feature in self.core

    def reduce_query(self, features) -> list[int]:
        """Drop the features that cannot change the result of a query."""
        return [f for f in features if not self.has_no_effect_on_query(f)]

    def query_is_not_sat(self, features) -> bool:
        """Whether a feature of the query alone makes it unsatisfiable."""
        return any(self.makes_query_unsat(f) for f in features)