"""Satisfiability checks on a d-DNNF by upward propagation of marks."""

from __future__ import annotations

from .ddnnf import Ddnnf
from .node import NodeKind


def sat(ddnnf: Ddnnf, features) -> bool:
    """Whether the partial configuration given by ``features`` is satisfiable."""
    return sat_propagate(ddnnf, features, new_sat_mark_state(len(ddnnf.nodes)), None)


def sat_propagate(ddnnf: Ddnnf, features, mark: list[bool], root_index=None) -> bool:
    """Check satisfiability while accumulating marks in ``mark``.

    The marks persist across calls, so a mark state can be reused to add
    features incrementally. ``root_index`` selects the sub-graph to check;
    ``None`` means the root of the d-DNNF.
    """
    if root_index is None:
        root_index = len(ddnnf.nodes) - 1

    if any(ddnnf.makes_query_unsat(f) for f in features):
        return False

    for feature in features:
        index = ddnnf.literals.get(-feature)
        if index is not None:
            _propagate_mark(ddnnf, index, mark)
            if mark[root_index]:
                return False

    return not mark[root_index]


def _propagate_mark(ddnnf: Ddnnf, start: int, mark: list[bool]) -> None:
    nodes = ddnnf.nodes
    stack = [start]
    while stack:
        index = stack.pop()
        if mark[index]:
            continue
        node = nodes[index]
        if node.kind is NodeKind.OR and not all(
            mark[c] or nodes[c].count == 0 for c in node.children
        ):
            continue
        mark[index] = True
        stack.extend(reversed(node.parents))


def new_sat_mark_state(number_of_nodes: int) -> list[bool]:
    """A fresh mark state for ``sat_propagate``."""
    return [False] * number_of_nodes