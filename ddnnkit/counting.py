"""Model counting on a d-DNNF: plain, marking based and via partial derivatives."""

from __future__ import annotations

import csv
import math
from collections.abc import Iterator
from fractions import Fraction

from .ddnnf import Ddnnf
from .node import NodeKind

_MARKER_QUERY_LIMIT = 20


def execute_query(ddnnf: Ddnnf, features) -> int:
    """Count the models of the d-DNNF under the partial configuration ``features``.

    The counting strategy is chosen by the number of features.
    """
    features = list(features)
    if not features:
        return ddnnf.rc()
    if len(features) == 1:
        return card_of_feature_with_marker(ddnnf, features[0])
    if len(features) <= _MARKER_QUERY_LIMIT:
        return operate_on_partial_config_marker(ddnnf, features)
    return operate_on_partial_config_default(ddnnf, features)


def calc_count(ddnnf: Ddnnf, i: int) -> None:
    """Recompute the temporary count of node ``i`` from its children's temporary counts."""
    nodes = ddnnf.nodes
    node = nodes[i]
    if node.kind is NodeKind.AND:
        node.temp = math.prod(nodes[c].temp for c in node.children)
    elif node.kind is NodeKind.OR:
        node.temp = sum(nodes[c].temp for c in node.children)
    elif node.kind is NodeKind.FALSE:
        node.temp = 0
    else:
        node.temp = 1


def calc_count_marked_node(ddnnf: Ddnnf, i: int) -> None:
    """Recompute node ``i`` using temporary counts of marked and cached counts of unmarked children."""
    nodes = ddnnf.nodes
    node = nodes[i]

    def value(index: int) -> int:
        child = nodes[index]
        return child.temp if child.marker else child.count

    if node.kind is NodeKind.AND:
        marked = [c for c in node.children if nodes[c].marker]
        if len(marked) <= len(node.children) // 2:
            acc = node.count
            for index in marked:
                child = nodes[index]
                if child.count != 0:
                    acc //= child.count
                acc *= child.temp
            node.temp = acc
        else:
            node.temp = math.prod(value(c) for c in node.children)
    elif node.kind is NodeKind.OR:
        node.temp = sum(value(c) for c in node.children)
    elif node.kind is NodeKind.FALSE:
        node.temp = 0
    else:
        node.temp = 1


def operate_on_single_feature(ddnnf: Ddnnf, feature: int) -> int:
    """Count the models containing ``feature`` by recomputing every node."""
    if ddnnf.has_no_effect_on_query(feature):
        return ddnnf.rc()
    if ddnnf.makes_query_unsat(feature):
        return 0
    for i, node in enumerate(ddnnf.nodes):
        if node.kind is NodeKind.LITERAL and feature == -node.literal:
            node.temp = 0
        else:
            calc_count(ddnnf, i)
    return ddnnf.rt()


def operate_on_partial_config_default(ddnnf: Ddnnf, features) -> int:
    """Count the models of a partial configuration by recomputing every node."""
    features = list(features)
    if ddnnf.query_is_not_sat(features):
        return 0
    reduced = set(ddnnf.reduce_query(features))
    for i, node in enumerate(ddnnf.nodes):
        if node.kind is NodeKind.LITERAL and -node.literal in reduced:
            node.temp = 0
        else:
            calc_count(ddnnf, i)
    return ddnnf.rt()


def card_of_feature_with_marker(ddnnf: Ddnnf, feature: int) -> int:
    """Count the models containing ``feature``, recomputing only the affected nodes."""
    if ddnnf.has_no_effect_on_query(feature):
        return ddnnf.rc()
    if ddnnf.makes_query_unsat(feature):
        return 0
    index = ddnnf.literals.get(-feature)
    if index is None:
        return ddnnf.rc()
    return _operate_on_marker(ddnnf, [index])


def operate_on_partial_config_marker(ddnnf: Ddnnf, features) -> int:
    """Count the models of a partial configuration, recomputing only the affected nodes."""
    features = list(features)
    if ddnnf.query_is_not_sat(features):
        return 0
    reduced = ddnnf.reduce_query(features)
    indexes = ddnnf.map_features_opposing_indexes(reduced)
    if not indexes:
        return ddnnf.rc()
    return _operate_on_marker(ddnnf, indexes)


def _operate_on_marker(ddnnf: Ddnnf, indexes: list[int]) -> int:
    mark_assumptions(ddnnf, indexes)

    for index in ddnnf.md:
        calc_count_marked_node(ddnnf, index)

    for index in ddnnf.md:
        ddnnf.nodes[index].marker = False
    for index in indexes:
        ddnnf.nodes[index].marker = False
    ddnnf.md.clear()

    return ddnnf.rt()


def mark_assumptions(ddnnf: Ddnnf, indexes) -> None:
    """Deselect the literal nodes at ``indexes`` and mark all their ancestors.

    The marked ancestors are collected, sorted, in ``ddnnf.md``.
    """
    for index in indexes:
        ddnnf.nodes[index].temp = 0
        _mark_upwards(ddnnf, index)
    ddnnf.md.sort()


def _mark_upwards(ddnnf: Ddnnf, start: int) -> None:
    nodes = ddnnf.nodes
    nodes[start].marker = True
    stack = [p for p in nodes[start].parents if not nodes[p].marker]
    while stack:
        index = stack.pop()
        node = nodes[index]
        if node.marker:
            continue
        node.marker = True
        ddnnf.md.append(index)
        stack.extend(p for p in node.parents if not nodes[p].marker)


def get_marked_nodes_clone(ddnnf: Ddnnf, features) -> list[int]:
    """The sorted indices of the nodes marked when counting under ``features``."""
    opposing = ddnnf.map_features_opposing_indexes(features)
    mark_assumptions(ddnnf, opposing)
    ddnnf.md.extend(opposing)
    ddnnf.md.sort()
    marked = list(ddnnf.md)

    ddnnf.md.clear()
    for node in ddnnf.nodes:
        node.marker = False
    return marked


def annotate_partial_derivatives(ddnnf: Ddnnf) -> None:
    """Annotate every node with the partial derivative of the root count."""
    nodes = ddnnf.nodes
    for node in nodes:
        node.partial_derivative = 0
    nodes[-1].partial_derivative = 1

    for node in reversed(nodes):
        if node.kind is NodeKind.AND:
            for child in node.children:
                derivative = node.partial_derivative * math.prod(
                    nodes[other].count for other in node.children if other != child
                )
                nodes[child].partial_derivative += derivative
        elif node.kind is NodeKind.OR:
            for child in node.children:
                nodes[child].partial_derivative += node.partial_derivative


def card_of_feature_with_partial_derivatives(ddnnf: Ddnnf, feature: int) -> int:
    """Count the models containing ``feature`` from annotated partial derivatives."""
    index = ddnnf.literals.get(-feature)
    if index is None:
        return ddnnf.rc()
    return ddnnf.rc() - ddnnf.nodes[index].partial_derivative


def card_of_each_feature(ddnnf: Ddnnf) -> Iterator[tuple[int, int, float]]:
    """Yield ``(variable, count, ratio)`` for every variable of the model."""
    annotate_partial_derivatives(ddnnf)
    rc = ddnnf.rc()

    def generate() -> Iterator[tuple[int, int, float]]:
        for variable in range(1, ddnnf.number_of_variables + 1):
            cardinality = card_of_feature_with_partial_derivatives(ddnnf, variable)
            yield variable, cardinality, float(Fraction(cardinality, rc))

    return generate()


def _format_scientific(value: float) -> str:
    mantissa, exponent = f"{value:.10e}".split("e")
    return f"{mantissa}e{int(exponent)}"


def card_of_each_feature_csv(ddnnf: Ddnnf, file_path) -> None:
    """Write the count and ratio of every variable to a CSV file."""
    with open(file_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        for variable, cardinality, ratio in card_of_each_feature(ddnnf):
            writer.writerow([variable, cardinality, _format_scientific(ratio)])


def core_dead_with_assumptions(ddnnf: Ddnnf, assumptions) -> list[int]:
    """Core (positive) and dead (negative) features under the assumptions.

    The result is not deduplicated.
    """
    assumptions = list(assumptions)
    if not assumptions:
        return list(ddnnf.core)

    core: list[int] = []
    reference = execute_query(ddnnf, assumptions)
    for i in range(1, ddnnf.number_of_variables + 1):
        inter = execute_query(ddnnf, assumptions + [i])
        if reference == inter:
            core.append(i)
        if inter == 0:
            core.append(-i)
    return core


def core_with_assumptions(ddnnf: Ddnnf, assumptions) -> list[int]:
    """Core features under the assumptions."""
    return [f for f in core_dead_with_assumptions(ddnnf, assumptions) if f > 0]


def dead_with_assumptions(ddnnf: Ddnnf, assumptions) -> list[int]:
    """Dead features under the assumptions, given negated."""
    return [f for f in core_dead_with_assumptions(ddnnf, assumptions) if f < 0]