"""Statistics about the shape of a d-DNNF."""

from __future__ import annotations

import logging
import math
from collections import Counter

from .ddnnf import Ddnnf
from .node import Node, NodeKind

logger = logging.getLogger(__name__)


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else math.nan


def node_type_numbers(ddnnf: Ddnnf) -> dict[NodeKind, int]:
    """How many nodes of every kind the d-DNNF holds."""
    counts = Counter(node.kind for node in ddnnf.nodes)
    return {kind: counts[kind] for kind in NodeKind}


def child_numbers(ddnnf: Ddnnf) -> dict[str, int]:
    """Counts of inner nodes and their child connections."""
    stats = {"total_children": 0, "and_nodes": 0, "and_children": 0, "or_nodes": 0, "or_children": 0}
    for node in ddnnf.nodes:
        if node.kind is NodeKind.AND:
            stats["and_nodes"] += 1
            stats["and_children"] += len(node.children)
        elif node.kind is NodeKind.OR:
            stats["or_nodes"] += 1
            stats["or_children"] += len(node.children)
        else:
            continue
        stats["total_children"] += len(node.children)
    return stats


def depth_statistics(ddnnf: Ddnnf) -> tuple[int, int, float, float, int]:
    """``(lowest, highest, mean, standard deviation, number of paths)`` of root-to-leaf paths."""
    depths = get_depth(ddnnf.nodes, len(ddnnf.nodes) - 1, 0)
    if not depths:
        raise ValueError("the d-DNNF has no root-to-leaf paths")
    mean = sum(depths) / len(depths)
    s_x = math.sqrt(sum((depth - mean) ** 2 for depth in depths) / len(depths))
    return min(depths), max(depths), mean, s_x, len(depths)


def get_depth(nodes: list[Node], index: int, count: int) -> list[int]:
    """Lengths of all paths from node ``index`` to a leaf, offset by ``count``."""
    depths: list[int] = []
    stack = [(index, count)]
    while stack:
        current, depth = stack.pop()
        node = nodes[current]
        if node.kind in (NodeKind.AND, NodeKind.OR):
            stack.extend((child, depth + 1) for child in reversed(node.children))
        else:
            depths.append(depth)
    return depths


def print_all_heuristics(ddnnf: Ddnnf) -> None:
    """Log node kind distribution, child counts and path lengths."""
    node_count = len(ddnnf.nodes)

    kinds = node_type_numbers(ddnnf)
    lines = ["The d-DNNF consists out of the following node types:"]
    for kind, label in (
        (NodeKind.AND, "And"),
        (NodeKind.OR, "Or"),
        (NodeKind.LITERAL, "Literal"),
        (NodeKind.TRUE, "True"),
        (NodeKind.FALSE, "False"),
    ):
        share = _ratio(kinds[kind], node_count) * 100
        lines.append(
            f"\t |-> {kinds[kind]} out of {node_count} are {label} nodes (≈{share:.2f}% of total)"
        )
    logger.info("\n".join(lines))

    children = child_numbers(ddnnf)
    logger.info(
        "The d-DNNF has the following information regarding node count:\n"
        "\t |-> The overall count of child connections is %d\n"
        "\t |-> The overall node count is %d.\n"
        "\t |-> There are %.2f times as much connections as nodes\n"
        "\t |-> Each of the %d And nodes has an average of ≈%.2f child nodes\n"
        "\t |-> Each of the %d Or nodes has an average of ≈%.5f child nodes",
        children["total_children"],
        node_count,
        _ratio(children["total_children"], node_count),
        children["and_nodes"],
        _ratio(children["and_children"], children["and_nodes"]),
        children["or_nodes"],
        _ratio(children["or_children"], children["or_nodes"]),
    )

    lowest, highest, mean, s_x, paths = depth_statistics(ddnnf)
    logger.info(
        "The d-DNNF has the following length attributes:\n"
        "\t |-> The shortest path is %d units long\n"
        "\t |-> The longest path is %d units long\n"
        "\t |-> The mean path is ≈%.2f units long\n"
        "\t |-> The standard derivation is ≈%.2f units\n"
        "\t |-> There are %d different paths. "
        "(different paths can sometimes just differ by one node)",
        lowest,
        highest,
        mean,
        s_x,
        paths,
    )


def average(data) -> float:
    """The mean of the data, or -1.0 for no data."""
    data = list(data)
    if not data:
        return -1.0
    return sum(data) / len(data)


def median(data) -> float:
    """The median of the data, or -1.0 for no data."""
    ordered = sorted(data)
    size = len(ordered)
    if size == 0:
        return -1.0
    if size % 2 == 0:
        return (ordered[size // 2 - 1] + ordered[size // 2]) / 2.0
    return float(ordered[size // 2])


def std_deviation(data) -> float:
    """The population standard deviation of the data, or -1.0 for no data."""
    data = list(data)
    mean = average(data)
    if not data or mean < 0.0:
        return -1.0
    return math.sqrt(sum((mean - value) ** 2 for value in data) / len(data))