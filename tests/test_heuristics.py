import logging
import math

import pytest

from ddnnkit.ddnnf import Ddnnf
from ddnnkit.heuristics import (
    average,
    child_numbers,
    depth_statistics,
    get_depth,
    median,
    node_type_numbers,
    print_all_heuristics,
    std_deviation,
)
from ddnnkit.node import NodeKind, and_node, literal_node, or_node


def small_model():
    nodes = [
        literal_node(1),
        literal_node(2),
        and_node([0, 1]),
        literal_node(-1),
        literal_node(-2),
        and_node([3, 4]),
        or_node([2, 5]),
        literal_node(3),
        literal_node(-3),
        or_node([7, 8]),
        literal_node(4),
        and_node([6, 9, 10]),
    ]
    return Ddnnf(nodes, 4)


def test_math_functions():
    data = [2, 5, 100, 23415, 0, 4123, 20, 5]
    assert average(data) == 3458.75
    assert median(data) == (5.0 + 20.0) / 2.0
    assert abs(7661.333071828949 - std_deviation(data)) < 0.001

    data_2 = [5, 5, 5]
    assert average(data_2) == 5.0
    assert median(data_2) == 5.0
    assert std_deviation(data_2) == 0.0

    data_3 = []
    assert average(data_3) == -1.0
    assert median(data_3) == -1.0
    assert std_deviation(data_3) == -1.0


def test_median_odd():
    assert median([9, 1, 4]) == 4.0


def test_node_type_numbers():
    counts = node_type_numbers(small_model())
    assert counts == {
        NodeKind.AND: 3,
        NodeKind.OR: 2,
        NodeKind.LITERAL: 7,
        NodeKind.TRUE: 0,
        NodeKind.FALSE: 0,
    }


def test_child_numbers():
    stats = child_numbers(small_model())
    assert stats == {
        "total_children": 11,
        "and_nodes": 3,
        "and_children": 7,
        "or_nodes": 2,
        "or_children": 4,
    }


def test_get_depth():
    ddnnf = small_model()
    assert get_depth(ddnnf.nodes, 11, 0) == [3, 3, 3, 3, 2, 2, 1]
    assert get_depth(ddnnf.nodes, 9, 5) == [6, 6]
    assert get_depth(ddnnf.nodes, 0, 2) == [2]


def test_depth_statistics():
    lowest, highest, mean, s_x, paths = depth_statistics(small_model())
    assert (lowest, highest, paths) == (1, 3, 7)
    assert mean == pytest.approx(17 / 7)
    assert s_x == pytest.approx(math.sqrt(std_deviation([3, 3, 3, 3, 2, 2, 1]) ** 2))


def test_depth_statistics_without_paths():
    with pytest.raises(ValueError):
        depth_statistics(Ddnnf([and_node([])], 0))


def test_print_all_heuristics(caplog):
    caplog.set_level(logging.INFO, logger="ddnnkit.heuristics")
    print_all_heuristics(small_model())
    assert "3 out of 12 are And nodes" in caplog.text
    assert "The overall count of child connections is 11" in caplog.text
    assert "There are 7 different paths" in caplog.text