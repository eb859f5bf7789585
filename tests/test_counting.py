import itertools

import pytest

from ddnnkit.counting import (
    annotate_partial_derivatives,
    calc_count,
    calc_count_marked_node,
    card_of_each_feature,
    card_of_each_feature_csv,
    card_of_feature_with_marker,
    card_of_feature_with_partial_derivatives,
    core_dead_with_assumptions,
    core_with_assumptions,
    dead_with_assumptions,
    execute_query,
    get_marked_nodes_clone,
    mark_assumptions,
    operate_on_partial_config_default,
    operate_on_partial_config_marker,
    operate_on_single_feature,
)
from ddnnkit.ddnnf import Ddnnf
from ddnnkit.node import and_node, false_node, literal_node, or_node


def _example() -> Ddnnf:
    # (1 & (2 | -2) & 3) | (-1 & 2 & 3): models {1,2,3}, {1,-2,3}, {-1,2,3}
    nodes = [
        literal_node(1),  # 0
        literal_node(2),  # 1
        literal_node(-2),  # 2
        or_node([1, 2]),  # 3
        literal_node(3),  # 4
        and_node([0, 3, 4]),  # 5
        literal_node(-1),  # 6
        and_node([6, 1, 4]),  # 7
        or_node([5, 7]),  # 8
    ]
    return Ddnnf(nodes, 3)


def _reset_markers(ddnnf: Ddnnf) -> None:
    for node in ddnnf.nodes:
        node.marker = False
    ddnnf.md.clear()


@pytest.mark.parametrize(
    "features, expected",
    [
        ([], 3),
        ([1], 2),
        ([-1], 1),
        ([2], 2),
        ([-2], 1),
        ([3], 3),
        ([-3], 0),
        ([1, 2], 1),
        ([1, -2], 1),
        ([-1, 2], 1),
        ([-1, -2], 0),
        ([1, -1], 0),
        ([1, 3], 2),
    ],
)
def test_execute_query_values(features, expected):
    ddnnf = _example()
    assert execute_query(ddnnf, features) == expected


def test_long_queries_use_default_counting():
    ddnnf = _example()
    assert execute_query(ddnnf, [1] + [3] * 20) == 2
    assert execute_query(ddnnf, [-1] + [2] * 20) == 1
    assert execute_query(ddnnf, [-3] + [1] * 20) == 0


def test_marker_matches_single_feature():
    ddnnf = _example()
    for i in range(1, ddnnf.number_of_variables + 1):
        assert card_of_feature_with_marker(ddnnf, i) == operate_on_single_feature(ddnnf, i)
        assert card_of_feature_with_marker(ddnnf, -i) == operate_on_single_feature(ddnnf, -i)


def test_marker_and_default_agree_on_pairs():
    ddnnf = _example()
    features = [1, -1, 2, -2, 3, -3]
    for pair in itertools.combinations(features, 2):
        assert operate_on_partial_config_marker(ddnnf, pair) == (
            operate_on_partial_config_default(ddnnf, pair)
        )


def test_repeated_queries_are_stable():
    ddnnf = _example()
    first = [execute_query(ddnnf, q) for q in ([1], [-2], [1, 2], [-1, 2])]
    second = [execute_query(ddnnf, q) for q in ([1], [-2], [1, 2], [-1, 2])]
    assert first == second == [2, 1, 1, 1]
    assert all(not node.marker for node in ddnnf.nodes)
    assert ddnnf.md == []


def test_default_count_leaves_result_in_root():
    ddnnf = _example()
    result = operate_on_partial_config_default(ddnnf, [-1, 2])
    assert result == 1
    assert ddnnf.rt() == result


def test_mark_assumptions():
    ddnnf = _example()

    mark_assumptions(ddnnf, [0])
    assert ddnnf.md == [5, 8]
    assert ddnnf.nodes[0].temp == 0
    _reset_markers(ddnnf)

    mark_assumptions(ddnnf, [1])
    assert ddnnf.md == [3, 5, 7, 8]
    _reset_markers(ddnnf)

    mark_assumptions(ddnnf, [0, 6])
    assert ddnnf.md == [5, 7, 8]


def test_get_marked_nodes_clone():
    ddnnf = _example()
    assert get_marked_nodes_clone(ddnnf, []) == []
    assert get_marked_nodes_clone(ddnnf, [-2]) == [1, 3, 5, 7, 8]
    assert get_marked_nodes_clone(ddnnf, [2]) == [2, 3, 5, 8]
    assert get_marked_nodes_clone(ddnnf, [1]) == [6, 7, 8]
    assert get_marked_nodes_clone(ddnnf, [1, 2]) == [2, 3, 5, 6, 7, 8]
    assert all(not node.marker for node in ddnnf.nodes)
    assert ddnnf.md == []


def test_partial_derivatives():
    ddnnf = _example()
    annotate_partial_derivatives(ddnnf)
    assert [n.partial_derivative for n in ddnnf.nodes] == [2, 2, 1, 1, 3, 1, 1, 1, 1]
    for i in range(1, 4):
        for feature in (i, -i):
            assert card_of_feature_with_partial_derivatives(ddnnf, feature) == (
                card_of_feature_with_marker(ddnnf, feature)
            )


def test_card_of_each_feature():
    ddnnf = _example()
    assert list(card_of_each_feature(ddnnf)) == [(1, 2, 2 / 3), (2, 2, 2 / 3), (3, 3, 1.0)]


def test_card_of_each_feature_csv(tmp_path):
    ddnnf = _example()
    path = tmp_path / "features.csv"
    card_of_each_feature_csv(ddnnf, path)
    assert path.read_text(encoding="utf-8").splitlines() == [
        "1,2,6.6666666667e-1",
        "2,2,6.6666666667e-1",
        "3,3,1.0000000000e0",
    ]


def test_core_dead_with_assumptions():
    ddnnf = _example()
    assert set(core_dead_with_assumptions(ddnnf, [])) == {3}
    assert core_dead_with_assumptions(ddnnf, [1]) == [1, 3]
    assert core_dead_with_assumptions(ddnnf, [-1]) == [-1, 2, 3]
    assert core_with_assumptions(ddnnf, [-1]) == [2, 3]
    assert dead_with_assumptions(ddnnf, [-1]) == [-1]
    assert dead_with_assumptions(ddnnf, [1]) == []


def test_calc_count_on_false_and_or_nodes():
    ddnnf = Ddnnf([literal_node(1), false_node(), or_node([0, 1])], 1)
    assert ddnnf.rc() == 1
    ddnnf.nodes[1].temp = 5
    calc_count(ddnnf, 1)
    assert ddnnf.nodes[1].temp == 0
    calc_count(ddnnf, 2)
    assert ddnnf.nodes[2].temp == 1


def test_calc_count_marked_node_uses_marked_children():
    ddnnf = _example()
    ddnnf.nodes[6].temp = 0
    ddnnf.nodes[6].marker = True
    calc_count_marked_node(ddnnf, 7)
    assert ddnnf.nodes[7].temp == 0
    ddnnf.nodes[7].marker = True
    calc_count_marked_node(ddnnf, 8)
    assert ddnnf.nodes[8].temp == 2