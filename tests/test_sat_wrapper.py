import itertools

from ddnnkit.ddnnf import Ddnnf
from ddnnkit.node import and_node, literal_node, or_node
from ddnnkit.sat import sat
from ddnnkit.sat_wrapper import SatWrapper


def _example() -> Ddnnf:
    nodes = [
        literal_node(1),
        literal_node(2),
        literal_node(-2),
        or_node([1, 2]),
        literal_node(3),
        and_node([0, 3, 4]),
        literal_node(-1),
        and_node([6, 1, 4]),
        or_node([5, 7]),
    ]
    return Ddnnf(nodes, 3)


def test_new_state_is_fresh_copy():
    ddnnf = _example()
    wrapper = SatWrapper(ddnnf)
    state = wrapper.new_state()
    assert state == [False] * len(ddnnf.nodes)
    state[0] = True
    assert wrapper.new_state() == [False] * len(ddnnf.nodes)


def test_is_sat_cached_agrees_with_sat():
    ddnnf = _example()
    wrapper = SatWrapper(ddnnf)
    literals = [1, -1, 2, -2, 3, -3]
    for size in (1, 2, 3):
        for config in itertools.combinations(literals, size):
            assert wrapper.is_sat_cached(config, wrapper.new_state()) == sat(ddnnf, config)


def test_cached_state_accumulates():
    ddnnf = _example()
    wrapper = SatWrapper(ddnnf)
    state = wrapper.new_state()
    assert wrapper.is_sat_cached([1], state) == sat(ddnnf, [1])
    assert wrapper.is_sat_cached([-1], state) == sat(ddnnf, [1, -1])
    assert wrapper.is_sat_cached([-1], wrapper.new_state()) == sat(ddnnf, [-1])


def test_subgraph_check():
    ddnnf = _example()
    wrapper = SatWrapper(ddnnf)
    # the sub-graph at node 7 requires -1, so selecting 1 makes it unsatisfiable
    assert wrapper.is_sat_in_subgraph_cached([1], 7, wrapper.new_state()) is False
    assert wrapper.is_sat_in_subgraph_cached([-1], 7, wrapper.new_state()) is True
    assert wrapper.is_sat_in_subgraph_cached([1], 8, wrapper.new_state()) == sat(ddnnf, [1])


def test_core_violation_is_unsat():
    ddnnf = _example()
    wrapper = SatWrapper(ddnnf)
    state = wrapper.new_state()
    assert wrapper.is_sat_cached([-3], state) == sat(ddnnf, [-3])
    assert not any(state)