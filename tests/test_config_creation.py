import itertools

import pytest

from ddnnkit.config_creation import enumerate_configs, uniform_random_sampling
from ddnnkit.counting import execute_query
from ddnnkit.ddnnf import Ddnnf
from ddnnkit.node import and_node, literal_node, or_node
from ddnnkit.sat import sat


def free_two():
    """1 AND (2 OR -2) AND (3 OR -3); the root is an And node."""
    nodes = [
        literal_node(1),
        literal_node(2),
        literal_node(-2),
        literal_node(3),
        literal_node(-3),
        or_node([1, 2]),
        or_node([3, 4]),
        and_node([0, 5, 6]),
    ]
    return Ddnnf(nodes, 3)


def branching():
    """(1 AND 2 AND (3 OR -3)) OR (-1 AND (2 OR -2) AND 3)."""
    nodes = [
        literal_node(1),
        literal_node(-1),
        literal_node(2),
        literal_node(-2),
        literal_node(3),
        literal_node(-3),
        or_node([4, 5]),
        and_node([0, 2, 6]),
        or_node([2, 3]),
        and_node([1, 8, 4]),
        or_node([7, 9]),
    ]
    return Ddnnf(nodes, 3)


def all_models(ddnnf):
    models = set()
    n = ddnnf.number_of_variables
    for signs in itertools.product([1, -1], repeat=n):
        config = [sign * (i + 1) for i, sign in enumerate(signs)]
        if sat(ddnnf, config):
            models.add(tuple(config))
    return models


@pytest.mark.parametrize("build", [free_two, branching])
def test_enumerate_all_yields_every_model_once(build):
    ddnnf = build()
    configs = enumerate_configs(ddnnf, [], 100)
    assert len(configs) == ddnnf.rc()
    assert {tuple(c) for c in configs} == all_models(ddnnf)
    assert len({tuple(c) for c in configs}) == len(configs)


def test_enumerate_zero_amount_is_empty():
    assert enumerate_configs(free_two(), [1], 0) == []


def test_enumerate_step_by_step_cycles():
    ddnnf = free_two()
    seen = []
    for _ in range(4):
        configs = enumerate_configs(ddnnf, [], 1)
        assert len(configs) == 1
        seen.append(tuple(configs[0]))
    assert len(set(seen)) == 4
    assert set(seen) == all_models(ddnnf)
    again = enumerate_configs(ddnnf, [], 1)
    assert tuple(again[0]) == seen[0]


def test_enumerate_configs_are_sorted_and_complete():
    ddnnf = free_two()
    for config in enumerate_configs(ddnnf, [], 4):
        assert [abs(f) for f in config] == [1, 2, 3]
        assert sat(ddnnf, config)


def test_enumerate_respects_assumptions():
    ddnnf = free_two()
    configs = enumerate_configs(ddnnf, [2], 10)
    assert len(configs) == execute_query(ddnnf, [2])
    assert all(2 in c for c in configs)
    assert all(sat(ddnnf, c) for c in configs)


def test_enumerate_assumption_order_shares_position():
    ddnnf = free_two()
    first = enumerate_configs(ddnnf, [3, 2], 1)
    second = enumerate_configs(ddnnf, [2, 3], 1)
    assert first == [[1, 2, 3]]
    assert second == [[1, 2, 3]]  # only one model satisfies both, cycle restarts


def test_enumerate_does_not_mutate_assumptions():
    assumptions = [3, -2]
    enumerate_configs(free_two(), assumptions, 2)
    assert assumptions == [3, -2]


@pytest.mark.parametrize("assumptions", [[1, -1], [-1], [100], [-4]])
def test_enumerate_impossible(assumptions):
    assert enumerate_configs(free_two(), assumptions, 1) is None


def test_sampling_validity():
    ddnnf = branching()
    models = all_models(ddnnf)
    samples = uniform_random_sampling(ddnnf, [], 300, 42)
    assert len(samples) == 300
    assert all(tuple(s) in models for s in samples)


def test_sampling_with_assumptions():
    ddnnf = branching()
    samples = uniform_random_sampling(ddnnf, [-1], 100, 7)
    assert len(samples) == 100
    assert all(-1 in s and 3 in s for s in samples)
    assert all(sat(ddnnf, s) for s in samples)


def test_sampling_seeding():
    ddnnf = branching()
    assert uniform_random_sampling(ddnnf, [], 100, 42) == uniform_random_sampling(
        ddnnf, [], 100, 42
    )
    assert uniform_random_sampling(ddnnf, [], 100, 1) != uniform_random_sampling(
        ddnnf, [], 100, 2
    )


def test_sampling_covers_free_variables():
    ddnnf = free_two()
    samples = uniform_random_sampling(ddnnf, [], 400, 3)
    assert {tuple(s) for s in samples} == all_models(ddnnf)


def test_sampling_zero_amount_is_empty():
    assert uniform_random_sampling(free_two(), [], 0, 1) == []


@pytest.mark.parametrize("assumptions", [[1, -1], [-1], [100]])
def test_sampling_impossible(assumptions):
    assert uniform_random_sampling(free_two(), assumptions, 1, 42) is None