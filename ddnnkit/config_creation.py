"""Creation of complete configurations: enumeration and uniform random sampling."""

from __future__ import annotations

import itertools
import weakref
from fractions import Fraction

import numpy as np

from .counting import execute_query
from .ddnnf import Ddnnf
from .node import NodeKind

# Per d-DNNF: the position up to which configurations have already been
# enumerated, keyed by the assumptions sorted by variable.
_ENUMERATION_CACHE: weakref.WeakKeyDictionary[Ddnnf, dict[tuple[int, ...], int]] = (
    weakref.WeakKeyDictionary()
)


def enumerate_configs(ddnnf: Ddnnf, assumptions, amount: int) -> list[list[int]] | None:
    """Enumerate up to ``amount`` complete satisfying configurations.

    Successive calls with the same assumptions continue where the previous
    call stopped and start over once every configuration was returned.
    Returns ``None`` if the d-DNNF is unsatisfiable under the assumptions.
    """
    if amount == 0:
        return []

    assumptions = list(assumptions)
    if not _prepare(ddnnf, assumptions):
        return None
    assumptions.sort(key=abs)

    if execute_query(ddnnf, assumptions) <= 0:
        return None

    cache = _ENUMERATION_CACHE.setdefault(ddnnf, {})
    key = tuple(assumptions)
    last_stop = cache.get(key, 0)
    total = ddnnf.rt()
    upper = min(total, last_stop + amount)

    configs = _enumerate_node(ddnnf, last_stop, upper, len(ddnnf.nodes) - 1)
    for config in configs:
        config.sort(key=abs)

    cache[key] = upper % total
    return configs


def uniform_random_sampling(
    ddnnf: Ddnnf, assumptions, amount: int, seed: int
) -> list[list[int]] | None:
    """Draw ``amount`` uniformly random complete configurations under the assumptions.

    The same seed yields the same samples. Returns ``None`` if the d-DNNF is
    unsatisfiable under the assumptions.
    """
    assumptions = list(assumptions)
    if not _prepare(ddnnf, assumptions):
        return None

    if execute_query(ddnnf, assumptions) <= 0:
        return None

    rng = np.random.default_rng(seed)
    samples = _sample_node(ddnnf, amount, len(ddnnf.nodes) - 1, rng)
    for sample in samples:
        sample.sort(key=abs)
    return samples


def _prepare(ddnnf: Ddnnf, assumptions: list[int]) -> bool:
    """Reset temporary counts and hide opposing literals and true nodes."""
    if any(abs(f) > ddnnf.number_of_variables for f in assumptions):
        return False

    for node in ddnnf.nodes:
        node.temp = node.count

    for literal in assumptions:
        index = ddnnf.literals.get(-literal)
        if index is not None:
            ddnnf.nodes[index].temp = 0

    # a configuration cannot contain a true node, so hide them
    for index in ddnnf.true_nodes:
        ddnnf.nodes[index].temp = 0
    return True


def _enumerate_node(ddnnf: Ddnnf, low: int, high: int, index: int) -> list[list[int]]:
    nodes = ddnnf.nodes
    node = nodes[index]
    if high == 0 or node.temp == 0:
        return []

    if node.kind is NodeKind.AND:
        accumulated = 1
        child_lists: list[list[list[int]]] = []
        for child in node.children:
            if child in ddnnf.true_nodes:
                continue
            if accumulated < high:
                child_high = min(high, nodes[child].temp)
                child_lists.append(_enumerate_node(ddnnf, 0, child_high, child))
                accumulated *= child_high
            else:
                # restrict the creation of any further configurations
                child_lists.append(_enumerate_node(ddnnf, 0, 1, child)[:1])

        # reversed so that new configurations are appended at the end
        child_lists.reverse()
        combined = (
            [literal for part in parts for literal in part]
            for parts in itertools.product(*child_lists)
        )
        return list(itertools.islice(combined, low, high))

    if node.kind is NodeKind.OR:
        result: list[list[int]] = []
        accumulated = 0
        for child in node.children:
            if nodes[child].temp == 0:
                continue
            if accumulated >= high:
                break
            child_high = min(high, nodes[child].temp)
            result.extend(_enumerate_node(ddnnf, 0, child_high, child))
            accumulated += child_high
        return result

    if node.kind is NodeKind.LITERAL:
        return [[node.literal]]

    return []


def _shuffle(items: list, rng: np.random.Generator) -> None:
    order = rng.permutation(len(items))
    items[:] = [items[i] for i in order]


def _sample_node(
    ddnnf: Ddnnf, amount: int, index: int, rng: np.random.Generator
) -> list[list[int]]:
    if amount == 0:
        return []

    nodes = ddnnf.nodes
    node = nodes[index]

    if node.kind is NodeKind.AND:
        samples: list[list[int]] = [[] for _ in range(amount)]
        for child in node.children:
            child_samples = _sample_node(ddnnf, amount, child, rng)
            _shuffle(child_samples, rng)
            for sample, part in zip(samples, child_samples):
                sample.extend(part)
        return samples

    if node.kind is NodeKind.OR:
        children = node.children
        pick_amount = [0] * len(children)
        choices: list[int] = []
        weights: list[float] = []

        parent_count = node.temp
        for position, child in enumerate(children):
            child_count = nodes[child].temp
            if child_count != 0:
                choices.append(position)
                weights.append(float(Fraction(child_count, parent_count)) * amount)

        if len(weights) == 1:
            pick_amount[choices[0]] += amount
        elif len(weights) == 2:
            drawn = int(rng.binomial(amount, weights[0] / (weights[0] + weights[1])))
            pick_amount[choices[0]] += drawn
            pick_amount[choices[1]] = amount - pick_amount[choices[0]]
        elif weights:
            probabilities = np.asarray(weights, dtype=float)
            probabilities /= probabilities.sum()
            drawn = rng.choice(len(choices), size=amount, p=probabilities)
            for position, times in enumerate(np.bincount(drawn, minlength=len(choices))):
                pick_amount[choices[position]] += int(times)

        samples = []
        for choice in choices:
            samples.extend(_sample_node(ddnnf, pick_amount[choice], children[choice], rng))

        # children with a count of zero contribute empty parts
        samples.extend([] for _ in range(amount - len(samples)))
        _shuffle(samples, rng)
        return samples

    if node.kind is NodeKind.LITERAL:
        return [[node.literal] for _ in range(amount)]

    return []