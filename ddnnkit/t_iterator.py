"""Generators of t-wise index tuples and literal interactions."""

from __future__ import annotations

from collections.abc import Iterator, Sequence


def t_indices(number_of_vars: int, t: int) -> Iterator[tuple[int, ...]]:
    """Yield all strictly decreasing ``t``-tuples of indices below ``number_of_vars``."""
    tup = list(range(t - 1, -1, -1)) + [0]
    first = True
    while True:
        if first:
            first = False
        else:
            tup[0] += 1
            if tup[0] >= number_of_vars:
                p = 0
                # carry over to the next places, like 0999 -> 1000
                while tup[p] >= number_of_vars - p and tup[t] == 0:
                    tup[p] = 0
                    p += 1
                    tup[p] += 1
                # avoid duplicates, like 1000 -> 1234
                for j in range(t - 2, -1, -1):
                    if tup[j] < tup[j + 1]:
                        tup[j] = tup[j + 1] + 1
        if tup[t] != 0:
            return
        yield tuple(tup[:t])


def t_interactions(literals: Sequence[int], t: int) -> Iterator[tuple[int, ...]]:
    """Yield all ``t``-wise interactions of the given literals."""
    if len(literals) < t:
        raise ValueError("need at least t literals")
    if 0 in literals:
        raise ValueError("literals must not contain 0")
    for indices in t_indices(len(literals), t):
        yield tuple(literals[i] for i in indices)