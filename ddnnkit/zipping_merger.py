"""An AND merger that zips samples together and then covers missing interactions."""

from __future__ import annotations

import copy
import itertools
from collections.abc import Sequence
from dataclasses import dataclass

from .config import Config
from .covering_strategies import cover_with_caching_twise
from .ddnnf import Ddnnf
from .sample import Sample
from .sample_merger import SampleMerger
from .sampling_result import ResultKind, SamplingResult
from .t_iterator import t_interactions


@dataclass
class ZippingMerger(SampleMerger):
    """Merges samples over disjoint variables as found below decomposable AND nodes."""

    t: int
    sat_solver: object
    ddnnf: Ddnnf

    def merge(self, node_id: int, left: Sample, right: Sample) -> Sample:
        if left.is_empty():
            return copy.deepcopy(right)
        if right.is_empty():
            return copy.deepcopy(left)

        number_of_variables = self.ddnnf.number_of_variables
        sample = zip_samples(left, right, number_of_variables)
        for interaction in sorted(interactions(left, right, self.t)):
            cover_with_caching_twise(
                sample, interaction, self.sat_solver, node_id, number_of_variables
            )
        return sample

    def merge_all(self, node_id: int, samples: Sequence[Sample]) -> Sample:
        singles = [sample for sample in samples if len(sample) <= 1]
        others = [sample for sample in samples if len(sample) > 1]

        single = Sample()
        for sample in singles:
            single = self.merge_in_place(node_id, single, sample)

        others.append(single)
        others.sort(key=len)

        result = Sample()
        for sample in others:
            result = self.merge_in_place(node_id, result, sample)
        return result

    def is_void(self, samples: Sequence[SamplingResult]) -> bool:
        """An AND node is void as soon as one child is void."""
        return any(result.kind is ResultKind.VOID for result in samples)


def interactions(left: Sample, right: Sample, t: int) -> set[tuple[int, ...]]:
    """All t-wise interactions that combine literals of both samples."""
    result: set[tuple[int, ...]] = set()
    left_by_size = _self_interactions(left, t)
    right_by_size = _self_interactions(right, t)
    # pair size 1 with size t-1, size 2 with size t-2 and so on
    for left_set, right_set in zip(left_by_size, reversed(right_by_size)):
        for left_part, right_part in itertools.product(left_set, right_set):
            result.add(left_part + right_part)
    return result


def _self_interactions(sample: Sample, t: int) -> list[set[tuple[int, ...]]]:
    """Interactions within the sample's configs, by size from 1 to t-1."""
    configs = [config.decided_literals() for config in sample]
    by_size = []
    for k in range(1, t):
        found: set[tuple[int, ...]] = set()
        for config in configs:
            found.update(t_interactions(config, min(len(config), k)))
        # at least one (empty) interaction is needed for the combination
        by_size.append(found or {()})
    return by_size


def zip_samples(left: Sample, right: Sample, number_of_variables: int) -> Sample:
    """Pair the configs of two samples over disjoint variables one by one."""
    new_sample = Sample.new_from_samples([left, right])

    for (left_config, left_complete), (right_config, right_complete) in zip(
        left.iter_with_completeness(), right.iter_with_completeness()
    ):
        config = Config.from_disjoint(left_config, right_config, number_of_variables)
        if left_complete and right_complete:
            new_sample.add_complete(config)
        else:
            new_sample.add(config)

    if len(left) >= len(right):
        remaining = itertools.islice(left, len(right), None)
    else:
        remaining = itertools.islice(right, len(left), None)
    for config in remaining:
        new_sample.add_partial(copy.deepcopy(config))

    return new_sample