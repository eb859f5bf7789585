"""Sampling that covers all t-wise interactions of the literals of a d-DNNF."""

from __future__ import annotations

import copy
import math
import random
from collections.abc import Sequence

from .config import Config
from .covering_strategies import cover_with_caching
from .ddnnf import Ddnnf
from .node import NodeKind
from .sample import Sample
from .sample_merger import SampleMerger
from .sampling_result import ResultKind, SamplingResult
from .sat_wrapper import SatWrapper
from .similarity_merger import SimilarityMerger
from .t_iterator import t_interactions
from .zipping_merger import ZippingMerger

_rng = random.Random(42)


class TWiseSampler:
    """Builds a t-wise sample bottom-up by merging the samples of child nodes.

    ``partial_samples`` holds the results of the nodes whose parents still
    need them; it is empty once sampling has finished.
    """

    def __init__(self, ddnnf: Ddnnf, and_merger: SampleMerger, or_merger: SampleMerger) -> None:
        self.ddnnf = ddnnf
        self.and_merger = and_merger
        self.or_merger = or_merger
        self.partial_samples: dict[int, SamplingResult] = {}

    def sample(self, t: int) -> SamplingResult:
        """Sample the whole d-DNNF so that all t-wise interactions are covered."""
        sat_solver = SatWrapper(self.ddnnf)

        for node_id in range(len(self.ddnnf.nodes)):
            self.partial_samples[node_id] = self._partial_sample(node_id)

        root_id = len(self.ddnnf.nodes) - 1
        result = self.partial_samples.pop(root_id)

        if result.kind is ResultKind.WITH_SAMPLE:
            sample = _trim_and_resample(
                root_id, result.sample, t, self.ddnnf.number_of_variables, sat_solver
            )
            self._complete_partial_configs(sample, root_id, sat_solver)
            return SamplingResult.from_sample(sample)

        return result

    def _partial_sample(self, node_id: int) -> SamplingResult:
        """Sample the sub-graph rooted at ``node_id``; its children must be sampled."""
        node = self.ddnnf.nodes[node_id]

        if node.kind is NodeKind.LITERAL:
            return SamplingResult(
                ResultKind.WITH_SAMPLE,
                Sample.from_literal(node.literal, self.ddnnf.number_of_variables),
            )
        if node.kind is NodeKind.TRUE:
            return SamplingResult(ResultKind.EMPTY)
        if node.kind is NodeKind.FALSE:
            return SamplingResult(ResultKind.VOID)

        merger = self.and_merger if node.kind is NodeKind.AND else self.or_merger
        result = self._sample_node(merger, node_id, node.children)
        self._remove_unneeded(node_id, node.children)
        return result

    def _sample_node(
        self, merger: SampleMerger, node_id: int, children: Sequence[int]
    ) -> SamplingResult:
        try:
            results = [self.partial_samples[child] for child in children]
        except KeyError as error:
            raise ValueError(f"child {error.args[0]} of node {node_id} has no sample") from None

        if merger.is_void(results):
            return SamplingResult(ResultKind.VOID)

        samples = [result.sample for result in results if result.sample is not None]
        return SamplingResult.from_sample(merger.merge_all(node_id, samples))

    def _remove_unneeded(self, node_id: int, children: Sequence[int]) -> None:
        """Drop child samples that every parent has already used."""
        for child in children:
            parents = self.ddnnf.nodes[child].parents
            if all(parent <= node_id for parent in parents):
                self.partial_samples.pop(child, None)

    def _complete_partial_configs(
        self, sample: Sample, root: int, sat_solver: SatWrapper
    ) -> None:
        for config in sample.partial_configs:
            for var in range(1, self.ddnnf.number_of_variables + 1):
                if config.contains(var) or config.contains(-var):
                    continue

                config.update_sat_state(sat_solver, root)
                # work on a copy so that the cached state stays intact
                state = list(config.sat_state)

                if sat_solver.is_sat_cached([var], state):
                    config.add(var)
                else:
                    config.add(-var)


def sample_t_wise(ddnnf: Ddnnf, t: int) -> SamplingResult:
    """Generate complete configurations covering every valid t-wise interaction."""
    sat_solver = SatWrapper(ddnnf)
    and_merger = ZippingMerger(t=t, sat_solver=sat_solver, ddnnf=ddnnf)
    or_merger = SimilarityMerger(t=t)
    return TWiseSampler(ddnnf, and_merger, or_merger).sample(t)


def _trim_and_resample(
    node_id: int, sample: Sample, t: int, number_of_variables: int, sat_solver: SatWrapper
) -> Sample:
    if sample.is_empty():
        return sample

    t = min(len(sample.vars), t)
    ranks, avg_rank = _calc_stats(sample, t)
    new_sample, to_resample = _trim_sample(sample, ranks, avg_rank)

    literals = sorted(to_resample)
    _rng.shuffle(literals)

    if len(literals) >= t:
        for interaction in t_interactions(literals, t):
            cover_with_caching(
                new_sample, interaction, sat_solver, node_id, number_of_variables
            )

    return new_sample if len(new_sample) < len(sample) else sample


def _trim_sample(sample: Sample, ranks: list[float], avg_rank: float) -> tuple[Sample, set[int]]:
    to_resample: set[int] = set()
    new_sample = Sample.new_from_samples([sample])
    complete_len = len(sample.complete_configs)

    for index, config in enumerate(sample):
        if ranks[index] < avg_rank:
            to_resample.update(config.decided_literals())
        elif index < complete_len:
            new_sample.add_complete(copy.deepcopy(config))
        else:
            new_sample.add_partial(copy.deepcopy(config))
    return new_sample, to_resample


def _calc_stats(sample: Sample, t: int) -> tuple[list[float], float]:
    configs = list(sample)
    unique_coverage = [0] * len(configs)
    for interaction in t_interactions(sample.literals, t):
        index = _find_unique_covering_config(configs, interaction)
        if index is not None:
            unique_coverage[index] += 1

    ranks = []
    for coverage, config in zip(unique_coverage, configs):
        size = len(config.decided_literals()) ** t
        ranks.append(coverage / size if size else math.nan)

    return ranks, sum(ranks) / len(configs)


def _find_unique_covering_config(configs: list[Config], interaction) -> int | None:
    found = None
    for index, config in enumerate(configs):
        if config.covers(interaction):
            if found is not None:
                return None
            found = index
    return found