"""An OR merger that keeps configs by how little they overlap the sample."""

from __future__ import annotations

import copy
import random
from collections.abc import Sequence
from dataclasses import dataclass

from .config import Config
from .sample import Sample
from .sample_merger import SampleMerger
from .sampling_result import ResultKind, SamplingResult
from .t_iterator import t_interactions

_rng = random.Random(42)


class Candidate:
    """A config considered for the merged sample, with its overlap statistics."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.literals: set[int] = set(config.decided_literals())
        if not self.literals:
            raise ValueError("a candidate needs at least one decided literal")
        self.max_intersect = 0
        self.total_intersect = 0

    def _key(self) -> tuple[int, int]:
        size = len(self.literals)
        return self.total_intersect * size, self.max_intersect * size

    def update(self, other_literals) -> None:
        """Account for a config with ``other_literals`` joining the sample."""
        intersect = len(self.literals & set(other_literals))
        self.total_intersect += intersect
        if intersect > self.max_intersect:
            self.max_intersect = intersect

    def is_t_wise_covered_by(self, sample: Sample, t: int) -> bool:
        """Whether every t-wise interaction of the candidate is covered by the sample."""
        if self.max_intersect == len(self.literals):
            return True

        # with an overlap below t no interaction of the candidate is covered
        if len(self.literals) >= t and self.max_intersect < t:
            return False

        literals = self.config.decided_literals()
        _rng.shuffle(literals)
        return all(
            sample.covers(interaction)
            for interaction in t_interactions(literals, min(t, len(literals)))
        )


@dataclass
class SimilarityMerger(SampleMerger):
    """Merges two samples keeping configs whose interactions are not yet covered."""

    t: int

    def merge(self, node_id: int, left: Sample, right: Sample) -> Sample:
        if left.is_empty():
            return copy.deepcopy(right)
        if right.is_empty():
            return copy.deepcopy(left)

        new_sample = Sample.new_from_samples([left, right])
        candidates = [Candidate(config) for config in [*left, *right]]

        first = candidates.pop()
        for candidate in candidates:
            candidate.update(first.literals)
        new_sample.add(copy.deepcopy(first.config))

        while candidates:
            best = 0
            best_key = candidates[0]._key()
            for index, candidate in enumerate(candidates):
                key = candidate._key()
                if key >= best_key:
                    best, best_key = index, key

            last = candidates.pop()
            if best == len(candidates):
                chosen = last
            else:
                chosen = candidates[best]
                candidates[best] = last

            if chosen.is_t_wise_covered_by(new_sample, self.t):
                continue

            new_sample.add(copy.deepcopy(chosen.config))
            for candidate in candidates:
                candidate.update(chosen.literals)

        return new_sample

    def is_void(self, samples: Sequence[SamplingResult]) -> bool:
        """An OR node is void only if every child is void."""
        return all(result.kind is ResultKind.VOID for result in samples)