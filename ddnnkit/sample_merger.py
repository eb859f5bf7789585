"""Merging of samples at the inner nodes of a d-DNNF."""

from __future__ import annotations

import abc
import copy
from collections.abc import Sequence
from dataclasses import dataclass

from .config import Config
from .ddnnf import Ddnnf
from .sample import Sample
from .sampling_result import SamplingResult


class SampleMerger(abc.ABC):
    """Combines the samples of the children of a node into one sample."""

    @abc.abstractmethod
    def merge(self, node_id: int, left: Sample, right: Sample) -> Sample:
        """Create a new sample by merging two samples."""

    def merge_in_place(self, node_id: int, left: Sample, right: Sample) -> Sample:
        """Merge two samples, reusing ``left`` where the merger allows it."""
        return self.merge(node_id, left, right)

    def merge_all(self, node_id: int, samples: Sequence[Sample]) -> Sample:
        """Merge all samples; an empty sequence gives an empty sample."""
        result = Sample()
        for sample in samples:
            result = self.merge_in_place(node_id, result, sample)
        return result

    @abc.abstractmethod
    def is_void(self, samples: Sequence[SamplingResult]) -> bool:
        """Whether the results short-circuit to a void sample for this merger."""


@dataclass
class DummyAndMerger(SampleMerger):
    """An AND merger that builds every combination of the configs."""

    ddnnf: Ddnnf

    def merge(self, node_id: int, left: Sample, right: Sample) -> Sample:
        if left.is_empty():
            return copy.deepcopy(right)
        if right.is_empty():
            return copy.deepcopy(left)

        sample = Sample.new_from_samples([left, right])
        for left_part in left:
            for right_part in right:
                sample.add_complete(
                    Config.from_disjoint(
                        left_part, right_part, self.ddnnf.number_of_variables
                    )
                )
        return sample

    def is_void(self, samples: Sequence[SamplingResult]) -> bool:
        return False


@dataclass
class DummyOrMerger(SampleMerger):
    """An OR merger that keeps every config of both samples."""

    def merge(self, node_id: int, left: Sample, right: Sample) -> Sample:
        if left.is_empty():
            return copy.deepcopy(right)
        if right.is_empty():
            return copy.deepcopy(left)

        sample = Sample.new_from_samples([left, right])
        for config in left:
            sample.add_complete(copy.deepcopy(config))
        for config in right:
            sample.add_complete(copy.deepcopy(config))
        return sample

    def is_void(self, samples: Sequence[SamplingResult]) -> bool:
        return False