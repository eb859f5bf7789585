"""The result of sampling a sub-graph: empty, void or a sample."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .sample import Sample


class ResultKind(enum.Enum):
    """What a sampling result stands for."""

    EMPTY = "empty"  # a valid result without configs: the sub-graph is true
    VOID = "void"  # an invalid result: the sub-graph is false
    WITH_SAMPLE = "with_sample"  # a valid result holding a sample


@dataclass(eq=False)
class SamplingResult:
    """A sampling result; ``sample`` is set exactly for ``WITH_SAMPLE``."""

    kind: ResultKind
    sample: Sample | None = None

    def __post_init__(self) -> None:
        if (self.kind is ResultKind.WITH_SAMPLE) != (self.sample is not None):
            raise ValueError("only a WITH_SAMPLE result carries a sample")

    @classmethod
    def from_sample(cls, sample: Sample) -> SamplingResult:
        """Wrap a sample; an empty sample becomes an EMPTY result."""
        if sample.is_empty():
            return cls(ResultKind.EMPTY)
        return cls(ResultKind.WITH_SAMPLE, sample)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SamplingResult):
            return NotImplemented
        return self.kind is other.kind and self.sample == other.sample

    __hash__ = None  # type: ignore[assignment]

    def optional(self) -> Sample | None:
        """The sample, or ``None`` if there is none."""
        return self.sample

    def __len__(self) -> int:
        return 0 if self.sample is None else len(self.sample)

    def is_empty(self) -> bool:
        """Whether the result holds no configs."""
        return self.sample is None or self.sample.is_empty()

    def __str__(self) -> str:
        if self.sample is None:
            return ""
        return ";".join(str(config) for config in self.sample)