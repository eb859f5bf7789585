"""Samples: collections of complete and partial configurations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .config import Config


class Sample:
    """A sample of configs over a set of variables.

    A config is complete with respect to the sample if it decides every
    variable of the sample; otherwise it is partial.
    """

    def __init__(self, vars: Iterable[int] = ()) -> None:
        self.complete_configs: list[Config] = []
        self.partial_configs: list[Config] = []
        self.vars: set[int] = set(vars)
        # literals occurring in the sample, kept as a list for a stable order
        self.literals: list[int] = []

    @classmethod
    def new_from_configs(cls, configs: Iterable[Config]) -> Sample:
        """A sample holding the given configs over the variables they decide."""
        configs = list(configs)
        literals = sorted({lit for config in configs for lit in config.decided_literals()})
        sample = cls(abs(literal) for literal in literals)
        sample.literals = literals
        sample.extend(configs)
        return sample

    @classmethod
    def new_from_samples(cls, samples: Iterable[Sample]) -> Sample:
        """An empty sample over the variables and literals of the given samples."""
        samples = list(samples)
        sample = cls(var for other in samples for var in other.vars)
        sample.literals = sorted({lit for other in samples for lit in other.literals})
        return sample

    @classmethod
    def from_literal(cls, literal: int, number_of_variables: int) -> Sample:
        """A sample with a single config holding a single literal."""
        sample = cls([abs(literal)])
        sample.literals = [literal]
        sample.add_complete(Config([literal], number_of_variables))
        return sample

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sample):
            return NotImplemented
        return (
            self.complete_configs == other.complete_configs
            and self.partial_configs == other.partial_configs
            and self.vars == other.vars
            and self.literals == other.literals
        )

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: Sample) -> bool:
        return len(self) < len(other)

    def __le__(self, other: Sample) -> bool:
        return len(self) <= len(other)

    def __gt__(self, other: Sample) -> bool:
        return len(self) > len(other)

    def __ge__(self, other: Sample) -> bool:
        return len(self) >= len(other)

    def __repr__(self) -> str:
        return (
            f"Sample(complete={self.complete_configs!r}, "
            f"partial={self.partial_configs!r}, vars={sorted(self.vars)!r})"
        )

    def add_complete(self, config: Config) -> None:
        """Add a config known to be complete, without checking."""
        self.complete_configs.append(config)

    def add_partial(self, config: Config) -> None:
        """Add a config known to be partial, without checking."""
        self.partial_configs.append(config)

    def add(self, config: Config) -> None:
        """Add a config as complete or partial, whichever it is."""
        if self.is_config_complete(config):
            self.add_complete(config)
        else:
            self.add_partial(config)

    def extend(self, configs: Iterable[Config]) -> None:
        """Add every given config."""
        for config in configs:
            self.add(config)

    def is_config_complete(self, config: Config) -> bool:
        """Whether the config decides as many variables as the sample has."""
        return len(config.decided_literals()) == len(self.vars)

    def __iter__(self) -> Iterator[Config]:
        yield from self.complete_configs
        yield from self.partial_configs

    def iter_with_completeness(self) -> Iterator[tuple[Config, bool]]:
        """Yield every config together with whether it is complete."""
        for config in self.complete_configs:
            yield config, True
        for config in self.partial_configs:
            yield config, False

    def __len__(self) -> int:
        return len(self.complete_configs) + len(self.partial_configs)

    def is_empty(self) -> bool:
        """Whether the sample holds no configs."""
        return not self.complete_configs and not self.partial_configs

    def covers(self, interaction: Iterable[int]) -> bool:
        """Whether a config of the sample covers the interaction."""
        interaction = list(interaction)
        if 0 in interaction:
            raise ValueError("an interaction must not contain 0")
        return any(config.covers(interaction) for config in self)