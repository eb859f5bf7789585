"""Partial and complete configurations used during t-wise sampling."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Config:
    """A (partial) configuration over a fixed number of variables.

    ``literals`` holds one slot per variable: the positive literal if the
    variable is selected, the negative one if it is deselected and ``0`` if
    it is still undecided. A cached satisfiability mark state may be kept in
    ``sat_state``.
    """

    def __init__(self, literals: Iterable[int], number_of_variables: int) -> None:
        self.literals: list[int] = [0] * number_of_variables
        self.sat_state: list[bool] | None = None
        self._sat_state_complete = False
        self.extend(literals)

    @classmethod
    def from_disjoint(cls, left: Config, right: Config, number_of_variables: int) -> Config:
        """Combine two configs over disjoint variables into a new one."""
        left_state, right_state = left.sat_state, right.sat_state
        if left_state is not None and right_state is not None:
            # The states cannot be combined without breaking the upward
            # propagation of marks, so the state of the larger config is kept.
            if len(left.decided_literals()) >= len(right.decided_literals()):
                state = list(left_state)
            else:
                state = list(right_state)
        elif left_state is not None:
            state = list(left_state)
        elif right_state is not None:
            state = list(right_state)
        else:
            state = None

        config = cls((), number_of_variables)
        config.sat_state = state
        config.extend(left.decided_literals())
        config.extend(right.decided_literals())
        return config

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Config):
            return NotImplemented
        return self.literals == other.literals

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Config({self.literals!r})"

    def __str__(self) -> str:
        return " ".join(str(literal) for literal in self.literals)

    def __iter__(self) -> Iterator[int]:
        return iter(self.literals)

    def decided_literals(self) -> list[int]:
        """The selected and deselected features, in variable order."""
        return [literal for literal in self.literals if literal != 0]

    def set_sat_state(self, sat_state: list[bool]) -> None:
        """Replace the cached mark state, marking it as up to date."""
        self._sat_state_complete = True
        self.sat_state = sat_state

    @property
    def sat_state_complete(self) -> bool:
        """Whether the cached mark state reflects all decided literals."""
        return self._sat_state_complete

    def update_sat_state(self, sat_solver, root: int) -> None:
        """Bring the cached mark state up to date using ``sat_solver``."""
        if self._sat_state_complete:
            return

        literals = self.decided_literals()
        if self.sat_state is None:
            self.set_sat_state(sat_solver.new_state())

        sat_solver.is_sat_in_subgraph_cached(literals, root, self.sat_state)

    def conflicts_with(self, interaction: Iterable[int]) -> bool:
        """Whether the config holds the negation of a literal of the interaction."""
        return any(self.contains(-literal) for literal in interaction if literal != 0)

    def covers(self, interaction: Iterable[int]) -> bool:
        """Whether the config holds every literal of the interaction."""
        return all(self.contains(literal) for literal in interaction if literal != 0)

    def contains(self, literal: int) -> bool:
        """Whether the config holds exactly this literal."""
        if literal == 0:
            raise ValueError("0 is not a literal")
        return self.literals[abs(literal) - 1] == literal

    def add(self, literal: int) -> None:
        """Decide the literal's variable; ``0`` is ignored."""
        if literal == 0:
            return
        self._sat_state_complete = False
        self.literals[abs(literal) - 1] = literal

    def extend(self, literals: Iterable[int]) -> None:
        """Decide every given literal."""
        self._sat_state_complete = False
        for literal in literals:
            self.add(literal)