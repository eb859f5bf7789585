"""A satisfiability checker over a d-DNNF with reusable mark states."""

from __future__ import annotations

from .ddnnf import Ddnnf
from .sat import new_sat_mark_state, sat_propagate


class SatWrapper:
    """Answers satisfiability queries on a d-DNNF using cached mark states."""

    def __init__(self, ddnnf: Ddnnf) -> None:
        self.ddnnf = ddnnf
        self._new_state = new_sat_mark_state(len(ddnnf.nodes))

    def new_state(self) -> list[bool]:
        """A fresh mark state for this d-DNNF."""
        return list(self._new_state)

    def is_sat_cached(self, config, cached_state: list[bool]) -> bool:
        """Whether ``config`` is satisfiable, updating ``cached_state``."""
        return self.is_sat_in_subgraph_cached(config, len(self.ddnnf.nodes) - 1, cached_state)

    def is_sat_in_subgraph_cached(self, config, root: int, cached_state: list[bool]) -> bool:
        """Whether ``config`` is satisfiable in the sub-graph rooted at ``root``."""
        return sat_propagate(self.ddnnf, config, cached_state, root)