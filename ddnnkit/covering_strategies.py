"""Strategies for covering an interaction within a sample."""

from __future__ import annotations

from .config import Config
from .sample import Sample


def _check_interaction(interaction) -> list[int]:
    interaction = list(interaction)
    if 0 in interaction:
        raise ValueError(f"interaction contains undecided literals: {interaction}")
    return interaction


def _swap_remove(configs: list[Config], index: int) -> Config:
    last = configs.pop()
    if index == len(configs):
        return last
    removed = configs[index]
    configs[index] = last
    return removed


def _finish(sample: Sample, index: int) -> None:
    # move the config to the complete ones if it is complete now
    if sample.is_config_complete(sample.partial_configs[index]):
        sample.add_complete(_swap_remove(sample.partial_configs, index))


def cover_with_caching(sample: Sample, interaction, sat_solver, node_id: int, number_of_vars: int) -> None:
    """Cover a valid interaction in the sample, skipping invalid ones."""
    interaction = _check_interaction(interaction)
    if sample.covers(interaction):
        return

    interaction_state = sat_solver.new_state()
    if not sat_solver.is_sat_in_subgraph_cached(interaction, node_id, interaction_state):
        return

    index = _cover(sample, interaction, sat_solver, node_id)
    if index is not None:
        _finish(sample, index)
    else:
        config = Config(interaction, number_of_vars)
        config.set_sat_state(interaction_state)
        sample.add(config)


def cover_with_caching_twise(
    sample: Sample, interaction, sat_solver, node_id: int, number_of_vars: int
) -> None:
    """Cover the interaction in the sample without checking it first."""
    interaction = _check_interaction(interaction)
    if sample.covers(interaction):
        return

    index = _cover(sample, interaction, sat_solver, node_id)
    if index is not None:
        _finish(sample, index)
    else:
        interaction_state = sat_solver.new_state()
        sat_solver.is_sat_in_subgraph_cached(interaction, node_id, interaction_state)
        config = Config(interaction, number_of_vars)
        config.set_sat_state(interaction_state)
        sample.add(config)


def _cover(sample: Sample, interaction: list[int], sat_solver, node_id: int) -> int | None:
    """Extend the first partial config that stays satisfiable with the interaction."""
    for index, config in enumerate(sample.partial_configs):
        if config.conflicts_with(interaction):
            continue

        config.update_sat_state(sat_solver, node_id)
        # work on a copy so that the state cached in the config stays intact
        state = list(config.sat_state)

        if sat_solver.is_sat_in_subgraph_cached(interaction, node_id, state):
            config.extend(interaction)
            config.set_sat_state(state)
            return index
    return None