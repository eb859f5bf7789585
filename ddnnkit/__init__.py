"""Counting, satisfiability, enumeration, uniform and t-wise sampling on d-DNNF formulas."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "config_creation",
    "counting",
    "covering_strategies",
    "ddnnf",
    "heuristics",
    "node",
    "sample",
    "sample_merger",
    "sampling_result",
    "sat",
    "sat_wrapper",
    "similarity_merger",
    "t_iterator",
    "t_wise_sampler",
    "zipping_merger",
]