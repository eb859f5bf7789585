# ddnnkit

Reasoning on formulas in deterministic decomposable negation normal form
(d-DNNF): model counting under assumptions, satisfiability checks, core and
dead features, enumeration, uniform random sampling and t-wise sampling.

## Installation

```
pip install ddnnkit
```

## Building a d-DNNF

A d-DNNF is a list of nodes in post-order; the last node is the root.
Children must come before their parents. On construction, `Ddnnf` links
every node to its parents, computes the model counts and determines the
core and dead features.

```python
from ddnnkit.node import and_node, or_node, literal_node
from ddnnkit.ddnnf import Ddnnf

nodes = [
    literal_node(1),          # 0
    literal_node(-1),         # 1
    literal_node(2),          # 2
    literal_node(-2),         # 3
    or_node([0, 1]),          # 4
    or_node([2, 3]),          # 5
    and_node([4, 5]),         # 6 (root)
]
ddnnf = Ddnnf(nodes, number_of_variables=2)

ddnnf.rc()          # number of models: 4
ddnnf.get_core()    # core (positive) and dead (negative) features: set()
```

`true_node()` and `false_node()` create the constant nodes. Nodes are
instances of `ddnnkit.node.Node` with a `NodeKind`.

## Counting and satisfiability

```python
from ddnnkit.counting import execute_query, card_of_each_feature
from ddnnkit.sat import sat

execute_query(ddnnf, [1])      # models that select feature 1
execute_query(ddnnf, [1, -2])  # models of a partial configuration
sat(ddnnf, [1, 2])             # True if the partial configuration is satisfiable

for variable, count, ratio in card_of_each_feature(ddnnf):
    print(variable, count, ratio)
```

`execute_query` picks a counting strategy by the size of the query; the
strategies are also available on their own (`card_of_feature_with_marker`,
`operate_on_partial_config_marker`, `operate_on_partial_config_default`,
`operate_on_single_feature`).

`card_of_each_feature_csv(ddnnf, path)` writes the same table to a CSV file.
`core_with_assumptions` and `dead_with_assumptions` report the features that
become core or dead under given assumptions.

`ddnnkit.sat_wrapper.SatWrapper` answers repeated satisfiability queries
with reusable mark states.

## Configurations

```python
from ddnnkit.config_creation import enumerate_configs, uniform_random_sampling

enumerate_configs(ddnnf, [1], 10)           # complete configurations, resumed on later calls
uniform_random_sampling(ddnnf, [], 100, 42) # seeded uniform random samples
```

Both return `None` when the assumptions cannot be satisfied or refer to a
variable beyond the model. Enumeration remembers, per d-DNNF and set of
assumptions, where it stopped, and starts over after the last configuration.

## t-wise sampling

```python
from ddnnkit.t_wise_sampler import sample_t_wise

result = sample_t_wise(ddnnf, 2)
sample = result.optional()
if sample is not None:
    for config in sample:
        print(config.literals)
```

The sample consists of complete configurations and covers every satisfiable
t-wise interaction of literals. The result is a `SamplingResult` whose kind
is `EMPTY`, `VOID` or `WITH_SAMPLE`. The building blocks — `Config`,
`Sample`, the covering strategies, `SimilarityMerger`, `ZippingMerger` and
`TWiseSampler` — can be used directly.

## Structure statistics

`ddnnkit.heuristics.print_all_heuristics(ddnnf)` logs the node-kind
distribution, child counts and path-length statistics of a d-DNNF through
the `logging` module. `node_type_numbers`, `child_numbers` and
`depth_statistics` return the same figures as values.

## What it does not do

- It reads no files: there is no parser for d-DNNF or CNF files, and no
  compilation of CNF formulas into a d-DNNF. Nodes are built in Python.
- It has no command-line tool.
- It keeps no clause set, so there is no editing of the underlying formula
  and no undo.
- Atomic sets and false-optional features are not computed.