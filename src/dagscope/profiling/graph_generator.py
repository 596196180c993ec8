"""Generate random weighted graphs for benchmarks and smoke runs.

Graph shape:
  - node count drawn uniformly from [min_nodes, max_nodes]
  - forward edges i -> j (i < j) with probability edge_prob, so the
    base graph is a DAG
  - with probability cycle_prob per graph, a few back edges are
    planted so the graph has non-trivial SCCs
  - node durations and edge weights are small positive integers, as
    in hand-made scheduling datasets

The generator is seeded, so the same arguments always produce the
same graphs.
"""
from __future__ import annotations

import random

from dagscope.graph.adjacency import Graph, Node, WeightModel


class GraphGenerator:
    """Generate reproducible random graphs with planted cycles."""

    __slots__ = (
        "_rng", "_num_graphs", "_min_nodes", "_max_nodes",
        "_edge_prob", "_cycle_prob", "_weight_model",
    )

    def __init__(
        self,
        num_graphs: int = 9,
        min_nodes: int = 6,
        max_nodes: int = 50,
        edge_prob: float = 0.15,
        cycle_prob: float = 0.5,
        weight_model: WeightModel | str = WeightModel.EDGE,
        seed: int = 42,
    ) -> None:
        if not 0 < min_nodes <= max_nodes:
            raise ValueError("Node counts must satisfy: 0 < min_nodes <= max_nodes")
        if not 0.0 <= edge_prob <= 1.0 or not 0.0 <= cycle_prob <= 1.0:
            raise ValueError("Probabilities must be in [0, 1]")
        self._rng = random.Random(seed)
        self._num_graphs = num_graphs
        self._min_nodes = min_nodes
        self._max_nodes = max_nodes
        self._edge_prob = edge_prob
        self._cycle_prob = cycle_prob
        self._weight_model = WeightModel.parse(weight_model)

    def generate_one(self, n: int | None = None) -> Graph:
        rng = self._rng
        if n is None:
            n = rng.randint(self._min_nodes, self._max_nodes)
        nodes = [Node(i, duration=float(rng.randint(1, 10)), label=f"T{i}") for i in range(n)]
        g = Graph(nodes, self._weight_model)
        for i in range(n):
            for j in range(i + 1, n):
                if rng.random() < self._edge_prob:
                    g.add_edge(i, j, rng.randint(1, 10))
        if n > 1 and rng.random() < self._cycle_prob:
            # back edges j -> i close cycles through any forward path i ~> j
            for _ in range(rng.randint(1, max(1, n // 5))):
                i, j = sorted(rng.sample(range(n), 2))
                g.add_edge(j, i, rng.randint(1, 10))
        return g.freeze()

    def generate(self) -> list[Graph]:
        """Generate all graphs as a list."""
        return [self.generate_one() for _ in range(self._num_graphs)]

    def chain(self, n: int) -> Graph:
        """A single path 0 -> 1 -> ... -> n-1, unit weights."""
        g = Graph((Node(i, duration=1.0) for i in range(n)), self._weight_model)
        for i in range(n - 1):
            g.add_edge(i, i + 1, 1.0)
        return g.freeze()

    def ring(self, n: int) -> Graph:
        """A chain closed into one big cycle."""
        g = Graph((Node(i, duration=1.0) for i in range(n)), self._weight_model)
        for i in range(n):
            g.add_edge(i, (i + 1) % n, 1.0)
        return g.freeze()
