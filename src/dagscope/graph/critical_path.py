"""Critical path analysis on a weighted DAG.

The critical path is the longest path through the graph, where a path
accrues the duration of every node on it plus, under the EDGE weight
model, the weight of every edge between them.  In a scheduling reading
of the condensation graph this is the minimum completion time, and the
heaviest node on it is the bottleneck.

Algorithm:
  1.  Seed every node with its own contribution: any node may start
      the path, at the cost of running that node alone.
  2.  Walk nodes in topological order.  For each node u and each edge
      u -> v, relax: if longest[u] + edge + node(v) > longest[v],
      update longest[v] and record u as the predecessor of v.
  3.  The node with the largest longest[] value is the endpoint.  Ties
      go to the lowest index.
  4.  Walk predecessors backward to reconstruct the full path.

This is the standard DAG longest-path algorithm.  It runs in O(V + E),
which is much better than negating weights and running Dijkstra (which
would not even be correct with the resulting negative edges).

Paths may end anywhere, not only at sinks, and no explicit source is
needed.  That is why this stays a separate operation from
shortest_paths, which does need one.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from dagscope.graph.adjacency import Graph
from dagscope.graph.shortest_path import resolve_order
from dagscope.metrics import (
    EDGE_RELAXATIONS,
    LONGEST_RELAXATIONS,
    RELAXATION_PASSES,
    Metrics,
)


@dataclass(slots=True)
class CriticalPath:
    """Result of critical path analysis."""
    path: list[int]
    length: float
    bottleneck: int | None       # node on the path with the largest contribution
    bottleneck_weight: float
    metrics: Metrics = field(default_factory=Metrics)


def path_length(graph: Graph, path: list[int]) -> float:
    """Re-sum node and edge contributions along *path*.

    Between consecutive nodes the heaviest parallel edge is used, which
    is the one the relaxation would have picked.
    """
    model = graph.weight_model
    total = 0.0
    for i, u in enumerate(path):
        total += model.node_contribution(graph.node(u))
        if i + 1 < len(path):
            v = path[i + 1]
            weights = [model.edge_contribution(e) for e in graph.edges(u) if e.target == v]
            if not weights:
                raise ValueError(f"No edge {u} -> {v} on path")
            total += max(weights)
    return total


def critical_path(
    graph: Graph,
    order: list[int] | None = None,
    metrics: Metrics | None = None,
) -> CriticalPath:
    """Find the longest weighted path through *graph*.

    *order* is a topological order of *graph*; it is computed if not
    supplied, which raises CyclicDependencyError on a cyclic graph.
    An empty graph gives an empty path of length 0.
    """
    if metrics is None:
        metrics = Metrics()
    order = resolve_order(graph, order)
    model = graph.weight_model
    nodes = graph.nodes

    if not nodes:
        return CriticalPath(
            path=[], length=0.0, bottleneck=None, bottleneck_weight=0.0,
            metrics=metrics,
        )

    with metrics.timed():
        contrib = [model.node_contribution(node) for node in nodes]
        longest = list(contrib)
        pred: list[int | None] = [None] * len(nodes)

        for u in order:
            metrics.increment(RELAXATION_PASSES)
            for edge in graph.edges(u):
                metrics.increment(EDGE_RELAXATIONS)
                v = edge.target
                new_len = longest[u] + model.edge_contribution(edge) + contrib[v]
                if new_len > longest[v]:
                    longest[v] = new_len
                    pred[v] = u
                    metrics.increment(LONGEST_RELAXATIONS)

        # endpoint: first index holding the maximum
        best_node = 0
        for v in range(1, len(nodes)):
            if longest[v] > longest[best_node]:
                best_node = v

        path = [best_node]
        cur = pred[best_node]
        while cur is not None:
            path.append(cur)
            cur = pred[cur]
        path.reverse()

    bn = max(path, key=lambda u: contrib[u])
    return CriticalPath(
        path=path,
        length=longest[best_node],
        bottleneck=bn,
        bottleneck_weight=contrib[bn],
        metrics=metrics,
    )
