"""Single-source shortest paths on a DAG.

Processing nodes in topological order means every predecessor of a
node has been finalized before the node itself is relaxed, so each
edge is looked at once and the whole thing is O(V + E).  No heap, and
negative weights are fine as long as the graph is acyclic.

Edge length comes from the graph's weight model: the edge weight under
EDGE, zero under NODE (where every reachable node ends up at distance
0).  Nodes that cannot be reached from the source keep math.inf and
have no predecessor.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from dagscope.graph.adjacency import Graph, InvalidNodeError
from dagscope.graph.topological import topological_sort
from dagscope.metrics import (
    EDGE_RELAXATIONS,
    RELAXATION_PASSES,
    RELAXATIONS,
    Metrics,
)


@dataclass(slots=True)
class ShortestPaths:
    """Distances and predecessor links from one source."""
    source: int
    distances: list[float]
    predecessors: list[int | None]
    metrics: Metrics = field(default_factory=Metrics)

    def is_reachable(self, target: int) -> bool:
        return not math.isinf(self.distances[target])

    def path_to(self, target: int) -> list[int]:
        """Node indices from source to *target*, or [] if unreachable."""
        if not 0 <= target < len(self.distances):
            raise InvalidNodeError(
                f"Node index {target!r} out of range [0, {len(self.distances)})"
            )
        if not self.is_reachable(target):
            return []
        path = [target]
        cur = self.predecessors[target]
        while cur is not None:
            path.append(cur)
            cur = self.predecessors[cur]
        path.reverse()
        return path

    @property
    def reachable_count(self) -> int:
        return sum(1 for d in self.distances if not math.isinf(d))


def resolve_order(graph: Graph, order: list[int] | None) -> list[int]:
    """Use *order* if given, otherwise topologically sort *graph*."""
    if order is None:
        return topological_sort(graph)
    if len(order) != graph.node_count:
        raise ValueError(
            f"Topological order has {len(order)} entries, "
            f"graph has {graph.node_count} nodes"
        )
    return order


def shortest_paths(
    graph: Graph,
    source: int,
    order: list[int] | None = None,
    metrics: Metrics | None = None,
) -> ShortestPaths:
    """Shortest distance from *source* to every node of a DAG.

    *order* is a topological order of *graph*; it is computed if not
    supplied.  Raises InvalidNodeError for an out-of-range source and
    CyclicDependencyError if the order has to be computed and the
    graph is cyclic.
    """
    if source not in graph:
        raise InvalidNodeError(
            f"Source {source!r} out of range [0, {graph.node_count})"
        )
    if metrics is None:
        metrics = Metrics()
    order = resolve_order(graph, order)
    model = graph.weight_model

    dist = [math.inf] * graph.node_count
    pred: list[int | None] = [None] * graph.node_count
    dist[source] = 0.0

    with metrics.timed():
        for u in order:
            metrics.increment(RELAXATION_PASSES)
            if math.isinf(dist[u]):
                continue
            for edge in graph.edges(u):
                metrics.increment(EDGE_RELAXATIONS)
                new_dist = dist[u] + model.edge_contribution(edge)
                if new_dist < dist[edge.target]:
                    dist[edge.target] = new_dist
                    pred[edge.target] = u
                    metrics.increment(RELAXATIONS)

    return ShortestPaths(
        source=source,
        distances=dist,
        predecessors=pred,
        metrics=metrics,
    )
