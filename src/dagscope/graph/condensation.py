"""Condensation graph: contract every SCC to a single node.

Node i of the condensation corresponds to component i of the SCC
partition.  Its duration is the largest duration among the members,
so a component costs as much as its slowest node.

Edges between different components are copied once per ordered
component pair.  The first edge seen for a pair (scanning sources in
index order, then each adjacency list in insertion order) supplies the
weight; later parallel edges are dropped, not summed or maxed.  Edges
inside a component, self-loops included, never reach the
condensation.

The result is a DAG: an edge path leading back into a component would
have merged the components in the first place.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from dagscope.graph.adjacency import Graph, Node
from dagscope.graph.scc import SCCResult, UNVISITED, tarjan_scc
from dagscope.metrics import (
    CONDENSATION_EDGES,
    DUPLICATE_EDGES,
    EDGE_TRAVERSALS,
    Metrics,
)


@dataclass(slots=True)
class Condensation:
    """A condensation graph plus the node -> component mapping."""
    graph: Graph
    component_of: list[int]
    metrics: Metrics = field(default_factory=Metrics)

    @property
    def component_count(self) -> int:
        return self.graph.node_count


def build_condensation(
    graph: Graph,
    components: list[list[int]],
    metrics: Metrics | None = None,
) -> Condensation:
    """Build the condensation of *graph* for the given SCC partition.

    *components* must be an exhaustive, disjoint partition of the
    node indices (as returned by tarjan_scc).
    """
    if metrics is None:
        metrics = Metrics()

    with metrics.timed():
        comp_id = SCCResult(components).component_ids(graph.node_count)
        if UNVISITED in comp_id:
            missing = comp_id.index(UNVISITED)
            raise ValueError(f"Node {missing} is not covered by any component")

        nodes = graph.nodes
        cond_nodes = [
            Node(
                id=cid,
                duration=max((nodes[u].duration for u in members), default=0.0),
                label=f"C{cid}",
            )
            for cid, members in enumerate(components)
        ]
        cond = Graph(cond_nodes, graph.weight_model)

        seen: set[tuple[int, int]] = set()
        for u in range(graph.node_count):
            cu = comp_id[u]
            for edge in graph.edges(u):
                metrics.increment(EDGE_TRAVERSALS)
                cv = comp_id[edge.target]
                if cu == cv:
                    continue
                if (cu, cv) in seen:
                    metrics.increment(DUPLICATE_EDGES)
                    continue
                seen.add((cu, cv))
                cond.add_edge(cu, cv, edge.weight)
                metrics.increment(CONDENSATION_EDGES)

        cond.freeze()

    return Condensation(graph=cond, component_of=comp_id, metrics=metrics)


def condense(
    graph: Graph, metrics: Metrics | None = None
) -> tuple[SCCResult, Condensation]:
    """Run tarjan_scc and build_condensation with one shared Metrics."""
    if metrics is None:
        metrics = Metrics()
    scc = tarjan_scc(graph, metrics)
    return scc, build_condensation(graph, scc.components, metrics)
