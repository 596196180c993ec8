"""Strongly connected components via Tarjan's algorithm (iterative).

Tarjan's algorithm does one DFS over the graph.  Each node gets a
discovery index and a lowlink: the smallest index reachable from it
through the DFS tree plus edges into nodes that are still on the
component stack.  When a node finishes with lowlink == index it is the
root of a component, and everything above it on the stack (down to
and including itself) is popped off as one SCC.

The textbook version is recursive, which means the call depth equals
the longest chain in the graph.  Here the recursion is simulated with
an explicit stack of (node, next edge position) frames, so a chain of
a million nodes costs a million list entries instead of a
RecursionError.

Components come out in the order they are closed.  That is a reverse
topological order of the condensation graph, but the pipeline does
not rely on it and always runs an explicit topological sort.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from dagscope.graph.adjacency import Graph
from dagscope.metrics import (
    COMPONENTS,
    DFS_VISITS,
    EDGE_TRAVERSALS,
    Metrics,
)

UNVISITED = -1


@dataclass(slots=True)
class SCCResult:
    """Partition of a graph's nodes into strongly connected components."""
    components: list[list[int]]
    metrics: Metrics = field(default_factory=Metrics)

    @property
    def count(self) -> int:
        return len(self.components)

    @property
    def sizes(self) -> list[int]:
        return [len(c) for c in self.components]

    def component_ids(self, node_count: int) -> list[int]:
        """Map node index -> position of its component."""
        comp_id = [UNVISITED] * node_count
        for cid, members in enumerate(self.components):
            for node in members:
                comp_id[node] = cid
        return comp_id


def tarjan_scc(graph: Graph, metrics: Metrics | None = None) -> SCCResult:
    """Compute the SCC partition of *graph*.

    Roots are tried in ascending index order, which fixes the order in
    which components are emitted for a given graph.
    """
    if metrics is None:
        metrics = Metrics()

    n = graph.node_count
    index = [UNVISITED] * n
    lowlink = [0] * n
    on_stack = [False] * n
    stack: list[int] = []
    components: list[list[int]] = []
    counter = 0

    with metrics.timed():
        succ = [graph.successors(u) for u in range(n)]

        for root in range(n):
            if index[root] != UNVISITED:
                continue

            index[root] = lowlink[root] = counter
            counter += 1
            stack.append(root)
            on_stack[root] = True
            metrics.increment(DFS_VISITS)
            work: list[tuple[int, int]] = [(root, 0)]

            while work:
                v, pos = work[-1]
                nbrs = succ[v]
                if pos < len(nbrs):
                    work[-1] = (v, pos + 1)
                    w = nbrs[pos]
                    metrics.increment(EDGE_TRAVERSALS)
                    if index[w] == UNVISITED:
                        # descend: this is the "recursive call"
                        index[w] = lowlink[w] = counter
                        counter += 1
                        stack.append(w)
                        on_stack[w] = True
                        metrics.increment(DFS_VISITS)
                        work.append((w, 0))
                    elif on_stack[w]:
                        if index[w] < lowlink[v]:
                            lowlink[v] = index[w]
                    continue

                # all edges of v examined
                work.pop()
                if lowlink[v] == index[v]:
                    component: list[int] = []
                    while True:
                        w = stack.pop()
                        on_stack[w] = False
                        component.append(w)
                        if w == v:
                            break
                    components.append(component)
                    metrics.increment(COMPONENTS)
                if work:
                    parent = work[-1][0]
                    if lowlink[v] < lowlink[parent]:
                        lowlink[parent] = lowlink[v]

    return SCCResult(components=components, metrics=metrics)
