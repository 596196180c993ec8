"""Cycle detection in directed graphs using DFS three-color marking.

The three colors:
  WHITE  -- node not yet visited
  GRAY   -- node is on the current DFS path (ancestors of current node)
  BLACK  -- node fully explored (all descendants visited)

A back edge (an edge to a GRAY node) means the graph has a cycle.
When we find one, the GRAY frames on the work stack are exactly the
path from the DFS root to the current node, so the cycle is read
straight off the stack.

The DFS is iterative for the same reason Tarjan's is: a long chain
must not turn into a deep Python call stack.
"""
from __future__ import annotations

from dataclasses import dataclass

from dagscope.graph.adjacency import Graph

WHITE, GRAY, BLACK = 0, 1, 2


@dataclass(slots=True)
class CycleResult:
    """Result of cycle detection."""
    has_cycle: bool
    cycle_path: list[int] | None = None


def detect_cycle(graph: Graph) -> CycleResult:
    """Detect whether *graph* contains a directed cycle.

    Returns a CycleResult with has_cycle=True and the cycle path if one
    exists.  The cycle path is a list [v0, v1, ..., vk, v0] of node
    indices where each consecutive pair is a directed edge.  A
    self-loop on v comes back as [v, v].
    """
    n = graph.node_count
    color = [WHITE] * n
    succ = [graph.successors(u) for u in range(n)]

    for root in range(n):
        if color[root] != WHITE:
            continue
        color[root] = GRAY
        work: list[tuple[int, int]] = [(root, 0)]
        while work:
            node, pos = work[-1]
            if pos < len(succ[node]):
                work[-1] = (node, pos + 1)
                nxt = succ[node][pos]
                if color[nxt] == GRAY:
                    # back edge: path on the stack from nxt to node
                    on_path = [frame[0] for frame in work]
                    start = on_path.index(nxt)
                    return CycleResult(
                        has_cycle=True,
                        cycle_path=on_path[start:] + [nxt],
                    )
                if color[nxt] == WHITE:
                    color[nxt] = GRAY
                    work.append((nxt, 0))
                continue
            color[node] = BLACK
            work.pop()

    return CycleResult(has_cycle=False, cycle_path=None)
