"""Index-based directed graph using adjacency lists.

Nodes are addressed by their position in the node list (0..n-1); the
user-facing node id (an int or a string from the dataset) is kept on
the Node itself and can be mapped back with index_of().  Each index
owns a list of outgoing Edge records in insertion order.  Parallel
edges are kept as separate entries.

The graph has a single build phase: edges are added, then freeze()
makes it read-only so it can be shared between analyses.  There is no
removal.

The weight model is a closed two-variant tag decided at construction.
Path algorithms never look at the raw string again, they call
WeightModel.edge_contribution / node_contribution instead.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Sequence, Union

NodeId = Union[int, str]


class GraphError(Exception):
    """Base class for errors raised by the graph core."""


class InvalidNodeError(GraphError, ValueError):
    """Raised when a node index or id does not exist in the graph."""


@dataclass(frozen=True, slots=True)
class Node:
    id: NodeId
    duration: float = 0.0
    label: str = ""

    def __str__(self) -> str:
        return self.label or str(self.id)


@dataclass(frozen=True, slots=True)
class Edge:
    source: int
    target: int
    weight: float = 0.0


class WeightModel(Enum):
    EDGE = "edge"
    NODE = "node"

    @classmethod
    def parse(cls, value: WeightModel | str) -> WeightModel:
        if isinstance(value, WeightModel):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown weight model {value!r} (expected 'edge' or 'node')"
            ) from None

    def edge_contribution(self, edge: Edge) -> float:
        """Length an edge adds to a path: its weight, or 0 for NODE."""
        if self is WeightModel.EDGE:
            return edge.weight
        return 0.0

    def node_contribution(self, node: Node) -> float:
        """Length a node adds to a critical path.

        Durations count under both models, so this deliberately does not
        look at the tag.  Under EDGE the edge weights are added on top of
        the durations instead of replacing them: a chain of tasks is never
        shorter than the tasks on it (the weighted diamond comes out at
        5 + 2 + 3 + 3 + 4 = 17, not the 5 its edges alone would give).
        """
        return node.duration


class Graph:
    """Directed multigraph over node indices 0..n-1."""

    __slots__ = ("_nodes", "_adj", "_weight_model", "_index", "_edge_count", "_frozen")

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        weight_model: WeightModel | str = WeightModel.EDGE,
    ) -> None:
        self._nodes: tuple[Node, ...] = tuple(nodes)
        self._weight_model = WeightModel.parse(weight_model)
        self._adj: list[list[Edge]] = [[] for _ in self._nodes]
        self._index: dict[NodeId, int] = {}
        for i, node in enumerate(self._nodes):
            if not math.isfinite(node.duration) or node.duration < 0:
                raise GraphError(
                    f"Node {node.id!r} duration must be finite and non-negative, "
                    f"got {node.duration!r}"
                )
            if node.id in self._index:
                raise GraphError(f"Duplicate node id {node.id!r}")
            self._index[node.id] = i
        self._edge_count = 0
        self._frozen = False

    @classmethod
    def with_size(
        cls, n: int, weight_model: WeightModel | str = WeightModel.EDGE
    ) -> Graph:
        """Graph with nodes 0..n-1, zero durations, no edges."""
        if n < 0:
            raise ValueError(f"Node count must be non-negative, got {n}")
        return cls((Node(i) for i in range(n)), weight_model)

    # ---- build phase -----------------------------------------------------

    def add_edge(self, u: int, v: int, weight: float = 0.0) -> Edge:
        """Append edge u -> v to u's adjacency list.

        Raises InvalidNodeError if either endpoint is out of range and
        GraphError if the graph has been frozen or the weight is not
        finite.  Negative weights are allowed.
        """
        if self._frozen:
            raise GraphError("Cannot add edges to a frozen graph")
        self._check(u)
        self._check(v)
        weight = float(weight)
        if not math.isfinite(weight):
            raise GraphError(f"Edge {u} -> {v} weight must be finite, got {weight!r}")
        edge = Edge(u, v, weight)
        self._adj[u].append(edge)
        self._edge_count += 1
        return edge

    def freeze(self) -> Graph:
        """End the build phase.  Returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ---- queries ---------------------------------------------------------

    def _check(self, u: int) -> None:
        if not isinstance(u, int) or isinstance(u, bool) or not 0 <= u < len(self._nodes):
            raise InvalidNodeError(
                f"Node index {u!r} out of range [0, {len(self._nodes)})"
            )

    def node(self, u: int) -> Node:
        self._check(u)
        return self._nodes[u]

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    def index_of(self, node_id: NodeId) -> int:
        """Map a node id back to its index."""
        try:
            return self._index[node_id]
        except KeyError:
            raise InvalidNodeError(f"Unknown node id {node_id!r}") from None

    def edges(self, u: int) -> Sequence[Edge]:
        """Outgoing edges of *u* in insertion order."""
        self._check(u)
        return tuple(self._adj[u])

    def successors(self, u: int) -> list[int]:
        self._check(u)
        return [e.target for e in self._adj[u]]

    def out_degree(self, u: int) -> int:
        self._check(u)
        return len(self._adj[u])

    def in_degrees(self) -> list[int]:
        deg = [0] * len(self._nodes)
        for edges in self._adj:
            for e in edges:
                deg[e.target] += 1
        return deg

    def all_edges(self) -> Iterator[Edge]:
        for edges in self._adj:
            yield from edges

    def transpose(self) -> Graph:
        """New graph with every edge reversed, same nodes and model."""
        t = Graph(self._nodes, self._weight_model)
        for edges in self._adj:
            for e in edges:
                t.add_edge(e.target, e.source, e.weight)
        if self._frozen:
            t.freeze()
        return t

    @property
    def weight_model(self) -> WeightModel:
        return self._weight_model

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    # ---- dunder ----------------------------------------------------------

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, u: object) -> bool:
        return isinstance(u, int) and not isinstance(u, bool) and 0 <= u < len(self._nodes)

    def __repr__(self) -> str:
        return (
            f"Graph(nodes={self.node_count}, edges={self.edge_count}, "
            f"weight_model={self._weight_model.value})"
        )
