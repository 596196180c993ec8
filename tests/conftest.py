"""Shared fixtures for graph and pipeline tests."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Sequence

import pytest

from dagscope.graph.adjacency import Graph, Node

GraphFactory = Callable[..., Graph]


def make_graph(
    n: int,
    edges: Sequence[tuple],
    durations: Sequence[float] | None = None,
    weight_model: str = "edge",
) -> Graph:
    """Build a graph from (u, v) or (u, v, weight) tuples."""
    if durations is None:
        durations = [1.0] * n
    g = Graph([Node(i, float(d)) for i, d in enumerate(durations)], weight_model)
    for e in edges:
        u, v = e[0], e[1]
        w = e[2] if len(e) > 2 else 1.0
        g.add_edge(u, v, w)
    return g


@pytest.fixture
def graph_factory() -> GraphFactory:
    return make_graph


@pytest.fixture
def empty_graph() -> Graph:
    return Graph()


@pytest.fixture
def linear_graph() -> Graph:
    """0 -> 1 -> 2 -> 3"""
    return make_graph(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def diamond_graph() -> Graph:
    """
    0 -> 1 -> 3     weights 1, 1
    0 -> 2 -> 3     weights 2, 1
    """
    return make_graph(4, [(0, 1, 1), (0, 2, 2), (1, 3, 1), (2, 3, 1)])


@pytest.fixture
def weighted_diamond() -> Graph:
    """Durations 5, 3, 2, 4; edges 0->1 (2), 0->2 (1), 1->3 (3), 2->3 (2)."""
    return make_graph(
        4,
        [(0, 1, 2), (0, 2, 1), (1, 3, 3), (2, 3, 2)],
        durations=[5, 3, 2, 4],
    )


@pytest.fixture
def triangle_cycle() -> Graph:
    """0 -> 1 -> 2 -> 0, all weight 1."""
    return make_graph(3, [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def two_cycles_bridge() -> Graph:
    """
    {0, 1} cycle -> {2, 3} cycle, joined by 1 -> 2, plus tail 3 -> 4.
    """
    return make_graph(
        5,
        [(0, 1), (1, 0), (1, 2, 7), (2, 3), (3, 2), (3, 4, 2)],
        durations=[1, 6, 2, 3, 4],
    )


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    """Directory with two valid datasets and one broken one."""
    good_edge = {
        "weight_model": "edge",
        "nodes": [
            {"id": 0, "label": "A", "duration": 5},
            {"id": 1, "label": "B", "duration": 3},
            {"id": 2, "label": "C", "duration": 2},
            {"id": 3, "label": "D", "duration": 4},
        ],
        "edges": [
            {"from": 0, "to": 1, "weight": 2},
            {"from": 0, "to": 2, "weight": 1},
            {"from": 1, "to": 3, "weight": 3},
            {"from": 2, "to": 3, "weight": 2},
        ],
        "source": 0,
    }
    good_node = {
        "weight_model": "node",
        "n": 4,
        "nodes": [
            {"id": "a", "duration": 2},
            {"id": "b", "duration": 3},
            {"id": "c", "duration": 1},
            {"id": "d", "duration": 5},
        ],
        "edges": [
            {"u": "a", "v": "b", "w": 1},
            {"u": "b", "v": "c", "w": 1},
            {"u": "c", "v": "a", "w": 1},
            {"u": "c", "v": "d", "w": 1},
        ],
    }
    broken = {
        "nodes": [{"id": 0}],
        "edges": [{"from": 0, "to": 9, "weight": 1}],
    }
    (tmp_path / "a_edge.json").write_text(json.dumps(good_edge), encoding="utf-8")
    (tmp_path / "b_node.json").write_text(json.dumps(good_node), encoding="utf-8")
    (tmp_path / "c_broken.json").write_text(json.dumps(broken), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a dataset", encoding="utf-8")
    return tmp_path
