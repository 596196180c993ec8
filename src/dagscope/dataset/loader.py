"""Load analysis datasets from JSON files.

A dataset document looks like::

    {
      "weight_model": "edge",
      "nodes": [{"id": 0, "label": "A", "duration": 3}, ...],
      "edges": [{"from": 0, "to": 1, "weight": 2}, ...],
      "source": 0
    }

Edges may also use the short keys ``u`` / ``v`` / ``w``.  If ``nodes``
is missing, ``n`` gives a node count and nodes 0..n-1 are created with
zero duration.  ``source`` is optional and names a node id.

The document is parsed with the json module into plain Python objects
and then validated field by field into a Graph.  Anything that would
break a graph invariant (unknown node reference, duplicate id,
non-finite or negative duration, non-finite weight) raises
DatasetError, which names the dataset and the offending entry.
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dagscope.graph.adjacency import Graph, GraphError, Node, NodeId, WeightModel

log = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when a dataset document cannot be turned into a Graph."""

    def __init__(self, dataset: str, reason: str) -> None:
        self.dataset = dataset
        self.reason = reason
        super().__init__(f"{dataset}: {reason}")


@dataclass(slots=True)
class Dataset:
    """A named, validated input graph."""
    name: str
    graph: Graph
    source: int | None = None    # node index, not id


def _number(name: str, raw: Any, what: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise DatasetError(name, f"{what} must be a number, got {raw!r}")
    value = float(raw)
    if not math.isfinite(value):
        raise DatasetError(name, f"{what} must be finite, got {raw!r}")
    return value


def _node_id(name: str, raw: Any, what: str) -> NodeId:
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise DatasetError(name, f"{what} must be an int or string, got {raw!r}")
    return raw


def _first_key(entry: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in entry:
            return entry[key]
    return None


def _parse_nodes(name: str, doc: Mapping[str, Any]) -> list[Node]:
    raw_nodes = doc.get("nodes")
    if raw_nodes is None:
        n = doc.get("n")
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise DatasetError(name, "needs a 'nodes' list or a non-negative 'n'")
        return [Node(i) for i in range(n)]

    if not isinstance(raw_nodes, list):
        raise DatasetError(name, "'nodes' must be a list")
    nodes = []
    for pos, entry in enumerate(raw_nodes):
        if not isinstance(entry, Mapping) or "id" not in entry:
            raise DatasetError(name, f"node #{pos} needs an 'id'")
        duration = _number(name, entry.get("duration", 0), f"node #{pos} duration")
        if duration < 0:
            raise DatasetError(name, f"node #{pos} duration must be non-negative")
        nodes.append(Node(
            id=_node_id(name, entry["id"], f"node #{pos} id"),
            duration=duration,
            label=str(entry.get("label", "")),
        ))
    return nodes


def dataset_from_document(doc: Mapping[str, Any], name: str = "<memory>") -> Dataset:
    """Validate a parsed JSON document and build a frozen Graph."""
    if not isinstance(doc, Mapping):
        raise DatasetError(name, "top-level JSON value must be an object")

    try:
        model = WeightModel.parse(doc.get("weight_model", WeightModel.EDGE.value))
    except ValueError as exc:
        raise DatasetError(name, str(exc)) from None

    nodes = _parse_nodes(name, doc)
    try:
        graph = Graph(nodes, model)
    except GraphError as exc:
        raise DatasetError(name, str(exc)) from None

    if "n" in doc and "nodes" in doc and doc["n"] != len(nodes):
        log.warning("%s: 'n' is %r but %d nodes are listed", name, doc["n"], len(nodes))

    raw_edges = doc.get("edges", [])
    if not isinstance(raw_edges, list):
        raise DatasetError(name, "'edges' must be a list")
    for pos, entry in enumerate(raw_edges):
        if not isinstance(entry, Mapping):
            raise DatasetError(name, f"edge #{pos} must be an object")
        src = _first_key(entry, "from", "u")
        dst = _first_key(entry, "to", "v")
        if src is None or dst is None:
            raise DatasetError(name, f"edge #{pos} needs 'from'/'to' (or 'u'/'v')")
        weight = _first_key(entry, "weight", "w")
        weight = 0.0 if weight is None else _number(name, weight, f"edge #{pos} weight")
        try:
            u = graph.index_of(_node_id(name, src, f"edge #{pos} source"))
            v = graph.index_of(_node_id(name, dst, f"edge #{pos} target"))
        except GraphError as exc:
            raise DatasetError(name, f"edge #{pos}: {exc}") from None
        graph.add_edge(u, v, weight)

    source = None
    if doc.get("source") is not None:
        try:
            source = graph.index_of(_node_id(name, doc["source"], "source"))
        except GraphError as exc:
            raise DatasetError(name, f"source: {exc}") from None

    return Dataset(name=name, graph=graph.freeze(), source=source)


def load_dataset(path: str | Path) -> Dataset:
    """Read and validate one dataset file.

    Raises OSError if the file cannot be read and DatasetError if it is
    not UTF-8, not valid JSON, nested too deeply to parse, or not a
    valid graph.
    """
    path = Path(path)
    log.debug("Loading dataset %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DatasetError(path.name, f"not UTF-8 text: {exc}") from None
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetError(path.name, f"invalid JSON: {exc}") from None
    except RecursionError:
        raise DatasetError(path.name, "JSON nested too deeply") from None
    return dataset_from_document(doc, name=path.name)


def list_datasets(directory: str | Path, pattern: str = "*.json") -> list[Path]:
    """Dataset files in *directory* matching *pattern*, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    return sorted(p for p in directory.glob(pattern) if p.is_file())
