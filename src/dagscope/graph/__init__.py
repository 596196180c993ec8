"""Graph model and algorithms: SCC, condensation, ordering, DAG paths."""

from dagscope.graph.adjacency import (
    Edge,
    Graph,
    GraphError,
    InvalidNodeError,
    Node,
    WeightModel,
)
from dagscope.graph.condensation import Condensation, build_condensation, condense
from dagscope.graph.critical_path import CriticalPath, critical_path, path_length
from dagscope.graph.cycle_detector import CycleResult, detect_cycle
from dagscope.graph.scc import SCCResult, tarjan_scc
from dagscope.graph.shortest_path import ShortestPaths, shortest_paths
from dagscope.graph.topological import (
    CyclicDependencyError,
    topological_sort,
)

__all__ = [
    "Condensation",
    "CriticalPath",
    "CycleResult",
    "CyclicDependencyError",
    "Edge",
    "Graph",
    "GraphError",
    "InvalidNodeError",
    "Node",
    "SCCResult",
    "ShortestPaths",
    "WeightModel",
    "build_condensation",
    "condense",
    "critical_path",
    "detect_cycle",
    "path_length",
    "shortest_paths",
    "tarjan_scc",
    "topological_sort",
]
