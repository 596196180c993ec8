"""dagscope: strongly connected components, condensation and DAG paths.

Pipeline:
    graph -> tarjan_scc -> build_condensation -> topological_sort
          -> shortest_paths / critical_path

    from dagscope import Graph, analyze_graph
"""

from dagscope.graph import (
    Condensation,
    CriticalPath,
    CyclicDependencyError,
    Edge,
    Graph,
    GraphError,
    InvalidNodeError,
    Node,
    SCCResult,
    ShortestPaths,
    WeightModel,
    build_condensation,
    condense,
    critical_path,
    shortest_paths,
    tarjan_scc,
    topological_sort,
)
from dagscope.metrics import Metrics
from dagscope.profiling.harness import AnalysisResult, analyze_graph

__all__ = [
    "AnalysisResult",
    "Condensation",
    "CriticalPath",
    "CyclicDependencyError",
    "Edge",
    "Graph",
    "GraphError",
    "InvalidNodeError",
    "Metrics",
    "Node",
    "SCCResult",
    "ShortestPaths",
    "WeightModel",
    "analyze_graph",
    "build_condensation",
    "condense",
    "critical_path",
    "shortest_paths",
    "tarjan_scc",
    "topological_sort",
]
