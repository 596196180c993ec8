"""Analysis pipeline, reports and synthetic graph generation."""

from dagscope.profiling.graph_generator import GraphGenerator
from dagscope.profiling.harness import (
    AnalysisResult,
    BatchReport,
    analyze_graph,
    run_batch,
)
from dagscope.profiling.report import format_report, format_summary_table

__all__ = [
    "AnalysisResult",
    "BatchReport",
    "GraphGenerator",
    "analyze_graph",
    "format_report",
    "format_summary_table",
    "run_batch",
]
