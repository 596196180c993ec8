"""Report generation for analysis results.

Formats AnalysisResult data into human-readable text for terminal
output: a per-dataset summary and a one-line-per-dataset table.
"""
from __future__ import annotations

from typing import Sequence

from dagscope.profiling.harness import STAGES, AnalysisResult


def _fmt_path(nodes: Sequence[int], limit: int = 20) -> str:
    if len(nodes) <= limit:
        return " -> ".join(map(str, nodes))
    head = " -> ".join(map(str, nodes[:limit]))
    return f"{head} -> ... ({len(nodes) - limit} more)"


def density(node_count: int, edge_count: int) -> float:
    """Edges over the n * (n - 1) possible directed edges."""
    max_edges = node_count * (node_count - 1)
    return edge_count / max_edges if max_edges else 0.0


def format_report(result: AnalysisResult, label: str | None = None) -> str:
    """Format one AnalysisResult as a readable summary."""
    sizes = result.scc.sizes
    trivial = sum(1 for s in sizes if s == 1)
    cond = result.condensation.graph
    lines = [
        f"=== {label or result.dataset} ===",
        f"Nodes:             {result.node_count:,}",
        f"Edges:             {result.edge_count:,}",
        f"Weight model:      {result.weight_model}",
        f"Density:           {density(result.node_count, result.edge_count):.4f}",
        f"",
        f"SCCs found:        {result.scc_count:,}",
        f"  Trivial (size 1): {trivial:,}",
        f"  Non-trivial:      {len(sizes) - trivial:,}",
        f"  Largest:          {max(sizes, default=0):,}",
        f"  Sizes:            {sizes if len(sizes) <= 20 else sizes[:20] + ['...']}",
        f"Condensation:      {cond.node_count:,} nodes, {cond.edge_count:,} edges",
        f"Topological order: {_fmt_path(result.order)}",
    ]
    if result.shortest is not None:
        reached = result.shortest.reachable_count
        lines.append(
            f"Shortest paths:    from {result.source_id} "
            f"(C{result.shortest.source}), {reached}/{cond.node_count} reachable"
        )
    lines += [
        f"Critical path:     {_fmt_path(result.critical.path)}",
        f"  Length:           {result.critical_length:g}",
    ]
    if result.critical.bottleneck is not None:
        lines.append(
            f"  Bottleneck:       C{result.critical.bottleneck} "
            f"({result.critical.bottleneck_weight:g})"
        )
    lines += ["", "Stages:"]
    total = result.total_time_ms
    for name in STAGES:
        m = result.stages[name]
        pct = m.elapsed_ms / total * 100 if total > 0 else 0.0
        lines.append(
            f"  {name:<13} {m.elapsed_ms:>9.3f} ms ({pct:5.1f}%)  "
            f"{m.format_operations() or '-'}"
        )
    return "\n".join(lines)


def format_summary_table(results: Sequence[AnalysisResult]) -> str:
    """Format one line per dataset."""
    lines = [
        f"{'Dataset':<24} {'Nodes':>7} {'Edges':>7} {'Model':>6} "
        f"{'SCCs':>6} {'Critical':>10} {'Time (ms)':>10}",
        "-" * 76,
    ]
    for r in results:
        lines.append(
            f"{r.dataset[:24]:<24} {r.node_count:>7,} {r.edge_count:>7,} "
            f"{r.weight_model:>6} {r.scc_count:>6,} {r.critical_length:>10g} "
            f"{r.total_time_ms:>10.3f}"
        )
    return "\n".join(lines)
