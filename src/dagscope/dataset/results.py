"""Results table: one CSV row per analyzed dataset."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from dagscope.profiling.harness import AnalysisResult

HEADER = [
    "Dataset", "Nodes", "Edges", "WeightModel", "SCCs",
    "SCC_Time(ns)", "SCC_Operations",
    "Condensation_Time(ns)", "Condensation_Operations",
    "Topo_Time(ns)", "Topo_Operations",
    "SP_Time(ns)", "SP_Operations",
    "CriticalPath_Length", "Source_Node",
]


def result_row(result: AnalysisResult) -> list[str]:
    """Flatten *result* into the HEADER column order."""
    row = [
        result.dataset,
        str(result.node_count),
        str(result.edge_count),
        result.weight_model,
        str(result.scc_count),
    ]
    for stage in ("scc", "condensation", "topo", "paths"):
        m = result.stages[stage]
        row.append(str(m.elapsed_ns))
        row.append(m.format_operations())
    row.append(f"{result.critical_length:g}")
    row.append("" if result.source_id is None else str(result.source_id))
    return row


def write_results_csv(path: str | Path, results: Iterable[AnalysisResult]) -> int:
    """Write HEADER plus one row per result.  Returns the row count."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(HEADER)
        for result in results:
            writer.writerow(result_row(result))
            count += 1
    return count
