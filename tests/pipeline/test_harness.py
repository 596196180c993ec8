"""Tests for the analysis pipeline and batch runner."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dagscope.graph.adjacency import Graph, InvalidNodeError
from dagscope.profiling.harness import STAGES, analyze_graph, run_batch


class TestAnalyzeGraph:
    def test_weighted_diamond(self, weighted_diamond: Graph) -> None:
        result = analyze_graph(weighted_diamond, dataset="diamond")
        assert result.dataset == "diamond"
        assert result.node_count == 4
        assert result.edge_count == 4
        assert result.weight_model == "edge"
        assert result.scc_count == 4
        assert result.critical_length == 17.0
        assert result.shortest is not None
        assert result.shortest.reachable_count == 4
        assert result.source_id == 0

    def test_cyclic_graph_is_condensed(self, two_cycles_bridge: Graph) -> None:
        result = analyze_graph(two_cycles_bridge)
        assert result.scc_count == 3
        assert result.order == [2, 1, 0]
        assert result.critical.path == [2, 1, 0]
        assert result.critical_length == 22.0
        assert result.shortest.distances == [9.0, 7.0, 0.0]

    def test_source_maps_to_its_component(self, two_cycles_bridge: Graph) -> None:
        # node 4 is the tail; its component reaches nothing else
        result = analyze_graph(two_cycles_bridge, source=4)
        assert result.shortest.source == 0
        assert result.shortest.reachable_count == 1
        assert result.source_id == 4

    def test_no_source_skips_shortest_paths(self, diamond_graph: Graph) -> None:
        result = analyze_graph(diamond_graph, source=None)
        assert result.shortest is None
        assert result.source_id is None
        assert result.critical.path

    def test_empty_graph(self, empty_graph: Graph) -> None:
        result = analyze_graph(empty_graph)
        assert result.source is None
        assert result.shortest is None
        assert result.scc_count == 0
        assert result.order == []
        assert result.critical.path == []
        assert result.critical_length == 0.0

    @pytest.mark.parametrize("source", [-1, 4])
    def test_invalid_source_raises(self, diamond_graph: Graph, source: int) -> None:
        with pytest.raises(InvalidNodeError):
            analyze_graph(diamond_graph, source=source)

    def test_one_metrics_per_stage(self, two_cycles_bridge: Graph) -> None:
        result = analyze_graph(two_cycles_bridge)
        assert tuple(result.stages) == STAGES
        ids = {id(m) for m in result.stages.values()}
        assert len(ids) == len(STAGES)
        for m in result.stages.values():
            assert not m.running
        assert result.total_time_ms == pytest.approx(
            sum(m.elapsed_ms for m in result.stages.values())
        )

    def test_stage_counters(self, two_cycles_bridge: Graph) -> None:
        result = analyze_graph(two_cycles_bridge)
        assert result.stages["scc"].count("DFS visits") == 5
        assert result.stages["scc"].count("Components") == 3
        assert result.stages["condensation"].count("Condensation edges") == 2
        assert result.stages["topo"].count("Queue pops") == 3
        # shortest paths and critical path both walk the 3-node order
        assert result.stages["paths"].count("Relaxation passes") == 6


class TestRunBatch:
    def test_broken_dataset_does_not_stop_batch(self, dataset_dir: Path) -> None:
        paths = sorted(dataset_dir.glob("*.json"))
        report = run_batch(paths)
        assert report.succeeded == 2
        assert report.failed == 1
        assert list(report.failures) == ["c_broken.json"]
        assert [r.dataset for r in report.results] == ["a_edge.json", "b_node.json"]
        assert report.total_time_ms > 0

    def test_results(self, dataset_dir: Path) -> None:
        report = run_batch([dataset_dir / "a_edge.json", dataset_dir / "b_node.json"])
        a, b = report.results
        assert a.critical_length == 17.0
        assert a.source_id == 0
        # {a, b, c} collapses; node model: max(2, 3, 1) + 5
        assert b.scc_count == 2
        assert b.critical_length == 8.0
        assert b.source_id == "a"

    def test_failure_is_logged(
        self, dataset_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="dagscope.profiling.harness"):
            run_batch([dataset_dir / "c_broken.json"])
        assert "c_broken.json" in caplog.text

    def test_missing_file_is_a_failure(self, tmp_path: Path) -> None:
        report = run_batch([tmp_path / "gone.json"])
        assert report.failed == 1
        assert report.results == []

    def test_source_override(self, dataset_dir: Path) -> None:
        report = run_batch([dataset_dir / "a_edge.json"], source=3)
        (result,) = report.results
        assert result.source == 3
        assert result.shortest.reachable_count == 1

    def test_out_of_range_source_fails_one_dataset(self, dataset_dir: Path) -> None:
        report = run_batch([dataset_dir / "a_edge.json"], source=10)
        assert report.failed == 1
        assert "out of range" in report.failures["a_edge.json"]

    def test_undecodable_file_is_scoped_to_one_dataset(self, dataset_dir: Path) -> None:
        bad = dataset_dir / "0_binary.json"
        bad.write_bytes(b'{"n": 2, "label": "\xff\xfe"}')
        report = run_batch([bad, dataset_dir / "a_edge.json"])
        assert report.succeeded == 1
        assert report.failed == 1
        assert "UTF-8" in report.failures["0_binary.json"]

    def test_deeply_nested_json_is_scoped_to_one_dataset(self, dataset_dir: Path) -> None:
        deep = dataset_dir / "0_deep.json"
        deep.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")
        report = run_batch([deep, dataset_dir / "a_edge.json"])
        assert report.succeeded == 1
        assert report.failed == 1
        assert "0_deep.json" in report.failures
