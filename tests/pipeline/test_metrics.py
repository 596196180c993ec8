"""Tests for per-stage Metrics."""
from __future__ import annotations

import pytest

from dagscope.metrics import Metrics


class TestCounters:
    def test_starts_empty(self) -> None:
        m = Metrics()
        assert m.operations == {}
        assert m.total_operations == 0
        assert m.count("anything") == 0

    def test_increment(self) -> None:
        m = Metrics()
        m.increment("DFS visits")
        m.increment("DFS visits")
        m.increment("Edge traversals", 5)
        assert m.count("DFS visits") == 2
        assert m.count("Edge traversals") == 5
        assert m.total_operations == 7

    def test_operations_is_a_copy(self) -> None:
        m = Metrics()
        m.increment("a")
        ops = m.operations
        ops["a"] = 100
        assert m.count("a") == 1

    def test_format_keeps_first_seen_order(self) -> None:
        m = Metrics()
        m.increment("Queue pushes", 3)
        m.increment("Queue pops", 2)
        m.increment("Queue pushes")
        assert m.format_operations() == "Queue pushes:4; Queue pops:2"

    def test_repr_without_counters(self) -> None:
        assert "ops=-" in repr(Metrics())


class TestTiming:
    def test_start_stop(self) -> None:
        m = Metrics()
        m.start()
        assert m.running
        m.stop()
        assert not m.running
        assert m.elapsed_ns >= 0
        assert m.elapsed_ms == m.elapsed_ns / 1_000_000

    def test_double_start_raises(self) -> None:
        m = Metrics()
        m.start()
        with pytest.raises(RuntimeError, match="already running"):
            m.start()

    def test_stop_without_start_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not started"):
            Metrics().stop()

    def test_timed_accumulates(self) -> None:
        m = Metrics()
        with m.timed():
            sum(range(10_000))
        first = m.elapsed_ns
        with m.timed():
            sum(range(10_000))
        assert m.elapsed_ns >= first
        assert not m.running

    def test_nested_timed_is_owned_by_outer_block(self) -> None:
        m = Metrics()
        with m.timed():
            with m.timed():
                pass
            # inner block must not have stopped the timer
            assert m.running
        assert not m.running

    def test_timed_stops_on_error(self) -> None:
        m = Metrics()
        with pytest.raises(KeyError):
            with m.timed():
                raise KeyError("boom")
        assert not m.running

    def test_reset(self) -> None:
        m = Metrics()
        m.increment("x")
        with m.timed():
            pass
        m.reset()
        assert m.operations == {}
        assert m.elapsed_ns == 0
        assert not m.running
