"""Operation counters and wall-clock timing for one analysis stage.

Every stage of the pipeline gets its own Metrics instance.  The
algorithm under measurement bumps named counters while it runs, and
the caller (or the algorithm itself) wraps the work in timed().  Time
accumulates across timed blocks, so two algorithms that share one
stage (say, shortest paths and critical path) report their combined
cost.

Counter names are plain strings so a results table can print them
verbatim.  The ones used by the graph algorithms live here as
constants.
"""
from __future__ import annotations

import time
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

DFS_VISITS = "DFS visits"
EDGE_TRAVERSALS = "Edge traversals"
COMPONENTS = "Components"
CONDENSATION_EDGES = "Condensation edges"
DUPLICATE_EDGES = "Duplicate edges dropped"
DEGREE_CALCULATIONS = "Degree calculations"
QUEUE_PUSHES = "Queue pushes"
QUEUE_POPS = "Queue pops"
RELAXATION_PASSES = "Relaxation passes"
EDGE_RELAXATIONS = "Edge relaxations"
RELAXATIONS = "Relaxations"
LONGEST_RELAXATIONS = "Longest path relaxations"


@dataclass(slots=True)
class Metrics:
    """Named operation counts plus elapsed time for one stage."""
    _ops: Counter = field(default_factory=Counter)
    _elapsed_ns: int = 0
    _started_ns: int | None = None

    # ---- counters --------------------------------------------------------

    def increment(self, name: str, count: int = 1) -> None:
        self._ops[name] += count

    def count(self, name: str) -> int:
        return self._ops.get(name, 0)

    @property
    def operations(self) -> dict[str, int]:
        """Copy of the counters, in first-seen order."""
        return dict(self._ops)

    @property
    def total_operations(self) -> int:
        return sum(self._ops.values())

    # ---- timing ----------------------------------------------------------

    def start(self) -> None:
        if self._started_ns is not None:
            raise RuntimeError("Metrics timer is already running")
        self._started_ns = time.perf_counter_ns()

    def stop(self) -> None:
        if self._started_ns is None:
            raise RuntimeError("Metrics timer was not started")
        self._elapsed_ns += time.perf_counter_ns() - self._started_ns
        self._started_ns = None

    @contextmanager
    def timed(self) -> Iterator[Metrics]:
        """Time the enclosed block and add it to elapsed_ns.

        Nested use is a no-op for the inner block: if the timer is
        already running, the outer block owns the measurement.
        """
        if self._started_ns is not None:
            yield self
            return
        self.start()
        try:
            yield self
        finally:
            self.stop()

    @property
    def running(self) -> bool:
        return self._started_ns is not None

    @property
    def elapsed_ns(self) -> int:
        return self._elapsed_ns

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ns / 1_000_000

    def reset(self) -> None:
        self._ops.clear()
        self._elapsed_ns = 0
        self._started_ns = None

    # ---- formatting ------------------------------------------------------

    def format_operations(self) -> str:
        """Render counters as ``name:count; name:count``."""
        return "; ".join(f"{name}:{n}" for name, n in self._ops.items())

    def __repr__(self) -> str:
        return (
            f"Metrics(elapsed_ms={self.elapsed_ms:.3f}, "
            f"ops={self.format_operations() or '-'})"
        )
