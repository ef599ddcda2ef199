"""
recorder.py — Run Recorder & Analytics
========================================
Drives an algorithm generator to completion with no pauses at all,
keeps every Step, and computes the numbers the analytics card shows.
It is the instant counterpart of the AlgorithmRunner: same generators,
same steps, no clock.

Usage:
    rec = Recorder()
    rec.start("bubble", {"values": [5, 3, 8, 1]})
    metrics = rec.run_to_completion()
    metrics.swaps            # 4
    rec.export()             # serialisable snapshot for save/replay

Comparison Mode:
    Record two algorithms on the SAME input, then compare(rec1, rec2).
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generator, List, Optional

from algorithms import AlgoInfo, check_inputs, get_algorithm
from algorithms.step import Step
from structures.errors import InvalidInput


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str        = ""
    algo_label:   str        = ""
    total_steps:  int        = 0
    comparisons:  int        = 0
    swaps:        int        = 0          # every exchange, pivot placement included
    logged_swaps: int        = 0          # exchanges that produced a "Swapped" log line
    visits:       int        = 0
    visit_order:  List[Any]  = field(default_factory=list)
    final_values: List[int]  = field(default_factory=list)
    log_lines:    List[str]  = field(default_factory=list)   # oldest first, unstamped
    wall_time_ms: float      = 0.0


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_steps:       str = ""


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo]                   = None
        self._generator: Optional[Generator[Step, None, None]] = None

    def start(self, algo_key: str, inputs: Dict[str, Any]) -> None:
        """Validate the input and create the generator for this run."""
        info = get_algorithm(algo_key)
        if info is None:
            raise InvalidInput(f"Unknown algorithm: {algo_key}")
        self._algo_info = info
        self._generator = info.fn(**check_inputs(info, inputs))
        self.steps      = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self._generator is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.steps = list(self._generator)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps": [
                {
                    "step_number":     s.step_number,
                    "current":         s.current,
                    "visited":         list(s.visited),
                    "frontier":        list(s.frontier),
                    "highlighted":     list(s.highlighted),
                    "bars":            [b.to_dict() for b in s.bars],
                    "pseudocode_line": s.pseudocode_line,
                    "log":             s.log,
                    "pause":           s.pause.value if s.pause else None,
                    "is_final":        s.is_final,
                }
                for s in self.steps
            ],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None
        logs = [s.log for s in self.steps if s.log]

        # graph runs keep their visit order on the step; tree runs
        # highlight exactly one value per visit step
        if last and last.visited:
            order: List[Any] = list(last.visited)
        else:
            order = [s.highlighted[0] for s in self.steps if s.highlighted]

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            total_steps=len(self.steps),
            comparisons=last.metrics.get("comparisons", 0) if last else 0,
            swaps=last.metrics.get("swaps", 0) if last else 0,
            logged_swaps=sum(1 for line in logs if line.startswith("Swapped")),
            visits=last.metrics.get("visits", 0) if last else 0,
            visit_order=order,
            final_values=last.values if last else [],
            log_lines=logs,
            wall_time_ms=round(wall_ms, 2),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_swaps=winner(l.swaps, r.swaps, l.algo_label, r.algo_label),
        winner_steps=winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
    )
