"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • Which graph node is current, which are visited / in the frontier
    • Which tree value is highlighted
    • The full bar array, each bar with its colour
    • Which line of pseudocode is executing right now
    • The log line this step produces (if any)
    • How long the runner should pause after showing it

Design decisions:
  - Step is a frozen dataclass holding tuples only.  The algorithm
    generator is the only writer; runner / recorder / renderer just read.
  - Steps carry no durations, only a `pause` kind.  The runner turns that
    into milliseconds from the run's speed, so generators stay pure with
    respect to timing and can be replayed instantly by the Recorder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from structures.array import Bar, BarColor


class Pause(Enum):
    PRIMARY   = "primary"     # full step delay
    SECONDARY = "secondary"   # shorter settle delay (BFS after enqueueing)


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        current         : Graph node being visited right now (or None).
        visited         : Graph nodes fully processed so far, in visit order.
        frontier        : Graph nodes waiting in the BFS queue, front first.
        highlighted     : Tree values highlighted this step (at most one).
        bars            : Full array snapshot for the sorting algorithms.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        log             : Human-readable log line, or None for silent steps.
        pause           : Pause to take after this step, or None to go on at once.
        metrics         : Running tally: comparisons, swaps, visits.
        is_final        : True on the very last step.
    """

    step_number:     int                   = 0
    current:         Optional[str]         = None
    visited:         Tuple[str, ...]       = ()
    frontier:        Tuple[str, ...]       = ()
    highlighted:     Tuple[int, ...]       = ()
    bars:            Tuple[Bar, ...]       = ()
    pseudocode_line: int                   = 0
    log:             Optional[str]         = None
    pause:           Optional[Pause]       = None
    metrics:         Dict[str, int]        = field(default_factory=dict)
    is_final:        bool                  = False

    @property
    def values(self) -> List[int]:
        return [b.value for b in self.bars]


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps cleanly.
    Numbers the steps itself.

    Usage inside an algorithm generator:
        sb = StepBuilder(values=arr)
        sb.compare(j, j + 1)
        yield sb.build(pause=Pause.PRIMARY)
        sb.swap(j, j + 1)
        sb.mark(BarColor.SWAPPING, j, j + 1)
        yield sb.build(log="Swapped 5 and 3", pause=Pause.PRIMARY)

    `values` is shared with the caller on purpose: swap() sorts the
    caller's list in place.
    """

    def __init__(self, values: Optional[List[int]] = None):
        self.step_no: int       = 0
        self.values:  List[int] = values if values is not None else []
        self.reset()

    def reset(self):
        self.current:         Optional[str]       = None
        self.visited:         List[str]           = []
        self.frontier:        List[str]           = []
        self.highlighted:     List[int]           = []
        self.marks:           Dict[int, BarColor] = {}
        self.sorted:          set                 = set()
        self.pseudocode_line: int                 = 0
        self.metrics:         Dict[str, int]      = {"comparisons": 0, "swaps": 0, "visits": 0}

    # -- graph helpers --
    def set_current(self, node_id: Optional[str]):
        self.current = node_id

    def set_frontier(self, nodes):
        self.frontier = list(nodes)

    def visit(self, node_id: str):
        if node_id not in self.visited:
            self.visited.append(node_id)
        self.metrics["visits"] = len(self.visited)

    # -- tree helpers --
    def highlight(self, value: int):
        self.highlighted = [value]
        self.metrics["visits"] += 1

    def clear_highlight(self):
        self.highlighted = []

    # -- array helpers --
    def mark(self, color: BarColor, *indices: int):
        for i in indices:
            self.marks[i] = color

    def clear_marks(self, *indices: int):
        """Drop the given transient colours, or all of them when none are given."""
        if not indices:
            self.marks = {}
        for i in indices:
            self.marks.pop(i, None)

    def compare(self, *indices: int):
        self.mark(BarColor.COMPARING, *indices)
        self.metrics["comparisons"] += 1

    def swap(self, i: int, j: int):
        self.values[i], self.values[j] = self.values[j], self.values[i]
        self.metrics["swaps"] += 1

    def mark_sorted(self, *indices: int):
        self.sorted.update(indices)

    def _bars(self) -> Tuple[Bar, ...]:
        bars = []
        for i, v in enumerate(self.values):
            color = self.marks.get(i)
            if color is None:
                color = BarColor.SORTED if i in self.sorted else BarColor.NEUTRAL
            bars.append(Bar(v, color))
        return tuple(bars)

    def build(
        self,
        log: Optional[str] = None,
        pause: Optional[Pause] = None,
        is_final: bool = False,
    ) -> Step:
        step = Step(
            step_number=self.step_no,
            current=self.current,
            visited=tuple(self.visited),
            frontier=tuple(self.frontier),
            highlighted=tuple(self.highlighted),
            bars=self._bars(),
            pseudocode_line=self.pseudocode_line,
            log=log,
            pause=pause,
            metrics=dict(self.metrics),
            is_final=is_final,
        )
        self.step_no += 1
        return step
