"""
visual_state.py — Observable Visual Snapshot
=============================================
What the renderer draws.  Immutable: every change produces a new
VisualState, so an observer holding one can never see half of a step.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from structures.array import Bar
from structures.container import Entry
from structures.graph import NodeState
from algorithms.step import Step


@dataclass(frozen=True)
class VisualState:
    step_number:     int                 = -1
    current:         Optional[str]       = None
    visited:         Tuple[str, ...]     = ()
    frontier:        Tuple[str, ...]     = ()
    highlighted:     Tuple[int, ...]     = ()
    bars:            Tuple[Bar, ...]     = ()
    items:           Tuple[Entry, ...]   = ()   # stack / queue contents
    pseudocode_line: int                 = -1

    def advance(self, step: Step) -> "VisualState":
        """State after `step`.  Container items are not part of a run and carry over."""
        return replace(
            self,
            step_number=step.step_number,
            current=step.current,
            visited=step.visited,
            frontier=step.frontier,
            highlighted=step.highlighted,
            bars=step.bars,
            pseudocode_line=step.pseudocode_line,
        )

    def node_states(self) -> Dict[str, str]:
        """{node_id: NodeState value} for every node the run has touched."""
        states = {n: NodeState.FRONTIER.value for n in self.frontier}
        states.update({n: NodeState.VISITED.value for n in self.visited})
        if self.current is not None:
            states[self.current] = NodeState.CURRENT.value
        return states

    def to_dict(self) -> dict:
        return {
            "step_number":     self.step_number,
            "current":         self.current,
            "visited":         list(self.visited),
            "frontier":        list(self.frontier),
            "node_states":     self.node_states(),
            "highlighted":     list(self.highlighted),
            "bars":            [b.to_dict() for b in self.bars],
            "items":           [e.to_dict() for e in self.items],
            "pseudocode_line": self.pseudocode_line,
        }
