"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer can animate.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, pseudocode, inputs, …),
        …
    }

`fn` validates its arguments eagerly and returns a Step generator, so a
bad input fails before the runner touches any state.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from structures.errors import InvalidInput

from algorithms.bfs         import bfs         as _bfs,         PSEUDOCODE as _bfs_pc
from algorithms.traversal   import traverse    as _traverse,    PSEUDOCODE as _trav_pc
from algorithms.bubble_sort import bubble_sort as _bubble_sort, PSEUDOCODE as _bubble_pc
from algorithms.quicksort   import quicksort   as _quicksort,   PSEUDOCODE as _quick_pc


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    fn:               Callable               # validates, returns the Step generator
    pseudocode:       List[str]              # lines for the side-panel
    inputs:           Tuple[str, ...]        # required keyword inputs of `fn`
    options:          Tuple[str, ...] = ()   # optional keyword inputs of `fn`
    default_speed_ms: int       = 100        # primary pause when the caller gives none
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs, pseudocode=_bfs_pc,
        inputs=("graph", "start"), default_speed_ms=800,
        tags=["graph", "traversal"],
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Explores layer by layer, discovering neighbours in edge order.",
    ),

    "traversal": AlgoInfo(
        key="traversal", label="Binary Tree Traversal", fn=_traverse, pseudocode=_trav_pc,
        inputs=("tree",), options=("mode",), default_speed_ms=600,
        tags=["tree", "traversal"],
        complexity_time="O(n)", complexity_space="O(h)",
        description="Preorder, inorder or postorder walk, one node at a time.",
    ),

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble_sort, pseudocode=_bubble_pc,
        inputs=("values",), default_speed_ms=100,
        tags=["sorting", "stable"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs; the largest bubbles to the end.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quicksort, pseudocode=_quick_pc,
        inputs=("values",), default_speed_ms=100,
        tags=["sorting", "divide-and-conquer"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element, then recurse on both sides.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def check_inputs(info: AlgoInfo, inputs: Dict[str, Any]) -> Dict[str, Any]:
    """Keyword arguments for `info.fn`, or InvalidInput if keys are missing / unknown."""
    missing = [k for k in info.inputs if k not in inputs]
    if missing:
        raise InvalidInput(f"{info.label} needs input(s): {', '.join(missing)}")
    unknown = [k for k in inputs if k not in info.inputs + info.options]
    if unknown:
        raise InvalidInput(f"{info.label} does not take input(s): {', '.join(unknown)}")
    return dict(inputs)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "check_inputs",
]
