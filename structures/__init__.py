"""
structures/
-----------
Core data layer.  Public API:

    from structures import Stack, Queue, BinarySearchTree, Graph
    from structures import Bar, BarColor, InvalidInput
"""

from structures.errors    import VisualizerError, InvalidInput, ConcurrentRunConflict
from structures.container import Entry, IdSource, Stack, Queue
from structures.tree      import TreeNode, BinarySearchTree, layout
from structures.graph     import Node, Edge, Graph, NodeState, default_graph
from structures.array     import Bar, BarColor, as_int, bars_from, check_values, random_values

__all__ = [
    "VisualizerError", "InvalidInput", "ConcurrentRunConflict",
    "Entry", "IdSource", "Stack", "Queue",
    "TreeNode", "BinarySearchTree", "layout",
    "Node", "Edge", "Graph", "NodeState", "default_graph",
    "Bar", "BarColor", "as_int", "bars_from", "check_values", "random_values",
]
