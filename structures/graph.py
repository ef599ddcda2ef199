"""
graph.py — Directed Graph
==========================
A fixed set of labelled nodes (with canvas coordinates) and a fixed,
ORDERED list of directed edges.

Design decisions:
  - Edges reference nodes by id string, never by Node object, so the
    graph serialises cleanly.
  - No adjacency list is kept.  `neighbours()` filters the edge list,
    which preserves the order the caller supplied the edges in.  BFS
    discovery order depends on exactly that order.
  - Layout coordinates are presentation data; `randomize_layout` moves
    nodes around without touching the structure.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from structures.errors import InvalidInput


# ---------------------------------------------------------------------------
# Node State Enum: visual encoding for the renderer
# ---------------------------------------------------------------------------
class NodeState(Enum):
    UNVISITED = "unvisited"   # default
    FRONTIER  = "frontier"    # discovered, waiting in the queue
    CURRENT   = "current"     # being visited RIGHT NOW
    VISITED   = "visited"     # fully processed


# ---------------------------------------------------------------------------
# Node & Edge
# ---------------------------------------------------------------------------
@dataclass
class Node:
    id:    str
    label: str
    x:     float = 0.0
    y:     float = 0.0

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            id=str(data["id"]),
            label=data.get("label") or str(data["id"]),
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
        )


@dataclass(frozen=True)
class Edge:
    source: str
    target: str

    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(source=str(data["from"]), target=str(data["to"]))


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
class Graph:
    """
    Attributes:
        nodes : {node_id: Node}, in insertion order
        edges : [Edge], in the order the caller supplied them
    """

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()):
        self.nodes: Dict[str, Node] = {}
        self.edges: List[Edge]      = []
        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge)

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.id in self.nodes:
            raise InvalidInput(f"Duplicate node id '{node.id}'")
        self.nodes[node.id] = node
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(id=node_id, label=label or node_id, x=x, y=y))

    def add_edge(self, edge: Edge) -> Edge:
        for end in (edge.source, edge.target):
            if end not in self.nodes:
                raise InvalidInput(f"Edge endpoint '{end}' is not a node")
        self.edges.append(edge)
        return edge

    def connect(self, source: str, target: str) -> Edge:
        return self.add_edge(Edge(source=source, target=target))

    # ==================================================================
    # QUERIES
    # ==================================================================
    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def label(self, node_id: str) -> str:
        node = self.get_node(node_id)
        return node.label if node else node_id

    def node_ids(self) -> List[str]:
        return list(self.nodes)

    def neighbours(self, node_id: str) -> List[str]:
        """Out-neighbours of `node_id`, in edge-list order."""
        return [e.target for e in self.edges if e.source == node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    # ==================================================================
    # LAYOUT
    # ==================================================================
    def randomize_layout(
        self,
        seed: Optional[int] = None,
        x_range: Tuple[float, float] = (100, 600),
        y_range: Tuple[float, float] = (80, 360),
    ) -> None:
        rng = random.Random(seed)
        for node in self.nodes.values():
            node.x = rng.uniform(*x_range)
            node.y = rng.uniform(*y_range)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        try:
            nodes = [Node.from_dict(nd) for nd in data.get("nodes", [])]
            edges = [Edge.from_dict(ed) for ed in data.get("edges", [])]
        except (KeyError, TypeError, AttributeError) as exc:
            raise InvalidInput(f"Malformed graph: {exc}") from exc
        return cls(nodes, edges)


# ---------------------------------------------------------------------------
# Demo graph
# ---------------------------------------------------------------------------
def default_graph() -> Graph:
    """
    The six-node demo graph:

        A → B → C
        ↓   ↓   ↓
        D → E → F
    """
    g = Graph()
    for node_id, x, y in (
        ("A", 200, 100), ("B", 350, 100), ("C", 500, 100),
        ("D", 200, 250), ("E", 350, 250), ("F", 500, 250),
    ):
        g.create_node(node_id, x, y)
    for source, target in (
        ("A", "B"), ("A", "D"), ("B", "C"), ("B", "E"),
        ("D", "E"), ("E", "F"), ("C", "F"),
    ):
        g.connect(source, target)
    return g
