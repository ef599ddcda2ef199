"""
bfs.py — Breadth-First Traversal
=================================
Generator-based BFS over a directed graph.  Yields a Step at every
meaningful event:
  1. Start           →  frontier seeded with the start node
  2. Dequeue a node  →  mark it CURRENT, pause
  3. Finish the node →  it joins the visited list
  4. Enqueue each undiscovered out-neighbour, in edge-list order
     (short pause after the last one)
  5. Final step      →  current cleared

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from collections import deque
from typing import Generator, List

from structures.errors import InvalidInput
from structures.graph import Graph
from algorithms.step import Pause, Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                   # 0
    "    queue ← [start]",                      # 1
    "    discovered ← {start}",                 # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        visit(node)",                      # 5
    "        for nbr in out_edges(node):",      # 6
    "            if nbr not in discovered:",    # 7
    "                discovered.add(nbr)",      # 8
    "                queue.enqueue(nbr)",       # 9
]


def bfs(graph: Graph, start: str) -> Generator[Step, None, None]:
    """
    Validate eagerly, then hand back the step generator.

    Args:
        graph : The graph to traverse.
        start : Id of the start node.

    Raises:
        InvalidInput – not a Graph, or start node is not in the graph.
    """
    if not isinstance(graph, Graph):
        raise InvalidInput(f"Expected a Graph, got {type(graph).__name__}")
    if not isinstance(start, str) or start not in graph:
        raise InvalidInput(f"Start node '{start}' is not in the graph")
    return _bfs(graph, start)


def _bfs(graph: Graph, start: str) -> Generator[Step, None, None]:
    sb         = StepBuilder()
    queue      = deque([start])
    discovered = {start}

    # --- initialisation step ---
    sb.set_frontier(queue)
    sb.pseudocode_line = 1
    yield sb.build(log=f"BFS started from node {graph.label(start)}")

    # --- main loop ---
    while queue:
        node = queue.popleft()

        # -- dequeue event --
        sb.set_current(node)
        sb.set_frontier(queue)
        sb.pseudocode_line = 5
        yield sb.build(log=f"Visiting node {graph.label(node)}", pause=Pause.PRIMARY)

        fresh = []
        for nbr in graph.neighbours(node):
            if nbr not in discovered:
                discovered.add(nbr)
                fresh.append(nbr)

        # -- node done --
        sb.visit(node)
        sb.pseudocode_line = 6
        yield sb.build(pause=None if fresh else Pause.SECONDARY)

        # -- enqueue events --
        for k, nbr in enumerate(fresh):
            queue.append(nbr)
            sb.set_frontier(queue)
            sb.pseudocode_line = 9
            last = k == len(fresh) - 1
            yield sb.build(
                log=f"Enqueued node {graph.label(nbr)}",
                pause=Pause.SECONDARY if last else None,
            )

    # --- frontier exhausted ---
    sb.set_current(None)
    sb.pseudocode_line = 3
    yield sb.build(log="BFS traversal complete", is_final=True)
