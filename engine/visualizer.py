"""
visualizer.py — Page-Level Facades
===================================
One object per visualizer page.  Each owns its data structure, a
LogSink pre-loaded with the page's "ready" banner, and an
AlgorithmRunner.  Container / tree / array edits go through
`runner.publish()`, so they reach the VisualState and the subscribers
exactly like animation steps do.

Invalid input is written to the user log as "ERROR: …" and then
re-raised for the caller (the HTTP layer turns it into a 400).

    ws = Workspace()
    ws.stack.push(5)
    ws.graph.bfs("A")
    ws.get("sorting").sort("quick", speed="fast")
"""

import logging
import random
import threading
from contextlib import contextmanager
from dataclasses import asdict
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from structures.array import SIZE_DEFAULT, as_int, bars_from, check_values, random_values
from structures.container import IdSource, Queue, Stack
from structures.errors import InvalidInput
from structures.graph import Graph, default_graph
from structures.tree import BinarySearchTree, layout
from engine.config import RANDOM_VALUE_MAX, RANDOM_VALUE_MIN
from engine.log_sink import LogSink
from engine.recorder import Recorder, compare
from engine.runner import AlgorithmRunner, RunHandle

logger = logging.getLogger(__name__)

Speed = Union[None, int, float, str]


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Visualizer:
    kind:          str = ""
    READY_MESSAGE: str = ""
    RESET_MESSAGE: str = ""

    def __init__(self, rng: Optional[random.Random] = None, now: Callable[[], datetime] = datetime.now):
        self.rng    = rng or random.Random()
        self.runner = AlgorithmRunner(LogSink(now=now, banner=self.READY_MESSAGE))
        self._lock  = threading.Lock()

    @property
    def log(self) -> LogSink:
        return self.runner.log

    def note(self, message: str) -> None:
        self.runner.publish(log=message)

    @contextmanager
    def _reporting(self) -> Iterator[None]:
        try:
            yield
        except InvalidInput as exc:
            logger.debug("%s rejected input: %s", self.kind, exc)
            self.note(f"ERROR: {exc}")
            raise

    def _random_value(self) -> int:
        return self.rng.randint(RANDOM_VALUE_MIN, RANDOM_VALUE_MAX)

    def _ensure_idle(self, what: str) -> None:
        if self.runner.is_running:
            raise InvalidInput(f"Cannot {what} while an animation is running")

    # -- run control --
    def cancel(self) -> bool:
        return self.runner.cancel()

    def pause(self) -> bool:
        return self.runner.pause()

    def resume(self) -> bool:
        return self.runner.resume()

    def reset(self) -> None:
        with self._lock:
            self.runner.reset(banner=self.RESET_MESSAGE)
            self._clear()

    def _clear(self) -> None:
        """Drop the page's data structure.  Called with the lock held."""

    def snapshot(self) -> Dict[str, Any]:
        data = self.runner.snapshot()
        data["kind"] = self.kind
        return data


# ---------------------------------------------------------------------------
# Stack & Queue
# ---------------------------------------------------------------------------
class StackVisualizer(Visualizer):
    kind          = "stack"
    READY_MESSAGE = "Stack initialized. Ready to push items."
    RESET_MESSAGE = "Stack cleared. Ready for new operations."

    def __init__(self, ids: Optional[IdSource] = None, **kwargs):
        super().__init__(**kwargs)
        self.stack = Stack(ids)

    def push(self, value: Optional[int] = None):
        with self._reporting(), self._lock:
            value = self._random_value() if value is None else as_int(value)
            entry = self.stack.push(value)
            self.runner.publish(
                log=f"PUSH: Added {value} to stack. Size: {len(self.stack)}",
                items=tuple(self.stack.snapshot()),
            )
            return entry

    def pop(self):
        with self._reporting(), self._lock:
            entry = self.stack.pop()
            self.runner.publish(
                log=f"POP: Removed {entry.value} from stack. Size: {len(self.stack)}",
                items=tuple(self.stack.snapshot()),
            )
            return entry

    def peek(self):
        top = self.stack.peek()
        if top is None:
            self.note("PEEK: Stack is empty.")
        else:
            self.note(f"PEEK: Top element is {top.value}")
        return top

    def _clear(self) -> None:
        self.stack.clear()


class QueueVisualizer(Visualizer):
    kind          = "queue"
    READY_MESSAGE = "Queue initialized. Ready to enqueue items."
    RESET_MESSAGE = "Queue cleared. Ready for new operations."

    def __init__(self, ids: Optional[IdSource] = None, **kwargs):
        super().__init__(**kwargs)
        self.queue = Queue(ids)

    def enqueue(self, value: Optional[int] = None):
        with self._reporting(), self._lock:
            value = self._random_value() if value is None else as_int(value)
            entry = self.queue.enqueue(value)
            self.runner.publish(
                log=f"ENQUEUE: Added {value} to queue. Size: {len(self.queue)}",
                items=tuple(self.queue.snapshot()),
            )
            return entry

    def dequeue(self):
        with self._reporting(), self._lock:
            entry = self.queue.dequeue()
            self.runner.publish(
                log=f"DEQUEUE: Removed {entry.value} from queue. Size: {len(self.queue)}",
                items=tuple(self.queue.snapshot()),
            )
            return entry

    def peek(self):
        front = self.queue.peek()
        if front is None:
            self.note("PEEK: Queue is empty.")
        else:
            self.note(f"PEEK: Front element is {front.value}")
        return front

    def _clear(self) -> None:
        self.queue.clear()


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------
class TreeVisualizer(Visualizer):
    kind          = "tree"
    READY_MESSAGE = "Binary Tree initialized. Ready to insert nodes."
    RESET_MESSAGE = "Tree cleared. Ready for new operations."

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.tree = BinarySearchTree()

    def insert(self, value: Optional[int] = None) -> bool:
        with self._reporting(), self._lock:
            # a traversal walks the live nodes
            self._ensure_idle("insert")
            value = self._random_value() if value is None else as_int(value)
            added = self.tree.insert(value)
            if added:
                self.note(f"INSERT: Added {value} to tree")
            else:
                self.note(f"INSERT: {value} is already in the tree")
            return added

    def traverse(self, mode: str = "inorder", speed: Speed = None) -> RunHandle:
        # under the lock so no insert lands between the idle check and the start
        with self._reporting(), self._lock:
            return self.runner.start("traversal", {"tree": self.tree, "mode": mode}, speed)

    def _clear(self) -> None:
        self.tree.clear()

    def snapshot(self) -> Dict[str, Any]:
        data = super().snapshot()
        data["tree"]   = self.tree.to_dict()
        data["size"]   = len(self.tree)
        data["layout"] = {str(v): [x, y] for v, (x, y) in layout(self.tree.root).items()}
        return data


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
class GraphVisualizer(Visualizer):
    kind          = "graph"
    READY_MESSAGE = "Graph initialized. Ready for BFS traversal."
    RESET_MESSAGE = "Graph reset. Ready for new traversal."

    def __init__(self, graph: Optional[Graph] = None, **kwargs):
        super().__init__(**kwargs)
        self.graph = graph if graph is not None else default_graph()

    def bfs(self, start: str, speed: Speed = None) -> RunHandle:
        with self._reporting():
            return self.runner.start("bfs", {"graph": self.graph, "start": start}, speed)

    def randomize(self, seed: Optional[int] = None) -> None:
        self.reset()
        self.graph.randomize_layout(seed)
        self.note("Graph layout randomized")

    def load(self, data: dict) -> None:
        with self._reporting():
            graph = Graph.from_dict(data)
        self.reset()
        self.graph = graph
        self.note(f"Graph loaded: {len(graph)} nodes, {len(graph.edges)} edges")

    def snapshot(self) -> Dict[str, Any]:
        data = super().snapshot()
        data["graph"] = self.graph.to_dict()
        return data


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
class SortingVisualizer(Visualizer):
    kind          = "sorting"
    READY_MESSAGE = "Sorting visualizer ready. Generate an array to begin."
    RESET_MESSAGE = "Visualizer reset. Generate a new array."
    ALGORITHMS    = ("bubble", "quick")

    @property
    def values(self) -> List[int]:
        """The array as currently displayed (mid-sort after a cancel)."""
        return [b.value for b in self.runner.state.bars]

    def generate(self, size: int = SIZE_DEFAULT) -> List[int]:
        with self._reporting(), self._lock:
            self._ensure_idle("generate an array")
            values = random_values(as_int(size), self.rng)
            self.runner.publish(
                log=f"Generated random array of size {len(values)}",
                bars=tuple(bars_from(values)),
            )
            return values

    def load(self, values: List[int]) -> List[int]:
        with self._reporting(), self._lock:
            self._ensure_idle("load an array")
            values = check_values(values)
            if not values:
                raise InvalidInput("Array is empty")
            self.runner.publish(
                log=f"Loaded array of size {len(values)}",
                bars=tuple(bars_from(values)),
            )
            return values

    def sort(self, algorithm: str = "bubble", speed: Speed = None) -> RunHandle:
        with self._reporting():
            if algorithm not in self.ALGORITHMS:
                raise InvalidInput(f"Unknown sorting algorithm '{algorithm}'")
            return self.runner.start(algorithm, {"values": self.values}, speed)

    def compare(self) -> Dict[str, Any]:
        """Record both algorithms on the current array without animating."""
        with self._reporting():
            values = self.values
            recorders = []
            for key in self.ALGORITHMS:
                rec = Recorder()
                rec.start(key, {"values": values})
                rec.run_to_completion()
                recorders.append(rec)
        result = compare(*recorders)
        self.note(
            f"Compared on {len(values)} bars: fewest comparisons {result.winner_comparisons}, "
            f"fewest swaps {result.winner_swaps}"
        )
        return asdict(result)


# ---------------------------------------------------------------------------
# Workspace: everything one user sees
# ---------------------------------------------------------------------------
class Workspace:
    def __init__(self, seed: Optional[int] = None, now: Callable[[], datetime] = datetime.now):
        rng = random.Random(seed)
        ids = IdSource()
        self.stack   = StackVisualizer(ids=ids, rng=rng, now=now)
        self.queue   = QueueVisualizer(ids=ids, rng=rng, now=now)
        self.tree    = TreeVisualizer(rng=rng, now=now)
        self.graph   = GraphVisualizer(rng=rng, now=now)
        self.sorting = SortingVisualizer(rng=rng, now=now)

    @property
    def visualizers(self) -> Dict[str, Visualizer]:
        return {
            v.kind: v
            for v in (self.stack, self.queue, self.tree, self.graph, self.sorting)
        }

    def get(self, kind: str) -> Visualizer:
        try:
            return self.visualizers[kind]
        except KeyError:
            raise InvalidInput(f"Unknown visualizer '{kind}'") from None

    def shutdown(self) -> None:
        """Stop every animation (used when a session is dropped)."""
        for v in self.visualizers.values():
            v.cancel()
