import threading

import pytest

from engine import InvalidInput, RunStatus, Workspace
from structures import BarColor


@pytest.fixture
def ws(now):
    workspace = Workspace(seed=1, now=now)
    yield workspace
    workspace.shutdown()


def lines(vis):
    return vis.log.snapshot()


# ---------------------------------------------------------------------------
# Banners
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("kind, ready, cleared", [
    ("stack",   "Stack initialized. Ready to push items.",          "Stack cleared. Ready for new operations."),
    ("queue",   "Queue initialized. Ready to enqueue items.",       "Queue cleared. Ready for new operations."),
    ("tree",    "Binary Tree initialized. Ready to insert nodes.",  "Tree cleared. Ready for new operations."),
    ("graph",   "Graph initialized. Ready for BFS traversal.",      "Graph reset. Ready for new traversal."),
    ("sorting", "Sorting visualizer ready. Generate an array to begin.", "Visualizer reset. Generate a new array."),
])
def test_banners(ws, kind, ready, cleared):
    vis = ws.get(kind)
    assert lines(vis) == [ready]
    vis.note("something")
    vis.reset()
    assert lines(vis) == [cleared]


def test_unknown_kind(ws):
    with pytest.raises(InvalidInput):
        ws.get("heap")


# ---------------------------------------------------------------------------
# Stack & Queue
# ---------------------------------------------------------------------------
def test_stack_push_pop_peek(ws):
    ws.stack.push(5)
    ws.stack.push(7)
    assert lines(ws.stack)[0] == "[12:00:00] PUSH: Added 7 to stack. Size: 2"
    assert ws.stack.peek().value == 7
    assert lines(ws.stack)[0] == "[12:00:00] PEEK: Top element is 7"
    assert ws.stack.pop().value == 7
    assert lines(ws.stack)[0] == "[12:00:00] POP: Removed 7 from stack. Size: 1"
    assert [e.value for e in ws.stack.runner.state.items] == [5]


def test_stack_pop_empty_logs_error_and_raises(ws):
    with pytest.raises(InvalidInput):
        ws.stack.pop()
    assert lines(ws.stack)[0] == "[12:00:00] ERROR: Stack is empty. Cannot pop."
    assert ws.stack.runner.state.items == ()


def test_stack_peek_empty(ws):
    assert ws.stack.peek() is None
    assert lines(ws.stack)[0] == "[12:00:00] PEEK: Stack is empty."


def test_push_without_value_uses_random_value(ws):
    entry = ws.stack.push()
    assert 1 <= entry.value <= 99


def test_push_rejects_non_integer(ws):
    with pytest.raises(InvalidInput):
        ws.stack.push("abc")
    assert len(ws.stack.stack) == 0
    assert lines(ws.stack)[0].startswith("[12:00:00] ERROR: Value must be an integer")


def test_queue_operations(ws):
    ws.queue.enqueue(3)
    ws.queue.enqueue(4)
    assert lines(ws.queue)[0] == "[12:00:00] ENQUEUE: Added 4 to queue. Size: 2"
    assert ws.queue.peek().value == 3
    assert lines(ws.queue)[0] == "[12:00:00] PEEK: Front element is 3"
    assert ws.queue.dequeue().value == 3
    assert lines(ws.queue)[0] == "[12:00:00] DEQUEUE: Removed 3 from queue. Size: 1"


def test_queue_dequeue_empty(ws):
    with pytest.raises(InvalidInput):
        ws.queue.dequeue()
    assert lines(ws.queue)[0] == "[12:00:00] ERROR: Queue is empty. Cannot dequeue."
    ws.queue.peek()
    assert lines(ws.queue)[0] == "[12:00:00] PEEK: Queue is empty."


def test_stack_and_queue_ids_never_collide(ws):
    a = ws.stack.push(1)
    b = ws.queue.enqueue(1)
    assert a.id != b.id


def test_reset_empties_container(ws):
    ws.stack.push(1)
    ws.stack.reset()
    assert len(ws.stack.stack) == 0
    assert ws.stack.runner.state.items == ()


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------
def test_tree_insert_and_duplicate(ws):
    assert ws.tree.insert(50) is True
    assert lines(ws.tree)[0] == "[12:00:00] INSERT: Added 50 to tree"
    assert ws.tree.insert(50) is False
    assert len(ws.tree.tree) == 1


def test_tree_traverse(ws):
    for v in (50, 30, 70):
        ws.tree.insert(v)
    ws.tree.traverse("preorder", speed=10)
    assert ws.tree.runner.wait(10)
    log = lines(ws.tree)
    assert log[0] == "[12:00:00] Traversal complete"
    assert "[12:00:00] VISIT: Node 30" in log
    assert "[12:00:00] Starting PREORDER traversal..." in log


def test_tree_traverse_empty(ws):
    with pytest.raises(InvalidInput):
        ws.tree.traverse()
    assert lines(ws.tree)[0] == "[12:00:00] ERROR: Tree is empty"


def test_tree_insert_blocked_while_traversing(ws):
    ws.tree.insert(1)
    ws.tree.traverse(speed=2000)
    with pytest.raises(InvalidInput):
        ws.tree.insert(2)
    assert len(ws.tree.tree) == 1


def test_tree_traverse_waits_for_pending_edit(ws):
    ws.tree.insert(1)
    started = []
    with ws.tree._lock:
        t = threading.Thread(target=lambda: started.append(ws.tree.traverse(speed=10)), daemon=True)
        t.start()
        t.join(0.2)
        # an edit in progress holds the start back
        assert t.is_alive()
        assert ws.tree.runner.active is None
    t.join(2)
    assert started and started[0].run_id == 1


def test_sorting_load_rejects_malformed_values(ws):
    for bad in ([3, "x"], 5, [True]):
        with pytest.raises(InvalidInput):
            ws.sorting.load(bad)
    assert ws.sorting.values == []
    assert lines(ws.sorting)[0].startswith("[12:00:00] ERROR:")


def test_tree_snapshot_has_layout(ws):
    ws.tree.insert(50)
    ws.tree.insert(30)
    snap = ws.tree.snapshot()
    assert snap["kind"] == "tree"
    assert snap["layout"] == {"50": [400, 50], "30": [300, 130]}
    assert snap["tree"]["left"]["value"] == 30


def test_tree_reset_clears_tree(ws):
    ws.tree.insert(5)
    ws.tree.reset()
    assert ws.tree.tree.is_empty


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
def test_graph_bfs(ws):
    handle = ws.graph.bfs("A", speed=10)
    assert ws.graph.runner.wait(10)
    assert handle.status is RunStatus.COMPLETED
    assert ws.graph.runner.state.visited == ("A", "B", "D", "C", "E", "F")
    assert lines(ws.graph)[0] == "[12:00:00] BFS traversal complete"


def test_graph_bfs_unknown_start(ws):
    with pytest.raises(InvalidInput):
        ws.graph.bfs("Z")
    assert lines(ws.graph)[0] == "[12:00:00] ERROR: Start node 'Z' is not in the graph"


def test_graph_randomize_resets_and_logs(ws):
    ws.graph.bfs("A", speed=2000)
    ws.graph.randomize(seed=3)
    assert ws.graph.runner.status is RunStatus.IDLE
    assert lines(ws.graph) == [
        "[12:00:00] Graph layout randomized",
        "Graph reset. Ready for new traversal.",
    ]


def test_graph_load(ws):
    ws.graph.load({
        "nodes": [{"id": "X"}, {"id": "Y"}],
        "edges": [{"from": "X", "to": "Y"}],
    })
    assert ws.graph.graph.node_ids() == ["X", "Y"]
    ws.graph.bfs("X", speed=10)
    assert ws.graph.runner.wait(10)
    assert ws.graph.runner.state.visited == ("X", "Y")


def test_graph_load_malformed_keeps_old_graph(ws):
    with pytest.raises(InvalidInput):
        ws.graph.load({"nodes": [{"id": "X"}], "edges": [{"from": "X", "to": "Q"}]})
    assert ws.graph.graph.node_ids() == ["A", "B", "C", "D", "E", "F"]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
def test_sort_without_array(ws):
    with pytest.raises(InvalidInput):
        ws.sorting.sort()
    assert lines(ws.sorting)[0] == "[12:00:00] ERROR: Generate an array first"


def test_generate(ws):
    values = ws.sorting.generate(8)
    assert len(values) == 8
    assert ws.sorting.values == values
    assert lines(ws.sorting)[0] == "[12:00:00] Generated random array of size 8"


def test_generate_rejects_bad_size(ws):
    with pytest.raises(InvalidInput):
        ws.sorting.generate(4)
    assert ws.sorting.values == []


@pytest.mark.parametrize("algorithm", ["bubble", "quick"])
def test_sort_runs_to_sorted_bars(ws, algorithm):
    ws.sorting.load([9, 2, 7, 4])
    ws.sorting.sort(algorithm, speed=10)
    assert ws.sorting.runner.wait(10)
    assert ws.sorting.values == [2, 4, 7, 9]
    assert all(b.color is BarColor.SORTED for b in ws.sorting.runner.state.bars)


def test_sort_unknown_algorithm(ws):
    ws.sorting.load([2, 1])
    with pytest.raises(InvalidInput):
        ws.sorting.sort("bogo")


def test_generate_blocked_while_sorting(ws):
    ws.sorting.load([5, 4, 3, 2, 1])
    ws.sorting.sort("bubble", speed=2000)
    with pytest.raises(InvalidInput):
        ws.sorting.generate()


def test_cancelled_sort_keeps_partial_array(ws):
    ws.sorting.load([5, 4, 3, 2, 1])
    handle = ws.sorting.sort("bubble", speed=2000)
    ws.sorting.cancel()
    assert handle.join(2)
    assert sorted(ws.sorting.values) == [1, 2, 3, 4, 5]


def test_compare(ws):
    ws.sorting.load([9, 2, 7, 4])
    result = ws.sorting.compare()
    assert result["left"]["algo_key"] == "bubble"
    assert result["right"]["algo_key"] == "quick"
    assert result["winner_comparisons"] == "Quick Sort"
    assert lines(ws.sorting)[0].startswith("[12:00:00] Compared on 4 bars")
    assert ws.sorting.values == [9, 2, 7, 4]
