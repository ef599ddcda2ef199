import random

import pytest

from algorithms import REGISTRY, check_inputs, get_algorithm, list_algorithms
from algorithms.step import Pause
from engine import InvalidInput, Recorder, compare
from structures import BarColor, BinarySearchTree, default_graph


def record(algo_key, **inputs):
    rec = Recorder()
    rec.start(algo_key, inputs)
    rec.run_to_completion()
    return rec


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_registry_keys():
    assert [a.key for a in list_algorithms()] == ["bfs", "traversal", "bubble", "quick"]
    assert get_algorithm("dijkstra") is None


def test_check_inputs_missing_and_unknown():
    info = REGISTRY["bfs"]
    with pytest.raises(InvalidInput, match="start"):
        check_inputs(info, {"graph": default_graph()})
    with pytest.raises(InvalidInput, match="mode"):
        check_inputs(info, {"graph": default_graph(), "start": "A", "mode": "x"})


def test_recorder_rejects_unknown_algorithm():
    with pytest.raises(InvalidInput, match="Unknown algorithm"):
        Recorder().start("nope", {})


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------
def test_bfs_visit_order_on_demo_graph():
    rec = record("bfs", graph=default_graph(), start="A")
    assert rec.metrics.visit_order == ["A", "B", "D", "C", "E", "F"]
    assert rec.metrics.visits == 6


def test_bfs_log_lines():
    rec = record("bfs", graph=default_graph(), start="A")
    assert rec.metrics.log_lines == [
        "BFS started from node A",
        "Visiting node A",
        "Enqueued node B",
        "Enqueued node D",
        "Visiting node B",
        "Enqueued node C",
        "Enqueued node E",
        "Visiting node D",
        "Visiting node C",
        "Enqueued node F",
        "Visiting node E",
        "Visiting node F",
        "BFS traversal complete",
    ]


def test_bfs_every_node_enqueued_once():
    rec = record("bfs", graph=default_graph(), start="A")
    enqueued = [line for line in rec.metrics.log_lines if line.startswith("Enqueued")]
    assert len(enqueued) == len(set(enqueued)) == 5


def test_bfs_pauses():
    steps = record("bfs", graph=default_graph(), start="A").steps
    visiting = [s for s in steps if s.log and s.log.startswith("Visiting")]
    assert all(s.pause is Pause.PRIMARY for s in visiting)
    # A enqueues B then D; only the last enqueue settles
    assert [s.pause for s in steps if s.log in ("Enqueued node B", "Enqueued node D")] == [None, Pause.SECONDARY]


def test_bfs_final_step_clears_current():
    final = record("bfs", graph=default_graph(), start="A").steps[-1]
    assert final.is_final
    assert final.current is None
    assert final.frontier == ()


def test_bfs_from_leaf_visits_only_itself():
    rec = record("bfs", graph=default_graph(), start="F")
    assert rec.metrics.visit_order == ["F"]


def test_bfs_unknown_start():
    with pytest.raises(InvalidInput, match="'Z'"):
        Recorder().start("bfs", {"graph": default_graph(), "start": "Z"})


# ---------------------------------------------------------------------------
# Tree traversal
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("mode, expected", [
    ("preorder",  [50, 30, 20, 40, 70, 60, 80]),
    ("inorder",   [20, 30, 40, 50, 60, 70, 80]),
    ("postorder", [20, 40, 30, 60, 80, 70, 50]),
])
def test_traversal_orders(sample_tree, mode, expected):
    rec = record("traversal", tree=sample_tree, mode=mode)
    assert rec.metrics.visit_order == expected
    assert rec.metrics.log_lines[0] == f"Starting {mode.upper()} traversal..."
    assert rec.metrics.log_lines[-1] == "Traversal complete"


def test_traversal_defaults_to_inorder(sample_tree):
    rec = record("traversal", tree=sample_tree)
    assert rec.metrics.log_lines[1] == "VISIT: Node 20"


def test_traversal_does_not_modify_tree(sample_tree):
    before = sample_tree.to_dict()
    record("traversal", tree=sample_tree, mode="postorder")
    assert sample_tree.to_dict() == before


def test_traversal_empty_tree():
    with pytest.raises(InvalidInput, match="Tree is empty"):
        Recorder().start("traversal", {"tree": BinarySearchTree()})


def test_traversal_bad_mode(sample_tree):
    with pytest.raises(InvalidInput, match="levelorder"):
        Recorder().start("traversal", {"tree": sample_tree, "mode": "levelorder"})


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
def test_bubble_sort_known_case():
    rec = record("bubble", values=[5, 3, 8, 1])
    assert rec.metrics.final_values == [1, 3, 5, 8]
    assert rec.metrics.logged_swaps == 4
    assert rec.metrics.comparisons == 6
    assert "Swapped 5 and 3" in rec.metrics.log_lines
    assert rec.metrics.log_lines[-1] == "Bubble Sort complete!"


def test_bubble_sort_does_not_touch_callers_list():
    values = [5, 3, 8, 1]
    record("bubble", values=values)
    assert values == [5, 3, 8, 1]


def test_bubble_sort_sorted_marks_persist():
    steps = record("bubble", values=[4, 3, 2, 1]).steps
    # after the first pass the last bar stays sorted through every later step
    first_pass_done = next(i for i, s in enumerate(steps) if s.pseudocode_line == 5)
    assert all(s.bars[3].color is BarColor.SORTED for s in steps[first_pass_done:])


def test_quicksort_known_case():
    rec = record("quick", values=[9, 2, 7, 4])
    assert rec.metrics.final_values == [2, 4, 7, 9]
    assert rec.metrics.logged_swaps == 2
    assert rec.metrics.swaps == 4
    assert rec.metrics.log_lines[0] == "Starting Quick Sort..."
    assert rec.metrics.log_lines[-1] == "Quick Sort complete!"


def test_bubble_sort_leaves_equal_neighbours_alone():
    rec = record("bubble", values=[2, 2, 1])
    assert rec.metrics.final_values == [1, 2, 2]
    # (2,2) never swaps; only the 1 moves, twice
    assert rec.metrics.logged_swaps == 2


@pytest.mark.parametrize("values, logged", [
    ([2, 2, 2], 0),
    ([3, 1, 3, 2, 3], 3),
])
def test_quicksort_moves_only_strictly_smaller_than_pivot(values, logged):
    rec = record("quick", values=values)
    assert rec.metrics.final_values == sorted(values)
    assert rec.metrics.logged_swaps == logged


def test_quicksort_pivot_bar_stays_marked_during_the_scan():
    steps = record("quick", values=[9, 2, 7, 4]).steps
    placed = next(i for i, s in enumerate(steps) if s.pseudocode_line == 10)
    scan = steps[1:placed]
    assert scan
    assert all(s.bars[3].color is BarColor.PIVOT for s in scan)
    assert steps[placed].bars[3].color is not BarColor.PIVOT


def test_quicksort_marks_everything_sorted_at_the_end():
    final = record("quick", values=[3, 1, 2]).steps[-1]
    assert all(b.color is BarColor.SORTED for b in final.bars)


@pytest.mark.parametrize("algo_key", ["bubble", "quick"])
@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_sorts_produce_sorted_permutation(algo_key, seed):
    values = [random.Random(seed).randint(1, 20) for _ in range(12)]
    rec = record(algo_key, values=values)
    assert rec.metrics.final_values == sorted(values)


@pytest.mark.parametrize("algo_key", ["bubble", "quick"])
def test_single_element_array(algo_key):
    rec = record(algo_key, values=[7])
    assert rec.metrics.final_values == [7]
    assert rec.metrics.logged_swaps == 0


@pytest.mark.parametrize("algo_key", ["bubble", "quick"])
def test_empty_array_rejected(algo_key):
    with pytest.raises(InvalidInput, match="Generate an array first"):
        Recorder().start(algo_key, {"values": []})


def test_step_numbers_are_consecutive():
    steps = record("quick", values=[5, 1, 4, 2, 3]).steps
    assert [s.step_number for s in steps] == list(range(len(steps)))
    assert [s.is_final for s in steps].count(True) == 1


# ---------------------------------------------------------------------------
# Recorder export / compare
# ---------------------------------------------------------------------------
def test_export_is_plain_data():
    data = record("bubble", values=[2, 1]).export()
    assert data["algo_key"] == "bubble"
    assert data["steps"][0]["log"] == "Starting Bubble Sort..."
    assert data["steps"][1]["pause"] == "primary"
    assert data["steps"][-1]["bars"][0] == {"value": 1, "color": "sorted"}


def test_compare_bubble_and_quick():
    values = [9, 2, 7, 4]
    result = compare(record("bubble", values=values), record("quick", values=values))
    assert result.left.comparisons == 6
    assert result.right.comparisons == 4
    assert result.winner_comparisons == "Quick Sort"


def test_run_to_completion_requires_start():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()
