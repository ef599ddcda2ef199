"""
quicksort.py — Quicksort (Lomuto partition)
============================================
Pivot is the last element of the range.  The scan pointer `j` is
highlighted one bar at a time; every element strictly smaller than the
pivot is swapped into the growing left partition.  Finally the pivot is
swapped into place and marked sorted, then both halves recurse.

The recursion maps straight onto nested generators: `_partition`
returns the pivot index through `yield from`.
"""

from typing import Generator, List, Sequence

from structures.array import BarColor, check_values
from structures.errors import InvalidInput
from algorithms.step import Pause, Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def quicksort(arr, low, high):",           # 0
    "    if low < high:",                       # 1
    "        pi ← partition(arr, low, high)",   # 2
    "        quicksort(arr, low, pi - 1)",      # 3
    "        quicksort(arr, pi + 1, high)",     # 4
    "def partition(arr, low, high):",           # 5
    "    pivot ← arr[high]; i ← low - 1",       # 6
    "    for j in low .. high-1:",              # 7
    "        if arr[j] < pivot:",               # 8
    "            i ← i + 1; swap(arr[i], arr[j])",  # 9
    "    swap(arr[i+1], arr[high])",            # 10
    "    return i + 1",                         # 11
]


def quicksort(values: Sequence[int]) -> Generator[Step, None, None]:
    arr = check_values(values)
    if not arr:
        raise InvalidInput("Generate an array first")
    return _quicksort(arr)


def _quicksort(arr: List[int]) -> Generator[Step, None, None]:
    sb = StepBuilder(values=arr)
    yield sb.build(log="Starting Quick Sort...")

    yield from _sort_range(sb, 0, len(arr) - 1)

    sb.clear_marks()
    sb.mark_sorted(*range(len(arr)))
    sb.pseudocode_line = 0
    yield sb.build(log="Quick Sort complete!", is_final=True)


def _sort_range(sb: StepBuilder, low: int, high: int) -> Generator[Step, None, None]:
    if low < high:
        sb.pseudocode_line = 2
        pi = yield from _partition(sb, low, high)
        yield from _sort_range(sb, low, pi - 1)
        yield from _sort_range(sb, pi + 1, high)
    elif low == high:
        sb.mark_sorted(low)
        sb.pseudocode_line = 1
        yield sb.build()


def _partition(sb: StepBuilder, low: int, high: int) -> Generator[Step, None, int]:
    arr   = sb.values
    pivot = arr[high]

    sb.mark(BarColor.PIVOT, high)
    sb.pseudocode_line = 6
    yield sb.build(pause=Pause.PRIMARY)

    i = low - 1
    for j in range(low, high):
        sb.compare(j)
        sb.pseudocode_line = 8
        yield sb.build(pause=Pause.PRIMARY)

        if arr[j] < pivot:
            i += 1
            sb.swap(i, j)
            sb.mark(BarColor.SWAPPING, i, j)
            sb.pseudocode_line = 9
            yield sb.build(log=f"Swapped {arr[j]} and {arr[i]}", pause=Pause.PRIMARY)
            sb.clear_marks(i, j)
        else:
            sb.clear_marks(j)
        yield sb.build()

    sb.swap(i + 1, high)
    sb.clear_marks()
    sb.mark_sorted(i + 1)
    sb.pseudocode_line = 10
    yield sb.build(pause=Pause.PRIMARY)
    return i + 1
