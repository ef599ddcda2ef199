"""
bubble_sort.py — Bubble Sort
=============================
Adjacent-pair passes.  Per inner iteration: highlight the pair and
pause; on a strict `>` swap them, recolour, log and pause again; then
drop the highlight.  Each finished pass fixes one bar at the back.
"""

from typing import Generator, List, Sequence

from structures.array import BarColor, check_values
from structures.errors import InvalidInput
from algorithms.step import Pause, Step, StepBuilder


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                        # 0
    "    for i in 0 .. n-2:",                       # 1
    "        for j in 0 .. n-i-2:",                 # 2
    "            if arr[j] > arr[j+1]:",            # 3
    "                swap(arr[j], arr[j+1])",       # 4
    "        arr[n-i-1] is in place",               # 5
    "    arr[0] is in place",                       # 6
]


def bubble_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    arr = check_values(values)
    if not arr:
        raise InvalidInput("Generate an array first")
    return _bubble_sort(arr)


def _bubble_sort(arr: List[int]) -> Generator[Step, None, None]:
    sb = StepBuilder(values=arr)
    n  = len(arr)
    yield sb.build(log="Starting Bubble Sort...")

    for i in range(n - 1):
        for j in range(n - i - 1):
            sb.compare(j, j + 1)
            sb.pseudocode_line = 3
            yield sb.build(pause=Pause.PRIMARY)

            if arr[j] > arr[j + 1]:
                sb.swap(j, j + 1)
                sb.mark(BarColor.SWAPPING, j, j + 1)
                sb.pseudocode_line = 4
                yield sb.build(log=f"Swapped {arr[j + 1]} and {arr[j]}", pause=Pause.PRIMARY)

            sb.clear_marks(j, j + 1)
            yield sb.build()

        sb.mark_sorted(n - i - 1)
        sb.pseudocode_line = 5
        yield sb.build()

    sb.mark_sorted(0)
    sb.pseudocode_line = 6
    yield sb.build(log="Bubble Sort complete!", is_final=True)
