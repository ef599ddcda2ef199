"""
engine/
-------
Playback, recording & page layer.

    from engine import AlgorithmRunner, Recorder, compare, Workspace
"""

from structures.errors  import ConcurrentRunConflict, InvalidInput, VisualizerError
from engine.clock        import CancelToken, StepClock, WaitOutcome
from engine.log_sink     import LogSink
from engine.visual_state import VisualState
from engine.runner       import AlgorithmRunner, RunHandle, RunStatus, StepEvent, resolve_speed
from engine.recorder     import Recorder, RunMetrics, ComparisonResult, compare
from engine.visualizer   import (
    GraphVisualizer,
    QueueVisualizer,
    SortingVisualizer,
    StackVisualizer,
    TreeVisualizer,
    Visualizer,
    Workspace,
)

__all__ = [
    "VisualizerError",
    "InvalidInput",
    "ConcurrentRunConflict",
    "CancelToken",
    "StepClock",
    "WaitOutcome",
    "LogSink",
    "VisualState",
    "AlgorithmRunner",
    "RunHandle",
    "RunStatus",
    "StepEvent",
    "resolve_speed",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "Visualizer",
    "StackVisualizer",
    "QueueVisualizer",
    "TreeVisualizer",
    "GraphVisualizer",
    "SortingVisualizer",
    "Workspace",
]
