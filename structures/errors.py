"""
errors.py — Engine Exceptions
==============================
Nothing in the engine is fatal.  Bad input is rejected synchronously
before any state is touched; the visualizers turn it into an
"ERROR: …" line in the user log and the HTTP layer into a 400.
"""


class VisualizerError(Exception):
    """Base class for every error the engine raises on purpose."""


class InvalidInput(VisualizerError, ValueError):
    """
    Operation on an empty container, an out-of-range parameter, an unknown
    algorithm key, or a traversal start node that is not in the graph.
    """


class ConcurrentRunConflict(VisualizerError, RuntimeError):
    """Raised only when a runner is built with supersede=False."""
