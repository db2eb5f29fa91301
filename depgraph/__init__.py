"""Generic directed dependency graph."""

from depgraph.graph import (
    CycleDetectedError,
    DependencyGraph,
    DependencyGraphError,
    GraphValidator,
    InvalidArgumentError,
    KeyComparer,
    MissingArgumentError,
    ReadOnlySet,
    SelfDependencyError,
)

__version__ = "0.1.0"

__all__ = [
    "CycleDetectedError",
    "DependencyGraph",
    "DependencyGraphError",
    "GraphValidator",
    "InvalidArgumentError",
    "KeyComparer",
    "MissingArgumentError",
    "ReadOnlySet",
    "SelfDependencyError",
]
