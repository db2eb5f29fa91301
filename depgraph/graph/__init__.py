"""Graph module for dependency tracking and cycle detection.

This module provides a generic dependency graph with direct and transitive
queries, the read-only set views it returns, element comparers, and a
validator reporting concrete cycle paths.
"""

from depgraph.graph.comparer import DEFAULT_COMPARER, DefaultComparer, ElementComparer, KeyComparer
from depgraph.graph.dependency_graph import DependencyGraph, DependencyGraphProtocol
from depgraph.graph.exceptions import (
    CycleDetectedError,
    DependencyGraphError,
    InvalidArgumentError,
    MissingArgumentError,
    SelfDependencyError,
)
from depgraph.graph.readonly_set import ComparerSet, ReadOnlySet
from depgraph.graph.validator import GraphValidator, ValidationReport

__all__ = [
    "DEFAULT_COMPARER",
    "ComparerSet",
    "CycleDetectedError",
    "DefaultComparer",
    "DependencyGraph",
    "DependencyGraphError",
    "DependencyGraphProtocol",
    "ElementComparer",
    "GraphValidator",
    "InvalidArgumentError",
    "KeyComparer",
    "MissingArgumentError",
    "ReadOnlySet",
    "SelfDependencyError",
    "ValidationReport",
]
