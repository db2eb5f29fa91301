"""Generic dependency graph with direct and transitive reachability queries.

This module provides the DependencyGraph class, which records "dependent
depends on dependency" edges over any hashable element type, answers direct
and transitive dependency queries, detects cycles, and can be configured to
reject edges that would close a cycle.
"""

from typing import TYPE_CHECKING, Any, Protocol, final, runtime_checkable

import structlog

from depgraph.graph.comparer import DEFAULT_COMPARER, ComparerKey, ElementComparer
from depgraph.graph.exceptions import (
    CycleDetectedError,
    MissingArgumentError,
    SelfDependencyError,
)
from depgraph.graph.readonly_set import ComparerSet, ReadOnlySet

if TYPE_CHECKING:
    from depgraph.config import GraphConfig

logger = structlog.get_logger(__name__)


@runtime_checkable
class DependencyGraphProtocol(Protocol):
    """Capabilities of a dependency graph.

    Code that needs specialized behavior (auditing, access control, ...)
    should wrap an object implementing this protocol rather than subclass
    DependencyGraph.
    """

    @property
    def is_empty(self) -> bool: ...

    @property
    def allow_cyclic(self) -> bool: ...

    def add_dependency(self, dependent: Any, dependency: Any) -> bool: ...

    def remove_dependency(self, dependent: Any, dependency: Any) -> bool: ...

    def is_directly_depends(self, dependent: Any, dependency: Any) -> bool: ...

    def is_depends(self, dependent: Any, dependency: Any) -> bool: ...

    def get_direct_dependencies(self, dependent: Any) -> ReadOnlySet: ...

    def get_all_dependencies(self, dependent: Any) -> ReadOnlySet: ...

    def has_cyclic(self) -> bool: ...

    def clear(self) -> None: ...


@final
class DependencyGraph:
    """Directed graph of dependencies between elements.

    The graph maps each dependent to the set of elements it directly depends
    on. A dependent with no remaining dependencies has no entry at all.

    Elements are compared with a single ElementComparer fixed at
    construction. When ``allow_cyclic`` is False no element can ever
    (transitively) depend on itself: edges that would close a cycle are
    rejected and ``add_dependency`` returns False. An element can never
    depend directly on itself in either mode.

    Thread-safety:
        This class is NOT thread-safe. If concurrent access is required,
        protect all method calls with external synchronization (e.g., a
        single threading.Lock per graph).

    Example:
        >>> graph = DependencyGraph(allow_cyclic=False)
        >>> graph.add_dependency("app", "lib")
        True
        >>> graph.add_dependency("lib", "core")
        True
        >>> graph.is_depends("app", "core")
        True
        >>> graph.add_dependency("core", "app")  # would close a cycle
        False
    """

    def __init__(
        self,
        allow_cyclic: bool = True,
        comparer: ElementComparer | None = None,
    ):
        """Initialize an empty dependency graph.

        Args:
            allow_cyclic: Whether elements may transitively depend on themselves
            comparer: Equality-and-hash strategy for elements. Defaults to the
                natural equality of the element type.

        Raises:
            TypeError: If comparer is not an ElementComparer
        """
        if comparer is None:
            comparer = DEFAULT_COMPARER
        elif not isinstance(comparer, ElementComparer):
            msg = f"comparer must be an ElementComparer, got {type(comparer).__name__}"
            raise TypeError(msg)

        self._allow_cyclic = bool(allow_cyclic)
        self._comparer = comparer
        self._graph: dict[ComparerKey, ComparerSet] = {}

        logger.debug(
            "dependency_graph_initialized",
            allow_cyclic=self._allow_cyclic,
            comparer=repr(comparer),
        )

    @classmethod
    def from_graph(cls, other: "DependencyGraph", allow_cyclic: bool = True) -> "DependencyGraph":
        """Create a graph containing a copy of another graph's dependencies.

        The new graph uses the same comparer as ``other``. Dependency sets are
        copied, so the two graphs share no mutable state.

        Args:
            other: Graph to copy from
            allow_cyclic: Cyclic mode of the new graph

        Returns:
            A new DependencyGraph

        Raises:
            MissingArgumentError: If other is None
            CycleDetectedError: If allow_cyclic is False and other has a cycle
        """
        if other is None:
            msg = "other must not be None"
            raise MissingArgumentError(msg, "other")
        if not isinstance(other, DependencyGraph):
            msg = f"other must be a DependencyGraph, got {type(other).__name__}"
            raise TypeError(msg)

        if not allow_cyclic and other.has_cyclic():
            logger.warning(
                "cyclic_source_graph_rejected",
                dependent_count=len(other._graph),
            )
            msg = "Other graph has cyclic dependencies that this graph does not allow"
            raise CycleDetectedError(msg, "other")

        graph = cls(allow_cyclic=allow_cyclic, comparer=other._comparer)
        for key, dependencies in other._graph.items():
            graph._graph[key] = dependencies.copy()

        logger.debug(
            "dependency_graph_copied",
            dependent_count=len(graph._graph),
            allow_cyclic=graph._allow_cyclic,
        )

        return graph

    @classmethod
    def from_config(
        cls,
        config: "GraphConfig",
        comparer: ElementComparer | None = None,
    ) -> "DependencyGraph":
        """Create an empty graph using the cyclic mode from a GraphConfig."""
        return cls(allow_cyclic=config.allow_cyclic, comparer=comparer)

    @property
    def allow_cyclic(self) -> bool:
        """Whether elements may transitively depend on themselves."""
        return self._allow_cyclic

    @property
    def comparer(self) -> ElementComparer:
        """The equality-and-hash strategy used for all elements."""
        return self._comparer

    @property
    def is_empty(self) -> bool:
        """True if the graph has no dependencies."""
        return not self._graph

    @property
    def dependents(self) -> ReadOnlySet:
        """Snapshot of the elements that currently have at least one dependency."""
        if not self._graph:
            return ReadOnlySet.empty()
        return ReadOnlySet(ComparerSet(self._comparer, (key.value for key in self._graph)))

    def add_dependency(self, dependent: Any, dependency: Any) -> bool:
        """Add an edge making ``dependent`` depend on ``dependency``.

        If the graph forbids cycles and ``dependency`` already depends on
        ``dependent``, the edge is not added.

        Args:
            dependent: The dependent element
            dependency: The element it depends on

        Returns:
            True if the edge was added, False if it already existed or would
            close a cycle

        Raises:
            MissingArgumentError: If either argument is None
            SelfDependencyError: If dependent is equal to dependency
        """
        self._require(dependent, "dependent")
        self._require(dependency, "dependency")
        if self._comparer.equals(dependent, dependency):
            msg = "dependent cannot depend on itself"
            raise SelfDependencyError(msg, "dependency")

        if not self._allow_cyclic and self._is_depends(dependency, dependent):
            logger.debug(
                "cyclic_dependency_rejected",
                dependent=dependent,
                dependency=dependency,
            )
            return False

        key = self._key(dependent)
        dependencies = self._graph.get(key)
        if dependencies is not None:
            return dependencies.add(dependency)

        self._graph[key] = ComparerSet(self._comparer, (dependency,))
        return True

    def remove_dependency(self, dependent: Any, dependency: Any) -> bool:
        """Remove the edge from ``dependent`` to ``dependency``.

        A dependent whose last dependency is removed is dropped from the graph.

        Returns:
            True if the edge was removed, False if it did not exist

        Raises:
            MissingArgumentError: If either argument is None
        """
        self._require(dependent, "dependent")
        self._require(dependency, "dependency")

        key = self._key(dependent)
        dependencies = self._graph.get(key)
        if dependencies is None or not dependencies.discard(dependency):
            return False

        if not dependencies:
            del self._graph[key]

        return True

    def is_directly_depends(self, dependent: Any, dependency: Any) -> bool:
        """Check whether the edge ``dependent -> dependency`` is stored.

        Raises:
            MissingArgumentError: If either argument is None
        """
        self._require(dependent, "dependent")
        self._require(dependency, "dependency")
        dependencies = self._dependencies_of(dependent)
        return dependencies is not None and dependency in dependencies

    def is_depends(self, dependent: Any, dependency: Any) -> bool:
        """Check whether ``dependent`` depends on ``dependency`` directly or transitively.

        ``is_depends(x, x)`` is True exactly when x lies on a cycle.

        Raises:
            MissingArgumentError: If either argument is None
        """
        self._require(dependent, "dependent")
        self._require(dependency, "dependency")
        return self._is_depends(dependent, dependency)

    def get_direct_dependencies(self, dependent: Any) -> ReadOnlySet:
        """Get the elements ``dependent`` directly depends on.

        The returned view borrows the stored set. It follows later changes
        only while ``dependent`` keeps at least one dependency: once its last
        dependency is removed, or the graph is cleared, the view stays empty
        and does not pick up dependencies added afterwards. Take a fresh view
        after such mutations.

        Raises:
            MissingArgumentError: If dependent is None
        """
        self._require(dependent, "dependent")
        dependencies = self._dependencies_of(dependent)
        if dependencies is None:
            return ReadOnlySet.empty()
        return ReadOnlySet(dependencies)

    def get_all_dependencies(self, dependent: Any) -> ReadOnlySet:
        """Get every element ``dependent`` depends on, directly or transitively.

        ``dependent`` itself is included only if it lies on a cycle. The
        result is a snapshot taken at call time.

        Raises:
            MissingArgumentError: If dependent is None
        """
        self._require(dependent, "dependent")

        direct = self._dependencies_of(dependent)
        if not direct:
            return ReadOnlySet.empty()

        result = direct.copy()
        expanded = ComparerSet(self._comparer, (dependent,))
        stack = list(direct)
        while stack:
            node = stack.pop()
            if not expanded.add(node):
                continue
            nested = self._dependencies_of(node)
            if nested:
                result.update(nested)
                stack.extend(nested)

        return ReadOnlySet(result)

    def has_cyclic(self) -> bool:
        """Check whether any element transitively depends on itself.

        Always False for graphs that forbid cycles. A cycle needs at least two
        dependents because direct self-dependencies are never stored.
        """
        if not self._allow_cyclic or len(self._graph) <= 1:
            return False
        return any(self._is_depends(key.value, key.value) for key in self._graph)

    def clear(self) -> None:
        """Remove all dependencies.

        Views returned by get_direct_dependencies before the call read empty
        afterwards.
        """
        for dependencies in self._graph.values():
            dependencies.clear()
        self._graph.clear()
        logger.debug("dependency_graph_cleared")

    def clone(self) -> "DependencyGraph":
        """Create a deep copy with the same cyclic mode and comparer.

        Example:
            >>> graph = DependencyGraph()
            >>> graph.add_dependency("a", "b")
            True
            >>> copy = graph.clone()
            >>> copy.remove_dependency("a", "b")
            True
            >>> graph.is_depends("a", "b")
            True
        """
        return DependencyGraph.from_graph(self, self._allow_cyclic)

    def __copy__(self) -> "DependencyGraph":
        return self.clone()

    def get_stats(self) -> dict[str, int]:
        """Get statistics about the current graph state.

        Returns:
            Dictionary with graph statistics including:
                - total_dependents: Number of elements with at least one dependency
                - total_dependencies: Number of stored edges
                - allow_cyclic: 1 if cycles are allowed, 0 otherwise
        """
        return {
            "total_dependents": len(self._graph),
            "total_dependencies": sum(len(deps) for deps in self._graph.values()),
            "allow_cyclic": int(self._allow_cyclic),
        }

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(allow_cyclic={self._allow_cyclic}, "
            f"dependents={len(self._graph)})"
        )

    def _key(self, element: Any) -> ComparerKey:
        return ComparerKey(element, self._comparer)

    def _dependencies_of(self, element: Any) -> ComparerSet | None:
        return self._graph.get(self._key(element))

    def _is_depends(self, dependent: Any, dependency: Any) -> bool:
        # Iterative DFS; the visited set keeps traversal finite on cyclic graphs.
        start = self._dependencies_of(dependent)
        if not start:
            return False

        visited = ComparerSet(self._comparer)
        stack = [start]
        while stack:
            dependencies = stack.pop()
            if dependency in dependencies:
                return True
            for node in dependencies:
                if not visited.add(node):
                    continue
                nested = self._dependencies_of(node)
                if nested:
                    stack.append(nested)

        return False

    @staticmethod
    def _require(value: Any, name: str) -> None:
        if value is None:
            msg = f"{name} must not be None"
            raise MissingArgumentError(msg, name)
