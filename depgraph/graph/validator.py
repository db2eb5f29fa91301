"""Graph validation with cycle path reporting.

DependencyGraph.has_cyclic() only answers yes or no. This module finds the
concrete cycles behind that answer so they can be reported to a user.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from depgraph.graph.comparer import ComparerKey
from depgraph.graph.exceptions import MissingArgumentError
from depgraph.graph.readonly_set import ComparerSet

if TYPE_CHECKING:
    from depgraph.graph.dependency_graph import DependencyGraph

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Report containing validation results for a dependency graph.

    Attributes:
        is_valid: Whether the graph passed all validation checks
        errors: List of error messages (critical issues)
        warnings: List of warning messages (potential issues)
        cycles: Detected cycles, each a list of elements starting and ending
            with the same element
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cycles: list[list[Any]] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False
        logger.error("validation_error", message=message)

    def add_warning(self, message: str) -> None:
        """Add a warning message without failing validation."""
        self.warnings.append(message)
        logger.warning("validation_warning", message=message)

    def summary(self) -> str:
        """Generate a human-readable summary of the validation report."""
        lines = []
        lines.append(f"Validation Status: {'PASS' if self.is_valid else 'FAIL'}")
        lines.append(f"Errors: {len(self.errors)}")
        lines.append(f"Warnings: {len(self.warnings)}")
        lines.append(f"Cycles: {len(self.cycles)}")

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        if self.warnings:
            lines.append("\nWarnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)

        if self.cycles:
            lines.append("\nCycles Detected:")
            for i, cycle in enumerate(self.cycles, 1):
                lines.append(f"  {i}. {format_cycle(cycle)}")

        return "\n".join(lines)


def format_cycle(cycle: list[Any]) -> str:
    """Render a cycle path as ``a -> b -> a``."""
    return " -> ".join(str(element) for element in cycle)


class GraphValidator:
    """Validator for dependency graphs with cycle path reporting."""

    def validate(self, graph: "DependencyGraph") -> ValidationReport:
        """Validate a dependency graph and generate a detailed report.

        Every element lying on a cycle is covered by at least one reported
        cycle; an element already covered does not start a new search.

        Args:
            graph: The DependencyGraph to validate

        Returns:
            ValidationReport containing all validation results
        """
        stats = graph.get_stats()
        logger.info("starting_graph_validation", dependent_count=stats["total_dependents"])

        report = ValidationReport()

        if graph.is_empty:
            report.add_warning("Graph has no dependencies")

        # Graphs that forbid cycles cannot contain one
        if graph.has_cyclic():
            covered = ComparerSet(graph.comparer)
            for dependent in graph.dependents:
                if dependent in covered:
                    continue
                cycle = self.find_cycle(graph, dependent)
                if cycle is None:
                    continue
                covered.update(cycle)
                report.cycles.append(cycle)
                report.add_error(f"Cycle detected: {format_cycle(cycle)}")

        logger.info(
            "graph_validation_complete",
            is_valid=report.is_valid,
            error_count=len(report.errors),
            warning_count=len(report.warnings),
        )

        return report

    def find_cycle(self, graph: "DependencyGraph", start: Any) -> list[Any] | None:
        """Find a cycle passing through ``start``.

        Args:
            graph: The DependencyGraph to search
            start: Element the cycle must pass through

        Returns:
            The cycle as ``[start, ..., start]``, or None if start is not on a cycle

        Raises:
            MissingArgumentError: If start is None
        """
        if start is None:
            msg = "start must not be None"
            raise MissingArgumentError(msg, "start")

        comparer = graph.comparer
        parents: dict[ComparerKey, Any] = {}
        seen = ComparerSet(comparer, (start,))
        stack = [start]

        while stack:
            node = stack.pop()
            for dependency in graph.get_direct_dependencies(node):
                if comparer.equals(dependency, start):
                    return self._build_path(start, node, parents, comparer)
                if seen.add(dependency):
                    parents[ComparerKey(dependency, comparer)] = node
                    stack.append(dependency)

        return None

    @staticmethod
    def _build_path(start, last, parents, comparer) -> list[Any]:
        # Walk parent links from the node that closes the cycle back to start
        path = [start, last]
        node = last
        while not comparer.equals(node, start):
            node = parents[ComparerKey(node, comparer)]
            path.append(node)
        path.reverse()
        return path
