"""Unit tests for GraphValidator class.

Tests cover:
- Cycle detection with path reporting
- Validation report generation
- Edge cases and error conditions
"""

import pytest

from depgraph.graph.comparer import KeyComparer
from depgraph.graph.dependency_graph import DependencyGraph
from depgraph.graph.exceptions import MissingArgumentError
from depgraph.graph.validator import GraphValidator, ValidationReport, format_cycle


def _assert_is_cycle(graph: DependencyGraph, cycle: list) -> None:
    assert cycle[0] == cycle[-1]
    for dependent, dependency in zip(cycle, cycle[1:], strict=False):
        assert graph.is_directly_depends(dependent, dependency)


class TestValidationReport:
    """Test ValidationReport functionality."""

    def test_initialization(self):
        """Test that ValidationReport initializes correctly."""
        report = ValidationReport()

        assert report.is_valid is True
        assert report.errors == []
        assert report.warnings == []
        assert report.cycles == []

    def test_add_error(self):
        """Test adding errors marks validation as failed."""
        report = ValidationReport()
        report.add_error("Test error")

        assert not report.is_valid
        assert report.errors == ["Test error"]

    def test_add_warning(self):
        """Test adding warnings doesn't fail validation."""
        report = ValidationReport()
        report.add_warning("Test warning")

        assert report.is_valid
        assert report.warnings == ["Test warning"]

    def test_summary_empty_report(self):
        """Test summary generation for empty report."""
        summary = ValidationReport().summary()

        assert "Validation Status: PASS" in summary
        assert "Errors: 0" in summary
        assert "Cycles: 0" in summary

    def test_summary_with_cycles(self):
        """Test summary lists each cycle path."""
        report = ValidationReport()
        report.cycles.append(["a", "b", "a"])
        report.add_error("Cycle detected: a -> b -> a")

        summary = report.summary()

        assert "Validation Status: FAIL" in summary
        assert "Cycles Detected:" in summary
        assert "1. a -> b -> a" in summary

    def test_format_cycle_non_string_elements(self):
        """Test rendering cycles of arbitrary elements."""
        assert format_cycle([1, 2, 1]) == "1 -> 2 -> 1"


class TestGraphValidation:
    """Test validating graphs."""

    def test_acyclic_graph_valid(self):
        """Test that a chain passes validation."""
        graph = DependencyGraph()
        graph.add_dependency("a", "b")
        graph.add_dependency("b", "c")

        report = GraphValidator().validate(graph)

        assert report.is_valid
        assert report.cycles == []
        assert report.warnings == []

    def test_empty_graph_warning(self):
        """Test that an empty graph is valid but warned about."""
        report = GraphValidator().validate(DependencyGraph())

        assert report.is_valid
        assert len(report.warnings) == 1

    def test_non_cyclic_graph_valid(self):
        """Test that graphs forbidding cycles are always valid."""
        graph = DependencyGraph(allow_cyclic=False)
        graph.add_dependency("a", "b")
        graph.add_dependency("b", "a")

        assert GraphValidator().validate(graph).is_valid

    def test_three_element_cycle(self):
        """Test reporting a single cycle once."""
        graph = DependencyGraph()
        graph.add_dependency("a", "b")
        graph.add_dependency("b", "c")
        graph.add_dependency("c", "a")

        report = GraphValidator().validate(graph)

        assert not report.is_valid
        assert report.cycles == [["a", "b", "c", "a"]]
        assert report.errors == ["Cycle detected: a -> b -> c -> a"]

    def test_disjoint_cycles(self):
        """Test that separate cycles are each reported."""
        graph = DependencyGraph()
        graph.add_dependency("a", "b")
        graph.add_dependency("b", "a")
        graph.add_dependency("x", "y")
        graph.add_dependency("y", "z")
        graph.add_dependency("z", "x")
        graph.add_dependency("root", "a")

        report = GraphValidator().validate(graph)

        assert len(report.cycles) == 2
        for cycle in report.cycles:
            _assert_is_cycle(graph, cycle)
        covered = {element for cycle in report.cycles for element in cycle}
        assert covered == {"a", "b", "x", "y", "z"}


class TestFindCycle:
    """Test searching for a cycle through one element."""

    def test_element_not_on_cycle(self):
        """Test an element that only leads into a cycle."""
        graph = DependencyGraph()
        graph.add_dependency("root", "a")
        graph.add_dependency("a", "b")
        graph.add_dependency("b", "a")

        assert GraphValidator().find_cycle(graph, "root") is None

    def test_unknown_element(self):
        """Test an element the graph does not know."""
        assert GraphValidator().find_cycle(DependencyGraph(), "x") is None

    def test_cycle_through_start(self):
        """Test that the reported cycle passes through the start element."""
        graph = DependencyGraph()
        graph.add_dependency("a", "b")
        graph.add_dependency("b", "c")
        graph.add_dependency("c", "b")
        graph.add_dependency("c", "a")

        cycle = GraphValidator().find_cycle(graph, "a")

        assert cycle[0] == "a"
        _assert_is_cycle(graph, cycle)

    def test_uses_graph_comparer(self):
        """Test that the start element is matched with the graph comparer."""
        graph = DependencyGraph(comparer=KeyComparer(str.casefold))
        graph.add_dependency("A", "b")
        graph.add_dependency("B", "a")

        cycle = GraphValidator().find_cycle(graph, "a")

        assert [element.casefold() for element in cycle] == ["a", "b", "a"]

    def test_missing_start(self):
        """Test that start is required."""
        with pytest.raises(MissingArgumentError):
            GraphValidator().find_cycle(DependencyGraph(), None)
