"""Unit tests for ComparerSet and ReadOnlySet."""

import pytest

from depgraph.graph.comparer import KeyComparer
from depgraph.graph.readonly_set import ComparerSet, ReadOnlySet


class TestComparerSet:
    """Test the comparer-aware mutable set."""

    def test_add_reports_change(self):
        """Test that add returns whether the element was new."""
        items = ComparerSet()

        assert items.add("a") is True
        assert items.add("a") is False
        assert len(items) == 1

    def test_discard_reports_change(self):
        """Test that discard returns whether the element was removed."""
        items = ComparerSet(iterable=["a"])

        assert items.discard("a") is True
        assert items.discard("a") is False
        assert not items

    def test_remove_missing_raises(self):
        """Test the MutableSet remove() contract."""
        with pytest.raises(KeyError):
            ComparerSet().remove("a")

    def test_custom_comparer(self):
        """Test membership through a key comparer."""
        items = ComparerSet(KeyComparer(str.casefold), ["Alpha", "ALPHA", "beta"])

        assert len(items) == 2
        assert "alpha" in items
        assert list(items) == ["Alpha", "beta"]

    def test_copy_is_independent(self):
        """Test that a copy shares no storage."""
        items = ComparerSet(iterable=["a"])
        clone = items.copy()

        clone.add("b")

        assert "b" not in items
        assert clone.comparer is items.comparer


class TestReadOnlySet:
    """Test the read-only view."""

    def test_basic_queries(self):
        """Test membership, length, emptiness and iteration."""
        view = ReadOnlySet(ComparerSet(iterable=["a", "b"]))

        assert "a" in view
        assert "c" not in view
        assert len(view) == 2
        assert not view.is_empty
        assert sorted(view) == ["a", "b"]

    def test_view_is_live(self):
        """Test that the view borrows its source."""
        source = ComparerSet(iterable=["a"])
        view = ReadOnlySet(source)

        source.add("b")

        assert view == {"a", "b"}

    def test_no_mutation_methods(self):
        """Test that there is no way to modify the source through the view."""
        view = ReadOnlySet(ComparerSet(iterable=["a"]))

        for name in ("add", "discard", "remove", "clear", "update", "pop"):
            assert not hasattr(view, name)

    def test_empty_singleton(self):
        """Test the shared empty view."""
        empty = ReadOnlySet.empty()

        assert empty is ReadOnlySet.empty()
        assert empty.is_empty
        assert len(empty) == 0
        assert "a" not in empty
        assert list(empty) == []

    def test_set_operators_keep_comparer(self):
        """Test that algebra results are detached views with the same comparer."""
        source = ComparerSet(KeyComparer(str.casefold), ["a", "b"])
        view = ReadOnlySet(source)

        union = view | {"C"}
        source.add("d")

        assert isinstance(union, ReadOnlySet)
        assert union == {"a", "b", "c"}
        assert "D" not in union
        assert view & {"B", "z"} == {"b"}
        assert view - {"A", "D"} == {"b"}
        assert view <= {"A", "B", "C", "D"}

    def test_comparisons_use_source_comparer(self):
        """Test equality and subset checks under a case-folding comparer."""
        view = ReadOnlySet(ComparerSet(KeyComparer(str.casefold), ["b"]))

        assert view == {"B"}
        assert {"B"} == view
        assert view != {"c"}
        assert view < {"B", "c"}
        assert not view.isdisjoint(["B"])

    def test_membership_uses_source_comparer(self):
        """Test that the view honours a custom comparer."""
        view = ReadOnlySet(ComparerSet(KeyComparer(str.casefold), ["Lib"]))

        assert "LIB" in view

    def test_unhashable(self):
        """Test that views are unhashable like mutable sets."""
        with pytest.raises(TypeError):
            hash(ReadOnlySet.empty())
