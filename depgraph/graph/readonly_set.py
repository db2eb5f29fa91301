"""Comparer-aware sets and the read-only view returned from graph queries.

The graph owns ComparerSet instances and hands out ReadOnlySet views over
them. A view borrows its source, it does not copy it, so a view reflects
later mutations of that source. The graph drops a dependent's set once its
last dependency is removed and empties every set on clear(), after which
older views read empty and stay detached from anything added later.
Mutating the graph while iterating a view is undefined, exactly like
mutating a built-in set during iteration.
"""

from collections.abc import Iterable, Iterator, MutableSet, Set
from typing import Any

from depgraph.graph.comparer import DEFAULT_COMPARER, ComparerKey, ElementComparer


class ComparerSet(MutableSet):
    """Mutable set whose membership is decided by an ElementComparer.

    The first element inserted for an equivalence class is kept as its
    representative and is what iteration yields.

    Args:
        comparer: Equality-and-hash strategy for the elements
        iterable: Optional initial elements
    """

    __slots__ = ("_items", "comparer")

    def __init__(
        self,
        comparer: ElementComparer = DEFAULT_COMPARER,
        iterable: Iterable[Any] = (),
    ):
        self.comparer = comparer
        self._items: dict[ComparerKey, Any] = {}
        for element in iterable:
            self.add(element)

    def _from_iterable(self, it: Iterable[Any]) -> "ComparerSet":
        return ComparerSet(self.comparer, it)

    def _key(self, element: Any) -> ComparerKey:
        return ComparerKey(element, self.comparer)

    def __contains__(self, element: object) -> bool:
        return self._key(element) in self._items

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def add(self, element: Any) -> bool:
        """Add an element.

        Returns:
            True if the element was not present before, False otherwise
        """
        key = self._key(element)
        if key in self._items:
            return False
        self._items[key] = element
        return True

    def discard(self, element: Any) -> bool:
        """Remove an element if present.

        Returns:
            True if the element was removed, False if it was not present
        """
        return self._items.pop(self._key(element), _MISSING) is not _MISSING

    def update(self, elements: Iterable[Any]) -> None:
        for element in elements:
            self.add(element)

    def copy(self) -> "ComparerSet":
        """Return a shallow copy sharing the comparer but not the storage."""
        clone = ComparerSet(self.comparer)
        clone._items = dict(self._items)
        return clone

    def clear(self) -> None:
        self._items.clear()

    def __repr__(self) -> str:
        return f"ComparerSet({list(self)!r})"


_MISSING = object()


class ReadOnlySet(Set):
    """Immutable set-like projection over a ComparerSet.

    Supports ``in``, ``len()``, iteration, the ``is_empty`` check and the
    comparison and algebra operators of ``collections.abc.Set``. There is no
    mutation surface.

    Comparisons and operators go through the source's comparer: the other
    operand is read as a set under that comparer, and operators return a new
    ReadOnlySet over a detached ComparerSet with the same comparer.

    Example:
        >>> owned = ComparerSet(KeyComparer(str.casefold), ["a", "b"])
        >>> view = ReadOnlySet(owned)
        >>> "A" in view, view == {"A", "B"}
        (True, True)
    """

    __slots__ = ("_source",)

    def __init__(self, source: ComparerSet):
        self._source = source

    @classmethod
    def empty(cls) -> "ReadOnlySet":
        """Return the shared empty view."""
        return _EMPTY

    def _from_iterable(self, it: Iterable[Any]) -> "ReadOnlySet":
        return ReadOnlySet(ComparerSet(self._source.comparer, it))

    def _coerce(self, other: Set) -> Set:
        """Read ``other`` as a set under this view's comparer."""
        comparer = self._source.comparer
        if isinstance(other, ReadOnlySet):
            other = other._source
        if isinstance(other, ComparerSet) and other.comparer is comparer:
            return other
        return ComparerSet(comparer, other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return Set.__le__(self, self._coerce(other))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return Set.__lt__(self, self._coerce(other))

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return Set.__ge__(self, self._coerce(other))

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return Set.__gt__(self, self._coerce(other))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return Set.__eq__(self, self._coerce(other))

    __hash__ = None

    @property
    def is_empty(self) -> bool:
        return len(self._source) == 0

    def __contains__(self, element: object) -> bool:
        if not self._source:
            return False
        return element in self._source

    def __iter__(self) -> Iterator[Any]:
        return iter(self._source)

    def __len__(self) -> int:
        return len(self._source)

    def __repr__(self) -> str:
        return f"ReadOnlySet({list(self._source)!r})"


_EMPTY = ReadOnlySet(ComparerSet())
