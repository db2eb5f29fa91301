"""Equality-and-hash strategies for dependency graph elements.

A DependencyGraph compares its elements through a single ElementComparer.
Every internal set and the dependent mapping route ``__eq__`` and
``__hash__`` through that comparer, so a custom relation (for example
case-insensitive names) is honoured everywhere, never just in some places.

Example:
    >>> comparer = KeyComparer(str.casefold)
    >>> comparer.equals("Build", "build")
    True
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable
from typing import Any


class ElementComparer(ABC):
    """Strategy defining when two graph elements are the same element.

    Implementations must be consistent: ``equals(a, b)`` implies
    ``hash(a) == hash(b)``.
    """

    @abstractmethod
    def equals(self, left: Any, right: Any) -> bool:
        """Return True if both elements are equivalent."""

    @abstractmethod
    def hash(self, element: Any) -> int:
        """Return the hash of an element, consistent with equals()."""


class DefaultComparer(ElementComparer):
    """Natural ``==`` and ``hash()`` of the element type."""

    def equals(self, left: Any, right: Any) -> bool:
        return left == right

    def hash(self, element: Any) -> int:
        return hash(element)

    def __repr__(self) -> str:
        return "DefaultComparer()"


class KeyComparer(ElementComparer):
    """Compare elements by a derived key.

    Two elements are equal when ``key(a) == key(b)``.

    Args:
        key: Callable mapping an element to a hashable key
    """

    def __init__(self, key: Callable[[Any], Hashable]):
        if not callable(key):
            msg = f"key must be callable, got {type(key).__name__}"
            raise TypeError(msg)
        self.key = key

    def equals(self, left: Any, right: Any) -> bool:
        return self.key(left) == self.key(right)

    def hash(self, element: Any) -> int:
        return hash(self.key(element))

    def __repr__(self) -> str:
        name = getattr(self.key, "__qualname__", repr(self.key))
        return f"KeyComparer({name})"


DEFAULT_COMPARER = DefaultComparer()


class ComparerKey:
    """Hashable wrapper routing equality and hashing through a comparer.

    The wrapped value is the representative kept in storage; lookups build a
    throwaway key for the probe element.
    """

    __slots__ = ("_hash", "comparer", "value")

    def __init__(self, value: Any, comparer: ElementComparer):
        self.value = value
        self.comparer = comparer
        self._hash = comparer.hash(value)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparerKey):
            return NotImplemented
        return self.comparer.equals(self.value, other.value)

    def __repr__(self) -> str:
        return f"ComparerKey({self.value!r})"
