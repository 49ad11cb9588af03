"""An ordered map whose values are created by the map itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Hashable, Iterator, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(eq=False)
class _Node:
    key: Any
    value: Any
    prev: Optional["_Node"] = field(default=None, repr=False)
    next: Optional["_Node"] = field(default=None, repr=False)


class PoolMap(Generic[K, V]):
    """Keyed, ordered collection that builds each value with ``factory``.

    Values are owned by the map: ``append`` creates a value for a new key and
    hands it back; an existing key returns the value already stored.
    """

    def __init__(self, factory: Callable[[], V] = dict, capacity: int = 500) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.factory = factory
        self.capacity = capacity or 1
        self._nodes: dict = {}
        self._head: Optional[_Node] = None
        self._tail: Optional[_Node] = None

    def append(self, key: K) -> V:
        """Add ``key`` at the end and return its value."""
        return self.insert(key)

    def insert(self, key: K, before: Optional[K] = None) -> V:
        """Add ``key`` in front of ``before`` (or at the end) and return its value."""
        existing = self._nodes.get(key)
        if existing is not None:
            return existing.value
        position = None
        if before is not None:
            if before not in self._nodes:
                raise KeyError(before)
            position = self._nodes[before]
        node = _Node(key, self.factory())
        if position is None:
            node.prev = self._tail
            if self._tail is not None:
                self._tail.next = node
            else:
                self._head = node
            self._tail = node
        else:
            node.prev = position.prev
            node.next = position
            if position.prev is not None:
                position.prev.next = node
            else:
                self._head = node
            position.prev = node
        self._nodes[key] = node
        return node.value

    def find(self, key: K) -> Optional[V]:
        """Return the value stored under ``key``, or None."""
        node = self._nodes.get(key)
        return None if node is None else node.value

    def remove(self, key: K) -> None:
        """Remove ``key`` if present."""
        node = self._nodes.get(key)
        if node is not None:
            self._unlink(node)

    def remove_value(self, value: V) -> None:
        """Remove the entry that holds this very value object."""
        for node in self._iter_nodes():
            if node.value is value:
                self._unlink(node)
                return
        raise ValueError("value is not held by this map")

    def remove_front(self) -> tuple[K, V]:
        """Remove the first entry and return it as ``(key, value)``."""
        if self._head is None:
            raise IndexError("remove from empty PoolMap")
        node = self._head
        self._unlink(node)
        return node.key, node.value

    def remove_back(self) -> tuple[K, V]:
        """Remove the last entry and return it as ``(key, value)``."""
        if self._tail is None:
            raise IndexError("remove from empty PoolMap")
        node = self._tail
        self._unlink(node)
        return node.key, node.value

    def front(self) -> V:
        """Return the value of the first entry."""
        if self._head is None:
            raise IndexError("PoolMap is empty")
        return self._head.value

    def back(self) -> V:
        """Return the value of the last entry."""
        if self._tail is None:
            raise IndexError("PoolMap is empty")
        return self._tail.value

    def clear(self) -> None:
        """Remove every entry."""
        self._nodes.clear()
        self._head = self._tail = None

    def swap(self, other: "PoolMap[K, V]") -> None:
        """Exchange the whole contents of two maps."""
        self.factory, other.factory = other.factory, self.factory
        self.capacity, other.capacity = other.capacity, self.capacity
        self._nodes, other._nodes = other._nodes, self._nodes
        self._head, other._head = other._head, self._head
        self._tail, other._tail = other._tail, self._tail

    def items(self) -> Iterator[tuple[K, V]]:
        """Yield ``(key, value)`` pairs in order."""
        for node in self._iter_nodes():
            yield node.key, node.value

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> Iterator[K]:
        for node in self._iter_nodes():
            yield node.key

    def _iter_nodes(self) -> Iterator[_Node]:
        node = self._head
        while node is not None:
            following = node.next
            yield node
            node = following

    def _unlink(self, node: _Node) -> None:
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._head = node.next
        if node.next is not None:
            node.next.prev = node.prev
        else:
            self._tail = node.prev
        node.prev = node.next = None
        del self._nodes[node.key]