"""Bounded, thread-safe LRU cache with O(1) promote and evict."""

from __future__ import annotations

import threading
from typing import Awaitable, Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _Node(Generic[K, V]):
    __slots__ = ("key", "value", "prev", "next", "linked")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value
        self.prev: _Node[K, V] | None = None
        self.next: _Node[K, V] | None = None
        self.linked = False


class LruCache(Generic[K, V]):
    """
    Least-recently-used cache.

    The lookup dict and the recency list always hold the same node objects,
    so a dict hit can be unlinked and relinked at the head in constant time.
    Lookups go straight to the dict; every change to the list (and the dict
    changes that must agree with it) happens under a single lock, and that
    lock is never held while a value factory runs.

    Shrinking `capacity` does not evict by itself. The excess is evicted,
    oldest first, by the next call that inserts or promotes an entry.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = self._check_capacity(capacity)
        self._nodes: dict[K, _Node[K, V]] = {}
        self._lock = threading.Lock()

        # Sentinels: _head.next is the most recently used node, _tail.prev the least.
        self._head: _Node = _Node(None, None)
        self._tail: _Node = _Node(None, None)
        self._head.next = self._tail
        self._tail.prev = self._head

    @staticmethod
    def _check_capacity(capacity: int) -> int:
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        return capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        self._capacity = self._check_capacity(value)

    @property
    def count(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    # -- list primitives (caller holds self._lock) -------------------------

    def _link_front(self, node: _Node[K, V]) -> None:
        first = self._head.next
        node.prev = self._head
        node.next = first
        first.prev = node
        self._head.next = node
        node.linked = True

    def _unlink(self, node: _Node[K, V]) -> None:
        if not node.linked:
            return
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = None
        node.linked = False

    def _promote(self, node: _Node[K, V]) -> None:
        if self._head.next is node:
            return
        self._unlink(node)
        self._link_front(node)

    def _evict_excess(self) -> None:
        while len(self._nodes) > self._capacity:
            last = self._tail.prev
            if last is self._head:
                break
            self._unlink(last)
            self._nodes.pop(last.key, None)

    def _insert(self, key: K, value: V) -> _Node[K, V]:
        """Insert unless another caller got there first; return the canonical node."""
        with self._lock:
            node = self._nodes.get(key)
            if node is None:
                node = _Node(key, value)
                self._nodes[key] = node
                self._link_front(node)
            else:
                self._promote(node)
            self._evict_excess()
            return node

    def _touch(self, key: K) -> _Node[K, V] | None:
        node = self._nodes.get(key)
        if node is None:
            return None
        with self._lock:
            # The node may have been invalidated or evicted since the lookup.
            if self._nodes.get(key) is node:
                self._promote(node)
                self._evict_excess()
        return node

    # -- public API --------------------------------------------------------

    def get_or_add(self, key: K, factory: Callable[[K], V]) -> V:
        """
        Return the cached value for `key`, calling `factory(key)` to create
        it on a miss.

        Concurrent misses on the same key may each run the factory; the first
        value inserted wins and every caller gets that value.
        """
        node = self._touch(key)
        if node is not None:
            return node.value
        value = factory(key)
        return self._insert(key, value).value

    async def get_or_add_async(self, key: K, factory: Callable[[K], Awaitable[V]]) -> V:
        """Same as `get_or_add`, but `factory` is awaited outside the list lock."""
        node = self._touch(key)
        if node is not None:
            return node.value
        value = await factory(key)
        return self._insert(key, value).value

    def try_get(self, key: K) -> tuple[V | None, bool]:
        """Return `(value, True)` and promote on a hit, `(None, False)` on a miss."""
        node = self._nodes.get(key)
        if node is None:
            return None, False
        with self._lock:
            if self._nodes.get(key) is node:
                self._promote(node)
        return node.value, True

    def add_or_update(self, key: K, value: V) -> None:
        node = _Node(key, value)
        with self._lock:
            old = self._nodes.get(key)
            if old is not None:
                self._unlink(old)
            self._nodes[key] = node
            self._link_front(node)
            self._evict_excess()

    def refresh(self, key: K) -> None:
        """Promote `key` without reading it; no-op when absent."""
        node = self._nodes.get(key)
        if node is None:
            return
        with self._lock:
            if self._nodes.get(key) is node:
                self._promote(node)

    def invalidate(self, key: K) -> None:
        with self._lock:
            node = self._nodes.pop(key, None)
            if node is not None:
                self._unlink(node)

    def clear(self) -> None:
        with self._lock:
            node = self._head.next
            while node is not self._tail:
                nxt = node.next
                node.prev = node.next = None
                node.linked = False
                node = nxt
            self._head.next = self._tail
            self._tail.prev = self._head
            self._nodes.clear()

    def keys(self) -> list[K]:
        """Snapshot of keys from most to least recently used (no promotion)."""
        with self._lock:
            out: list[K] = []
            node = self._head.next
            while node is not self._tail:
                out.append(node.key)
                node = node.next
            return out

    def __contains__(self, key: object) -> bool:
        return key in self._nodes
