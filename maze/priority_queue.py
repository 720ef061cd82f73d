"""
Min-priority queue with membership testing, used by Dijkstra and A*
"""

import heapq
import itertools


class PriorityQueue:
    """
    Binary heap keyed by a numeric priority.

    Equal priorities pop in insertion order. Pushing an item that is
    already queued replaces its priority; the stale heap entry is
    skipped when it surfaces.
    """
    _REMOVED = object()

    def __init__(self):
        self._heap = []
        self._entries = {}
        self._counter = itertools.count()

    def push(self, item, priority):
        """
        Add an item, or update its priority if already queued

        Args:
            item: Hashable element
            priority: Numeric key, lower pops first
        """
        old = self._entries.pop(item, None)
        if old is not None:
            old[-1] = self._REMOVED
        entry = [priority, next(self._counter), item]
        self._entries[item] = entry
        heapq.heappush(self._heap, entry)

    def pop(self):
        """
        Remove and return the lowest-priority item

        Raises:
            IndexError: queue is empty
        """
        while self._heap:
            priority, _, item = heapq.heappop(self._heap)
            if item is not self._REMOVED:
                del self._entries[item]
                return item
        raise IndexError("pop from an empty priority queue")

    def peek_priority(self):
        """Priority of the next item, or None when empty"""
        while self._heap and self._heap[0][-1] is self._REMOVED:
            heapq.heappop(self._heap)
        return self._heap[0][0] if self._heap else None

    def is_empty(self):
        return not self._entries

    def __contains__(self, item):
        return item in self._entries

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)
