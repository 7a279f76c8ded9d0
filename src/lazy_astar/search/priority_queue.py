"""Indexed binary min-heap of search nodes.

Each node records its own heap position in ``queue_index``; every sift keeps
it current so ``remove_at`` can evict an arbitrary entry in O(log n).
"""

from typing import List

from .node_table import NOT_QUEUED, Node


class IndexedPriorityQueue:
    """Min-heap ordered by ``Node.rank``. Ties come out in no particular order."""

    def __init__(self) -> None:
        self._heap: List[Node] = []

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, node: Node) -> None:
        node.queue_index = len(self._heap)
        self._heap.append(node)
        self._sift_up(node.queue_index)

    def peek(self) -> Node:
        if not self._heap:
            raise IndexError("peek from an empty priority queue")
        return self._heap[0]

    def pop_min(self) -> Node:
        """Remove and return the lowest-rank node."""
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        return self.remove_at(0)

    def remove_at(self, index: int) -> Node:
        """Remove and return the node at heap position ``index``."""
        heap = self._heap
        if not 0 <= index < len(heap):
            raise IndexError(f"heap index {index} out of range")

        last = len(heap) - 1
        if index != last:
            self._swap(index, last)
        node = heap.pop()
        node.queue_index = NOT_QUEUED

        if index < len(heap):
            # The moved element may belong above or below its new position
            if not self._sift_down(index):
                self._sift_up(index)
        return node

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].queue_index = i
        heap[j].queue_index = j

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if not heap[index].rank < heap[parent].rank:
                break
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int) -> bool:
        """Move the node at ``index`` down; return True if it moved."""
        heap = self._heap
        size = len(heap)
        start = index
        while True:
            smallest = index
            left = 2 * index + 1
            right = left + 1
            if left < size and heap[left].rank < heap[smallest].rank:
                smallest = left
            if right < size and heap[right].rank < heap[smallest].rank:
                smallest = right
            if smallest == index:
                break
            self._swap(index, smallest)
            index = smallest
        return index != start
