"""Per-search node bookkeeping for A*."""

import math
from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, List

from .pather import Pather

# Sentinels for Node.parent and Node.queue_index
NO_PARENT = -1
NOT_QUEUED = -1


@dataclass(eq=False)
class Node:
    """A* data wrapped around a single vertex."""
    pather: Pather
    slot: int  # position in the owning NodeTable
    cost: float = math.inf  # g(n) - best known cost from start
    rank: float = math.inf  # f(n) = g(n) + h(n)
    parent: int = NO_PARENT  # slot of the predecessor, not a reference
    open: bool = False
    closed: bool = False
    queue_index: int = NOT_QUEUED

    @property
    def queued(self) -> bool:
        return self.queue_index != NOT_QUEUED


class NodeTable:
    """Maps vertices to their Node records for the lifetime of one search.

    Nodes live in an append-only arena; the dict maps each distinct vertex to
    its arena slot. Parents are stored as slots so the back-reference chain
    never owns the nodes it points at.
    """

    def __init__(self) -> None:
        self._slots: Dict[Hashable, int] = {}
        self._nodes: List[Node] = []

    def get(self, pather: Pather) -> Node:
        """Get the node for ``pather``, creating a fresh one on first use."""
        slot = self._slots.get(pather)
        if slot is None:
            slot = len(self._nodes)
            self._slots[pather] = slot
            self._nodes.append(Node(pather=pather, slot=slot))
        return self._nodes[slot]

    def parent_of(self, node: Node):
        if node.parent == NO_PARENT:
            return None
        return self._nodes[node.parent]

    def set_parent(self, node: Node, parent: Node) -> None:
        node.parent = parent.slot

    def walk_to_root(self, node: Node) -> Iterator[Pather]:
        """Yield vertices from ``node`` back along parent links to the start."""
        current = node
        while current is not None:
            yield current.pather
            current = self.parent_of(current)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, pather: object) -> bool:
        return pather in self._slots
