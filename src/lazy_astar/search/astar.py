"""Incremental A* search over lazily expanded graphs.

A ``Search`` is bound to one start and one goal vertex. Each call to
``step()`` expands a single node, so callers can drain the search at once or
spread the work across ticks of their own loop. Neighbors, edge costs and
heuristic estimates are requested from the vertices themselves through the
``Pather`` protocol.

Paths are reported goal first: the result lists the goal, then each parent in
turn, ending with the start vertex. ``SearchResult.path_from_start()`` gives
the conventional order.

Optimality requires non-negative edge costs and an admissible, consistent
heuristic. Neither is checked; violating them yields a possibly suboptimal
path rather than an error.
"""

import time
import logging
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar
from dataclasses import dataclass

from lazy_astar.search.pather import Context, Pather
from lazy_astar.search.node_table import Node, NodeTable
from lazy_astar.search.priority_queue import IndexedPriorityQueue

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=Pather)


@dataclass
class SearchResult(Generic[P]):
    """Outcome of a search.

    Unpacks as ``path, distance, found``.
    """
    path: Tuple[P, ...] = ()  # goal-to-start order, frozen once found
    distance: float = 0.0
    found: bool = False
    done: bool = False

    def __iter__(self) -> Iterator[Any]:
        return iter((self.path, self.distance, self.found))

    def path_from_start(self) -> List[P]:
        """Return the path in start-to-goal order."""
        return list(reversed(self.path))


@dataclass
class SearchStatistics:
    """Counters collected while a search runs."""
    steps: int = 0
    nodes_expanded: int = 0
    nodes_generated: int = 0
    nodes_reopened: int = 0
    queue_removals: int = 0
    max_queue_size: int = 0
    computation_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'steps': self.steps,
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'nodes_reopened': self.nodes_reopened,
            'queue_removals': self.queue_removals,
            'max_queue_size': self.max_queue_size,
            'computation_time': self.computation_time
        }


class Search(Generic[P]):
    """Stepwise A* search from ``start`` to ``goal``.

    Single use: create it, step it until done, read the result, drop it.
    """

    def __init__(self, start: P, goal: P, context: Context = None,
                 collect_statistics: bool = True):
        """Initialize the search with only the start node open.

        Args:
            start: Vertex the path begins at
            goal: Vertex the path should reach
            context: Optional data passed to every Pather call
            collect_statistics: Track SearchStatistics while stepping
        """
        self._table = NodeTable()
        self._queue = IndexedPriorityQueue()
        self._buf: List[P] = []
        self._goal = goal
        self._ctx = context
        self._result: SearchResult[P] = SearchResult()
        self._collect_statistics = collect_statistics
        self.statistics = SearchStatistics()

        start_node = self._table.get(start)
        start_node.cost = 0.0
        start_node.open = True
        self._queue.push(start_node)

        if collect_statistics:
            self.statistics.nodes_generated = len(self._table)
            self.statistics.max_queue_size = 1

        logger.debug(f"Search created: {start!r} -> {goal!r}")

    @property
    def context(self) -> Context:
        """The context passed to every Pather call."""
        return self._ctx

    @property
    def done(self) -> bool:
        return self._result.done

    def step(self) -> bool:
        """Advance the search by expanding one node.

        Returns:
            True once the search is finished, found or not
        """
        if self._result.done:
            return True
        if not self._queue:
            self._result.done = True
            logger.debug(f"Search exhausted without reaching {self._goal!r}")
            return True

        if not self._collect_statistics:
            return self._expand()

        start_time = time.perf_counter()
        try:
            return self._expand()
        finally:
            self.statistics.steps += 1
            self.statistics.computation_time += time.perf_counter() - start_time

    def _expand(self) -> bool:
        current = self._queue.pop_min()
        current.open = False
        current.closed = True

        # Equal vertices share one table entry, so equality is entry identity
        if current.pather == self._goal:
            self._finish(current)
            return True

        stats = self.statistics if self._collect_statistics else None
        if stats is not None:
            stats.nodes_expanded += 1

        ctx = self._ctx
        table = self._table
        queue = self._queue
        buf = self._buf
        buf.clear()

        for neighbor in current.pather.path_neighbors(ctx, buf):
            cost = current.cost + current.pather.path_neighbor_cost(ctx, neighbor)
            neighbor_node = table.get(neighbor)

            if cost < neighbor_node.cost:
                if neighbor_node.open:
                    queue.remove_at(neighbor_node.queue_index)
                    if stats is not None:
                        stats.queue_removals += 1
                elif neighbor_node.closed and stats is not None:
                    stats.nodes_reopened += 1
                neighbor_node.open = False
                neighbor_node.closed = False

            if not neighbor_node.open and not neighbor_node.closed:
                neighbor_node.cost = cost
                neighbor_node.open = True
                neighbor_node.rank = cost + neighbor.path_estimated_cost(ctx, self._goal)
                table.set_parent(neighbor_node, current)
                queue.push(neighbor_node)

        if stats is not None:
            stats.nodes_generated = len(table)
            stats.max_queue_size = max(stats.max_queue_size, len(queue))

        return False

    def _finish(self, goal_node: Node) -> None:
        self._result.path = tuple(self._table.walk_to_root(goal_node))
        self._result.distance = goal_node.cost
        self._result.found = True
        self._result.done = True
        logger.debug(f"Path found: {len(self._result.path)} vertices, "
                     f"distance {goal_node.cost}")

    def run(self, max_steps: Optional[int] = None) -> bool:
        """Step until done or until ``max_steps`` steps have been taken.

        Args:
            max_steps: Step budget for this call, None for no limit

        Returns:
            True if the search is finished
        """
        if max_steps is None:
            while not self.step():
                pass
            return True

        for _ in range(max_steps):
            if self.step():
                return True
        return self._result.done

    def result(self) -> SearchResult[P]:
        """Finish the search if needed and return the memoized result."""
        self.run()
        return self._result


def create_search(start: P, goal: P, context: Context = None,
                  collect_statistics: bool = True) -> Search[P]:
    """Factory function to create a search.

    Args:
        start: Start vertex
        goal: Goal vertex
        context: Optional data passed to every Pather call
        collect_statistics: Track SearchStatistics while stepping

    Returns:
        Search with only the start node open
    """
    return Search(start, goal, context=context, collect_statistics=collect_statistics)


def path_with_context(context: Context, start: P, goal: P) -> SearchResult[P]:
    """Find a short path from ``start`` to ``goal`` using ``context``.

    If no path exists the result has ``found`` set to False.
    """
    return Search(start, goal, context=context).result()


def find_path(start: P, goal: P, context: Context = None) -> SearchResult[P]:
    """Find a short path from ``start`` to ``goal``."""
    return path_with_context(context, start, goal)
