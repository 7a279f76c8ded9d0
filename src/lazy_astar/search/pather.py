"""Graph adapter contract for the A* engine.

The engine never sees a graph. It only talks to vertices: each vertex lists
its neighbors with the cost of stepping to them and estimates its distance to
any other vertex. Any hashable object implementing the three methods below
can be searched.
"""

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable


# Optional caller data forwarded to every adapter call within one search.
Context = Optional[Any]


@runtime_checkable
class Pather(Protocol):
    """A vertex in a lazily expanded weighted graph.

    Node identity is decided by ``__eq__`` and ``__hash__``: two vertices that
    compare equal are the same node as far as a search is concerned. Plain
    objects therefore behave as distinct nodes, frozen dataclasses collapse
    by content.
    """

    def path_neighbors(self, ctx: Context, buf: List["Pather"]) -> Sequence["Pather"]:
        """Return the vertices directly reachable from this one.

        Args:
            ctx: Search context, possibly None
            buf: Empty scratch list owned by the caller. Implementations may
                append into it and return it to avoid allocating.

        Returns:
            Neighbor sequence, valid only until the next call
        """
        ...

    def path_neighbor_cost(self, ctx: Context, to: "Pather") -> float:
        """Exact, non-negative cost of the edge from this vertex to ``to``."""
        ...

    def path_estimated_cost(self, ctx: Context, to: "Pather") -> float:
        """Heuristic estimate of the remaining cost from this vertex to ``to``.

        Must never overestimate for the returned paths to be optimal.
        """
        ...
