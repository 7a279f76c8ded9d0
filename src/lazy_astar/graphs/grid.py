"""Character-map grid world.

The map is held as a numpy array of entry costs and handed to the search as
its context. Tiles are bare coordinates, so equal coordinates are the same
node and a tile only means something together with the world it is asked
about.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass
import numpy as np

logger = logging.getLogger(__name__)

# Symbol -> cost of entering the tile; None marks an impassable tile
DEFAULT_COSTS: Dict[str, Optional[float]] = {
    '.': 1.0,  # plain
    '~': 2.0,  # river
    'M': 3.0,  # mountain
    'X': None,  # blocker
}
FROM_SYMBOL = 'F'
TO_SYMBOL = 'T'

# 4-connected moves as (dx, dy)
OFFSETS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True)
class Tile:
    """Grid coordinate; column ``x`` and row ``y``."""
    x: int
    y: int

    def path_neighbors(self, ctx: Optional['GridWorld'], buf: list) -> Sequence['Tile']:
        if ctx is None:
            return buf
        for dx, dy in OFFSETS:
            x, y = self.x + dx, self.y + dy
            if ctx.passable(x, y):
                buf.append(Tile(x, y))
        return buf

    def path_neighbor_cost(self, ctx: Optional['GridWorld'], to: 'Tile') -> float:
        if ctx is None:
            return 1.0
        return ctx.cost_at(to.x, to.y)

    def path_estimated_cost(self, ctx: Optional['GridWorld'], to: 'Tile') -> float:
        distance = abs(to.x - self.x) + abs(to.y - self.y)
        if ctx is None:
            return 0.0
        return distance * ctx.min_cost


class GridWorld:
    """Rectangular map of entry costs; ``inf`` cells cannot be entered."""

    def __init__(self, costs: np.ndarray,
                 start: Optional[Tile] = None,
                 goal: Optional[Tile] = None,
                 rows: Optional[List[str]] = None):
        if costs.ndim != 2:
            raise ValueError(f"Cost grid must be 2-dimensional, got shape {costs.shape}")
        if np.any(costs < 0):
            raise ValueError("Tile costs must be non-negative")
        self.costs = costs.astype(np.float64)
        self.start = start
        self.goal = goal
        self.rows = rows

        finite = self.costs[np.isfinite(self.costs)]
        self.min_cost = float(finite.min()) if finite.size else 0.0

    @classmethod
    def from_rows(cls, rows: Sequence[str],
                  costs: Optional[Mapping[str, Optional[float]]] = None,
                  from_symbol: str = FROM_SYMBOL,
                  to_symbol: str = TO_SYMBOL) -> 'GridWorld':
        """Parse a character map.

        Args:
            rows: Map lines, all the same width
            costs: Symbol cost table, defaults to DEFAULT_COSTS
            from_symbol: Marks the start tile (entered at cost 1)
            to_symbol: Marks the goal tile (entered at cost 1)

        Returns:
            GridWorld with start and goal set when the markers are present

        Raises:
            ValueError: If rows are ragged or contain unknown symbols
        """
        table = dict(DEFAULT_COSTS if costs is None else costs)
        rows = [row.rstrip('\n') for row in rows]
        if not rows:
            raise ValueError("Map has no rows")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Map rows must all have the same width")

        grid = np.empty((len(rows), width), dtype=np.float64)
        start = goal = None
        for y, row in enumerate(rows):
            for x, symbol in enumerate(row):
                if symbol == from_symbol:
                    start = Tile(x, y)
                    grid[y, x] = 1.0
                elif symbol == to_symbol:
                    goal = Tile(x, y)
                    grid[y, x] = 1.0
                elif symbol in table:
                    cost = table[symbol]
                    grid[y, x] = np.inf if cost is None else float(cost)
                else:
                    raise ValueError(f"Unknown map symbol {symbol!r} at ({x}, {y})")

        logger.debug(f"Parsed {width}x{len(rows)} map")
        return cls(grid, start=start, goal=goal, rows=rows)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.costs.shape

    def in_bounds(self, x: int, y: int) -> bool:
        height, width = self.costs.shape
        return 0 <= x < width and 0 <= y < height

    def passable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and bool(np.isfinite(self.costs[y, x]))

    def cost_at(self, x: int, y: int) -> float:
        return float(self.costs[y, x])

    def render_path(self, path: Sequence[Tile], path_marker: str = '*') -> str:
        """Draw ``path`` onto the map, keeping the start and goal markers."""
        if self.rows is not None:
            canvas = np.array([list(row) for row in self.rows], dtype='<U1')
        else:
            canvas = np.where(np.isfinite(self.costs), '.', 'X').astype('<U1')

        for tile in path:
            if tile != self.start and tile != self.goal:
                canvas[tile.y, tile.x] = path_marker
        return '\n'.join(''.join(row) for row in canvas)
