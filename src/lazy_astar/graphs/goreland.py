"""Goreland: a world of trucks connected by tubes.

Trucks sit at integer coordinates and are joined by directed tubes, each with
its own cost. A truck is a Pather, so the A* engine can route material
through the tube network without ever seeing the network as a whole.
"""

import math
import logging
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field
import numpy as np

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Tube:
    """Directed connection between two trucks."""
    from_truck: 'Truck'
    to_truck: 'Truck'
    cost: float


@dataclass(eq=False)
class Truck:
    """A vertex in Goreland. Trucks are distinct by identity, not position."""
    x: int
    y: int
    label: str
    out_to: List[Tube] = field(default_factory=list)

    def path_neighbors(self, ctx, buf: list) -> Sequence['Truck']:
        for tube in self.out_to:
            buf.append(tube.to_truck)
        return buf

    def path_neighbor_cost(self, ctx, to: 'Truck') -> float:
        # Parallel tubes are allowed; material takes the cheapest one
        costs = [tube.cost for tube in self.out_to if tube.to_truck is to]
        return min(costs) if costs else math.inf

    def path_estimated_cost(self, ctx, to: 'Truck') -> float:
        return math.hypot(to.x - self.x, to.y - self.y)

    def __repr__(self) -> str:
        return f"Truck({self.label!r}, {self.x}, {self.y})"


class Goreland:
    """Collection of trucks and the tubes between them."""

    def __init__(self) -> None:
        self.trucks: Dict[str, Truck] = {}

    def add_truck(self, x: int, y: int, label: str) -> Truck:
        if label in self.trucks:
            raise ValueError(f"Duplicate truck label: {label}")
        truck = Truck(x=x, y=y, label=label)
        self.trucks[label] = truck
        return truck

    def add_tube(self, from_truck: Truck, to_truck: Truck, cost: float) -> Tube:
        """Connect ``from_truck`` to ``to_truck`` in one direction."""
        tube = Tube(from_truck=from_truck, to_truck=to_truck, cost=float(cost))
        from_truck.out_to.append(tube)
        return tube

    def add_pipe(self, a: Truck, b: Truck, cost: float) -> List[Tube]:
        """Connect two trucks in both directions at the same cost."""
        return [self.add_tube(a, b, cost), self.add_tube(b, a, cost)]

    def truck(self, label: str) -> Truck:
        try:
            return self.trucks[label]
        except KeyError:
            raise KeyError(f"Unknown truck: {label}") from None

    def tube_count(self) -> int:
        return sum(len(t.out_to) for t in self.trucks.values())

    def render_path(self, path: Sequence[Truck], empty_marker: str = '.') -> str:
        """Render trucks on a character grid and list the hops along ``path``.

        ``path`` is taken in the order the search reports it, goal first.
        Trucks on the path show the first letter of their label, other trucks
        show ``o`` and empty cells show ``empty_marker``.
        """
        if not self.trucks:
            return ""

        xs = [t.x for t in self.trucks.values()]
        ys = [t.y for t in self.trucks.values()]
        min_x, min_y = min(xs), min(ys)
        width = max(xs) - min_x + 1
        height = max(ys) - min_y + 1

        canvas = np.full((height, width), empty_marker, dtype='<U1')
        on_path = {id(t) for t in path}
        for truck in self.trucks.values():
            marker = truck.label[:1] if id(truck) in on_path else 'o'
            # Row 0 is printed last so y grows upwards
            canvas[height - 1 - (truck.y - min_y), truck.x - min_x] = marker

        lines = [''.join(row) for row in canvas]

        hops = list(reversed(path))
        total = 0.0
        for prev, nxt in zip(hops, hops[1:]):
            cost = prev.path_neighbor_cost(None, nxt)
            total += cost
            lines.append(f"{prev.label} -> {nxt.label}: {cost:g} (total {total:g})")
        return '\n'.join(lines)
