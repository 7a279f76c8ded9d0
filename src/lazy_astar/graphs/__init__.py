"""Example graphs for exercising the A* engine.

Goreland is a hand-built tube network between trucks; the grid world is a
character map searched with the map itself as the search context.
"""

from .goreland import Goreland, Truck, Tube
from .grid import GridWorld, Tile, DEFAULT_COSTS
from .io import GraphFormatError, goreland_from_dict, load_goreland, load_grid

__all__ = [
    'Goreland',
    'Truck',
    'Tube',
    'GridWorld',
    'Tile',
    'DEFAULT_COSTS',
    'GraphFormatError',
    'goreland_from_dict',
    'load_goreland',
    'load_grid'
]
