"""Loading example graphs from files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from omegaconf import OmegaConf

from .goreland import Goreland
from .grid import FROM_SYMBOL, TO_SYMBOL, GridWorld

logger = logging.getLogger(__name__)


class GraphFormatError(ValueError):
    """Exception raised when a graph or map file is malformed."""
    pass


def _read_document(file_path: Path) -> Dict[str, Any]:
    """Read a JSON or YAML document into plain containers."""
    suffix = file_path.suffix.lower()
    try:
        if suffix == '.json':
            with open(file_path, 'r') as f:
                data = json.load(f)
        elif suffix in ('.yaml', '.yml'):
            data = OmegaConf.to_container(OmegaConf.load(file_path), resolve=True)
        else:
            raise GraphFormatError(f"Unsupported graph file type: {file_path.suffix}")
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"Invalid JSON in {file_path}: {e}")

    if not isinstance(data, dict):
        raise GraphFormatError(f"Graph document must be a mapping: {file_path}")
    return data


def goreland_from_dict(data: Mapping[str, Any]) -> Goreland:
    """Build a Goreland world from ``{trucks: [...], tubes: [...]}``.

    Raises:
        GraphFormatError: If an entry is missing fields or names an unknown truck
    """
    world = Goreland()
    try:
        for entry in data.get('trucks', []):
            world.add_truck(int(entry['x']), int(entry['y']), str(entry['label']))

        for entry in data.get('tubes', []):
            a = world.truck(str(entry['from']))
            b = world.truck(str(entry['to']))
            cost = float(entry['cost'])
            if cost < 0:
                raise GraphFormatError(f"Tube {a.label}->{b.label} has negative cost {cost}")
            if entry.get('bidirectional', False):
                world.add_pipe(a, b, cost)
            else:
                world.add_tube(a, b, cost)
    except GraphFormatError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise GraphFormatError(f"Invalid graph entry: {e}")

    logger.info(f"Loaded Goreland with {len(world.trucks)} trucks and {world.tube_count()} tubes")
    return world


def load_goreland(file_path: Union[str, Path]) -> Goreland:
    """Load a Goreland world from a JSON or YAML file.

    Args:
        file_path: Path to graph file

    Returns:
        Loaded Goreland world

    Raises:
        FileNotFoundError: If file doesn't exist
        GraphFormatError: If file format is invalid
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Graph file not found: {file_path}")
    return goreland_from_dict(_read_document(file_path))


def load_grid(file_path: Union[str, Path],
              costs: Optional[Mapping[str, Optional[float]]] = None,
              from_symbol: str = FROM_SYMBOL,
              to_symbol: str = TO_SYMBOL) -> GridWorld:
    """Load a character map file into a GridWorld.

    Blank lines are ignored.

    Raises:
        FileNotFoundError: If file doesn't exist
        GraphFormatError: If the map is malformed
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Map file not found: {file_path}")

    with open(file_path, 'r') as f:
        rows = [line.rstrip('\r\n') for line in f if line.strip()]

    try:
        world = GridWorld.from_rows(rows, costs=costs,
                                    from_symbol=from_symbol, to_symbol=to_symbol)
    except ValueError as e:
        raise GraphFormatError(f"Invalid map in {file_path}: {e}")

    height, width = world.shape
    logger.info(f"Loaded {width}x{height} map from {file_path}")
    return world
