"""Configuration validation for lazy-astar."""

import logging
from typing import Any, Dict, List, Optional
from omegaconf import DictConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def terrain_costs(grid_config) -> Dict[str, Optional[float]]:
    """Turn the ``grid.terrain`` entry list into a symbol -> cost table.

    Raises:
        ConfigValidationError: If an entry is malformed or repeats a symbol
    """
    table: Dict[str, Optional[float]] = {}
    if not grid_config:
        return table

    for entry in grid_config.get('terrain', None) or []:
        try:
            symbol = entry['symbol']
            cost: Any = entry.get('cost', None)
        except (KeyError, TypeError, AttributeError):
            raise ConfigValidationError(f"Invalid grid.terrain entry: {entry}")
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ConfigValidationError(
                f"grid.terrain symbols must be single characters, got {symbol!r}"
            )
        if symbol in table:
            raise ConfigValidationError(f"grid.terrain repeats symbol {symbol!r}")
        table[symbol] = cost
    return table


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    validate_search_config(config.get('search', {}))
    validate_grid_config(config.get('grid', {}))
    validate_render_config(config.get('render', {}))
    validate_logging_config(config.get('logging', {}))
    logger.debug("Configuration validation passed")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section."""
    if not search_config:
        return

    max_steps = search_config.get('max_steps', None)
    if max_steps is not None and (not isinstance(max_steps, int) or isinstance(max_steps, bool)
                                  or max_steps <= 0):
        raise ConfigValidationError(
            f"search.max_steps must be positive integer or null, got {max_steps}"
        )

    collect = search_config.get('collect_statistics', True)
    if not isinstance(collect, bool):
        raise ConfigValidationError(
            f"search.collect_statistics must be boolean, got {collect}"
        )


def validate_grid_config(grid_config: DictConfig) -> None:
    """Validate grid map configuration section."""
    if not grid_config:
        return

    symbols = []
    for key in ('from_symbol', 'to_symbol'):
        symbol = grid_config.get(key, None)
        if symbol is None:
            continue
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ConfigValidationError(
                f"grid.{key} must be a single character, got {symbol!r}"
            )
        symbols.append(symbol)

    for symbol, cost in terrain_costs(grid_config).items():
        if symbol in symbols:
            raise ConfigValidationError(
                f"grid.terrain must not redefine marker symbol {symbol!r}"
            )
        if cost is None:
            continue
        if not isinstance(cost, (int, float)) or isinstance(cost, bool) or cost < 0:
            raise ConfigValidationError(
                f"grid.terrain cost for {symbol!r} must be non-negative number or null, got {cost}"
            )


def validate_render_config(render_config: DictConfig) -> None:
    """Validate render configuration section."""
    if not render_config:
        return

    for key in ('path_marker', 'empty_marker'):
        marker = render_config.get(key, None)
        if marker is not None and (not isinstance(marker, str) or len(marker) != 1):
            raise ConfigValidationError(
                f"render.{key} must be a single character, got {marker!r}"
            )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section."""
    if not logging_config:
        return

    level = logging_config.get('level', 'WARNING')
    if str(level).upper() not in LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level}"
        )


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check for settings that are valid alone but odd together.

    Returns:
        List of consistency issues
    """
    issues = []

    grid_config = config.get('grid', {}) or {}
    try:
        costs = terrain_costs(grid_config)
    except ConfigValidationError as e:
        return [str(e)]
    passable = [c for c in costs.values() if c is not None]
    if costs and not passable:
        issues.append("grid.terrain marks every symbol impassable")
    if any(c == 0 for c in passable):
        issues.append("grid.terrain contains zero-cost tiles; the heuristic degrades to zero")

    render_config = config.get('render', {}) or {}
    marker = render_config.get('path_marker', None)
    if marker is not None and marker in costs:
        issues.append(f"render.path_marker {marker!r} is also a map symbol")

    return issues
