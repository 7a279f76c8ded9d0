"""CLI command implementations."""

import json
import logging
from typing import Any, Dict, Optional

from omegaconf import DictConfig, OmegaConf

from lazy_astar.config import (
    get_config, load_config, validate_config, check_config_consistency, terrain_costs,
    ConfigValidationError
)
from lazy_astar.graphs import GraphFormatError, load_goreland, load_grid
from lazy_astar.search.astar import Search, create_search

from .utils import format_duration, save_results, summarize_result

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_BUDGET_EXHAUSTED = 2


def _current_config() -> DictConfig:
    config = get_config()
    if config is None:
        config = load_config()
    return config


def _max_steps(args, config: DictConfig) -> Optional[int]:
    if getattr(args, 'max_steps', None) is not None:
        return args.max_steps
    return OmegaConf.select(config, 'search.max_steps', default=None)


def _drive(search: Search, max_steps: Optional[int]) -> bool:
    """Run ``search`` within the step budget; return True if it finished."""
    done = search.run(max_steps)
    if not done:
        logger.warning(f"Step budget of {max_steps} exhausted before the search finished")
    return done


def _emit(summary: Dict[str, Any], rendering: str, args) -> None:
    if args.output:
        save_results(summary, args.output)
        logger.info(f"Results saved to {args.output}")
    else:
        print(json.dumps(summary, indent=2))

    if not args.quiet:
        if rendering:
            print()
            print(rendering)
        stats = summary['statistics']
        print(f"\nFound: {summary['found']}")
        if summary['found']:
            print(f"Distance: {summary['distance']:g}")
        print(f"Nodes expanded: {stats['nodes_expanded']}")
        print(f"Search time: {format_duration(stats['computation_time'])}")


def path_command(args) -> int:
    """Handle path command: search a Goreland tube network.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        config = _current_config()
        logger.info(f"Loading graph from {args.graph_file}")
        world = load_goreland(args.graph_file)
        start = world.truck(args.start)
        goal = world.truck(args.goal)
    except (FileNotFoundError, GraphFormatError, KeyError) as e:
        logger.error(f"Path command failed: {e}")
        return EXIT_NOT_FOUND

    search = create_search(
        start, goal,
        collect_statistics=bool(OmegaConf.select(config, 'search.collect_statistics', default=True))
    )
    if not _drive(search, _max_steps(args, config)):
        return EXIT_BUDGET_EXHAUSTED

    result = search.result()
    summary = summarize_result(result, search, [t.label for t in result.path])
    summary['graph_file'] = str(args.graph_file)

    rendering = ""
    if result.found:
        rendering = world.render_path(
            result.path,
            empty_marker=OmegaConf.select(config, 'render.empty_marker', default='.')
        )
    _emit(summary, rendering, args)

    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


def grid_command(args) -> int:
    """Handle grid command: search a character map between its markers.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        config = _current_config()
        grid_cfg = config.get('grid', {})
        world = load_grid(
            args.map_file,
            costs=terrain_costs(grid_cfg) or None,
            from_symbol=grid_cfg.get('from_symbol', 'F'),
            to_symbol=grid_cfg.get('to_symbol', 'T')
        )
    except (FileNotFoundError, GraphFormatError, ConfigValidationError) as e:
        logger.error(f"Grid command failed: {e}")
        return EXIT_NOT_FOUND

    if world.start is None or world.goal is None:
        logger.error(f"Map {args.map_file} needs both a start and a goal marker")
        return EXIT_NOT_FOUND

    search = create_search(
        world.start, world.goal, context=world,
        collect_statistics=bool(OmegaConf.select(config, 'search.collect_statistics', default=True))
    )
    if not _drive(search, _max_steps(args, config)):
        return EXIT_BUDGET_EXHAUSTED

    result = search.result()
    summary = summarize_result(result, search, [f"{t.x},{t.y}" for t in result.path])
    summary['map_file'] = str(args.map_file)

    rendering = ""
    if result.found:
        rendering = world.render_path(
            result.path,
            path_marker=OmegaConf.select(config, 'render.path_marker', default='*')
        )
    _emit(summary, rendering, args)

    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    if args.config_action == 'show':
        config = _current_config()
        print("Current Configuration:")
        print("=" * 50)
        print(OmegaConf.to_yaml(config, resolve=True))
        return 0

    if args.config_action == 'validate':
        config = _current_config()
        try:
            validate_config(config)
        except ConfigValidationError as e:
            print(f"Configuration validation failed: {e}")
            return 1
        for issue in check_config_consistency(config):
            print(f"Warning: {issue}")
        print("Configuration is valid")
        return 0

    print("Unknown config action")
    return 1
