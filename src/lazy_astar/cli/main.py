"""Main CLI entry point for lazy-astar."""

import sys
import argparse
import logging
from typing import List, Optional

from omegaconf import OmegaConf

from lazy_astar.config import load_config, ConfigValidationError
from . import commands
from .utils import parse_log_level, setup_logging


def positive_int(value: str) -> int:
    """argparse type for step budgets."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='lazy-astar',
        description='Incremental A* pathfinding over lazily expanded graphs',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lazy-astar path goreland.yaml Start End       # Route through a tube network
  lazy-astar grid map.txt --max-steps 500       # Search a character map
  lazy-astar -c render.path_marker=o grid map.txt
  lazy-astar config show                        # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        action='append',
        default=[],
        help='Configuration override (e.g., search.max_steps=100); repeatable'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Path command
    path_parser = subparsers.add_parser(
        'path',
        help='Find a path through a Goreland tube network',
        description='Find the cheapest route between two trucks in a JSON or YAML graph file'
    )
    path_parser.add_argument('graph_file', type=str, help='Path to graph file')
    path_parser.add_argument('start', type=str, help='Label of the start truck')
    path_parser.add_argument('goal', type=str, help='Label of the goal truck')
    path_parser.add_argument(
        '--max-steps',
        type=positive_int,
        help='Give up after this many search steps (default: from config)'
    )

    # Grid command
    grid_parser = subparsers.add_parser(
        'grid',
        help='Find a path across a character map',
        description='Find the cheapest route between the start and goal markers of a map file'
    )
    grid_parser.add_argument('map_file', type=str, help='Path to map file')
    grid_parser.add_argument(
        '--max-steps',
        type=positive_int,
        help='Give up after this many search steps (default: from config)'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect the active configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('validate', help='Validate configuration')

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    setup_logging(logging.WARNING)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(overrides=parsed_args.config)
    except ConfigValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    # Verbosity flags win over the configured level
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    elif parsed_args.verbose > 1:
        log_level = logging.DEBUG
    else:
        log_level = parse_log_level(OmegaConf.select(config, 'logging.level', default='WARNING'))
    setup_logging(log_level, OmegaConf.select(config, 'logging.format', default=None))

    try:
        if parsed_args.command == 'path':
            return commands.path_command(parsed_args)
        if parsed_args.command == 'grid':
            return commands.grid_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
