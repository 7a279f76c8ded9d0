"""Command-line interface for lazy-astar.

This module provides CLI commands for searching example graphs from files.
"""

from .main import main_cli
from .commands import path_command, grid_command, config_command
from .utils import setup_logging, save_results, summarize_result

__all__ = [
    'main_cli',
    'path_command',
    'grid_command',
    'config_command',
    'setup_logging',
    'save_results',
    'summarize_result'
]
