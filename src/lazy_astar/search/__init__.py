"""A* search engine.

This module implements incremental A* over graphs whose vertices supply
their own neighbors, edge costs and heuristic estimates.
"""

from .pather import Pather, Context
from .node_table import Node, NodeTable, NO_PARENT, NOT_QUEUED
from .priority_queue import IndexedPriorityQueue
from .astar import (
    Search, SearchResult, SearchStatistics, create_search, find_path, path_with_context
)

__all__ = [
    'Pather',
    'Context',
    'Node',
    'NodeTable',
    'NO_PARENT',
    'NOT_QUEUED',
    'IndexedPriorityQueue',
    'Search',
    'SearchResult',
    'SearchStatistics',
    'create_search',
    'find_path',
    'path_with_context'
]
