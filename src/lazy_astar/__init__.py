"""Incremental A* pathfinding over lazily expanded graphs."""

__version__ = "0.1.0"

from .search import (
    Pather, Search, SearchResult, SearchStatistics, create_search, find_path, path_with_context
)

__all__ = [
    'Pather',
    'Search',
    'SearchResult',
    'SearchStatistics',
    'create_search',
    'find_path',
    'path_with_context'
]
