"""Configuration management for lazy-astar.

This module provides Hydra-based configuration management with hierarchical
parameter groups and runtime override capabilities.
"""

from .config_manager import ConfigManager, ConfigContext, load_config, get_config, get_parameter
from .validators import (
    validate_config, check_config_consistency, terrain_costs, ConfigValidationError
)

__all__ = [
    'ConfigManager',
    'ConfigContext',
    'load_config',
    'get_config',
    'get_parameter',
    'validate_config',
    'check_config_consistency',
    'terrain_costs',
    'ConfigValidationError'
]
