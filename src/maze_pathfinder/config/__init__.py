"""Configuration management for the maze pathfinder.

This module provides Hydra-based configuration loading with validation and
runtime override capabilities.
"""

from .config_manager import ConfigManager, load_config, get_config, get_parameter
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'get_config',
    'get_parameter',
    'validate_config',
    'ConfigValidationError'
]
