"""Configuration management for resistor-search.

This module provides Hydra-based configuration loading with runtime override
capabilities and validation of every section.
"""

from .config_manager import ConfigManager, load_config, default_config
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'default_config',
    'validate_config',
    'ConfigValidationError'
]
