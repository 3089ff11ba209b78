"""Configuration loading for resistor-search.

``conf/config.yaml`` is composed with Hydra so that command-line overrides use
Hydra's ``key=value`` grammar; the same tree is available without Hydra
through :func:`default_config`.
"""

import logging
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

# Mirrors conf/config.yaml; used when the conf directory is not available
_DEFAULTS: Dict[str, Any] = {
    'search': {
        'threshold': 0.1,
        'relative_threshold': 0.01,
        'equivalence': 'structural',
        'budget': {
            'max_nodes_expanded': 100000,
            'max_explored': 1000000,
            'max_computation_time': 30.0,
        },
    },
    'catalogue': {
        'series': 'E12',
        'decades': [0, 1, 2, 3, 4, 5],
    },
    'timer': {
        'capacitance': 47e-9,
        'relative_tolerance': 0.01,
    },
}


def default_config_dir() -> Path:
    """Default conf directory at the project root."""
    return Path(__file__).parent.parent.parent.parent / "conf"


def default_config() -> DictConfig:
    """Built-in configuration, identical to the shipped conf/config.yaml."""
    return OmegaConf.create(_DEFAULTS)


class ConfigManager:
    """Composes and validates the configuration of one conf directory."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory. If None, uses default.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        if config_dir is None:
            config_dir = default_config_dir()

        self.config_dir = Path(config_dir).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        logger.debug(f"Configuration manager initialized with config_dir: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Load configuration with optional overrides.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra ``key=value`` overrides
            validate: Whether to validate the configuration

        Returns:
            Composed configuration
        """
        GlobalHydra.instance().clear()

        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=overrides or [])
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        if validate:
            validate_config(cfg)

        self.config = cfg
        logger.info(f"Configuration loaded: {self.config_dir / config_name}.yaml")
        if overrides:
            logger.info(f"Applied overrides: {overrides}")

        return cfg


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh config manager.

    Args:
        config_name: Name of the main config file
        overrides: Hydra ``key=value`` overrides
        config_dir: Path to configuration directory
        validate: Whether to validate the configuration

    Returns:
        Loaded configuration
    """
    manager = ConfigManager(config_dir)
    return manager.load_config(config_name, overrides, validate)
