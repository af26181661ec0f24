"""Configuration manager using Hydra for hierarchical configuration."""

import logging
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

# Global configuration instance
_global_config: Optional[DictConfig] = None


def default_config_dir() -> Path:
    """The `conf` directory shipped inside the package."""
    return Path(__file__).parent.parent / "conf"


class ConfigManager:
    """Loads, validates and edits solver configuration."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding config.yaml. If None, uses the
                configuration shipped with the package.
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
        """Compose a configuration with optional overrides.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra override strings such as "search.heuristic=zero"
            validate: Whether to validate the configuration

        Returns:
            Loaded configuration, also installed as the global configuration
        """
        global _global_config

        # Hydra refuses to initialize twice in one process
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
        _global_config = cfg

        logger.info(f"Configuration loaded: {config_name}")
        if overrides:
            logger.info(f"Applied overrides: {overrides}")

        return cfg

    def get_config(self) -> Optional[DictConfig]:
        return self.config

    def _require_config(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def update_config(self, updates: Dict[str, Any]) -> None:
        """Update configuration with new values.

        Args:
            updates: Mapping of dotted keys to values
        """
        config = self._require_config()
        with open_dict(config):
            for key, value in updates.items():
                OmegaConf.update(config, key, value)

        logger.info(f"Configuration updated with: {updates}")

    def save_config(self, output_path: Union[str, Path]) -> None:
        """Save current configuration to a YAML file."""
        config = self._require_config()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            OmegaConf.save(config, f)

        logger.info(f"Configuration saved to: {output_path}")

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Get a parameter by dotted key, e.g. 'search.heuristic'."""
        config = self._require_config()
        return OmegaConf.select(config, key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        config = self._require_config()
        with open_dict(config):
            OmegaConf.update(config, key, value)

        logger.debug(f"Parameter set: {key} = {value}")


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh config manager.

    Args:
        config_name: Name of the main config file
        overrides: Hydra override strings
        config_dir: Path to configuration directory
        validate: Whether to validate the configuration

    Returns:
        Loaded configuration
    """
    manager = ConfigManager(config_dir)
    return manager.load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Get the global configuration, or None if nothing was loaded."""
    return _global_config


def get_parameter(key: str, default: Any = None) -> Any:
    """Get a parameter from the global configuration."""
    config = get_config()
    if config is None:
        logger.warning("No global configuration loaded")
        return default
    return OmegaConf.select(config, key, default=default)


def reset_config() -> None:
    """Forget the global configuration."""
    global _global_config
    _global_config = None


class ConfigContext:
    """Context manager for temporary configuration changes."""

    def __init__(self, **kwargs):
        """Initialize with temporary configuration changes.

        Args:
            **kwargs: Dotted keys and their temporary values
        """
        self.changes = kwargs
        self.original_values: Dict[str, Any] = {}
        self.config = get_config()

    def __enter__(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No global configuration loaded")

        for key in self.changes:
            self.original_values[key] = OmegaConf.select(self.config, key)

        with open_dict(self.config):
            for key, value in self.changes.items():
                OmegaConf.update(self.config, key, value)

        return self.config

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.config is None:
            return False

        with open_dict(self.config):
            for key, value in self.original_values.items():
                OmegaConf.update(self.config, key, value)
        return False
