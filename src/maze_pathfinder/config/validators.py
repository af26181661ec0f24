"""Configuration validation for the maze pathfinder."""

import logging
from typing import Any

from omegaconf import DictConfig

logger = logging.getLogger(__name__)


KNOWN_HEURISTICS = ('manhattan', 'zero')
COST_NAMES = ('open', 'mud', 'key', 'goal', 'initial')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_maze_config(config.get('maze', {}), config.get('search', {}))
        validate_batch_config(config.get('batch', {}))
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}") from e

    logger.debug("Configuration validation passed")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section."""
    if not search_config:
        return

    heuristic = search_config.get('heuristic', 'manhattan')
    if heuristic not in KNOWN_HEURISTICS:
        raise ConfigValidationError(
            f"search.heuristic must be one of {list(KNOWN_HEURISTICS)}, got {heuristic}"
        )

    tracking = search_config.get('statistics_tracking', True)
    if not isinstance(tracking, bool):
        raise ConfigValidationError(
            f"search.statistics_tracking must be boolean, got {tracking}"
        )

    interval = search_config.get('log_interval', 1000)
    if not _is_int(interval) or interval < 0:
        raise ConfigValidationError(
            f"search.log_interval must be non-negative integer, got {interval}"
        )


def validate_maze_config(maze_config: DictConfig, search_config: DictConfig) -> None:
    """Validate maze cost table.

    Costs must be non-negative integers. With the Manhattan heuristic every
    walkable cell must cost at least 1, otherwise the heuristic could
    overestimate and the returned paths would no longer be optimal.
    """
    if not maze_config:
        return

    costs = maze_config.get('costs', {})
    heuristic = search_config.get('heuristic', 'manhattan') if search_config else 'manhattan'
    min_cost = 1 if heuristic == 'manhattan' else 0

    for name, value in costs.items():
        if name not in COST_NAMES:
            raise ConfigValidationError(
                f"maze.costs.{name} is not a known cell type, expected one of {list(COST_NAMES)}"
            )
        if not _is_int(value) or value < min_cost:
            raise ConfigValidationError(
                f"maze.costs.{name} must be integer >= {min_cost}, got {value}"
            )


def validate_batch_config(batch_config: DictConfig) -> None:
    """Validate batch processing section."""
    if not batch_config:
        return

    threads = batch_config.get('threads', 1)
    if not _is_int(threads) or threads < 1:
        raise ConfigValidationError(
            f"batch.threads must be positive integer, got {threads}"
        )
