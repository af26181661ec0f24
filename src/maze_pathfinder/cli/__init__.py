"""Command-line interface for the maze pathfinder.

This module provides CLI commands for solving single mazes and batches.
"""

from .main import main_cli
from .commands import solve_command, batch_command, config_command
from .utils import setup_logging

__all__ = [
    'main_cli',
    'solve_command',
    'batch_command',
    'config_command',
    'setup_logging'
]
