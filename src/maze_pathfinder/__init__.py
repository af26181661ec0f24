"""Maze pathfinder: two-stage A* search through key and goal cells."""

__version__ = "0.1.0"

from .core import MazeState, MazeProblem, GridMazeProblem, MazeValidationError
from .search import AStarSearcher, TwoStageSolver, search, solve

__all__ = [
    '__version__',
    'MazeState',
    'MazeProblem',
    'GridMazeProblem',
    'MazeValidationError',
    'AStarSearcher',
    'TwoStageSolver',
    'search',
    'solve'
]
