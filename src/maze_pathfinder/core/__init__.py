"""Core data models and maze problem definitions."""

from .data_models import MazeState, SearchNode
from .maze_problem import MazeProblem, GridMazeProblem, MazeValidationError, SolutionCheck

__all__ = [
    'MazeState',
    'SearchNode',
    'MazeProblem',
    'GridMazeProblem',
    'MazeValidationError',
    'SolutionCheck'
]
