"""Search algorithms for the maze pathfinder.

This module implements the nearest-destination A* search and the two-stage
key-then-goal solver built on top of it.
"""

from .heuristics import (
    BaseHeuristic, ManhattanHeuristic, ZeroHeuristic, DestinationSet,
    min_manhattan_distance, create_heuristic
)
from .astar import (
    AStarSearcher, SearchResult, SearchConfig, search,
    create_astar_searcher, create_searcher_from_config
)
from .orchestrator import TwoStageSolver, TwoStageResult, solve

__all__ = [
    'BaseHeuristic',
    'ManhattanHeuristic',
    'ZeroHeuristic',
    'DestinationSet',
    'min_manhattan_distance',
    'create_heuristic',
    'AStarSearcher',
    'SearchResult',
    'SearchConfig',
    'search',
    'create_astar_searcher',
    'create_searcher_from_config',
    'TwoStageSolver',
    'TwoStageResult',
    'solve'
]
