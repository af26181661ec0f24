"""Heuristics for informed maze search.

Both heuristics are admissible and consistent for non-negative entry costs
on a 4-connected grid where every walkable cell costs at least 1:
- Manhattan: distance to the nearest destination
- Zero: always 0, turning A* into uniform-cost search
"""

import logging
from abc import ABC, abstractmethod
from typing import Collection, Dict, Type

import numpy as np

from maze_pathfinder.core.data_models import MazeState

logger = logging.getLogger(__name__)


class DestinationSet:
    """Immutable set of destination states with a coordinate array for fast distance queries."""

    def __init__(self, states: Collection[MazeState]):
        # Sorted so the coordinate array does not depend on set iteration order
        self.states = frozenset(states)
        ordered = sorted(self.states, key=lambda s: (s.row, s.col))
        self.coords = np.array([[s.row, s.col] for s in ordered], dtype=np.int64).reshape(-1, 2)

    def __contains__(self, state: object) -> bool:
        return state in self.states

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self):
        return iter(self.states)


def min_manhattan_distance(state: MazeState, destinations: DestinationSet) -> int:
    """Minimum |drow| + |dcol| from `state` to any destination.

    Raises:
        ValueError: If there are no destinations
    """
    if len(destinations) == 0:
        raise ValueError("Cannot compute distance to an empty destination set")
    deltas = np.abs(destinations.coords - np.array([state.row, state.col], dtype=np.int64))
    return int(deltas.sum(axis=1).min())


class BaseHeuristic(ABC):
    """Abstract base class for heuristics."""

    name = "base"
    # Smallest per-step cost for which the estimate never overestimates
    min_step_cost = 0

    def __init__(self):
        self.computation_count = 0

    @abstractmethod
    def compute(self, state: MazeState, destinations: DestinationSet) -> int:
        """Estimate the remaining cost from `state` to the nearest destination."""
        pass

    def __call__(self, state: MazeState, destinations: DestinationSet) -> int:
        self.computation_count += 1
        return self.compute(state, destinations)

    def get_stats(self) -> Dict[str, int]:
        return {'heuristic_computations': self.computation_count}

    def reset_stats(self) -> None:
        self.computation_count = 0


class ManhattanHeuristic(BaseHeuristic):
    """Nearest-destination Manhattan distance."""

    name = "manhattan"
    min_step_cost = 1

    def compute(self, state: MazeState, destinations: DestinationSet) -> int:
        return min_manhattan_distance(state, destinations)


class ZeroHeuristic(BaseHeuristic):
    name = "zero"

    def compute(self, state: MazeState, destinations: DestinationSet) -> int:
        return 0


_HEURISTICS: Dict[str, Type[BaseHeuristic]] = {
    ManhattanHeuristic.name: ManhattanHeuristic,
    ZeroHeuristic.name: ZeroHeuristic,
}

AVAILABLE_HEURISTICS = tuple(_HEURISTICS)


def create_heuristic(name: str = "manhattan") -> BaseHeuristic:
    """Factory function for heuristics by name.

    Args:
        name: One of AVAILABLE_HEURISTICS

    Returns:
        New heuristic instance

    Raises:
        ValueError: If the name is not known
    """
    try:
        heuristic_cls = _HEURISTICS[name]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic '{name}', expected one of {list(AVAILABLE_HEURISTICS)}"
        ) from None
    return heuristic_cls()
