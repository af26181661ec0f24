"""Core data models for the maze pathfinder."""

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class MazeState:
    """A (row, col) position in the maze.

    States are pure keys: equality and hashing are structural and they
    never reference the maze they belong to.
    """

    row: int
    col: int

    def manhattan_distance(self, other: 'MazeState') -> int:
        """Number of 4-directional steps between two positions on an open grid."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True, eq=False)
class SearchNode:
    """Node in the search tree built by one search invocation."""

    state: MazeState
    path_cost: int  # g(n) - cost of entering every cell from the root
    heuristic: int  # h(n) - estimate to the nearest destination
    parent: Optional['SearchNode'] = None
    action: Optional[str] = None
    depth: int = 0
    sequence: int = 0  # insertion order within the owning search

    @property
    def f_score(self) -> int:
        """Total estimated cost f(n) = g(n) + h(n)."""
        return self.path_cost + self.heuristic

    def __lt__(self, other: 'SearchNode') -> bool:
        """Comparison for priority queue (lower f_score has higher priority)."""
        if self.f_score != other.f_score:
            return self.f_score < other.f_score
        # Tie-breaking: prefer lower accumulated cost
        if self.path_cost != other.path_cost:
            return self.path_cost < other.path_cost
        # Final tie-breaking: earlier insertion wins
        return self.sequence < other.sequence

    def is_root(self) -> bool:
        return self.parent is None

    def get_action_sequence(self) -> List[str]:
        """Get the actions that lead from the root to this node."""
        actions = []
        node = self
        while node.parent is not None:
            actions.append(node.action)
            node = node.parent
        return list(reversed(actions))
