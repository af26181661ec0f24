"""Maze problem definitions consumed by the search core.

`MazeProblem` is the interface the search relies on. `GridMazeProblem` is the
concrete text-grid maze used by the CLI and the tests:

    I  initial cell (exactly one)
    K  key cell
    G  goal cell
    X  wall
    M  mud (costs 3 to enter by default)
    .  open floor
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

from maze_pathfinder.core.data_models import MazeState

logger = logging.getLogger(__name__)


INITIAL = 'I'
KEY = 'K'
GOAL = 'G'
WALL = 'X'
MUD = 'M'
OPEN = '.'

# Row/col offsets in the order transitions are reported
MOVES: Dict[str, tuple] = {
    'U': (-1, 0),
    'D': (1, 0),
    'L': (0, -1),
    'R': (0, 1),
}

DEFAULT_COSTS: Dict[str, int] = {
    'open': 1,
    'mud': 3,
    'key': 1,
    'goal': 1,
    'initial': 1,
}

_SYMBOL_COST_NAMES = {
    OPEN: 'open',
    MUD: 'mud',
    KEY: 'key',
    GOAL: 'goal',
    INITIAL: 'initial',
}


class MazeValidationError(ValueError):
    """Raised when a maze violates a precondition of the search."""
    pass


class MazeProblem(ABC):
    """Interface between a maze and the search algorithms."""

    @property
    @abstractmethod
    def initial_state(self) -> MazeState:
        pass

    @property
    @abstractmethod
    def key_states(self) -> FrozenSet[MazeState]:
        pass

    @property
    @abstractmethod
    def goal_states(self) -> FrozenSet[MazeState]:
        pass

    @abstractmethod
    def transitions(self, state: MazeState) -> Dict[str, MazeState]:
        """Map each available action label to the state it leads to."""
        pass

    @abstractmethod
    def cost(self, state: MazeState) -> int:
        """Cost charged for entering `state`."""
        pass

    def min_entry_cost(self) -> Optional[int]:
        """Lowest cost of entering any cell, or None if unknown."""
        return None

    def is_key(self, state: MazeState) -> bool:
        return state in self.key_states

    def is_goal(self, state: MazeState) -> bool:
        return state in self.goal_states


@dataclass
class SolutionCheck:
    """Outcome of replaying an action sequence through a maze."""
    is_solution: bool
    cost: int
    trace: List[MazeState] = field(default_factory=list)
    reason: Optional[str] = None


class GridMazeProblem(MazeProblem):
    """Rectangular maze described by rows of cell symbols."""

    def __init__(self, rows: Sequence[str], costs: Optional[Mapping[str, int]] = None):
        """Build and validate a maze.

        Args:
            rows: Maze rows, all of the same length
            costs: Optional overrides of the per-cell entry costs, keyed by
                'open', 'mud', 'key', 'goal' and 'initial'

        Raises:
            MazeValidationError: If the grid or cost table is malformed
        """
        self.grid = [str(row) for row in rows]
        self.costs = dict(DEFAULT_COSTS)
        if costs:
            for name, value in dict(costs).items():
                if name not in DEFAULT_COSTS:
                    raise MazeValidationError(f"Unknown cell cost '{name}'")
                self.costs[name] = value

        self._validate_costs()
        self._validate_grid()

        self.rows = len(self.grid)
        self.cols = len(self.grid[0])

        initial: List[MazeState] = []
        keys = set()
        goals = set()
        for r, line in enumerate(self.grid):
            for c, symbol in enumerate(line):
                if symbol == INITIAL:
                    initial.append(MazeState(r, c))
                elif symbol == KEY:
                    keys.add(MazeState(r, c))
                elif symbol == GOAL:
                    goals.add(MazeState(r, c))

        if len(initial) != 1:
            raise MazeValidationError(
                f"Maze must contain exactly one initial cell '{INITIAL}', found {len(initial)}"
            )

        self._initial_state = initial[0]
        self._key_states = frozenset(keys)
        self._goal_states = frozenset(goals)

        logger.debug(f"Maze loaded: {self.rows}x{self.cols}, "
                     f"{len(self._key_states)} keys, {len(self._goal_states)} goals")

    @classmethod
    def from_text(cls, text: str, costs: Optional[Mapping[str, int]] = None) -> 'GridMazeProblem':
        """Parse a maze from text, ignoring blank lines and '#' comments."""
        rows = [line.strip() for line in text.splitlines()]
        rows = [line for line in rows if line and not line.startswith('#')]
        return cls(rows, costs=costs)

    def to_text(self) -> str:
        return "\n".join(self.grid)

    def _validate_costs(self) -> None:
        for name, value in self.costs.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise MazeValidationError(f"Cost for '{name}' must be an integer, got {value!r}")
            if value < 0:
                raise MazeValidationError(f"Cost for '{name}' must be non-negative, got {value}")

    def _validate_grid(self) -> None:
        if not self.grid or not self.grid[0]:
            raise MazeValidationError("Maze must have at least one row and one column")

        width = len(self.grid[0])
        allowed = set(_SYMBOL_COST_NAMES) | {WALL}
        for r, line in enumerate(self.grid):
            if len(line) != width:
                raise MazeValidationError(
                    f"Row {r} has length {len(line)}, expected {width}"
                )
            for c, symbol in enumerate(line):
                if symbol not in allowed:
                    raise MazeValidationError(
                        f"Unknown maze symbol {symbol!r} at ({r}, {c})"
                    )

    @property
    def initial_state(self) -> MazeState:
        return self._initial_state

    @property
    def key_states(self) -> FrozenSet[MazeState]:
        return self._key_states

    @property
    def goal_states(self) -> FrozenSet[MazeState]:
        return self._goal_states

    def symbol_at(self, state: MazeState) -> str:
        return self.grid[state.row][state.col]

    def in_bounds(self, state: MazeState) -> bool:
        return 0 <= state.row < self.rows and 0 <= state.col < self.cols

    def is_wall(self, state: MazeState) -> bool:
        return self.symbol_at(state) == WALL

    def transitions(self, state: MazeState) -> Dict[str, MazeState]:
        result: Dict[str, MazeState] = {}
        for action, (dr, dc) in MOVES.items():
            nxt = MazeState(state.row + dr, state.col + dc)
            if self.in_bounds(nxt) and not self.is_wall(nxt):
                result[action] = nxt
        return result

    def cost(self, state: MazeState) -> int:
        return self.costs[_SYMBOL_COST_NAMES[self.symbol_at(state)]]

    def min_entry_cost(self) -> Optional[int]:
        # Only cell types present in the grid count
        present = {symbol for line in self.grid for symbol in line if symbol != WALL}
        return min(self.costs[_SYMBOL_COST_NAMES[symbol]] for symbol in present)

    def evaluate_solution(self, actions: Iterable[str]) -> SolutionCheck:
        """Replay `actions` from the initial state and score them.

        A sequence is a solution when every action is available where it is
        taken, a key cell is visited, and the walk ends on a goal cell after
        that key visit.
        """
        current = self.initial_state
        trace = [current]
        total_cost = 0
        key_seen = self.is_key(current)

        for step, action in enumerate(actions):
            moves = self.transitions(current)
            if action not in moves:
                return SolutionCheck(
                    is_solution=False,
                    cost=total_cost,
                    trace=trace,
                    reason=f"action {action!r} unavailable at {current} (step {step})",
                )
            current = moves[action]
            total_cost += self.cost(current)
            trace.append(current)
            if self.is_key(current):
                key_seen = True

        if not key_seen:
            return SolutionCheck(False, total_cost, trace, reason="no key visited")
        if not self.is_goal(current):
            return SolutionCheck(False, total_cost, trace, reason="path does not end on a goal")
        return SolutionCheck(True, total_cost, trace)

    def __repr__(self) -> str:
        return f"GridMazeProblem(rows={self.rows}, cols={self.cols})"
