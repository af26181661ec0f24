"""Two-stage maze solving: reach a key first, then a goal.

A single search over the union of keys and goals would stop at whichever
kind it met first, so the solver runs the search core twice and joins the
two action sequences.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from maze_pathfinder.core.data_models import MazeState
from maze_pathfinder.core.maze_problem import MazeProblem
from maze_pathfinder.search.astar import AStarSearcher, SearchResult

logger = logging.getLogger(__name__)


@dataclass
class TwoStageResult:
    """Outcome of a key-then-goal solve."""
    success: bool
    actions: List[str] = field(default_factory=list)
    key_state: Optional[MazeState] = None
    goal_state: Optional[MazeState] = None
    total_cost: int = 0
    failed_stage: Optional[str] = None  # "validation", "key" or "goal"
    key_search: Optional[SearchResult] = None
    goal_search: Optional[SearchResult] = None
    computation_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'actions': list(self.actions),
            'key_state': self.key_state.as_tuple() if self.key_state else None,
            'goal_state': self.goal_state.as_tuple() if self.goal_state else None,
            'total_cost': self.total_cost,
            'failed_stage': self.failed_stage,
            'key_search': self.key_search.to_dict() if self.key_search else None,
            'goal_search': self.goal_search.to_dict() if self.goal_search else None,
            'computation_time': self.computation_time,
        }


class TwoStageSolver:
    """Runs the search core from the start to a key, then from that key to a goal."""

    def __init__(self, searcher: Optional[AStarSearcher] = None):
        self.searcher = searcher or AStarSearcher()

    def solve(self, problem: MazeProblem) -> Optional[List[str]]:
        """Return the combined action sequence, or None if the maze is unsolvable."""
        result = self.solve_detailed(problem)
        return result.actions if result.success else None

    def solve_detailed(self, problem: MazeProblem) -> TwoStageResult:
        """Solve the maze and report both stages.

        Args:
            problem: Maze with an initial state, key states and goal states

        Returns:
            TwoStageResult; failed_stage names the stage that found no path
        """
        start_time = time.perf_counter()

        if not problem.key_states or not problem.goal_states:
            logger.info("Maze has no key or no goal cells; nothing to solve")
            return TwoStageResult(
                success=False,
                failed_stage="validation",
                computation_time=time.perf_counter() - start_time,
            )

        key_search = self.searcher.search(problem, problem.initial_state, problem.key_states)
        if not key_search.success:
            logger.info("No path from the initial state to any key")
            return TwoStageResult(
                success=False,
                failed_stage="key",
                key_search=key_search,
                computation_time=time.perf_counter() - start_time,
            )

        # Continue from the key this search actually reached
        key_state = key_search.terminal_state
        goal_search = self.searcher.search(problem, key_state, problem.goal_states)
        if not goal_search.success:
            logger.info(f"No path from key {key_state} to any goal")
            return TwoStageResult(
                success=False,
                key_state=key_state,
                failed_stage="goal",
                key_search=key_search,
                goal_search=goal_search,
                computation_time=time.perf_counter() - start_time,
            )

        actions = key_search.actions + goal_search.actions
        total_cost = key_search.path_cost + goal_search.path_cost
        logger.info(f"Solved maze via key {key_state} to goal {goal_search.terminal_state}: "
                    f"{len(actions)} actions, cost {total_cost}")
        return TwoStageResult(
            success=True,
            actions=actions,
            key_state=key_state,
            goal_state=goal_search.terminal_state,
            total_cost=total_cost,
            key_search=key_search,
            goal_search=goal_search,
            computation_time=time.perf_counter() - start_time,
        )


def solve(problem: MazeProblem) -> Optional[List[str]]:
    """Solve a maze with default settings; None means unsolvable."""
    return TwoStageSolver().solve(problem)
