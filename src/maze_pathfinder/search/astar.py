"""A* search over maze problems.

This module implements the best-first search used by both stages of the
solver: from a start state to the nearest member of a destination set, with
a settled set and lazy deletion of stale frontier entries.
"""

import heapq
import time
import logging
from typing import Any, Collection, Dict, List, Optional, Set
from dataclasses import dataclass, field

from maze_pathfinder.core.data_models import MazeState, SearchNode
from maze_pathfinder.core.maze_problem import MazeProblem
from maze_pathfinder.search.heuristics import BaseHeuristic, DestinationSet, ZeroHeuristic, create_heuristic

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Result from a single A* search."""
    success: bool
    actions: List[str] = field(default_factory=list)
    terminal_state: Optional[MazeState] = None
    path_cost: int = 0
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicate_states: int = 0
    max_frontier_size: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'actions': list(self.actions),
            'terminal_state': self.terminal_state.as_tuple() if self.terminal_state else None,
            'path_cost': self.path_cost,
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'duplicate_states': self.duplicate_states,
            'max_frontier_size': self.max_frontier_size,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
        }


@dataclass
class SearchStatistics:
    """Counters collected while a search runs."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicate_states: int = 0
    max_frontier_size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'duplicate_states': self.duplicate_states,
            'max_frontier_size': self.max_frontier_size,
        }


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    heuristic: str = "manhattan"  # "manhattan" or "zero"
    statistics_tracking: bool = True
    log_interval: int = 1000  # expansions between debug progress messages


class AStarSearcher:
    """A* search with a settled set and lazy frontier deletion.

    Frontier entries are ordered by f = g + h, then by lower g, then by
    insertion order, so equal inputs always give the same path.
    """

    def __init__(self, config: Optional[SearchConfig] = None,
                 heuristic: Optional[BaseHeuristic] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
            heuristic: Heuristic instance; built from config.heuristic if None
        """
        self.config = config or SearchConfig()
        self.heuristic = heuristic or create_heuristic(self.config.heuristic)
        self.statistics = SearchStatistics()
        self._fallback_heuristic = ZeroHeuristic()

        logger.debug(f"A* searcher initialized with heuristic={self.heuristic.name}")

    def search(self, problem: MazeProblem, start_state: MazeState,
               destinations: Collection[MazeState]) -> SearchResult:
        """Find a minimum-cost path from start_state to any destination.

        Args:
            problem: Maze supplying transitions and entry costs
            start_state: State to search from
            destinations: Non-empty collection of acceptable end states

        Returns:
            SearchResult; success is False when no destination is reachable

        Raises:
            ValueError: If destinations is empty
        """
        if not destinations:
            raise ValueError("Destination set must not be empty")

        start_time = time.perf_counter()
        stats = SearchStatistics()
        self.statistics = stats
        dest_set = destinations if isinstance(destinations, DestinationSet) else DestinationSet(destinations)
        heuristic = self._heuristic_for(problem)

        logger.info(f"Starting A* search from {start_state} to {len(dest_set)} destination(s)")

        sequence = 0
        root = SearchNode(
            state=start_state,
            path_cost=0,
            heuristic=heuristic(start_state, dest_set),
            sequence=sequence,
        )
        frontier: List[SearchNode] = [root]
        settled: Set[MazeState] = set()
        stats.nodes_generated = 1
        stats.max_frontier_size = 1

        while frontier:
            node = heapq.heappop(frontier)

            # Stale entry: a cheaper copy of this state was already expanded
            if node.state in settled:
                stats.duplicate_states += 1
                logger.debug(f"Discarded stale entry for {node.state} (g={node.path_cost})")
                continue

            settled.add(node.state)

            if node.state in dest_set:
                return self._create_success_result(node, stats, time.perf_counter() - start_time)

            stats.nodes_expanded += 1
            if (self.config.statistics_tracking and self.config.log_interval > 0 and
                    stats.nodes_expanded % self.config.log_interval == 0):
                logger.debug(f"Expanded {stats.nodes_expanded} nodes, "
                             f"frontier size {len(frontier)}, best f={node.f_score}")

            for action, next_state in problem.transitions(node.state).items():
                if next_state in settled:
                    continue
                sequence += 1
                child = SearchNode(
                    state=next_state,
                    path_cost=node.path_cost + problem.cost(next_state),
                    heuristic=heuristic(next_state, dest_set),
                    parent=node,
                    action=action,
                    depth=node.depth + 1,
                    sequence=sequence,
                )
                heapq.heappush(frontier, child)
                stats.nodes_generated += 1

            if len(frontier) > stats.max_frontier_size:
                stats.max_frontier_size = len(frontier)

        computation_time = time.perf_counter() - start_time
        logger.info(f"A* search exhausted after {stats.nodes_expanded} expansions")
        return SearchResult(
            success=False,
            nodes_expanded=stats.nodes_expanded,
            nodes_generated=stats.nodes_generated,
            duplicate_states=stats.duplicate_states,
            max_frontier_size=stats.max_frontier_size,
            computation_time=computation_time,
            termination_reason="search_exhausted",
        )

    def _heuristic_for(self, problem: MazeProblem) -> BaseHeuristic:
        """Pick a heuristic that stays admissible for the problem's entry costs.

        Falls back to the zero heuristic when some cell is cheaper to enter
        than the configured heuristic assumes.
        """
        cheapest = problem.min_entry_cost()
        if cheapest is not None and cheapest < self.heuristic.min_step_cost:
            logger.warning(f"Entry cost {cheapest} is below {self.heuristic.min_step_cost} "
                           f"required by the {self.heuristic.name} heuristic; "
                           f"using {self._fallback_heuristic.name} instead")
            return self._fallback_heuristic
        return self.heuristic

    def _create_success_result(self, node: SearchNode, stats: SearchStatistics,
                                computation_time: float) -> SearchResult:
        """Create successful search result."""
        actions = node.get_action_sequence()
        logger.info(f"Reached {node.state} with cost {node.path_cost} "
                    f"({len(actions)} actions, {stats.nodes_expanded} expansions)")
        return SearchResult(
            success=True,
            actions=actions,
            terminal_state=node.state,
            path_cost=node.path_cost,
            nodes_expanded=stats.nodes_expanded,
            nodes_generated=stats.nodes_generated,
            duplicate_states=stats.duplicate_states,
            max_frontier_size=stats.max_frontier_size,
            computation_time=computation_time,
            termination_reason="destination_reached",
        )

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the most recent search."""
        stats = self.statistics.to_dict()
        stats.update(self.heuristic.get_stats())
        stats['config'] = {
            'heuristic': self.config.heuristic,
            'statistics_tracking': self.config.statistics_tracking,
            'log_interval': self.config.log_interval,
        }
        return stats


def search(problem: MazeProblem, start_state: MazeState,
           destinations: Collection[MazeState]) -> Optional[List[str]]:
    """Run one A* search and return its actions, or None if unreachable."""
    result = AStarSearcher().search(problem, start_state, destinations)
    return result.actions if result.success else None


def create_astar_searcher(heuristic: str = "manhattan",
                          statistics_tracking: bool = True,
                          log_interval: int = 1000) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        heuristic: Heuristic name ("manhattan" or "zero")
        statistics_tracking: Enable periodic progress logging
        log_interval: Expansions between progress log messages

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        heuristic=heuristic,
        statistics_tracking=statistics_tracking,
        log_interval=log_interval,
    )
    return AStarSearcher(config)


def create_searcher_from_config(cfg: Optional[Any] = None) -> AStarSearcher:
    """Build a searcher from the `search` section of a Hydra configuration.

    Falls back to the global configuration, and to defaults when neither
    is available.
    """
    if cfg is None:
        from maze_pathfinder.config import get_config
        cfg = get_config()

    if cfg is None or 'search' not in cfg:
        return AStarSearcher()

    search_cfg = cfg.search
    return create_astar_searcher(
        heuristic=str(search_cfg.get('heuristic', 'manhattan')),
        statistics_tracking=bool(search_cfg.get('statistics_tracking', True)),
        log_interval=int(search_cfg.get('log_interval', 1000)),
    )
