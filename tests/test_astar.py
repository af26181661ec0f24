"""Tests for A* search algorithm."""

import pytest

from maze_pathfinder.core.data_models import MazeState
from maze_pathfinder.core.maze_problem import GridMazeProblem, MazeProblem
from maze_pathfinder.search.astar import (
    AStarSearcher, SearchResult, SearchConfig, search,
    create_astar_searcher, create_searcher_from_config
)
from maze_pathfinder.search.heuristics import ManhattanHeuristic, ZeroHeuristic


class GraphProblem(MazeProblem):
    """Problem with hand-written transitions, for exact frontier scenarios."""

    def __init__(self, initial, edges, costs):
        self._initial = initial
        self.edges = edges
        self.costs = costs
        self.transition_calls = []

    @property
    def initial_state(self):
        return self._initial

    @property
    def key_states(self):
        return frozenset()

    @property
    def goal_states(self):
        return frozenset()

    def transitions(self, state):
        self.transition_calls.append(state)
        return dict(self.edges.get(state, {}))

    def cost(self, state):
        return self.costs[state]


def open_grid(rows, cols):
    grid = [["."] * cols for _ in range(rows)]
    grid[0][0] = "I"
    return GridMazeProblem(["".join(r) for r in grid])


def replay(problem, start, actions):
    state = start
    for action in actions:
        state = problem.transitions(state)[action]
    return state


class TestSearchConfig:
    """Test SearchConfig functionality."""

    def test_default_config(self):
        config = SearchConfig()

        assert config.heuristic == "manhattan"
        assert config.statistics_tracking is True
        assert config.log_interval == 1000

    def test_factory(self):
        searcher = create_astar_searcher(heuristic="zero", log_interval=5)

        assert isinstance(searcher.heuristic, ZeroHeuristic)
        assert searcher.config.log_interval == 5

    def test_default_searcher_uses_manhattan(self):
        assert isinstance(AStarSearcher().heuristic, ManhattanHeuristic)

    def test_searcher_from_config_mapping(self):
        from omegaconf import OmegaConf

        cfg = OmegaConf.create({'search': {'heuristic': 'zero', 'log_interval': 10}})
        searcher = create_searcher_from_config(cfg)

        assert isinstance(searcher.heuristic, ZeroHeuristic)
        assert searcher.config.log_interval == 10
        assert searcher.config.statistics_tracking is True


class TestAStarSearch:
    """Test A* search on grid mazes."""

    @pytest.fixture
    def searcher(self):
        return AStarSearcher()

    @pytest.mark.parametrize("target", [
        MazeState(0, 4), MazeState(4, 0), MazeState(4, 4), MazeState(2, 3), MazeState(1, 1),
    ])
    def test_open_grid_path_length_is_manhattan(self, searcher, target):
        maze = open_grid(5, 5)
        start = MazeState(0, 0)

        result = searcher.search(maze, start, {target})

        assert result.success
        assert len(result.actions) == start.manhattan_distance(target)
        assert result.path_cost == start.manhattan_distance(target)
        assert result.terminal_state == target
        assert replay(maze, start, result.actions) == target

    def test_result_fields(self, searcher):
        maze = open_grid(3, 3)
        result = searcher.search(maze, MazeState(0, 0), {MazeState(2, 2)})

        assert isinstance(result, SearchResult)
        assert result.termination_reason == "destination_reached"
        assert result.nodes_expanded > 0
        assert result.nodes_generated >= result.nodes_expanded
        assert result.max_frontier_size >= 1
        assert result.computation_time >= 0.0

    def test_deterministic_tie_breaking(self, searcher):
        maze = open_grid(2, 2)

        result = searcher.search(maze, MazeState(0, 0), {MazeState(1, 1)})

        # D is generated before R, and equal-f entries pop in insertion order
        assert result.actions == ['D', 'R']

    def test_repeated_searches_are_identical(self, searcher):
        maze = open_grid(6, 6)
        dests = {MazeState(5, 2), MazeState(3, 5)}

        first = searcher.search(maze, MazeState(0, 0), dests)
        second = searcher.search(maze, MazeState(0, 0), dests)

        assert first.actions == second.actions
        assert first.terminal_state == second.terminal_state

    def test_reaches_nearest_destination(self, searcher):
        maze = open_grid(5, 5)

        result = searcher.search(maze, MazeState(0, 0), {MazeState(0, 2), MazeState(4, 4)})

        assert result.terminal_state == MazeState(0, 2)
        assert result.actions == ['R', 'R']

    def test_prefers_cheaper_route_over_fewer_steps(self, searcher):
        maze = GridMazeProblem([
            "IMMK",
            "....",
        ])

        result = searcher.search(maze, maze.initial_state, maze.key_states)

        # Straight through the mud costs 7, the detour costs 5
        assert result.path_cost == 5
        assert result.actions == ['D', 'R', 'R', 'R', 'U']

    def test_start_is_destination(self, searcher):
        maze = open_grid(3, 3)

        result = searcher.search(maze, MazeState(1, 1), {MazeState(1, 1), MazeState(2, 2)})

        assert result.success
        assert result.actions == []
        assert result.path_cost == 0
        assert result.terminal_state == MazeState(1, 1)
        assert result.nodes_expanded == 0

    def test_walls_are_avoided(self, searcher):
        maze = GridMazeProblem([
            "I.X..",
            "..X..",
            "..X..",
            ".....",
        ])
        target = MazeState(0, 4)

        result = searcher.search(maze, maze.initial_state, {target})

        assert result.success
        assert result.path_cost == 10
        assert replay(maze, maze.initial_state, result.actions) == target

    def test_unreachable_destination(self, searcher):
        maze = GridMazeProblem([
            "I.X.",
            "..XK",
        ])

        result = searcher.search(maze, maze.initial_state, maze.key_states)

        assert not result.success
        assert result.actions == []
        assert result.terminal_state is None
        assert result.termination_reason == "search_exhausted"
        # Every reachable cell was expanded once
        assert result.nodes_expanded == 4

    def test_empty_destinations_raise(self, searcher):
        maze = open_grid(2, 2)

        with pytest.raises(ValueError):
            searcher.search(maze, MazeState(0, 0), set())

    def test_zero_heuristic_finds_same_cost(self):
        maze = GridMazeProblem([
            "I.M..",
            ".XMX.",
            "..M.K",
        ])
        astar = AStarSearcher().search(maze, maze.initial_state, maze.key_states)
        ucs = create_astar_searcher(heuristic="zero").search(maze, maze.initial_state, maze.key_states)

        assert astar.success and ucs.success
        assert astar.path_cost == ucs.path_cost
        assert astar.nodes_expanded <= ucs.nodes_expanded

    def test_zero_cost_cells_keep_path_optimal(self, searcher):
        maze = GridMazeProblem([
            "IMK",
            ".X.",
            "...",
        ], costs={'open': 0, 'mud': 1, 'key': 0})

        result = searcher.search(maze, maze.initial_state, maze.key_states)
        ucs = create_astar_searcher(heuristic="zero").search(
            maze, maze.initial_state, maze.key_states)

        # Going round the wall is free; straight through the mud costs 1
        assert result.path_cost == 0
        assert result.path_cost == ucs.path_cost
        assert result.actions == ['D', 'D', 'R', 'R', 'U', 'U']
        assert maze.evaluate_solution(result.actions).cost == 0

    def test_unit_cost_maze_keeps_configured_heuristic(self, searcher):
        maze = open_grid(3, 3)

        assert searcher._heuristic_for(maze) is searcher.heuristic

    def test_zero_cost_maze_uses_zero_heuristic(self, searcher):
        maze = GridMazeProblem(["I.K"], costs={'open': 0})

        assert isinstance(searcher._heuristic_for(maze), ZeroHeuristic)
        assert isinstance(searcher.heuristic, ManhattanHeuristic)

    def test_search_stats(self, searcher):
        maze = open_grid(3, 3)
        searcher.search(maze, MazeState(0, 0), {MazeState(2, 2)})

        stats = searcher.get_search_stats()

        assert stats['nodes_expanded'] == searcher.statistics.nodes_expanded
        assert stats['heuristic_computations'] > 0
        assert stats['config']['heuristic'] == "manhattan"


class TestLazyDeletion:
    """Test that states pushed more than once are expanded only once."""

    @pytest.fixture
    def problem(self):
        s, b, c, d = MazeState(0, 0), MazeState(0, 1), MazeState(1, 0), MazeState(2, 0)
        edges = {
            s: {'R': b, 'D': c},
            c: {'R': b, 'D': d},
        }
        costs = {s: 1, b: 5, c: 1, d: 10}
        return GraphProblem(s, edges, costs)

    def test_stale_entry_discarded(self, problem):
        searcher = create_astar_searcher(heuristic="zero")

        result = searcher.search(problem, problem.initial_state, {MazeState(2, 0)})

        assert result.success
        assert result.actions == ['D', 'D']
        assert result.path_cost == 11
        # B was pushed from S (g=5) and from C (g=6); the second copy is stale
        assert result.duplicate_states == 1
        assert problem.transition_calls.count(MazeState(0, 1)) == 1

    def test_settled_states_never_regenerated(self):
        a, b = MazeState(0, 0), MazeState(0, 1)
        problem = GraphProblem(a, {a: {'R': b}, b: {'L': a}}, {a: 1, b: 1})

        result = AStarSearcher().search(problem, a, {MazeState(5, 5)})

        assert not result.success
        assert result.nodes_generated == 2
        assert result.nodes_expanded == 2


class TestSearchFunction:
    """Test the module-level search helper."""

    def test_returns_actions(self):
        maze = open_grid(3, 3)
        assert search(maze, MazeState(0, 0), {MazeState(0, 2)}) == ['R', 'R']

    def test_returns_none_when_unreachable(self):
        maze = GridMazeProblem(["IXK"])
        assert search(maze, maze.initial_state, maze.key_states) is None

    def test_empty_list_when_already_there(self):
        maze = open_grid(2, 2)
        assert search(maze, MazeState(0, 0), {MazeState(0, 0)}) == []
