"""Tests for the grid maze problem."""

import pytest

from maze_pathfinder.core.data_models import MazeState
from maze_pathfinder.core.maze_problem import (
    GridMazeProblem, MazeProblem, MazeValidationError, DEFAULT_COSTS
)


class TestGridMazeConstruction:
    """Test maze parsing and validation."""

    @pytest.fixture
    def maze(self):
        return GridMazeProblem([
            "I.X.",
            ".MXK",
            "G...",
        ])

    def test_dimensions(self, maze):
        assert maze.rows == 3
        assert maze.cols == 4

    def test_special_cells(self, maze):
        assert maze.initial_state == MazeState(0, 0)
        assert maze.key_states == frozenset({MazeState(1, 3)})
        assert maze.goal_states == frozenset({MazeState(2, 0)})

    def test_is_key_and_is_goal(self, maze):
        assert maze.is_key(MazeState(1, 3))
        assert not maze.is_key(MazeState(2, 0))
        assert maze.is_goal(MazeState(2, 0))
        assert not maze.is_goal(MazeState(0, 0))

    def test_is_a_maze_problem(self, maze):
        assert isinstance(maze, MazeProblem)

    def test_multiple_keys_and_goals(self):
        maze = GridMazeProblem(["IKK", "GG."])
        assert len(maze.key_states) == 2
        assert len(maze.goal_states) == 2

    def test_no_keys_or_goals_is_allowed(self):
        maze = GridMazeProblem(["I.."])
        assert maze.key_states == frozenset()
        assert maze.goal_states == frozenset()

    def test_empty_maze_rejected(self):
        with pytest.raises(MazeValidationError):
            GridMazeProblem([])
        with pytest.raises(MazeValidationError):
            GridMazeProblem([""])

    def test_ragged_rows_rejected(self):
        with pytest.raises(MazeValidationError, match="Row 1"):
            GridMazeProblem(["I..", ".."])

    def test_unknown_symbol_rejected(self):
        with pytest.raises(MazeValidationError, match="Unknown maze symbol"):
            GridMazeProblem(["I.?"])

    def test_missing_initial_rejected(self):
        with pytest.raises(MazeValidationError, match="exactly one initial"):
            GridMazeProblem(["..K", "G.."])

    def test_multiple_initial_rejected(self):
        with pytest.raises(MazeValidationError, match="found 2"):
            GridMazeProblem(["I.I"])

    def test_negative_cost_rejected(self):
        with pytest.raises(MazeValidationError, match="non-negative"):
            GridMazeProblem(["I.K"], costs={'mud': -1})

    def test_non_integer_cost_rejected(self):
        with pytest.raises(MazeValidationError):
            GridMazeProblem(["I.K"], costs={'mud': 2.5})

    def test_unknown_cost_name_rejected(self):
        with pytest.raises(MazeValidationError, match="Unknown cell cost"):
            GridMazeProblem(["I.K"], costs={'lava': 7})

    def test_validation_error_is_value_error(self):
        assert issubclass(MazeValidationError, ValueError)

    def test_from_text_skips_comments_and_blanks(self):
        text = """
        # a small maze
        I.K

        ..G
        """
        maze = GridMazeProblem.from_text(text)
        assert maze.rows == 2
        assert maze.to_text() == "I.K\n..G"


class TestTransitions:
    """Test transitions and costs."""

    @pytest.fixture
    def maze(self):
        return GridMazeProblem([
            ".X.",
            "MI.",
            "...",
        ])

    def test_transition_order_and_walls(self, maze):
        moves = maze.transitions(MazeState(1, 1))
        # Up is a wall
        assert list(moves) == ['D', 'L', 'R']
        assert moves['D'] == MazeState(2, 1)
        assert moves['L'] == MazeState(1, 0)
        assert moves['R'] == MazeState(1, 2)

    def test_transitions_stay_in_bounds(self, maze):
        moves = maze.transitions(MazeState(0, 0))
        assert moves == {'D': MazeState(1, 0)}

    def test_corner_transitions(self, maze):
        moves = maze.transitions(MazeState(2, 2))
        assert moves == {'U': MazeState(1, 2), 'L': MazeState(2, 1)}

    def test_default_costs(self, maze):
        assert maze.cost(MazeState(1, 0)) == DEFAULT_COSTS['mud'] == 3
        assert maze.cost(MazeState(2, 2)) == 1
        assert maze.cost(MazeState(1, 1)) == 1

    def test_cost_overrides(self):
        maze = GridMazeProblem(["IM."], costs={'mud': 5, 'open': 2})
        assert maze.cost(MazeState(0, 1)) == 5
        assert maze.cost(MazeState(0, 2)) == 2
        assert maze.cost(MazeState(0, 0)) == 1

    def test_min_entry_cost(self, maze):
        assert maze.min_entry_cost() == 1

    def test_min_entry_cost_ignores_absent_cells(self):
        maze = GridMazeProblem(["IM", "MK"], costs={'open': 0, 'mud': 2})
        assert maze.min_entry_cost() == 1

        maze = GridMazeProblem(["I.", "MK"], costs={'open': 0})
        assert maze.min_entry_cost() == 0

    def test_in_bounds_and_walls(self, maze):
        assert maze.in_bounds(MazeState(2, 2))
        assert not maze.in_bounds(MazeState(3, 0))
        assert not maze.in_bounds(MazeState(0, -1))
        assert maze.is_wall(MazeState(0, 1))
        assert not maze.is_wall(MazeState(0, 0))


class TestEvaluateSolution:
    """Test replaying action sequences."""

    @pytest.fixture
    def maze(self):
        return GridMazeProblem([
            "IMK",
            "..G",
        ])

    def test_valid_solution(self, maze):
        check = maze.evaluate_solution(['R', 'R', 'D'])

        assert check.is_solution
        assert check.cost == 3 + 1 + 1
        assert check.trace == [MazeState(0, 0), MazeState(0, 1), MazeState(0, 2), MazeState(1, 2)]
        assert check.reason is None

    def test_goal_without_key_is_not_a_solution(self, maze):
        check = maze.evaluate_solution(['D', 'R', 'R'])

        assert not check.is_solution
        assert check.reason == "no key visited"

    def test_must_end_on_goal(self, maze):
        check = maze.evaluate_solution(['R', 'R'])

        assert not check.is_solution
        assert "goal" in check.reason

    def test_unavailable_action(self, maze):
        check = maze.evaluate_solution(['U'])

        assert not check.is_solution
        assert "unavailable" in check.reason
        assert check.trace == [MazeState(0, 0)]
