"""Loading maze files and writing solver results."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from maze_pathfinder.core.data_models import MazeState
from maze_pathfinder.core.maze_problem import GridMazeProblem, MazeValidationError

logger = logging.getLogger(__name__)

MAZE_SUFFIXES = ('.maze', '.txt')


def load_maze_from_file(file_path: Union[str, Path],
                        costs: Optional[Mapping[str, int]] = None) -> GridMazeProblem:
    """Load a maze from a text file.

    Args:
        file_path: Path to the maze file
        costs: Optional per-cell cost overrides

    Returns:
        Validated GridMazeProblem

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file cannot be read or describes an invalid maze
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    try:
        text = file_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Failed to read maze from {file_path}: {e}") from e

    try:
        maze = GridMazeProblem.from_text(text, costs=costs)
    except MazeValidationError as e:
        raise ValueError(f"Invalid maze in {file_path}: {e}") from e

    logger.info(f"Loaded maze {file_path.name}: {maze.rows}x{maze.cols}")
    return maze


def find_maze_files(input_path: Union[str, Path],
                    max_files: Optional[int] = None) -> List[Path]:
    """Find maze files in a directory, or return the single file given.

    Args:
        input_path: Directory or maze file path
        max_files: Maximum number of files to return

    Returns:
        Sorted list of maze file paths
    """
    input_path = Path(input_path)

    if input_path.is_file():
        return [input_path]

    if input_path.is_dir():
        files = sorted(p for p in input_path.rglob('*')
                       if p.is_file() and p.suffix.lower() in MAZE_SUFFIXES)
        return files[:max_files] if max_files is not None else files

    raise FileNotFoundError(f"Input path not found: {input_path}")


def _to_serializable(obj: Any) -> Any:
    if isinstance(obj, MazeState):
        return [obj.row, obj.col]
    if hasattr(obj, 'to_dict'):
        return _to_serializable(obj.to_dict())
    if isinstance(obj, dict):
        return {k: _to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_serializable(item) for item in obj]
    return obj


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to a JSON file, creating parent directories as needed."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(_to_serializable(results), f, indent=2, sort_keys=True)
        else:
            json.dump(_to_serializable(results), f)


def render_path(maze: GridMazeProblem, actions: List[str]) -> str:
    """Draw the maze with the cells visited by `actions` marked '*'.

    Special cells (initial, keys, goals) keep their symbol.
    """
    grid = [list(row) for row in maze.grid]
    check = maze.evaluate_solution(actions)
    for state in check.trace:
        if grid[state.row][state.col] in ('.', 'M'):
            grid[state.row][state.col] = '*'
    return "\n".join("".join(row) for row in grid)
