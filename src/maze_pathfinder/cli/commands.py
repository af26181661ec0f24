"""CLI command implementations."""

import json
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from omegaconf import OmegaConf

from maze_pathfinder import __version__
from maze_pathfinder.config import load_config, ConfigValidationError
from maze_pathfinder.core.maze_problem import GridMazeProblem
from maze_pathfinder.integration.io import (
    load_maze_from_file, find_maze_files, save_results, render_path
)
from maze_pathfinder.search.astar import create_searcher_from_config
from maze_pathfinder.search.orchestrator import TwoStageSolver

from .utils import ProgressReporter, create_result_summary, print_summary, format_duration

logger = logging.getLogger(__name__)


class MazeSolver:
    """Ties configuration, maze loading and the two-stage solver together."""

    def __init__(self, config_overrides: Optional[List[str]] = None,
                 config_dir: Optional[Union[str, Path]] = None):
        """Initialize maze solver.

        Args:
            config_overrides: List of configuration overrides
            config_dir: Configuration directory; project default if None
        """
        try:
            self.config = load_config(overrides=config_overrides or [], config_dir=config_dir)
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        maze_cfg = self.config.get('maze', {})
        costs = maze_cfg.get('costs', None) if maze_cfg else None
        self.costs = OmegaConf.to_container(costs) if costs is not None else None

        logger.info("Maze solver initialized")

    def load_maze(self, maze_file: Union[str, Path]) -> GridMazeProblem:
        return load_maze_from_file(maze_file, costs=self.costs)

    def solve_maze(self, maze: GridMazeProblem) -> Dict[str, Any]:
        """Solve one maze and return a JSON-ready result dictionary."""
        # A fresh searcher per maze keeps concurrent solves independent
        solver = TwoStageSolver(create_searcher_from_config(self.config))
        result = solver.solve_detailed(maze)
        output = result.to_dict()

        if result.success:
            check = maze.evaluate_solution(result.actions)
            output['verified'] = check.is_solution
            if not check.is_solution:
                logger.error(f"Solver produced an invalid solution: {check.reason}")
        return output

    def solve_file(self, maze_file: Union[str, Path]) -> Dict[str, Any]:
        maze = self.load_maze(maze_file)
        output = self.solve_maze(maze)
        output['maze_file'] = str(maze_file)
        return output


def _config_overrides(args) -> List[str]:
    overrides = []
    if getattr(args, 'heuristic', None):
        overrides.append(f"search.heuristic={args.heuristic}")
    if getattr(args, 'config', None):
        overrides.append(args.config)
    return overrides


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        solver = MazeSolver(_config_overrides(args))

        logger.info(f"Loading maze from {args.maze_file}")
        maze = solver.load_maze(args.maze_file)

        start_time = time.perf_counter()
        result = solver.solve_maze(maze)
        total_time = time.perf_counter() - start_time

        result.update({
            'maze_file': str(args.maze_file),
            'solver_version': __version__,
            'total_time': total_time,
        })

        if args.output:
            save_results(result, args.output)
            logger.info(f"Results saved to {args.output}")
            summary_stream = sys.stdout
        else:
            print(json.dumps(result, indent=2))
            # Keep stdout a single JSON document
            summary_stream = sys.stderr

        if not args.quiet:
            print(f"\nMaze: {Path(args.maze_file).name}", file=summary_stream)
            print(f"Solved: {result['success']}", file=summary_stream)
            if result['success']:
                print(f"Actions: {''.join(result['actions'])}", file=summary_stream)
                print(f"Cost: {result['total_cost']}", file=summary_stream)
                if args.show_path:
                    print(render_path(maze, result['actions']), file=summary_stream)
            else:
                print(f"Failed stage: {result['failed_stage']}", file=summary_stream)
            print(f"Total time: {format_duration(total_time)}", file=summary_stream)

        return 0 if result['success'] else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def batch_command(args) -> int:
    """Handle batch command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        logger.info(f"Finding maze files in {args.input_path}")
        maze_files = find_maze_files(args.input_path, args.max_mazes)

        if not maze_files:
            logger.error("No maze files found")
            return 1

        solver = MazeSolver(_config_overrides(args))
        threads = args.threads or int(solver.config.get('batch', {}).get('threads', 1))

        results: List[Dict[str, Any]] = []
        progress = ProgressReporter(len(maze_files), args.report_interval)

        def process_single_maze(maze_file: Path) -> Dict[str, Any]:
            try:
                return solver.solve_file(maze_file)
            except Exception as e:
                logger.error(f"Failed to process {maze_file}: {e}")
                return {
                    'success': False,
                    'error': str(e),
                    'maze_file': str(maze_file),
                    'computation_time': 0.0,
                }

        start_time = time.perf_counter()

        if threads == 1:
            for maze_file in maze_files:
                result = process_single_maze(maze_file)
                results.append(result)
                progress.update(result['success'])
        else:
            with ThreadPoolExecutor(max_workers=threads) as executor:
                future_to_file = {
                    executor.submit(process_single_maze, maze_file): maze_file
                    for maze_file in maze_files
                }
                for future in as_completed(future_to_file):
                    result = future.result()
                    results.append(result)
                    progress.update(result['success'])

        results.sort(key=lambda r: r['maze_file'])
        summary = create_result_summary(results)
        summary.update({
            'input_path': str(args.input_path),
            'threads': threads,
            'solver_version': __version__,
            'wall_clock_time': time.perf_counter() - start_time,
        })

        if args.output:
            save_results({'summary': summary, 'results': results}, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print_summary(summary)

        return 0 if summary['unsolved_mazes'] == 0 else 1

    except Exception as e:
        logger.error(f"Batch command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_config(overrides=_config_overrides(args), validate=False)
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                load_config(overrides=_config_overrides(args))
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1
            print("Configuration is valid")
            return 0

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
