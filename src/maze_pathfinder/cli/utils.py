"""CLI utility functions."""

import logging
import time
from typing import Any, Dict, List, Optional


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format."""
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


class ProgressReporter:
    """Progress reporting for batch processing."""

    def __init__(self, total_mazes: int, report_interval: int = 10):
        """Initialize progress reporter.

        Args:
            total_mazes: Total number of mazes
            report_interval: Report progress every N mazes
        """
        self.total_mazes = total_mazes
        self.report_interval = max(1, report_interval)
        self.completed = 0
        self.solved = 0
        self.start_time = time.perf_counter()

    def update(self, success: bool = False) -> None:
        self.completed += 1
        if success:
            self.solved += 1

        if (self.completed % self.report_interval == 0 or
                self.completed == self.total_mazes):
            self._report_progress()

    def _report_progress(self) -> None:
        elapsed = time.perf_counter() - self.start_time
        rate = self.completed / elapsed if elapsed > 0 else 0.0
        print(f"Progress: {self.completed}/{self.total_mazes} "
              f"({self.completed/self.total_mazes*100:.1f}%) | "
              f"Solved: {self.solved} | "
              f"Rate: {rate:.1f} mazes/s")


def create_result_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Create summary statistics from batch results.

    Args:
        results: List of individual maze results

    Returns:
        Summary statistics dictionary
    """
    if not results:
        return {
            'total_mazes': 0,
            'solved_mazes': 0,
            'unsolved_mazes': 0,
            'solve_rate': 0.0,
            'average_time': 0.0,
            'total_time': 0.0,
            'average_cost': 0.0,
        }

    solved = [r for r in results if r.get('success', False)]
    times = [r.get('computation_time', 0.0) for r in results]
    total_time = sum(times)

    return {
        'total_mazes': len(results),
        'solved_mazes': len(solved),
        'unsolved_mazes': len(results) - len(solved),
        'solve_rate': len(solved) / len(results),
        'average_time': total_time / len(results),
        'total_time': total_time,
        'average_cost': (sum(r.get('total_cost', 0) for r in solved) / len(solved)) if solved else 0.0,
    }


def print_summary(summary: Dict[str, Any]) -> None:
    """Print batch processing summary."""
    print("\n" + "=" * 60)
    print("BATCH SUMMARY")
    print("=" * 60)
    print(f"Total mazes:   {summary['total_mazes']}")
    print(f"Solved:        {summary['solved_mazes']} ({summary['solve_rate']*100:.1f}%)")
    print(f"Unsolved:      {summary['unsolved_mazes']}")
    print(f"Average cost:  {summary['average_cost']:.2f}")
    print(f"Total time:    {format_duration(summary['total_time'])}")
    print(f"Average time:  {format_duration(summary['average_time'])}")
