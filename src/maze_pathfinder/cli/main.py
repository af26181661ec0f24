"""Main CLI entry point for the maze pathfinder."""

import sys
import argparse
import logging
from typing import List, Optional

from maze_pathfinder.search.heuristics import AVAILABLE_HEURISTICS

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='maze-solver',
        description='Maze pathfinder - minimum-cost key-then-goal routes through grid mazes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  maze-solver solve maze.txt                  # Solve a single maze
  maze-solver solve maze.txt --show-path      # Also draw the route
  maze-solver batch mazes/ --threads 4        # Solve every maze in a folder
  maze-solver config show                     # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration override (e.g., maze.costs.mud=5)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a single maze',
        description='Solve a single maze from a text file'
    )

    solve_parser.add_argument(
        'maze_file',
        type=str,
        help='Path to maze text file'
    )

    solve_parser.add_argument(
        '--heuristic',
        choices=list(AVAILABLE_HEURISTICS),
        help='Search heuristic (default: from configuration)'
    )

    solve_parser.add_argument(
        '--show-path',
        action='store_true',
        help='Print the maze with the route marked'
    )

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Solve multiple mazes',
        description='Solve every .maze/.txt file in a directory'
    )

    batch_parser.add_argument(
        'input_path',
        type=str,
        help='Directory containing maze files, or a single maze file'
    )

    batch_parser.add_argument(
        '--heuristic',
        choices=list(AVAILABLE_HEURISTICS),
        help='Search heuristic (default: from configuration)'
    )

    batch_parser.add_argument(
        '--threads', '-j',
        type=int,
        help='Number of parallel threads (default: batch.threads from configuration)'
    )

    batch_parser.add_argument(
        '--max-mazes',
        type=int,
        help='Maximum number of mazes to process'
    )

    batch_parser.add_argument(
        '--report-interval',
        type=int,
        default=10,
        help='Progress report interval (default: 10)'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'batch':
            return commands.batch_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
