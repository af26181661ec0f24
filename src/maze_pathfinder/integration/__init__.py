"""File I/O for mazes and solver results."""

from .io import load_maze_from_file, find_maze_files, save_results, render_path

__all__ = [
    'load_maze_from_file',
    'find_maze_files',
    'save_results',
    'render_path'
]
