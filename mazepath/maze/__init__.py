"""Maze generation, graph conversion and solving package."""

__all__ = [
    "Direction",
    "Maze",
    "MazeCell",
    "SolveMazeRequest",
    "MazeGenerator",
    "MazeGraphConverter",
    "MazeSolver",
    "maze_to_wall_grid",
    "render_maze",
]

from .models import Direction, Maze, MazeCell, SolveMazeRequest
from .generator import MazeGenerator
from .converter import MazeGraphConverter
from .solver import MazeSolver
from .render import maze_to_wall_grid, render_maze
