"""Wall-grid and image renderings of mazes and their solutions."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .models import Maze

WALL = 1
PATH = 0

DEFAULT_CELL_SIZE = 16

WALL_COLOR = (0, 0, 0)
PATH_COLOR = (255, 255, 255)
START_COLOR = (220, 30, 30)
GOAL_COLOR = (40, 180, 80)
LINE_COLOR = (220, 0, 0)


def maze_to_wall_grid(maze: Maze) -> np.ndarray:
    """Expand a maze into a ``(2h+1, 2w+1)`` array of ``WALL`` / ``PATH`` blocks.

    Cell (r, c) lands on block (2r+1, 2c+1); an open passage clears the block
    between two cells.
    """

    grid = np.full((2 * maze.height + 1, 2 * maze.width + 1), WALL, dtype=np.uint8)
    for index, cell in enumerate(maze.cells):
        r, c = divmod(index, maze.width)
        gr, gc = 2 * r + 1, 2 * c + 1
        grid[gr, gc] = PATH
        for direction in cell.passages:
            dr, dc = direction.offset
            if 0 <= r + dr < maze.height and 0 <= c + dc < maze.width:
                grid[gr + dr, gc + dc] = PATH
    return grid


def _cell_center(position: Tuple[int, int], cell_size: int) -> Tuple[float, float]:
    gr, gc = 2 * position[0] + 1, 2 * position[1] + 1
    return gc * cell_size + cell_size / 2, gr * cell_size + cell_size / 2


def render_maze(
    maze: Maze,
    *,
    path: Optional[Sequence[str]] = None,
    start_id: Optional[str] = None,
    goal_id: Optional[str] = None,
    cell_size: int = DEFAULT_CELL_SIZE,
) -> Image.Image:
    """Draw the maze, marking start and goal cells and an optional solution line.

    When a path is given its first and last cells default to the start and goal.
    """

    if cell_size <= 0:
        raise ValueError("cell_size must be positive")
    if path:
        start_id = start_id or path[0]
        goal_id = goal_id or path[-1]

    grid = maze_to_wall_grid(maze)
    pixels = np.where(grid[..., None] == PATH, PATH_COLOR, WALL_COLOR).astype(np.uint8)
    pixels = np.repeat(np.repeat(pixels, cell_size, axis=0), cell_size, axis=1)
    canvas = Image.fromarray(pixels)
    draw = ImageDraw.Draw(canvas)

    for cell_id, color in ((start_id, START_COLOR), (goal_id, GOAL_COLOR)):
        if cell_id is None:
            continue
        r, c = maze.position_of(cell_id)
        left, top = (2 * c + 1) * cell_size, (2 * r + 1) * cell_size
        draw.rectangle((left, top, left + cell_size - 1, top + cell_size - 1), fill=color)

    if path:
        thickness = max(2, cell_size // 3)
        points = [_cell_center(maze.position_of(cell_id), cell_size) for cell_id in path]
        if len(points) >= 2:
            draw.line(points, fill=LINE_COLOR, width=thickness, joint="curve")
        else:
            x, y = points[0]
            half = thickness / 2
            draw.ellipse((x - half, y - half, x + half, y + half), fill=LINE_COLOR)
    return canvas


__all__ = [
    "WALL",
    "PATH",
    "DEFAULT_CELL_SIZE",
    "maze_to_wall_grid",
    "render_maze",
]
