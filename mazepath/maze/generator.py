"""Random maze generator using depth-first recursive backtracking."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..base import OUT_OF_RANGE, OutOfRangeError, ValidationResult
from .models import Direction, Maze, MazeCell
from .render import DEFAULT_CELL_SIZE, render_maze

logger = logging.getLogger(__name__)

MIN_DIMENSION = 1
MAX_DIMENSION = 100
DEFAULT_DIMENSION = 11


class MazeGenerator:
    """Generate fully connected rectangular mazes.

    Passages are carved from the top-left cell with a randomized depth-first
    walk, so the result is a spanning tree: every cell reaches every other cell
    through exactly one route.
    """

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def generate(self, height: int, width: int) -> Maze:
        self._check_dimensions(height, width)

        grid = self._initialize_grid(height, width)
        self._carve_passages(grid, height, width)

        maze = Maze(height=height, width=width, cells=[cell for row in grid for cell in row])
        logger.debug("Generated %dx%d maze with %d passages", height, width, maze.passage_count())
        return maze

    # ------------------------------------------------------------------

    @staticmethod
    def _check_dimensions(height: int, width: int) -> None:
        result = ValidationResult()
        for name, value in (("height", height), ("width", width)):
            result.require(
                isinstance(value, int)
                and not isinstance(value, bool)
                and MIN_DIMENSION <= value <= MAX_DIMENSION,
                name,
                f"must be within range {MIN_DIMENSION}-{MAX_DIMENSION} (got {value!r})",
                kind=OUT_OF_RANGE,
            )
        result.raise_for_violations("Invalid maze dimensions")

    @staticmethod
    def _initialize_grid(height: int, width: int) -> List[List[MazeCell]]:
        return [[MazeCell(id=str(r * width + c)) for c in range(width)] for r in range(height)]

    def _shuffled_directions(self) -> Iterator[Direction]:
        directions = list(Direction)
        self._rng.shuffle(directions)
        return iter(directions)

    def _carve_passages(self, grid: List[List[MazeCell]], height: int, width: int) -> None:
        # Each frame keeps the directions its cell has yet to try, which mirrors
        # the recursive walk without growing the call stack.
        stack: List[Tuple[int, int, Iterator[Direction]]] = [(0, 0, self._shuffled_directions())]
        while stack:
            r, c, directions = stack[-1]
            direction = next(directions, None)
            if direction is None:
                stack.pop()
                continue
            dr, dc = direction.offset
            nr, nc = r + dr, c + dc
            if 0 <= nr < height and 0 <= nc < width and not grid[nr][nc].passages:
                grid[r][c].passages.add(direction)
                grid[nr][nc].passages.add(direction.opposite)
                stack.append((nr, nc, self._shuffled_directions()))


__all__ = ["MazeGenerator", "MIN_DIMENSION", "MAX_DIMENSION", "DEFAULT_DIMENSION"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a random maze")
    parser.add_argument("--height", type=int, default=DEFAULT_DIMENSION)
    parser.add_argument("--width", type=int, default=DEFAULT_DIMENSION)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=Path, default=None, help="Write the maze JSON here instead of stdout")
    parser.add_argument("--image", type=Path, default=None, help="Optional PNG rendering of the maze")
    parser.add_argument("--cell-size", type=int, default=None)
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    generator = MazeGenerator(seed=args.seed)
    try:
        maze = generator.generate(args.height, args.width)
    except OutOfRangeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    payload = json.dumps(maze.to_dict(), indent=2)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
    else:
        print(payload)

    if args.image is not None:
        image = render_maze(maze, cell_size=args.cell_size or DEFAULT_CELL_SIZE)
        args.image.parent.mkdir(parents=True, exist_ok=True)
        image.save(args.image)
    return 0


if __name__ == "__main__":
    sys.exit(main())
