"""Maze solver built on the maze-to-graph converter and the Dijkstra engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from ..base import require_not_none
from ..graph.dijkstra import DijkstraSolver
from .converter import MazeGraphConverter
from .models import Maze, SolveMazeRequest
from .render import DEFAULT_CELL_SIZE, render_maze

logger = logging.getLogger(__name__)


class MazeSolver:
    """Find the shortest route between two cells of a maze."""

    def __init__(
        self,
        *,
        converter: Optional[MazeGraphConverter] = None,
        dijkstra: Optional[DijkstraSolver] = None,
    ) -> None:
        self.converter = converter or MazeGraphConverter()
        self.dijkstra = dijkstra or DijkstraSolver()

    def solve(self, request: SolveMazeRequest) -> Optional[List[str]]:
        require_not_none(request, "request")

        nodes = self.converter.to_graph(request.maze)
        path = self.dijkstra.compute_path(nodes, request.start_point_id, request.end_point_id)
        logger.debug(
            "Solved maze from %s to %s: %s",
            request.start_point_id,
            request.end_point_id,
            "no path" if path is None else f"{len(path)} cells",
        )
        return path

    def solve_maze(self, maze: Maze, start_point_id: str, end_point_id: str) -> Optional[List[str]]:
        return self.solve(SolveMazeRequest(maze=maze, start_point_id=start_point_id, end_point_id=end_point_id))

    @staticmethod
    def is_traversable(maze: Maze, path: Sequence[str]) -> bool:
        """Check that every step of ``path`` moves through an open passage."""

        if not path:
            return False
        positions = [maze.position_of(cell_id) for cell_id in path]
        for (r, c), (nr, nc) in zip(positions, positions[1:]):
            cell = maze.cell_at(r, c)
            if not any(
                (r + direction.offset[0], c + direction.offset[1]) == (nr, nc)
                for direction in cell.passages
            ):
                return False
        return True


__all__ = ["MazeSolver"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solve a maze between two cells")
    parser.add_argument("maze", type=Path, help="Path to the maze JSON")
    parser.add_argument("start", type=str, help="Start cell id")
    parser.add_argument("end", type=str, help="End cell id")
    parser.add_argument("--image", type=Path, default=None, help="Optional PNG rendering of the solution")
    parser.add_argument("--cell-size", type=int, default=DEFAULT_CELL_SIZE)
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    try:
        maze = Maze.from_dict(json.loads(args.maze.read_text(encoding="utf-8")))
        path = MazeSolver().solve_maze(maze, args.start, args.end)
    except ValueError as exc:
        # MazePathError and json.JSONDecodeError are both ValueErrors.
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(path, indent=2))
    if args.image is not None:
        image = render_maze(
            maze,
            path=path,
            start_id=args.start,
            goal_id=args.end,
            cell_size=args.cell_size,
        )
        args.image.parent.mkdir(parents=True, exist_ok=True)
        image.save(args.image)
    return 0


if __name__ == "__main__":
    sys.exit(main())
